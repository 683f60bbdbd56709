import hashlib
import os

import pytest

from modbase.safewritefile import SafeWriteFile


def test_commit_writes_target(tmp_path):
    target = tmp_path / "out.ini"
    with SafeWriteFile(target) as f:
        f.write(b"data")
        f.commit()
    assert target.read_bytes() == b"data"
    assert os.listdir(tmp_path) == ["out.ini"]


def test_text_is_written_as_utf8(tmp_path):
    target = tmp_path / "out.txt"
    with SafeWriteFile(target) as f:
        f.write("héllo")
        f.commit()
    assert target.read_text(encoding="utf-8") == "héllo"


def test_without_commit_target_untouched(tmp_path):
    target = tmp_path / "out.ini"
    target.write_bytes(b"original")
    with SafeWriteFile(target) as f:
        f.write(b"replacement")
    assert target.read_bytes() == b"original"
    assert os.listdir(tmp_path) == ["out.ini"]


def test_commit_replaces_existing(tmp_path):
    target = tmp_path / "out.ini"
    target.write_bytes(b"original")
    with SafeWriteFile(target) as f:
        f.write(b"new")
        f.commit()
    assert target.read_bytes() == b"new"


def test_hash_is_md5_and_keeps_position(tmp_path):
    with SafeWriteFile(tmp_path / "out.bin") as f:
        f.write(b"abc")
        digest = f.hash()
        f.write(b"def")
        assert digest == hashlib.md5(b"abc").digest()
        assert f.hash() == hashlib.md5(b"abcdef").digest()


def test_commit_if_different_skips_same_content(tmp_path):
    target = tmp_path / "out.ini"
    with SafeWriteFile(target) as f:
        f.write(b"same")
        first = f.commit_if_different(None)
    assert first == hashlib.md5(b"same").digest()

    with SafeWriteFile(target) as f:
        f.write(b"same")
        assert f.commit_if_different(first) is None
    assert target.read_bytes() == b"same"
    assert os.listdir(tmp_path) == ["out.ini"]


def test_commit_if_different_writes_missing_target(tmp_path):
    target = tmp_path / "out.ini"
    known = hashlib.md5(b"x").digest()
    with SafeWriteFile(target) as f:
        f.write(b"x")
        assert f.commit_if_different(known) == known
    assert target.read_bytes() == b"x"


def test_commit_if_different_writes_changed_content(tmp_path):
    target = tmp_path / "out.ini"
    target.write_bytes(b"old")
    with SafeWriteFile(target) as f:
        f.write(b"new")
        result = f.commit_if_different(hashlib.md5(b"old").digest())
    assert result == hashlib.md5(b"new").digest()
    assert target.read_bytes() == b"new"


def test_commit_twice_raises(tmp_path):
    f = SafeWriteFile(tmp_path / "out.ini")
    f.commit()
    with pytest.raises(ValueError):
        f.commit()


def test_missing_directory_raises(tmp_path):
    with pytest.raises(OSError) as info:
        SafeWriteFile(tmp_path / "missing" / "out.ini")
    assert "could not create a temporary file" in str(info.value)