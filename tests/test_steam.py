import os

from modbase.steam import find_steam_game, parse_library_folders


def _make_game(library, app_name, file_name=None):
    game = library / "steamapps" / "common" / app_name
    game.mkdir(parents=True)
    if file_name:
        (game / file_name).write_text("x")
    return game


def test_parse_library_folders_double_backslashes():
    lines = [
        '"LibraryFolders"',
        "{",
        '\t"TimeNextStatsReport"\t\t"1234"',
        r'	"1"		"D:\\Games\\Steam"',
        "}",
    ]
    assert parse_library_folders(lines) == [r"D:\Games\Steam"]


def test_parse_library_folders_forward_slashes():
    assert parse_library_folders(['  "2" "E:/Lib/Steam"\n']) == [r"E:\Lib\Steam"]


def test_parse_library_folders_ignores_non_numeric_keys():
    assert parse_library_folders(['"ContentStatsID" "42"', '"path" "C:\\x"']) == []


def test_find_game_in_main_library(tmp_path):
    steam = tmp_path / "steam"
    game = _make_game(steam, "MyGame", "game.exe")
    assert find_steam_game("MyGame", "game.exe", steam) == os.path.abspath(game)


def test_find_game_without_valid_file(tmp_path):
    steam = tmp_path / "steam"
    game = _make_game(steam, "MyGame")
    assert find_steam_game("MyGame", "", steam) == os.path.abspath(game)


def test_find_game_in_additional_library(tmp_path):
    steam = tmp_path / "steam"
    (steam / "steamapps").mkdir(parents=True)
    lib2 = tmp_path / "lib2"
    game = _make_game(lib2, "OtherGame", "run.bin")
    folder = str(lib2).replace(os.sep, "/")
    (steam / "steamapps" / "libraryfolders.vdf").write_text(
        f'"LibraryFolders"\n{{\n\t"1"\t\t"{folder}"\n}}\n'
    )
    assert find_steam_game("OtherGame", "run.bin", steam) == os.path.abspath(game)


def test_missing_valid_file(tmp_path):
    steam = tmp_path / "steam"
    _make_game(steam, "MyGame", "game.exe")
    assert find_steam_game("MyGame", "other.exe", steam) == ""


def test_missing_game(tmp_path):
    steam = tmp_path / "steam"
    _make_game(steam, "MyGame")
    assert find_steam_game("Unknown", "", steam) == ""


def test_missing_steam_directory(tmp_path):
    assert find_steam_game("MyGame", "", tmp_path / "no-steam") == ""