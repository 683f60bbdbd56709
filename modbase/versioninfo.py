"""Parsing, formatting and ordering of mod and plugin version strings."""

from __future__ import annotations

import re
import struct
from datetime import date
from enum import Enum, IntEnum

__all__ = ["ReleaseType", "VersionScheme", "VersionInfo"]

_INT32_MAX = 2**31 - 1
_INT32_MIN = -(2**31)

_VERSION_RE = re.compile(r"^(\d+)(\.(\d+))?(\.(\d+))?(\.(\d+))?")
_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")
_LEADING_NUMBERS_RE = re.compile(r"^([0-9]+(?:\.[0-9]+)*)")


class ReleaseType(IntEnum):
    """Maturity of a release; later members compare as newer."""

    PREALPHA = 0
    ALPHA = 1
    BETA = 2
    CANDIDATE = 3
    FINAL = 4


class VersionScheme(Enum):
    """How a version string is to be interpreted."""

    DISCOVER = 0
    REGULAR = 1
    DECIMALMARK = 2
    NUMBERSANDLETTERS = 3
    DATE = 4
    LITERAL = 5


# searched in this order; "alpha" precedes "prealpha" on purpose
_RELEASE_TYPE_STRINGS = (
    ("alpha", ReleaseType.ALPHA),
    ("beta", ReleaseType.BETA),
    ("prealpha", ReleaseType.PREALPHA),
    ("rc", ReleaseType.CANDIDATE),
)

_CANONICAL_PREFIX = {
    VersionScheme.REGULAR: "",
    VersionScheme.NUMBERSANDLETTERS: "n",
    VersionScheme.DATE: "d",
}

_CANONICAL_SUFFIX = {
    ReleaseType.PREALPHA: " pre-alpha",
    ReleaseType.ALPHA: "a",
    ReleaseType.BETA: "b",
    ReleaseType.CANDIDATE: "rc",
}

_DISPLAY_SUFFIX = {
    ReleaseType.PREALPHA: " pre-alpha",
    ReleaseType.ALPHA: "alpha",
    ReleaseType.BETA: "beta",
    ReleaseType.CANDIDATE: "rc",
}


def _to_int(text: str) -> int:
    """Convert to a 32-bit integer; empty or out-of-range text yields 0."""
    if not text:
        return 0
    value = int(text)
    if value > _INT32_MAX or value < _INT32_MIN:
        return 0
    return value


def _parse_int(text: str) -> int | None:
    """Return the integer held by ``text`` or None if it is not one."""
    stripped = text.strip()
    if not _INTEGER_RE.match(stripped):
        return None
    value = int(stripped)
    if value > _INT32_MAX or value < _INT32_MIN:
        return None
    return value


def _to_float32(text: str) -> float:
    """Convert to a single-precision value; unparsable text yields 0."""
    try:
        value = float(text)
        return struct.unpack("f", struct.pack("f", value))[0]
    except (ValueError, OverflowError):
        return 0.0


class VersionInfo:
    """The version of a mod or plugin, parsed from free-form text."""

    def __init__(
        self,
        major: int | None = None,
        minor: int = 0,
        subminor: int = 0,
        subsubminor: int = 0,
        release_type: ReleaseType = ReleaseType.FINAL,
    ) -> None:
        self._scheme = VersionScheme.REGULAR
        self._decimal_positions = 0
        self._rest = ""
        if major is None:
            self._valid = False
            self._release_type = ReleaseType.FINAL
            self._major = self._minor = self._subminor = self._subsubminor = 0
        else:
            self._valid = True
            self._release_type = ReleaseType(release_type)
            self._major = major
            self._minor = minor
            self._subminor = subminor
            self._subsubminor = subsubminor

    @classmethod
    def from_string(
        cls,
        version_string: str,
        scheme: VersionScheme = VersionScheme.DISCOVER,
        manual_input: bool = False,
    ) -> VersionInfo:
        """Build a version by parsing ``version_string``."""
        version = cls()
        version.parse(version_string, scheme, manual_input)
        return version

    def clear(self) -> None:
        """Reset to an invalid version."""
        self._scheme = VersionScheme.REGULAR
        self._valid = False
        self._release_type = ReleaseType.FINAL
        self._major = self._minor = self._subminor = self._subsubminor = 0
        self._decimal_positions = 0
        self._rest = ""

    @property
    def is_valid(self) -> bool:
        """True if this version was set up or parsed successfully."""
        return self._valid

    @property
    def scheme(self) -> VersionScheme:
        """The versioning scheme in effect."""
        return self._scheme

    def _parse_release_type(self, text: str) -> str:
        self._release_type = ReleaseType.FINAL
        lowered = text.lower()
        offset = -1
        length = 0
        for name, release in _RELEASE_TYPE_STRINGS:
            offset = lowered.find(name)
            if offset != -1:
                self._release_type = release
                length = len(name)
                break

        if self._scheme is VersionScheme.REGULAR and offset == -1 and text:
            # single letters only count when they follow the number directly
            if text[0] == "a":
                self._release_type = ReleaseType.ALPHA
                offset, length = 0, 1
            elif text[0] == "b":
                self._release_type = ReleaseType.BETA
                offset, length = 0, 1

        if offset != -1:
            text = text[:offset] + text[offset + length :]
        return text.strip()

    def parse(
        self,
        version_string: str,
        scheme: VersionScheme = VersionScheme.DISCOVER,
        manual_input: bool = False,
    ) -> None:
        """Replace this version with the one parsed from ``version_string``."""
        self._valid = False
        if scheme in (VersionScheme.LITERAL, VersionScheme.DISCOVER):
            self._scheme = VersionScheme.REGULAR
        else:
            self._scheme = scheme
        self._release_type = ReleaseType.FINAL
        self._major = self._minor = self._subminor = self._subsubminor = 0
        self._rest = ""

        if not version_string:
            return

        if version_string.lower() == "final":
            self._major = 1
            self._valid = True
            return

        temp = version_string
        new_scheme = self._scheme
        if not manual_input:
            hints = {
                "f": VersionScheme.DECIMALMARK,
                "n": VersionScheme.NUMBERSANDLETTERS,
                "d": VersionScheme.DATE,
            }
            hinted = hints.get(temp[0])
            if hinted is not None:
                new_scheme = hinted
                temp = temp[1:]

        if scheme is VersionScheme.DISCOVER:
            self._scheme = new_scheme

        if temp[:1] in ("v", "V"):
            temp = temp[1:]

        match = _VERSION_RE.match(temp)
        if match:
            minor_text = match.group(3) or ""
            subminor_text = match.group(5) or ""
            subsubminor_text = match.group(7) or ""
            self._major = _to_int(match.group(1))
            self._minor = _to_int(minor_text)
            if subminor_text and self._scheme is VersionScheme.DECIMALMARK:
                # two dots rule out a decimal mark
                self._scheme = VersionScheme.REGULAR
            if self._scheme is not VersionScheme.DECIMALMARK:
                self._subminor = _to_int(subminor_text)
                self._subsubminor = _to_int(subsubminor_text)
            if not subminor_text and len(minor_text) > 1 and minor_text.startswith("0"):
                self._scheme = VersionScheme.DECIMALMARK
                self._decimal_positions = len(minor_text)
            temp = temp[match.end() :]
        else:
            self._scheme = VersionScheme.LITERAL

        if self._scheme is VersionScheme.REGULAR:
            temp = self._parse_release_type(temp)

        if self._scheme is VersionScheme.DATE and self._major < 1900:
            self._scheme = VersionScheme.REGULAR

        self._rest = temp.strip()
        self._valid = True

    def _decimal_text(self) -> str:
        return f"{self._major}.{str(self._minor).rjust(self._decimal_positions, '0')}"

    def _four_segments(self) -> str:
        return f"{self._major}.{self._minor}.{self._subminor}.{self._subsubminor}"

    def canonical_string(self) -> str:
        """A string that parses back into this version without loss."""
        if not self._valid:
            return ""
        if self._scheme is VersionScheme.DECIMALMARK:
            result = "f" + self._decimal_text()
        elif self._scheme in _CANONICAL_PREFIX:
            result = _CANONICAL_PREFIX[self._scheme] + self._four_segments()
        else:
            result = ""
        result += _CANONICAL_SUFFIX.get(self._release_type, "")
        return result + self._rest

    def display_string(self, forced_version_segments: int = 2) -> str:
        """A string for showing to the user; the scheme is not included."""
        if not self._valid:
            return ""
        if self._scheme is VersionScheme.REGULAR:
            if forced_version_segments >= 4 or self._subsubminor != 0:
                result = self._four_segments()
            elif forced_version_segments == 3 or self._subminor != 0:
                result = f"{self._major}.{self._minor}.{self._subminor}"
            else:
                result = f"{self._major}.{self._minor}"
        elif self._scheme is VersionScheme.DECIMALMARK:
            result = self._decimal_text()
        elif self._scheme is VersionScheme.NUMBERSANDLETTERS:
            result = self._four_segments()
        elif self._scheme is VersionScheme.DATE:
            # year, month and day are held in the version fields
            try:
                return date(self._major, self._minor, self._subminor).strftime("%x")
            except ValueError:
                return ""
        else:
            result = ""
        result += _DISPLAY_SUFFIX.get(self._release_type, "")
        return result + self._rest

    def as_version_tuple(self) -> tuple[int, ...]:
        """The leading numeric segments of the display string, without trailing zeros."""
        match = _LEADING_NUMBERS_RE.match(self.display_string())
        if not match:
            return ()
        segments = [int(part) for part in match.group(1).split(".")]
        while segments and segments[-1] == 0:
            segments.pop()
        return tuple(segments)

    def _less_than(self, other: VersionInfo) -> bool:
        if not self._valid and other._valid:
            return True
        if not other._valid and self._valid:
            return False

        date_scheme = VersionScheme.DATE
        decimal_scheme = VersionScheme.DECIMALMARK
        if self._scheme is date_scheme and other._scheme is not date_scheme:
            return True
        if self._scheme is not date_scheme and other._scheme is date_scheme:
            return False
        if self._scheme is decimal_scheme or other._scheme is decimal_scheme:
            left = _to_float32(self._decimal_text())
            right = _to_float32(other._decimal_text())
            if abs(left - right) > 0.001:
                return left < right
        else:
            mine = (self._major, self._minor, self._subminor, self._subsubminor)
            theirs = (other._major, other._minor, other._subminor, other._subsubminor)
            if mine != theirs:
                return mine < theirs

        if self._release_type != other._release_type:
            return self._release_type < other._release_type

        left_int = _parse_int(self._rest)
        right_int = _parse_int(other._rest)
        if left_int is not None and right_int is not None:
            return left_int < right_int

        return self._rest < other._rest

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._less_than(other)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._less_than(other) or not other._less_than(self)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return not self.__le__(other)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return other.__le__(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return not self._less_than(other) and not other._less_than(self)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, VersionInfo):
            return NotImplemented
        return self._less_than(other) or other._less_than(self)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if not self._valid:
            return "VersionInfo()"
        return f"VersionInfo.from_string({self.canonical_string()!r})"