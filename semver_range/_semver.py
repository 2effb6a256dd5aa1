"""
The semantic version model.

A `Version` is an immutable value ordered per "Semantic Versioning 2.0"
(https://semver.org). Build metadata is carried for identity but never takes
part in ordering.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

MAX_COMPONENT = 2**63 - 1
"""
The largest accepted major, minor or patch number.
"""

Identifier = Union[int, str]
"""
A single dot-separated pre-release or build segment.
"""


class SemverError(ValueError):
    """
    Base class for every error raised on malformed version or range input.
    """


class ValidationError(SemverError):
    """
    Raised when a `Version` is built from a negative number or from an illegal
    pre-release or build segment.
    """


def _is_identifier(segment: str) -> bool:
    return bool(segment) and all(c.isascii() and (c.isalnum() or c == "-") for c in segment)


def _split(text: str, *, numeric: bool) -> tuple[Identifier, ...] | None:
    """
    Split dotted suffix text into segments. Digit-only segments become integers
    when `numeric` is set, unless they carry a leading zero (which validation
    then rejects).
    """
    if not text:
        return None

    segments: list[Identifier] = []
    for segment in text.split("."):
        is_number = segment.isascii() and segment.isdigit()
        if numeric and is_number and (segment == "0" or segment[0] != "0"):
            segments.append(int(segment))
        else:
            segments.append(segment)
    return tuple(segments)


def _check_segments(tag: str, segments: tuple[Identifier, ...] | None, *, numeric: bool) -> None:
    if segments is None:
        return

    for segment in segments:
        if isinstance(segment, int) and not isinstance(segment, bool):
            if numeric and segment >= 0:
                continue
        elif isinstance(segment, str) and _is_identifier(segment):
            # Numeric pre-release segments must be integers without leading zeros.
            if not (numeric and segment.isdigit()):
                continue
        raise ValidationError(f"illegal characters in {tag}: {segment!r}")


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


def _compare_pre_releases(
    p1: tuple[Identifier, ...] | None, p2: tuple[Identifier, ...] | None
) -> int:
    # A stable version sorts after all of its pre-releases.
    if p1 is None:
        return 0 if p2 is None else 1
    if p2 is None:
        return -1

    for s1, s2 in zip(p1, p2):
        if isinstance(s1, int):
            if not isinstance(s2, int):
                return -1
        elif isinstance(s2, int):
            return 1
        if s1 != s2:
            return -1 if s1 < s2 else 1  # type: ignore[operator]

    return _sign(len(p1) - len(p2))


@dataclass(frozen=True)
class Version:
    """
    An immutable semantic version.

    Equality (`==`, `hash`) is strict and includes build metadata; ordering
    (`compare_to` and the `<`, `<=`, `>`, `>=` operators) ignores it.
    """

    major: int
    minor: int
    patch: int

    pre_release: tuple[Identifier, ...] | None = None
    """
    The pre-release segments, or `None` for a stable version.

    The empty tuple is legal but only used by `MIN`: it sorts below every other
    pre-release of the same triplet.
    """

    build: tuple[str, ...] | None = None
    """
    The build metadata segments, or `None` when absent.
    """

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0 or self.patch < 0:
            raise ValidationError("negative numbers not accepted in version")
        _check_segments("pre-release", self.pre_release, numeric=True)
        _check_segments("build", self.build, numeric=False)

    @classmethod
    def create(
        cls, major: int, minor: int, patch: int, pre_release: str = "", build: str = ""
    ) -> Version:
        """
        Create a `Version` from its numbers and dotted suffix text.

        Empty `pre_release` or `build` text means the part is absent.
        Raises `ValidationError` on negative numbers or illegal segments.
        """
        return cls(
            major,
            minor,
            patch,
            _split(pre_release, numeric=True),
            _split(build, numeric=False),
        )

    @property
    def is_stable(self) -> bool:
        """
        Whether this version has no pre-release suffix.
        """
        return self.pre_release is None

    @property
    def pre_release_text(self) -> str:
        return "" if self.pre_release is None else ".".join(map(str, self.pre_release))

    @property
    def build_text(self) -> str:
        return "" if self.build is None else ".".join(map(str, self.build))

    def compare_to(self, other: Version) -> int:
        """
        Compare against `other`, returning -1, 0 or 1.

        Major, minor and patch are compared numerically, then pre-release
        segments. Build metadata is ignored.
        """
        mine = (self.major, self.minor, self.patch)
        theirs = (other.major, other.minor, other.patch)
        if mine != theirs:
            return -1 if mine < theirs else 1
        return _compare_pre_releases(self.pre_release, other.pre_release)

    def triplet_equals(self, other: Version) -> bool:
        return (self.major, self.minor, self.patch) == (other.major, other.minor, other.patch)

    def next_patch(self) -> Version:
        """
        The next patch release, with pre-release and build stripped.
        """
        return Version(self.major, self.minor, self.patch + 1)

    def to_stable(self) -> Version:
        """
        This version without its pre-release suffix. Build metadata is kept.
        """
        return replace(self, pre_release=None)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre_release is not None:
            text += f"-{self.pre_release_text}"
        if self.build is not None:
            text += f"+{self.build_text}"
        return text


MIN = Version(0, 0, 0, ())
"""
The lowest possible version, `0.0.0-`. It sorts below every pre-release of `0.0.0`.
"""

MAX = Version(MAX_COMPONENT, MAX_COMPONENT, MAX_COMPONENT)
"""
The highest representable version.
"""

ZERO = Version(0, 0, 0)
"""
The plain `0.0.0` version.
"""
