"""
The bound algebra.

A bound is a one- or two-sided constraint on acceptable versions. The set of
shapes is closed: `Exact`, `GreaterThan`, `GreaterOrEqual`, `LessThan`,
`LessOrEqual` and the composite `Interval`. The pairwise operations in this
module (`intersection`, `union`, `is_as_restrictive_as`) only look at a bound's
edges: `start`, `end`, whether each edge is excluded, and whether the bound is
usable as a lower or upper bound at all.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, final

import icontract

from semver_range._semver import MAX, MIN, Version


class Bound(ABC):
    """
    A constraint on acceptable versions.

    One-sided shapes report `MIN` as their start or `MAX` as their end. A
    shape that has no lower (upper) edge of its own answers `as_lower_bound`
    (`as_upper_bound`) with a sentinel that admits nothing.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__:
            raise TypeError(f"{cls.__qualname__}: the set of bound shapes is closed")

    @property
    def start(self) -> Version:
        """
        The lowest admitted version, unless `exclude_start` is set.
        """
        return MIN

    @property
    def end(self) -> Version:
        """
        The highest admitted version, unless `exclude_end` is set.
        """
        return MAX

    @property
    def exclude_start(self) -> bool:
        return False

    @property
    def exclude_end(self) -> bool:
        return False

    @property
    def is_lower_bound(self) -> bool:
        """
        Whether this bound meaningfully restricts versions from below.
        """
        return False

    @property
    def is_upper_bound(self) -> bool:
        """
        Whether this bound meaningfully restricts versions from above.
        """
        return False

    def as_lower_bound(self) -> Bound:
        return HIGHEST_LOWER_BOUND

    def as_upper_bound(self) -> Bound:
        return LOWEST_UPPER_BOUND

    @abstractmethod
    def includes(self, version: Version) -> bool:
        """
        Whether `version` lies between this bound's edges. Pre-release
        visibility is not considered; see `test_prerelease`.
        """
        raise NotImplementedError  # pragma: no cover

    @abstractmethod
    def test_prerelease(self, version: Version) -> bool:
        """
        Whether the pre-release `version` is visible through this bound.

        A pre-release is only visible when one of the bound's own endpoints is
        a pre-release of the same major.minor.patch triplet, so that `^1.2.3`
        does not silently admit `1.3.0-alpha`.
        """
        raise NotImplementedError  # pragma: no cover

    @abstractmethod
    def __str__(self) -> str:
        raise NotImplementedError  # pragma: no cover


@dataclass(frozen=True)
class _Comparator(Bound):
    """
    A bound defined by a single comparison against `version`.
    """

    version: Version

    def test_prerelease(self, version: Version) -> bool:
        return not self.version.is_stable and self.version.triplet_equals(version)


@final
class Exact(_Comparator):
    """
    Admits `version` only (build metadata is ignored).
    """

    @property
    def start(self) -> Version:
        return self.version

    @property
    def end(self) -> Version:
        return self.version

    @property
    def is_lower_bound(self) -> bool:
        return self.version != MIN

    @property
    def is_upper_bound(self) -> bool:
        return self.version != MAX

    def as_lower_bound(self) -> Bound:
        return self

    def as_upper_bound(self) -> Bound:
        return self

    def includes(self, version: Version) -> bool:
        return self.version.compare_to(version) == 0

    def __str__(self) -> str:
        return str(self.version)


@final
class GreaterThan(_Comparator):
    @property
    def start(self) -> Version:
        return self.version

    @property
    def exclude_start(self) -> bool:
        return True

    @property
    def is_lower_bound(self) -> bool:
        return True

    def as_lower_bound(self) -> Bound:
        return self

    def includes(self, version: Version) -> bool:
        return self.version.compare_to(version) < 0

    def __str__(self) -> str:
        return f">{self.version}"


@final
class GreaterOrEqual(_Comparator):
    @property
    def start(self) -> Version:
        return self.version

    @property
    def is_lower_bound(self) -> bool:
        return self.version != MIN

    def as_lower_bound(self) -> Bound:
        return self

    def includes(self, version: Version) -> bool:
        return self.version.compare_to(version) <= 0

    def test_prerelease(self, version: Version) -> bool:
        # `>=0.0.0-` is the match-all bound and shows every pre-release.
        return self.version == MIN or super().test_prerelease(version)

    def __str__(self) -> str:
        return f">={self.version}"


@final
class LessThan(_Comparator):
    @property
    def end(self) -> Version:
        return self.version

    @property
    def exclude_end(self) -> bool:
        return True

    @property
    def is_upper_bound(self) -> bool:
        return True

    def as_upper_bound(self) -> Bound:
        return self

    def includes(self, version: Version) -> bool:
        return self.version.compare_to(version) > 0

    def __str__(self) -> str:
        return f"<{self.version}"


@final
class LessOrEqual(_Comparator):
    @property
    def end(self) -> Version:
        return self.version

    @property
    def is_upper_bound(self) -> bool:
        return self.version != MAX

    def as_upper_bound(self) -> Bound:
        return self

    def includes(self, version: Version) -> bool:
        return self.version.compare_to(version) >= 0

    def __str__(self) -> str:
        return f"<={self.version}"


@final
@dataclass(frozen=True)
class Interval(Bound):
    """
    A two-sided bound composed of a lower-shaped and an upper-shaped bound.
    """

    lower: Bound
    upper: Bound

    @property
    def start(self) -> Version:
        return self.lower.start

    @property
    def end(self) -> Version:
        return self.upper.end

    @property
    def exclude_start(self) -> bool:
        return self.lower.exclude_start

    @property
    def exclude_end(self) -> bool:
        return self.upper.exclude_end

    @property
    def is_lower_bound(self) -> bool:
        return self.lower.is_lower_bound

    @property
    def is_upper_bound(self) -> bool:
        return self.upper.is_upper_bound

    def as_lower_bound(self) -> Bound:
        return self.lower

    def as_upper_bound(self) -> Bound:
        return self.upper

    def includes(self, version: Version) -> bool:
        return self.lower.includes(version) and self.upper.includes(version)

    def test_prerelease(self, version: Version) -> bool:
        return self.lower.test_prerelease(version) or self.upper.test_prerelease(version)

    def __str__(self) -> str:
        return f"{self.lower} {self.upper}"


LOWEST_LOWER_BOUND: Bound = GreaterOrEqual(MIN)
"""
`>=0.0.0-`: admits every version, pre-releases included.
"""

HIGHEST_LOWER_BOUND: Bound = GreaterThan(MAX)
"""
A lower bound that admits nothing.
"""

LOWEST_UPPER_BOUND: Bound = LessThan(MIN)
"""
An upper bound that admits nothing.
"""


def is_empty(bound: Bound) -> bool:
    """
    Whether `bound` admits no version at all, e.g. `LOWEST_UPPER_BOUND`.
    """
    cmp = bound.start.compare_to(bound.end)
    return cmp > 0 or (cmp == 0 and (bound.exclude_start or bound.exclude_end))


def is_as_restrictive_as(a: Bound, b: Bound) -> bool:
    """
    Whether every version between `a`'s edges also lies between `b`'s.
    """
    cmp = b.start.compare_to(a.start)
    if cmp > 0 or (cmp == 0 and not a.exclude_start and b.exclude_start):
        return False

    cmp = b.end.compare_to(a.end)
    return not (cmp < 0 or (cmp == 0 and not a.exclude_end and b.exclude_end))


@icontract.ensure(
    lambda a, b, result: result is None
    or (is_as_restrictive_as(result, a) and is_as_restrictive_as(result, b)),
    "intersection is as restrictive as both operands",
)
def intersection(a: Bound, b: Bound) -> Bound | None:
    """
    The bound admitting the versions admitted by both `a` and `b`, or `None`
    if they do not overlap.
    """
    cmp = a.start.compare_to(b.end)
    if cmp > 0:
        return None
    if cmp == 0:
        # `a` starts exactly where `b` ends.
        if a.exclude_start or b.exclude_end:
            return None
        return Exact(a.start)

    cmp = b.start.compare_to(a.end)
    if cmp > 0:
        return None
    if cmp == 0:
        if b.exclude_start or a.exclude_end:
            return None
        return Exact(b.start)

    # The higher start wins; on a tie, the excluding one.
    cmp = a.start.compare_to(b.start)
    if cmp == 0:
        start = a if a.exclude_start else b
    else:
        start = b if cmp < 0 else a

    # The lower end wins; on a tie, the excluding one.
    cmp = a.end.compare_to(b.end)
    if cmp == 0:
        end = a if a.exclude_end else b
    else:
        end = b if cmp > 0 else a

    if start is end:
        return start
    if not end.is_upper_bound:
        return start
    if not start.is_lower_bound:
        return end
    return Interval(start.as_lower_bound(), end.as_upper_bound())


def _span(start: Version, exclude_start: bool, end: Version, exclude_end: bool) -> Bound:
    """
    The bound from `start` to `end`, dropping an edge that does not restrict.
    """
    if start.compare_to(end) == 0 and not (exclude_start or exclude_end):
        return Exact(start)

    lower = GreaterThan(start) if exclude_start else GreaterOrEqual(start)
    upper = LessThan(end) if exclude_end else LessOrEqual(end)
    if not upper.is_upper_bound:
        return lower
    if not lower.is_lower_bound:
        return upper
    return Interval(lower, upper)


def _touches(left: Bound, right: Bound) -> bool:
    """
    Whether `right` begins right where `left` ends: at the same point, or at
    the next patch after an inclusive end.
    """
    if right.exclude_start:
        return False
    if left.exclude_end:
        return left.end.compare_to(right.start) == 0
    return left.end.next_patch().compare_to(right.start) == 0


@icontract.ensure(
    lambda a, b, result: result is None
    or (is_as_restrictive_as(a, result) and is_as_restrictive_as(b, result)),
    "union admits both operands",
)
def union(a: Bound, b: Bound) -> Bound | None:
    """
    A single bound admitting everything `a` and `b` admit, or `None` if they
    neither overlap nor are adjacent.
    """
    shared_open_start = a.exclude_start and b.exclude_start and a.start.compare_to(b.start) == 0
    if a.includes(b.start) or b.includes(a.start) or shared_open_start:
        cmp = a.start.compare_to(b.start)
        if cmp == 0:
            start, exclude_start = a.start, a.exclude_start and b.exclude_start
        elif cmp < 0:
            start, exclude_start = a.start, a.exclude_start
        else:
            start, exclude_start = b.start, b.exclude_start

        cmp = a.end.compare_to(b.end)
        if cmp == 0:
            end, exclude_end = a.end, a.exclude_end and b.exclude_end
        elif cmp > 0:
            end, exclude_end = a.end, a.exclude_end
        else:
            end, exclude_end = b.end, b.exclude_end

        return _span(start, exclude_start, end, exclude_end)

    if _touches(a, b):
        return _span(a.start, a.exclude_start, b.end, b.exclude_end)
    if _touches(b, a):
        return _span(b.start, b.exclude_start, a.end, a.exclude_end)
    return None
