"""
Version ranges in the dialect used by npm (https://docs.npmjs.com/cli/v6/using-npm/semver).

A `VersionRange` is an ordered tuple of alternative bounds (logical OR). Every
construction path normalizes the alternatives by merging those that overlap
or are adjacent, so that the remaining alternatives are pairwise disjoint.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from semver_range._bounds import (
    LOWEST_LOWER_BOUND,
    LOWEST_UPPER_BOUND,
    Bound,
    Exact,
    GreaterOrEqual,
    GreaterThan,
    Interval,
    LessOrEqual,
    LessThan,
    intersection,
    is_as_restrictive_as,
    is_empty,
    union,
)
from semver_range._grammar import (
    Partial,
    Term,
    VersionSyntaxError,
    collapse_comparators,
    hyphen_sides,
    parse_term,
    split_alternatives,
    split_terms,
)
from semver_range._semver import SemverError, Version

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class VersionRange:
    """
    An immutable set of versions, expressed as alternative bounds.

    Two ranges are equal when their alternatives are; the original text plays
    no part in equality.
    """

    original_text: str
    """
    The text this range was parsed from, or `""` for ranges built
    programmatically.
    """

    bounds: tuple[Bound, ...]
    """
    The normalized alternatives. Never empty.
    """

    def __post_init__(self) -> None:
        if not self.bounds:
            raise ValueError("a VersionRange needs at least one alternative")

    def includes(self, version: Version) -> bool:
        """
        Whether `version` is admitted by any alternative.

        A pre-release must additionally be visible through the alternative
        that admits it (see `Bound.test_prerelease`).
        """
        return any(
            bound.includes(version) and (version.is_stable or bound.test_prerelease(version))
            for bound in self.bounds
        )

    def __contains__(self, version: object) -> bool:
        return isinstance(version, Version) and self.includes(version)

    def intersection(self, other: VersionRange | None) -> VersionRange | None:
        """
        The range of versions admitted by both ranges, or `None` if no version
        is (which is distinct from a range that matches nothing).
        """
        if other is None:
            return None

        overlaps = []
        for mine in self.bounds:
            for theirs in other.bounds:
                overlap = intersection(mine, theirs)
                if overlap is not None:
                    overlaps.append(overlap)

        if not overlaps:
            return None
        return _new_range("", overlaps)

    def merge(self, other: VersionRange) -> VersionRange:
        """
        The range of versions admitted by either range.
        """
        return _new_range("", self.bounds + other.bounds)

    def is_as_restrictive_as(self, other: VersionRange) -> bool:
        """
        Whether every alternative of this range overlaps, and lies within, some
        alternative of `other`.
        """
        return all(
            any(
                intersection(mine, theirs) is not None and is_as_restrictive_as(mine, theirs)
                for theirs in other.bounds
            )
            for mine in self.bounds
        )

    @property
    def start_version(self) -> Version | None:
        """
        The start of the single alternative, or `None` when there are several.
        """
        return self.bounds[0].start if len(self.bounds) == 1 else None

    @property
    def end_version(self) -> Version | None:
        """
        The end of the single alternative, or `None` when there are several.
        """
        return self.bounds[0].end if len(self.bounds) == 1 else None

    @property
    def is_exclude_start(self) -> bool:
        return len(self.bounds) == 1 and self.bounds[0].exclude_start

    @property
    def is_exclude_end(self) -> bool:
        return len(self.bounds) == 1 and self.bounds[0].exclude_end

    def normalized_string(self) -> str:
        """
        The canonical rendering, e.g. `>=2.0.0 <3.0.0` for `2.x`.
        """
        return " || ".join(str(bound) for bound in self.bounds)

    def __str__(self) -> str:
        return self.original_text or self.normalized_string()

    def __repr__(self) -> str:
        return f"<VersionRange({str(self)!r})>"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionRange):
            return NotImplemented
        return self.bounds == other.bounds

    def __hash__(self) -> int:
        return hash(self.bounds)


MATCH_ALL = VersionRange("*", (LOWEST_LOWER_BOUND,))
"""
The range that admits every version, equivalent to `>=0.0.0-`.
"""

MATCH_NONE = VersionRange("<0.0.0", (LOWEST_UPPER_BOUND,))
"""
The range that admits no version.
"""


def _normalize(bounds: list[Bound]) -> list[Bound]:
    """
    Repeatedly merge overlapping or adjacent alternatives until no pair merges.
    The relative order of alternatives that do not merge is preserved.
    """
    bounds = [bound for bound in bounds if not is_empty(bound)]
    merge_happened = True
    while len(bounds) > 1 and merge_happened:
        merge_happened = False
        result: list[Bound] = []
        while len(bounds) > 1:
            # Fold the last alternative into every other one it can absorb.
            merged = bounds.pop()
            unmerged = []
            for bound in bounds:
                candidate = union(merged, bound)
                if candidate is None:
                    unmerged.append(bound)
                else:
                    logger.debug("merged alternatives %s and %s into %s", merged, bound, candidate)
                    merge_happened = True
                    merged = candidate
            result.insert(0, merged)
            bounds = unmerged
        bounds = bounds + result
    return bounds


def _new_range(text: str, bounds: Iterable[Bound]) -> VersionRange:
    normalized = _normalize(list(bounds))
    if not normalized:
        # Parsed text keeps its spelling even when it matches nothing.
        return VersionRange(text, MATCH_NONE.bounds) if text else MATCH_NONE
    return VersionRange(text, tuple(normalized))


def exact_range(version: Version) -> VersionRange:
    """
    The range admitting `version` only.
    """
    return VersionRange("", (Exact(version),))


def from_versions(
    start: Version, exclude_start: bool, end: Version, exclude_end: bool
) -> VersionRange:
    """
    The range between two explicit endpoints, each inclusive or exclusive.
    Returns `MATCH_NONE` when the endpoints admit nothing.
    """
    lower = GreaterThan(start) if exclude_start else GreaterOrEqual(start)
    upper = LessThan(end) if exclude_end else LessOrEqual(end)
    bound = intersection(lower, upper)
    if bound is None:
        return MATCH_NONE
    return _new_range("", [bound])


def _half_open(start: Version, end: Version) -> Bound:
    return Interval(GreaterOrEqual(start), LessThan(end))


def _patch_updates(partial: Partial, *, tilde: bool) -> Bound:
    if partial.major is None:
        return LOWEST_LOWER_BOUND
    if partial.minor is None:
        return _half_open(Version(partial.major, 0, 0), Version(partial.major + 1, 0, 0))
    if partial.patch is None:
        return _half_open(
            Version(partial.major, partial.minor, 0), Version(partial.major, partial.minor + 1, 0)
        )

    version = partial.to_version()
    if tilde:
        return _half_open(version, Version(partial.major, partial.minor + 1, 0))
    return Exact(version)


def _x_range(partial: Partial) -> Bound:
    return _patch_updates(partial, tilde=False)


def _tilde(partial: Partial) -> Bound:
    return _patch_updates(partial, tilde=True)


def _caret(partial: Partial) -> Bound:
    if partial.major is None:
        return LOWEST_LOWER_BOUND
    if partial.major == 0:
        return _patch_updates(partial, tilde=True)
    return _half_open(partial.to_version(), Version(partial.major + 1, 0, 0))


def _greater(partial: Partial) -> Bound:
    # `>` on a partial version excludes everything the partial matches.
    if partial.major is None:
        return LOWEST_LOWER_BOUND
    if partial.minor is None:
        return GreaterOrEqual(Version(partial.major + 1, 0, 0))
    if partial.patch is None:
        return GreaterOrEqual(Version(partial.major, partial.minor + 1, 0))
    return GreaterThan(partial.to_version())


def _greater_or_equal(partial: Partial) -> Bound:
    if partial.major is None:
        return LOWEST_LOWER_BOUND
    return GreaterOrEqual(partial.to_version())


def _less(partial: Partial) -> Bound:
    if partial.major is None:
        return LOWEST_UPPER_BOUND
    return LessThan(partial.to_version())


def _less_or_equal(partial: Partial) -> Bound:
    # `<=` on a partial version includes everything the partial matches.
    if partial.major is None:
        return LOWEST_UPPER_BOUND
    if partial.minor is None:
        return LessThan(Version(partial.major + 1, 0, 0))
    if partial.patch is None:
        return LessThan(Version(partial.major, partial.minor + 1, 0))
    return LessOrEqual(partial.to_version())


_TERM_BOUNDS: dict[str, Callable[[Partial], Bound]] = {
    "": _x_range,
    "=": _x_range,
    "~": _tilde,
    "~>": _tilde,
    "~=": _tilde,
    "^": _caret,
    ">": _greater,
    ">=": _greater_or_equal,
    "<": _less,
    "<=": _less_or_equal,
}


def _term_bound(term: Term) -> Bound:
    return _TERM_BOUNDS[term.comparator](term.partial)


def _alternative_bound(alternative: str) -> Bound | None:
    """
    Build the bound for one `||`-separated alternative, or `None` if its terms
    do not intersect.
    """
    if not alternative:
        return LOWEST_LOWER_BOUND

    terms = split_terms(alternative)
    sides = hyphen_sides(terms)
    if sides is not None:
        low, high = sides
        # A wildcard upper side leaves the range open above.
        upper = LOWEST_LOWER_BOUND if high.major is None else _less_or_equal(high)
        return intersection(_greater_or_equal(low), upper)

    # Parse every term before intersecting, so that syntax errors are never masked.
    bounds = [_term_bound(parse_term(term)) for term in terms]
    result = bounds[0]
    for bound in bounds[1:]:
        overlap = intersection(result, bound)
        if overlap is None:
            return None
        result = overlap
    return result


def parse_range(text: str) -> VersionRange | None:
    """
    Parse a range expression such as `^1.2.3 || >=2.5.0 <3.0.0`.

    Returns `None` for empty text, which means "no constraint". Raises
    `VersionSyntaxError` on text that does not match the grammar (including
    text made of whitespace only), and `ValidationError` on an illegal
    pre-release or build suffix.
    """
    if not text:
        return None
    if text.isspace():
        raise VersionSyntaxError(f"'{text}' is not a valid version range", text)

    bounds = []
    for alternative in split_alternatives(collapse_comparators(text)):
        bound = _alternative_bound(alternative)
        if bound is None:
            logger.debug("dropping unsatisfiable alternative %r of %r", alternative, text)
            continue
        bounds.append(bound)

    result = _new_range(text, bounds)
    logger.debug("parsed %r into %d alternative(s)", text, len(result.bounds))
    return result


def must_parse_range(text: str) -> VersionRange:
    """
    Parse a range expression that is known to be well-formed, such as a
    constant in source code.

    A malformed expression is a programming error: it is logged and raised as
    `AssertionError`, which ordinary `SemverError` handlers do not catch. Empty
    text yields `MATCH_ALL`.
    """
    try:
        result = parse_range(text)
    except SemverError as exc:
        logger.critical("malformed version range %r: %s", text, exc)
        raise AssertionError(f"malformed version range {text!r}") from exc
    return MATCH_ALL if result is None else result
