"""Reference implementation for formal verification.

These functions are written to be OBVIOUSLY CORRECT, not fast.
They define ground truth for property-based testing.

The oracle never builds bounds: it evaluates each term of a generated
range expression directly against a stable version, comparing plain
tuples, and combines the answers with `all` (terms) and `any`
(alternatives).
"""

from __future__ import annotations

from dataclasses import dataclass

from semver_range import Version

Key = tuple[int, int, int, int]


@dataclass(frozen=True)
class TermCase:
    """One simple term, as generated by `strategies.terms`."""

    comparator: str
    numbers: tuple[int, ...]
    """The explicit positions before the first wildcard (0 to 3 of them)."""
    pre_release: str
    text: str


@dataclass(frozen=True)
class HyphenCase:
    """A `low - high` alternative."""

    low: TermCase
    high: TermCase
    text: str


@dataclass(frozen=True)
class RangeCase:
    """A whole range expression: alternatives of terms (AND) joined by `||` (OR)."""

    alternatives: tuple[tuple[TermCase, ...] | HyphenCase, ...]
    text: str


def version_key(version: Version) -> Key:
    """
    Order key of a stable version. Pre-releases get a 0 in the last slot so that
    they sort just below the stable release of the same triplet.
    """
    assert version.is_stable
    return (version.major, version.minor, version.patch, 1)


def lowest_key(term: TermCase) -> Key:
    """The smallest version the term's partial describes, unknown positions zeroed."""
    major, minor, patch = (term.numbers + (0, 0, 0))[:3]
    return (major, minor, patch, 0 if term.pre_release else 1)


def _at_most(term: TermCase, key: Key) -> bool:
    # `<=1.2` admits all of 1.2.x
    depth = len(term.numbers)
    if depth < 3:
        return key[:depth] <= term.numbers
    return key <= lowest_key(term)


def oracle_term(term: TermCase, key: Key) -> bool:
    """
    Obviously correct membership for a single term.

        ""/"="     the partial matches position by position
        "~"        same major.minor (or major) and at least the partial
        "^"        same major and at least the partial, tilde for 0.x
        ">"        above everything the partial matches
        ">=", "<"  plain comparison against the zero-filled partial
        "<="       at or below everything the partial matches
    """
    numbers = term.numbers
    depth = len(numbers)
    comparator = term.comparator
    lowest = lowest_key(term)

    if depth == 0:
        # A bare wildcard: everything for lower comparators, nothing for upper ones.
        return comparator not in ("<", "<=")

    if comparator in ("", "="):
        if depth == 3:
            return key == lowest
        return key[:depth] == numbers

    if comparator == "^" and numbers[0] > 0:
        return key[0] == numbers[0] and key >= lowest

    if comparator in ("~", "~>", "~=", "^"):
        prefix = min(depth, 2)
        return key[:prefix] == numbers[:prefix] and key >= lowest

    if comparator == ">":
        if depth < 3:
            return key[:depth] > numbers
        return key > lowest

    if comparator == ">=":
        return key >= lowest

    if comparator == "<":
        return key < lowest

    if comparator == "<=":
        return _at_most(term, key)

    raise AssertionError(f"unknown comparator {comparator!r}")


def oracle_hyphen(hyphen: HyphenCase, key: Key) -> bool:
    """
    Obviously correct membership for `low - high`: at least `low` and at most
    everything `high` matches, where a wildcard side does not restrict.
    """
    above = not hyphen.low.numbers or key >= lowest_key(hyphen.low)
    below = not hyphen.high.numbers or _at_most(hyphen.high, key)
    return above and below


def has_inclusive_pre_release_end(case: RangeCase) -> bool:
    """
    Whether some alternative can end at a pre-release it admits (`<=1.2.3-rc.1`,
    `1.2.3-rc.1`, `1 - 1.2.3-rc.1`).

    Such an end merges with a `>=` at its next patch (`>=1.2.4`), and the merged
    alternative also admits the stable release in between (`1.2.3`). The oracle
    evaluates alternatives independently, so it does not model that.
    """
    for alternative in case.alternatives:
        if isinstance(alternative, HyphenCase):
            terms = [alternative.high]
        else:
            terms = [term for term in alternative if term.comparator in ("", "=", "<=")]
        if any(term.pre_release for term in terms):
            return True
    return False


def oracle_includes(case: RangeCase, version: Version) -> bool:
    """
    Obviously correct membership of a stable version in a range expression.

    Mathematical definition:
        INCLUDES(alt_1 || ... || alt_n, v) = OR_i AND_{t in alt_i} t(v)
    """
    key = version_key(version)
    for alternative in case.alternatives:
        if isinstance(alternative, HyphenCase):
            if oracle_hyphen(alternative, key):
                return True
        elif all(oracle_term(term, key) for term in alternative):
            return True
    return False
