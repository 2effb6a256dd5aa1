"""
A hand-written scanner for version literals and range-expression terms.

The productions recognized here are:

    digits     := 0 | [1-9][0-9]*
    xPart      := digits | 'x' | 'X' | '*'
    partial    := xPart ('.' xPart ('.' xPart qualifier)?)?
    qualifier  := ('-' parts)? ('+' parts)?
    comparator := '<' | '>' | '=' | '~' | '^' | '<=' | '>=' | '~>' | '~='
    simple     := comparator? partial
    hyphen     := partial ' - ' partial
    range      := (hyphen | simple+) ('||' (hyphen | simple+))*

Turning the recognized terms into bounds is the job of `semver_range._range`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from semver_range._semver import MAX_COMPONENT, SemverError, ValidationError, Version

logger = logging.getLogger(__name__)

COMPARATORS = ("<=", ">=", "~>", "~=", "<", ">", "=", "~", "^")
"""
Every comparator prefix, longest first so that scanning is greedy.
"""

_WILDCARDS = ("x", "X", "*")

# A comparator followed by whitespace and/or a `v` prefix: `>= v1.2.3` -> `>=1.2.3`.
_COMPARATOR_GAP = re.compile(r"([<>=~^])\s*v?\s*")
_OR = re.compile(r"\s*\|\|\s*")


class VersionSyntaxError(SemverError):
    """
    Raised when text does not match the version or range grammar.
    """

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text
        """
        The offending substring.
        """


class _NoMatch(Exception):
    """
    Internal signal that the scanner could not complete a production.
    """


@dataclass(frozen=True)
class Partial:
    """
    A possibly incomplete version, as written in a range term.

    `None` marks a wildcard (`x`, `X`, `*`) or an omitted position. Every
    position after the first `None` is also `None`, and the qualifiers are only
    kept when all three numbers are given.
    """

    major: int | None
    minor: int | None = None
    patch: int | None = None
    pre_release: str = ""
    build: str = ""

    def to_version(self) -> Version:
        """
        The lowest version this partial describes, with unspecified positions
        filled with zero.
        """
        return Version.create(
            self.major or 0, self.minor or 0, self.patch or 0, self.pre_release, self.build
        )


@dataclass(frozen=True)
class Term:
    """
    A single `simple` production: an optional comparator and a partial version.
    """

    comparator: str
    """
    The comparator prefix, or the empty string when absent.
    """

    partial: Partial


def _is_digit(c: str) -> bool:
    return "0" <= c <= "9"


def _is_identifier_char(c: str) -> bool:
    return c.isascii() and (c.isalnum() or c == "-")


class _Scanner:
    """
    A cursor over a single term. Every method either consumes a complete
    production or raises `_NoMatch`.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def at_end(self) -> bool:
        return self._pos == len(self._text)

    def accept(self, literal: str) -> bool:
        if self._text.startswith(literal, self._pos):
            self._pos += len(literal)
            return True
        return False

    def expect(self, literal: str) -> None:
        if not self.accept(literal):
            raise _NoMatch

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        start = self._pos
        while self._pos < len(self._text) and predicate(self._text[self._pos]):
            self._pos += 1
        return self._text[start : self._pos]

    def comparator(self) -> str:
        for comparator in COMPARATORS:
            if self.accept(comparator):
                return comparator
        return ""

    def number(self) -> int:
        digits = self.take_while(_is_digit)
        if not digits or (len(digits) > 1 and digits[0] == "0"):
            raise _NoMatch

        value = int(digits)
        if value > MAX_COMPONENT:
            raise VersionSyntaxError(f"numeric overflow in '{self._text}'", self._text)
        return value

    def x_part(self) -> int | None:
        for wildcard in _WILDCARDS:
            if self.accept(wildcard):
                return None
        return self.number()

    def identifiers(self) -> str:
        start = self._pos
        while True:
            if not self.take_while(_is_identifier_char):
                raise _NoMatch
            if not self.accept("."):
                return self._text[start : self._pos]

    def qualifier(self) -> tuple[str, str]:
        pre_release = self.identifiers() if self.accept("-") else ""
        build = self.identifiers() if self.accept("+") else ""
        return pre_release, build

    def partial(self) -> Partial:
        major = self.x_part()
        minor = patch = None
        pre_release = build = ""
        if self.accept("."):
            minor = self.x_part()
            if self.accept("."):
                patch = self.x_part()
                pre_release, build = self.qualifier()

        if major is None:
            return Partial(None)
        if minor is None:
            return Partial(major)
        if patch is None:
            return Partial(major, minor)
        return Partial(major, minor, patch, pre_release, build)


def parse_term(text: str) -> Term:
    """
    Parse a single range term such as `>=1.2`, `~1.2.3-beta` or `x`.
    """
    scanner = _Scanner(text)
    try:
        comparator = scanner.comparator()
        partial = scanner.partial()
        if not scanner.at_end():
            raise _NoMatch
    except _NoMatch:
        raise VersionSyntaxError(f"'{text}' is not a valid version range", text) from None
    return Term(comparator, partial)


def parse_partial(text: str) -> Partial:
    """
    Parse a partial version without a comparator, as used on either side of a
    hyphen range.
    """
    scanner = _Scanner(text)
    try:
        partial = scanner.partial()
        if not scanner.at_end():
            raise _NoMatch
    except _NoMatch:
        raise VersionSyntaxError(f"'{text}' is not a valid version range", text) from None
    return partial


def parse_version(text: str) -> Version:
    """
    Parse a complete version literal such as `1.2.3-rc.1+build.5`.

    Raises `VersionSyntaxError` if `text` is not a valid semantic version.
    """
    message = f"the string '{text}' does not represent a valid semantic version"
    scanner = _Scanner(text)
    try:
        major = scanner.number()
        scanner.expect(".")
        minor = scanner.number()
        scanner.expect(".")
        patch = scanner.number()
        pre_release, build = scanner.qualifier()
        if not scanner.at_end():
            raise _NoMatch
    except _NoMatch:
        raise VersionSyntaxError(message, text) from None

    try:
        return Version.create(major, minor, patch, pre_release, build)
    except ValidationError as exc:
        raise VersionSyntaxError(message, text) from exc


def must_parse_version(text: str) -> Version:
    """
    Parse a version literal that is known to be well-formed, such as a
    constant in source code.

    A malformed literal is a programming error: it is logged and raised as
    `AssertionError`, which ordinary `SemverError` handlers do not catch.
    """
    try:
        return parse_version(text)
    except SemverError as exc:
        logger.critical("malformed version literal %r: %s", text, exc)
        raise AssertionError(f"malformed version literal {text!r}") from exc


def collapse_comparators(text: str) -> str:
    """
    Join each comparator to its version, dropping whitespace and an optional
    `v` prefix in between.
    """
    return _COMPARATOR_GAP.sub(r"\1", text)


def split_alternatives(text: str) -> list[str]:
    """
    Split a range expression on `||`. An empty alternative is kept as `""`.
    """
    return [alternative.strip() for alternative in _OR.split(text)]


def split_terms(alternative: str) -> list[str]:
    return alternative.split()


def hyphen_sides(terms: list[str]) -> tuple[Partial, Partial] | None:
    """
    Return both sides of a hyphen range (`1.2.3 - 2.3.4`), or `None` if the
    terms are not one.
    """
    if len(terms) != 3 or terms[1] != "-":
        return None
    return parse_partial(terms[0]), parse_partial(terms[2])
