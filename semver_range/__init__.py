"""
The `semver_range` APIs.

Parse semantic versions and npm-style range expressions into immutable
values that support ordering, membership, intersection, union and
restrictiveness tests:

    >>> from semver_range import parse_range, parse_version
    >>> rng = parse_range("1.x")
    >>> rng.normalized_string()
    '>=1.0.0 <2.0.0'
    >>> rng.includes(parse_version("1.4.2"))
    True
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from semver_range._bounds import (
    HIGHEST_LOWER_BOUND,
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
from semver_range._grammar import VersionSyntaxError, must_parse_version, parse_version
from semver_range._range import (
    MATCH_ALL,
    MATCH_NONE,
    VersionRange,
    exact_range,
    from_versions,
    must_parse_range,
    parse_range,
)
from semver_range._semver import (
    MAX,
    MAX_COMPONENT,
    MIN,
    ZERO,
    SemverError,
    ValidationError,
    Version,
)
from semver_range._version import __version__

__all__ = [
    "__version__",
    "Bound",
    "Exact",
    "GreaterOrEqual",
    "GreaterThan",
    "HIGHEST_LOWER_BOUND",
    "Interval",
    "LessOrEqual",
    "LessThan",
    "LOWEST_LOWER_BOUND",
    "LOWEST_UPPER_BOUND",
    "MATCH_ALL",
    "MATCH_NONE",
    "MAX",
    "MAX_COMPONENT",
    "MIN",
    "SemverError",
    "ValidationError",
    "Version",
    "VersionRange",
    "VersionSyntaxError",
    "ZERO",
    "exact_range",
    "from_versions",
    "intersection",
    "is_as_restrictive_as",
    "is_empty",
    "must_parse_range",
    "must_parse_version",
    "parse_range",
    "parse_version",
    "union",
]

LOGLEVEL_ENV = "SEMVER_RANGE_LOGLEVEL"


def _apply_log_level(environ: Mapping[str, str]) -> None:
    """
    Set the package logger's level from `SEMVER_RANGE_LOGLEVEL`, if present.
    Handlers are left to the host application.
    """
    level = environ.get(LOGLEVEL_ENV)
    if level:
        logging.getLogger(__name__).setLevel(level.upper())


_apply_log_level(os.environ)
