"""Tests for the version and range-term grammar."""

import pretend  # type: ignore
import pytest

from semver_range import MAX_COMPONENT, SemverError, Version, VersionSyntaxError, parse_version
from semver_range import _grammar
from semver_range._grammar import (
    Partial,
    Term,
    collapse_comparators,
    hyphen_sides,
    must_parse_version,
    parse_partial,
    parse_term,
    split_alternatives,
    split_terms,
)


class TestParseVersion:
    def test_full_version(self):
        v = parse_version("1.2.3-rc.1+build.5")
        assert (v.major, v.minor, v.patch) == (1, 2, 3)
        assert v.pre_release == ("rc", 1)
        assert v.build == ("build", "5")

    def test_large_numbers(self):
        assert parse_version(f"{MAX_COMPONENT}.0.0").major == MAX_COMPONENT

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "1",
            "1.2",
            "1.2.3.4",
            "01.2.3",
            "1.02.3",
            "v1.2.3",
            "1.2.x",
            " 1.2.3",
            "1.2.3-",
            "1.2.3+",
            "1.2.3-beta..1",
            "1.2.3-01",
            "1.2.3 ",
        ],
    )
    def test_invalid(self, text):
        with pytest.raises(VersionSyntaxError) as exc_info:
            parse_version(text)
        assert exc_info.value.text == text

    def test_overflow(self):
        text = f"{MAX_COMPONENT + 1}.0.0"
        with pytest.raises(VersionSyntaxError, match="overflow"):
            parse_version(text)

    def test_invalid_pre_release_is_chained(self):
        with pytest.raises(VersionSyntaxError) as exc_info:
            parse_version("1.2.3-01")
        assert isinstance(exc_info.value.__cause__, SemverError)

    def test_syntax_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_version("nope")


class TestMustParseVersion:
    def test_valid(self):
        assert must_parse_version("1.0.0") == Version(1, 0, 0)

    def test_malformed_aborts(self, monkeypatch):
        logger = pretend.stub(critical=pretend.call_recorder(lambda *a: None))
        monkeypatch.setattr(_grammar, "logger", logger)

        with pytest.raises(AssertionError) as exc_info:
            must_parse_version("1.0")

        assert isinstance(exc_info.value.__cause__, VersionSyntaxError)
        assert len(logger.critical.calls) == 1
        assert logger.critical.calls[0].args[1] == "1.0"

    def test_abort_is_not_a_semver_error(self):
        with pytest.raises(AssertionError):
            try:
                must_parse_version("bogus")
            except SemverError:  # pragma: no cover
                pytest.fail("must_parse_version raised an ordinary input error")


class TestParseTerm:
    @pytest.mark.parametrize(
        ("text", "comparator"),
        [
            ("1.2.3", ""),
            ("=1.2.3", "="),
            ("<1.2.3", "<"),
            (">1.2.3", ">"),
            ("<=1.2.3", "<="),
            (">=1.2.3", ">="),
            ("~1.2.3", "~"),
            ("~>1.2.3", "~>"),
            ("~=1.2.3", "~="),
            ("^1.2.3", "^"),
        ],
    )
    def test_comparators(self, text, comparator):
        assert parse_term(text) == Term(comparator, Partial(1, 2, 3))

    @pytest.mark.parametrize(
        ("text", "partial"),
        [
            ("1", Partial(1)),
            ("1.2", Partial(1, 2)),
            ("1.x", Partial(1)),
            ("1.X.x", Partial(1)),
            ("1.2.*", Partial(1, 2)),
            ("x", Partial(None)),
            ("*", Partial(None)),
            ("x.2.3", Partial(None)),
            ("1.x.3", Partial(1)),
            ("1.2.x-beta", Partial(1, 2)),
            ("1.2.3-beta.2+b7", Partial(1, 2, 3, "beta.2", "b7")),
            ("0.0.0", Partial(0, 0, 0)),
        ],
    )
    def test_partials(self, text, partial):
        assert parse_term(text).partial == partial

    @pytest.mark.parametrize(
        "text",
        ["", "a", "1.", "1..2", "01", "1.2.3.4", "==1.2.3", "<>1", "1.2-beta", "1.2.3-", "!1"],
    )
    def test_invalid(self, text):
        with pytest.raises(VersionSyntaxError) as exc_info:
            parse_term(text)
        assert exc_info.value.text == text

    def test_overflow(self):
        with pytest.raises(VersionSyntaxError, match="overflow"):
            parse_term(f"^1.{MAX_COMPONENT + 1}")

    def test_to_version_fills_zeros(self):
        assert parse_term(">=1.2").partial.to_version() == Version(1, 2, 0)
        assert parse_term("1.2.3-rc.1").partial.to_version() == Version(1, 2, 3, ("rc", 1))


class TestPreprocessing:
    @pytest.mark.parametrize(
        ("text", "collapsed"),
        [
            (">= 1.2.3", ">=1.2.3"),
            (">=v1.2.3", ">=1.2.3"),
            (">= v1.2.3", ">=1.2.3"),
            ("~> 1.2", "~>1.2"),
            ("^ 1 || < 3", "^1 || <3"),
            ("1.2.3 - 2.3.4", "1.2.3 - 2.3.4"),
            ("1.2.3-dev", "1.2.3-dev"),
        ],
    )
    def test_collapse_comparators(self, text, collapsed):
        assert collapse_comparators(text) == collapsed

    def test_split_alternatives(self):
        assert split_alternatives("1.x ||2.x|| 3.x") == ["1.x", "2.x", "3.x"]
        assert split_alternatives("1.x || ") == ["1.x", ""]
        assert split_alternatives("||") == ["", ""]

    def test_split_terms(self):
        assert split_terms(">=1.0.0   <2.0.0") == [">=1.0.0", "<2.0.0"]

    def test_hyphen_sides(self):
        assert hyphen_sides(["1.2.3", "-", "2.3"]) == (Partial(1, 2, 3), Partial(2, 3))
        assert hyphen_sides([">=1.2.3", "<2"]) is None
        assert hyphen_sides(["1", "-", "2", "-", "3"]) is None

    def test_hyphen_sides_rejects_comparators(self):
        with pytest.raises(VersionSyntaxError):
            hyphen_sides([">=1.2.3", "-", "2.3.4"])

    def test_parse_partial(self):
        assert parse_partial("1.2.x") == Partial(1, 2)
        with pytest.raises(VersionSyntaxError):
            parse_partial("^1.2")
