"""Tests for range parsing, expansion and satisfaction."""

import pytest

from npm_semver import (
    Comparator,
    ComparatorSet,
    InvalidComparatorOperator,
    InvalidRangeFormat,
    InvalidVersionFormat,
    NumericOverflow,
    Options,
    Range,
    parse,
    parse_range,
    satisfies,
    to_comparators,
    try_parse_range,
    valid_range,
)
from npm_semver.parsers import TermKind, classify, expand, split_terms

INCLUDE_PRERELEASE = Options(include_prerelease=True)


class TestExpansion:
    """Test how shorthand ranges expand into comparators."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            # hyphen
            ("1.2.3 - 2.3.4", ">=1.2.3 <=2.3.4"),
            ("1.2 - 2.3.4", ">=1.2.0 <=2.3.4"),
            ("1.2.3 - 2.3", ">=1.2.3 <2.4.0"),
            ("1.2.3 - 2", ">=1.2.3 <3.0.0"),
            ("* - 2.0.0", "<=2.0.0"),
            ("1.0.0 - *", ">=1.0.0"),
            # caret
            ("^1.2.3", ">=1.2.3 <2.0.0"),
            ("^0.2.3", ">=0.2.3 <0.3.0"),
            ("^0.0.3", ">=0.0.3 <0.0.4"),
            ("^1.2.3-beta.2", ">=1.2.3-beta.2 <2.0.0"),
            ("^0.0.3-beta", ">=0.0.3-beta <0.0.4"),
            ("^1.2.x", ">=1.2.0 <2.0.0"),
            ("^0.0.x", ">=0.0.0 <0.1.0"),
            ("^0.0", ">=0.0.0 <0.1.0"),
            ("^1.x", ">=1.0.0 <2.0.0"),
            ("^0.x", ">=0.0.0 <1.0.0"),
            ("^*", ""),
            # tilde
            ("~1.2.3", ">=1.2.3 <1.3.0"),
            ("~1.2", ">=1.2.0 <1.3.0"),
            ("~1", ">=1.0.0 <2.0.0"),
            ("~0.2.3", ">=0.2.3 <0.3.0"),
            ("~1.2.3-beta.2", ">=1.2.3-beta.2 <1.3.0"),
            ("~>1.2.3", ">=1.2.3 <1.3.0"),
            # x-ranges
            ("*", ""),
            ("x", ""),
            ("", ""),
            ("1", ">=1.0.0 <2.0.0"),
            ("1.x", ">=1.0.0 <2.0.0"),
            ("1.x.x", ">=1.0.0 <2.0.0"),
            ("1.2", ">=1.2.0 <1.3.0"),
            ("1.2.*", ">=1.2.0 <1.3.0"),
            # operators on partials
            (">1", ">=2.0.0"),
            (">1.2", ">=1.3.0"),
            (">=1.2", ">=1.2.0"),
            ("<1.2", "<1.2.0"),
            ("<=1.2", "<1.3.0"),
            ("<=1", "<2.0.0"),
            ("=1.2", ">=1.2.0 <1.3.0"),
            (">*", "<0.0.0-0"),
            ("<*", "<0.0.0-0"),
            (">=*", ""),
            # plain comparators
            ("1.2.3", "1.2.3"),
            ("=1.2.3", "1.2.3"),
            (">=1.2.3", ">=1.2.3"),
            (">= 1.2.3", ">=1.2.3"),
            ("> 1.0.0 <  2.0.0", ">1.0.0 <2.0.0"),
            ("^ 1.2", ">=1.2.0 <2.0.0"),
            (">=1.2.3 >=1.2.3", ">=1.2.3"),
            # unions
            ("1.2.7 || >=1.2.9 <2.0.0", "1.2.7||>=1.2.9 <2.0.0"),
            ("1.x || *", ""),
            ("<*||1.2.3", "1.2.3"),
            ("<* || >*", "<0.0.0-0"),
        ],
    )
    def test_expansion(self, text, expected):
        assert str(Range.parse(text)) == expected

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("^1.2.3", ">=1.2.3 <2.0.0-0"),
            ("~1.2", ">=1.2.0-0 <1.3.0-0"),
            ("1.x", ">=1.0.0-0 <2.0.0-0"),
            ("<=1.2", "<1.3.0-0"),
            (">1.2", ">=1.3.0-0"),
            ("1.2 - 2.3", ">=1.2.0-0 <2.4.0-0"),
            ("1.2.3 - 2.3.4", ">=1.2.3 <=2.3.4"),
        ],
    )
    def test_expansion_with_prerelease_bounds(self, text, expected):
        """Should use -0 bounds when prereleases are included."""
        assert str(Range.parse(text, INCLUDE_PRERELEASE)) == expected

    def test_loose_range(self):
        assert str(Range.parse("~v1.02.3", Options(loose=True))) == ">=1.2.3 <1.3.0"
        assert parse_range("~v1.02.3") is None

    def test_to_comparators(self):
        assert to_comparators("^1.2.3 || 2.x") == [
            [">=1.2.3", "<2.0.0"],
            [">=2.0.0", "<3.0.0"],
        ]


class TestTerms:
    """Test term classification before expansion."""

    @pytest.mark.parametrize(
        "word,kind",
        [
            ("^1.2.3", TermKind.CARET),
            ("~1.2", TermKind.TILDE),
            ("~>1.2", TermKind.TILDE),
            ("1.x", TermKind.WILDCARD),
            (">=1.2", TermKind.WILDCARD),
            ("*", TermKind.WILDCARD),
            (">=1.2.3", TermKind.COMPARATOR),
            ("1.2.3", TermKind.COMPARATOR),
        ],
    )
    def test_classify(self, word, kind):
        assert classify(word).kind is kind

    def test_split_hyphen(self):
        terms = split_terms(" 1.2.3 - 2.x ")
        assert [term.kind for term in terms] == [TermKind.HYPHEN]
        assert expand(terms[0]) == [(">=", "1.2.3"), ("<", "3.0.0")]

    def test_split_glues_operators(self):
        terms = split_terms(">= 1.2.3 < 2")
        assert [term.text for term in terms] == [">=1.2.3", "<2"]

    def test_blank_segment(self):
        assert split_terms("   ") == []


class TestSatisfies:
    """Test satisfaction, including the prerelease exclusion rule."""

    @pytest.mark.parametrize(
        "version,range_",
        [
            ("1.2.3", "^1.2.3"),
            ("1.9.9", "^1.2.3"),
            ("0.2.9", "^0.2.3"),
            ("1.2.9", "~1.2.3"),
            ("1.2.3", "1.2.3 - 2.3.4"),
            ("2.3.4", "1.2.3 - 2.3.4"),
            ("2.3.9", "1.2.3 - 2.3"),
            ("1.2.7", "1.2.7 || >=1.2.9 <2.0.0"),
            ("1.4.6", "1.2.7 || >=1.2.9 <2.0.0"),
            ("9.9.9", "*"),
            ("0.0.0", ""),
            ("1.2.3", "1.2.3+build"),
            ("1.2.3+build", "1.2.3"),
            ("1.2.3-beta.2", ">=1.2.3-beta.1 <2.0.0"),
            ("1.2.3-beta.2", "^1.2.3-beta.1"),
            ("1.2.3-rc.1", "1.2.3-rc.1"),
        ],
    )
    def test_satisfied(self, version, range_):
        assert satisfies(version, range_)
        assert Range.parse(range_).test(version)
        assert version in Range.parse(range_)

    @pytest.mark.parametrize(
        "version,range_",
        [
            ("2.0.0", "^1.2.3"),
            ("1.2.2", "^1.2.3"),
            ("0.3.0", "^0.2.3"),
            ("0.0.4", "^0.0.3"),
            ("1.3.0", "~1.2.3"),
            ("2.3.5", "1.2.3 - 2.3.4"),
            ("1.2.8", "1.2.7 || >=1.2.9 <2.0.0"),
            ("1.0.0", ">*"),
            ("1.0.0", "<0.0.0-0"),
            # prerelease exclusion
            ("2.0.0-rc.1", "^1.2.3"),
            ("1.3.0-beta", ">=1.2.3-beta.1 <2.0.0"),
            ("1.2.4-alpha", "^1.2.3-beta.1"),
            ("1.0.0-alpha", "*"),
            ("1.0.0-alpha", ">=0.9.0"),
            ("2.0.0-0", "<2.0.0"),
        ],
    )
    def test_not_satisfied(self, version, range_):
        assert not satisfies(version, range_)
        assert version not in Range.parse(range_)

    @pytest.mark.parametrize(
        "version,range_,expected",
        [
            ("1.3.0-beta", "^1.2.3", True),
            ("2.0.0-rc.1", "^1.2.3", False),
            ("1.2.0-alpha", "~1.2", True),
            ("1.0.0-alpha", "*", True),
            ("1.0.0-alpha", ">=0.9.0", True),
            ("1.2.3-alpha", "1.2.3", False),
        ],
    )
    def test_include_prerelease(self, version, range_, expected):
        """Should let prereleases match without naming them, but not past -0 bounds."""
        assert satisfies(version, range_, INCLUDE_PRERELEASE) is expected

    def test_options_as_mapping(self):
        assert satisfies("1.3.0-beta", "^1.2.3", {"includePrerelease": True})

    def test_invalid_version_raises(self):
        with pytest.raises(InvalidVersionFormat):
            satisfies("not-a-version", "^1.0.0")

    def test_invalid_range_raises(self):
        with pytest.raises(InvalidRangeFormat):
            satisfies("1.0.0", "not-a-version")

    def test_range_test_with_loose_version(self):
        rng = Range.parse("^1.2.3", Options(loose=True))
        assert rng.test("v1.5.0")

    def test_contains_rejects_other_types(self):
        assert 1 not in Range.parse("*")


class TestRangeErrors:
    """Test fail-fast error reporting."""

    @pytest.mark.parametrize(
        "text,error",
        [
            (">=1.2.3 <", InvalidRangeFormat),
            ("not-a-version", InvalidRangeFormat),
            ("1.2.3 || foo", InvalidRangeFormat),
            ("1.2.3.4", InvalidRangeFormat),
            ("^", InvalidRangeFormat),
            ("=>1.0.0", InvalidComparatorOperator),
            ("==1.0.0", InvalidComparatorOperator),
            ("!=1.0.0", InvalidComparatorOperator),
            ("<>1.0.0", InvalidComparatorOperator),
            ("^9007199254740992.0.0", NumericOverflow),
        ],
    )
    def test_error_kinds(self, text, error):
        result = try_parse_range(text)

        assert not result.ok
        assert isinstance(result.error, error)
        with pytest.raises(error):
            Range.parse(text)

    def test_non_string(self):
        assert isinstance(try_parse_range(42).error, InvalidRangeFormat)

    def test_over_long_term(self):
        assert parse_range("^1.2.3-" + "a" * 300) is None


class TestValidRange:
    """Test valid_range()."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("^1.2.3", ">=1.2.3 <2.0.0"),
            ("*", "*"),
            ("", "*"),
            ("1.x || >=2.5.0 || 5.0.0 - 7.2.3", ">=1.0.0 <2.0.0||>=2.5.0||>=5.0.0 <=7.2.3"),
            ("blerg", None),
        ],
    )
    def test_valid_range(self, text, expected):
        assert valid_range(text) == expected


class TestRangeModel:
    """Test Range value behaviour."""

    def test_empty_range_matches_nothing(self):
        assert not Range(sets=()).test(parse("1.0.0"))

    def test_equality_ignores_raw(self):
        assert Range.parse("^1.2.3") == Range.parse(">=1.2.3   <2.0.0")

    def test_raw_is_whitespace_normalised(self):
        assert Range.parse("  >=1.0.0    <2.0.0 ").raw == ">=1.0.0 <2.0.0"

    def test_range_passes_through(self):
        rng = Range.parse("^1.2.3")
        assert parse_range(rng) is rng

    def test_range_reparsed_with_other_options(self):
        rng = Range.parse("^1.2.3")
        other = parse_range(rng, INCLUDE_PRERELEASE)

        assert other is not None
        assert other.options.include_prerelease
        assert str(other) == ">=1.2.3 <2.0.0-0"

    def test_built_range_keeps_its_sets_under_other_options(self):
        """Should not widen a range built without source text when options change."""
        rng = Range.from_sets([ComparatorSet.of([Comparator(">=", parse("2.0.0"))])])
        other = parse_range(rng, INCLUDE_PRERELEASE)

        assert other is not None
        assert str(other) == ">=2.0.0"
        assert other.options.include_prerelease
        assert not satisfies("1.0.0", rng, INCLUDE_PRERELEASE)
        assert satisfies("2.1.0-beta", rng, INCLUDE_PRERELEASE)

    def test_empty_range_still_matches_nothing_under_other_options(self):
        rng = Range(sets=())

        assert not satisfies("1.0.0", rng, INCLUDE_PRERELEASE)
        assert parse_range(rng, INCLUDE_PRERELEASE).sets == ()

    def test_contains_invalid_string(self):
        """Should answer False for strings that are not versions."""
        rng = Range.parse("*")

        assert "garbage" not in rng
        with pytest.raises(InvalidVersionFormat):
            rng.test("garbage")
