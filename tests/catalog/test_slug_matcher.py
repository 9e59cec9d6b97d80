"""Tests for slug to label pattern translation."""

import re

import pytest

from storefront.catalog.slug_matcher import (
    build_category_pattern,
    build_subcategory_pattern,
)


def matches(pattern: re.Pattern[str], label: str) -> bool:
    return pattern.match(label) is not None


class TestPlainWords:
    """Slugs without numbers or "and"."""

    @pytest.mark.parametrize(
        "label",
        [
            "ball joint",
            "Ball Joint",
            "BALL-JOINT",
            "ball/joint",
            "ball   joint",
        ],
    )
    def test_separator_and_case_tolerant(self, label: str) -> None:
        """Any space, slash or hyphen run separates tokens, case-insensitively."""
        assert matches(build_subcategory_pattern("ball-joint"), label)

    def test_rejects_longer_label(self) -> None:
        """The pattern is anchored at both ends."""
        pattern = build_subcategory_pattern("ball-joint")
        assert not matches(pattern, "Heavy Duty Ball Joint Extension")
        assert not matches(pattern, "Ball Joint Extension")
        assert not matches(pattern, "Heavy Ball Joint")

    @pytest.mark.parametrize("label", ["Ball Joint\n", "Ball Joint\r\n", "\nBall Joint"])
    def test_rejects_surrounding_newline(self, label: str) -> None:
        """A newline is an extra character, even at the very end."""
        pattern = build_subcategory_pattern("ball-joint")
        assert not matches(pattern, label)
        assert pattern.search(label) is None

    def test_no_stemming(self) -> None:
        """Tokens must match exactly."""
        assert not matches(build_subcategory_pattern("ball-joint"), "Ball Joints")

    def test_metacharacters_are_literal(self) -> None:
        """Regex metacharacters in words are escaped."""
        pattern = build_subcategory_pattern("c++-tools")
        assert matches(pattern, "C++ Tools")
        assert not matches(pattern, "CCC Tools")

    def test_dot_is_literal(self) -> None:
        pattern = build_subcategory_pattern("no.5-screws")
        assert matches(pattern, "No.5 Screws")
        assert not matches(pattern, "Nox5 Screws")


class TestAndEquivalence:
    """The word "and" also matches an ampersand."""

    @pytest.mark.parametrize(
        "label",
        ["Rod & Pinion", "Rod and Pinion", "rod AND pinion", "rod-and-pinion"],
    )
    def test_matches_and_or_ampersand(self, label: str) -> None:
        assert matches(build_subcategory_pattern("rod-and-pinion"), label)

    def test_rejects_other_conjunction(self) -> None:
        assert not matches(build_subcategory_pattern("rod-and-pinion"), "Rod or Pinion")

    def test_and_inside_word_is_literal(self) -> None:
        """Only a whole "and" token is substituted."""
        pattern = build_subcategory_pattern("sand-paper")
        assert matches(pattern, "Sand Paper")
        assert not matches(pattern, "S& Paper")


class TestFractionInference:
    """A single digit followed by two digits may be a fraction."""

    @pytest.fixture
    def pattern(self) -> re.Pattern[str]:
        return build_subcategory_pattern("1-14-rod-end-parts")

    @pytest.mark.parametrize(
        "label",
        [
            '1 1/4" Rod End Parts',
            '1 1/4" Rod End Parts"',
            "1 14 Rod End Parts",
            "1-14-rod-end-parts",
            "1-14 Rod End Parts",
        ],
    )
    def test_matches_fraction_and_plain_forms(
        self, pattern: re.Pattern[str], label: str
    ) -> None:
        assert matches(pattern, label)

    def test_rejects_trailing_newline(self, pattern: re.Pattern[str]) -> None:
        assert pattern.search('1 1/4" Rod End Parts\n') is None

    def test_rejects_distinct_fraction(self, pattern: re.Pattern[str]) -> None:
        assert not matches(pattern, '1 1/2" Rod End Parts')

    def test_fraction_requires_whitespace_before_it(self, pattern: re.Pattern[str]) -> None:
        """``1-1/4`` is a different label from the plain ``1-14``."""
        assert not matches(pattern, '1-1/4" Rod End Parts')

    def test_other_lengths_use_separator_class(self) -> None:
        """Two numbers that do not look like a fraction are a plain pair."""
        pattern = build_subcategory_pattern("12-14-hose")
        assert matches(pattern, "12-14 Hose")
        assert matches(pattern, "12/14 Hose")
        assert matches(pattern, "12 14 Hose")
        assert not matches(pattern, "12 1/4 Hose")

    def test_isolated_number_is_literal(self) -> None:
        pattern = build_subcategory_pattern("size-10-bolts")
        assert matches(pattern, "Size 10 Bolts")
        assert not matches(pattern, "Size 1 0 Bolts")


class TestThreeNumberSequence:
    """Three consecutive numbers, as in ``1-1-4``."""

    @pytest.fixture
    def pattern(self) -> re.Pattern[str]:
        return build_subcategory_pattern("1-1-4-bolt")

    @pytest.mark.parametrize("label", ["1 1/4 Bolt", "1-1-4 Bolt", '1 1/4" Bolt'])
    def test_matches(self, pattern: re.Pattern[str], label: str) -> None:
        assert matches(pattern, label)

    def test_rejects_other_numbers(self, pattern: re.Pattern[str]) -> None:
        assert not matches(pattern, "1-1-5 Bolt")

    def test_four_numbers(self) -> None:
        """Longer runs join every number with the separator class."""
        pattern = build_subcategory_pattern("2-1-2-3-pipe")
        assert matches(pattern, "2-1/2-3 Pipe")
        assert not matches(pattern, "2-1/2 Pipe")


class TestQuoteTolerance:
    """Inch marks around fractions are optional."""

    @pytest.mark.parametrize("label", ['1 1/4" Wrench', "1 1/4 Wrench", "1 1/4' Wrench"])
    def test_quote_optional(self, label: str) -> None:
        assert matches(build_subcategory_pattern("1-14-wrench"), label)

    def test_wrapping_quotes(self) -> None:
        assert matches(build_subcategory_pattern("ball-joint"), '"Ball Joint"')


class TestInvalidInput:
    """Inputs that mean "no filter"."""

    @pytest.mark.parametrize("slug", ["", "   ", None, 42, ["a"], "-", "---"])
    def test_returns_none(self, slug: object) -> None:
        assert build_subcategory_pattern(slug) is None
        assert build_category_pattern(slug) is None

    def test_empty_tokens_are_dropped(self) -> None:
        """Doubled, leading and trailing hyphens do not produce empty tokens."""
        pattern = build_subcategory_pattern("-ball--joint-")
        assert matches(pattern, "Ball Joint")


class TestIdempotence:
    """Repeated calls behave the same."""

    @pytest.mark.parametrize(
        "slug", ["1-14-rod-end-parts", "rod-and-pinion", "1-1-4-bolt", "ball-joint"]
    )
    def test_same_behaviour(self, slug: str) -> None:
        labels = [
            '1 1/4" Rod End Parts',
            "1 14 Rod End Parts",
            "Rod & Pinion",
            "1-1-4 Bolt",
            "Ball Joint",
            "Ball Joints",
        ]
        first = build_subcategory_pattern(slug)
        second = build_subcategory_pattern(slug)
        assert first.pattern == second.pattern
        assert [matches(first, label) for label in labels] == [
            matches(second, label) for label in labels
        ]


class TestCategoryPattern:
    """Category slugs have no number handling."""

    def test_words_and_ampersand(self) -> None:
        pattern = build_category_pattern("tools-and-hardware")
        assert matches(pattern, "Tools & Hardware")
        assert matches(pattern, "tools and hardware")
        assert not matches(pattern, "Tools & Hardware Sale")

    def test_digits_are_literal(self) -> None:
        """``1-14`` is not read as a fraction."""
        pattern = build_category_pattern("1-14-fittings")
        assert matches(pattern, "1 14 Fittings")
        assert matches(pattern, "1/14 Fittings")
        assert not matches(pattern, "1 1/4 Fittings")

    def test_case_insensitive(self) -> None:
        assert matches(build_category_pattern("hardware"), "HARDWARE")

    def test_compiled_with_ignorecase(self) -> None:
        assert build_category_pattern("hardware").flags & re.IGNORECASE


def slugify(label: str) -> str:
    """Slugify a catalog label the way storefront links are built."""
    text = re.sub(r"[\"'/]", "", label.lower())
    return re.sub(r"\s+", "-", text.strip())


class TestLabelRoundTrip:
    """A label's own slug matches the label."""

    @pytest.mark.parametrize(
        "label",
        [
            '1 1/4" Rod End Parts',
            "1 14 Rod End Parts",
            "2 1/2 Pipe",
            "1-1-4 Bolt",
            "Rod & Pinion",
            "Nuts & Bolts",
            "Tools and Hardware",
            "C-Clamps",
            "Size 10 Bolts",
            "Ball Joint",
        ],
    )
    def test_slug_matches_source_label(self, label: str) -> None:
        pattern = build_subcategory_pattern(slugify(label))
        assert matches(pattern, label)

    def test_slugify(self) -> None:
        assert slugify('1 1/4" Rod End Parts') == "1-14-rod-end-parts"
        assert slugify("Rod & Pinion") == "rod-&-pinion"

    def test_hyphenated_fraction_stays_distinct(self) -> None:
        """``1-1/2`` and ``1-12`` share a slug; only the plain pair matches it."""
        pattern = build_subcategory_pattern(slugify("1-1/2 Fittings"))
        assert matches(pattern, "1-12 Fittings")
        assert not matches(pattern, "1-1/2 Fittings")
