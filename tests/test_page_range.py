"""
Unit tests for page range parsing.
"""

import pytest

from modules.page_range import parse_page_range


class TestParsePageRange:
    """Ranges, single pages, clamping and deduplication."""

    def test_mixed_ranges_and_pages(self):
        """Documented example: "1-5, 8, 10-12" over 12 pages."""
        selection = parse_page_range("1-5, 8, 10-12", 12)

        assert selection.count == 9
        assert selection.pages == frozenset({1, 2, 3, 4, 5, 8, 10, 11, 12})
        assert selection.fell_back is False
        assert selection.skipped_tokens == ()

    def test_whitespace_is_ignored(self):
        selection = parse_page_range("  1 - 3 ,7  ", 10)
        assert selection.pages == frozenset({1, 2, 3, 7})

    def test_duplicates_counted_once(self):
        selection = parse_page_range("1-3, 2-4, 3", 10)
        assert selection.count == 4
        assert selection.pages == frozenset({1, 2, 3, 4})

    def test_all_keyword(self):
        selection = parse_page_range("ALL", 5)
        assert selection.count == 5
        assert selection.fell_back is False

    def test_single_page_document(self):
        selection = parse_page_range("1", 1)
        assert selection.count == 1
        assert selection.pages == frozenset({1})


class TestClamping:
    """Out-of-bounds values are pulled into the document."""

    def test_range_end_past_last_page(self):
        selection = parse_page_range("8-20", 10)
        assert selection.pages == frozenset({8, 9, 10})

    def test_page_zero_becomes_first_page(self):
        selection = parse_page_range("0-3", 10)
        assert selection.pages == frozenset({1, 2, 3})

    def test_single_page_past_end(self):
        selection = parse_page_range("25", 10)
        assert selection.pages == frozenset({10})


class TestInvalidTokens:
    """Bad tokens are skipped; nothing usable means all pages."""

    def test_reversed_range_skipped_alone(self):
        selection = parse_page_range("5-3, 2", 10)

        assert selection.pages == frozenset({2})
        assert selection.skipped_tokens == ("5-3",)
        assert selection.fell_back is False

    def test_garbage_token_skipped_alone(self):
        selection = parse_page_range("1-2, abc", 10)
        assert selection.pages == frozenset({1, 2})
        assert selection.skipped_tokens == ("abc",)

    def test_empty_string_falls_back_to_all(self):
        """Documented example: "" over 7 pages selects pages 1..7."""
        selection = parse_page_range("", 7)

        assert selection.count == 7
        assert selection.pages == frozenset(range(1, 8))
        assert selection.fell_back is True

    def test_none_falls_back_to_all(self):
        selection = parse_page_range(None, 3)
        assert selection.count == 3
        assert selection.fell_back is True

    def test_nothing_parsable_falls_back_to_all(self):
        selection = parse_page_range("abc, x-y, 9-2", 4)

        assert selection.count == 4
        assert selection.fell_back is True
        assert selection.skipped_tokens == ("abc", "x-y", "9-2")

    def test_empty_tokens_are_not_reported(self):
        selection = parse_page_range("1,,3,", 5)
        assert selection.pages == frozenset({1, 3})
        assert selection.skipped_tokens == ()

    @pytest.mark.parametrize("total_pages", [0, -1, None])
    def test_no_pages_in_document(self, total_pages):
        selection = parse_page_range("1-3", total_pages)
        assert selection.count == 0
        assert selection.pages == frozenset()


class TestMergedRanges:
    """Selections are kept as merged intervals."""

    def test_overlapping_and_adjacent_ranges_merge(self):
        selection = parse_page_range("7, 1-3, 2-5, 8", 10)

        assert selection.ranges == ((1, 5), (7, 8))
        assert selection.count == 7

    def test_all_is_one_interval(self):
        assert parse_page_range("all", 6).ranges == ((1, 6),)

    def test_to_dict(self):
        data = parse_page_range("1-2, 4", 5).to_dict()

        assert data["ranges"] == [[1, 2], [4, 4]]
        assert data["pages"] == [1, 2, 4]
        assert data["count"] == 3


class TestUntrustedInput:
    """Page counts and range text come from the client."""

    def test_huge_document_single_page(self):
        selection = parse_page_range("1", 10 ** 9)

        assert selection.count == 1
        assert selection.ranges == ((1, 1),)

    def test_huge_document_all_pages(self):
        selection = parse_page_range("all", 10 ** 12)

        assert selection.count == 10 ** 12
        assert selection.ranges == ((1, 10 ** 12),)

    def test_huge_document_fallback(self):
        selection = parse_page_range("nonsense", 10 ** 12)

        assert selection.fell_back is True
        assert selection.count == 10 ** 12

    def test_overlong_digit_token_is_skipped(self):
        token = "1" * 5000
        selection = parse_page_range(token, 10)

        assert selection.fell_back is True
        assert selection.count == 10
        assert selection.skipped_tokens == (token,)

    def test_ten_digit_page_number_is_skipped(self):
        selection = parse_page_range("2, 12345678901", 10)

        assert selection.pages == frozenset({2})
        assert selection.skipped_tokens == ("12345678901",)

    def test_nine_digit_page_number_is_clamped(self):
        assert parse_page_range("999999999", 10).pages == frozenset({10})
