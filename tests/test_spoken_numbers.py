"""
Tests for spoken house-number decoding.
"""

import pytest

from src.intake.spoken_numbers import (
    decode_number_words,
    normalize_leading_number,
    split_number_words,
)


class TestDecodeNumberWords:
    @pytest.mark.parametrize(
        "words, expected",
        [
            (["eleven", "twenty", "two"], 1122),
            (["five", "four", "eight", "four"], 5484),
            (["treinta", "y", "cinco"], 35),
            (["nine", "oh", "five"], 905),
            (["fifty", "four", "eighty", "four"], 5484),
            (["twelve", "oh", "five"], 1205),
            (["one", "hundred", "twenty", "two"], 122),
            (["dos", "mil"], 2000),
            (["mil", "doscientos"], 1200),
            (["Twenty", "Two"], 22),
        ],
    )
    def test_decodes(self, words, expected):
        assert decode_number_words(words) == expected

    def test_digit_mode_keeps_leading_zero_position(self):
        assert decode_number_words(["one", "oh", "one"]) == 101

    def test_empty_sequence(self):
        assert decode_number_words([]) is None

    def test_unknown_word(self):
        assert decode_number_words(["twenty", "banana"]) is None


class TestSplitNumberWords:
    def test_splits_hyphens_and_commas(self):
        assert split_number_words("twenty-two, y cinco") == ["twenty", "two", "y", "cinco"]


class TestNormalizeLeadingNumber:
    def test_replaces_leading_run(self):
        assert normalize_leading_number("eleven twenty two Main Street") == "1122 Main Street"

    def test_spanish_run(self):
        assert normalize_leading_number("treinta y cinco Calle Hidalgo") == "35 Calle Hidalgo"

    def test_digits_untouched(self):
        assert normalize_leading_number("123 Oak Ave") == "123 Oak Ave"

    def test_no_leading_run(self):
        assert normalize_leading_number("Main Street") == "Main Street"
        assert normalize_leading_number("  Main Street ") == "Main Street"

    def test_word_prefix_is_not_a_number(self):
        assert normalize_leading_number("Oneida Street") == "Oneida Street"

    def test_empty(self):
        assert normalize_leading_number("") == ""
