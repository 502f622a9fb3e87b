"""Unit tests for fixation anchor placement.

WHY: The anchor is drawn on a fixed screen column. If it lands on
punctuation, or the three parts do not rebuild the token, the reader
sees a jumping or corrupted word.

HOW: Tests are organized by concern:
  - TestCentreRule: odd and even core lengths
  - TestSurroundingPunctuation: punctuation never holds the anchor
  - TestDegenerateTokens: empty, all-punctuation, single characters
  - TestReconstruction: before + anchor + after == token for any token
  - TestOrpIndex: the length lookup table

RULES:
- split_at_anchor is pure; tests compare FixationSplit tuples
"""

from __future__ import annotations

import pytest

from rsvp_reader.core.orp import FixationSplit, extract_core, orp_index, split_at_anchor
from rsvp_reader.core.tokenizer import tokenize


# ---------------------------------------------------------------------------
# TestCentreRule
# ---------------------------------------------------------------------------


class TestCentreRule:
    """Odd cores anchor one middle letter, even cores the middle pair."""

    def test_odd_length(self):
        assert split_at_anchor("cat").as_tuple() == ("c", "a", "t")

    def test_even_length(self):
        assert split_at_anchor("word").as_tuple() == ("w", "or", "d")

    def test_two_letters(self):
        assert split_at_anchor("in").as_tuple() == ("", "in", "")

    def test_long_even_word(self):
        # 20 letters: anchor is core[9:11]
        split = split_at_anchor("internationalization")
        assert split.as_tuple() == ("internati", "on", "alization")

    def test_digits_count_as_core(self):
        assert split_at_anchor("2024").as_tuple() == ("2", "02", "4")

    def test_non_latin_letters(self):
        assert split_at_anchor("привет").as_tuple() == ("пр", "ив", "ет")


# ---------------------------------------------------------------------------
# TestSurroundingPunctuation
# ---------------------------------------------------------------------------


class TestSurroundingPunctuation:
    """Leading and trailing punctuation attaches to the outer parts."""

    def test_bracketed_word(self):
        assert split_at_anchor("(wow)").as_tuple() == ("(w", "o", "w)")

    def test_trailing_punctuation(self):
        assert split_at_anchor("end.").as_tuple() == ("e", "n", "d.")

    def test_quoted_even_word(self):
        assert split_at_anchor('"test"').as_tuple() == ('"t', "es", 't"')

    def test_inner_punctuation_stays_in_core(self):
        assert extract_core("(don't)") == ("(", "don't", ")")
        assert split_at_anchor("(don't)").anchor == "n"


# ---------------------------------------------------------------------------
# TestDegenerateTokens
# ---------------------------------------------------------------------------


class TestDegenerateTokens:
    """Tokens without a letter core, and trivial tokens."""

    def test_empty_token(self):
        assert split_at_anchor("") == FixationSplit("", "", "")

    def test_non_string_token(self):
        assert split_at_anchor(None) == FixationSplit("", "", "")

    @pytest.mark.parametrize("token", [".", "?!", "),", "—", "…"])
    def test_all_punctuation_has_no_anchor(self, token):
        assert split_at_anchor(token) == FixationSplit(token, "", "")

    def test_single_letter(self):
        assert split_at_anchor("a").as_tuple() == ("", "a", "")

    def test_extract_core_all_punctuation(self):
        assert extract_core("?!") == ("?!", "", "")


# ---------------------------------------------------------------------------
# TestReconstruction
# ---------------------------------------------------------------------------


class TestReconstruction:
    """The three parts always concatenate back to the token."""

    @pytest.mark.parametrize(
        "token",
        ["cat", "word", "(wow)", "'quoted'", "...", "x", "über", "日本語", "a-b", "42%"],
    )
    def test_parts_rebuild_token(self, token):
        split = split_at_anchor(token)
        assert split.before + split.anchor + split.after == token
        assert split.token == token

    def test_every_sample_token_rebuilds(self, sample_text):
        for token in tokenize(sample_text):
            assert split_at_anchor(token).token == token

    def test_anchor_is_never_punctuation(self, sample_text):
        for token in tokenize(sample_text):
            assert all(ch.isalnum() for ch in split_at_anchor(token).anchor)

    def test_split_is_immutable(self):
        split = split_at_anchor("cat")
        with pytest.raises(AttributeError):
            split.anchor = "x"


# ---------------------------------------------------------------------------
# TestOrpIndex
# ---------------------------------------------------------------------------


class TestOrpIndex:
    """Length-bucket lookup table over the token core."""

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("", 0),
            ("a", 0),
            ("at", 1),
            ("house", 1),
            ("houses", 2),
            ("beautiful", 2),
            ("incredible", 3),
            ("extraordinary", 3),
            ("characteristics", 4),
        ],
    )
    def test_table(self, token, expected):
        assert orp_index(token) == expected

    def test_punctuation_is_ignored(self):
        assert orp_index("(houses).") == orp_index("houses")
