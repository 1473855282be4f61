"""Tests for the autocomplete tokenizer."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from SearchAssembler.core.errors import InvalidArgumentError
from SearchAssembler.core.tokenizer import (
    count_autocomplete_tokens,
    iter_autocomplete_tokens,
    split_text_to_words,
    tokenize_autocomplete,
)


class TestSplitTextToWords(unittest.TestCase):
    def test_splits_on_whitespace_and_punctuation(self) -> None:
        self.assertEqual(split_text_to_words("Hello, world! foo-bar"), ["Hello", "world", "foo", "bar"])

    def test_apostrophe_is_part_of_word(self) -> None:
        self.assertEqual(split_text_to_words("don't stop"), ["don't", "stop"])

    def test_separator_runs_collapse_without_empty_words(self) -> None:
        self.assertEqual(split_text_to_words("  ..a,,  b;; "), ["a", "b"])

    def test_non_ascii_letters_are_separators(self) -> None:
        self.assertEqual(split_text_to_words("café42"), ["caf", "42"])

    def test_empty_text(self) -> None:
        self.assertEqual(split_text_to_words(""), [])


class TestTokenizeAutocomplete(unittest.TestCase):
    def test_short_words_are_kept_whole(self) -> None:
        self.assertEqual(tokenize_autocomplete("cat dog", 3), "cat dog ")

    def test_long_word_expands_to_all_substrings(self) -> None:
        self.assertEqual(tokenize_autocomplete("tests", 3), "tes test tests est ests sts ")

    def test_min_size_one(self) -> None:
        self.assertEqual(tokenize_autocomplete("abc", 1), "a ab abc b bc c ")

    def test_default_min_size_is_one(self) -> None:
        self.assertEqual(tokenize_autocomplete("ab"), "a ab b ")

    def test_mixed_short_and_long_words(self) -> None:
        self.assertEqual(tokenize_autocomplete("go home", 2), "go ho hom home om ome me ")

    def test_empty_text_yields_empty_string(self) -> None:
        self.assertEqual(tokenize_autocomplete("", 2), "")
        self.assertEqual(tokenize_autocomplete(" ,; ", 2), "")

    def test_every_token_followed_by_single_space(self) -> None:
        out = tokenize_autocomplete("alpha beta", 2)
        self.assertTrue(out.endswith(" "))
        self.assertNotIn("  ", out)

    def test_invalid_min_size_raises(self) -> None:
        for min_size in (0, -1):
            with self.assertRaises(InvalidArgumentError):
                tokenize_autocomplete("text", min_size)

    def test_invalid_min_size_is_a_value_error(self) -> None:
        with self.assertRaises(ValueError):
            tokenize_autocomplete("text", 0)

    def test_iter_validates_eagerly(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            iter_autocomplete_tokens("text", 0)

    def test_token_count_matches_closed_form(self) -> None:
        for word in ("a", "ab", "tests", "autocomplete"):
            for min_size in (1, 2, 3, 5):
                tokens = list(iter_autocomplete_tokens(word, min_size))
                self.assertEqual(len(tokens), count_autocomplete_tokens(len(word), min_size))
                if len(word) > min_size:
                    expected = sum(len(word) - i - min_size + 1 for i in range(len(word) - min_size + 1))
                    self.assertEqual(len(tokens), expected)
                    self.assertTrue(all(len(t) >= min_size and t in word for t in tokens))
                else:
                    self.assertEqual(tokens, [word])

    def test_count_for_empty_word(self) -> None:
        self.assertEqual(count_autocomplete_tokens(0, 2), 0)


if __name__ == "__main__":
    unittest.main()
