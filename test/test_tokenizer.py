"""Tests for search string tokenization."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from Searchable.compiler.tokenizer import normalize_search, tokenize


class TestNormalizeSearch(unittest.TestCase):
    def test_trims_and_lowercases(self) -> None:
        self.assertEqual(normalize_search("  Hello World "), "hello world")

    def test_phone_number_collapses_to_digits(self) -> None:
        self.assertEqual(normalize_search("(555) 123-4567"), "5551234567")

    def test_underscore_counts_as_punctuation(self) -> None:
        self.assertEqual(normalize_search("12_34"), "1234")

    def test_mixed_input_is_not_a_phone_number(self) -> None:
        self.assertEqual(normalize_search("foo_bar 12"), "foo_bar 12")

    def test_none_is_empty(self) -> None:
        self.assertEqual(normalize_search(None), "")


class TestTokenize(unittest.TestCase):
    def test_whitespace_split(self) -> None:
        tokens = tokenize("  Hello   World ")
        assert tokens is not None
        self.assertEqual(tokens.words, ("hello", "world"))
        self.assertEqual(tokens.phrase, "hello world")

    def test_quoted_phrase_is_one_token(self) -> None:
        tokens = tokenize('"John Smith" jr')
        assert tokens is not None
        self.assertEqual(tokens.words, ("john smith", "jr"))

    def test_phone_number_is_single_token(self) -> None:
        tokens = tokenize("+1 (555) 123-4567")
        assert tokens is not None
        self.assertEqual(tokens.words, ("15551234567",))

    def test_truncates_to_max_words(self) -> None:
        tokens = tokenize("a b c d e f g", max_words=3)
        assert tokens is not None
        self.assertEqual(tokens.words, ("a", "b", "c"))
        self.assertEqual(len(tokens), 3)

    def test_ordered_words_longest_first_and_stable(self) -> None:
        tokens = tokenize("ab abcd xy abc")
        assert tokens is not None
        self.assertEqual(tokens.ordered_words, ("abcd", "abc", "ab", "xy"))
        self.assertEqual(tokens.words, ("ab", "abcd", "xy", "abc"))

    def test_ordered_words_use_truncated_set(self) -> None:
        tokens = tokenize("a bb ccc dddd", max_words=2)
        assert tokens is not None
        self.assertEqual(tokens.ordered_words, ("bb", "a"))

    def test_empty_and_whitespace_are_noop(self) -> None:
        self.assertIsNone(tokenize(""))
        self.assertIsNone(tokenize("   \t "))
        self.assertIsNone(tokenize(None))

    def test_empty_quotes_yield_no_tokens(self) -> None:
        self.assertIsNone(tokenize('""'))


if __name__ == "__main__":
    unittest.main()
