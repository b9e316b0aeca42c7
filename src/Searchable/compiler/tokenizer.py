"""Search string tokenizer.

Normalization rules
- Surrounding whitespace is removed and the string is lowercased.
- If stripping every non-alphanumeric character leaves only digits, the digit
  string is the whole search (phone numbers typed with punctuation).
- Otherwise a double-quoted run is one token (a phrase) and every other
  whitespace-delimited run is one token.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from Searchable.core.spec import DEFAULT_MAX_WORDS

_RE_NON_ALNUM = re.compile(r"[\W_]")
_RE_DIGITS = re.compile(r"[0-9]+")
_RE_TOKEN = re.compile(r'"((?:\\.|[^\\"])*)"|(\S+)')


@dataclass(frozen=True, slots=True)
class TokenSet:
    """Tokens of one search.

    Attributes:
        words: Tokens in order of appearance.
        ordered_words: The same tokens, longest first.
    """

    words: tuple[str, ...]
    ordered_words: tuple[str, ...]

    @property
    def phrase(self) -> str:
        return " ".join(self.words)

    def __len__(self) -> int:
        return len(self.words)


def normalize_search(search: str | None) -> str:
    """Trim and lowercase the search, collapsing phone-like input to digits."""
    normalized = (search or "").strip().lower()
    alphanumeric = _RE_NON_ALNUM.sub("", normalized)
    if _RE_DIGITS.fullmatch(alphanumeric):
        return alphanumeric
    return normalized


def tokenize(search: str | None, *, max_words: int = DEFAULT_MAX_WORDS) -> TokenSet | None:
    """Split a raw search string into tokens.

    Args:
        search: Raw user input.
        max_words: Maximum number of tokens kept.

    Returns:
        Token set, or None when the normalized search is empty.
    """
    normalized = normalize_search(search)
    if not normalized:
        return None

    words: list[str] = []
    for match in _RE_TOKEN.finditer(normalized):
        phrase, word = match.group(1), match.group(2)
        token = phrase if phrase is not None else word
        if token:
            words.append(token)

    words = words[:max_words]
    if not words:
        return None
    ordered = sorted(words, key=len, reverse=True)
    return TokenSet(words=tuple(words), ordered_words=tuple(ordered))
