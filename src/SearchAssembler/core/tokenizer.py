"""Autocomplete tokenizer.

The search index only matches whole tokens. To support "starts with" and
"contains" lookups the text of a field is expanded at indexing time into every
substring of each word that is at least ``min_size`` characters long.

Word boundaries
- Word characters are ASCII letters, ASCII digits and the apostrophe.
- Any run of other characters is a single separator; no empty words.

Expansion of one word of length ``n``
- ``n <= min_size``: the word itself.
- otherwise: ``word[i:i + length]`` for ``i`` in ``0..n-min_size`` and
  ``length`` in ``min_size..n-i``, ordered by offset then length.
"""

from __future__ import annotations

import re
from typing import Iterator

from SearchAssembler.core.errors import InvalidArgumentError
from SearchAssembler.utils.log import log


DEFAULT_MIN_SIZE = 1

_RE_WORD_SEPARATOR = re.compile(r"[^0-9a-zA-Z']+")


def split_text_to_words(text: str) -> list[str]:
    """Split a text into words.

    Args:
        text: Text to split.

    Returns:
        Words in order of appearance.
    """
    return [word for word in _RE_WORD_SEPARATOR.split(text) if word]


def _check_min_size(min_size: int) -> None:
    if min_size <= 0:
        raise InvalidArgumentError(f"min_size has to be higher than 0, got {min_size}")


def iter_autocomplete_tokens(text: str, min_size: int = DEFAULT_MIN_SIZE) -> Iterator[str]:
    """Yield autocomplete tokens for ``text``.

    Args:
        text: Text to tokenize.
        min_size: Minimum token length. Shorter words are still yielded whole.

    Yields:
        Tokens in emission order.

    Raises:
        InvalidArgumentError: If ``min_size`` is lower than 1.
    """
    _check_min_size(min_size)
    return _iter_tokens(text, min_size)


def _iter_tokens(text: str, min_size: int) -> Iterator[str]:
    for word in split_text_to_words(text):
        n = len(word)
        if n <= min_size:
            yield word
            continue
        for start in range(n - min_size + 1):
            for length in range(min_size, n - start + 1):
                yield word[start : start + length]


def tokenize_autocomplete(text: str, min_size: int = DEFAULT_MIN_SIZE) -> str:
    """Split words into substrings so they can be auto-completed.

    Every token is followed by a single space, so non-empty output always ends
    with a trailing space.

    Args:
        text: Text to tokenize.
        min_size: Minimum token length. Words of this length or shorter are
            added whole.

    Returns:
        Space-joined tokens with a trailing space.

    Raises:
        InvalidArgumentError: If ``min_size`` is lower than 1.
    """
    tokens = list(iter_autocomplete_tokens(text, min_size))
    log.debug("Tokenized %d chars into %d tokens (min_size=%d)", len(text), len(tokens), min_size)
    return "".join(f"{token} " for token in tokens)


def count_autocomplete_tokens(word_length: int, min_size: int = DEFAULT_MIN_SIZE) -> int:
    """Return how many tokens one word of ``word_length`` characters yields.

    Args:
        word_length: Length of the word.
        min_size: Minimum token length.

    Returns:
        Token count.

    Raises:
        InvalidArgumentError: If ``min_size`` is lower than 1.
    """
    _check_min_size(min_size)
    if word_length <= 0:
        return 0
    if word_length <= min_size:
        return 1
    span = word_length - min_size + 1
    return span * (span + 1) // 2
