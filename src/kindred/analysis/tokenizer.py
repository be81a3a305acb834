"""
Tokenizers for Kindred.

A tokenizer turns a field's raw text into a lazy, finite, non-restartable
stream of terms. Term extraction is word based (regex), the same analysis
used when the reference index was built.
"""

import re
from typing import FrozenSet, Iterator, Optional, Protocol

from kindred.analysis.normalizer import normalize_text

ENGLISH_STOP_WORDS: FrozenSet[str] = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "if",
        "in", "into", "is", "it", "no", "not", "of", "on", "or", "such",
        "that", "the", "their", "then", "there", "these", "they", "this",
        "to", "was", "will", "with",
    }
)

_WORD = re.compile(r"\w+")


class Tokenizer(Protocol):
    """Analyzer capability consumed by the term frequency collector."""

    def token_stream(self, field_name: str, text: str) -> Iterator[str]:
        ...


class WordTokenizer:
    """
    Word-based tokenizer.

    Uses NFKC normalization, lowercase normalization, regex word splits and
    optional stop word removal.
    """

    def __init__(self, stop_words: Optional[FrozenSet[str]] = None, lowercase: bool = True):
        """
        Initialize tokenizer.

        Args:
            stop_words: Words removed during analysis (None keeps every word)
            lowercase: Whether to lowercase terms
        """
        self.stop_words = stop_words
        self.lowercase = lowercase

    def token_stream(self, field_name: str, text: str) -> Iterator[str]:
        """
        Lazily yield the terms of ``text``.

        Args:
            field_name: Field being analyzed (unused, same analysis for every field)
            text: Raw field text

        Yields:
            Terms in document order
        """
        normalized = normalize_text(text)
        if self.lowercase:
            normalized = normalized.lower()
        for match in _WORD.finditer(normalized):
            token = match.group(0)
            if self.stop_words is not None and token in self.stop_words:
                continue
            yield token


class PassThroughTokenizer:
    """Skip-analysis mode: the whole text is one opaque term."""

    def token_stream(self, field_name: str, text: str) -> Iterator[str]:
        if text:
            yield text


PASS_THROUGH = PassThroughTokenizer()
