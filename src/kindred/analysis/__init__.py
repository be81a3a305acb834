"""
Analysis layer: text normalization and tokenizers.
"""

from kindred.analysis.normalizer import normalize_text
from kindred.analysis.tokenizer import (
    ENGLISH_STOP_WORDS,
    PASS_THROUGH,
    PassThroughTokenizer,
    Tokenizer,
    WordTokenizer,
)

__all__ = [
    "normalize_text",
    "ENGLISH_STOP_WORDS",
    "PASS_THROUGH",
    "PassThroughTokenizer",
    "Tokenizer",
    "WordTokenizer",
]
