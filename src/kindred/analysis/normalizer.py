"""
Text normalization for Kindred analysis.

Normalizes text using Unicode NFKC before tokenization so that stored text
and entity text produce the same terms.
"""

import re
import unicodedata

_HORIZONTAL_WS = re.compile(r"[ \t]+")


def normalize_text(text: str) -> str:
    """
    Normalize text for consistent term extraction.

    - Unicode normalization (NFKC)
    - Whitespace normalization (collapse spaces/tabs, unify newlines)

    Args:
        text: Raw text to normalize

    Returns:
        Normalized text
    """
    normalized = unicodedata.normalize("NFKC", text)
    normalized = _HORIZONTAL_WS.sub(" ", normalized)
    normalized = normalized.replace("\r\n", "\n").replace("\r", "\n")
    return normalized.strip()
