"""Text normalization for alignment."""
from __future__ import annotations

import re

# Characters removed before splitting. Apostrophes and backslashes survive,
# so "don't" stays a single token.
STRIP_CHARACTERS = '!"#$%&()*+,-./:;<=>?@[^_`{|}~]'

_STRIP_RE = re.compile("[" + re.escape(STRIP_CHARACTERS) + "]+")


def normalize_text(text: str) -> str:
    """Lowercase text and delete punctuation.

    Args:
        text: Raw reference transcript or recognized text

    Returns:
        Lowercased text with every character of STRIP_CHARACTERS removed.
        Whitespace is left in place for the tokenizer.
    """
    if not text:
        return ""
    return _STRIP_RE.sub("", text.lower())
