"""Tokenization of reference and recognized text for alignment."""
from __future__ import annotations

from typing import Iterable, List, Tuple

from ..models import RecognizedWord
from .normalizer import normalize_text


def tokenize_text(text: str) -> List[str]:
    """Normalize text and split it into word tokens.

    Example: "The quick, brown fox!" -> ["the", "quick", "brown", "fox"]

    Args:
        text: Arbitrary text

    Returns:
        Ordered list of non-empty tokens. Splitting is on single spaces;
        each piece is trimmed before empties are dropped, which keeps the
        operation idempotent.
    """
    tokens = []
    for piece in normalize_text(text).split(" "):
        piece = piece.strip()
        if piece:
            tokens.append(piece)
    return tokens


def tokenize_reference(text: str) -> Tuple[str, ...]:
    """Immutable reference word sequence for one session."""
    return tuple(tokenize_text(text))


def tokenize_recognized(words: Iterable[RecognizedWord]) -> List[str]:
    """Hypothesis tokens, exactly one per recognized word.

    A word that normalizes to nothing (e.g. a stray "-") yields an empty
    token rather than being dropped, so hypothesis index ``j`` always refers
    to the ``j``-th accumulated word.
    """
    return [normalize_text(w.text).strip() for w in words]
