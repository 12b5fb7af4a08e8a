"""Alignment utilities for matching reference text to recognized words."""
from .aligner import align_sequences
from .normalizer import normalize_text
from .tokenizer import tokenize_recognized, tokenize_reference, tokenize_text

__all__ = [
    "align_sequences",
    "normalize_text",
    "tokenize_recognized",
    "tokenize_reference",
    "tokenize_text",
]
