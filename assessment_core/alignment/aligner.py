"""Edit-script alignment between reference and hypothesis token sequences."""
from __future__ import annotations

import difflib
from typing import List, Sequence

from ..models import AlignmentBlock, AlignmentOp


def align_sequences(ref: Sequence[str], hyp: Sequence[str]) -> List[AlignmentBlock]:
    """Longest-matching-block diff returning an ordered edit script.

    Matching blocks become "equal"; the gaps between them become "replace"
    when they span both sequences, "delete" when they only consume the
    reference, "insert" when they only consume the hypothesis.

      equal   -> spoken as expected
      delete  -> expected but not spoken
      insert  -> spoken but not expected

    The blocks partition both sequences: concatenating their ref ranges
    rebuilds ``ref`` and their hyp ranges rebuilds ``hyp``.

    Args:
        ref: Reference sequence (normalized tokens)
        hyp: Hypothesis sequence (normalized recognized tokens)

    Returns:
        List of AlignmentBlock in sequence order. Empty when both inputs are empty.
    """
    # autojunk would start ignoring frequent words ("the", "a") once the
    # hypothesis reaches 200 tokens
    matcher = difflib.SequenceMatcher(None, list(ref), list(hyp), autojunk=False)
    return [
        AlignmentBlock(AlignmentOp(tag), i1, i2, j1, j2)
        for tag, i1, i2, j1, j2 in matcher.get_opcodes()
    ]
