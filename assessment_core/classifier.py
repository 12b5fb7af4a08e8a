"""Error classification over an alignment edit script."""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .models import AlignmentBlock, AlignmentOp, ErrorType, RecognitionStatus, RecognizedWord

logger = logging.getLogger(__name__)


def classify_errors(
    blocks: Sequence[AlignmentBlock],
    all_words: Sequence[RecognizedWord],
    reference: Sequence[str],
    status: Optional[RecognitionStatus],
) -> List[RecognizedWord]:
    """Reconcile recognized words against the reference.

    Continuous recognition never reports Insertion or Omission by itself, so
    both are derived here once every recognized word is known.

    Decision rules, per block:
    - INSERT/REPLACE: recognized words in the hyp range are tagged Insertion
    - DELETE/REPLACE: each reference token in the ref range becomes an
      Omission placeholder, unless the range runs to the end of the
      reference and recognition has not reached a terminal status (the
      speaker may simply not have got there yet)
    - EQUAL: recognized words pass through unchanged

    The input records are never modified; re-tagged words are new records.

    Args:
        blocks: Edit script from align_sequences(reference, hypothesis)
        all_words: Accumulated recognized words, indexed by hypothesis position
        reference: Reference tokens
        status: Status of the most recent recognition result (None if unknown)

    Returns:
        Reconciled word list in block order
    """
    terminal = status is not None and status.is_terminal
    reconciled: List[RecognizedWord] = []

    for block in blocks:
        if block.consumes_hypothesis:
            for j in range(block.hyp_start, block.hyp_end):
                reconciled.append(all_words[j].with_error_type(ErrorType.INSERTION))

        if block.consumes_reference:
            if block.ref_end == len(reference) and not terminal:
                logger.debug(
                    "Deferring trailing omission of %d word(s)", block.ref_end - block.ref_start
                )
            else:
                for i in range(block.ref_start, block.ref_end):
                    reconciled.append(RecognizedWord.omission(reference[i]))

        if block.op is AlignmentOp.EQUAL:
            reconciled.extend(all_words[block.hyp_start:block.hyp_end])

    return reconciled
