"""Data model for one run of an edit script between reference and hypothesis."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AlignmentOp(str, Enum):
    EQUAL = "equal"
    REPLACE = "replace"
    DELETE = "delete"
    INSERT = "insert"


@dataclass(frozen=True)
class AlignmentBlock:
    """Represents a contiguous run of one edit operation.

    Ranges are half-open: ``ref[ref_start:ref_end]`` relates to
    ``hyp[hyp_start:hyp_end]``.

    Attributes:
        op: Operation type - "equal", "replace", "delete" or "insert"
        ref_start: First reference index covered
        ref_end: One past the last reference index covered
        hyp_start: First hypothesis index covered
        hyp_end: One past the last hypothesis index covered
    """
    op: AlignmentOp
    ref_start: int
    ref_end: int
    hyp_start: int
    hyp_end: int

    @property
    def consumes_reference(self) -> bool:
        return self.op in (AlignmentOp.DELETE, AlignmentOp.REPLACE)

    @property
    def consumes_hypothesis(self) -> bool:
        return self.op in (AlignmentOp.INSERT, AlignmentOp.REPLACE)
