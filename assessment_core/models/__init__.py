"""Data model shared by the alignment, classification and scoring stages."""
from .alignment_block import AlignmentBlock, AlignmentOp
from .result import AssessmentResult, ScoreSet
from .segment import RecognitionStatus, Segment
from .word import ErrorType, RecognizedWord

__all__ = [
    "AlignmentBlock",
    "AlignmentOp",
    "AssessmentResult",
    "ScoreSet",
    "RecognitionStatus",
    "Segment",
    "ErrorType",
    "RecognizedWord",
]
