"""Reconciliation and scoring core for continuous pronunciation assessment."""
from .accumulator import SegmentAccumulator
from .errors import (
    AccumulatorFinalizedError,
    AssessmentError,
    EngineFailure,
    RecognitionCanceled,
    ValidationError,
)
from .models import AssessmentResult, ErrorType, RecognitionStatus, RecognizedWord, ScoreSet, Segment

__all__ = [
    "SegmentAccumulator",
    "AssessmentError",
    "AccumulatorFinalizedError",
    "EngineFailure",
    "RecognitionCanceled",
    "ValidationError",
    "AssessmentResult",
    "ErrorType",
    "RecognitionStatus",
    "RecognizedWord",
    "ScoreSet",
    "Segment",
]
