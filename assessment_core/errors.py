"""Typed failures raised by the assessment core."""
from __future__ import annotations

from typing import Optional


class AssessmentError(Exception):
    """Base class for every failure the core reports to its caller."""


class ValidationError(AssessmentError):
    """Input cannot be scored (empty reference, no segments, nothing to average)."""


class RecognitionCanceled(AssessmentError):
    """The recognition engine reported a fatal cancellation."""

    def __init__(self, details: Optional[str] = None):
        self.details = details
        message = "Recognition canceled"
        if details:
            message = f"{message}: {details}"
        super().__init__(message)


class EngineFailure(AssessmentError):
    """A segment payload from the engine is malformed or missing fields."""


class AccumulatorFinalizedError(AssessmentError, RuntimeError):
    """An accumulator operation was attempted after finalization."""


class ConfigurationError(AssessmentError):
    """Required engine settings are missing."""
