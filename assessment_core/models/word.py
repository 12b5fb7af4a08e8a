"""Word-level recognition record."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict


class ErrorType(str, Enum):
    """Per-word error tag. Values match the engine's wire strings."""

    NONE = "None"
    INSERTION = "Insertion"
    OMISSION = "Omission"
    # Emitted by the engine, carried through untouched
    MISPRONUNCIATION = "Mispronunciation"
    UNEXPECTED_BREAK = "UnexpectedBreak"
    MISSING_BREAK = "MissingBreak"
    MONOTONE = "Monotone"


@dataclass(frozen=True)
class RecognizedWord:
    """A single recognized word (or an omission placeholder).

    Attributes:
        text: Word as returned by the engine (or the reference token for placeholders)
        accuracy_score: Engine accuracy score, 0-100
        error_type: Error tag
        duration_ticks: Spoken duration in 100ns ticks
        offset_ticks: Start offset in 100ns ticks
    """
    text: str
    accuracy_score: float = 0.0
    error_type: ErrorType = ErrorType.NONE
    duration_ticks: int = 0
    offset_ticks: int = 0

    @classmethod
    def omission(cls, token: str) -> "RecognizedWord":
        """Placeholder for a reference word that was never spoken."""
        return cls(text=token, error_type=ErrorType.OMISSION)

    def with_error_type(self, error_type: ErrorType) -> "RecognizedWord":
        if error_type is self.error_type:
            return self
        return replace(self, error_type=error_type)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize in the engine's word layout."""
        out: Dict[str, Any] = {
            "Word": self.text,
            "PronunciationAssessment": {"ErrorType": self.error_type.value},
        }
        if self.error_type is not ErrorType.OMISSION:
            out["Offset"] = self.offset_ticks
            out["Duration"] = self.duration_ticks
            out["PronunciationAssessment"]["AccuracyScore"] = self.accuracy_score
        return out
