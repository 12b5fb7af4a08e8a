"""Final output of an assessment session."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .segment import RecognitionStatus
from .word import RecognizedWord


@dataclass(frozen=True)
class ScoreSet:
    accuracy_score: float
    completeness_score: float
    fluency_score: float
    prosody_score: float
    pronunciation_score: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "AccuracyScore": self.accuracy_score,
            "CompletenessScore": self.completeness_score,
            "FluencyScore": self.fluency_score,
            "PronScore": self.pronunciation_score,
            "ProsodyScore": self.prosody_score,
        }


@dataclass(frozen=True)
class AssessmentResult:
    """Scores plus the reconciled word list.

    ``recognition_error`` holds the status of the last segment that did not
    succeed, or None when every segment succeeded.
    """
    scores: ScoreSet
    words: Tuple[RecognizedWord, ...]
    recognition_error: Optional[RecognitionStatus] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "Scores": self.scores.to_dict(),
            "Words": [w.to_dict() for w in self.words],
            "Error": self.recognition_error.value if self.recognition_error else None,
        }
