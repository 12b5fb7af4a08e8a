"""Builders for recognition records and engine payloads used across tests."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from assessment_core.models import ErrorType, RecognitionStatus, RecognizedWord, Segment

TICKS = 10


def words(texts: Sequence[str], accuracy: float = 100.0, error_type: ErrorType = ErrorType.NONE) -> List[RecognizedWord]:
    return [
        RecognizedWord(
            text=t,
            accuracy_score=accuracy,
            error_type=error_type,
            duration_ticks=TICKS,
            offset_ticks=i * TICKS,
        )
        for i, t in enumerate(texts)
    ]


def segment(
    texts: Sequence[str],
    fluency: float = 100.0,
    prosody: float = 100.0,
    status: RecognitionStatus = RecognitionStatus.SUCCESS,
    accuracy: float = 100.0,
    total_duration: Optional[int] = None,
) -> Segment:
    return Segment(
        words=tuple(words(texts, accuracy)),
        fluency_score=fluency,
        prosody_score=prosody,
        recognition_status=status,
        total_duration=-1 if total_duration is None else total_duration,
    )


def payload(
    texts: Sequence[str],
    fluency: float = 100.0,
    prosody: float = 100.0,
    status: str = "Success",
    accuracy: float = 100.0,
) -> Dict[str, Any]:
    """Engine JSON result in the SpeechServiceResponse_JsonResult layout."""
    return {
        "RecognitionStatus": status,
        "Offset": 0,
        "Duration": len(texts) * TICKS,
        "DisplayText": " ".join(texts),
        "NBest": [
            {
                "Confidence": 0.9,
                "Lexical": " ".join(texts),
                "PronunciationAssessment": {
                    "AccuracyScore": accuracy,
                    "FluencyScore": fluency,
                    "ProsodyScore": prosody,
                    "CompletenessScore": 100.0,
                    "PronScore": 90.0,
                },
                "Words": [
                    {
                        "Word": t,
                        "Offset": i * TICKS,
                        "Duration": TICKS,
                        "PronunciationAssessment": {"AccuracyScore": accuracy, "ErrorType": "None"},
                    }
                    for i, t in enumerate(texts)
                ],
            }
        ],
    }
