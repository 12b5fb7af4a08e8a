"""Conversion of engine JSON results into Segment records."""
from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Mapping, Optional, Union

from ..errors import EngineFailure
from ..models import ErrorType, RecognitionStatus, RecognizedWord, Segment


def _require(mapping: Mapping[str, Any], key: str, where: str) -> Any:
    if not isinstance(mapping, Mapping) or key not in mapping or mapping[key] is None:
        raise EngineFailure(f"Missing '{key}' in {where}")
    return mapping[key]


def _number(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EngineFailure(f"'{key}' is not numeric: {value!r}")
    try:
        number = float(value)
    except OverflowError:
        raise EngineFailure(f"'{key}' is out of range: {value!r}") from None
    if not math.isfinite(number):
        raise EngineFailure(f"'{key}' is not finite: {value!r}")
    return number


def parse_word(entry: Mapping[str, Any]) -> RecognizedWord:
    """Parse one entry of NBest[0].Words.

    Handles the engine layout:
        {"Word": "...", "Offset": ticks, "Duration": ticks,
         "PronunciationAssessment": {"AccuracyScore": ..., "ErrorType": "None"}}
    """
    text = _require(entry, "Word", "word entry")
    if not isinstance(text, str):
        raise EngineFailure(f"'Word' is not a string: {text!r}")
    assessment = _require(entry, "PronunciationAssessment", f"word '{text}'")
    if not isinstance(assessment, Mapping):
        raise EngineFailure(f"'PronunciationAssessment' is not an object for word '{text}'")

    raw_error = assessment.get("ErrorType", ErrorType.NONE.value)
    try:
        error_type = ErrorType(raw_error)
    except ValueError:
        raise EngineFailure(f"Unknown ErrorType {raw_error!r} for word '{text}'") from None

    return RecognizedWord(
        text=text,
        accuracy_score=_number(assessment.get("AccuracyScore", 0), "AccuracyScore"),
        error_type=error_type,
        duration_ticks=int(_number(entry.get("Duration", 0), "Duration")),
        offset_ticks=int(_number(entry.get("Offset", 0), "Offset")),
    )


def _decode(payload: Union[str, bytes, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(payload, (str, bytes)):
        try:
            return json.loads(payload)
        except ValueError as e:
            raise EngineFailure(f"Result payload is not valid JSON: {e}") from e
    return payload


def _status(payload: Mapping[str, Any]) -> RecognitionStatus:
    raw_status = _require(payload, "RecognitionStatus", "result")
    try:
        return RecognitionStatus(raw_status)
    except ValueError:
        raise EngineFailure(f"Unknown RecognitionStatus {raw_status!r}") from None


def parse_status(payload: Union[str, bytes, Mapping[str, Any]]) -> Optional[RecognitionStatus]:
    """RecognitionStatus of a payload, or None when even that is unreadable.

    NoMatch and timeout results carry a status but no NBest, so the status
    is read on its own for payloads parse_segment rejects.
    """
    try:
        return _status(_decode(payload))
    except EngineFailure:
        return None


def parse_segment(payload: Union[str, bytes, Mapping[str, Any]]) -> Segment:
    """
    Build a Segment from a SpeechServiceResponse_JsonResult payload.

    Only the best hypothesis (NBest[0]) is used. The segment duration is the
    sum of its word durations.

    Args:
        payload: Raw JSON text or an already-decoded dict

    Returns:
        Segment

    Raises:
        EngineFailure: payload is not JSON, or a required field is missing or mistyped
    """
    payload = _decode(payload)
    status = _status(payload)

    nbest = _require(payload, "NBest", "result")
    if not isinstance(nbest, list) or not nbest:
        raise EngineFailure("'NBest' is empty")
    best: Dict[str, Any] = nbest[0]

    raw_words = _require(best, "Words", "NBest[0]")
    if not isinstance(raw_words, list) or not raw_words:
        raise EngineFailure("NBest[0] carries no words")
    words: List[RecognizedWord] = [parse_word(w) for w in raw_words]

    assessment = _require(best, "PronunciationAssessment", "NBest[0]")
    fluency = _number(_require(assessment, "FluencyScore", "NBest[0].PronunciationAssessment"), "FluencyScore")
    prosody = _number(_require(assessment, "ProsodyScore", "NBest[0].PronunciationAssessment"), "ProsodyScore")

    return Segment(
        words=tuple(words),
        fluency_score=fluency,
        prosody_score=prosody,
        recognition_status=status,
    )
