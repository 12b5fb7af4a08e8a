"""One recognized speech span within a continuous utterance."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from .word import RecognizedWord


class RecognitionStatus(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"
    NO_MATCH = "NoMatch"
    INITIAL_SILENCE_TIMEOUT = "InitialSilenceTimeout"
    BABBLE_TIMEOUT = "BabbleTimeout"
    ERROR = "Error"
    END_OF_DICTATION = "EndOfDictation"

    @property
    def is_terminal(self) -> bool:
        return self in (RecognitionStatus.SUCCESS, RecognitionStatus.FAILED)


@dataclass(frozen=True)
class Segment:
    """Payload of one "recognized" event.

    Attributes:
        words: Recognized words, in spoken order
        fluency_score: Segment fluency, 0-100
        prosody_score: Segment prosody, 0-100
        recognition_status: Engine status for this result
        total_duration: Sum of word durations (ticks); derived when omitted
    """
    words: Tuple[RecognizedWord, ...]
    fluency_score: float
    prosody_score: float
    recognition_status: RecognitionStatus = RecognitionStatus.SUCCESS
    total_duration: int = field(default=-1)

    def __post_init__(self):
        # Accept any sequence, store a tuple
        object.__setattr__(self, "words", tuple(self.words))
        if self.total_duration < 0:
            object.__setattr__(
                self, "total_duration", sum(w.duration_ticks for w in self.words)
            )

    @property
    def succeeded(self) -> bool:
        return self.recognition_status is RecognitionStatus.SUCCESS
