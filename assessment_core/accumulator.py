"""Per-session accumulation of recognition segments and one-time finalization."""
from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from .alignment import align_sequences, tokenize_recognized, tokenize_reference
from .classifier import classify_errors
from .config import DEFAULT_SCORING, ScoringConfig
from .errors import AccumulatorFinalizedError, RecognitionCanceled
from .models import AssessmentResult, RecognitionStatus, RecognizedWord, Segment
from .scorer import compute_scores

logger = logging.getLogger(__name__)


class AccumulatorState(str, Enum):
    ACTIVE = "active"
    FINALIZED = "finalized"


class SegmentAccumulator:
    """
    Folds the segments of one continuous recognition session.

    One instance per assessment request. The accumulator owns every
    RecognizedWord it receives; reconciliation works on copies.

    States: ACTIVE -> FINALIZED. on_session_stopped() and a non-error
    on_canceled() finalize and return the AssessmentResult; an error
    cancellation finalizes and raises RecognitionCanceled. Every call made
    after that raises AccumulatorFinalizedError.
    """

    def __init__(self, reference_text: str, scoring: ScoringConfig = DEFAULT_SCORING):
        self.reference_text = reference_text
        self.reference: Tuple[str, ...] = tokenize_reference(reference_text)
        self.scoring = scoring

        self.state = AccumulatorState.ACTIVE
        self.words: List[RecognizedWord] = []
        self.segments: List[Segment] = []
        self.status: Optional[RecognitionStatus] = None
        self.recognition_error: Optional[RecognitionStatus] = None

    @property
    def has_error(self) -> bool:
        """Terminal-error flag: some segment did not succeed."""
        return self.recognition_error is not None

    def _ensure_active(self, operation: str) -> None:
        if self.state is not AccumulatorState.ACTIVE:
            raise AccumulatorFinalizedError(
                f"{operation} called on a finalized session"
            )

    def on_segment_recognized(self, segment: Segment) -> None:
        self._ensure_active("on_segment_recognized")

        self.words.extend(segment.words)
        self.segments.append(segment)
        self.status = segment.recognition_status
        if not segment.succeeded:
            self.recognition_error = segment.recognition_status
            logger.warning(
                "Segment %d finished with status %s",
                len(self.segments), segment.recognition_status.value,
            )

    def on_segment_rejected(self, status: Optional[RecognitionStatus]) -> None:
        """Record the status of a result whose words could not be used.

        NoMatch and timeout results carry no words but still end the span,
        so they update the session status and the terminal-error flag.
        """
        self._ensure_active("on_segment_rejected")
        if status is None:
            return
        self.status = status
        if status is not RecognitionStatus.SUCCESS:
            self.recognition_error = status

    def on_canceled(self, is_error: bool, details: Optional[str] = None) -> AssessmentResult:
        self._ensure_active("on_canceled")
        if is_error:
            self.state = AccumulatorState.FINALIZED
            logger.error("Recognition canceled with error: %s", details)
            raise RecognitionCanceled(details)
        return self.on_session_stopped()

    def on_session_stopped(self) -> AssessmentResult:
        self._ensure_active("on_session_stopped")
        self.state = AccumulatorState.FINALIZED
        return self._finalize()

    def _finalize(self) -> AssessmentResult:
        hypothesis = tokenize_recognized(self.words)
        blocks = align_sequences(self.reference, hypothesis)
        reconciled = classify_errors(blocks, self.words, self.reference, self.status)
        scores = compute_scores(
            reconciled, self.reference, self.segments, self.status, self.scoring
        )
        logger.info(
            "Finalized session: %d segment(s), %d recognized word(s), %d reference word(s), pron=%s",
            len(self.segments), len(self.words), len(self.reference), scores.pronunciation_score,
        )
        return AssessmentResult(
            scores=scores,
            words=tuple(reconciled),
            recognition_error=self.recognition_error,
        )
