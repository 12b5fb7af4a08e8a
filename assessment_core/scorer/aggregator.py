from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from ..config import DEFAULT_SCORING, ScoringConfig
from ..errors import ValidationError
from ..models import ErrorType, RecognitionStatus, RecognizedWord, ScoreSet, Segment


def round_half_up(x: float) -> int:
    """Nearest integer, halves rounded up (2.5 -> 3, not Python's banker's 2)."""
    return int(math.floor(x + 0.5))


def _clamp(x: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, x))


def completeness_score(reconciled: Sequence[RecognizedWord], reference: Sequence[str]) -> int:
    """Share of reference words that were spoken without error, 0-100.

    Only recognized words still tagged None after reconciliation count, so a
    word re-tagged as an insertion does not make the reading more complete.
    """
    if not reference:
        raise ValidationError("Reference transcript has no words to assess against")
    spoken = sum(1 for w in reconciled if w.error_type is ErrorType.NONE)
    return min(100, round_half_up(100.0 * spoken / len(reference)))


def accuracy_score(reconciled: Sequence[RecognizedWord]) -> int:
    """Mean word accuracy; omitted words score 0, inserted words are skipped."""
    scores = [w.accuracy_score for w in reconciled if w.error_type is not ErrorType.INSERTION]
    if not scores:
        raise ValidationError("No reference-aligned words to compute accuracy from")
    return round_half_up(float(np.mean(scores)))


def fluency_score(segments: Sequence[Segment]) -> float:
    """Segment fluency weighted by spoken duration."""
    durations = np.array([s.total_duration for s in segments], dtype=float)
    if not len(durations) or durations.sum() <= 0:
        return 0.0
    fluency = np.array([s.fluency_score for s in segments], dtype=float)
    return float(np.average(fluency, weights=durations))


def prosody_score(segments: Sequence[Segment]) -> float:
    if not segments:
        raise ValidationError("No recognized segments to compute prosody from")
    return float(np.mean([s.prosody_score for s in segments]))


def pronunciation_score(
    accuracy: float,
    completeness: float,
    fluency: float,
    prosody: float,
    status: Optional[RecognitionStatus],
    cfg: ScoringConfig = DEFAULT_SCORING,
) -> int:
    """Overall score.

    Terminal status: the four sub-scores are sorted ascending and weighted by
    rank, lowest first. Otherwise completeness is not meaningful yet and a
    fixed accuracy/fluency/prosody blend is used.
    """
    if status is not None and status.is_terminal:
        ranked: List[float] = sorted([accuracy, completeness, fluency, prosody])
        total = sum(w * s for w, s in zip(cfg.rank_weights, ranked))
    else:
        total = (
            cfg.partial_accuracy_weight * accuracy
            + cfg.partial_fluency_weight * fluency
            + cfg.partial_prosody_weight * prosody
        )
    return round_half_up(total)


def compute_scores(
    reconciled: Sequence[RecognizedWord],
    reference: Sequence[str],
    segments: Sequence[Segment],
    status: Optional[RecognitionStatus],
    cfg: ScoringConfig = DEFAULT_SCORING,
) -> ScoreSet:
    """
    Compute the five session scores from reconciled words and segments.

    Args:
        reconciled: Output of classify_errors
        reference: Reference tokens
        segments: Every accepted segment, in arrival order
        status: Status of the most recent segment
        cfg: Weighting configuration

    Returns:
        ScoreSet with every score clamped to [0, 100]

    Raises:
        ValidationError: empty reference, no segments, or no words to average
    """
    if not reference:
        raise ValidationError("Reference transcript has no words to assess against")
    if not segments:
        raise ValidationError("No recognized segments to score")

    completeness = _clamp(completeness_score(reconciled, reference))
    accuracy = _clamp(accuracy_score(reconciled))
    fluency = _clamp(fluency_score(segments))
    prosody = _clamp(prosody_score(segments))
    pron = pronunciation_score(accuracy, completeness, fluency, prosody, status, cfg)

    return ScoreSet(
        accuracy_score=accuracy,
        completeness_score=completeness,
        fluency_score=fluency,
        prosody_score=prosody,
        pronunciation_score=_clamp(pron),
    )
