"""Score aggregation at session finalization."""
from .aggregator import compute_scores, round_half_up

__all__ = ["compute_scores", "round_half_up"]
