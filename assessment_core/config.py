"""Runtime settings and scoring tunables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv


@dataclass(frozen=True)
class ScoringConfig:
    """
    Weights for the overall pronunciation score.

    Notes:
    - rank_weights apply to the four sub-scores sorted ascending, so the
      weakest dimension always carries rank_weights[0]
    - the partial_* weights are used before recognition reaches a terminal
      status; completeness is left out there
    """

    rank_weights: Tuple[float, float, float, float] = (0.4, 0.2, 0.2, 0.2)

    partial_accuracy_weight: float = 0.6
    partial_fluency_weight: float = 0.2
    partial_prosody_weight: float = 0.2


DEFAULT_SCORING = ScoringConfig()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass(frozen=True)
class Settings:
    """Service settings, read from the environment by from_env()."""

    speech_key: Optional[str] = None
    speech_region: Optional[str] = None
    language: str = "en-US"
    log_level: str = "INFO"
    port: int = 8081
    short_audio_max_seconds: float = 30.0
    sample_rate: int = 16000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            speech_key=os.getenv("AZURE_SPEECH_KEY") or None,
            speech_region=os.getenv("AZURE_SPEECH_REGION") or None,
            language=os.getenv("LANGUAGE", "en-US"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            port=int(os.getenv("PORT", "8081")),
            short_audio_max_seconds=_float_env("SHORT_AUDIO_MAX_SECONDS", 30.0),
        )

    def is_short_audio(self, duration_s: float) -> bool:
        return duration_s <= self.short_audio_max_seconds


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Settings from the environment after loading a .env file.

    Variables already present in the process environment win over the file.
    Without dotenv_path, .env is looked up from this package directory upwards.
    """
    load_dotenv(dotenv_path, override=False)
    return Settings.from_env()
