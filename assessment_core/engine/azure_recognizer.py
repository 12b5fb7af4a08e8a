"""Azure Speech adapter: pushes request audio to the engine and relays its events."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from ..accumulator import SegmentAccumulator
from ..config import DEFAULT_SCORING, ScoringConfig, Settings
from ..errors import ConfigurationError
from ..models import AssessmentResult
from ..session import Canceled, EventChannel, SegmentRecognized, SessionStopped, run_session

logger = logging.getLogger(__name__)


def _load_sdk():
    """Lazy import so the core and its tests do not need the native SDK."""
    import azure.cognitiveservices.speech as speechsdk
    return speechsdk


@dataclass
class ShortAssessment:
    """Result of the single-shot path, forwarded as the engine produced it.

    Attributes:
        reason: "RecognizedSpeech", "NoMatch", or another engine reason name
        scores: NBest[0].PronunciationAssessment of the engine result
        words: NBest[0].Words of the engine result
    """
    reason: str
    scores: Dict[str, Any] = field(default_factory=dict)
    words: list = field(default_factory=list)

    @property
    def recognized(self) -> bool:
        return self.reason == "RecognizedSpeech"


class AzureSpeechEngine:
    """
    Pronunciation assessment through the Azure Speech SDK.

    One recognizer is built per request; the engine object itself only
    holds configuration and can be shared.
    """

    def __init__(self, settings: Settings, scoring: ScoringConfig = DEFAULT_SCORING):
        if not settings.speech_key or not settings.speech_region:
            raise ConfigurationError("AZURE_SPEECH_KEY or AZURE_SPEECH_REGION is not set.")
        self.settings = settings
        self.scoring = scoring

    def _build_recognizer(self, reference_text: str):
        sdk = _load_sdk()
        speech_config = sdk.SpeechConfig(
            subscription=self.settings.speech_key, region=self.settings.speech_region
        )
        speech_config.speech_recognition_language = self.settings.language

        stream_format = sdk.audio.AudioStreamFormat(
            samples_per_second=self.settings.sample_rate, bits_per_sample=16, channels=1
        )
        push_stream = sdk.audio.PushAudioInputStream(stream_format=stream_format)
        audio_config = sdk.audio.AudioConfig(stream=push_stream)
        recognizer = sdk.SpeechRecognizer(speech_config=speech_config, audio_config=audio_config)

        pa_config = sdk.PronunciationAssessmentConfig(
            reference_text=reference_text,
            grading_system=sdk.PronunciationAssessmentGradingSystem.HundredMark,
            granularity=sdk.PronunciationAssessmentGranularity.Phoneme,
            enable_miscue=False,
        )
        pa_config.enable_prosody_assessment()
        pa_config.phoneme_alphabet = "IPA"
        pa_config.nbest_phoneme_count = 1
        pa_config.apply_to(recognizer)
        return sdk, recognizer, push_stream

    @staticmethod
    def _pump(push_stream, audio_chunks: Iterable[bytes]) -> None:
        try:
            for chunk in audio_chunks:
                if chunk:
                    push_stream.write(chunk)
        finally:
            push_stream.close()

    def assess_short(self, reference_text: str, audio_chunks: Iterable[bytes]) -> ShortAssessment:
        """Single recognition; the engine's own assessment is returned unchanged."""
        sdk, recognizer, push_stream = self._build_recognizer(reference_text)
        future = recognizer.recognize_once_async()
        self._pump(push_stream, audio_chunks)
        result = future.get()

        reason = sdk.ResultReason(result.reason).name
        if result.reason != sdk.ResultReason.RecognizedSpeech:
            logger.warning("Short recognition ended with reason %s", reason)
            return ShortAssessment(reason=reason)

        detail = json.loads(result.properties.get(sdk.PropertyId.SpeechServiceResponse_JsonResult))
        best = detail["NBest"][0]
        return ShortAssessment(
            reason=reason,
            scores=best.get("PronunciationAssessment", {}),
            words=best.get("Words", []),
        )

    def assess_continuous(
        self,
        reference_text: str,
        audio_chunks: Iterable[bytes],
        timeout: Optional[float] = None,
    ) -> AssessmentResult:
        """
        Continuous recognition, reconciled and scored by SegmentAccumulator.

        SDK callbacks only publish to the channel; scoring happens on the
        calling thread once the terminal event is read.
        """
        sdk, recognizer, push_stream = self._build_recognizer(reference_text)
        accumulator = SegmentAccumulator(reference_text, self.scoring)
        channel = EventChannel()

        def on_recognized(evt):
            channel.put(SegmentRecognized(
                evt.result.properties.get(sdk.PropertyId.SpeechServiceResponse_JsonResult)
            ))

        def on_canceled(evt):
            details = evt.cancellation_details
            is_error = details.reason == sdk.CancellationReason.Error
            channel.put(Canceled(is_error=is_error, details=details.error_details if is_error else None))

        def on_session_stopped(evt):
            channel.put(SessionStopped())

        recognizer.recognized.connect(on_recognized)
        recognizer.canceled.connect(on_canceled)
        recognizer.session_stopped.connect(on_session_stopped)

        recognizer.start_continuous_recognition_async().get()
        try:
            self._pump(push_stream, audio_chunks)
            return run_session(accumulator, channel, timeout=timeout)
        finally:
            recognizer.stop_continuous_recognition_async().get()
