"""Event channel between the recognition engine and the accumulator."""
from __future__ import annotations

import logging
import queue
from dataclasses import dataclass
from typing import Any, Optional, Union

from .accumulator import SegmentAccumulator
from .engine.payload import parse_segment, parse_status
from .errors import EngineFailure
from .models import AssessmentResult, Segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SegmentRecognized:
    """A final result for one speech span: raw engine JSON or a parsed Segment."""
    payload: Any


@dataclass(frozen=True)
class Canceled:
    is_error: bool
    details: Optional[str] = None


@dataclass(frozen=True)
class SessionStopped:
    pass


RecognitionEvent = Union[SegmentRecognized, Canceled, SessionStopped]


class EventChannel:
    """
    Ordered hand-off of engine events to the request thread.

    Engine callbacks run on SDK threads and only ever call put(); the
    request thread is the single consumer.
    """

    def __init__(self):
        self._queue: "queue.Queue[RecognitionEvent]" = queue.Queue()

    def put(self, event: RecognitionEvent) -> None:
        self._queue.put(event)

    def get(self, timeout: Optional[float] = None) -> RecognitionEvent:
        """Block for the next event. Raises queue.Empty when timeout elapses."""
        return self._queue.get(timeout=timeout)


def run_session(
    accumulator: SegmentAccumulator,
    channel: EventChannel,
    timeout: Optional[float] = None,
) -> AssessmentResult:
    """
    Drain the channel into the accumulator until a terminal event arrives.

    Malformed segment payloads are logged and skipped; the session goes on.
    Their RecognitionStatus, when readable, still reaches the accumulator.

    Args:
        accumulator: Fresh accumulator for this request
        channel: Channel the engine adapter publishes to
        timeout: Per-event wait in seconds, None waits forever

    Returns:
        AssessmentResult from finalization

    Raises:
        RecognitionCanceled: the engine canceled with an error
        ValidationError: nothing could be scored
        queue.Empty: no event arrived within timeout
    """
    while True:
        event = channel.get(timeout=timeout)

        if isinstance(event, SegmentRecognized):
            try:
                segment = event.payload if isinstance(event.payload, Segment) else parse_segment(event.payload)
            except EngineFailure as e:
                logger.warning("Rejected segment from engine: %s", e)
                accumulator.on_segment_rejected(parse_status(event.payload))
                continue
            accumulator.on_segment_recognized(segment)
        elif isinstance(event, Canceled):
            return accumulator.on_canceled(event.is_error, event.details)
        elif isinstance(event, SessionStopped):
            return accumulator.on_session_stopped()
        else:
            raise TypeError(f"Unexpected recognition event: {event!r}")
