import queue
import threading

import pytest

from assessment_core import SegmentAccumulator
from assessment_core.errors import RecognitionCanceled
from assessment_core.models import ErrorType, RecognitionStatus
from assessment_core.session import Canceled, EventChannel, SegmentRecognized, SessionStopped, run_session
from factories import payload, segment

REFERENCE = "The quick brown fox jumps."


def _channel(*events):
    channel = EventChannel()
    for event in events:
        channel.put(event)
    return channel


def test_run_session_folds_segments_until_stop():
    channel = _channel(
        SegmentRecognized(payload(["the", "quick"])),
        SegmentRecognized(payload(["brown", "fox", "jumps"])),
        SessionStopped(),
    )
    result = run_session(SegmentAccumulator(REFERENCE), channel)
    assert [w.text for w in result.words] == ["the", "quick", "brown", "fox", "jumps"]
    assert result.scores.pronunciation_score == 100


def test_parsed_segments_are_accepted():
    channel = _channel(SegmentRecognized(segment(["the", "quick", "brown", "fox", "jumps"])), SessionStopped())
    result = run_session(SegmentAccumulator(REFERENCE), channel)
    assert result.scores.completeness_score == 100


def test_malformed_segment_is_skipped():
    broken = payload(["quick"])
    del broken["NBest"][0]["Words"]
    channel = _channel(
        SegmentRecognized(payload(["the", "quick", "brown"])),
        SegmentRecognized(broken),
        SegmentRecognized("{not json"),
        SegmentRecognized(payload(["fox", "jumps"])),
        SessionStopped(),
    )
    accumulator = SegmentAccumulator(REFERENCE)
    result = run_session(accumulator, channel)
    assert len(accumulator.segments) == 2
    assert all(w.error_type is ErrorType.NONE for w in result.words)


def test_error_cancellation_propagates():
    channel = _channel(SegmentRecognized(payload(["the"])), Canceled(is_error=True, details="connection lost"))
    with pytest.raises(RecognitionCanceled):
        run_session(SegmentAccumulator(REFERENCE), channel)


def test_non_error_cancellation_finalizes():
    channel = _channel(SegmentRecognized(payload(["the", "quick", "brown", "fox", "jumps"])), Canceled(is_error=False))
    result = run_session(SegmentAccumulator(REFERENCE), channel)
    assert result.scores.accuracy_score == 100


def test_events_after_terminal_signal_are_not_consumed():
    channel = _channel(
        SegmentRecognized(payload(["the", "quick", "brown", "fox", "jumps"])),
        Canceled(is_error=False),
        SessionStopped(),
    )
    run_session(SegmentAccumulator(REFERENCE), channel)
    assert isinstance(channel.get(timeout=0.1), SessionStopped)


def test_timeout_raises_empty():
    with pytest.raises(queue.Empty):
        run_session(SegmentAccumulator(REFERENCE), EventChannel(), timeout=0.01)


def test_events_published_from_another_thread():
    channel = EventChannel()

    def engine():
        channel.put(SegmentRecognized(payload(["the", "quick"])))
        channel.put(SegmentRecognized(payload(["brown", "fox", "jumps"])))
        channel.put(SessionStopped())

    worker = threading.Thread(target=engine, daemon=True)
    worker.start()
    result = run_session(SegmentAccumulator(REFERENCE), channel, timeout=5)
    worker.join(timeout=5)
    assert [w.text for w in result.words] == ["the", "quick", "brown", "fox", "jumps"]


def test_unknown_event_type_is_rejected():
    with pytest.raises(TypeError):
        run_session(SegmentAccumulator(REFERENCE), _channel(object()))


def test_non_finite_numbers_reject_only_that_segment():
    infinite = payload(["fox"])
    infinite["NBest"][0]["Words"][0]["Duration"] = float("inf")
    not_a_number = payload(["fox"])
    not_a_number["NBest"][0]["PronunciationAssessment"]["FluencyScore"] = float("nan")
    channel = _channel(
        SegmentRecognized(payload(["the", "quick", "brown"])),
        SegmentRecognized(infinite),
        SegmentRecognized(not_a_number),
        SegmentRecognized('{"RecognitionStatus": "Success", "NBest": [{"Words": [{"Word": "fox", '
                          '"Duration": NaN, "PronunciationAssessment": {}}]}]}'),
        SegmentRecognized(payload(["fox", "jumps"])),
        SessionStopped(),
    )
    accumulator = SegmentAccumulator(REFERENCE)
    result = run_session(accumulator, channel)
    assert len(accumulator.segments) == 2
    assert result.scores.accuracy_score == 100
    assert result.scores.fluency_score == 100


def test_result_without_words_still_records_its_status():
    channel = _channel(
        SegmentRecognized(payload(["the", "quick", "brown", "fox", "jumps"])),
        SegmentRecognized({"RecognitionStatus": "NoMatch", "Offset": 0, "Duration": 0}),
        SessionStopped(),
    )
    accumulator = SegmentAccumulator(REFERENCE)
    result = run_session(accumulator, channel)
    assert accumulator.has_error
    assert result.recognition_error is RecognitionStatus.NO_MATCH
    assert accumulator.status is RecognitionStatus.NO_MATCH
    assert len(accumulator.segments) == 1
