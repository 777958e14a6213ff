"""
Tests for the upload progress stream.
"""

from upload_pipeline.core.progress import ProgressStream, UploadPhase


def test_events_carry_phase_percent():
    stream = ProgressStream()
    event = stream.emit(UploadPhase.ENCODED)

    assert event.percent == 20
    assert stream.percent == 20
    assert stream.latest is event


def test_percent_never_decreases():
    stream = ProgressStream()
    stream.emit(UploadPhase.TRANSFER_ACKNOWLEDGED)
    late = stream.emit(UploadPhase.ENCODED)

    assert late.phase is UploadPhase.ENCODED
    assert late.percent == 90


def test_subscribers_are_called_in_order_and_can_unsubscribe():
    stream = ProgressStream()
    first, second = [], []
    stream.subscribe(first.append)
    unsubscribe = stream.subscribe(second.append)

    stream.emit(UploadPhase.TOKEN_ACQUIRED)
    unsubscribe()
    stream.emit(UploadPhase.COMPLETED, "vid0001")

    assert [e.phase for e in first] == [UploadPhase.TOKEN_ACQUIRED, UploadPhase.COMPLETED]
    assert [e.phase for e in second] == [UploadPhase.TOKEN_ACQUIRED]
    assert first[-1].resource_id == "vid0001"


def test_history_is_iterable():
    stream = ProgressStream()
    assert stream.percent == 0
    assert stream.latest is None

    for phase in UploadPhase:
        stream.emit(phase)

    assert [e.percent for e in stream] == [10, 20, 30, 90, 95, 100]
    assert len(stream.events) == len(UploadPhase)
