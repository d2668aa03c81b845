"""Tests for the deterministic ManualScheduler."""

from __future__ import annotations

import pytest

from trackmarker.scheduler import ManualScheduler


def test_advance_runs_pending_callbacks_with_timestamp():
    scheduler = ManualScheduler(start_ms=100.0)
    seen: list[float] = []
    scheduler.request_frame(seen.append)

    ran = scheduler.advance(16.0)

    assert ran == 1
    assert seen == [116.0]
    assert scheduler.now() == 116.0
    assert scheduler.pending == 0


def test_callbacks_run_in_request_order():
    scheduler = ManualScheduler()
    order: list[str] = []
    scheduler.request_frame(lambda ts: order.append("a"))
    scheduler.request_frame(lambda ts: order.append("b"))
    scheduler.advance(1.0)
    assert order == ["a", "b"]


def test_cancelled_callback_never_runs():
    scheduler = ManualScheduler()
    seen: list[float] = []
    token = scheduler.request_frame(seen.append)
    scheduler.cancel_frame(token)
    scheduler.advance(10.0)
    assert seen == []


def test_cancel_is_idempotent_and_ignores_unknown_tokens():
    scheduler = ManualScheduler()
    token = scheduler.request_frame(lambda ts: None)
    scheduler.cancel_frame(token)
    scheduler.cancel_frame(token)  # should not raise
    scheduler.cancel_frame("missing")  # should not raise
    assert scheduler.pending == 0


def test_frames_requested_during_advance_wait_for_the_next_one():
    scheduler = ManualScheduler()
    calls: list[float] = []

    def callback(ts: float) -> None:
        calls.append(ts)
        scheduler.request_frame(callback)

    scheduler.request_frame(callback)
    scheduler.advance(10.0)
    assert calls == [10.0]
    assert scheduler.pending == 1
    scheduler.advance(10.0)
    assert calls == [10.0, 20.0]


def test_callback_can_cancel_a_later_callback_in_the_same_batch():
    scheduler = ManualScheduler()
    seen: list[str] = []
    tokens = {}
    tokens["first"] = scheduler.request_frame(
        lambda ts: scheduler.cancel_frame(tokens["second"])
    )
    tokens["second"] = scheduler.request_frame(lambda ts: seen.append("second"))

    assert scheduler.advance(5.0) == 1
    assert seen == []


def test_clock_cannot_move_backwards():
    scheduler = ManualScheduler()
    with pytest.raises(ValueError):
        scheduler.advance(-1.0)


def test_clock_moves_without_pending_frames():
    scheduler = ManualScheduler()
    assert scheduler.advance(50.0) == 0
    assert scheduler.now() == 50.0


class TestRun:
    def test_run_stops_when_nothing_is_pending(self):
        scheduler = ManualScheduler()
        remaining = [3]

        def callback(ts: float) -> None:
            remaining[0] -= 1
            if remaining[0] > 0:
                scheduler.request_frame(callback)

        scheduler.request_frame(callback)
        assert scheduler.run(frame_interval_ms=20.0) == 3
        assert scheduler.now() == 60.0

    def test_run_respects_max_frames(self):
        scheduler = ManualScheduler()

        def callback(ts: float) -> None:
            scheduler.request_frame(callback)

        scheduler.request_frame(callback)
        assert scheduler.run(frame_interval_ms=10.0, max_frames=5) == 5
        assert scheduler.pending == 1
