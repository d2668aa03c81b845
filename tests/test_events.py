"""Tests for the synchronous event dispatcher."""

from __future__ import annotations

import logging

import pytest

from trackmarker.events import EVENT_NAMES, EventDispatcher, TrackEvent


def test_handlers_receive_track_events():
    target = object()
    dispatcher = EventDispatcher(target=target)
    received: list[TrackEvent] = []
    dispatcher.on("progress", received.append)

    dispatcher.fire("progress", percent=0.25)

    assert received == [TrackEvent(type="progress", target=target, percent=0.25)]


def test_handlers_run_in_subscription_order():
    dispatcher = EventDispatcher()
    order: list[int] = []
    dispatcher.on("play", lambda event: order.append(1))
    dispatcher.on("play", lambda event: order.append(2))
    dispatcher.fire("play")
    assert order == [1, 2]


def test_no_replay_for_late_subscribers():
    dispatcher = EventDispatcher()
    dispatcher.fire("finish")
    received: list[TrackEvent] = []
    dispatcher.on("finish", received.append)
    assert received == []


def test_off_removes_one_or_all_handlers():
    dispatcher = EventDispatcher()
    first: list[TrackEvent] = []
    second: list[TrackEvent] = []
    dispatcher.on("pause", first.append)
    dispatcher.on("pause", second.append)

    dispatcher.off("pause", first.append)
    dispatcher.fire("pause")
    assert (len(first), len(second)) == (0, 1)

    dispatcher.off("pause")
    dispatcher.fire("pause")
    assert len(second) == 1


def test_unknown_event_name_raises():
    dispatcher = EventDispatcher()
    with pytest.raises(ValueError):
        dispatcher.on("arrived", lambda event: None)
    with pytest.raises(ValueError):
        dispatcher.fire("arrived")


def test_failing_handler_is_logged_and_others_still_run(caplog):
    dispatcher = EventDispatcher()
    received: list[TrackEvent] = []

    def broken(event: TrackEvent) -> None:
        raise RuntimeError("boom")

    dispatcher.on("reset", broken)
    dispatcher.on("reset", received.append)

    with caplog.at_level(logging.ERROR, logger="trackmarker.events"):
        dispatcher.fire("reset")

    assert len(received) == 1
    assert any("reset" in record.message for record in caplog.records)


def test_every_lifecycle_event_is_known():
    assert set(EVENT_NAMES) == {
        "before_play",
        "play",
        "progress",
        "pause",
        "reset",
        "finish",
        "seek",
    }
