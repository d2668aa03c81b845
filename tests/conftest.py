"""Shared fixtures for the track marker tests."""

from __future__ import annotations

import pytest

from trackmarker.geometry import haversine_km
from trackmarker.path import PathModel
from trackmarker.scheduler import ManualScheduler

# Two segments of equal length: east along the equator, then north.
L_PATH = [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0)]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def l_path() -> PathModel:
    return PathModel(L_PATH)


@pytest.fixture
def segment_km() -> float:
    """Length of one segment of :data:`L_PATH`."""
    return haversine_km(L_PATH[0], L_PATH[1])


class EventLog:
    """Callable that records the names and percents of emitted events."""

    def __init__(self) -> None:
        self.names: list[str] = []
        self.percents: list[float | None] = []

    def __call__(self, name: str, percent: float | None = None) -> None:
        self.names.append(name)
        self.percents.append(percent)

    def count(self, name: str) -> int:
        return self.names.count(name)


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()
