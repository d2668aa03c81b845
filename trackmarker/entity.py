"""The public track marker facade."""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Optional

from .config import MarkerOptions
from .controller import PlaybackController, PlaybackState
from .events import EventDispatcher, EventHandler
from .geometry import GeoPoint
from .inputs import normalize_path
from .path import PathModel
from .scheduler import FrameScheduler

_logger = logging.getLogger(__name__)

Renderer = Callable[[GeoPoint, float], None]


class TrackEntity:
    """A marker that travels along a path and reports where it is.

    ``path`` is any representation understood by
    :func:`~trackmarker.inputs.normalize_path`. ``renderer`` receives
    ``(point, heading)`` after every recomputation, with the configured
    ``rotation_offset`` already added to the heading; a renderer that fails is
    logged and never interrupts playback. Options come from ``options`` with
    keyword ``overrides`` applied on top.

    The marker is positioned at the start of the path on construction and
    starts playing immediately when ``auto_play`` is set.
    """

    def __init__(
        self,
        path: Any,
        scheduler: FrameScheduler,
        renderer: Optional[Renderer] = None,
        options: Optional[MarkerOptions] = None,
        **overrides: Any,
    ) -> None:
        self.options = replace(options or MarkerOptions(), **overrides)
        self._path = path if isinstance(path, PathModel) else PathModel(normalize_path(path))
        self._renderer = renderer
        self._removed = False
        self._events = EventDispatcher(target=self)
        for name, hook in options.hooks().items():
            self._events.on(name, hook)

        self._controller = PlaybackController(
            self._path,
            scheduler,
            speed=options.speed,
            max_delta=options.max_delta,
            auto_play=options.auto_play,
            on_update=self._forward_position,
            emit=self._events.fire,
            heading_mode=options.heading_mode,
            lookahead_km=options.lookahead_km,
        )
        self._controller.recompute()
        if options.auto_play:
            self._controller.play()

    def __repr__(self) -> str:
        return (
            f"TrackEntity(state={self.state.value}, traveled={self.get_traveled():.3f}, "
            f"total={self.get_total_distance():.3f})"
        )

    # ------------------------------------------------------------------
    # Playback controls
    # ------------------------------------------------------------------

    def play(self) -> "TrackEntity":
        self._controller.play()
        return self

    def pause(self) -> "TrackEntity":
        self._controller.pause()
        return self

    def reset(self) -> "TrackEntity":
        self._controller.reset()
        return self

    def seek(self, percent: float) -> "TrackEntity":
        self._controller.seek(percent)
        return self

    def set_speed(self, speed: float) -> "TrackEntity":
        self._controller.set_speed(speed)
        self.options.speed = self._controller.speed
        return self

    def remove(self) -> None:
        """Tear the marker down, cancelling any frame still scheduled."""

        if self._removed:
            return
        self._removed = True
        self._controller.teardown()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def get_traveled(self) -> float:
        return self._controller.get_traveled()

    def get_total_distance(self) -> float:
        return self._controller.get_total_distance()

    def get_progress(self) -> float:
        return self._controller.get_progress()

    @property
    def path(self) -> PathModel:
        return self._path

    @property
    def state(self) -> PlaybackState:
        return self._controller.state

    @property
    def position(self) -> GeoPoint:
        return self._controller.position

    @property
    def heading(self) -> float:
        """Heading of travel in degrees clockwise from north, without the offset."""

        return self._controller.heading

    @property
    def controller(self) -> PlaybackController:
        return self._controller

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def on(self, name: str, handler: EventHandler) -> "TrackEntity":
        self._events.on(name, handler)
        return self

    def off(self, name: str, handler: Optional[EventHandler] = None) -> "TrackEntity":
        self._events.off(name, handler)
        return self

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _forward_position(self, point: GeoPoint, heading: float) -> None:
        if self._renderer is None:
            return
        reported = (heading + self.options.rotation_offset) % 360.0
        try:
            self._renderer(point, reported)
        except Exception as exc:
            _logger.warning("Renderer failed to apply position update: %s", exc)


def track_marker(
    path: Any,
    scheduler: FrameScheduler,
    renderer: Optional[Renderer] = None,
    **options: Any,
) -> TrackEntity:
    """Build a :class:`TrackEntity`; ``options`` may use snake_case or camelCase names."""

    return TrackEntity(path, scheduler, renderer, MarkerOptions.from_mapping(options))
