"""Playback state machine and frame-driven time integration."""
from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Callable, Hashable, Optional

from . import events
from .errors import InvalidSpeedError
from .geometry import GeoPoint
from .path import HEADING_SEGMENT, PathModel
from .resolver import DEFAULT_LOOKAHEAD_KM
from .scheduler import FrameScheduler

_logger = logging.getLogger(__name__)

DEFAULT_SPEED_KM_S = 0.1
DEFAULT_MAX_DELTA_S = 0.05

# Summed per-frame steps may fall a few ulps short of the path length.
_END_REL_TOL = 1e-9
_END_ABS_TOL = 1e-12

PositionCallback = Callable[[GeoPoint, float], None]
EmitCallback = Callable[..., object]


class PlaybackState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"


def validate_speed(speed: float) -> float:
    """Return ``speed`` as a float, raising :class:`InvalidSpeedError` unless it is positive."""

    try:
        value = float(speed)
    except (TypeError, ValueError) as exc:
        raise InvalidSpeedError(f"Speed must be a number, got {speed!r}.") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidSpeedError(f"Speed must be a finite positive number, got {speed!r}.")
    return value


class PlaybackController:
    """Advance a traveled distance along a :class:`PathModel` frame by frame.

    The controller owns the traveled distance, the speed (km/s) and the
    playback state. It schedules frames on the injected ``scheduler``; each
    frame converts the elapsed time since the previous frame into distance,
    clamping the step to ``max_delta`` seconds so that a stalled host does not
    make the marker jump. Every recomputed position goes to ``on_update`` and
    lifecycle changes go to ``emit(name, percent=None)``.

    Not thread-safe: all calls are expected from the thread that runs the
    scheduler callbacks.
    """

    def __init__(
        self,
        path: PathModel,
        scheduler: FrameScheduler,
        speed: float = DEFAULT_SPEED_KM_S,
        max_delta: float = DEFAULT_MAX_DELTA_S,
        auto_play: bool = False,
        on_update: Optional[PositionCallback] = None,
        emit: Optional[EmitCallback] = None,
        heading_mode: str = HEADING_SEGMENT,
        lookahead_km: float = DEFAULT_LOOKAHEAD_KM,
    ) -> None:
        if not max_delta > 0.0:
            raise ValueError("max_delta must be a positive number of seconds.")
        self._path = path
        self._scheduler = scheduler
        self._speed = validate_speed(speed)
        self._max_delta = float(max_delta)
        self._auto_play = auto_play
        self._on_update = on_update
        self._emit_callback = emit
        self._heading_mode = heading_mode
        self._lookahead_km = lookahead_km

        self._state = PlaybackState.IDLE
        self._traveled = 0.0
        self._frame_token: Optional[Hashable] = None
        self._generation = 0
        self._last_timestamp: Optional[float] = None
        self._position, self._heading = path.resolve(0.0, heading_mode, lookahead_km)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def max_delta(self) -> float:
        return self._max_delta

    @property
    def position(self) -> GeoPoint:
        return self._position

    @property
    def heading(self) -> float:
        return self._heading

    @property
    def has_pending_frame(self) -> bool:
        return self._frame_token is not None

    def get_traveled(self) -> float:
        return self._traveled

    def get_total_distance(self) -> float:
        return self._path.total_length()

    def get_progress(self) -> float:
        """Completed fraction of the path; a zero-length path counts as complete."""

        total = self._path.total_length()
        if total <= 0.0:
            return 1.0
        return self._traveled / total

    # ------------------------------------------------------------------
    # Controls
    # ------------------------------------------------------------------

    def play(self) -> None:
        if self._state is PlaybackState.PLAYING:
            return
        if (
            self._state is PlaybackState.FINISHED
            and self._traveled >= self._path.total_length()
        ):
            self._traveled = 0.0
            self.recompute()

        self._emit(events.BEFORE_PLAY)
        _logger.debug("Playback %s -> playing at %.3f km", self._state.value, self._traveled)
        self._state = PlaybackState.PLAYING
        self._last_timestamp = self._scheduler.now()
        self._schedule()
        self._emit(events.PLAY)

    def pause(self) -> None:
        if self._state is not PlaybackState.PLAYING:
            return
        self._cancel_frame()
        self._state = PlaybackState.PAUSED
        _logger.debug("Playback paused at %.3f km", self._traveled)
        self._emit(events.PAUSE)

    def reset(self) -> None:
        self._cancel_frame()
        self._state = PlaybackState.IDLE
        self._traveled = 0.0
        self.recompute()
        _logger.debug("Playback reset")
        self._emit(events.RESET)
        if self._auto_play:
            self.play()

    def seek(self, percent: float) -> None:
        """Jump to ``percent`` (clamped to ``[0, 1]``) of the path without changing state."""

        percent = float(percent)
        if math.isnan(percent):
            raise ValueError("Seek percent must be a number.")
        percent = min(max(percent, 0.0), 1.0)
        self._traveled = self._path.clamp(percent * self._path.total_length())
        self.recompute()
        self._emit(events.SEEK, percent=percent)

    def set_speed(self, speed: float) -> None:
        """Change the speed; a rejected value leaves the previous speed in place."""

        self._speed = validate_speed(speed)

    def teardown(self) -> None:
        """Stop playback and drop any pending frame."""

        self.pause()
        self._cancel_frame()

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def on_tick(self, delta_seconds: float) -> None:
        """Advance by ``delta_seconds`` of play time; ignored unless playing."""

        if self._state is not PlaybackState.PLAYING:
            return

        delta = min(max(float(delta_seconds), 0.0), self._max_delta)
        total = self._path.total_length()
        self._traveled += delta * self._speed

        if self._traveled >= total or math.isclose(
            self._traveled, total, rel_tol=_END_REL_TOL, abs_tol=_END_ABS_TOL
        ):
            self._traveled = total
            self._state = PlaybackState.FINISHED
            self._cancel_frame()
            self.recompute()
            _logger.debug("Playback finished after %.3f km", total)
            self._emit(events.FINISH, percent=1.0)
            return

        self.recompute()
        self._emit(events.PROGRESS, percent=self.get_progress())
        if self._state is PlaybackState.PLAYING and self._frame_token is None:
            self._schedule()

    def recompute(self) -> None:
        """Resolve the current distance and push the result to ``on_update``."""

        self._position, self._heading = self._path.resolve(
            self._traveled, self._heading_mode, self._lookahead_km
        )
        if self._on_update is not None:
            self._on_update(self._position, self._heading)

    def _on_frame(self, timestamp: float) -> None:
        if self._state is not PlaybackState.PLAYING:
            return
        last = self._last_timestamp if self._last_timestamp is not None else timestamp
        self._last_timestamp = timestamp
        self.on_tick(max(timestamp - last, 0.0) / 1000.0)

    def _schedule(self) -> None:
        generation = self._generation

        def callback(timestamp: float) -> None:
            # A frame from before the last cancellation must never run.
            if generation != self._generation:
                return
            self._frame_token = None
            self._on_frame(timestamp)

        self._frame_token = self._scheduler.request_frame(callback)

    def _cancel_frame(self) -> None:
        self._generation += 1
        if self._frame_token is not None:
            token, self._frame_token = self._frame_token, None
            self._scheduler.cancel_frame(token)

    def _emit(self, name: str, percent: Optional[float] = None) -> None:
        if self._emit_callback is not None:
            self._emit_callback(name, percent=percent)
