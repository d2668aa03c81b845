"""Frame scheduling collaborators for the playback loop.

The playback controller never sleeps or spawns threads. It asks a scheduler
for the next frame and returns; the host calls back with a timestamp. Any
object implementing :class:`FrameScheduler` can drive playback, whether it
wraps a GUI timer, a video frame loop, or the deterministic
:class:`ManualScheduler` used by the recorder and the tests.
"""
from __future__ import annotations

import itertools
from typing import Callable, Dict, Hashable, Optional, Protocol

FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Host capability that runs callbacks on future frames.

    Timestamps are milliseconds on a monotonic clock; :meth:`now` reads the
    same clock that frame callbacks receive.
    """

    def request_frame(self, callback: FrameCallback) -> Hashable:
        ...

    def cancel_frame(self, token: Hashable) -> None:
        ...

    def now(self) -> float:
        ...


class ManualScheduler:
    """A scheduler whose clock only moves when :meth:`advance` is called.

    Each advance runs the callbacks that were pending when it started, in
    request order. Callbacks requested while those run wait for the next
    advance, so one frame never re-enters another.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._clock = float(start_ms)
        self._tokens = itertools.count(1)
        self._pending: Dict[int, FrameCallback] = {}

    def now(self) -> float:
        return self._clock

    @property
    def pending(self) -> int:
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> int:
        token = next(self._tokens)
        self._pending[token] = callback
        return token

    def cancel_frame(self, token: Hashable) -> None:
        self._pending.pop(token, None)

    def advance(self, ms: float) -> int:
        """Move the clock forward by ``ms`` and run the due callbacks.

        Returns the number of callbacks that ran.
        """

        if ms < 0:
            raise ValueError("The clock cannot move backwards.")
        self._clock += ms
        ran = 0
        for token in list(self._pending):
            # An earlier callback in this batch may have cancelled this one.
            callback = self._pending.pop(token, None)
            if callback is None:
                continue
            callback(self._clock)
            ran += 1
        return ran

    def run(self, frame_interval_ms: float, max_frames: Optional[int] = None) -> int:
        """Step frame by frame until nothing is pending or ``max_frames`` is hit."""

        frames = 0
        while self._pending and (max_frames is None or frames < max_frames):
            self.advance(frame_interval_ms)
            frames += 1
        return frames
