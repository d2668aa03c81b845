"""Synchronous lifecycle event dispatch."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

_logger = logging.getLogger(__name__)

BEFORE_PLAY = "before_play"
PLAY = "play"
PROGRESS = "progress"
PAUSE = "pause"
RESET = "reset"
FINISH = "finish"
SEEK = "seek"

EVENT_NAMES = (BEFORE_PLAY, PLAY, PROGRESS, PAUSE, RESET, FINISH, SEEK)


@dataclass
class TrackEvent:
    """A single lifecycle notification."""

    type: str
    target: Any = None
    percent: Optional[float] = None


EventHandler = Callable[[TrackEvent], None]


class EventDispatcher:
    """Delivers one-shot events to subscribers on the calling thread.

    Handlers run in subscription order. Nothing is buffered, so a handler only
    sees events fired after it subscribed. A failing handler is logged and
    does not stop the remaining handlers.
    """

    def __init__(self, target: Any = None) -> None:
        self._target = target
        self._handlers: Dict[str, List[EventHandler]] = {name: [] for name in EVENT_NAMES}

    def on(self, name: str, handler: EventHandler) -> None:
        self._handlers_for(name).append(handler)

    def off(self, name: str, handler: Optional[EventHandler] = None) -> None:
        """Unsubscribe ``handler``, or every handler of ``name`` when omitted."""

        handlers = self._handlers_for(name)
        if handler is None:
            handlers.clear()
        elif handler in handlers:
            handlers.remove(handler)

    def fire(self, name: str, percent: Optional[float] = None) -> TrackEvent:
        event = TrackEvent(type=name, target=self._target, percent=percent)
        for handler in list(self._handlers_for(name)):
            try:
                handler(event)
            except Exception:
                _logger.exception("Handler for %r event failed", name)
        return event

    def _handlers_for(self, name: str) -> List[EventHandler]:
        try:
            return self._handlers[name]
        except KeyError:
            raise ValueError(f"Unknown event: {name!r}") from None
