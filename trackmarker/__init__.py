"""Path-following marker animation package."""

from .config import AnimationConfig, MarkerOptions, VehicleConfig, load_config
from .controller import PlaybackController, PlaybackState
from .entity import TrackEntity, track_marker
from .errors import InvalidPathError, InvalidSpeedError, TrackMarkerError
from .events import TrackEvent
from .geometry import GeoPoint
from .path import PathModel
from .scheduler import FrameScheduler, ManualScheduler

__all__ = [
    "AnimationConfig",
    "FrameScheduler",
    "GeoPoint",
    "InvalidPathError",
    "InvalidSpeedError",
    "ManualScheduler",
    "MarkerOptions",
    "PathModel",
    "PlaybackController",
    "PlaybackState",
    "TrackEntity",
    "TrackEvent",
    "TrackMarkerError",
    "VehicleConfig",
    "load_config",
    "track_marker",
]
