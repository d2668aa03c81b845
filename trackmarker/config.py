"""Configuration loading utilities for the track marker."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import json

from .controller import DEFAULT_MAX_DELTA_S, DEFAULT_SPEED_KM_S, validate_speed
from .events import TrackEvent
from .geometry import GeoPoint
from .inputs import normalize_path
from .path import HEADING_LOOKAHEAD, HEADING_SEGMENT
from .resolver import DEFAULT_LOOKAHEAD_KM

Hook = Optional[Callable[[TrackEvent], None]]

# Option hooks and the event each one subscribes to.
HOOK_EVENTS: Dict[str, str] = {
    "on_before_play": "before_play",
    "on_play": "play",
    "on_progress": "progress",
    "on_pause": "pause",
    "on_reset": "reset",
    "on_finish": "finish",
    "on_seek": "seek",
}

# camelCase spellings accepted alongside the snake_case field names.
_OPTION_ALIASES: Dict[str, str] = {
    "autoPlay": "auto_play",
    "rotationOffset": "rotation_offset",
    "maxDelta": "max_delta",
    "headingMode": "heading_mode",
    "lookaheadKm": "lookahead_km",
    "onBeforePlay": "on_before_play",
    "onPlay": "on_play",
    "onProgress": "on_progress",
    "onPause": "on_pause",
    "onReset": "on_reset",
    "onFinish": "on_finish",
    "onSeek": "on_seek",
}


@dataclass
class MarkerOptions:
    """Playback options for a single track marker.

    ``speed`` is in kilometres per second. When ``rotation`` is false the
    heading is still computed and reported, and renderers are expected to
    leave the marker unrotated. ``rotation_offset`` is added to every heading
    before it reaches the renderer.
    """

    speed: float = DEFAULT_SPEED_KM_S
    auto_play: bool = True
    rotation: bool = True
    rotation_offset: float = 0.0
    max_delta: float = DEFAULT_MAX_DELTA_S
    heading_mode: str = HEADING_SEGMENT
    lookahead_km: float = DEFAULT_LOOKAHEAD_KM
    on_before_play: Hook = None
    on_play: Hook = None
    on_progress: Hook = None
    on_pause: Hook = None
    on_reset: Hook = None
    on_finish: Hook = None
    on_seek: Hook = None

    def __post_init__(self) -> None:
        self.speed = validate_speed(self.speed)
        self.rotation_offset = float(self.rotation_offset)
        self.max_delta = float(self.max_delta)
        self.lookahead_km = float(self.lookahead_km)
        if self.max_delta <= 0.0:
            raise ValueError("max_delta must be a positive number of seconds.")
        if self.heading_mode not in (HEADING_SEGMENT, HEADING_LOOKAHEAD):
            raise ValueError(
                f"heading_mode must be {HEADING_SEGMENT!r} or {HEADING_LOOKAHEAD!r}, "
                f"got {self.heading_mode!r}."
            )
        if self.lookahead_km <= 0.0:
            raise ValueError("lookahead_km must be positive.")

    def hooks(self) -> Dict[str, Callable[[TrackEvent], None]]:
        """Return the configured hooks keyed by event name."""

        return {
            event: getattr(self, attr)
            for attr, event in HOOK_EVENTS.items()
            if getattr(self, attr) is not None
        }

    @staticmethod
    def from_mapping(data: Optional[Dict[str, Any]]) -> "MarkerOptions":
        if not data:
            return MarkerOptions()
        known = MarkerOptions.__dataclass_fields__
        values: Dict[str, Any] = {}
        for key, value in data.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown marker option: {key!r}")
            values[name] = value
        for flag in ("auto_play", "rotation"):
            if flag in values:
                values[flag] = bool(values[flag])
        return MarkerOptions(**values)


@dataclass
class VehicleConfig:
    """Configuration for how the marker icon should be rendered."""

    type: str = "car"
    icon_path: Optional[Path] = None
    icon_scale: float = 1.0

    @staticmethod
    def from_mapping(data: Optional[Dict[str, Any]]) -> "VehicleConfig":
        if not data:
            return VehicleConfig()
        icon_path = data.get("icon") or data.get("icon_path")
        return VehicleConfig(
            type=data.get("type", "car"),
            icon_path=Path(icon_path) if icon_path else None,
            icon_scale=float(data.get("icon_scale", 1.0)),
        )


@dataclass
class AnimationConfig:
    """Top-level configuration for recording a track animation."""

    path: List[GeoPoint] = field(default_factory=list)
    title: str = ""
    marker: MarkerOptions = field(default_factory=MarkerOptions)
    vehicle: VehicleConfig = field(default_factory=VehicleConfig)
    frame_rate: int = 30
    output_path: Path = Path("track.webm")
    width: int = 1280
    height: int = 720
    margin_degrees: float = 0.5
    pause_at_start: float = 0.0
    pause_at_end: float = 1.0
    max_frames: Optional[int] = None

    @staticmethod
    def from_mapping(data: Dict[str, Any]) -> "AnimationConfig":
        raw_path = data.get("path", data.get("waypoints"))
        if raw_path is None:
            raise ValueError("Configuration must provide a 'path'.")
        path = normalize_path(raw_path)

        output_path = data.get("output") or data.get("output_path") or "track.webm"
        max_frames = data.get("max_frames")

        frame_rate = int(data.get("frame_rate", data.get("fps", 30)))
        if frame_rate <= 0:
            raise ValueError("frame_rate must be positive.")

        return AnimationConfig(
            path=path,
            title=data.get("title", ""),
            marker=MarkerOptions.from_mapping(data.get("marker")),
            vehicle=VehicleConfig.from_mapping(data.get("vehicle")),
            frame_rate=frame_rate,
            output_path=Path(output_path),
            width=int(data.get("width", 1280)),
            height=int(data.get("height", 720)),
            margin_degrees=float(data.get("margin_degrees", data.get("margin", 0.5))),
            pause_at_start=float(data.get("pause_at_start", 0.0)),
            pause_at_end=float(data.get("pause_at_end", 1.0)),
            max_frames=int(max_frames) if max_frames is not None else None,
        )


def _load_yaml(path: Path) -> Dict[str, Any]:
    import yaml

    with path.open("r", encoding="utf8") as handle:
        return yaml.safe_load(handle)


def load_config(path: Path) -> AnimationConfig:
    """Load an :class:`AnimationConfig` from a JSON or YAML file."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(path)

    if path.suffix.lower() in {".yaml", ".yml"}:
        raw = _load_yaml(path)
    else:
        with path.open("r", encoding="utf8") as handle:
            raw = json.load(handle)

    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping at the top level.")

    return AnimationConfig.from_mapping(raw)
