"""Record a track marker animation to a video file."""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterator

import imageio.v2 as imageio
import numpy as np

from .config import AnimationConfig
from .entity import TrackEntity
from .path import PathModel
from .renderer import MapMarkerRenderer
from .scheduler import ManualScheduler

_logger = logging.getLogger(__name__)


class TrackRecorder:
    """Drive a :class:`TrackEntity` with a frame-stepped clock and capture each frame.

    Frames are synthetic and evenly spaced, so the entity's per-frame delta cap
    is raised to at least one frame interval; otherwise a low frame rate would
    slow the marker down.
    """

    def __init__(self, config: AnimationConfig) -> None:
        self.config = config
        self.scheduler = ManualScheduler()
        path = PathModel(config.path)
        self.renderer = MapMarkerRenderer(
            path,
            config.vehicle,
            width=config.width,
            height=config.height,
            margin_degrees=config.margin_degrees,
            rotation=config.marker.rotation,
            title=config.title,
        )
        options = replace(
            config.marker,
            auto_play=False,
            max_delta=max(config.marker.max_delta, self.frame_interval_ms / 1000.0),
        )
        self.entity = TrackEntity(path, self.scheduler, self.renderer, options)
        self.entity.on("reset", lambda event: self.renderer.clear_trail())

    @property
    def frame_interval_ms(self) -> float:
        return 1000.0 / self.config.frame_rate

    def frames(self) -> Iterator[np.ndarray]:
        """Yield the start hold, every playback frame, then the end hold."""

        fps = self.config.frame_rate
        for _ in range(int(round(self.config.pause_at_start * fps))):
            yield self.renderer.capture_frame()

        yield self.renderer.capture_frame()
        self.entity.play()
        stepped = 0
        max_frames = self.config.max_frames
        while self.scheduler.pending and (max_frames is None or stepped < max_frames):
            self.scheduler.advance(self.frame_interval_ms)
            stepped += 1
            yield self.renderer.capture_frame()

        if self.scheduler.pending:
            _logger.info("Stopped recording at the %d frame limit", stepped)
            self.entity.pause()

        for _ in range(int(round(self.config.pause_at_end * fps))):
            yield self.renderer.capture_frame()

    def render(self) -> Path:
        output_path = Path(self.config.output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            writer_ctx = imageio.get_writer(
                output_path,
                fps=self.config.frame_rate,
                codec="libx264",
                format="FFMPEG",
                macro_block_size=None,
                quality=8,
            )
        except ImportError as exc:
            raise ImportError(
                "FFMPEG support is required to export videos. Install the "
                "'imageio-ffmpeg' package (for example via 'pip install "
                "imageio-ffmpeg') and try again."
            ) from exc

        written = 0
        try:
            with writer_ctx as writer:
                for image in self.frames():
                    writer.append_data(image)
                    written += 1
        finally:
            self.entity.remove()
            self.renderer.close()

        _logger.info("Wrote %d frames to %s", written, output_path)
        return output_path
