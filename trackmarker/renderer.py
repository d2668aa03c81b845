"""Matplotlib renderer that draws the marker on a simple lat/lon canvas."""
from __future__ import annotations

from typing import List, Optional, Tuple

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.offsetbox import AnnotationBbox, OffsetImage
import numpy as np

from .config import VehicleConfig
from .geometry import GeoPoint
from .icons import load_vehicle_icon, rotate_icon
from .path import PathModel

Coordinate = Tuple[float, float]


class MapMarkerRenderer:
    """Draw a path, the trail travelled so far and a rotating marker icon.

    Instances are renderer callbacks for :class:`~trackmarker.entity.TrackEntity`:
    calling one with ``(point, heading)`` moves the icon to the point and, when
    ``rotation`` is enabled, turns it to the heading. The position lives on the
    annotation artist and the rotation on the icon image, so neither update
    disturbs the other.
    """

    def __init__(
        self,
        path: PathModel,
        vehicle: Optional[VehicleConfig] = None,
        width: int = 1280,
        height: int = 720,
        margin_degrees: float = 0.5,
        rotation: bool = True,
        title: str = "",
    ) -> None:
        self.rotation = rotation
        self.position: Optional[GeoPoint] = None
        self.heading: Optional[float] = None
        self._path = path
        self._width = width
        self._height = height
        self._margin = margin_degrees
        self._title = title
        self._icon = load_vehicle_icon(vehicle or VehicleConfig())
        self._icon_heading: Optional[float] = None
        self._trail: List[Coordinate] = []
        self._setup_canvas()

    def __call__(self, point: GeoPoint, heading: float) -> None:
        self.on_position_update(point, heading)

    # ------------------------------------------------------------------
    # Renderer callback
    # ------------------------------------------------------------------

    def on_position_update(self, point: GeoPoint, heading: float) -> None:
        self.position = point
        self.heading = heading
        self._trail.append((point.latitude, point.longitude))
        self._trail_line.set_data(
            [lon for _, lon in self._trail], [lat for lat, _ in self._trail]
        )
        self._vehicle_artist.xy = (point.longitude, point.latitude)

        target = heading if self.rotation else 0.0
        if target != self._icon_heading:
            self._vehicle_image_box.set_data(rotate_icon(self._icon, target))
            self._icon_heading = target

    def clear_trail(self) -> None:
        self._trail.clear()
        self._trail_line.set_data([], [])

    @property
    def trail(self) -> List[Coordinate]:
        return list(self._trail)

    # ------------------------------------------------------------------
    # Canvas
    # ------------------------------------------------------------------

    def capture_frame(self) -> np.ndarray:
        """Draw the canvas and return it as an RGBA array."""

        self._fig.canvas.draw()
        return np.asarray(self._fig.canvas.buffer_rgba()).copy()

    def close(self) -> None:
        plt.close(self._fig)

    def _setup_canvas(self) -> None:
        dpi = 100
        figsize = (self._width / dpi, self._height / dpi)
        self._fig, self._ax = plt.subplots(figsize=figsize, dpi=dpi)
        self._fig.patch.set_facecolor("#06142a")
        self._ax.set_facecolor("#0a1f3f")

        self._ax.set_xticks([])
        self._ax.set_yticks([])

        lats = [point.latitude for point in self._path.points]
        lons = [point.longitude for point in self._path.points]
        self._ax.plot(lons, lats, color="#66ff99", linewidth=1.5, linestyle="--")
        self._ax.scatter(lons, lats, color="#d5e5ff", s=8, zorder=2)

        if self._title:
            self._ax.set_title(self._title, color="white", fontsize=16, pad=16)

        self._trail_line, = self._ax.plot([], [], color="#ff5555", linewidth=3, solid_capstyle="round")

        zoom = max(self._width, self._height) / 4000.0
        self._vehicle_image_box = OffsetImage(self._icon, zoom=zoom)
        first = self._path.points[0]
        self._vehicle_artist = AnnotationBbox(
            self._vehicle_image_box,
            (first.longitude, first.latitude),
            frameon=False,
            zorder=3,
        )
        self._ax.add_artist(self._vehicle_artist)

        self._ax.set_xlim(min(lons) - self._margin, max(lons) + self._margin)
        self._ax.set_ylim(min(lats) - self._margin, max(lats) + self._margin)

        self._fig.tight_layout()
