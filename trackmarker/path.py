"""Immutable geometric model of the path a marker travels along."""
from __future__ import annotations

from typing import Iterable, Tuple

from .errors import InvalidPathError
from .geometry import Coordinate, GeoPoint, cumulative_distances, haversine_km
from . import resolver

HEADING_SEGMENT = "segment"
HEADING_LOOKAHEAD = "lookahead"


class PathModel:
    """Ordered points with per-segment and cumulative great-circle lengths.

    Distances are kilometres. Segment ``i`` spans ``points[i]`` to
    ``points[i + 1]``; ``cumulative[i]`` is the distance from the first point
    to ``points[i]``, so ``cumulative[-1]`` is the total length.
    """

    __slots__ = ("_points", "_segment_lengths", "_cumulative")

    def __init__(self, points: Iterable[Coordinate]) -> None:
        coords = tuple(GeoPoint(float(lat), float(lon)) for lat, lon in points)
        if len(coords) < 2:
            raise InvalidPathError(
                f"A path needs at least two points, got {len(coords)}."
            )
        self._points: Tuple[GeoPoint, ...] = coords
        self._segment_lengths: Tuple[float, ...] = tuple(
            haversine_km(start, end) for start, end in zip(coords[:-1], coords[1:])
        )
        self._cumulative: Tuple[float, ...] = tuple(cumulative_distances(coords))

    def __repr__(self) -> str:
        return (
            f"PathModel(points={len(self._points)}, "
            f"total_length={self.total_length():.3f} km)"
        )

    @property
    def points(self) -> Tuple[GeoPoint, ...]:
        return self._points

    @property
    def segment_lengths(self) -> Tuple[float, ...]:
        return self._segment_lengths

    @property
    def cumulative(self) -> Tuple[float, ...]:
        return self._cumulative

    @property
    def segment_count(self) -> int:
        return len(self._points) - 1

    def total_length(self) -> float:
        return self._cumulative[-1]

    def clamp(self, distance: float) -> float:
        """Clamp ``distance`` into ``[0, total_length()]``."""

        return min(max(distance, 0.0), self.total_length())

    def segment_index(self, distance: float) -> int:
        return resolver.segment_index_at(self, self.clamp(distance))

    def resolve(
        self,
        distance: float,
        heading_mode: str = HEADING_SEGMENT,
        lookahead_km: float = resolver.DEFAULT_LOOKAHEAD_KM,
    ) -> Tuple[GeoPoint, float]:
        """Return the point and heading reached after travelling ``distance`` km.

        Out-of-range distances are clamped rather than rejected. With the
        default ``"segment"`` mode the heading is the bearing of the occupied
        segment; ``"lookahead"`` probes ``lookahead_km`` further along the path.
        """

        distance = self.clamp(distance)
        point, heading = resolver.resolve_position(self, distance)
        if heading_mode == HEADING_LOOKAHEAD:
            heading = resolver.lookahead_heading(self, distance, lookahead_km)
        elif heading_mode != HEADING_SEGMENT:
            raise ValueError(f"Unknown heading mode: {heading_mode!r}")
        return point, heading
