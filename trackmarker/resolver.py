"""Map a traveled distance onto a point and heading of a :class:`PathModel`.

These are pure functions over the read-only path model. Distances are
expected to be clamped into ``[0, total_length]`` by the caller; see
:meth:`PathModel.resolve`.
"""
from __future__ import annotations

import bisect
from typing import TYPE_CHECKING, Tuple

from .geometry import GeoPoint, bearing_degrees, interpolate_great_circle

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .path import PathModel

# One metre, the probe distance used for forward-looking headings.
DEFAULT_LOOKAHEAD_KM = 0.001


def segment_index_at(path: "PathModel", distance: float) -> int:
    """Return the index of the segment occupied after ``distance`` km.

    This is the first segment whose cumulative end is at or beyond
    ``distance``. The end of the path always maps to the last segment, so the
    index never decreases as the distance grows.
    """

    last = path.segment_count - 1
    if distance <= 0.0:
        return 0
    if distance >= path.total_length():
        return last
    # cumulative[i + 1] is where segment i ends.
    index = bisect.bisect_left(path.cumulative, distance, 1) - 1
    return min(index, last)


def resolve_position(path: "PathModel", distance: float) -> Tuple[GeoPoint, float]:
    """Interpolate the point at ``distance`` and the bearing of its segment."""

    index = segment_index_at(path, distance)
    start = path.points[index]
    end = path.points[index + 1]
    heading = bearing_degrees(start, end)

    if distance <= 0.0:
        return path.points[0], heading
    if distance >= path.total_length():
        return path.points[-1], heading

    length = path.segment_lengths[index]
    if length > 0.0:
        fraction = (distance - path.cumulative[index]) / length
    else:
        fraction = 1.0
    return interpolate_great_circle(start, end, fraction), heading


def lookahead_heading(
    path: "PathModel", distance: float, epsilon: float = DEFAULT_LOOKAHEAD_KM
) -> float:
    """Approximate the local direction of travel with a short probe.

    The probe runs ``epsilon`` km ahead of ``distance``; near the end of the
    path it runs backwards instead. When both probe points coincide the
    segment heading is returned.
    """

    if epsilon <= 0.0:
        raise ValueError("The lookahead distance must be positive.")

    here, segment_heading = resolve_position(path, distance)
    if distance + epsilon <= path.total_length():
        ahead, _ = resolve_position(path, distance + epsilon)
        start, end = here, ahead
    else:
        behind, _ = resolve_position(path, max(distance - epsilon, 0.0))
        start, end = behind, here

    if start == end:
        return segment_heading
    return bearing_degrees(start, end)
