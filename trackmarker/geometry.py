"""Spherical geometry helpers shared by the path model and the renderer."""
from __future__ import annotations

import math
from itertools import accumulate
from typing import List, NamedTuple, Sequence, Tuple

Coordinate = Tuple[float, float]


EARTH_RADIUS_KM = 6371.0088


class GeoPoint(NamedTuple):
    """A latitude/longitude pair in degrees."""

    latitude: float
    longitude: float


def haversine_km(a: Coordinate, b: Coordinate) -> float:
    """Length in kilometres of the shortest arc between two points.

    This is the unit every path length, traveled distance and speed in the
    package is measured in.
    """

    phi1, lam1 = map(math.radians, a)
    phi2, lam2 = map(math.radians, b)
    half_dphi = math.sin((phi2 - phi1) / 2.0)
    half_dlam = math.sin((lam2 - lam1) / 2.0)
    h = half_dphi**2 + math.cos(phi1) * math.cos(phi2) * half_dlam**2
    return EARTH_RADIUS_KM * (2.0 * math.asin(min(1.0, math.sqrt(h))))


def interpolate_great_circle(a: Coordinate, b: Coordinate, fraction: float) -> GeoPoint:
    """Interpolate along the great-circle path between two coordinates.

    ``fraction`` is the share of the arc already covered, so the result sits
    ``fraction * haversine_km(a, b)`` kilometres from ``a``. The endpoints are
    returned unchanged for fractions at or beyond the ``[0, 1]`` bounds.
    """

    if fraction <= 0.0:
        return GeoPoint(*a)
    if fraction >= 1.0:
        return GeoPoint(*b)

    lat1, lon1 = map(math.radians, a)
    lat2, lon2 = map(math.radians, b)

    delta = 2.0 * math.asin(
        min(
            1.0,
            math.sqrt(
                math.sin((lat2 - lat1) / 2.0) ** 2
                + math.cos(lat1) * math.cos(lat2) * math.sin((lon2 - lon1) / 2.0) ** 2
            ),
        )
    )

    if delta == 0.0:
        return GeoPoint(*a)

    sin_delta = math.sin(delta)
    factor_a = math.sin((1 - fraction) * delta) / sin_delta
    factor_b = math.sin(fraction * delta) / sin_delta

    x = factor_a * math.cos(lat1) * math.cos(lon1) + factor_b * math.cos(lat2) * math.cos(lon2)
    y = factor_a * math.cos(lat1) * math.sin(lon1) + factor_b * math.cos(lat2) * math.sin(lon2)
    z = factor_a * math.sin(lat1) + factor_b * math.sin(lat2)

    lat = math.atan2(z, math.sqrt(x**2 + y**2))
    lon = math.atan2(y, x)

    return GeoPoint(math.degrees(lat), math.degrees(lon))


def bearing_degrees(a: Coordinate, b: Coordinate) -> float:
    """Heading a marker at ``a`` must face to travel towards ``b``.

    Degrees clockwise from north in ``[0, 360)``; 0 when the points coincide.
    """

    phi1, lam1 = map(math.radians, a)
    phi2, lam2 = map(math.radians, b)
    dlam = lam2 - lam1
    east = math.sin(dlam) * math.cos(phi2)
    north = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlam)
    return (math.degrees(math.atan2(east, north)) + 360.0) % 360.0


def cumulative_distances(points: Sequence[Coordinate]) -> List[float]:
    """Distance from the first point to each point, starting with ``0.0``.

    The last entry is the length of the whole path.
    """

    legs = (haversine_km(start, end) for start, end in zip(points, points[1:]))
    return list(accumulate(legs, initial=0.0))
