"""Normalisation of the path representations accepted by :class:`TrackEntity`.

Three shapes are understood:

* a sequence of ``(lat, lon)`` pairs, or of mappings with ``lat``/``latitude``
  and ``lon``/``lng``/``longitude`` keys;
* a GeoJSON ``LineString`` (or ``MultiLineString``, whose first line is used),
  bare or wrapped in a ``Feature``;
* a GeoJSON ``FeatureCollection`` or ``GeometryCollection``, from which the
  first path-shaped member is taken.

GeoJSON positions are ``[lon, lat]``; every other shape is latitude first.
"""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional, Sequence

from .errors import InvalidPathError
from .geometry import GeoPoint

_LATITUDE_KEYS = ("lat", "latitude")
_LONGITUDE_KEYS = ("lon", "lng", "longitude")


def normalize_path(data: Any) -> List[GeoPoint]:
    """Return the points of ``data`` as :class:`GeoPoint` values.

    Raises :class:`InvalidPathError` when no path-shaped geometry is found or
    it has fewer than two points.
    """

    if isinstance(data, Mapping):
        coordinates = _line_from_geojson(data)
        if coordinates is None:
            raise InvalidPathError("No LineString geometry found in the supplied path data.")
        points = [_from_position(position) for position in coordinates]
    elif isinstance(data, Iterable) and not isinstance(data, (str, bytes)):
        points = [_from_pair(item) for item in data]
    else:
        raise InvalidPathError(f"Unsupported path data of type {type(data).__name__}.")

    if len(points) < 2:
        raise InvalidPathError(f"A path needs at least two points, got {len(points)}.")
    return points


def _line_from_geojson(obj: Mapping[str, Any]) -> Optional[Sequence[Any]]:
    kind = obj.get("type")
    if kind == "LineString":
        return obj.get("coordinates") or []
    if kind == "MultiLineString":
        lines = obj.get("coordinates") or []
        return lines[0] if lines else None
    if kind == "Feature":
        geometry = obj.get("geometry")
        return _line_from_geojson(geometry) if isinstance(geometry, Mapping) else None
    if kind in ("FeatureCollection", "GeometryCollection"):
        members = obj.get("features") if kind == "FeatureCollection" else obj.get("geometries")
        for member in members or []:
            if isinstance(member, Mapping):
                line = _line_from_geojson(member)
                if line is not None:
                    return line
    return None


def _from_position(position: Any) -> GeoPoint:
    try:
        lon, lat = position[0], position[1]
        return GeoPoint(float(lat), float(lon))
    except (TypeError, ValueError, IndexError) as exc:
        raise InvalidPathError(f"Invalid GeoJSON position: {position!r}") from exc


def _from_pair(item: Any) -> GeoPoint:
    if isinstance(item, Mapping):
        lat = _first_key(item, _LATITUDE_KEYS)
        lon = _first_key(item, _LONGITUDE_KEYS)
        if lat is None or lon is None:
            raise InvalidPathError(f"Point mapping missing latitude/longitude: {item!r}")
    else:
        try:
            lat, lon = item
        except (TypeError, ValueError) as exc:
            raise InvalidPathError(f"Expected a (lat, lon) pair, got {item!r}") from exc
    try:
        return GeoPoint(float(lat), float(lon))
    except (TypeError, ValueError) as exc:
        raise InvalidPathError(f"Non-numeric coordinate in {item!r}") from exc


def _first_key(item: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        if key in item:
            return item[key]
    return None
