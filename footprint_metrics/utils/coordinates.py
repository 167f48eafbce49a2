"""Coordinate coercion and ring cleaning helpers.

GeoJSON arrives from users and may carry malformed positions, repeated
vertices or unclosed rings.  These helpers never raise: anything that
cannot be read as a finite ``(lon, lat)`` pair is dropped, and a ring
that is already degenerate is passed through best-effort.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from footprint_metrics.core.constants import MIN_RING_COORDS


def coords_to_tuples(raw_coords: object) -> list[tuple[float, float]]:
    """Convert a GeoJSON position array to ``(lon, lat)`` tuples.

    Drops altitude (third element) if present.  Positions that are not
    sequences of at least two finite numbers are skipped.
    """
    if not isinstance(raw_coords, list | tuple):
        return []
    coords: list[tuple[float, float]] = []
    for c in raw_coords:
        position = _to_position(c)
        if position is not None:
            coords.append(position)
    return coords


def rings_to_tuples(raw_rings: object) -> list[list[tuple[float, float]]]:
    """Convert Polygon ``coordinates`` (a list of rings) to tuple rings."""
    if not isinstance(raw_rings, list | tuple):
        return []
    return [coords_to_tuples(ring) for ring in raw_rings]


def clean_ring(coords: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Remove consecutive duplicate vertices and close the ring.

    Closure is only added when at least three distinct vertices remain;
    shorter rings are returned de-duplicated but otherwise untouched.
    """
    cleaned: list[tuple[float, float]] = []
    for point in coords:
        if not cleaned or cleaned[-1] != point:
            cleaned.append(point)

    distinct = cleaned[:-1] if len(cleaned) > 1 and cleaned[0] == cleaned[-1] else cleaned
    if len(distinct) >= 3 and cleaned[0] != cleaned[-1]:
        cleaned.append(cleaned[0])
    return cleaned


def ring_vertices(ring: list[tuple[float, float]]) -> list[tuple[float, float]]:
    """Return the vertices of a ring without its closing repeat."""
    if len(ring) > 1 and ring[0] == ring[-1]:
        return ring[:-1]
    return list(ring)


def iter_positions(rings: Iterable[list[tuple[float, float]]]) -> Iterable[tuple[float, float]]:
    """Yield every vertex of every ring, closing repeats excluded."""
    for ring in rings:
        yield from ring_vertices(ring)


def _to_position(value: object) -> tuple[float, float] | None:
    if not isinstance(value, list | tuple) or len(value) < 2:
        return None
    lon_raw, lat_raw = value[0], value[1]
    if isinstance(lon_raw, bool) or isinstance(lat_raw, bool):
        return None
    if not isinstance(lon_raw, int | float) or not isinstance(lat_raw, int | float):
        return None
    lon = float(lon_raw)
    lat = float(lat_raw)
    if not (math.isfinite(lon) and math.isfinite(lat)):
        return None
    return (lon, lat)


def is_closed_ring(ring: list[tuple[float, float]]) -> bool:
    """True if *ring* is closed and has at least four positions (3 vertices + closure)."""
    return len(ring) >= MIN_RING_COORDS and ring[0] == ring[-1]


def unwrap_longitudes(rings: list[list[tuple[float, float]]]) -> list[list[tuple[float, float]]]:
    """Shift negative longitudes by +360 when the rings span more than 180°.

    A footprint crossing the antimeridian (e.g. 179.999 to -179.999) is
    then contiguous in planar ``(lon, lat)`` space.  Other rings are
    returned unchanged.
    """
    lons = [lon for ring in rings for lon, _lat in ring]
    if not lons or max(lons) - min(lons) <= 180.0:
        return rings
    return [[(lon + 360.0 if lon < 0 else lon, lat) for lon, lat in ring] for ring in rings]


def wrap_longitude(lon: float) -> float:
    """Normalize a longitude into ``[-180, 180)``; ``-0.0`` becomes ``0.0``."""
    if not -180.0 <= lon < 180.0:
        lon = ((lon + 180.0) % 360.0) - 180.0
    return lon + 0.0
