"""Polygon metrics activity.

Computes geodesic area (m²), geodesic perimeter (m), areal centroid and
roundness for one Polygon feature.

Area and perimeter use ``pyproj.Geod`` on the WGS 84 ellipsoid, so they
are accurate at any latitude and independent of winding order.  Holes
are subtracted from the area and their boundaries are added to the
perimeter (the polygon boundary is every ring).

Degenerate input never raises: a ring with fewer than three distinct
vertices contributes nothing, and any non-finite result resolves to 0
with a ``DegenerateGeometryWarning`` recorded on the metrics.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from footprint_metrics.core.constants import MIN_RING_COORDS
from footprint_metrics.models.metrics import DegenerateGeometryWarning, PolygonMetrics
from footprint_metrics.utils.coordinates import (
    is_closed_ring,
    iter_positions,
    unwrap_longitudes,
    wrap_longitude,
)

if TYPE_CHECKING:
    from footprint_metrics.models.feature import PolygonFeature

logger = logging.getLogger("footprint_metrics.activities.polygon_metrics")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compute_polygon_metrics(feature: PolygonFeature) -> PolygonMetrics:
    """Compute area, perimeter, centroid and roundness for *feature*.

    Args:
        feature: A normalized Polygon feature.

    Returns:
        A PolygonMetrics record.  Never raises for degenerate geometry.
    """
    rings = feature.rings
    exterior = feature.exterior_coords
    holes = feature.interior_coords
    warnings: list[DegenerateGeometryWarning] = []

    if is_closed_ring(exterior):
        area = compute_geodesic_area_sqm(exterior, interior_rings=holes)
        perimeter = compute_geodesic_perimeter_m([exterior, *holes])
    else:
        warnings.append(
            DegenerateGeometryWarning(
                "DEGENERATE_RING",
                f"Outer ring has {len(exterior)} usable coordinate(s); area and perimeter set to 0",
            )
        )
        area = 0.0
        perimeter = 0.0

    if not math.isfinite(area) or area < 0:
        area = 0.0
    if not math.isfinite(perimeter) or perimeter < 0:
        perimeter = 0.0
    if perimeter == 0 and not warnings:
        warnings.append(DegenerateGeometryWarning("ZERO_PERIMETER", "Polygon perimeter is 0"))

    centroid_lon, centroid_lat = compute_centroid(exterior, interior_rings=holes, all_rings=rings)
    roundness = compute_roundness(area, perimeter)

    return PolygonMetrics(
        area_sqm=area,
        perimeter_m=perimeter,
        centroid_lon=centroid_lon,
        centroid_lat=centroid_lat,
        roundness=roundness,
        warnings=tuple(warnings),
    )


# ---------------------------------------------------------------------------
# Geodesic area and perimeter
# ---------------------------------------------------------------------------


def compute_geodesic_area_sqm(
    exterior_coords: list[tuple[float, float]],
    interior_rings: list[list[tuple[float, float]]] | None = None,
) -> float:
    """Compute geodesic polygon area in square metres.

    Uses pyproj.Geod on the WGS 84 ellipsoid.  Returns absolute area
    (winding-order agnostic) with holes subtracted, clamped at 0.
    """
    if len(exterior_coords) < MIN_RING_COORDS:
        return 0.0

    from pyproj import Geod

    geod = Geod(ellps="WGS84")

    ext_lons = [c[0] for c in exterior_coords]
    ext_lats = [c[1] for c in exterior_coords]
    area_m2, _perimeter = geod.polygon_area_perimeter(ext_lons, ext_lats)
    total_area = abs(area_m2)

    for ring in interior_rings or []:
        if len(ring) >= MIN_RING_COORDS:
            hole_lons = [c[0] for c in ring]
            hole_lats = [c[1] for c in ring]
            hole_area_m2, _ = geod.polygon_area_perimeter(hole_lons, hole_lats)
            total_area -= abs(hole_area_m2)

    return max(total_area, 0.0)


def compute_geodesic_perimeter_m(rings: list[list[tuple[float, float]]]) -> float:
    """Compute the total geodesic boundary length of *rings* in metres."""
    from pyproj import Geod

    geod = Geod(ellps="WGS84")

    total = 0.0
    for ring in rings:
        if len(ring) < 2:
            continue
        lons = [c[0] for c in ring]
        lats = [c[1] for c in ring]
        total += geod.line_length(lons, lats)
    return total


# ---------------------------------------------------------------------------
# Centroid
# ---------------------------------------------------------------------------


def compute_centroid(
    coords: list[tuple[float, float]],
    interior_rings: list[list[tuple[float, float]]] | None = None,
    *,
    all_rings: list[list[tuple[float, float]]] | None = None,
) -> tuple[float, float]:
    """Compute the areal centroid of a polygon using Shapely.

    Falls back to the mean of the distinct vertices when the polygon has
    no area, and to ``(0.0, 0.0)`` when there are no vertices at all.
    Footprints crossing the antimeridian are measured with longitudes
    unwrapped past 180°, and the result is wrapped back.

    Returns:
        Centroid as ``(lon, lat)``.
    """
    from shapely.errors import GEOSException
    from shapely.geometry import MultiPoint, Polygon

    holes = interior_rings or []
    vertex_rings = all_rings if all_rings is not None else [coords]
    shifted = unwrap_longitudes([coords, *holes, *vertex_rings])
    coords = shifted[0]
    holes = shifted[1 : 1 + len(holes)]
    vertex_rings = shifted[1 + len(holes) :]

    if is_closed_ring(coords):
        try:
            poly = Polygon(coords, holes=holes or None)
            if not poly.is_empty and poly.area > 0:
                centroid = poly.centroid
                if math.isfinite(centroid.x) and math.isfinite(centroid.y):
                    return (wrap_longitude(centroid.x), centroid.y + 0.0)
        except (ValueError, GEOSException) as exc:
            logger.debug("Shapely centroid failed, using vertex mean: %s", exc)

    vertices = list(iter_positions(vertex_rings))
    if not vertices:
        return (0.0, 0.0)
    centroid = MultiPoint(vertices).centroid
    return (wrap_longitude(centroid.x), centroid.y + 0.0)


# ---------------------------------------------------------------------------
# Roundness
# ---------------------------------------------------------------------------


def compute_roundness(area_sqm: float, perimeter_m: float) -> float:
    """Isoperimetric ratio ``4π·area / perimeter²``; 0 when perimeter is 0.

    Not clamped: values slightly above 1 from numerical noise are kept.
    """
    if not perimeter_m > 0 or not math.isfinite(perimeter_m):
        return 0.0
    roundness = (4 * math.pi * area_sqm) / (perimeter_m * perimeter_m)
    return roundness if math.isfinite(roundness) else 0.0
