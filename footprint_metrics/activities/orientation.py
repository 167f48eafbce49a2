"""Principal-axis orientation activity.

Estimates a polygon's dominant linear axis as a compass bearing in
degrees ``[0, 360)`` (0 = north, 90 = east).

Latitude/longitude is neither angle- nor distance-preserving, so the
vertices are first projected into the UTM zone containing the polygon
centroid (6° longitude bands numbered 1-60, hemisphere by centroid
latitude).  The dominant eigenvector of the 2×2 population covariance
of the projected vertices is then found analytically.

Failure policy:
    ``compute_orientation`` never raises.  Projection or decomposition
    failures come back as an ``OrientationResult`` carrying a
    ``ProjectionError``; ``estimate_orientation`` logs the error and
    collapses it to a 0° bearing so the batch is never aborted.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from footprint_metrics.core.exceptions import ProjectionError
from footprint_metrics.models.metrics import DegenerateGeometryWarning
from footprint_metrics.utils.coordinates import is_closed_ring, iter_positions

if TYPE_CHECKING:
    from footprint_metrics.models.feature import PolygonFeature

logger = logging.getLogger("footprint_metrics.activities.orientation")

# Below this magnitude the covariance is treated as axis-aligned.
COVARIANCE_EPSILON = 1e-9

UTM_ZONE_WIDTH_DEG = 6.0
UTM_ZONE_COUNT = 60


@dataclass(frozen=True, slots=True)
class OrientationResult:
    """Outcome of the projection/decomposition step.

    Exactly one of ``bearing_deg`` or ``error`` is set.  ``warning`` is
    present when a degenerate case resolved to 0° without failing.
    """

    bearing_deg: float | None = None
    error: ProjectionError | None = None
    warning: DegenerateGeometryWarning | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def value(self) -> float:
        """The bearing, or 0.0 for a failed result."""
        return self.bearing_deg if self.bearing_deg is not None else 0.0

    @property
    def warnings(self) -> tuple[DegenerateGeometryWarning, ...]:
        """Warnings to attach to the enriched feature."""
        if self.error is not None:
            return (DegenerateGeometryWarning(self.error.code, self.error.message),)
        if self.warning is not None:
            return (self.warning,)
        return ()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def estimate_orientation(
    feature: PolygonFeature,
    centroid: tuple[float, float],
) -> OrientationResult:
    """Estimate the orientation of *feature*, never failing.

    Args:
        feature: A normalized Polygon feature.
        centroid: ``(lon, lat)`` used to select the UTM zone.

    Returns:
        An OrientationResult whose ``value`` is always a bearing in
        ``[0, 360)``; failures are logged and resolve to 0.
    """
    # Degenerate rings (fewer than three distinct vertices) define no axis
    rings = [ring for ring in feature.rings if is_closed_ring(ring)]
    result = compute_orientation(rings, centroid)
    if result.error is not None:
        logger.warning(
            "Orientation calculation failed | feature_id=%s | code=%s | %s",
            feature.feature_id,
            result.error.code,
            result.error.message,
        )
    return result


def compute_orientation(
    rings: list[list[tuple[float, float]]],
    centroid: tuple[float, float],
) -> OrientationResult:
    """Project every ring vertex to UTM and compute the principal-axis bearing.

    Any exception raised during projection or decomposition is returned
    as a ``ProjectionError`` inside the result.
    """
    try:
        points = project_to_utm(list(iter_positions(rings)), centroid)
        return compute_principal_axis(points)
    except ProjectionError as exc:
        return OrientationResult(error=exc)
    except Exception as exc:  # noqa: BLE001
        return OrientationResult(
            error=ProjectionError(f"Orientation calculation failed: {exc}"),
        )


# ---------------------------------------------------------------------------
# Local projection
# ---------------------------------------------------------------------------


def get_utm_zone(lon: float) -> int:
    """UTM zone number (1-60) for a longitude in degrees."""
    zone_number = math.floor((lon + 180) / UTM_ZONE_WIDTH_DEG) + 1
    # Clamp to valid range 1-60 (lon = 180 would otherwise be zone 61)
    return max(1, min(UTM_ZONE_COUNT, zone_number))


def get_utm_crs(lon: float, lat: float) -> str:
    """Determine the UTM CRS for a given WGS 84 coordinate.

    Returns an EPSG code like ``"EPSG:32610"`` (UTM zone 10N) or
    ``"EPSG:32710"`` (UTM zone 10S).
    """
    if not (math.isfinite(lon) and math.isfinite(lat)):
        msg = f"Cannot select a UTM zone for centroid ({lon}, {lat})"
        raise ProjectionError(msg)

    zone_number = get_utm_zone(lon)
    if lat >= 0:
        # Northern hemisphere: EPSG:326xx
        return f"EPSG:{32600 + zone_number}"
    # Southern hemisphere: EPSG:327xx
    return f"EPSG:{32700 + zone_number}"


def project_to_utm(
    positions: list[tuple[float, float]],
    centroid: tuple[float, float],
) -> list[tuple[float, float]]:
    """Project ``(lon, lat)`` positions into the centroid's UTM zone (metres).

    Raises:
        ProjectionError: If the zone cannot be chosen or a projected
            coordinate is not finite.
    """
    if not positions:
        return []

    utm_crs = get_utm_crs(*centroid)

    from pyproj import Transformer

    to_utm = Transformer.from_crs("EPSG:4326", utm_crs, always_xy=True)
    xs, ys = to_utm.transform(
        [p[0] for p in positions],
        [p[1] for p in positions],
        errcheck=True,
    )

    projected = list(zip(xs, ys, strict=True))
    if not all(math.isfinite(x) and math.isfinite(y) for x, y in projected):
        msg = f"Projection to {utm_crs} produced non-finite coordinates"
        raise ProjectionError(msg)
    return projected


# ---------------------------------------------------------------------------
# Covariance eigen-decomposition
# ---------------------------------------------------------------------------


def compute_principal_axis(points: list[tuple[float, float]]) -> OrientationResult:
    """Bearing of the dominant eigenvector of the points' covariance.

    Works on planar ``(x, y)`` points where +y is north.  Fewer than two
    points or a zero-length axis vector resolve to 0° with a warning.
    """
    n = len(points)
    if n < 2:
        return OrientationResult(
            bearing_deg=0.0,
            warning=DegenerateGeometryWarning(
                "TOO_FEW_POINTS", f"{n} projected point(s); orientation set to 0"
            ),
        )

    mean_x = sum(p[0] for p in points) / n
    mean_y = sum(p[1] for p in points) / n

    sxx = syy = sxy = 0.0
    for x, y in points:
        dx = x - mean_x
        dy = y - mean_y
        sxx += dx * dx
        syy += dy * dy
        sxy += dx * dy
    sxx /= n
    syy /= n
    sxy /= n

    trace = sxx + syy
    det = sxx * syy - sxy * sxy
    # Clamped: rounding can push a repeated eigenvalue's discriminant below 0
    discriminant = max(trace * trace * 0.25 - det, 0.0)
    lambda1 = trace * 0.5 + math.sqrt(discriminant)

    if abs(sxy) > COVARIANCE_EPSILON:
        vx = lambda1 - syy
        vy = sxy
    elif sxx >= syy:
        vx, vy = 1.0, 0.0
    else:
        vx, vy = 0.0, 1.0

    length = math.hypot(vx, vy)
    if length == 0 or not math.isfinite(length):
        return OrientationResult(
            bearing_deg=0.0,
            warning=DegenerateGeometryWarning("ZERO_AXIS", "Principal axis has zero length"),
        )

    return OrientationResult(bearing_deg=vector_to_bearing(vx / length, vy / length))


def vector_to_bearing(vx: float, vy: float) -> float:
    """Compass bearing of a planar vector, in ``[0, 360)``.

    ``atan2(x, y)`` rather than ``atan2(y, x)``: bearing 0 is the +y axis.
    """
    angle = math.degrees(math.atan2(vx, vy))
    if angle < 0:
        angle += 360.0
    if angle >= 360.0:
        angle -= 360.0
    return angle + 0.0
