"""Unit tests for the polygon metrics engine.

Tests geodesic area and perimeter (m², m), areal centroid, roundness,
hole handling, winding independence and degenerate-ring fallbacks.
"""

from __future__ import annotations

import math

import pytest

from footprint_metrics.activities.orientation import estimate_orientation
from footprint_metrics.activities.polygon_metrics import (
    compute_centroid,
    compute_geodesic_area_sqm,
    compute_geodesic_perimeter_m,
    compute_polygon_metrics,
    compute_roundness,
)
from footprint_metrics.models.feature import PolygonFeature
from tests.conftest import (
    COURTYARD_HOLE_RING,
    COURTYARD_OUTER_RING,
    EAST_WEST_RECTANGLE_RING,
    EQUATOR_SQUARE_RING,
)


def _tuples(ring: list[list[float]]) -> list[tuple[float, float]]:
    return [(c[0], c[1]) for c in ring]


def _feature(*rings: list[list[float]]) -> PolygonFeature:
    return PolygonFeature(coordinates=[list(r) for r in rings])


# ===========================================================================
# Equator square (1000 m x 1000 m)
# ===========================================================================


class TestEquatorSquare:
    """A 1 km square at the equator."""

    def test_area_is_one_square_kilometre(self) -> None:
        metrics = compute_polygon_metrics(_feature(EQUATOR_SQUARE_RING))
        assert metrics.area_sqm == pytest.approx(1_000_000, rel=5e-3)

    def test_perimeter_is_four_kilometres(self) -> None:
        metrics = compute_polygon_metrics(_feature(EQUATOR_SQUARE_RING))
        assert metrics.perimeter_m == pytest.approx(4000, rel=5e-3)

    def test_roundness_is_quarter_pi(self) -> None:
        metrics = compute_polygon_metrics(_feature(EQUATOR_SQUARE_RING))
        assert metrics.roundness == pytest.approx(math.pi / 4, rel=1e-2)

    def test_centroid_is_square_centre(self) -> None:
        metrics = compute_polygon_metrics(_feature(EQUATOR_SQUARE_RING))
        assert metrics.centroid_lon == pytest.approx(0.0089832 / 2, abs=1e-7)
        assert metrics.centroid_lat == pytest.approx(0.0090437 / 2, abs=1e-7)

    def test_no_warnings(self) -> None:
        metrics = compute_polygon_metrics(_feature(EQUATOR_SQUARE_RING))
        assert metrics.warnings == ()


# ===========================================================================
# Geodesic area
# ===========================================================================


class TestGeodesicArea:
    """Area in square metres from pyproj.Geod."""

    def test_rectangle_area(self) -> None:
        """~205 m x 50 m at 45° N."""
        area = compute_geodesic_area_sqm(_tuples(EAST_WEST_RECTANGLE_RING))
        assert 9_500 < area < 11_000, f"Expected ~10 250 m², got {area:.0f}"

    def test_reversed_winding_same_area(self) -> None:
        area_cw = compute_geodesic_area_sqm(_tuples(EAST_WEST_RECTANGLE_RING))
        area_ccw = compute_geodesic_area_sqm(list(reversed(_tuples(EAST_WEST_RECTANGLE_RING))))
        assert area_cw == pytest.approx(area_ccw, rel=1e-9)
        assert area_cw > 0

    def test_hole_subtracts_area(self) -> None:
        outer = compute_geodesic_area_sqm(_tuples(COURTYARD_OUTER_RING))
        hole = compute_geodesic_area_sqm(_tuples(COURTYARD_HOLE_RING))
        with_hole = compute_geodesic_area_sqm(
            _tuples(COURTYARD_OUTER_RING), interior_rings=[_tuples(COURTYARD_HOLE_RING)]
        )
        assert with_hole == pytest.approx(outer - hole, rel=1e-9)
        assert with_hole < outer

    def test_hole_larger_than_outer_clamps_to_zero(self) -> None:
        area = compute_geodesic_area_sqm(
            _tuples(COURTYARD_HOLE_RING), interior_rings=[_tuples(COURTYARD_OUTER_RING)]
        )
        assert area == 0.0

    def test_too_few_coords_is_zero(self) -> None:
        assert compute_geodesic_area_sqm([(0.0, 0.0), (1.0, 1.0)]) == 0.0


# ===========================================================================
# Perimeter
# ===========================================================================


class TestGeodesicPerimeter:
    """Boundary length in metres, every ring included."""

    def test_rectangle_perimeter(self) -> None:
        perimeter = compute_geodesic_perimeter_m([_tuples(EAST_WEST_RECTANGLE_RING)])
        # 2 x (205 + 50) m
        assert 500 < perimeter < 520, f"Expected ~510 m, got {perimeter:.1f}"

    def test_hole_boundary_adds_to_perimeter(self) -> None:
        outer = compute_geodesic_perimeter_m([_tuples(COURTYARD_OUTER_RING)])
        hole = compute_geodesic_perimeter_m([_tuples(COURTYARD_HOLE_RING)])
        both = compute_geodesic_perimeter_m(
            [_tuples(COURTYARD_OUTER_RING), _tuples(COURTYARD_HOLE_RING)]
        )
        assert both == pytest.approx(outer + hole, rel=1e-9)

    def test_empty_rings_zero(self) -> None:
        assert compute_geodesic_perimeter_m([[], [(1.0, 1.0)]]) == 0.0


# ===========================================================================
# Centroid
# ===========================================================================


class TestCentroid:
    """Areal centroid with vertex-mean fallback."""

    def test_hole_shifts_centroid(self) -> None:
        """An off-centre hole moves the areal centroid away from it."""
        off_centre_hole = [
            (151.2071, -33.8689),
            (151.2071, -33.8687),
            (151.2073, -33.8687),
            (151.2073, -33.8689),
            (151.2071, -33.8689),
        ]
        plain = compute_centroid(_tuples(COURTYARD_OUTER_RING))
        holed = compute_centroid(_tuples(COURTYARD_OUTER_RING), interior_rings=[off_centre_hole])
        assert holed[0] > plain[0]
        assert holed[1] > plain[1]

    def test_zero_area_uses_vertex_mean(self) -> None:
        collinear = [(0.0, 0.0), (1.0, 0.0), (2.0, 0.0), (0.0, 0.0)]
        lon, lat = compute_centroid(collinear)
        assert lon == pytest.approx(1.0)
        assert lat == pytest.approx(0.0)

    def test_no_vertices_is_origin(self) -> None:
        assert compute_centroid([]) == (0.0, 0.0)


class TestAntimeridian:
    """A footprint straddling the ±180° meridian stays contiguous."""

    RING = [
        [179.999, 10.0],
        [-179.999, 10.0],
        [-179.999, 10.001],
        [179.999, 10.001],
        [179.999, 10.0],
    ]

    def test_centroid_on_the_meridian(self) -> None:
        lon, lat = compute_centroid(_tuples(self.RING))
        assert abs(lon) == pytest.approx(180.0, abs=1e-6)
        assert lat == pytest.approx(10.0005, abs=1e-6)

    def test_metrics(self) -> None:
        metrics = compute_polygon_metrics(_feature(self.RING))
        assert abs(metrics.centroid_lon) == pytest.approx(180.0, abs=1e-6)
        # ~219 m east-west by ~110 m north-south, not a band around the globe
        assert metrics.area_sqm == pytest.approx(219.0 * 110.6, rel=2e-2)
        assert metrics.perimeter_m == pytest.approx(2 * (219.0 + 110.6), rel=2e-2)
        assert metrics.warnings == ()

    def test_orientation_follows_long_side(self) -> None:
        feature = _feature(self.RING)
        result = estimate_orientation(feature, compute_polygon_metrics(feature).centroid)
        assert result.ok
        offset = abs(result.value - 90.0) % 180.0
        assert min(offset, 180.0 - offset) < 1.0


# ===========================================================================
# Roundness
# ===========================================================================


class TestRoundness:
    """4π·area / perimeter²."""

    def test_formula(self) -> None:
        assert compute_roundness(100.0, 40.0) == pytest.approx(4 * math.pi * 100 / 1600)

    def test_zero_perimeter_is_zero(self) -> None:
        assert compute_roundness(100.0, 0.0) == 0.0

    def test_not_clamped_above_one(self) -> None:
        assert compute_roundness(1.0, 1.0) == pytest.approx(4 * math.pi)

    def test_non_finite_perimeter_is_zero(self) -> None:
        assert compute_roundness(1.0, math.inf) == 0.0
        assert compute_roundness(1.0, math.nan) == 0.0


# ===========================================================================
# Degenerate input
# ===========================================================================


class TestDegeneratePolygons:
    """Degenerate input never raises and resolves to 0."""

    def test_two_vertex_ring(self) -> None:
        metrics = compute_polygon_metrics(_feature([[10.0, 10.0], [10.001, 10.001]]))
        assert metrics.area_sqm == 0.0
        assert metrics.perimeter_m == 0.0
        assert metrics.roundness == 0.0
        assert metrics.centroid == pytest.approx((10.0005, 10.0005))
        assert [w.code for w in metrics.warnings] == ["DEGENERATE_RING"]

    def test_empty_coordinates(self) -> None:
        metrics = compute_polygon_metrics(_feature())
        assert metrics.area_sqm == 0.0
        assert metrics.perimeter_m == 0.0
        assert metrics.centroid == (0.0, 0.0)

    def test_malformed_positions_are_skipped(self) -> None:
        ring = [[0.0, 0.0], ["a", "b"], [0.0089832, 0.0], None, [0.0089832, 0.0090437],
                [0.0, 0.0090437], [0.0, 0.0]]
        metrics = compute_polygon_metrics(PolygonFeature(coordinates=[ring]))
        assert metrics.area_sqm == pytest.approx(1_000_000, rel=5e-3)

    def test_unclosed_ring_is_closed(self) -> None:
        metrics = compute_polygon_metrics(_feature(EQUATOR_SQUARE_RING[:-1]))
        assert metrics.perimeter_m == pytest.approx(4000, rel=5e-3)

    def test_duplicate_vertices_ignored(self) -> None:
        ring = [EQUATOR_SQUARE_RING[0], *EQUATOR_SQUARE_RING]
        metrics = compute_polygon_metrics(_feature(ring))
        assert metrics.area_sqm == pytest.approx(1_000_000, rel=5e-3)

    def test_degenerate_hole_ignored(self) -> None:
        plain = compute_polygon_metrics(_feature(COURTYARD_OUTER_RING))
        with_bad_hole = compute_polygon_metrics(
            _feature(COURTYARD_OUTER_RING, [[151.2073, -33.8687], [151.2074, -33.8686]])
        )
        assert with_bad_hole.area_sqm == pytest.approx(plain.area_sqm)
        assert with_bad_hole.perimeter_m == pytest.approx(plain.perimeter_m)

    def test_collinear_ring_has_zero_area(self) -> None:
        metrics = compute_polygon_metrics(
            _feature([[0.0, 0.0], [0.001, 0.0], [0.002, 0.0], [0.0, 0.0]])
        )
        assert metrics.area_sqm == pytest.approx(0.0, abs=1e-6)
        assert metrics.perimeter_m > 0
        assert metrics.roundness == pytest.approx(0.0, abs=1e-9)
