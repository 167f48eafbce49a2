"""Shared pytest fixtures for the Building Footprint Metrics test suite."""

from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Path fixtures
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
DATA_DIR = TESTS_DIR / "data"


@pytest.fixture()
def data_dir() -> Path:
    """Return the path to the test data directory."""
    return DATA_DIR


@pytest.fixture()
def sample_buildings_geojson(data_dir: Path) -> Path:
    """Path to a small FeatureCollection of building footprints (Zurich)."""
    return data_dir / "sample_buildings.geojson"


# ---------------------------------------------------------------------------
# Reference geometry
# ---------------------------------------------------------------------------

# ~1000 m x 1000 m square at the equator (1° lon ≈ 111 319.5 m, 1° lat ≈ 110 574 m)
EQUATOR_SQUARE_RING = [
    [0.0, 0.0],
    [0.0089832, 0.0],
    [0.0089832, 0.0090437],
    [0.0, 0.0090437],
    [0.0, 0.0],
]

# ~205 m (E-W) x 50 m (N-S) rectangle on the zone 32 central meridian at 45° N
EAST_WEST_RECTANGLE_RING = [
    [8.9987, 45.0],
    [9.0013, 45.0],
    [9.0013, 45.00045],
    [8.9987, 45.00045],
    [8.9987, 45.0],
]

# Same rectangle rotated a quarter turn: ~50 m (E-W) x 205 m (N-S)
NORTH_SOUTH_RECTANGLE_RING = [
    [8.99968, 45.0],
    [9.00032, 45.0],
    [9.00032, 45.00185],
    [8.99968, 45.00185],
    [8.99968, 45.0],
]

# Building footprint with a courtyard (Sydney, southern hemisphere)
COURTYARD_OUTER_RING = [
    [151.2070, -33.8690],
    [151.2080, -33.8690],
    [151.2080, -33.8682],
    [151.2070, -33.8682],
    [151.2070, -33.8690],
]
COURTYARD_HOLE_RING = [
    [151.2073, -33.8687],
    [151.2073, -33.8685],
    [151.2077, -33.8685],
    [151.2077, -33.8687],
    [151.2073, -33.8687],
]


def polygon_feature_dict(
    rings: list[list[list[float]]],
    properties: dict[str, object] | None = None,
    feature_id: object | None = None,
) -> dict[str, object]:
    """Build a GeoJSON Polygon Feature dict."""
    feature: dict[str, object] = {
        "type": "Feature",
        "properties": properties if properties is not None else {},
        "geometry": {"type": "Polygon", "coordinates": rings},
    }
    if feature_id is not None:
        feature["id"] = feature_id
    return feature


@pytest.fixture()
def equator_square_feature() -> dict[str, object]:
    """A 1 km² square Feature at the equator."""
    return polygon_feature_dict([EQUATOR_SQUARE_RING], {"name": "Equator block"})


@pytest.fixture()
def building_collection() -> dict[str, object]:
    """FeatureCollection mixing Polygon, MultiPolygon, Point and null geometry."""
    return {
        "type": "FeatureCollection",
        "features": [
            polygon_feature_dict(
                [EAST_WEST_RECTANGLE_RING],
                {"name": "Warehouse", "levels": 2},
                feature_id="bldg-17",
            ),
            {
                "type": "Feature",
                "properties": {"name": "Twin towers", "use": "office"},
                "geometry": {
                    "type": "MultiPolygon",
                    "coordinates": [[NORTH_SOUTH_RECTANGLE_RING], [COURTYARD_OUTER_RING]],
                },
            },
            {
                "type": "Feature",
                "properties": {"name": "Flagpole"},
                "geometry": {"type": "Point", "coordinates": [9.0, 45.0]},
            },
            {"type": "Feature", "properties": {"name": "Unmapped"}, "geometry": None},
            polygon_feature_dict(
                [COURTYARD_OUTER_RING, COURTYARD_HOLE_RING],
                {"name": "Courtyard house", "note": 'says "hi", twice'},
            ),
        ],
    }
