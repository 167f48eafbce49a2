"""Shared pipeline constants — single source of truth.

Centralises the computed property keys, tracked statistics, display
precision, export settings and visualization ramps that are otherwise
referenced from several activities and the HTTP entry points.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Computed property keys
# ---------------------------------------------------------------------------

FEATURE_ID_KEY: str = "feature_id"

COMPUTED_KEYS: tuple[str, ...] = (
    "area_sqm",
    "perimeter_m",
    "roundness",
    "centroid_lat",
    "centroid_lon",
    "orientation_deg",
    "extrude_height",
)
"""Computed metric columns, in export order. ``feature_id`` is not included."""

RESERVED_KEY_PREFIX: str = "__"
"""Property keys with this prefix are never exported."""

# ---------------------------------------------------------------------------
# Statistics (tracked metrics, labels and display precision)
# ---------------------------------------------------------------------------

TRACKED_METRICS: tuple[str, ...] = (
    "area_sqm",
    "roundness",
    "centroid_lat",
    "centroid_lon",
    "orientation_deg",
)

METRIC_LABELS: dict[str, str] = {
    "area_sqm": "Area (m²)",
    "roundness": "Roundness",
    "centroid_lat": "Centroid Latitude",
    "centroid_lon": "Centroid Longitude",
    "orientation_deg": "Major Axis Orientation (°)",
}

METRIC_DIGITS: dict[str, int] = {
    "area_sqm": 2,
    "roundness": 3,
    "centroid_lat": 5,
    "centroid_lon": 5,
    "orientation_deg": 2,
}

SUMMARY_COLUMNS: tuple[str, ...] = ("Feature", "Count", "Sum", "Mean", "Std Dev", "Min", "Max")

EMPTY_SUMMARY_MESSAGE: str = "No data loaded yet."

PLACEHOLDER: str = "-"
"""Rendered in place of a non-finite number."""

# ---------------------------------------------------------------------------
# Extrusion heights (metres, cosmetic)
# ---------------------------------------------------------------------------

FALLBACK_EXTRUDE_HEIGHT: float = 5.0
MIN_EXTRUDE_HEIGHT: float = 8.0
MAX_EXTRUDE_HEIGHT: float = 120.0

# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------

CSV_FILENAME: str = "building_shape_metrics.csv"
CSV_MIME_TYPE: str = "text/csv;charset=utf-8"

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------

# Minimum coordinates for a closed ring (3 distinct + closure)
MIN_RING_COORDS = 4

# ---------------------------------------------------------------------------
# Visualization contract (consumed by the rendering collaborator)
# ---------------------------------------------------------------------------

FILL_COLOR_STOPS: tuple[tuple[float, str], ...] = (
    (0.0, "#be123c"),
    (0.5, "#f97316"),
    (1.0, "#22c55e"),
)

EXTRUSION_COLOR_STOPS: tuple[tuple[float, str], ...] = (
    (0.0, "#831843"),
    (0.5, "#f59e0b"),
    (1.0, "#16a34a"),
)

DEFAULT_FEATURE_TITLE: str = "Building"
