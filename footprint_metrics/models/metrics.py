"""Data models for computed per-feature metrics and the enriched output.

``PolygonMetrics`` is the output of the polygon metrics engine.
``ComputedMetrics`` layers every computed key (including orientation
and extrusion height) as typed fields; ``merge_properties`` lays them
over the caller's open property bag to build an ``EnrichedFeature``.

Units: square metres for area, metres for perimeter and height,
degrees for centroid and orientation (compass bearing, 0 = north).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from footprint_metrics.core.constants import COMPUTED_KEYS, FEATURE_ID_KEY
from footprint_metrics.models.feature import PropertyValue
from footprint_metrics.utils.coordinates import coords_to_tuples


@dataclass(frozen=True, slots=True)
class DegenerateGeometryWarning:
    """Non-fatal note that a feature fell back to a safe default.

    Attributes:
        code: Machine-readable reason (e.g. ``"ZERO_PERIMETER"``).
        message: Human-readable description.
    """

    code: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass(frozen=True, slots=True)
class PolygonMetrics:
    """Area, perimeter, centroid and roundness of one polygon."""

    area_sqm: float = 0.0
    perimeter_m: float = 0.0
    centroid_lon: float = 0.0
    centroid_lat: float = 0.0
    roundness: float = 0.0
    warnings: tuple[DegenerateGeometryWarning, ...] = ()

    @property
    def centroid(self) -> tuple[float, float]:
        """Centroid as ``(lon, lat)``."""
        return (self.centroid_lon, self.centroid_lat)


@dataclass(frozen=True, slots=True)
class ComputedMetrics:
    """Every computed property attached to an enriched feature."""

    feature_id: PropertyValue
    area_sqm: float
    perimeter_m: float
    roundness: float
    centroid_lat: float
    centroid_lon: float
    orientation_deg: float
    extrude_height: float

    def to_properties(self) -> dict[str, PropertyValue]:
        """Computed keys in fixed order, ``feature_id`` first."""
        properties: dict[str, PropertyValue] = {FEATURE_ID_KEY: self.feature_id}
        for key in COMPUTED_KEYS:
            properties[key] = getattr(self, key)
        return properties


def merge_properties(
    original: dict[str, PropertyValue],
    computed: ComputedMetrics,
) -> dict[str, PropertyValue]:
    """Return a fresh mapping of *original* properties overlaid with *computed*.

    Caller-supplied keys are kept untouched unless they collide with a
    computed key, in which case the computed value wins.
    """
    merged = dict(original)
    merged.update(computed.to_properties())
    return merged


@dataclass(frozen=True, slots=True)
class EnrichedFeature:
    """A Polygon feature carrying original plus computed properties.

    ``original_keys`` lists the caller-supplied property keys, in source
    order, so exports can tell them apart from computed ones.
    """

    geometry: dict[str, Any]
    properties: dict[str, PropertyValue]
    metrics: ComputedMetrics
    warnings: tuple[DegenerateGeometryWarning, ...] = ()
    original_keys: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON Feature dict."""
        return {
            "type": "Feature",
            "geometry": self.geometry,
            "properties": dict(self.properties),
        }


@dataclass(frozen=True, slots=True)
class EnrichedCollection:
    """Ordered enriched features, in normalized extraction order."""

    features: list[EnrichedFeature] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.features)

    @property
    def warning_count(self) -> int:
        """Total degenerate-geometry warnings across all features."""
        return sum(len(f.warnings) for f in self.features)

    def to_dict(self) -> dict[str, object]:
        """Serialise to a GeoJSON FeatureCollection dict."""
        return {
            "type": "FeatureCollection",
            "features": [f.to_dict() for f in self.features],
        }

    def bbox(self) -> tuple[float, float, float, float]:
        """Bounding box ``(min_lon, min_lat, max_lon, max_lat)`` of all geometries.

        Returns infinities when no feature carries a readable position.
        """
        min_lon = min_lat = math.inf
        max_lon = max_lat = -math.inf
        for feature in self.features:
            rings = feature.geometry.get("coordinates", [])
            if not isinstance(rings, list):
                continue
            for ring in rings:
                for lon, lat in coords_to_tuples(ring):
                    min_lon = min(min_lon, lon)
                    min_lat = min(min_lat, lat)
                    max_lon = max(max_lon, lon)
                    max_lat = max(max_lat, lat)
        return (min_lon, min_lat, max_lon, max_lat)
