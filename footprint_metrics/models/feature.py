"""Data model for a normalized Polygon feature.

A PolygonFeature is a single GeoJSON Polygon (outer ring plus optional
holes) with the caller's free-form properties.  MultiPolygons are split
into several PolygonFeatures by ``normalize_geojson``.  This is the
output of normalization and the input to every per-feature metric.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from footprint_metrics.utils.coordinates import clean_ring, is_closed_ring, rings_to_tuples

PropertyValue = str | int | float | bool | list[Any] | dict[str, Any] | None
"""Property value.  Scalars are typical; nested JSON values are exported as JSON text."""


@dataclass(frozen=True, slots=True)
class PolygonFeature:
    """A single Polygon feature taken from the input GeoJSON.

    Attributes:
        coordinates: Raw GeoJSON Polygon coordinates, passed through to the
            output unchanged (first ring = outer boundary, rest = holes).
        properties: Shallow copy of the source feature's properties.
        feature_id: The source feature's ``id``, or ``None`` if absent.
    """

    coordinates: list[Any] = field(default_factory=list)
    properties: dict[str, PropertyValue] = field(default_factory=dict)
    feature_id: PropertyValue = None

    @property
    def geometry(self) -> dict[str, object]:
        """GeoJSON Polygon geometry for this feature."""
        return {"type": "Polygon", "coordinates": self.coordinates}

    @property
    def rings(self) -> list[list[tuple[float, float]]]:
        """All rings cleaned for measurement.

        Malformed positions and consecutive duplicates are dropped, and
        rings with at least three distinct vertices are closed.
        """
        return [clean_ring(ring) for ring in rings_to_tuples(self.coordinates)]

    @property
    def exterior_coords(self) -> list[tuple[float, float]]:
        """Cleaned outer boundary ring (may be degenerate)."""
        rings = self.rings
        return rings[0] if rings else []

    @property
    def interior_coords(self) -> list[list[tuple[float, float]]]:
        """Cleaned holes; degenerate holes are left out."""
        return [ring for ring in self.rings[1:] if is_closed_ring(ring)]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PolygonFeature:
        """Build from a GeoJSON Feature dict whose geometry is a Polygon.

        A missing or non-object ``properties`` becomes an empty mapping.

        Raises:
            TypeError: If the geometry is not a Polygon object.
        """
        geometry = data.get("geometry")
        if not isinstance(geometry, dict) or geometry.get("type") != "Polygon":
            msg = "geometry must be a GeoJSON Polygon object"
            raise TypeError(msg)

        coordinates = geometry.get("coordinates", [])
        properties = data.get("properties")

        return cls(
            coordinates=coordinates if isinstance(coordinates, list) else [],
            properties=dict(properties) if isinstance(properties, dict) else {},
            feature_id=data.get("id"),
        )
