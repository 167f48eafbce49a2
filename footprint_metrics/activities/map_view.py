"""Rendering-collaborator contract.

The map itself lives outside this package.  What the renderer needs
from the pipeline is built here:

- ``compute_view_fit``: bounding box of all enriched geometries plus the
  padding / max-zoom to frame it with, only when the box is finite.
- ``describe_feature``: formatted popup text for a clicked feature.
- ``roundness_color_expression`` / ``layer_paint``: 3-stop linear colour
  interpolation on ``roundness`` for the fill and extrusion layers.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from footprint_metrics.core.constants import (
    DEFAULT_FEATURE_TITLE,
    EXTRUSION_COLOR_STOPS,
    FILL_COLOR_STOPS,
)
from footprint_metrics.utils.formatting import format_number

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from footprint_metrics.models.metrics import EnrichedCollection

FILL_OPACITY = 0.4
EXTRUSION_OPACITY = 0.75


@dataclass(frozen=True, slots=True)
class ViewFit:
    """Request to frame the map on ``bounds`` (``min_lon, min_lat, max_lon, max_lat``)."""

    bounds: tuple[float, float, float, float]
    padding: int = 40
    max_zoom: float = 17.0

    def to_dict(self) -> dict[str, object]:
        min_lon, min_lat, max_lon, max_lat = self.bounds
        return {
            "bounds": [[min_lon, min_lat], [max_lon, max_lat]],
            "padding": self.padding,
            "maxZoom": self.max_zoom,
        }


def compute_view_fit(
    collection: EnrichedCollection,
    *,
    padding: int = 40,
    max_zoom: float = 17.0,
) -> ViewFit | None:
    """Return a ViewFit for *collection*, or ``None`` if its bbox is not finite."""
    bounds = collection.bbox()
    if not all(math.isfinite(v) for v in bounds):
        return None
    return ViewFit(bounds=bounds, padding=padding, max_zoom=max_zoom)


def describe_feature(properties: Mapping[str, Any]) -> str:
    """Popup text for a clicked feature's properties."""
    title = properties.get("name") or DEFAULT_FEATURE_TITLE
    return "\n".join(
        [
            str(title),
            f"Area: {format_number(properties.get('area_sqm'), 2)} m²",
            f"Roundness: {format_number(properties.get('roundness'), 3)}",
            "Centroid: "
            f"{format_number(properties.get('centroid_lat'), 6)}, "
            f"{format_number(properties.get('centroid_lon'), 6)}",
            f"Orientation: {format_number(properties.get('orientation_deg'), 1)}°",
        ]
    )


def roundness_color_expression(stops: Sequence[tuple[float, str]]) -> list[object]:
    """MapLibre-style ``interpolate`` expression over the ``roundness`` property."""
    expression: list[object] = ["interpolate", ["linear"], ["get", "roundness"]]
    for value, color in stops:
        expression.extend([value, color])
    return expression


def layer_paint() -> dict[str, dict[str, object]]:
    """Paint properties for the fill and extrusion layers."""
    return {
        "fill": {
            "fill-color": roundness_color_expression(FILL_COLOR_STOPS),
            "fill-opacity": FILL_OPACITY,
        },
        "fill-extrusion": {
            "fill-extrusion-color": roundness_color_expression(EXTRUSION_COLOR_STOPS),
            "fill-extrusion-height": ["get", "extrude_height"],
            "fill-extrusion-base": 0,
            "fill-extrusion-opacity": EXTRUSION_OPACITY,
        },
    }
