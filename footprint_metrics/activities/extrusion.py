"""Extrusion height heuristic.

Maps area to a cosmetic 3D extrusion height: ``sqrt(area)`` clamped to
``[8, 120]`` metres.  Invalid area (non-finite or <= 0) gets the fixed
fallback of 5, deliberately below the clamp range so such features
stand out.
"""

from __future__ import annotations

import math

from footprint_metrics.core.constants import (
    FALLBACK_EXTRUDE_HEIGHT,
    MAX_EXTRUDE_HEIGHT,
    MIN_EXTRUDE_HEIGHT,
)


def compute_extrude_height(area_sqm: float) -> float:
    """Return the visualization height for a footprint of *area_sqm*."""
    if not math.isfinite(area_sqm) or area_sqm <= 0:
        return FALLBACK_EXTRUDE_HEIGHT
    return max(min(math.sqrt(area_sqm), MAX_EXTRUDE_HEIGHT), MIN_EXTRUDE_HEIGHT)
