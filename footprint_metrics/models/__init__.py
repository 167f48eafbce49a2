"""Data models and schemas.

Defines the data structures used throughout the pipeline:
- PolygonFeature: A single-ring-set Polygon with its open property bag
- PolygonMetrics / ComputedMetrics: Per-feature derived descriptors
- EnrichedFeature / EnrichedCollection: Pipeline output
- MetricStats / MetricsSummary: Cross-feature statistics (pydantic)
"""

from footprint_metrics.models.feature import PolygonFeature, PropertyValue
from footprint_metrics.models.metrics import (
    ComputedMetrics,
    DegenerateGeometryWarning,
    EnrichedCollection,
    EnrichedFeature,
    PolygonMetrics,
)
from footprint_metrics.models.summary import MetricStats, MetricsSummary

__all__ = [
    "ComputedMetrics",
    "DegenerateGeometryWarning",
    "EnrichedCollection",
    "EnrichedFeature",
    "MetricStats",
    "MetricsSummary",
    "PolygonFeature",
    "PolygonMetrics",
    "PropertyValue",
]
