"""Enrichment orchestrator.

Composes the per-feature activities (polygon metrics → orientation →
extrusion height), merges the results into each feature's properties,
and assembles the enriched collection, statistics and exports.

Per-feature enrichment has no cross-feature dependency.  When the
configuration allows more than one worker and the batch is large
enough, features are fanned out over a thread pool; ``Executor.map``
returns results in input order, so output is identical to a serial run.

A run either succeeds wholesale (some features possibly at fallback
values) or fails at parse/normalization before any enrichment.  Every
run returns a new ``PipelineResult``; nothing is shared between runs.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from functools import cached_property
from typing import TYPE_CHECKING

from footprint_metrics.activities.export_csv import export_csv
from footprint_metrics.activities.extrusion import compute_extrude_height
from footprint_metrics.activities.map_view import ViewFit, compute_view_fit
from footprint_metrics.activities.normalize_geojson import normalize_geojson
from footprint_metrics.activities.orientation import estimate_orientation
from footprint_metrics.activities.polygon_metrics import compute_polygon_metrics
from footprint_metrics.activities.statistics import summarize_metrics
from footprint_metrics.core.config import EnrichmentConfig
from footprint_metrics.core.ingress import parse_geojson_text
from footprint_metrics.models.metrics import (
    ComputedMetrics,
    EnrichedCollection,
    EnrichedFeature,
    merge_properties,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from footprint_metrics.models.feature import PolygonFeature
    from footprint_metrics.models.summary import MetricsSummary

logger = logging.getLogger("footprint_metrics.orchestrators.enrichment_pipeline")


@dataclass(frozen=True)
class PipelineResult:
    """Everything one load→enrich cycle produces."""

    collection: EnrichedCollection
    summary: MetricsSummary
    view_fit: ViewFit | None = None

    @cached_property
    def csv_text(self) -> str:
        """CSV export of the enriched features."""
        return export_csv(self.collection.features)

    def to_dict(self) -> dict[str, object]:
        """JSON-ready payload: collection, summary and view fit."""
        return {
            "collection": self.collection.to_dict(),
            "summary": self.summary.model_dump(),
            "view": self.view_fit.to_dict() if self.view_fit is not None else None,
            "warnings": [
                {"feature_id": f.metrics.feature_id, **w.to_dict()}
                for f in self.collection.features
                for w in f.warnings
            ],
        }


# ---------------------------------------------------------------------------
# Per-feature enrichment
# ---------------------------------------------------------------------------


def enrich_feature(feature: PolygonFeature, index: int) -> EnrichedFeature:
    """Compute every metric for *feature* and merge it into its properties.

    Args:
        feature: A normalized Polygon feature.
        index: 1-based position, used as ``feature_id`` when the feature has no id.
    """
    feature_id = feature.feature_id if feature.feature_id is not None else index

    polygon = compute_polygon_metrics(feature)
    orientation = estimate_orientation(feature, polygon.centroid)
    extrude_height = compute_extrude_height(polygon.area_sqm)

    metrics = ComputedMetrics(
        feature_id=feature_id,
        area_sqm=polygon.area_sqm,
        perimeter_m=polygon.perimeter_m,
        roundness=polygon.roundness,
        centroid_lat=polygon.centroid_lat,
        centroid_lon=polygon.centroid_lon,
        orientation_deg=orientation.value,
        extrude_height=extrude_height,
    )
    warnings = (*polygon.warnings, *orientation.warnings)

    for warning in warnings:
        logger.warning(
            "Degenerate geometry | feature_id=%s | code=%s | %s",
            feature_id,
            warning.code,
            warning.message,
        )
    logger.debug(
        "Feature enriched | feature_id=%s | area=%.2f m2 | perimeter=%.2f m | "
        "roundness=%.3f | orientation=%.2f deg",
        feature_id,
        metrics.area_sqm,
        metrics.perimeter_m,
        metrics.roundness,
        metrics.orientation_deg,
    )

    return EnrichedFeature(
        geometry=feature.geometry,
        properties=merge_properties(feature.properties, metrics),
        metrics=metrics,
        warnings=warnings,
        original_keys=tuple(feature.properties),
    )


def _enrich_indexed(item: tuple[int, PolygonFeature]) -> EnrichedFeature:
    index, feature = item
    return enrich_feature(feature, index)


def enrich_features(
    features: Sequence[PolygonFeature],
    *,
    config: EnrichmentConfig | None = None,
) -> EnrichedCollection:
    """Enrich every feature, preserving input order."""
    config = config or EnrichmentConfig()
    indexed = list(enumerate(features, start=1))

    if config.parallel and len(indexed) >= config.parallel_min_features:
        logger.info(
            "Enriching in parallel | features=%d | workers=%d",
            len(indexed),
            config.max_workers,
        )
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            enriched = list(pool.map(_enrich_indexed, indexed))
    else:
        enriched = [_enrich_indexed(item) for item in indexed]

    collection = EnrichedCollection(features=enriched)
    logger.info(
        "Features enriched | count=%d | warnings=%d",
        len(collection),
        collection.warning_count,
    )
    return collection


# ---------------------------------------------------------------------------
# End-to-end run
# ---------------------------------------------------------------------------


def run_pipeline(
    geojson: object,
    *,
    config: EnrichmentConfig | None = None,
) -> PipelineResult:
    """Normalize, enrich and summarise a parsed GeoJSON value.

    Raises:
        UnsupportedGeoJSONError: If the value is not polygon GeoJSON
            (raised before any enrichment).
    """
    config = config or EnrichmentConfig()
    features = normalize_geojson(geojson)
    collection = enrich_features(features, config=config)
    summary = summarize_metrics(collection.features)
    view_fit = compute_view_fit(
        collection,
        padding=config.view_padding_px,
        max_zoom=config.view_max_zoom,
    )
    return PipelineResult(collection=collection, summary=summary, view_fit=view_fit)


def run_pipeline_text(
    raw: str | bytes,
    *,
    config: EnrichmentConfig | None = None,
) -> PipelineResult:
    """Parse a GeoJSON document and run the pipeline on it.

    Raises:
        InputParseError: If *raw* is not valid JSON.
        UnsupportedGeoJSONError: If it is not polygon GeoJSON.
    """
    return run_pipeline(parse_geojson_text(raw), config=config)
