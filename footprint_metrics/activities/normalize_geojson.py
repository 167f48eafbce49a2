"""GeoJSON normalization activity.

Turns an arbitrary parsed JSON value into a flat, ordered list of
Polygon features:

- ``FeatureCollection`` → its ``features`` as-is
- ``Feature`` → one-element collection
- bare ``Polygon`` / ``MultiPolygon`` → one Feature with empty properties
- anything else → ``UnsupportedInputError``

Polygons pass through; each MultiPolygon part becomes its own Polygon
feature with a shallow copy of the source properties, in coordinate
array order.  Features without geometry or with any other geometry
type are dropped.  An empty result raises ``NoPolygonFeaturesError``.
"""

from __future__ import annotations

import logging
from typing import Any

from footprint_metrics.core.exceptions import NoPolygonFeaturesError, UnsupportedInputError
from footprint_metrics.models.feature import PolygonFeature

logger = logging.getLogger("footprint_metrics.activities.normalize_geojson")

_BARE_GEOMETRY_TYPES = frozenset({"Polygon", "MultiPolygon"})


def normalize_geojson(geojson: object) -> list[PolygonFeature]:
    """Extract Polygon features from a parsed GeoJSON value.

    Args:
        geojson: Any JSON value, usually the output of ``parse_geojson_text``.

    Returns:
        Non-empty list of PolygonFeatures in extraction order.

    Raises:
        UnsupportedInputError: If the value is not a recognised GeoJSON object.
        NoPolygonFeaturesError: If no Polygon or MultiPolygon geometry is found.
    """
    features = to_feature_list(geojson)
    polygons = extract_polygon_features(features)

    if not polygons:
        msg = "No polygon features were found in the GeoJSON input"
        raise NoPolygonFeaturesError(msg)

    logger.info(
        "GeoJSON normalized | input_features=%d | polygons=%d",
        len(features),
        len(polygons),
    )
    return polygons


def to_feature_list(geojson: object) -> list[Any]:
    """Wrap the top-level GeoJSON value as a list of Feature-like values.

    Raises:
        UnsupportedInputError: If *geojson* is not an object or its
            ``type`` is not FeatureCollection, Feature, Polygon or MultiPolygon.
    """
    if not isinstance(geojson, dict):
        msg = (
            "The input does not contain valid GeoJSON data: expected an object, "
            f"got {type(geojson).__name__}; no polygon features found"
        )
        raise UnsupportedInputError(msg)

    geojson_type = geojson.get("type")
    if geojson_type == "FeatureCollection":
        features = geojson.get("features")
        return list(features) if isinstance(features, list) else []
    if geojson_type == "Feature":
        return [geojson]
    if geojson_type in _BARE_GEOMETRY_TYPES:
        return [{"type": "Feature", "properties": {}, "geometry": geojson}]

    msg = (
        f"The input is not valid GeoJSON for this pipeline: unsupported top-level "
        f"type {geojson_type!r}; no polygon features found"
    )
    raise UnsupportedInputError(msg)


def extract_polygon_features(features: list[Any]) -> list[PolygonFeature]:
    """Keep Polygon features and split MultiPolygons into parts.

    Never raises; unusable entries are skipped.
    """
    polygons: list[PolygonFeature] = []
    skipped = 0

    for feature in features:
        geometry = feature.get("geometry") if isinstance(feature, dict) else None
        if not isinstance(geometry, dict):
            skipped += 1
            continue

        properties = feature.get("properties")
        properties = properties if isinstance(properties, dict) else {}
        geometry_type = geometry.get("type")
        coordinates = geometry.get("coordinates")

        if geometry_type == "Polygon":
            polygons.append(PolygonFeature.from_dict(feature))
        elif geometry_type == "MultiPolygon":
            parts = coordinates if isinstance(coordinates, list) else []
            # Parts get their own position index; the source id is not inherited.
            for part in parts:
                polygons.append(
                    PolygonFeature(
                        coordinates=part if isinstance(part, list) else [],
                        properties=dict(properties),
                    )
                )
        else:
            skipped += 1

    if skipped:
        logger.debug("Skipped %d feature(s) without Polygon/MultiPolygon geometry", skipped)
    return polygons
