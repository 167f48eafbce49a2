"""Enrichment activity functions.

Each activity performs a single unit of work within the pipeline:
- normalize_geojson: Flatten input GeoJSON into Polygon features
- polygon_metrics: Geodesic area, perimeter, centroid, roundness
- orientation: Principal-axis compass bearing in a local UTM plane
- extrusion: Cosmetic extrusion height from area
- statistics: Cross-feature count/sum/mean/std-dev/min/max
- export_csv: Flat CSV export of enriched properties
- map_view: View-fit, popup and colour-ramp contract for renderers
"""
