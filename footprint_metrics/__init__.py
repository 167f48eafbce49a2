"""Building Footprint Metrics.

Ingests GeoJSON building footprints, derives per-polygon shape
descriptors (area, perimeter, roundness, centroid, principal-axis
orientation, extrusion height), aggregates them into summary
statistics, and serialises a flat CSV export.
"""

__version__ = "0.1.0"
