"""Pipeline orchestration.

Coordinates the end-to-end enrichment run:
1. Parse + normalize input → Polygon features
2. Fan-out per polygon → metrics, orientation, extrusion height
3. Fan-in → enriched collection, statistics summary, CSV export, view fit
"""
