"""Azure Functions entry point — Building Footprint Metrics.

This module registers the HTTP functions using the Python v2
programming model.

All business logic lives in the footprint_metrics package. This file is
purely the wiring layer between Azure Functions bindings and
application code.
"""

from __future__ import annotations

import json
import logging

import azure.functions as func

from footprint_metrics.core.config import EnrichmentConfig
from footprint_metrics.core.constants import CSV_FILENAME, CSV_MIME_TYPE
from footprint_metrics.core.exceptions import PipelineError
from footprint_metrics.core.ingress import check_body_size
from footprint_metrics.orchestrators.enrichment_pipeline import run_pipeline_text

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)

logger = logging.getLogger("footprint_metrics.function_app")

# Loaded once per worker; bad settings fail the host at startup.
CONFIG = EnrichmentConfig.from_env()


def _error_response(error: PipelineError) -> func.HttpResponse:
    status = 413 if error.code == "PAYLOAD_TOO_LARGE" else 400
    return func.HttpResponse(
        json.dumps(error.to_error_dict()),
        status_code=status,
        mimetype="application/json",
    )


# ---------------------------------------------------------------------------
# POST /api/enrich → enriched FeatureCollection + statistics + view fit
# ---------------------------------------------------------------------------


@app.function_name("enrich_footprints")
@app.route(route="enrich", methods=["POST"])
def enrich_footprints(req: func.HttpRequest) -> func.HttpResponse:
    """Enrich the GeoJSON request body with per-footprint shape metrics.

    Returns:
        200 with ``{"collection", "summary", "view", "warnings"}``, or
        400/413 with a structured error payload.
    """
    body = req.get_body()
    logger.info("enrich request received | bytes=%d", len(body))

    try:
        check_body_size(body, limit=CONFIG.max_input_bytes)
        result = run_pipeline_text(body, config=CONFIG)
    except PipelineError as exc:
        logger.warning("enrich request rejected | code=%s | %s", exc.code, exc.message)
        return _error_response(exc)

    logger.info(
        "enrich request completed | features=%d | warnings=%d",
        len(result.collection),
        result.collection.warning_count,
    )
    return func.HttpResponse(
        json.dumps(result.to_dict()),
        status_code=200,
        mimetype="application/json",
    )


# ---------------------------------------------------------------------------
# POST /api/export → building_shape_metrics.csv
# ---------------------------------------------------------------------------


@app.function_name("export_footprints_csv")
@app.route(route="export", methods=["POST"])
def export_footprints_csv(req: func.HttpRequest) -> func.HttpResponse:
    """Enrich the GeoJSON request body and return it as a CSV download.

    The export is only produced after a successful enrichment; any
    input error yields the same 400/413 payload as ``/api/enrich``.
    """
    body = req.get_body()
    logger.info("export request received | bytes=%d", len(body))

    try:
        check_body_size(body, limit=CONFIG.max_input_bytes)
        result = run_pipeline_text(body, config=CONFIG)
    except PipelineError as exc:
        logger.warning("export request rejected | code=%s | %s", exc.code, exc.message)
        return _error_response(exc)

    return func.HttpResponse(
        result.csv_text.encode("utf-8"),
        status_code=200,
        headers={
            "Content-Type": CSV_MIME_TYPE,
            "Content-Disposition": f'attachment; filename="{CSV_FILENAME}"',
        },
    )
