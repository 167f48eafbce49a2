"""Thin ingress boundary helpers for the HTTP entry points.

Centralises request decoding so that ``function_app.py`` contains only
trigger bindings and handoff:

- **check_body_size** — rejects request bodies above the configured limit.
- **parse_geojson_text** — decodes a UTF-8 JSON document into a Python
  value, rejecting malformed JSON wholesale (no partial parse).
"""

from __future__ import annotations

import json
import logging

from footprint_metrics.core.exceptions import ContractError, InputParseError

logger = logging.getLogger("footprint_metrics.core.ingress")

_UTF8_BOM = "\ufeff"


def check_body_size(body: bytes, *, limit: int) -> None:
    """Reject a request body larger than *limit* bytes.

    Raises:
        ContractError: If the body exceeds the limit.
    """
    if len(body) > limit:
        msg = f"Request body of {len(body)} bytes exceeds the {limit} byte limit"
        raise ContractError(msg, stage="ingress", code="PAYLOAD_TOO_LARGE")


def parse_geojson_text(raw: str | bytes) -> object:
    """Decode a GeoJSON document from text or UTF-8 bytes.

    The result is whatever JSON value the document holds; shape checks
    are left to ``normalize_geojson``.  Non-standard JSON constants
    (``NaN``, ``Infinity``) are rejected.

    Args:
        raw: Document text, or its UTF-8 encoding.

    Returns:
        The parsed JSON value.

    Raises:
        InputParseError: If *raw* is not valid UTF-8 JSON.
    """
    if isinstance(raw, bytes | bytearray):
        try:
            text = bytes(raw).decode("utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Unable to parse the input as GeoJSON: not UTF-8 text ({exc.reason})"
            raise InputParseError(msg) from exc
    elif isinstance(raw, str):
        text = raw
    else:
        msg = f"Unable to parse the input as GeoJSON: unexpected input type {type(raw).__name__}"
        raise InputParseError(msg)

    text = text.removeprefix(_UTF8_BOM)
    if not text.strip():
        msg = "Unable to parse the input as GeoJSON: document is empty"
        raise InputParseError(msg)

    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        msg = f"Unable to parse the input as GeoJSON: {exc}"
        raise InputParseError(msg) from exc

    logger.debug("Parsed GeoJSON document | chars=%d", len(text))
    return parsed


def _reject_constant(name: str) -> object:
    msg = f"non-standard JSON constant {name!r}"
    raise ValueError(msg)
