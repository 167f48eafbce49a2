"""CSV export activity.

Serialises enriched features to a flat comma-separated table:

- Header: every original property key in first-seen order (keys with the
  reserved ``__`` prefix and the computed keys excluded), followed by the
  seven computed keys in fixed order.  ``feature_id`` is only present
  when it is also an original property key of some feature.
- Rows: one per feature; ``None``/missing → empty cell; values containing
  a comma, double quote or newline are quoted with quotes doubled.
"""

from __future__ import annotations

import csv
import io
import json
import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING

from footprint_metrics.core.constants import COMPUTED_KEYS, RESERVED_KEY_PREFIX

if TYPE_CHECKING:
    from footprint_metrics.models.metrics import EnrichedFeature

logger = logging.getLogger("footprint_metrics.activities.export_csv")

_LINE_TERMINATOR = "\n"


def build_csv_header(features: Sequence[EnrichedFeature]) -> list[str]:
    """Union of exportable original keys, then the computed keys."""
    computed = set(COMPUTED_KEYS)
    original: dict[str, None] = {}
    for feature in features:
        for key in feature.original_keys:
            if key.startswith(RESERVED_KEY_PREFIX) or key in computed:
                continue
            original.setdefault(key, None)
    return [*original, *COMPUTED_KEYS]


def export_csv(features: Sequence[EnrichedFeature]) -> str:
    """Render *features* as CSV text (header plus one row per feature).

    Rows are joined with ``\\n`` and there is no trailing newline.
    """
    header = build_csv_header(features)
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator=_LINE_TERMINATOR, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(header)
    for feature in features:
        writer.writerow([stringify_value(feature.properties.get(key)) for key in header])

    logger.info("CSV exported | rows=%d | columns=%d", len(features), len(header))
    return buffer.getvalue().removesuffix(_LINE_TERMINATOR)


def stringify_value(value: object) -> str:
    """Render a property value as a CSV cell (before quoting).

    Booleans and non-finite floats use JSON/JavaScript spellings
    (``true``, ``NaN``, ``Infinity``); integral floats drop the ``.0``;
    nested values are written as compact JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, str):
        return value
    if isinstance(value, dict | list):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)
