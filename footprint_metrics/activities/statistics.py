"""Statistics aggregation activity.

Computes count, sum, mean, population standard deviation, min and max
of each tracked metric across all enriched features.  Only finite
numbers take part; an empty value set yields all-zero statistics, so
no division by zero or non-finite output is possible.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from footprint_metrics.core.constants import METRIC_DIGITS, METRIC_LABELS, TRACKED_METRICS
from footprint_metrics.models.summary import MetricStats, MetricsSummary
from footprint_metrics.utils.formatting import is_finite_number

if TYPE_CHECKING:
    from footprint_metrics.models.metrics import EnrichedFeature

logger = logging.getLogger("footprint_metrics.activities.statistics")


def summarize_metrics(
    features: Sequence[EnrichedFeature],
    keys: Sequence[str] = TRACKED_METRICS,
) -> MetricsSummary:
    """Build a MetricsSummary over *features* for each of *keys*."""
    rows = [
        compute_stats(
            (feature.properties.get(key) for feature in features),
            key=key,
        )
        for key in keys
    ]
    logger.debug("Metrics summarised | features=%d | metrics=%d", len(features), len(rows))
    return MetricsSummary(feature_count=len(features), rows=rows)


def compute_stats(values: Iterable[object], *, key: str = "") -> MetricStats:
    """Statistics for one metric over the finite numbers in *values*.

    Args:
        values: Raw property values; non-numeric and non-finite entries
            are ignored.
        key: Metric key, used to look up the display label and precision.
    """
    finite = [float(v) for v in values if is_finite_number(v)]  # type: ignore[arg-type]
    label = METRIC_LABELS.get(key, key)
    digits = METRIC_DIGITS.get(key, 2)

    count = len(finite)
    if not count:
        return MetricStats(key=key, label=label, digits=digits)

    total = math.fsum(finite)
    mean = total / count
    variance = math.fsum((v - mean) ** 2 for v in finite) / count

    return MetricStats(
        key=key,
        label=label,
        digits=digits,
        count=count,
        sum=total,
        mean=mean,
        std_dev=math.sqrt(variance),
        min=min(finite),
        max=max(finite),
    )
