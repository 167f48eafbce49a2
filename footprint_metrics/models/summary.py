"""Pydantic models for cross-feature metric statistics.

One ``MetricStats`` row per tracked metric key; a ``MetricsSummary``
groups the rows and renders the display table (fixed, metric-specific
decimal precision with grouping separators; ``"-"`` for non-finite).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from footprint_metrics.core.constants import EMPTY_SUMMARY_MESSAGE, SUMMARY_COLUMNS
from footprint_metrics.utils.formatting import format_number


class MetricStats(BaseModel):
    """Statistics for one metric, computed over finite values only.

    Attributes:
        key: Property key the statistics were taken over.
        label: Display label for the summary table.
        digits: Fraction digits used when formatting.
        count: Number of finite values.
        sum: Sum of values.
        mean: Arithmetic mean.
        std_dev: Population standard deviation (divide by ``count``).
        min: Smallest value.
        max: Largest value.
    """

    key: str
    label: str = ""
    digits: int = 2
    count: int = 0
    sum: float = 0.0
    mean: float = 0.0
    std_dev: float = 0.0
    min: float = 0.0
    max: float = 0.0

    def formatted_row(self) -> list[str]:
        """Display row: label, count, then formatted numbers."""
        return [
            self.label or self.key,
            str(self.count),
            *(
                format_number(value, self.digits)
                for value in (self.sum, self.mean, self.std_dev, self.min, self.max)
            ),
        ]


class MetricsSummary(BaseModel):
    """Statistics rows for every tracked metric, in tracking order."""

    feature_count: int = 0
    rows: list[MetricStats] = Field(default_factory=list)

    def get(self, key: str) -> MetricStats | None:
        """Return the row for *key*, if tracked."""
        for row in self.rows:
            if row.key == key:
                return row
        return None

    def to_table(self) -> list[list[str]]:
        """Header plus one formatted row per metric.

        Returns an empty list when no features were summarised; see
        ``render_text`` for the user-facing empty message.
        """
        if not self.feature_count:
            return []
        return [list(SUMMARY_COLUMNS), *(row.formatted_row() for row in self.rows)]

    def render_text(self) -> str:
        """Plain-text table, columns separated by `` | ``."""
        table = self.to_table()
        if not table:
            return EMPTY_SUMMARY_MESSAGE
        widths = [max(len(row[i]) for row in table) for i in range(len(table[0]))]
        return "\n".join(
            " | ".join(cell.ljust(width) for cell, width in zip(row, widths, strict=True))
            for row in table
        )
