"""Pipeline configuration loaded from environment variables.

All configuration values have sensible defaults. Azure Functions app
settings (or ``local.settings.json`` for local dev) are the source of
truth.

Fail-fast validation:
    ``from_env()`` raises ``ConfigValidationError`` if any numeric
    value is out of its valid range.  This catches bad configuration
    at startup instead of on the first request.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from footprint_metrics.core.exceptions import PipelineError

MAX_MAP_ZOOM = 24.0


class ConfigValidationError(PipelineError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The environment variable that failed validation.
        value: The parsed, invalid value.
        reason: The valid range, e.g. ``"must be >= 1"``.
    """

    default_stage = "config"
    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, reason: str) -> None:
        super().__init__(f"Invalid configuration {key}={value!r}: {reason}")
        self.key = key
        self.value = value
        self.reason = reason


@dataclass(frozen=True, slots=True)
class EnrichmentConfig:
    """Immutable enrichment configuration.

    Loaded once at function startup and threaded through the pipeline.

    Attributes:
        max_workers: Worker threads for per-feature enrichment (1 = serial).
        parallel_min_features: Feature count at which the worker pool is used.
        view_padding_px: Padding requested around the fitted map view.
        view_max_zoom: Maximum zoom level for the fitted map view.
        max_input_bytes: Largest accepted request body in bytes.
    """

    max_workers: int = 1
    parallel_min_features: int = 200
    view_padding_px: int = 40
    view_max_zoom: float = 17.0
    max_input_bytes: int = 50 * 1024 * 1024

    @classmethod
    def from_env(cls) -> EnrichmentConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a numeric value is out of range.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``ENRICH_MAX_WORKERS=abc``).
        """
        config = cls(
            max_workers=int(os.getenv("ENRICH_MAX_WORKERS", "1")),
            parallel_min_features=int(os.getenv("ENRICH_PARALLEL_MIN_FEATURES", "200")),
            view_padding_px=int(os.getenv("VIEW_PADDING_PX", "40")),
            view_max_zoom=float(os.getenv("VIEW_MAX_ZOOM", "17")),
            max_input_bytes=int(os.getenv("MAX_INPUT_BYTES", str(50 * 1024 * 1024))),
        )
        _validate(config)
        return config

    @property
    def parallel(self) -> bool:
        """Whether a worker pool is configured at all."""
        return self.max_workers > 1


def _validate(config: EnrichmentConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.max_workers < 1:
        raise ConfigValidationError(
            "ENRICH_MAX_WORKERS",
            config.max_workers,
            "must be >= 1",
        )

    if config.parallel_min_features < 1:
        raise ConfigValidationError(
            "ENRICH_PARALLEL_MIN_FEATURES",
            config.parallel_min_features,
            "must be >= 1",
        )

    if config.view_padding_px < 0:
        raise ConfigValidationError(
            "VIEW_PADDING_PX",
            config.view_padding_px,
            "must be >= 0 (pixels)",
        )

    if not 0.0 <= config.view_max_zoom <= MAX_MAP_ZOOM:
        raise ConfigValidationError(
            "VIEW_MAX_ZOOM",
            config.view_max_zoom,
            f"must be between 0 and {MAX_MAP_ZOOM:.0f}",
        )

    if config.max_input_bytes <= 0:
        raise ConfigValidationError(
            "MAX_INPUT_BYTES",
            config.max_input_bytes,
            "must be > 0 (bytes)",
        )
