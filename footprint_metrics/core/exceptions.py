"""Exception taxonomy for the footprint enrichment pipeline.

Every error the pipeline raises derives from ``PipelineError`` and
knows which stage produced it and a stable machine-readable code, so
the HTTP layer can map it to a status and a JSON body without
inspecting message text.

Categories (``PipelineError.category``):

- ``validation`` (``ValidationError``): the caller sent unusable input.
- ``contract`` (``ContractError``): the request broke a boundary rule
  such as the body size limit.
- ``permanent`` (``PermanentError``): a computation cannot succeed for
  this input.

The pipeline is synchronous and performs no I/O, so no error is
retryable.  ``to_error_dict()`` gives the payload returned to HTTP
callers.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base exception for all pipeline-domain errors.

    Attributes:
        message: Human-readable error description.
        stage: Pipeline stage where the error occurred
            (e.g. ``"normalize_geojson"``, ``"orientation"``).
        code: Machine-readable error code (e.g. ``"INVALID_JSON"``).
    """

    default_stage: str = ""
    default_code: str = ""
    category: str = "permanent"

    def __init__(self, message: str = "", *, stage: str = "", code: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code

    def to_error_dict(self) -> dict[str, str]:
        """Structured error payload; keys are stable across releases."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(PipelineError):
    """The input cannot be processed as given."""

    category = "validation"


class PermanentError(PipelineError):
    """The computation cannot succeed for this input."""

    category = "permanent"


class ContractError(PipelineError):
    """A boundary rule was broken (e.g. request size)."""

    category = "contract"


# ---------------------------------------------------------------------------
# Input errors (fatal, raised before enrichment starts)
# ---------------------------------------------------------------------------


class InputParseError(ValidationError):
    """Raised when the input is not syntactically valid JSON."""

    default_stage = "ingress"
    default_code = "INVALID_JSON"


class UnsupportedGeoJSONError(ValidationError):
    """Raised when valid JSON is not usable polygon GeoJSON."""

    default_stage = "normalize_geojson"
    default_code = "UNSUPPORTED_GEOJSON"


class UnsupportedInputError(UnsupportedGeoJSONError):
    """Raised when the top-level value is not a recognised GeoJSON type."""

    default_code = "GEOJSON_UNSUPPORTED_TYPE"


class NoPolygonFeaturesError(UnsupportedGeoJSONError):
    """Raised when normalisation yields zero Polygon features."""

    default_code = "NO_POLYGON_FEATURES"


# ---------------------------------------------------------------------------
# Per-feature errors (non-fatal, downgraded at the component boundary)
# ---------------------------------------------------------------------------


class ProjectionError(PermanentError):
    """Raised inside orientation estimation when projection or decomposition fails.

    Never propagates past ``estimate_orientation``; it is carried in an
    ``OrientationResult`` and collapsed to a 0° bearing by the caller.
    """

    default_stage = "orientation"
    default_code = "PROJECTION_FAILED"
