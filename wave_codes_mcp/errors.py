"""ABOUTME: Exception taxonomy for the extraction and rendering pipeline.

Components raise these; the MCP tools and the CLI catch them at the boundary
and convert them into structured results (see common/error_handling.py).
Every exception carries a machine-readable error code and an error type.
"""

from typing import Any, Dict, Optional

from .common.error_handling import (
    ERROR_ARTIFACT_READ_FAILED,
    ERROR_CONFIGURATION,
    ERROR_EXTRACTION_FAILED,
    ERROR_EXTRACTION_LAUNCH_FAILED,
    ERROR_RENDER_FAILED,
    ERROR_TIMEOUT,
    ERROR_VALIDATION_FAILED,
)


class WaveCodesError(Exception):
    """Base class for all pipeline failures."""

    error_code: str = "unexpected_error"
    error_type: str = "error"

    def __init__(self, message: str, metadata: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.metadata = metadata or {}


class ValidationError(WaveCodesError):
    """Malformed or missing caller input."""

    error_code = ERROR_VALIDATION_FAILED
    error_type = "validation_error"


class ConfigurationError(WaveCodesError):
    """Required operator configuration (credentials) is missing."""

    error_code = ERROR_CONFIGURATION
    error_type = "configuration_error"


class ExtractionLaunchError(WaveCodesError):
    """The extraction process could not be started."""

    error_code = ERROR_EXTRACTION_LAUNCH_FAILED
    error_type = "launch_error"


class ExtractionProcessError(WaveCodesError):
    """The extraction process ran and exited unsuccessfully."""

    error_code = ERROR_EXTRACTION_FAILED
    error_type = "process_error"

    def __init__(
        self,
        message: str,
        exit_status: Optional[int] = None,
        detail: str = "",
        metadata: Optional[Dict[str, Any]] = None,
    ):
        metadata = dict(metadata or {})
        if exit_status is not None:
            metadata["exit_status"] = exit_status
        super().__init__(message, metadata)
        self.exit_status = exit_status
        self.detail = detail


class ExtractionTimeoutError(ExtractionProcessError):
    """The extraction process exceeded its time budget and was killed."""

    error_code = ERROR_TIMEOUT
    error_type = "timeout_error"

    def __init__(self, timeout_seconds: float):
        super().__init__(
            f"Track extractor timed out after {timeout_seconds} seconds",
            metadata={"timeout_seconds": timeout_seconds},
        )
        self.timeout_seconds = timeout_seconds


class ArtifactReadError(WaveCodesError):
    """The process reported success but its output file could not be read."""

    error_code = ERROR_ARTIFACT_READ_FAILED
    error_type = "artifact_error"


class RenderError(ValidationError):
    """Invalid layout configuration supplied for rendering."""

    error_code = ERROR_RENDER_FAILED
    error_type = "render_error"
