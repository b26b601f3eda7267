"""ABOUTME: Shared error handling utilities for the wave codes MCP tools.

Provides standardized error codes and error result creation functions so every
tool boundary reports failures in the same structured shape:
{success: false, error: <diagnostic>, error_code, error_type}.
"""

from typing import Optional, Dict, Any
from mcp.types import TextContent, CallToolResult


# =============================================================================
# Error Code Constants
# =============================================================================

# Input validation errors
ERROR_VALIDATION_FAILED: str = "validation_failed"
ERROR_RENDER_FAILED: str = "render_failed"

# Operator configuration errors
ERROR_CONFIGURATION: str = "configuration_error"

# External process errors
ERROR_EXTRACTION_LAUNCH_FAILED: str = "extraction_launch_failed"
ERROR_EXTRACTION_FAILED: str = "extraction_failed"
ERROR_ARTIFACT_READ_FAILED: str = "artifact_read_failed"
ERROR_TIMEOUT: str = "timeout"

# General errors
ERROR_UNEXPECTED: str = "unexpected_error"


# =============================================================================
# Main Error Creation Function
# =============================================================================

def create_error_result(
    error_message: str,
    error_code: str,
    error_type: str = "error",
    additional_metadata: Optional[Dict[str, Any]] = None
) -> CallToolResult:
    """Create standardized error CallToolResult.

    This is the main error creation function used by all tools.
    Tools normally reach it through create_error_from_exception.

    Args:
        error_message: Human-readable diagnostic, surfaced verbatim to callers
        error_code: Machine-readable error code (use ERROR_* constants)
        error_type: Error category/type (e.g., "validation_error", "process_error")
        additional_metadata: Additional context for debugging (optional)

    Returns:
        CallToolResult with standardized error format

    Example:
        result = create_error_result(
            error_message="Playlist URL is required",
            error_code=ERROR_VALIDATION_FAILED,
            error_type="validation_error",
        )
    """
    metadata = {
        "success": False,
        "error": error_message,
        "error_type": error_type,
        "error_code": error_code,
    }

    if additional_metadata:
        metadata.update(additional_metadata)

    return CallToolResult(
        content=[TextContent(type="text", text=f"Error: {error_message}")],
        isError=True,
        metadata=metadata
    )


# =============================================================================
# Exception Conversion
# =============================================================================

def create_error_from_exception(exc: Exception) -> CallToolResult:
    """Convert a raised pipeline exception into an error result.

    Exceptions carrying ``error_code``/``error_type`` attributes (the
    wave_codes_mcp.errors taxonomy) keep their classification and metadata;
    anything else is reported as an unexpected error.
    """
    error_code = getattr(exc, "error_code", None)
    if error_code is None:
        return create_error_result(
            error_message=f"Server error: {exc}",
            error_code=ERROR_UNEXPECTED,
            error_type="unexpected_error",
            additional_metadata={"exception_type": type(exc).__name__}
        )

    return create_error_result(
        error_message=getattr(exc, "message", str(exc)),
        error_code=error_code,
        error_type=getattr(exc, "error_type", "error"),
        additional_metadata=getattr(exc, "metadata", None)
    )
