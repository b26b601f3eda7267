"""ABOUTME: Common MCP server utilities and shared infrastructure."""

from .mcp_base import MCPServerBase, setup_logging
from .error_handling import (
    # Error code constants
    ERROR_VALIDATION_FAILED,
    ERROR_RENDER_FAILED,
    ERROR_CONFIGURATION,
    ERROR_EXTRACTION_LAUNCH_FAILED,
    ERROR_EXTRACTION_FAILED,
    ERROR_ARTIFACT_READ_FAILED,
    ERROR_TIMEOUT,
    ERROR_UNEXPECTED,
    # Error creation functions
    create_error_result,
    create_error_from_exception,
)

__all__ = [
    "MCPServerBase",
    "setup_logging",
    # Error code constants
    "ERROR_VALIDATION_FAILED",
    "ERROR_RENDER_FAILED",
    "ERROR_CONFIGURATION",
    "ERROR_EXTRACTION_LAUNCH_FAILED",
    "ERROR_EXTRACTION_FAILED",
    "ERROR_ARTIFACT_READ_FAILED",
    "ERROR_TIMEOUT",
    "ERROR_UNEXPECTED",
    # Error creation functions
    "create_error_result",
    "create_error_from_exception",
]
