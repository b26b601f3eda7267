"""ABOUTME: Base class for the wave codes MCP server with common initialization and logging.

Uses the official MCP SDK (modelcontextprotocol/python-sdk).
"""

import logging
from typing import Any, Dict, Optional, Union
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult, TextContent

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(logger_name: str, level: Union[int, str] = logging.INFO) -> logging.Logger:
    """Configure logging for the server process.

    Args:
        logger_name: Name of the logger (typically __name__)
        level: Logging level, as a number or a name such as "DEBUG"

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger(logger_name)


class MCPServerBase:
    """Base class for MCP servers with common patterns.

    Provides:
    - Standard MCP server initialization
    - Consistent logging setup
    - Structured success results and tool lifecycle logging
    """

    def __init__(self, server_name: str, log_level: Union[int, str] = logging.INFO):
        """Initialize MCP server base.

        Args:
            server_name: Name of the MCP server (e.g., "wave-codes")
            log_level: Logging level for the process
        """
        self.server_name = server_name
        self.mcp = FastMCP(server_name)
        self.logger = setup_logging(__name__, log_level)

    def get_logger(self) -> logging.Logger:
        """Get the logger instance."""
        return self.logger

    def get_mcp(self) -> FastMCP:
        """Get the FastMCP server instance.

        Returns:
            FastMCP server for tool registration
        """
        return self.mcp

    def run(self, transport: str = "streamable-http") -> None:
        """Run the MCP server.

        Args:
            transport: Transport protocol ("streamable-http", "stdio", "sse")
        """
        self.mcp.run(transport=transport)

    def create_success_result(
        self,
        content: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> CallToolResult:
        """Create standardized success result.

        The metadata always carries ``success: True`` so callers can branch on
        the same flag for successes and failures.

        Args:
            content: The response text to return
            metadata: Optional metadata dictionary

        Returns:
            CallToolResult with standardized success format

        Examples:
            >>> result = server.create_success_result("<html>...</html>")
            >>> result = server.create_success_result("abc\\ndef", {"trackIds": ["abc", "def"]})
        """
        text_content = TextContent(type="text", text=content)
        result_metadata: Dict[str, Any] = {"success": True}
        if metadata:
            result_metadata.update(metadata)
        return CallToolResult(content=[text_content], isError=False, metadata=result_metadata)

    def log_tool_start(self, tool_name: str, **params) -> None:
        """Log tool invocation with parameters.

        Never pass secrets as params; they are written to the log verbatim.

        Examples:
            >>> server.log_tool_start("generate_html", tracks=12, columns=4)
        """
        if params:
            param_str = ", ".join(f"{k}={v}" for k, v in params.items())
            self.logger.info(f"{tool_name} started: {param_str}")
        else:
            self.logger.info(f"{tool_name} started")

    def log_tool_complete(self, tool_name: str, **metrics) -> None:
        """Log tool completion with execution metrics.

        Examples:
            >>> server.log_tool_complete("extract_tracks", tracks=42, duration_ms=1500)
        """
        if metrics:
            metric_str = ", ".join(f"{k}={v}" for k, v in metrics.items())
            self.logger.info(f"{tool_name} completed: {metric_str}")
        else:
            self.logger.info(f"{tool_name} completed")

    def log_tool_error(
        self,
        tool_name: str,
        error_code: str,
        error_message: str,
        **context
    ) -> None:
        """Log tool error with context.

        Examples:
            >>> server.log_tool_error("extract_tracks", "extraction_failed", "invalid playlist", exit_status=1)
        """
        context_str = ", ".join(f"{k}={v}" for k, v in context.items()) if context else ""
        if context_str:
            self.logger.error(f"{tool_name} error [{error_code}]: {error_message} ({context_str})")
        else:
            self.logger.error(f"{tool_name} error [{error_code}]: {error_message}")
