"""ABOUTME: MCP server launcher that binds the streamable HTTP transport to HOST:PORT.

FastMCP defaults to 127.0.0.1; containers need 0.0.0.0 for inter-container
networking, so the host and port are applied to the server settings before
the transport starts.
"""

import logging
import os

logger = logging.getLogger(__name__)


def run_server(host: str = "0.0.0.0", port: int = 8000, transport: str = "streamable-http") -> None:
    """Run the wave codes MCP server.

    Args:
        host: Host to bind to (default: 0.0.0.0 for Docker)
        port: Port to bind to (default: 8000)
        transport: "streamable-http", "sse" or "stdio"
    """
    logger.info("Loading MCP server: wave_codes")

    from . import server as wave_codes_server

    mcp_instance = wave_codes_server.get_mcp()
    mcp_instance.settings.host = host
    mcp_instance.settings.port = port

    logger.info(f"Starting wave_codes MCP server on {host}:{port} (transport: {transport})")
    mcp_instance.run(transport=transport)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_server(os.getenv("HOST", "0.0.0.0"), int(os.getenv("PORT", "8000")))
