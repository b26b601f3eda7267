"""ABOUTME: Wave Codes MCP Server - printable Spotify Code pages from playlists.

Provides four tools:
- extract_tracks: Resolve a playlist URL to its ordered track IDs
- generate_html: Render track IDs as a printable grid of wave codes
- playlist_to_html: Both steps in one call
- get_wave_codes_info: Configuration and usage overview

Every tool returns a structured CallToolResult; failures are reported with
isError=True and never raised to the client.
"""

import time
from typing import List, Optional

from mcp.server.fastmcp import Context
from mcp.types import CallToolResult

from .common.mcp_base import MCPServerBase
from .common.error_handling import create_error_from_exception
from .config import WaveCodesSettings
from .errors import WaveCodesError
from .extractor import ExtractorGateway
from .pipeline import WaveCodesPipeline
from .renderer import LayoutConfig, render_page

# =============================================================================
# Server Initialization
# =============================================================================

settings = WaveCodesSettings()

server = MCPServerBase("wave-codes", log_level=settings.log_level)
mcp = server.get_mcp()
logger = server.get_logger()

gateway = ExtractorGateway.from_settings(settings)


def get_mcp():
    """Get the MCP server instance for launcher compatibility."""
    return mcp


def _failure(tool_name: str, exc: Exception) -> CallToolResult:
    if isinstance(exc, WaveCodesError):
        server.log_tool_error(tool_name, exc.error_code, exc.message, **exc.metadata)
    else:
        logger.error(f"Unexpected error in {tool_name}: {exc}", exc_info=True)
    return create_error_from_exception(exc)


# =============================================================================
# MCP Tools
# =============================================================================

@mcp.tool()
async def extract_tracks(playlist_url: str, ctx: Context = None) -> CallToolResult:
    """Extract the track IDs of a Spotify playlist, in playlist order.

    Credentials come from the server configuration (SPOTIFY_CLIENT_ID and
    SPOTIFY_CLIENT_SECRET), never from the caller.

    Args:
        playlist_url: Spotify playlist URL (e.g., https://open.spotify.com/playlist/...)

    Returns:
        CallToolResult with one track ID per line and metadata:
        - success: True
        - trackIds: Ordered list of track IDs (duplicates preserved)
        - message: Summary of the extraction

    Examples:
        extract_tracks("https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M")
    """
    server.log_tool_start("extract_tracks", playlist_url=playlist_url)
    start_time = time.time()

    try:
        if ctx:
            await ctx.report_progress(1, 2, "Running track extractor...")

        track_ids = await gateway.extract_tracks(playlist_url, settings.configured_credentials())

        if ctx:
            await ctx.report_progress(2, 2, f"Complete: {len(track_ids)} tracks")

    except Exception as e:
        if ctx:
            await ctx.error(str(e))
        return _failure("extract_tracks", e)

    duration_ms = int((time.time() - start_time) * 1000)
    server.log_tool_complete("extract_tracks", tracks=len(track_ids), duration_ms=duration_ms)

    return server.create_success_result(
        "\n".join(track_ids),
        {
            "trackIds": track_ids,
            "message": f"Successfully extracted {len(track_ids)} track IDs",
            "duration_ms": duration_ms,
        },
    )


@mcp.tool()
async def generate_html(
    track_ids: List[str],
    title: Optional[str] = None,
    columns: Optional[int] = None,
    image_size: Optional[int] = None,
    background_color: Optional[str] = None,
    ctx: Context = None,
) -> CallToolResult:
    """Render track IDs as a printable HTML page of Spotify wave codes.

    Args:
        track_ids: Ordered list of Spotify track IDs (at least one)
        title: Page title (default: "Spotify Codes Printable Page")
        columns: Grid columns, at least 1 (default: 4)
        image_size: Code image size in pixels, positive (default: 640)
        background_color: CSS background color (default: "white")

    Returns:
        CallToolResult with the complete HTML document and metadata:
        - success: True
        - html: The HTML document
        - message: Summary of the layout

    Examples:
        generate_html(["69Kzq3FMkDwiSFBQzRckFD", "3wUMcPzXcmaeW8QxTdyXQO"])
        generate_html(["69Kzq3FMkDwiSFBQzRckFD"], columns=2, background_color="#000000")
    """
    track_count = len(track_ids) if isinstance(track_ids, list) else 0
    server.log_tool_start("generate_html", tracks=track_count, columns=columns, image_size=image_size)

    try:
        config = LayoutConfig.from_options(
            title=title,
            columns=columns,
            image_size=image_size,
            background_color=background_color,
        )
        html = render_page(track_ids, config)
    except Exception as e:
        if ctx:
            await ctx.error(str(e))
        return _failure("generate_html", e)

    server.log_tool_complete("generate_html", tracks=len(track_ids), html_size=len(html))

    return server.create_success_result(
        html,
        {
            "html": html,
            "message": f"Generated HTML with {len(track_ids)} tracks in {config.columns}-column layout",
        },
    )


@mcp.tool()
async def playlist_to_html(
    playlist_url: str,
    title: Optional[str] = None,
    columns: Optional[int] = None,
    image_size: Optional[int] = None,
    background_color: Optional[str] = None,
    ctx: Context = None,
) -> CallToolResult:
    """Extract a playlist's tracks and render them as a printable page in one step.

    Args:
        playlist_url: Spotify playlist URL
        title: Page title (default: "Spotify Codes Printable Page")
        columns: Grid columns, at least 1 (default: 4)
        image_size: Code image size in pixels, positive (default: 640)
        background_color: CSS background color (default: "white")

    Returns:
        CallToolResult with the HTML document and metadata:
        - success, html, trackIds, message
        - extract_time_ms, render_time_ms
    """
    server.log_tool_start("playlist_to_html", playlist_url=playlist_url, columns=columns)

    try:
        # Validate the layout before spending time on extraction
        config = LayoutConfig.from_options(
            title=title,
            columns=columns,
            image_size=image_size,
            background_color=background_color,
        )

        if ctx:
            await ctx.report_progress(1, 2, "Extracting tracks...")

        pipeline = WaveCodesPipeline(gateway)
        html, track_ids, metadata = await pipeline.process_playlist(
            playlist_url, settings.configured_credentials(), config
        )

        if ctx:
            await ctx.report_progress(2, 2, f"Rendered {len(track_ids)} wave codes")

    except Exception as e:
        if ctx:
            await ctx.error(str(e))
        return _failure("playlist_to_html", e)

    server.log_tool_complete("playlist_to_html", **metadata)

    return server.create_success_result(
        html,
        {
            "html": html,
            "trackIds": track_ids,
            "message": (
                f"Generated HTML with {len(track_ids)} tracks in {config.columns}-column layout"
            ),
            **metadata,
        },
    )


@mcp.tool()
async def get_wave_codes_info() -> str:
    """Describe the wave codes tools and current configuration.

    Returns:
        Plain-text overview (credentials are reported as configured or not, never shown)
    """
    configured = not settings.credentials_missing()
    return "\n".join([
        "Wave Codes MCP Server",
        "",
        "Tools:",
        "  extract_tracks(playlist_url) - ordered track IDs of a playlist",
        "  generate_html(track_ids, title?, columns?, image_size?, background_color?)",
        "  playlist_to_html(playlist_url, ...) - both steps in one call",
        "",
        "Configuration:",
        f"  Extractor binary: {settings.resolved_binary()}",
        f"  Working directory: {settings.workdir}",
        f"  Extractor mode: {settings.extractor_mode}",
        f"  Extraction timeout: {settings.extraction_timeout or 'none'}",
        f"  Credentials configured: {'yes' if configured else 'no'}",
    ])


if __name__ == "__main__":
    logger.info("Starting Wave Codes MCP server (Streamable HTTP)...")
    logger.info(f"  Extractor binary: {settings.resolved_binary()}")
    logger.info(f"  Extractor mode: {settings.extractor_mode}")
    server.run(transport="streamable-http")
