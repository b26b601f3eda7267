"""ABOUTME: Command-line interface for the wave codes tools.

Subcommands:
- render:  track IDs (list, text file or JSON file) → printable HTML page
- extract: playlist URL → track IDs, via the configured extractor
- collect: pull unique track IDs out of CSV exports / link lists
- serve:   run the MCP server
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError

from .common.mcp_base import setup_logging
from .config import WaveCodesSettings
from .errors import ConfigurationError, ValidationError, WaveCodesError
from .extractor import ExtractorGateway
from .renderer import (
    DEFAULT_BACKGROUND_COLOR,
    DEFAULT_COLUMNS,
    DEFAULT_IMAGE_SIZE,
    DEFAULT_TITLE,
    LayoutConfig,
    render_page,
)
from .track_ids import (
    COLLECT_FORMATS,
    collect_track_ids,
    load_track_ids_from_file,
    load_track_ids_from_json,
    parse_comma_separated,
)

logger = logging.getLogger(__name__)

PREVIEW_COUNT = 5


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wave-codes",
        description="Generate printable HTML pages with Spotify wave codes",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    render = subparsers.add_parser("render", help="Render track IDs as a printable page")
    source = render.add_mutually_exclusive_group(required=True)
    source.add_argument("--tracks", "-t", help="Comma-separated list of Spotify track IDs")
    source.add_argument("--file", "-f", help="Text file with track IDs (one per line)")
    source.add_argument("--json", "-j", help="JSON file with an array of track IDs")
    render.add_argument("--output", "-o", default="wave_codes.html", help="Output HTML file path")
    render.add_argument("--title", default=DEFAULT_TITLE, help="Page title")
    render.add_argument("--columns", "-c", type=int, default=DEFAULT_COLUMNS, help="Number of grid columns")
    render.add_argument("--size", "-s", type=int, default=DEFAULT_IMAGE_SIZE, help="Image size for Spotify codes")
    render.add_argument("--background", default=DEFAULT_BACKGROUND_COLOR, help="CSS background color")

    extract = subparsers.add_parser("extract", help="Extract track IDs from a playlist URL")
    extract.add_argument("--url", "-u", required=True, help="Spotify playlist URL")
    extract.add_argument("--output", "-o", help="Write track IDs to this file instead of stdout")

    collect = subparsers.add_parser("collect", help="Collect unique track IDs from an input file")
    collect.add_argument("--input", "-i", required=True, help="Input file to process")
    collect.add_argument("--output", "-o", default="extracted_tracks.txt", help="Output file for track IDs")
    collect.add_argument("--format", "-f", choices=COLLECT_FORMATS, default="mixed", help="Input format")

    serve = subparsers.add_parser("serve", help="Run the MCP server")
    serve.add_argument("--host", help="Host to bind to (default: HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, help="Port to bind to (default: PORT or 8000)")
    serve.add_argument(
        "--transport",
        choices=("streamable-http", "sse", "stdio"),
        default="streamable-http",
        help="MCP transport",
    )

    return parser


def _load_render_input(args: argparse.Namespace) -> List[str]:
    if args.tracks is not None:
        return parse_comma_separated(args.tracks)
    if args.file is not None:
        return load_track_ids_from_file(args.file)
    return load_track_ids_from_json(args.json)


def _preview(track_ids: List[str]) -> None:
    print("First few track IDs:")
    for i, track_id in enumerate(track_ids[:PREVIEW_COUNT], start=1):
        print(f"  {i}: {track_id}")


def cmd_render(args: argparse.Namespace, settings: WaveCodesSettings) -> int:
    track_ids = _load_render_input(args)
    if not track_ids:
        raise ValidationError("No track IDs provided or found")

    config = LayoutConfig.from_options(
        title=args.title,
        columns=args.columns,
        image_size=args.size,
        background_color=args.background,
    )
    html = render_page(track_ids, config)
    Path(args.output).write_text(html, encoding="utf-8")

    print(f"Generated {args.output} with {len(track_ids)} wave codes in {config.columns}-column layout")
    return 0


def cmd_extract(args: argparse.Namespace, settings: WaveCodesSettings) -> int:
    gateway = ExtractorGateway.from_settings(settings)
    track_ids = asyncio.run(gateway.extract_tracks(args.url, settings.configured_credentials()))

    if args.output:
        Path(args.output).write_text("\n".join(track_ids), encoding="utf-8")
        print(f"Saved {len(track_ids)} track IDs to {args.output}")
        _preview(track_ids)
    else:
        for track_id in track_ids:
            print(track_id)
    return 0


def cmd_collect(args: argparse.Namespace, settings: WaveCodesSettings) -> int:
    content = Path(args.input).read_text(encoding="utf-8")
    track_ids = collect_track_ids(content, args.format)
    Path(args.output).write_text("\n".join(track_ids), encoding="utf-8")

    print(f"Extracted {len(track_ids)} unique track IDs from {args.input} to {args.output}")
    _preview(track_ids)
    return 0


def cmd_serve(args: argparse.Namespace, settings: WaveCodesSettings) -> int:
    from .launcher import run_server

    run_server(
        host=args.host or settings.host,
        port=args.port or settings.port,
        transport=args.transport,
    )
    return 0


COMMANDS = {
    "render": cmd_render,
    "extract": cmd_extract,
    "collect": cmd_collect,
    "serve": cmd_serve,
}


def load_settings() -> WaveCodesSettings:
    """Read settings, reporting malformed values as a configuration error."""
    try:
        return WaveCodesSettings()
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings()
        setup_logging(__name__, settings.log_level)
        return COMMANDS[args.command](args, settings)
    except WaveCodesError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
