"""ABOUTME: Helpers for reading and recognising track identifiers.

Covers the newline-delimited list format written by the extraction process,
text and JSON input files for the renderer, and recognition of track IDs
inside Spotify URLs, URIs and CSV exports.
"""

import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import ValidationError

logger = logging.getLogger(__name__)

TRACK_ID_LENGTH = 22
COLLECT_FORMATS = ("csv", "urls", "mixed")

# https://open.spotify.com/track/<id> or spotify:track:<id>
_TRACK_REF_PATTERN = re.compile(r"track[/:]([A-Za-z0-9]+)")


def parse_track_ids(text: str) -> List[str]:
    """Split newline-delimited text into identifiers, dropping blank lines.

    Order and duplicates are preserved.
    """
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_comma_separated(text: str) -> List[str]:
    return [part.strip() for part in text.split(",") if part.strip()]


def load_track_ids_from_file(path: Union[str, Path]) -> List[str]:
    """Load track IDs from a text file (one per line)."""
    return parse_track_ids(Path(path).read_text(encoding="utf-8"))


def load_track_ids_from_json(path: Union[str, Path]) -> List[str]:
    """Load track IDs from a JSON file holding an array of strings."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise ValidationError(f"{path} must contain a JSON array of track ID strings")

    return [item.strip() for item in data if item.strip()]


def is_plain_track_id(text: str) -> bool:
    return len(text) == TRACK_ID_LENGTH and text.isascii() and text.isalnum()


def extract_track_id(text: str) -> Optional[str]:
    """Recognise a track ID in a URL, a URI or on its own.

    Examples:
        extract_track_id("https://open.spotify.com/track/69Kzq3FMkDwiSFBQzRckFD?si=x")
        extract_track_id("spotify:track:69Kzq3FMkDwiSFBQzRckFD")
        extract_track_id("69Kzq3FMkDwiSFBQzRckFD")
    """
    text = text.strip()
    for match in _TRACK_REF_PATTERN.finditer(text):
        candidate = match.group(1)
        if len(candidate) == TRACK_ID_LENGTH:
            return candidate

    if is_plain_track_id(text):
        return text

    return None


def _from_lines(lines: Iterable[str]) -> List[str]:
    found = []
    for line in lines:
        track_id = extract_track_id(line)
        if track_id:
            found.append(track_id)
    return found


def _from_csv(text: str) -> List[str]:
    fields = (
        field.strip().strip('"')
        for line in text.splitlines()
        for field in line.split(",")
    )
    return _from_lines(fields)


def collect_track_ids(text: str, fmt: str = "mixed") -> List[str]:
    """Collect the unique track IDs found in free-form input.

    Args:
        text: Input content (CSV export, list of links, plain IDs, or a mix)
        fmt: One of "csv", "urls" or "mixed"

    Returns:
        Sorted, de-duplicated list of 22-character track IDs

    Raises:
        ValidationError: Unknown format, or no valid IDs found
    """
    if fmt not in COLLECT_FORMATS:
        raise ValidationError(f"Unsupported format. Use: {', '.join(COLLECT_FORMATS)}")

    if fmt == "csv":
        found = _from_csv(text)
    elif fmt == "urls":
        found = _from_lines(text.splitlines())
    else:
        found = _from_lines(text.splitlines()) + _from_csv(text)

    unique = sorted({track_id for track_id in found if is_plain_track_id(track_id)})
    if not unique:
        raise ValidationError("No valid track IDs found in input")

    logger.debug(f"Collected {len(unique)} unique track IDs ({fmt})")
    return unique
