"""ABOUTME: Printable HTML page renderer for Spotify wave codes.

Turns an ordered list of track IDs into a self-contained HTML document with one
scannable code image per track, laid out on a CSS grid. Rendering is pure:
identical input gives byte-identical output and nothing is fetched.
"""

import html
import logging
import re
from typing import Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError, field_validator

from .common.validation import validate_positive_integer_field, validate_track_ids
from .errors import RenderError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Spotify Codes Printable Page"
DEFAULT_COLUMNS = 4
DEFAULT_BACKGROUND_COLOR = "white"
DEFAULT_IMAGE_SIZE = 640
DEFAULT_ALT_TEXT = "Spotify Code"

CODE_IMAGE_URL_TEMPLATE = (
    "https://scannables.scdn.co/uri/plain/png/000000/white/{size}/spotify:track:{track_id}"
)

# Anything that could close the declaration or the <style> element.
_UNSAFE_CSS_VALUE = re.compile(r"[;{}<>\n\r]")


class LayoutConfig(BaseModel):
    """Layout of the printable page."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default=DEFAULT_TITLE, description="Document title")
    columns: int = Field(default=DEFAULT_COLUMNS, description="Grid columns (>= 1)")
    background_color: str = Field(default=DEFAULT_BACKGROUND_COLOR, description="CSS color")
    image_size: int = Field(default=DEFAULT_IMAGE_SIZE, description="Code image edge length in pixels")

    def __init__(self, **data):
        """Raises RenderError for any invalid value."""
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            messages = "; ".join(_describe_error(err) for err in e.errors())
            raise RenderError(f"Invalid layout configuration: {messages}") from e

    # Run before coercion so booleans and strings are rejected rather than cast
    @field_validator("columns", mode="before")
    @classmethod
    def validate_columns(cls, v: int) -> int:
        return validate_positive_integer_field(v, field_name="columns")

    @field_validator("image_size", mode="before")
    @classmethod
    def validate_image_size(cls, v: int) -> int:
        return validate_positive_integer_field(v, field_name="image_size")

    @field_validator("background_color")
    @classmethod
    def validate_background_color(cls, v: str) -> str:
        if _UNSAFE_CSS_VALUE.search(v):
            raise ValueError(f"background_color is not a valid CSS color: {v!r}")
        return v.strip()

    @classmethod
    def from_options(
        cls,
        title: Optional[str] = None,
        columns: Optional[int] = None,
        image_size: Optional[int] = None,
        background_color: Optional[str] = None,
    ) -> "LayoutConfig":
        """Build a config, using defaults for omitted values.

        Blank title or colour strings count as omitted.

        Raises:
            RenderError: An explicitly supplied value is invalid
        """
        options = {}
        if title is not None and title.strip():
            options["title"] = title
        if columns is not None:
            options["columns"] = columns
        if image_size is not None:
            options["image_size"] = image_size
        if background_color is not None and background_color.strip():
            options["background_color"] = background_color

        return cls(**options)


def _describe_error(err: dict) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()))
    message = err.get("msg", "invalid value")
    # pydantic prefixes ValueError messages raised by validators
    message = message.removeprefix("Value error, ")
    return f"{location}: {message}" if location else message


def code_image_url(track_id: str, image_size: int = DEFAULT_IMAGE_SIZE) -> str:
    """URL of the scannable code image for one track."""
    return CODE_IMAGE_URL_TEMPLATE.format(size=image_size, track_id=track_id)


def render_song_block(
    track_id: str,
    image_size: int = DEFAULT_IMAGE_SIZE,
    alt_text: str = DEFAULT_ALT_TEXT,
) -> str:
    """Render a single song div with its wave code image."""
    src = html.escape(code_image_url(track_id, image_size), quote=True)
    alt = html.escape(alt_text, quote=True)
    return (
        '    <div class="song">\n'
        f'        <img src="{src}" alt="{alt}">\n'
        "    </div>"
    )


def render_stylesheet(config: LayoutConfig) -> str:
    """Generate CSS for the grid layout and print media."""
    return f"""        body {{
            font-family: Arial, sans-serif;
            margin: 10px;
            padding: 0;
            background-color: {config.background_color};
            display: grid;
            grid-template-columns: repeat({config.columns}, 1fr);
            column-gap: 1px;
            row-gap: 1px;
        }}
        .song {{
            margin: 0;
            padding: 0;
            box-shadow: none;
            border-radius: 0;
            text-align: center;
            page-break-inside: avoid;
        }}
        img {{
            max-width: 100%;
            height: auto;
            border: none;
            border-radius: 0;
            display: block;
        }}
        @media print {{
            body {{ padding: 0; margin: 0; background: white; }}
            .song {{ margin: 0; box-shadow: none; border: none; }}
            @page {{
                margin: 10px;
            }}
        }}"""


def render_page(track_ids: Sequence[str], config: Optional[LayoutConfig] = None) -> str:
    """Generate a complete HTML page with one wave code per track.

    Blocks appear in input order, one per entry, duplicates included.

    Args:
        track_ids: Ordered, non-empty sequence of track IDs
        config: Page layout (defaults when None)

    Returns:
        Complete HTML document

    Raises:
        ValidationError: track_ids is empty or contains an empty entry
    """
    is_valid, error = validate_track_ids(track_ids)
    if not is_valid:
        raise ValidationError(error)

    config = config or LayoutConfig()

    songs_html = "\n".join(
        render_song_block(track_id, config.image_size) for track_id in track_ids
    )
    css = render_stylesheet(config)

    logger.debug(
        f"Rendering {len(track_ids)} wave codes ({config.columns} columns, {config.image_size}px)"
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{html.escape(config.title)}</title>
    <style>
{css}
    </style>
</head>
<body>
{songs_html}
</body>
</html>"""


def render_page_with_title(track_ids: Sequence[str], title: Optional[str] = None) -> str:
    """Render with the default layout and an optional title."""
    return render_page(track_ids, LayoutConfig.from_options(title=title))
