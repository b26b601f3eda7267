"""
Wave Codes MCP

Resolve Spotify playlists to track IDs and render printable pages of
scannable Spotify Codes.
"""

__version__ = "0.1.0"

from .config import Credentials, WaveCodesSettings
from .errors import (
    ArtifactReadError,
    ConfigurationError,
    ExtractionLaunchError,
    ExtractionProcessError,
    ExtractionTimeoutError,
    RenderError,
    ValidationError,
    WaveCodesError,
)
from .extractor import (
    ArtifactFileExtractor,
    ExtractionRequest,
    Extractor,
    ExtractorGateway,
    StdoutExtractor,
)
from .pipeline import WaveCodesPipeline
from .renderer import LayoutConfig, render_page

__all__ = [
    "Credentials",
    "WaveCodesSettings",
    "WaveCodesError",
    "ValidationError",
    "ConfigurationError",
    "ExtractionLaunchError",
    "ExtractionProcessError",
    "ExtractionTimeoutError",
    "ArtifactReadError",
    "RenderError",
    "Extractor",
    "ExtractionRequest",
    "ArtifactFileExtractor",
    "StdoutExtractor",
    "ExtractorGateway",
    "WaveCodesPipeline",
    "LayoutConfig",
    "render_page",
]
