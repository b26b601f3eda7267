"""ABOUTME: Pipeline orchestrating track extraction and wave code page rendering.

Playlist URL → extractor gateway → track IDs → renderer → HTML.
"""

import logging
import time
from typing import List, Optional, Tuple

from .config import Credentials
from .extractor import ExtractorGateway
from .renderer import LayoutConfig, render_page

logger = logging.getLogger(__name__)


class WaveCodesPipeline:
    """Composes the extractor gateway and the page renderer."""

    def __init__(self, gateway: ExtractorGateway):
        self.gateway = gateway

    async def process_playlist(
        self,
        playlist_url: str,
        credentials: Optional[Credentials],
        config: Optional[LayoutConfig] = None,
    ) -> Tuple[str, List[str], dict]:
        """
        Complete pipeline: extract track IDs, then render the printable page.

        Failures from either stage propagate unchanged; there are no partial
        results.

        Returns:
            (html, track_ids, metadata)
            metadata: {track_count, extract_time_ms, render_time_ms}
        """
        logger.info(f"Extracting tracks for {playlist_url}")
        extract_start = time.time()
        track_ids = await self.gateway.extract_tracks(playlist_url, credentials)
        extract_time_ms = int((time.time() - extract_start) * 1000)

        render_start = time.time()
        html = render_page(track_ids, config)
        render_time_ms = int((time.time() - render_start) * 1000)

        logger.info(
            f"Rendered {len(track_ids)} wave codes for {playlist_url} "
            f"(extract: {extract_time_ms}ms, render: {render_time_ms}ms)"
        )

        metadata = {
            "track_count": len(track_ids),
            "extract_time_ms": extract_time_ms,
            "render_time_ms": render_time_ms,
        }
        return html, track_ids, metadata
