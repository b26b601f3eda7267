"""ABOUTME: Pytest configuration and shared fixtures for wave codes tests.

Provides fake extraction executables (small Python scripts run through the
current interpreter), an in-memory extractor, and ready-made settings.
"""

import os
import stat
import sys
import textwrap
from pathlib import Path
from typing import List, Optional

import pytest

from wave_codes_mcp.config import Credentials, WaveCodesSettings
from wave_codes_mcp.extractor import ExtractionRequest, Extractor

SCRIPT_HEADER = """#!{python}
import os
import sys
import time

argv = sys.argv[1:]
args = dict(zip(argv[::2], argv[1::2]))


def write_artifact(content):
    with open(os.path.join("input", args["--output"]), "w") as f:
        f.write(content)

"""


class RecordingExtractor(Extractor):
    """In-memory extractor returning fixed track IDs and recording requests."""

    def __init__(self, track_ids: Optional[List[str]] = None, error: Optional[Exception] = None,
                 uses_artifact: bool = True):
        self.track_ids = track_ids or []
        self.error = error
        self.uses_artifact = uses_artifact
        self.requests: List[ExtractionRequest] = []

    async def execute(self, request, timeout=None):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return list(self.track_ids)


@pytest.fixture
def workdir(tmp_path):
    """Fixture providing an empty working directory for the extractor."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def fake_extractor(tmp_path):
    """Fixture returning a factory that writes an executable fake extractor.

    The body runs with ``args`` (the parsed --flag value pairs) and a
    ``write_artifact(content)`` helper in scope.
    """
    counter = {"n": 0}

    def factory(body: str) -> Path:
        counter["n"] += 1
        script = tmp_path / f"fake_extractor_{counter['n']}"
        script.write_text(
            SCRIPT_HEADER.replace("{python}", sys.executable) + textwrap.dedent(body),
            encoding="utf-8",
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return factory


@pytest.fixture
def credentials():
    """Fixture providing a complete credentials pair."""
    return Credentials.of("test-client-id", "test-client-secret")


@pytest.fixture
def make_settings(workdir):
    """Fixture returning a factory for settings isolated from the environment."""

    def factory(**overrides) -> WaveCodesSettings:
        values = {
            "spotify_client_id": "test-client-id",
            "spotify_client_secret": "test-client-secret",
            "workdir": workdir,
        }
        values.update(overrides)
        fields = WaveCodesSettings.model_fields
        by_alias = {(fields[name].validation_alias or name): value for name, value in values.items()}
        return WaveCodesSettings(_env_file=None, **by_alias)

    return factory


@pytest.fixture
def clean_env(monkeypatch):
    """Fixture removing wave codes variables from the environment."""
    for name in list(os.environ):
        if name.startswith(("SPOTIFY_", "WAVE_CODES_")):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def sample_track_ids():
    """Fixture providing real-looking Spotify track IDs."""
    return [
        "69Kzq3FMkDwiSFBQzRckFD",
        "3wUMcPzXcmaeW8QxTdyXQO",
        "6LUGvXEAK8WxIBYK43uoTb",
    ]
