"""ABOUTME: Extractor gateway - resolves a playlist URL to ordered track IDs.

Runs the external track extraction executable as a child process, waits for
it, and recovers its result or failure:

    <binary> --url URL --client-id ID --client-secret SECRET --output NAME

In the default "file" mode the child writes one track ID per line to
<workdir>/input/NAME, which is read once and deleted. In "stdout" mode the
child prints the IDs instead and no file is involved.

A single attempt is made per call. Timeouts and task cancellation kill the
child process.
"""

import asyncio
import logging
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .common.validation import validate_playlist_ref
from .config import Credentials, WaveCodesSettings
from .errors import (
    ArtifactReadError,
    ConfigurationError,
    ExtractionLaunchError,
    ExtractionProcessError,
    ExtractionTimeoutError,
    ValidationError,
)
from .track_ids import parse_track_ids

logger = logging.getLogger(__name__)

ARTIFACT_DIR_NAME = "input"
REDACTED = "***"


def make_artifact_name() -> str:
    """Unique artifact file name for one extraction call.

    Nanosecond timestamp plus a random UUID, so calls landing in the same
    clock tick still get distinct names.
    """
    return f"playlist_{time.time_ns()}_{uuid.uuid4().hex}.txt"


@dataclass(frozen=True)
class ExtractionRequest:
    """Everything one run of the extraction process needs."""

    playlist_url: str
    credentials: Credentials
    artifact_name: Optional[str] = None

    def command_args(self) -> List[str]:
        return self._args(
            self.credentials.client_id.get_secret_value(),
            self.credentials.client_secret.get_secret_value(),
        )

    def redacted_args(self) -> List[str]:
        """Arguments safe to log."""
        return self._args(REDACTED, REDACTED)

    def _args(self, client_id: str, client_secret: str) -> List[str]:
        args = [
            "--url", self.playlist_url,
            "--client-id", client_id,
            "--client-secret", client_secret,
        ]
        if self.artifact_name:
            args += ["--output", self.artifact_name]
        return args


class Extractor(ABC):
    """Capability that turns an extraction request into track IDs.

    Implementations may run a binary, call a library in-process, or ask a
    remote service; the gateway only relies on this contract.
    """

    # Whether requests need an artifact name
    uses_artifact: bool = False

    @abstractmethod
    async def execute(
        self,
        request: ExtractionRequest,
        timeout: Optional[float] = None,
    ) -> List[str]:
        """Run one extraction.

        Returns:
            Track IDs in playlist order

        Raises:
            WaveCodesError subclass describing the failure
        """


class SubprocessExtractor(Extractor):
    """Shared child-process supervision for binary-backed extractors."""

    def __init__(self, binary: Union[str, Path], workdir: Union[str, Path] = "."):
        self.binary = Path(binary)
        self.workdir = Path(workdir)

    async def _run(self, request: ExtractionRequest, timeout: Optional[float]) -> Tuple[str, str]:
        """Spawn the child, drain both streams, and check its exit status.

        Returns:
            (stdout, stderr) decoded as UTF-8
        """
        logger.info(
            f"Launching track extractor: {self.binary} {' '.join(request.redacted_args())} "
            f"(cwd={self.workdir})"
        )

        try:
            process = await asyncio.create_subprocess_exec(
                str(self.binary),
                *request.command_args(),
                cwd=str(self.workdir),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error(f"Failed to launch track extractor {self.binary}: {e}")
            raise ExtractionLaunchError(
                f"Failed to execute track extractor: {e}",
                metadata={"binary": str(self.binary)},
            ) from e

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(process.communicate(), timeout)
        except asyncio.TimeoutError:
            logger.warning(f"Track extractor exceeded {timeout}s, killing pid {process.pid}")
            await _kill(process)
            raise ExtractionTimeoutError(timeout)
        except asyncio.CancelledError:
            logger.info(f"Extraction cancelled, killing pid {process.pid}")
            await _kill(process)
            raise

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")

        if process.returncode != 0:
            detail = stderr.strip() or stdout.strip()
            logger.warning(f"Track extractor exited with status {process.returncode}: {detail[:200]}")
            raise ExtractionProcessError(
                f"Failed to extract tracks: {detail}",
                exit_status=process.returncode,
                detail=detail,
            )

        return stdout, stderr


async def _kill(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass
    await process.wait()


class ArtifactFileExtractor(SubprocessExtractor):
    """Extractor whose child hands results back through a transient file."""

    uses_artifact = True

    @property
    def artifact_dir(self) -> Path:
        return self.workdir / ARTIFACT_DIR_NAME

    async def execute(
        self,
        request: ExtractionRequest,
        timeout: Optional[float] = None,
    ) -> List[str]:
        if not request.artifact_name:
            raise ValidationError("An artifact name is required for file-based extraction")

        try:
            self.artifact_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExtractionLaunchError(
                f"Failed to prepare artifact directory {self.artifact_dir}: {e}"
            ) from e

        artifact_path = self.artifact_dir / request.artifact_name
        try:
            await self._run(request, timeout)
        except ExtractionTimeoutError:
            # The killed child may have left a partial file behind
            _remove_artifact(artifact_path)
            raise

        try:
            content = artifact_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Track extractor succeeded but {artifact_path} is unreadable: {e}")
            raise ArtifactReadError(
                f"Failed to read track IDs: {e}",
                metadata={"artifact": request.artifact_name},
            ) from e
        finally:
            _remove_artifact(artifact_path)

        return parse_track_ids(content)


def _remove_artifact(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not delete artifact {path}: {e}")


class StdoutExtractor(SubprocessExtractor):
    """Extractor whose child prints track IDs on standard output."""

    async def execute(
        self,
        request: ExtractionRequest,
        timeout: Optional[float] = None,
    ) -> List[str]:
        stdout, _ = await self._run(request, timeout)
        return parse_track_ids(stdout)


class ExtractorGateway:
    """Validates inputs and runs one extraction per call."""

    def __init__(self, extractor: Extractor, timeout: Optional[float] = None):
        self.extractor = extractor
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: WaveCodesSettings) -> "ExtractorGateway":
        binary = settings.resolved_binary()
        if settings.extractor_mode == "stdout":
            extractor: Extractor = StdoutExtractor(binary, settings.workdir)
        else:
            extractor = ArtifactFileExtractor(binary, settings.workdir)
        return cls(extractor, timeout=settings.extraction_timeout)

    async def extract_tracks(
        self,
        playlist_ref: str,
        credentials: Optional[Credentials],
    ) -> List[str]:
        """Resolve a playlist reference to its ordered track IDs.

        Raises:
            ValidationError: playlist_ref missing
            ConfigurationError: credentials missing or incomplete
            ExtractionLaunchError: the child could not be started
            ExtractionProcessError: the child exited non-zero (or timed out)
            ArtifactReadError: the child succeeded but its output was unreadable
        """
        is_valid, error = validate_playlist_ref(playlist_ref)
        if not is_valid:
            raise ValidationError(error)

        if credentials is None:
            raise ConfigurationError("Spotify API credentials not configured.")
        credentials.require()

        request = ExtractionRequest(
            playlist_url=playlist_ref.strip(),
            credentials=credentials,
            artifact_name=make_artifact_name() if self.extractor.uses_artifact else None,
        )

        start_time = time.time()
        track_ids = await self.extractor.execute(request, timeout=self.timeout)
        elapsed_ms = int((time.time() - start_time) * 1000)

        logger.info(f"Extracted {len(track_ids)} track IDs in {elapsed_ms}ms")
        return track_ids
