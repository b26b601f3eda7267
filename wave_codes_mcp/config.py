"""ABOUTME: Process-wide configuration loaded from the environment and .env.

Settings are constructed once at startup and passed explicitly into the
extractor gateway; nothing reads the environment after that.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .common.validation import validate_timeout
from .errors import ConfigurationError


CLIENT_ID_ENV = "SPOTIFY_CLIENT_ID"
CLIENT_SECRET_ENV = "SPOTIFY_CLIENT_SECRET"


@dataclass(frozen=True)
class Credentials:
    """Client credentials handed to the extraction process.

    Values are SecretStr so repr() and log lines never show them.
    """

    client_id: SecretStr
    client_secret: SecretStr

    @classmethod
    def of(cls, client_id: str, client_secret: str) -> "Credentials":
        return cls(SecretStr(client_id or ""), SecretStr(client_secret or ""))

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.client_id.get_secret_value().strip():
            missing.append(CLIENT_ID_ENV)
        if not self.client_secret.get_secret_value().strip():
            missing.append(CLIENT_SECRET_ENV)
        return missing

    def require(self) -> "Credentials":
        """Return self, or raise ConfigurationError if a field is empty."""
        missing = self.missing_fields()
        if missing:
            raise ConfigurationError(
                "Spotify API credentials not configured. Please set "
                f"{' and '.join(missing)} environment variables.",
                metadata={"missing": missing},
            )
        return self


class WaveCodesSettings(BaseSettings):
    """Wave codes configuration from environment."""

    spotify_client_id: Optional[SecretStr] = None
    spotify_client_secret: Optional[SecretStr] = None

    extractor_binary: Path = Field(
        default=Path("target/debug/get-song-ids"),
        validation_alias="WAVE_CODES_EXTRACTOR_BINARY",
    )
    workdir: Path = Field(default=Path("."), validation_alias="WAVE_CODES_WORKDIR")
    extractor_mode: Literal["file", "stdout"] = Field(
        default="file", validation_alias="WAVE_CODES_EXTRACTOR_MODE"
    )
    extraction_timeout: Optional[float] = Field(
        default=None, validation_alias="WAVE_CODES_EXTRACTION_TIMEOUT"
    )
    log_level: str = Field(default="INFO", validation_alias="WAVE_CODES_LOG_LEVEL")

    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("extraction_timeout")
    @classmethod
    def check_timeout(cls, v: Optional[float]) -> Optional[float]:
        if v is None:
            return v
        is_valid, error = validate_timeout(v)
        if not is_valid:
            raise ValueError(error)
        return v

    def configured_credentials(self) -> Credentials:
        """Credentials as configured, possibly incomplete; the gateway checks them."""
        return Credentials(
            client_id=self.spotify_client_id or SecretStr(""),
            client_secret=self.spotify_client_secret or SecretStr(""),
        )

    def credentials(self) -> Credentials:
        """Build the credentials pair, raising ConfigurationError if incomplete."""
        return self.configured_credentials().require()

    def credentials_missing(self) -> List[str]:
        """Names of the credential variables that are unset or empty."""
        return self.configured_credentials().missing_fields()

    def resolved_binary(self) -> Path:
        """Extractor binary path; relative paths are taken from the workdir."""
        if self.extractor_binary.is_absolute():
            return self.extractor_binary
        return (self.workdir / self.extractor_binary).resolve()
