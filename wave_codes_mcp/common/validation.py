"""ABOUTME: Shared validation utilities for the extraction and rendering tools.

Provides reusable checks for playlist references, identifier lists, layout
numbers and timeouts. Standalone validators return tuple[bool, Optional[str]];
the ``*_field`` variants raise ValueError for use in Pydantic
@field_validator hooks.
"""

from typing import Any, Optional, Sequence, Tuple


# =============================================================================
# Validation Constants
# =============================================================================

MAX_PLAYLIST_REF_LENGTH: int = 8192

# Extraction timeout (seconds)
MIN_TIMEOUT_SECONDS: float = 1
MAX_TIMEOUT_SECONDS: float = 3600


# =============================================================================
# Pydantic Field Validator Functions (for @field_validator decorators)
# =============================================================================

def validate_positive_integer_field(v: int, field_name: str = "value") -> int:
    """Pydantic field validator for strictly positive integers.

    Usage:
        @field_validator("columns")
        @classmethod
        def validate_columns(cls, v: int) -> int:
            return validate_positive_integer_field(v, field_name="columns")
    """
    is_valid, error = validate_positive_integer(v, field_name)
    if not is_valid:
        raise ValueError(error)
    return v


# =============================================================================
# Standalone Validator Functions (for non-Pydantic validation)
# =============================================================================

def validate_playlist_ref(playlist_ref: Any) -> Tuple[bool, Optional[str]]:
    """Validate a playlist reference and return (is_valid, error_message).

    The reference is opaque: the extraction process parses it. Only presence
    and a sane length are checked here.

    Example:
        is_valid, error = validate_playlist_ref("https://open.spotify.com/playlist/...")
    """
    if playlist_ref is None or (isinstance(playlist_ref, str) and not playlist_ref.strip()):
        return False, "Playlist URL is required"

    if not isinstance(playlist_ref, str):
        return False, f"Playlist URL must be a string, got {type(playlist_ref).__name__}"

    if len(playlist_ref) > MAX_PLAYLIST_REF_LENGTH:
        return False, f"Playlist URL too long (max {MAX_PLAYLIST_REF_LENGTH} characters, got {len(playlist_ref)})"

    return True, None


def validate_track_ids(track_ids: Any) -> Tuple[bool, Optional[str]]:
    """Validate an ordered identifier list and return (is_valid, error_message).

    The list must be a non-empty sequence (not a bare string) whose items are
    non-empty strings.
    """
    if track_ids is None or isinstance(track_ids, (str, bytes)) or not isinstance(track_ids, Sequence):
        return False, "Track IDs are required"

    if len(track_ids) == 0:
        return False, "Track IDs are required"

    for index, track_id in enumerate(track_ids):
        if not isinstance(track_id, str) or not track_id.strip():
            return False, f"Track ID at position {index} must be a non-empty string"

    return True, None


def validate_positive_integer(
    value: Any,
    field_name: str = "value"
) -> Tuple[bool, Optional[str]]:
    """Validate that value is a positive integer.

    Example:
        is_valid, error = validate_positive_integer(columns, "columns")
        if not is_valid:
            print(f"Invalid columns: {error}")
    """
    if isinstance(value, bool) or not isinstance(value, int):
        return False, f"{field_name} must be an integer, got {type(value).__name__}"

    if value <= 0:
        return False, f"{field_name} must be positive, got {value}"

    return True, None


def validate_timeout(
    timeout: Any,
    min_val: float = MIN_TIMEOUT_SECONDS,
    max_val: float = MAX_TIMEOUT_SECONDS
) -> Tuple[bool, Optional[str]]:
    """Validate an extraction timeout and return (is_valid, error_message)."""
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
        return False, f"Timeout must be a number, got {type(timeout).__name__}"

    if timeout < min_val:
        return False, f"Timeout must be at least {min_val} second(s), got {timeout}"

    if timeout > max_val:
        return False, f"Timeout must be at most {max_val} second(s), got {timeout}"

    return True, None
