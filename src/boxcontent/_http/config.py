"""HTTP configuration for Box API clients."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ..errors import ValidationError

DEFAULT_API_BASE_URL = "https://api.box.com/2.0"
DEFAULT_UPLOAD_BASE_URL = "https://upload.box.com/api/2.0"
DEFAULT_TIMEOUT = 60.0

# Files larger than this are uploaded through an upload session (~8 MB).
DEFAULT_CHUNKED_UPLOAD_THRESHOLD = 8_000_000
# Size of each chunk appended to an upload session (~4 MB).
DEFAULT_CHUNK_SIZE = 4_000_000


def _env_api_base_url() -> str:
    return os.getenv("BOX_API_URL") or DEFAULT_API_BASE_URL


def _env_upload_base_url() -> str:
    return os.getenv("BOX_UPLOAD_URL") or DEFAULT_UPLOAD_BASE_URL


@dataclass(frozen=True)
class BoxConfig:
    """Configuration shared by the request builder, dispatcher and facades."""

    access_token: str | None = None
    api_base_url: str = field(default_factory=_env_api_base_url)
    upload_base_url: str = field(default_factory=_env_upload_base_url)
    timeout: float = DEFAULT_TIMEOUT
    default_headers: dict[str, str] = field(default_factory=dict)
    chunked_upload_threshold: int = DEFAULT_CHUNKED_UPLOAD_THRESHOLD
    default_chunk_size: int = DEFAULT_CHUNK_SIZE

    def resolve_token(self, token: str | None = None) -> str:
        """Resolve token from argument, config or environment, raising if not found."""
        resolved = token or self.access_token or os.getenv("BOX_ACCESS_TOKEN")
        if not resolved:
            raise ValidationError(
                "Missing Box access token. Pass access_token=... or set BOX_ACCESS_TOKEN."
            )
        return resolved


__all__ = [
    "BoxConfig",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_UPLOAD_BASE_URL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_CHUNKED_UPLOAD_THRESHOLD",
    "DEFAULT_CHUNK_SIZE",
]
