"""Logical API request passed to the dispatcher."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, TypedDict

from .payload import BoxFile


class EndpointKind(str, enum.Enum):
    """Which base path an endpoint lives under and how its body is encoded."""

    API = "api"
    UPLOAD = "upload"


class UploadCursor(TypedDict):
    """Position of the next chunk within an upload session."""

    session_id: str
    offset: int


class CommitInfo(TypedDict, total=False):
    """Where and how a finished upload session is saved."""

    path: str
    mode: str
    autorename: bool
    mute: bool


@dataclass(frozen=True, slots=True)
class BoxRequest:
    method: str
    endpoint: str
    endpoint_kind: EndpointKind = EndpointKind.API
    access_token: str | None = None
    params: dict[str, Any] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    file: BoxFile | None = None
    validate_response: bool = True

    @property
    def has_file(self) -> bool:
        return self.file is not None


__all__ = ["BoxRequest", "EndpointKind", "UploadCursor", "CommitInfo"]
