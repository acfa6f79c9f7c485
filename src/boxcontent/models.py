"""Domain models built from decoded API responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BoxModel(BaseModel):
    """Base for API models; unknown server fields are kept as extras."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class FileMetadata(BoxModel):
    """Metadata of a file."""

    tag: str | None = Field(default=None, alias=".tag")
    id: str | None = None
    name: str | None = None
    rev: str | None = None
    size: int | None = None
    path_lower: str | None = None
    path_display: str | None = None
    client_modified: str | None = None
    server_modified: str | None = None
    content_hash: str | None = None


class FolderMetadata(BoxModel):
    """Metadata of a folder."""

    tag: str | None = Field(default=None, alias=".tag")
    id: str | None = None
    name: str | None = None
    parent: Any = None
    path_lower: str | None = None
    path_display: str | None = None


class DeletedMetadata(BoxModel):
    """Metadata of a deleted file or folder."""

    tag: str | None = Field(default=None, alias=".tag")
    name: str | None = None
    path_lower: str | None = None
    path_display: str | None = None


Metadata = FileMetadata | FolderMetadata | DeletedMetadata


def make_metadata(data: dict[str, Any]) -> Metadata:
    """Resolve file/folder/deleted metadata from the ``.tag`` field."""
    tag = data.get(".tag")
    if tag == "folder":
        return FolderMetadata.model_validate(data)
    if tag == "deleted":
        return DeletedMetadata.model_validate(data)
    return FileMetadata.model_validate(data)


def _coerce_metadata(value: Any) -> Any:
    if isinstance(value, dict):
        return make_metadata(value)
    return value


class MetadataCollection(BoxModel):
    """A page of folder entries."""

    entries: list[Metadata] = Field(default_factory=list)
    cursor: str | None = None
    has_more: bool = False

    @field_validator("entries", mode="before")
    @classmethod
    def _resolve_entries(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_coerce_metadata(item) for item in value]
        return value


class FileRevisions(BoxModel):
    """Revisions of a file; every entry is file metadata."""

    entries: list[FileMetadata] = Field(default_factory=list)
    is_deleted: bool | None = None


class SearchResult(BoxModel):
    match_type: Any = None
    metadata: Metadata | None = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _resolve_metadata(cls, value: Any) -> Any:
        return _coerce_metadata(value)


class SearchResults(BoxModel):
    """Results of a search request."""

    matches: list[SearchResult] = Field(default_factory=list)
    more: bool = False
    start: int | None = None


class TemporaryLink(BoxModel):
    """A short-lived link to stream a file."""

    metadata: FileMetadata | None = None
    link: str | None = None


class CopyReference(BoxModel):
    copy_reference: str | None = None
    expires: str | None = None
    metadata: Metadata | None = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _resolve_metadata(cls, value: Any) -> Any:
        return _coerce_metadata(value)


class Account(BoxModel):
    """A Box user account."""

    account_id: str | None = None
    name: dict[str, Any] | None = None
    email: str | None = None
    email_verified: bool | None = None
    disabled: bool | None = None
    profile_photo_url: str | None = None
    country: str | None = None
    locale: str | None = None


class AccountList(BoxModel):
    accounts: list[Account] = Field(default_factory=list)

    @classmethod
    def from_response(cls, data: Any) -> AccountList:
        if isinstance(data, list):
            return cls(accounts=data)
        return cls.model_validate(data or {})


class File(BaseModel):
    """Downloaded file contents with the metadata sent alongside them."""

    metadata: FileMetadata
    contents: bytes


class Thumbnail(File):
    """Thumbnail image contents with the metadata of the source file."""


def make_model(data: Any) -> BoxModel | Any:
    """Build the model matching a decoded response body.

    Bodies with a ``.tag`` are metadata; listings, search results and
    temporary links are recognized by their fields. Anything else is
    returned unchanged.
    """
    if not isinstance(data, dict):
        return data
    if ".tag" in data:
        return make_metadata(data)
    if "entries" in data:
        return MetadataCollection.model_validate(data)
    if "matches" in data:
        return SearchResults.model_validate(data)
    if "link" in data:
        return TemporaryLink.model_validate(data)
    return BoxModel.model_validate(data)


__all__ = [
    "BoxModel",
    "FileMetadata",
    "FolderMetadata",
    "DeletedMetadata",
    "Metadata",
    "MetadataCollection",
    "FileRevisions",
    "SearchResult",
    "SearchResults",
    "TemporaryLink",
    "CopyReference",
    "Account",
    "AccountList",
    "File",
    "Thumbnail",
    "make_metadata",
    "make_model",
]
