"""Files API client."""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any

from ._core.payload import BoxFile, make_box_file
from ._core.upload_session import UploadSessionCoordinator
from ._debug import debug
from ._http.iter_coroutine import iter_coroutine
from .errors import ClientError, ValidationError, require_not_none
from .models import (
    BoxModel,
    CopyReference,
    File,
    FileMetadata,
    FileRevisions,
    FolderMetadata,
    Metadata,
    MetadataCollection,
    SearchResults,
    TemporaryLink,
    Thumbnail,
    make_metadata,
    make_model,
)

if TYPE_CHECKING:
    from ._core.dispatcher import RequestDispatcher
    from ._core.response import BoxResponse

FileInput = BoxFile | str | os.PathLike[str]

METADATA_HEADER = "box-api-result"

THUMBNAIL_SIZES = {
    "thumb": "w32h32",
    "small": "w64h64",
    "medium": "w128h128",
    "large": "w640h480",
    "huge": "w1024h768",
}
THUMBNAIL_FORMATS = ("jpeg", "png")


def thumbnail_size(size: str) -> str:
    """Map a size name to its dimensions; unknown names fall back to ``small``."""
    return THUMBNAIL_SIZES.get(size, THUMBNAIL_SIZES["small"])


def _root_as_empty(path: str | None) -> str | None:
    # The API addresses the root folder as "" rather than "/".
    return "" if path == "/" else path


def _body_dict(response: BoxResponse) -> dict[str, Any]:
    body = response.decoded_body
    return body if isinstance(body, dict) else {}


def _metadata_from_headers(response: BoxResponse) -> dict[str, Any]:
    raw = response.header(METADATA_HEADER)
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ClientError(f"Invalid {METADATA_HEADER} header: {raw[:200]}") from exc
    return data if isinstance(data, dict) else {}


class BaseFilesClient:
    """Base files client with shared async business logic."""

    def __init__(self, dispatcher: RequestDispatcher, *, access_token: str | None = None):
        self._dispatcher = dispatcher
        self._access_token = access_token
        self._sessions = UploadSessionCoordinator(dispatcher, access_token=access_token)

    async def _api(self, endpoint: str, params: dict[str, Any]) -> BoxResponse:
        return await self._dispatcher.post_to_api(
            endpoint, params, access_token=self._access_token
        )

    async def _content(self, endpoint: str, params: dict[str, Any], **kwargs: Any) -> BoxResponse:
        return await self._dispatcher.post_to_content(
            endpoint, params, access_token=self._access_token, **kwargs
        )

    async def _get_metadata(self, path: str | None, params: dict[str, Any] | None = None) -> Any:
        require_not_none(path=path)
        if path == "/":
            raise ClientError("Metadata for the root folder is unsupported.")
        response = await self._api("/files/get_metadata", {**(params or {}), "path": path})
        return make_model(response.decoded_body)

    async def _list_folder(
        self, path: str | None = "", params: dict[str, Any] | None = None
    ) -> MetadataCollection:
        response = await self._api(
            "/files/list_folder", {**(params or {}), "path": _root_as_empty(path) or ""}
        )
        return MetadataCollection.model_validate(_body_dict(response))

    async def _list_folder_continue(self, cursor: str | None) -> MetadataCollection:
        require_not_none(cursor=cursor)
        response = await self._api("/files/list_folder/continue", {"cursor": cursor})
        return MetadataCollection.model_validate(_body_dict(response))

    async def _list_folder_latest_cursor(
        self, path: str | None, params: dict[str, Any] | None = None
    ) -> str:
        require_not_none(path=path)
        response = await self._api(
            "/files/list_folder/get_latest_cursor",
            {**(params or {}), "path": _root_as_empty(path)},
        )
        cursor = _body_dict(response).get("cursor")
        if not cursor:
            raise ClientError(
                "Could not retrieve cursor. Something went wrong.",
                status_code=response.status_code,
            )
        return str(cursor)

    async def _list_revisions(
        self, path: str | None, params: dict[str, Any] | None = None
    ) -> FileRevisions:
        # Revision entries carry no ".tag"; they are always files.
        require_not_none(path=path)
        response = await self._api("/files/list_revisions", {**(params or {}), "path": path})
        return FileRevisions.model_validate(_body_dict(response))

    async def _search(
        self, path: str | None, query: str | None, params: dict[str, Any] | None = None
    ) -> SearchResults:
        require_not_none(path=path, query=query)
        response = await self._api(
            "/files/search",
            {**(params or {}), "path": _root_as_empty(path), "query": query},
        )
        return SearchResults.model_validate(_body_dict(response))

    async def _create_folder(self, path: str | None, autorename: bool = False) -> FolderMetadata:
        require_not_none(path=path)
        response = await self._api(
            "/files/create_folder", {"path": path, "autorename": autorename}
        )
        return FolderMetadata.model_validate(_body_dict(response))

    async def _delete(self, path: str | None) -> Any:
        require_not_none(path=path)
        response = await self._api("/files/delete", {"path": path})
        return make_model(response.decoded_body)

    async def _move(self, from_path: str | None, to_path: str | None) -> Any:
        require_not_none(from_path=from_path, to_path=to_path)
        response = await self._api("/files/move", {"from_path": from_path, "to_path": to_path})
        return make_model(response.decoded_body)

    async def _copy(self, from_path: str | None, to_path: str | None) -> Any:
        require_not_none(from_path=from_path, to_path=to_path)
        response = await self._api("/files/copy", {"from_path": from_path, "to_path": to_path})
        return make_model(response.decoded_body)

    async def _restore(self, path: str | None, rev: str | None) -> Any:
        require_not_none(path=path, rev=rev)
        response = await self._api("/files/restore", {"path": path, "rev": rev})
        return make_model(response.decoded_body)

    async def _get_copy_reference(self, path: str | None) -> CopyReference:
        require_not_none(path=path)
        response = await self._api("/files/copy_reference/get", {"path": path})
        return CopyReference.model_validate(_body_dict(response))

    async def _save_copy_reference(
        self, path: str | None, copy_reference: str | None
    ) -> Metadata:
        require_not_none(path=path, copy_reference=copy_reference)
        response = await self._api(
            "/files/copy_reference/save", {"path": path, "copy_reference": copy_reference}
        )
        metadata = _body_dict(response).get("metadata")
        if not isinstance(metadata, dict):
            raise ClientError("Invalid Response.", status_code=response.status_code)
        return make_metadata(metadata)

    async def _get_temporary_link(self, path: str | None) -> TemporaryLink:
        require_not_none(path=path)
        response = await self._api("/files/get_temporary_link", {"path": path})
        return TemporaryLink.model_validate(_body_dict(response))

    async def _save_url(self, path: str | None, url: str | None) -> str:
        require_not_none(path=path, url=url)
        response = await self._api("/files/save_url", {"path": path, "url": url})
        job_id = _body_dict(response).get("async_job_id")
        if not job_id:
            raise ClientError(
                "Could not retrieve Async Job ID.", status_code=response.status_code
            )
        return str(job_id)

    async def _check_job_status(self, async_job_id: str | None) -> FileMetadata | str:
        require_not_none(async_job_id=async_job_id)
        response = await self._api(
            "/files/save_url/check_job_status", {"async_job_id": async_job_id}
        )
        body = _body_dict(response)
        status = body.get(".tag", "")
        if status == "complete":
            return FileMetadata.model_validate(body)
        return status

    async def _upload(
        self, box_file: FileInput, path: str | None, params: dict[str, Any] | None = None
    ) -> FileMetadata:
        require_not_none(file=box_file, path=path)
        box_file = make_box_file(box_file)
        threshold = self._dispatcher.config.chunked_upload_threshold
        if box_file.size > threshold:
            debug(f"{box_file.name} exceeds {threshold} bytes, uploading in chunks")
            return await self._sessions.upload_chunked(box_file, path, params=params)
        return await self._simple_upload(box_file, path, params)

    async def _simple_upload(
        self, box_file: FileInput, path: str | None, params: dict[str, Any] | None = None
    ) -> FileMetadata:
        require_not_none(file=box_file, path=path)
        box_file = make_box_file(box_file)
        response = await self._content(
            "/files/upload",
            {"attributes": {**(params or {}), "path": path}},
            file=box_file,
        )
        return FileMetadata.model_validate(_body_dict(response))

    async def _get_thumbnail(
        self, path: str | None, size: str = "small", format: str = "jpeg"
    ) -> Thumbnail:
        require_not_none(path=path)
        if format not in THUMBNAIL_FORMATS:
            raise ValidationError("Invalid format. Must either be 'jpeg' or 'png'.")
        response = await self._content(
            "/files/get_thumbnail",
            {"path": path, "format": format, "size": thumbnail_size(size)},
        )
        return Thumbnail(
            metadata=FileMetadata.model_validate(_metadata_from_headers(response)),
            contents=response.body,
        )

    async def _download(self, path: str | None) -> File:
        require_not_none(path=path)
        response = await self._content("/files/download", {"path": path})
        return File(
            metadata=FileMetadata.model_validate(_metadata_from_headers(response)),
            contents=response.body,
        )


class FilesClient(BaseFilesClient):
    def get_metadata(
        self, path: str | None, params: dict[str, Any] | None = None
    ) -> Metadata | BoxModel:
        """Metadata of the file or folder at ``path``.

        Raises:
            ClientError: For the root folder, which has no metadata.
        """
        return iter_coroutine(self._get_metadata(path, params))

    def list_folder(
        self, path: str | None = "", params: dict[str, Any] | None = None
    ) -> MetadataCollection:
        return iter_coroutine(self._list_folder(path, params))

    def list_folder_continue(self, cursor: str | None) -> MetadataCollection:
        return iter_coroutine(self._list_folder_continue(cursor))

    def list_folder_latest_cursor(
        self, path: str | None, params: dict[str, Any] | None = None
    ) -> str:
        return iter_coroutine(self._list_folder_latest_cursor(path, params))

    def list_revisions(
        self, path: str | None, params: dict[str, Any] | None = None
    ) -> FileRevisions:
        return iter_coroutine(self._list_revisions(path, params))

    def search(
        self, path: str | None, query: str | None, params: dict[str, Any] | None = None
    ) -> SearchResults:
        return iter_coroutine(self._search(path, query, params))

    def create_folder(self, path: str | None, autorename: bool = False) -> FolderMetadata:
        return iter_coroutine(self._create_folder(path, autorename))

    def delete(self, path: str | None) -> Metadata | BoxModel:
        return iter_coroutine(self._delete(path))

    def move(self, from_path: str | None, to_path: str | None) -> Metadata | BoxModel:
        return iter_coroutine(self._move(from_path, to_path))

    def copy(self, from_path: str | None, to_path: str | None) -> Metadata | BoxModel:
        return iter_coroutine(self._copy(from_path, to_path))

    def restore(self, path: str | None, rev: str | None) -> Metadata | BoxModel:
        return iter_coroutine(self._restore(path, rev))

    def get_copy_reference(self, path: str | None) -> CopyReference:
        return iter_coroutine(self._get_copy_reference(path))

    def save_copy_reference(self, path: str | None, copy_reference: str | None) -> Metadata:
        return iter_coroutine(self._save_copy_reference(path, copy_reference))

    def get_temporary_link(self, path: str | None) -> TemporaryLink:
        return iter_coroutine(self._get_temporary_link(path))

    def save_url(self, path: str | None, url: str | None) -> str:
        """Ask the server to fetch ``url`` into ``path``; returns the async job id."""
        return iter_coroutine(self._save_url(path, url))

    def check_job_status(self, async_job_id: str | None) -> FileMetadata | str:
        return iter_coroutine(self._check_job_status(async_job_id))

    def upload(
        self, box_file: FileInput, path: str | None, params: dict[str, Any] | None = None
    ) -> FileMetadata:
        """Upload a file, switching to an upload session above the chunked threshold."""
        return iter_coroutine(self._upload(box_file, path, params))

    def simple_upload(
        self, box_file: FileInput, path: str | None, params: dict[str, Any] | None = None
    ) -> FileMetadata:
        return iter_coroutine(self._simple_upload(box_file, path, params))

    def start_upload_session(
        self, box_file: FileInput, chunk_size: int = -1, close: bool = False
    ) -> str:
        return iter_coroutine(self._sessions.start(box_file, chunk_size, close))

    def append_upload_session(
        self,
        box_file: FileInput,
        session_id: str | None,
        offset: int | None,
        chunk_size: int | None,
        close: bool = False,
    ) -> str:
        return iter_coroutine(
            self._sessions.append(box_file, session_id, offset, chunk_size, close)
        )

    def finish_upload_session(
        self,
        box_file: FileInput,
        session_id: str | None,
        offset: int | None,
        remaining: int | None,
        path: str | None,
        params: dict[str, Any] | None = None,
    ) -> FileMetadata:
        return iter_coroutine(
            self._sessions.finish(box_file, session_id, offset, remaining, path, params)
        )

    def upload_chunked(
        self,
        box_file: FileInput,
        path: str | None,
        file_size: int | None = None,
        chunk_size: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> FileMetadata:
        return iter_coroutine(
            self._sessions.upload_chunked(box_file, path, file_size, chunk_size, params)
        )

    def get_thumbnail(
        self, path: str | None, size: str = "small", format: str = "jpeg"
    ) -> Thumbnail:
        return iter_coroutine(self._get_thumbnail(path, size, format))

    def download(self, path: str | None) -> File:
        return iter_coroutine(self._download(path))


class AsyncFilesClient(BaseFilesClient):
    async def get_metadata(
        self, path: str | None, params: dict[str, Any] | None = None
    ) -> Metadata | BoxModel:
        return await self._get_metadata(path, params)

    async def list_folder(
        self, path: str | None = "", params: dict[str, Any] | None = None
    ) -> MetadataCollection:
        return await self._list_folder(path, params)

    async def list_folder_continue(self, cursor: str | None) -> MetadataCollection:
        return await self._list_folder_continue(cursor)

    async def list_folder_latest_cursor(
        self, path: str | None, params: dict[str, Any] | None = None
    ) -> str:
        return await self._list_folder_latest_cursor(path, params)

    async def list_revisions(
        self, path: str | None, params: dict[str, Any] | None = None
    ) -> FileRevisions:
        return await self._list_revisions(path, params)

    async def search(
        self, path: str | None, query: str | None, params: dict[str, Any] | None = None
    ) -> SearchResults:
        return await self._search(path, query, params)

    async def create_folder(self, path: str | None, autorename: bool = False) -> FolderMetadata:
        return await self._create_folder(path, autorename)

    async def delete(self, path: str | None) -> Metadata | BoxModel:
        return await self._delete(path)

    async def move(self, from_path: str | None, to_path: str | None) -> Metadata | BoxModel:
        return await self._move(from_path, to_path)

    async def copy(self, from_path: str | None, to_path: str | None) -> Metadata | BoxModel:
        return await self._copy(from_path, to_path)

    async def restore(self, path: str | None, rev: str | None) -> Metadata | BoxModel:
        return await self._restore(path, rev)

    async def get_copy_reference(self, path: str | None) -> CopyReference:
        return await self._get_copy_reference(path)

    async def save_copy_reference(
        self, path: str | None, copy_reference: str | None
    ) -> Metadata:
        return await self._save_copy_reference(path, copy_reference)

    async def get_temporary_link(self, path: str | None) -> TemporaryLink:
        return await self._get_temporary_link(path)

    async def save_url(self, path: str | None, url: str | None) -> str:
        return await self._save_url(path, url)

    async def check_job_status(self, async_job_id: str | None) -> FileMetadata | str:
        return await self._check_job_status(async_job_id)

    async def upload(
        self, box_file: FileInput, path: str | None, params: dict[str, Any] | None = None
    ) -> FileMetadata:
        return await self._upload(box_file, path, params)

    async def simple_upload(
        self, box_file: FileInput, path: str | None, params: dict[str, Any] | None = None
    ) -> FileMetadata:
        return await self._simple_upload(box_file, path, params)

    async def start_upload_session(
        self, box_file: FileInput, chunk_size: int = -1, close: bool = False
    ) -> str:
        return await self._sessions.start(box_file, chunk_size, close)

    async def append_upload_session(
        self,
        box_file: FileInput,
        session_id: str | None,
        offset: int | None,
        chunk_size: int | None,
        close: bool = False,
    ) -> str:
        return await self._sessions.append(box_file, session_id, offset, chunk_size, close)

    async def finish_upload_session(
        self,
        box_file: FileInput,
        session_id: str | None,
        offset: int | None,
        remaining: int | None,
        path: str | None,
        params: dict[str, Any] | None = None,
    ) -> FileMetadata:
        return await self._sessions.finish(box_file, session_id, offset, remaining, path, params)

    async def upload_chunked(
        self,
        box_file: FileInput,
        path: str | None,
        file_size: int | None = None,
        chunk_size: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> FileMetadata:
        return await self._sessions.upload_chunked(box_file, path, file_size, chunk_size, params)

    async def get_thumbnail(
        self, path: str | None, size: str = "small", format: str = "jpeg"
    ) -> Thumbnail:
        return await self._get_thumbnail(path, size, format)

    async def download(self, path: str | None) -> File:
        return await self._download(path)


__all__ = [
    "BaseFilesClient",
    "FilesClient",
    "AsyncFilesClient",
    "METADATA_HEADER",
    "THUMBNAIL_SIZES",
    "thumbnail_size",
]
