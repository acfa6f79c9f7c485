"""Chunked upload sessions: start, append any number of chunks, finish."""

from __future__ import annotations

import os
from typing import Any

from .._debug import debug
from ..errors import ClientError, ValidationError, require_not_none
from ..models import FileMetadata
from .dispatcher import RequestDispatcher
from .payload import BoxFile, make_box_file
from .request import CommitInfo, UploadCursor

START_ENDPOINT = "/files/upload_session/start"
APPEND_ENDPOINT = "/files/upload_session/append_v2"
FINISH_ENDPOINT = "/files/upload_session/finish"


class UploadSession:
    """Offset bookkeeping for one upload session.

    The first chunk goes out with the start call, so a new session has
    ``uploaded == chunk_size``. ``uploaded + remaining == total_size`` holds
    after every step.
    """

    def __init__(
        self,
        session_id: str,
        *,
        chunk_size: int,
        total_size: int,
        path: str,
        commit: dict[str, Any] | None = None,
    ) -> None:
        self._session_id = session_id
        self.chunk_size = chunk_size
        self.total_size = total_size
        self.path = path
        self.commit = dict(commit or {})
        self.uploaded = chunk_size
        self.remaining = total_size - chunk_size
        self.finished = False

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def has_more_chunks(self) -> bool:
        return self.remaining > self.chunk_size

    @property
    def cursor(self) -> UploadCursor:
        return {"session_id": self._session_id, "offset": self.uploaded}

    def advance(self) -> None:
        if self.finished:
            raise ValidationError(f"Upload session {self._session_id} is already finished.")
        self.uploaded += self.chunk_size
        self.remaining -= self.chunk_size

    def __repr__(self) -> str:
        return (
            f"UploadSession(session_id={self._session_id!r}, uploaded={self.uploaded}, "
            f"remaining={self.remaining}, total_size={self.total_size})"
        )


def resolve_chunk_size(file_size: int, chunk_size: int) -> int:
    """Chunk size actually used for a file of ``file_size`` bytes.

    A file no larger than one chunk is split in two halves, so every
    chunked upload makes at least one append before finishing.
    """
    if chunk_size <= 0:
        raise ValidationError("chunk_size must be a positive number of bytes.")
    if file_size <= chunk_size:
        chunk_size = file_size // 2
        if file_size > 0:
            chunk_size = max(1, chunk_size)
    return chunk_size


class UploadSessionCoordinator:
    """Runs the upload session protocol on top of a RequestDispatcher.

    Calls are strictly sequential: each append is sent only after the
    previous one was accepted, since its offset depends on it.
    """

    def __init__(self, dispatcher: RequestDispatcher, *, access_token: str | None = None) -> None:
        self._dispatcher = dispatcher
        self._access_token = access_token

    @property
    def default_chunk_size(self) -> int:
        return self._dispatcher.config.default_chunk_size

    async def start(
        self,
        box_file: BoxFile | str | os.PathLike[str],
        chunk_size: int | None,
        close: bool = False,
    ) -> str:
        """Open a session, uploading the first ``chunk_size`` bytes.

        Returns:
            The session id.

        Raises:
            ClientError: If the response carries no session id.
        """
        require_not_none(file=box_file, chunk_size=chunk_size)
        box_file = make_box_file(box_file, chunk_size)

        response = await self._dispatcher.post_to_content(
            START_ENDPOINT,
            {"attributes": {"close": bool(close)}},
            file=box_file,
            access_token=self._access_token,
        )
        body = response.decoded_body
        if not isinstance(body, dict) or not body.get("session_id"):
            raise ClientError("Could not retrieve Session ID.", status_code=response.status_code)

        debug(f"upload session {body['session_id']} started", chunk_size)
        return str(body["session_id"])

    async def append(
        self,
        box_file: BoxFile | str | os.PathLike[str],
        session_id: str | None,
        offset: int | None,
        chunk_size: int | None,
        close: bool = False,
    ) -> str:
        """Append ``chunk_size`` bytes read at ``offset`` to the session.

        The endpoint returns no body, so response validation is off. The
        session id is returned unchanged for chaining.
        """
        require_not_none(file=box_file, session_id=session_id, offset=offset, chunk_size=chunk_size)
        box_file = make_box_file(box_file, chunk_size, offset)

        cursor: UploadCursor = {"session_id": session_id, "offset": offset}
        await self._dispatcher.post_to_content(
            APPEND_ENDPOINT,
            {"attributes": {"cursor": cursor, "close": bool(close)}},
            file=box_file,
            validate_response=False,
            access_token=self._access_token,
        )
        debug(f"upload session {session_id} appended", offset, chunk_size)
        return session_id

    async def finish(
        self,
        box_file: BoxFile | str | os.PathLike[str],
        session_id: str | None,
        offset: int | None,
        remaining: int | None,
        path: str | None,
        params: dict[str, Any] | None = None,
    ) -> FileMetadata:
        """Upload the last ``remaining`` bytes and commit the file to ``path``."""
        require_not_none(
            file=box_file,
            session_id=session_id,
            offset=offset,
            remaining=remaining,
            path=path,
        )
        box_file = make_box_file(box_file, remaining, offset)

        cursor: UploadCursor = {"session_id": session_id, "offset": offset}
        commit: CommitInfo = {**(params or {}), "path": path}  # type: ignore[typeddict-item]
        response = await self._dispatcher.post_to_content(
            FINISH_ENDPOINT,
            {"attributes": {"cursor": cursor, "commit": commit}},
            file=box_file,
            access_token=self._access_token,
        )
        debug(f"upload session {session_id} finished", path)
        body = response.decoded_body
        return FileMetadata.model_validate(body if isinstance(body, dict) else {})

    async def upload_chunked(
        self,
        box_file: BoxFile | str | os.PathLike[str],
        path: str | None,
        file_size: int | None = None,
        chunk_size: int | None = None,
        params: dict[str, Any] | None = None,
    ) -> FileMetadata:
        """Upload a file through a session: start, append while bytes remain, finish."""
        require_not_none(file=box_file, path=path)
        box_file = make_box_file(box_file)

        if file_size is None:
            file_size = box_file.size
        if chunk_size is None:
            chunk_size = self.default_chunk_size
        chunk_size = resolve_chunk_size(file_size, chunk_size)

        session_id = await self.start(box_file, chunk_size)
        session = UploadSession(
            session_id,
            chunk_size=chunk_size,
            total_size=file_size,
            path=path,
            commit=params,
        )

        while session.has_more_chunks:
            await self.append(box_file, session.session_id, session.uploaded, session.chunk_size)
            session.advance()

        metadata = await self.finish(
            box_file,
            session.session_id,
            session.uploaded,
            session.remaining,
            session.path,
            session.commit,
        )
        session.finished = True
        return metadata


__all__ = [
    "UploadSession",
    "UploadSessionCoordinator",
    "resolve_chunk_size",
    "START_ENDPOINT",
    "APPEND_ENDPOINT",
    "FINISH_ENDPOINT",
]
