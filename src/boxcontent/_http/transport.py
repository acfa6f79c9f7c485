"""HTTP transport implementations for sync and async clients."""

from __future__ import annotations

import abc
import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from ..errors import TransportError, check_status

if TYPE_CHECKING:
    from .._core.payload import BoxFile


@dataclass(frozen=True, slots=True)
class JSONBody:
    """JSON request body, encoded compactly."""

    data: Any

    def encode(self) -> bytes:
        return json.dumps(self.data, separators=(",", ":")).encode("utf-8")


@dataclass(frozen=True, slots=True)
class MultipartBody:
    """multipart/form-data body: an ``attributes`` JSON part followed by a ``file`` part."""

    attributes: str
    file: BoxFile

    @property
    def part_names(self) -> tuple[str, str]:
        return ("attributes", "file")


RequestBody = JSONBody | MultipartBody | None


@dataclass(slots=True)
class RawResponse:
    """Undecoded response as returned by a transport."""

    status_code: int
    headers: dict[str, list[str]] = field(default_factory=dict)
    body: bytes = b""


def _collect_headers(headers: httpx.Headers) -> dict[str, list[str]]:
    collected: dict[str, list[str]] = {}
    for key in headers.keys():
        collected[key] = headers.get_list(key)
    return collected


def _to_raw_response(resp: httpx.Response) -> RawResponse:
    raw = RawResponse(
        status_code=resp.status_code,
        headers=_collect_headers(resp.headers),
        body=resp.content,
    )
    check_status(raw.status_code, raw.body)
    return raw


def _request_kwargs(
    body: RequestBody,
    headers: Mapping[str, str] | None,
    options: Mapping[str, Any] | None,
) -> dict[str, Any]:
    kwargs: dict[str, Any] = {"headers": dict(headers or {})}
    timeout = (options or {}).get("timeout")
    if timeout is not None:
        kwargs["timeout"] = httpx.Timeout(timeout)
    if isinstance(body, JSONBody):
        kwargs["content"] = body.encode()
    elif isinstance(body, MultipartBody):
        kwargs["data"] = {"attributes": body.attributes}
    return kwargs


class BaseTransport(abc.ABC):
    """Abstract transport with async interface."""

    @abc.abstractmethod
    async def send(
        self,
        url: str,
        method: str,
        body: RequestBody = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        """Send one request and return the raw response."""
        ...

    @abc.abstractmethod
    async def close(self) -> None: ...


class BlockingTransport(BaseTransport):
    """
    Synchronous HTTP transport using httpx.Client.

    Methods are declared async but don't actually await anything,
    allowing them to be executed via iter_coroutine().
    """

    def __init__(self, client: httpx.Client | None = None) -> None:
        self._client = client

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client()
        return self._client

    async def send(
        self,
        url: str,
        method: str,
        body: RequestBody = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        kwargs = _request_kwargs(body, headers, options)
        try:
            if isinstance(body, MultipartBody):
                with body.file.open() as stream:
                    kwargs["files"] = {"file": (body.file.name, stream, "application/octet-stream")}
                    resp = self._get_client().request(method, url, **kwargs)
            else:
                resp = self._get_client().request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {url} failed", exc) from exc
        return _to_raw_response(resp)

    async def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


class AsyncTransport(BaseTransport):
    """Async I/O transport using httpx.AsyncClient."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
        return self._client

    async def send(
        self,
        url: str,
        method: str,
        body: RequestBody = None,
        headers: Mapping[str, str] | None = None,
        options: Mapping[str, Any] | None = None,
    ) -> RawResponse:
        kwargs = _request_kwargs(body, headers, options)
        try:
            if isinstance(body, MultipartBody):
                with body.file.open() as stream:
                    kwargs["files"] = {"file": (body.file.name, stream, "application/octet-stream")}
                    resp = await self._get_client().request(method, url, **kwargs)
            else:
                resp = await self._get_client().request(method, url, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {url} failed", exc) from exc
        return _to_raw_response(resp)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


__all__ = [
    "BaseTransport",
    "BlockingTransport",
    "AsyncTransport",
    "JSONBody",
    "MultipartBody",
    "RequestBody",
    "RawResponse",
]
