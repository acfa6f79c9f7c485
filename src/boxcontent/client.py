"""Box API clients with namespaced sub-clients."""

from __future__ import annotations

from typing import Any

import httpx

from ._core.dispatcher import RequestDispatcher
from ._core.payload import BoxFile
from ._core.request import EndpointKind
from ._core.response import BoxResponse
from ._http.clients import make_async_transport, make_transport
from ._http.config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_CHUNKED_UPLOAD_THRESHOLD,
    DEFAULT_TIMEOUT,
    BoxConfig,
)
from ._http.iter_coroutine import iter_coroutine
from ._http.transport import BaseTransport
from .files import AsyncFilesClient, FilesClient
from .users import AsyncUsersClient, UsersClient


def _make_config(
    access_token: str | None,
    api_base_url: str | None,
    upload_base_url: str | None,
    timeout: float | None,
    default_headers: dict[str, str] | None,
    chunked_upload_threshold: int | None,
    default_chunk_size: int | None,
) -> BoxConfig:
    kwargs: dict[str, Any] = {
        "access_token": access_token,
        "timeout": DEFAULT_TIMEOUT if timeout is None else timeout,
        "default_headers": dict(default_headers or {}),
        "chunked_upload_threshold": (
            DEFAULT_CHUNKED_UPLOAD_THRESHOLD
            if chunked_upload_threshold is None
            else chunked_upload_threshold
        ),
        "default_chunk_size": (
            DEFAULT_CHUNK_SIZE if default_chunk_size is None else default_chunk_size
        ),
    }
    # Unset base URLs fall through to the BOX_API_URL / BOX_UPLOAD_URL env vars.
    if api_base_url:
        kwargs["api_base_url"] = api_base_url.rstrip("/")
    if upload_base_url:
        kwargs["upload_base_url"] = upload_base_url.rstrip("/")
    return BoxConfig(**kwargs)


class BoxClient:
    """Synchronous Box SDK client.

    Example:
        >>> with BoxClient(access_token="...") as box:
        ...     listing = box.files.list_folder("/")
        ...     box.files.upload("report.pdf", "/reports/report.pdf")
    """

    def __init__(
        self,
        *,
        access_token: str | None = None,
        api_base_url: str | None = None,
        upload_base_url: str | None = None,
        timeout: float | None = None,
        http_client: BaseTransport | httpx.Client | None = None,
        default_headers: dict[str, str] | None = None,
        chunked_upload_threshold: int | None = None,
        default_chunk_size: int | None = None,
    ):
        self._config = _make_config(
            access_token,
            api_base_url,
            upload_base_url,
            timeout,
            default_headers,
            chunked_upload_threshold,
            default_chunk_size,
        )
        self._transport = make_transport(http_client, timeout=self._config.timeout)
        self._dispatcher = RequestDispatcher(self._transport, self._config)
        self.files = FilesClient(self._dispatcher)
        self.users = UsersClient(self._dispatcher)

    @property
    def config(self) -> BoxConfig:
        return self._config

    @property
    def dispatcher(self) -> RequestDispatcher:
        return self._dispatcher

    def send_request(
        self,
        method: str,
        endpoint: str,
        endpoint_kind: EndpointKind | str = EndpointKind.API,
        params: dict[str, Any] | None = None,
        *,
        file: BoxFile | None = None,
        access_token: str | None = None,
    ) -> BoxResponse:
        return iter_coroutine(
            self._dispatcher.send_request(
                method,
                endpoint,
                EndpointKind(endpoint_kind),
                params,
                file=file,
                access_token=access_token,
            )
        )

    def post_to_api(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        access_token: str | None = None,
    ) -> BoxResponse:
        return iter_coroutine(
            self._dispatcher.post_to_api(endpoint, params, access_token=access_token)
        )

    def post_to_content(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        access_token: str | None = None,
        *,
        file: BoxFile | None = None,
    ) -> BoxResponse:
        return iter_coroutine(
            self._dispatcher.post_to_content(
                endpoint, params, file=file, access_token=access_token
            )
        )

    def close(self) -> None:
        iter_coroutine(self._dispatcher.close())

    def __enter__(self) -> BoxClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()


class AsyncBoxClient:
    """Asynchronous Box SDK client."""

    def __init__(
        self,
        *,
        access_token: str | None = None,
        api_base_url: str | None = None,
        upload_base_url: str | None = None,
        timeout: float | None = None,
        http_client: BaseTransport | httpx.AsyncClient | None = None,
        default_headers: dict[str, str] | None = None,
        chunked_upload_threshold: int | None = None,
        default_chunk_size: int | None = None,
    ):
        self._config = _make_config(
            access_token,
            api_base_url,
            upload_base_url,
            timeout,
            default_headers,
            chunked_upload_threshold,
            default_chunk_size,
        )
        self._transport = make_async_transport(http_client, timeout=self._config.timeout)
        self._dispatcher = RequestDispatcher(self._transport, self._config)
        self.files = AsyncFilesClient(self._dispatcher)
        self.users = AsyncUsersClient(self._dispatcher)

    @property
    def config(self) -> BoxConfig:
        return self._config

    @property
    def dispatcher(self) -> RequestDispatcher:
        return self._dispatcher

    async def send_request(
        self,
        method: str,
        endpoint: str,
        endpoint_kind: EndpointKind | str = EndpointKind.API,
        params: dict[str, Any] | None = None,
        *,
        file: BoxFile | None = None,
        access_token: str | None = None,
    ) -> BoxResponse:
        return await self._dispatcher.send_request(
            method,
            endpoint,
            EndpointKind(endpoint_kind),
            params,
            file=file,
            access_token=access_token,
        )

    async def post_to_api(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        access_token: str | None = None,
    ) -> BoxResponse:
        return await self._dispatcher.post_to_api(endpoint, params, access_token=access_token)

    async def post_to_content(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        access_token: str | None = None,
        *,
        file: BoxFile | None = None,
    ) -> BoxResponse:
        return await self._dispatcher.post_to_content(
            endpoint, params, file=file, access_token=access_token
        )

    async def close(self) -> None:
        await self._dispatcher.close()

    async def __aenter__(self) -> AsyncBoxClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()


__all__ = ["BoxClient", "AsyncBoxClient"]
