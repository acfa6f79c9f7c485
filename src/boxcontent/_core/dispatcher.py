"""Send BoxRequests through a transport and wrap the results."""

from __future__ import annotations

from typing import Any

from .._debug import debug
from .._http.config import BoxConfig
from .._http.transport import BaseTransport
from ..errors import check_status
from .builder import RequestBuilder
from .payload import BoxFile
from .request import BoxRequest, EndpointKind
from .response import BoxResponse


class RequestDispatcher:
    """Executes requests one at a time; holds no per-call state."""

    def __init__(
        self,
        transport: BaseTransport,
        config: BoxConfig,
        *,
        builder: RequestBuilder | None = None,
    ) -> None:
        self._transport = transport
        self._config = config
        self._builder = builder or RequestBuilder(config)

    @property
    def transport(self) -> BaseTransport:
        return self._transport

    @property
    def config(self) -> BoxConfig:
        return self._config

    @property
    def builder(self) -> RequestBuilder:
        return self._builder

    async def dispatch(self, request: BoxRequest) -> BoxResponse:
        """Send the request and return its response.

        Raises:
            TransportError: If no response could be obtained.
            ClientError: For 4xx/5xx statuses other than 409.
            InvalidResponseError: If a JSON body fails to decode and the
                request asked for validation.
        """
        url, headers, body, options = self._builder.build(request)
        debug(f"{request.method} {url}", request.endpoint_kind.value)

        raw = await self._transport.send(url, request.method, body, headers, options)
        debug(f"{request.method} {url} -> {raw.status_code}")
        check_status(raw.status_code, raw.body)

        return BoxResponse(request, raw.body, raw.status_code, raw.headers)

    async def send_request(
        self,
        method: str,
        endpoint: str,
        kind: EndpointKind = EndpointKind.API,
        params: dict[str, Any] | None = None,
        *,
        file: BoxFile | None = None,
        headers: dict[str, str] | None = None,
        validate_response: bool = True,
        access_token: str | None = None,
    ) -> BoxResponse:
        request = BoxRequest(
            method=method,
            endpoint=endpoint,
            endpoint_kind=kind,
            access_token=self._config.resolve_token(access_token),
            params=dict(params or {}),
            headers=dict(headers or {}),
            file=file,
            validate_response=validate_response,
        )
        return await self.dispatch(request)

    async def post_to_api(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> BoxResponse:
        return await self.send_request("POST", endpoint, EndpointKind.API, params, **kwargs)

    async def post_to_content(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> BoxResponse:
        return await self.send_request("POST", endpoint, EndpointKind.UPLOAD, params, **kwargs)

    async def close(self) -> None:
        await self._transport.close()


__all__ = ["RequestDispatcher"]
