"""Turn a BoxRequest into the URL, headers and body put on the wire."""

from __future__ import annotations

import json
from typing import Any

from .._http.config import BoxConfig
from .._http.transport import JSONBody, MultipartBody, RequestBody
from .request import BoxRequest, EndpointKind

# Content endpoints without a file body receive their arguments in this header.
API_ARG_HEADER = "box-api-arg"

BuiltRequest = tuple[str, dict[str, str], RequestBody, dict[str, Any]]


def build_auth_header(access_token: str | None) -> dict[str, str]:
    return {"Authorization": f"Bearer {access_token or ''}"}


def _encode_json(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"))


def _layer_headers(base: dict[str, str], extra: dict[str, str]) -> dict[str, str]:
    headers = dict(base)
    for key, value in extra.items():
        if key.lower() == "authorization":
            continue
        headers[key] = value
    return headers


class RequestBuilder:
    """Builds wire requests against the base paths of a BoxConfig."""

    def __init__(self, config: BoxConfig) -> None:
        self._config = config

    def build_url(self, endpoint: str, kind: EndpointKind = EndpointKind.API) -> str:
        if kind is EndpointKind.UPLOAD:
            base = self._config.upload_base_url
        else:
            base = self._config.api_base_url
        return base + endpoint

    def build(self, request: BoxRequest) -> BuiltRequest:
        """Return ``(url, headers, body, options)`` for the request.

        API calls carry their params as a compact JSON body; with no params
        the body is absent and Content-Type is sent empty. Upload calls with
        a file send a multipart body (``attributes`` then ``file``) and leave
        Content-Type to the transport; without a file they send no body and
        no Content-Type.
        """
        url = self.build_url(request.endpoint, request.endpoint_kind)
        extra_headers = {**self._config.default_headers, **request.headers}
        content_type: str | None

        body: RequestBody
        if request.endpoint_kind is EndpointKind.UPLOAD:
            content_type = None
            if request.file is not None:
                attributes = request.params.get("attributes") or {}
                body = MultipartBody(attributes=_encode_json(attributes), file=request.file)
            else:
                body = None
                if request.params:
                    extra_headers[API_ARG_HEADER] = _encode_json(request.params)
        else:
            if request.params:
                body = JSONBody(dict(request.params))
                content_type = "application/json"
            else:
                body = None
                content_type = ""

        headers = _layer_headers(build_auth_header(request.access_token), extra_headers)
        # Content-Type is decided here only, never by the caller.
        headers = {key: value for key, value in headers.items() if key.lower() != "content-type"}
        if content_type is not None:
            headers["Content-Type"] = content_type

        options: dict[str, Any] = {"timeout": self._config.timeout}
        return url, headers, body, options


__all__ = ["RequestBuilder", "BuiltRequest", "API_ARG_HEADER", "build_auth_header"]
