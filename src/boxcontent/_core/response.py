"""Decoded API response."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from ..errors import CONFLICT_STATUS, InvalidResponseError
from .request import BoxRequest


def _is_json_content_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def header_values(headers: Mapping[str, Any], name: str) -> list[str]:
    """Values of a header, matched case-insensitively; single values become a list."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() != wanted:
            continue
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            return [str(item) for item in value]
        return [str(value)]
    return []


class BoxResponse:
    """Response to a BoxRequest.

    The body is JSON-decoded only when the Content-Type says JSON; anything
    else (file downloads, thumbnails) is kept as the raw bytes.
    """

    def __init__(
        self,
        request: BoxRequest,
        body: bytes | str = b"",
        status_code: int | None = None,
        headers: Mapping[str, Sequence[str] | str] | None = None,
    ) -> None:
        self._request = request
        self._body = body
        self._status_code = status_code
        self._headers = dict(headers or {})
        self._decoded_body: Any = None
        self._decode_failed = False
        self._decode_body()

    @property
    def request(self) -> BoxRequest:
        return self._request

    @property
    def body(self) -> bytes | str:
        return self._body

    @property
    def decoded_body(self) -> Any:
        return self._decoded_body

    @property
    def access_token(self) -> str | None:
        return self._request.access_token

    @property
    def headers(self) -> dict[str, Sequence[str] | str]:
        return self._headers

    @property
    def status_code(self) -> int | None:
        return self._status_code

    @property
    def is_conflict(self) -> bool:
        return self._status_code == CONFLICT_STATUS

    def header(self, name: str) -> str | None:
        """First value of a response header, or None."""
        values = header_values(self._headers, name)
        return values[0] if values else None

    def _decode_body(self) -> None:
        content_types = header_values(self._headers, "content-type")
        if not any(_is_json_content_type(value) for value in content_types):
            self._decoded_body = self._body
            return

        try:
            self._decoded_body = json.loads(self._body)
        except ValueError:
            self._decoded_body = None
            self._decode_failed = bool(self._body)

        if self._request.validate_response and not self.is_conflict:
            self._validate_response()

    def _validate_response(self) -> None:
        if self._decode_failed:
            raise InvalidResponseError(body=self._body)


__all__ = ["BoxResponse", "header_values"]
