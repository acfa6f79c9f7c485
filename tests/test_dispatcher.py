"""Tests for RequestDispatcher status classification and error wrapping."""

import httpx
import pytest
import respx

from boxcontent import (
    BoxConfig,
    BlockingTransport,
    AsyncTransport,
    ClientError,
    EndpointKind,
    InvalidResponseError,
    RawResponse,
    RequestDispatcher,
    TransportError,
    ValidationError,
)
from boxcontent._http import BaseTransport, iter_coroutine

API_BASE = "https://api.box.com/2.0"
UPLOAD_BASE = "https://upload.box.com/api/2.0"


class RecordingTransport(BaseTransport):
    """Transport returning canned responses and remembering what it was sent."""

    def __init__(self, *responses: RawResponse):
        self.responses = list(responses)
        self.calls: list[dict] = []

    async def send(self, url, method, body=None, headers=None, options=None):
        self.calls.append(
            {"url": url, "method": method, "body": body, "headers": dict(headers or {})}
        )
        return self.responses.pop(0)

    async def close(self):
        pass


def _json_response(status: int, body: bytes) -> RawResponse:
    return RawResponse(status, {"content-type": ["application/json"]}, body)


@pytest.fixture
def config(mock_token) -> BoxConfig:
    return BoxConfig(access_token=mock_token)


class TestSyncDispatch:
    @respx.mock
    def test_success_returns_decoded_response(self, config):
        route = respx.post(f"{API_BASE}/files/get_metadata").mock(
            return_value=httpx.Response(200, json={".tag": "file", "name": "a.txt"})
        )
        dispatcher = RequestDispatcher(BlockingTransport(httpx.Client()), config)

        response = iter_coroutine(dispatcher.post_to_api("/files/get_metadata", {"path": "/a.txt"}))

        assert route.called
        sent = route.calls[0].request
        assert sent.content == b'{"path":"/a.txt"}'
        assert sent.headers["authorization"] == f"Bearer {config.access_token}"
        assert response.status_code == 200
        assert response.decoded_body == {".tag": "file", "name": "a.txt"}

    @respx.mock
    def test_conflict_is_returned_not_raised(self, config):
        respx.post(f"{API_BASE}/files/create_folder").mock(
            return_value=httpx.Response(409, json={"error_summary": "path/conflict/folder/"})
        )
        dispatcher = RequestDispatcher(BlockingTransport(httpx.Client()), config)

        response = iter_coroutine(
            dispatcher.post_to_api("/files/create_folder", {"path": "/dup"})
        )

        assert response.status_code == 409
        assert response.is_conflict
        assert response.decoded_body["error_summary"] == "path/conflict/folder/"

    @respx.mock
    def test_conflict_is_returned_even_with_invalid_json(self, config):
        respx.post(f"{API_BASE}/files/move").mock(
            return_value=httpx.Response(
                409, content=b"{broken", headers={"content-type": "application/json"}
            )
        )
        dispatcher = RequestDispatcher(BlockingTransport(httpx.Client()), config)

        response = iter_coroutine(dispatcher.post_to_api("/files/move", {"from_path": "/a"}))

        assert response.status_code == 409

    @respx.mock
    @pytest.mark.parametrize("status", [400, 401, 404, 429, 500, 503])
    def test_error_statuses_raise_client_error(self, config, status):
        respx.post(f"{API_BASE}/files/delete").mock(
            return_value=httpx.Response(status, text="something failed")
        )
        dispatcher = RequestDispatcher(BlockingTransport(httpx.Client()), config)

        with pytest.raises(ClientError) as exc_info:
            iter_coroutine(dispatcher.post_to_api("/files/delete", {"path": "/x"}))

        assert exc_info.value.status_code == status
        assert "something failed" in str(exc_info.value)

    @respx.mock
    def test_network_failure_raises_transport_error(self, config):
        respx.post(f"{API_BASE}/files/delete").mock(side_effect=httpx.ConnectError("refused"))
        dispatcher = RequestDispatcher(BlockingTransport(httpx.Client()), config)

        with pytest.raises(TransportError) as exc_info:
            iter_coroutine(dispatcher.post_to_api("/files/delete", {"path": "/x"}))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @respx.mock
    def test_invalid_json_raises_invalid_response(self, config):
        respx.post(f"{API_BASE}/files/delete").mock(
            return_value=httpx.Response(
                200, content=b"<html>", headers={"content-type": "application/json"}
            )
        )
        dispatcher = RequestDispatcher(BlockingTransport(httpx.Client()), config)

        with pytest.raises(InvalidResponseError):
            iter_coroutine(dispatcher.post_to_api("/files/delete", {"path": "/x"}))


class TestAsyncDispatch:
    @respx.mock
    @pytest.mark.asyncio
    async def test_success_and_conflict(self, config):
        respx.post(f"{API_BASE}/files/copy").mock(
            side_effect=[
                httpx.Response(200, json={".tag": "folder", "name": "b"}),
                httpx.Response(409, json={"error_summary": "to/conflict/"}),
            ]
        )
        dispatcher = RequestDispatcher(AsyncTransport(httpx.AsyncClient()), config)
        try:
            first = await dispatcher.post_to_api("/files/copy", {"from_path": "/a", "to_path": "/b"})
            second = await dispatcher.post_to_api(
                "/files/copy", {"from_path": "/a", "to_path": "/b"}
            )
        finally:
            await dispatcher.close()

        assert first.decoded_body["name"] == "b"
        assert second.is_conflict

    @respx.mock
    @pytest.mark.asyncio
    async def test_error_status_raises(self, config):
        respx.post(f"{UPLOAD_BASE}/files/download").mock(return_value=httpx.Response(404))
        dispatcher = RequestDispatcher(AsyncTransport(httpx.AsyncClient()), config)
        try:
            with pytest.raises(ClientError) as exc_info:
                await dispatcher.post_to_content("/files/download", {"path": "/missing"})
        finally:
            await dispatcher.close()

        assert exc_info.value.status_code == 404


class TestCustomTransport:
    def test_status_checked_for_custom_transports(self, config):
        transport = RecordingTransport(_json_response(500, b'{"error":"boom"}'))
        dispatcher = RequestDispatcher(transport, config)

        with pytest.raises(ClientError):
            iter_coroutine(dispatcher.post_to_api("/files/delete", {"path": "/x"}))

    def test_send_request_uses_endpoint_kind_and_token_override(self, config):
        transport = RecordingTransport(_json_response(200, b"{}"))
        dispatcher = RequestDispatcher(transport, config)

        iter_coroutine(
            dispatcher.send_request(
                "POST",
                "/files/get_thumbnail",
                EndpointKind.UPLOAD,
                {"path": "/a.jpg"},
                access_token="override",
            )
        )

        call = transport.calls[0]
        assert call["url"] == f"{UPLOAD_BASE}/files/get_thumbnail"
        assert call["headers"]["Authorization"] == "Bearer override"

    def test_missing_token_raises_validation_error(self):
        dispatcher = RequestDispatcher(RecordingTransport(), BoxConfig())

        with pytest.raises(ValidationError):
            iter_coroutine(dispatcher.post_to_api("/files/delete", {"path": "/x"}))

    def test_token_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("BOX_ACCESS_TOKEN", "env-token")
        transport = RecordingTransport(_json_response(200, b"{}"))
        dispatcher = RequestDispatcher(transport, BoxConfig())

        response = iter_coroutine(dispatcher.post_to_api("/users/get_space_usage"))

        assert transport.calls[0]["headers"]["Authorization"] == "Bearer env-token"
        assert transport.calls[0]["body"] is None
        assert response.access_token == "env-token"
