"""Tests for BoxResponse decoding and validation."""

import pytest

from boxcontent import BoxRequest, BoxResponse, InvalidResponseError

JSON_HEADERS = {"content-type": ["application/json; charset=utf-8"]}


def _request(validate: bool = True) -> BoxRequest:
    return BoxRequest("POST", "/files/get_metadata", access_token="tok", validate_response=validate)


class TestDecoding:
    def test_json_body_is_decoded(self):
        response = BoxResponse(_request(), b'{"name":"a.txt","size":3}', 200, JSON_HEADERS)
        assert response.decoded_body == {"name": "a.txt", "size": 3}
        assert response.body == b'{"name":"a.txt","size":3}'

    def test_vendor_json_content_type_is_decoded(self):
        headers = {"Content-Type": "application/problem+json"}
        response = BoxResponse(_request(), b'{"error":"x"}', 200, headers)
        assert response.decoded_body == {"error": "x"}

    def test_non_json_body_is_kept_byte_for_byte(self):
        payload = b"\x89PNG\r\n\x1a\n\x00\xff"
        headers = {"content-type": ["application/octet-stream"]}
        response = BoxResponse(_request(), payload, 200, headers)
        assert response.decoded_body == payload

    def test_missing_content_type_keeps_raw_body(self):
        response = BoxResponse(_request(), b'{"looks":"json"}', 200, {})
        assert response.decoded_body == b'{"looks":"json"}'

    def test_empty_json_body_decodes_to_none_without_error(self):
        response = BoxResponse(_request(), b"", 200, JSON_HEADERS)
        assert response.decoded_body is None


class TestValidation:
    def test_malformed_json_raises_when_validating(self):
        with pytest.raises(InvalidResponseError) as exc_info:
            BoxResponse(_request(), b"{not json", 200, JSON_HEADERS)
        assert exc_info.value.body == b"{not json"

    def test_malformed_json_allowed_without_validation(self):
        response = BoxResponse(_request(validate=False), b"{not json", 200, JSON_HEADERS)
        assert response.decoded_body is None

    def test_conflict_skips_validation(self):
        response = BoxResponse(_request(), b"{not json", 409, JSON_HEADERS)
        assert response.is_conflict
        assert response.decoded_body is None


class TestAccessors:
    def test_header_lookup_is_case_insensitive_and_returns_first_value(self):
        headers = {"Box-API-Result": ['{"name":"a"}', '{"name":"b"}'], **JSON_HEADERS}
        response = BoxResponse(_request(), b"{}", 200, headers)
        assert response.header("box-api-result") == '{"name":"a"}'
        assert response.header("x-missing") is None

    def test_request_and_token_are_carried(self):
        request = _request()
        response = BoxResponse(request, b"{}", 200, JSON_HEADERS)
        assert response.request is request
        assert response.access_token == "tok"
        assert response.status_code == 200
        assert not response.is_conflict
