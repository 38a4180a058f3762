"""Tests for the JSON-RPC envelope codec."""

import pytest

from user_mcp.mcp.jsonrpc import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    PARSE_ERROR,
    EnvelopeError,
    decode_request,
    decode_response,
    encode_response,
    jsonrpc_error,
    jsonrpc_response,
    parse_body,
)


class TestBuilders:
    def test_response_shape(self):
        assert jsonrpc_response(7, {"tools": []}) == {
            "jsonrpc": "2.0",
            "id": 7,
            "result": {"tools": []},
        }

    def test_error_shape(self):
        envelope = jsonrpc_error("abc", -32601, "Unknown tool: nope")
        assert envelope == {
            "jsonrpc": "2.0",
            "id": "abc",
            "error": {"code": -32601, "message": "Unknown tool: nope"},
        }
        assert "result" not in envelope

    def test_null_result_is_still_a_result(self):
        envelope = jsonrpc_response(1, None)
        assert "result" in envelope and envelope["result"] is None
        assert "error" not in envelope


class TestDecodeRequest:
    def test_valid_request(self):
        id, method, params = decode_request(
            {"jsonrpc": "2.0", "id": 3, "method": "tools/list", "params": {"x": 1}}
        )
        assert (id, method, params) == (3, "tools/list", {"x": 1})

    def test_params_and_id_optional(self):
        assert decode_request({"jsonrpc": "2.0", "method": "ping"}) == (None, "ping", None)

    def test_non_object_envelope(self):
        with pytest.raises(EnvelopeError) as exc_info:
            decode_request("tools/list")
        assert exc_info.value.code == INVALID_REQUEST
        assert exc_info.value.id is None

    @pytest.mark.parametrize("method", [None, 42, ""])
    def test_bad_method_keeps_id(self, method):
        with pytest.raises(EnvelopeError) as exc_info:
            decode_request({"jsonrpc": "2.0", "id": 9, "method": method})
        assert exc_info.value.code == INVALID_REQUEST
        assert exc_info.value.id == 9

    def test_wrong_version(self):
        with pytest.raises(EnvelopeError) as exc_info:
            decode_request({"jsonrpc": "1.0", "id": 1, "method": "ping"})
        assert exc_info.value.code == INVALID_REQUEST

    def test_params_must_be_object(self):
        with pytest.raises(EnvelopeError) as exc_info:
            decode_request({"jsonrpc": "2.0", "id": 1, "method": "tools/call", "params": [1]})
        assert exc_info.value.code == INVALID_PARAMS


class TestText:
    def test_parse_error(self):
        with pytest.raises(EnvelopeError) as exc_info:
            parse_body(b"{not json")
        assert exc_info.value.code == PARSE_ERROR

    @pytest.mark.parametrize(
        "text",
        [
            b'{"jsonrpc": "2.0", "id": NaN, "method": "ping"}',
            b'{"jsonrpc": "2.0", "id": Infinity, "method": "ping"}',
            b'{"jsonrpc": "2.0", "id": -Infinity, "method": "ping"}',
            b'{"jsonrpc": "2.0", "id": 1e400, "method": "ping"}',
        ],
    )
    def test_non_finite_numbers_are_parse_errors(self, text):
        with pytest.raises(EnvelopeError) as exc_info:
            parse_body(text)
        assert exc_info.value.code == PARSE_ERROR

    def test_large_integers_parse_exactly(self):
        body = parse_body(b'{"id": 100000000000000000000000000001}')
        assert body["id"] == 10**29 + 1
        assert isinstance(body["id"], int)

    def test_round_trip_success(self):
        envelope = jsonrpc_response(
            1,
            {
                "id": 3,
                "name": "Carol",
                "email": "carol@example.com",
                "role": "user",
                "created_at": "2025-01-01T00:00:00Z",
            },
        )
        assert decode_response(encode_response(envelope)) == envelope

    def test_round_trip_error_and_batch(self):
        batch = [jsonrpc_error(None, -32700, "Parse error"), jsonrpc_response("a", [1, 2])]
        assert decode_response(encode_response(batch)) == batch

    def test_decode_rejects_both_result_and_error(self):
        with pytest.raises(EnvelopeError):
            decode_response('{"jsonrpc": "2.0", "id": 1, "result": 1, "error": {}}')
