from __future__ import annotations

import json

import pytest

from proxybase_mcp.app.schemas.jsonrpc import (
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcFailure,
    JsonRpcSuccess,
    RequestParseError,
    decode_request,
    decode_response,
    encode_response,
    parse_error_response,
)


def test_decode_request_full() -> None:
    req = decode_request('{"jsonrpc":"2.0","id":7,"method":"tools/list","params":{"a":1},"extra":true}')
    assert req.id == 7
    assert req.method == "tools/list"
    assert req.params == {"a": 1}
    assert not req.is_notification


def test_missing_id_is_notification() -> None:
    req = decode_request('{"jsonrpc":"2.0","method":"notifications/initialized"}')
    assert req.is_notification
    assert req.id is None
    assert req.params is None


def test_null_id_is_not_notification() -> None:
    req = decode_request('{"jsonrpc":"2.0","id":null,"method":"initialize"}')
    assert not req.is_notification


def test_string_id_kept() -> None:
    assert decode_request('{"jsonrpc":"2.0","id":"abc","method":"x"}').id == "abc"


@pytest.mark.parametrize(
    "line",
    [
        "not json",
        "[1, 2]",
        '{"jsonrpc":"2.0","id":1}',
        '{"id":1,"method":"initialize"}',
        '{"jsonrpc":"2.0","id":1,"method":5}',
    ],
)
def test_decode_request_rejects(line: str) -> None:
    with pytest.raises(RequestParseError):
        decode_request(line)


def test_success_wire_shape() -> None:
    wire = json.loads(encode_response(JsonRpcSuccess(id=1, result={"ok": True})))
    assert wire == {"jsonrpc": "2.0", "id": 1, "result": {"ok": True}}
    assert "error" not in wire


def test_null_result_still_present() -> None:
    wire = json.loads(encode_response(JsonRpcSuccess(id=3, result=None)))
    assert "result" in wire and wire["result"] is None


def test_failure_wire_shape() -> None:
    resp = JsonRpcFailure.build(1, METHOD_NOT_FOUND, "Method not found: nope")
    wire = json.loads(encode_response(resp))
    assert wire == {"jsonrpc": "2.0", "id": 1, "error": {"code": -32601, "message": "Method not found: nope"}}
    assert "result" not in wire


def test_failure_data_included_when_set() -> None:
    wire = json.loads(encode_response(JsonRpcFailure.build(1, -32000, "x", data={"k": "v"})))
    assert wire["error"]["data"] == {"k": "v"}


def test_encoded_response_is_single_line() -> None:
    text = encode_response(JsonRpcSuccess(id=1, result={"text": "line one\nline two"}))
    assert "\n" not in text


def test_encoded_response_is_ascii() -> None:
    result = {"text": "payment_pending → paid", "note": "\ud800"}
    text = encode_response(JsonRpcSuccess(id=1, result=result))
    assert text.isascii()
    assert json.loads(text)["result"] == result


def test_parse_error_response() -> None:
    wire = json.loads(encode_response(parse_error_response("bad")))
    assert wire["id"] is None
    assert wire["error"]["code"] == PARSE_ERROR
    assert wire["error"]["message"] == "Parse error: bad"


def test_success_round_trip_preserves_value() -> None:
    value = {"a": [1, 2.5, None, True, "Ã¼"], "b": {"nested": {"deep": -0.125}}, "c": ""}
    decoded = decode_response(encode_response(JsonRpcSuccess(id="r", result=value)))
    assert isinstance(decoded, JsonRpcSuccess)
    assert decoded.result == value
    assert decoded.id == "r"


def test_decode_response_failure() -> None:
    decoded = decode_response('{"jsonrpc":"2.0","id":null,"error":{"code":-32700,"message":"Parse error: x"}}')
    assert isinstance(decoded, JsonRpcFailure)
    assert decoded.error.code == -32700


def test_decode_response_rejects_both_and_neither() -> None:
    with pytest.raises(ValueError):
        decode_response('{"jsonrpc":"2.0","id":1,"result":1,"error":{"code":1,"message":"m"}}')
    with pytest.raises(ValueError):
        decode_response('{"jsonrpc":"2.0","id":1}')
