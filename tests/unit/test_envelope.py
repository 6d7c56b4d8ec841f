"""Unit tests for the wire envelope encoder."""

import json

import pytest
from pydantic import BaseModel

from ajax_response.errors import EncodingError
from ajax_response.protocol.envelope import (
    COMMANDS_FIELD,
    RETURN_VALUE_FIELD,
    Envelope,
    decode_envelope,
    encode_response,
)
from ajax_response.protocol.queue import ResponseQueue


class TestEncodeResponse:
    """Test encoding finished queues."""

    def test_empty_queue(self, response: ResponseQueue):
        """No commands and no return value gives only the empty command list."""
        assert json.loads(encode_response(response)) == {"xjxobj": []}

    def test_returns_bytes(self, response: ResponseQueue):
        assert isinstance(encode_response(response), bytes)

    def test_return_value_included_when_set(self, response: ResponseQueue):
        response.set_return_value({"total": 3})

        assert json.loads(encode_response(response)) == {
            RETURN_VALUE_FIELD: {"total": 3},
            COMMANDS_FIELD: [],
        }

    @pytest.mark.parametrize("falsy", [0, "", False, []])
    def test_falsy_return_values_are_sent(self, response: ResponseQueue, falsy):
        """Only an unset (None) return value is omitted."""
        response.set_return_value(falsy)

        assert json.loads(encode_response(response))[RETURN_VALUE_FIELD] == falsy

    def test_command_order_preserved(self, response: ResponseQueue):
        response.alert("1").assign("a", "value", "2").script("three()").remove("b")

        commands = json.loads(encode_response(response))[COMMANDS_FIELD]

        assert [c["cmd"] for c in commands] == ["al", "as", "js", "rm"]

    def test_unset_fields_omitted(self, response: ResponseQueue):
        response.alert("hi")

        assert json.loads(encode_response(response))[COMMANDS_FIELD] == [{"cmd": "al", "data": "hi"}]

    def test_non_json_content_type_raises(self, response: ResponseQueue):
        """Only the JSON envelope format is supported."""
        response.set_content_type("text/xml")

        with pytest.raises(EncodingError, match="text/xml"):
            encode_response(response)

    def test_utf8_output_is_raw(self, response: ResponseQueue):
        response.alert("日本語 🎌")

        encoded = encode_response(response)

        assert "日本語 🎌".encode() in encoded
        assert json.loads(encoded)[COMMANDS_FIELD][0]["data"] == "日本語 🎌"

    def test_other_charsets_get_ascii_output(self, response: ResponseQueue):
        """Non-UTF charsets receive escaped, ASCII-only JSON."""
        response.set_character_encoding("ISO-8859-1").alert("café")

        encoded = encode_response(response)

        assert encoded.isascii()
        assert b"\\u00e9" in encoded
        assert json.loads(encoded)[COMMANDS_FIELD][0]["data"] == "café"

    def test_pydantic_payloads_are_serialized(self, response: ResponseQueue):
        """Payloads may carry models, e.g. call arguments."""

        class Point(BaseModel):
            x: int
            y: int

        response.call("moveTo", Point(x=1, y=2))

        commands = json.loads(encode_response(response))[COMMANDS_FIELD]

        assert commands[0]["data"] == [{"x": 1, "y": 2}]


class TestDecodeEnvelope:
    """Test decoding on the client side of the wire."""

    def test_round_trip_preserves_commands(self, response: ResponseQueue):
        """Encoding then decoding keeps order and every set field."""
        (
            response.assign("status", "innerHTML", "Saved")
            .replace("text", "innerHTML", "old", "new")
            .create_input("form", "text", "name", "name-input")
            .call("refresh", 1, None)
            .include_css("/print.css", "print")
            .sleep(5)
            .set_return_value([1, 2])
        )

        envelope = decode_envelope(encode_response(response))

        assert envelope.return_value == [1, 2]
        assert envelope.commands == list(response.commands)

    def test_from_queue_to_wire(self, response: ResponseQueue):
        response.alert("x")

        assert Envelope.from_queue(response).to_wire() == {
            "xjxobj": [{"cmd": "al", "data": "x"}],
        }

    def test_decode_accepts_text(self):
        envelope = decode_envelope('{"xjxobj": [{"cmd": "js", "data": "a()"}]}')

        assert envelope.return_value is None
        assert envelope.commands[0].data == "a()"
