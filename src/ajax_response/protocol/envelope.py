"""Wire envelope encoding.

The envelope is the single JSON document sent back for a request:

    {
        "xjxrv": <return value, omitted when unset>,
        "xjxobj": [<command>, ...]
    }

Commands keep their queue order exactly.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field
from pydantic_core import to_json, to_jsonable_python

from ..config import JSON_CONTENT_TYPE
from ..errors import EncodingError
from .commands import Command

if TYPE_CHECKING:
    from .queue import ResponseQueue

logger = logging.getLogger(__name__)

RETURN_VALUE_FIELD = "xjxrv"
COMMANDS_FIELD = "xjxobj"

_UTF_ENCODINGS = frozenset({"utf-8", "utf8"})


class Envelope(BaseModel):
    """A decoded wire envelope."""

    return_value: Any = None
    commands: list[Command] = Field(default_factory=list)

    @classmethod
    def from_queue(cls, queue: ResponseQueue) -> Envelope:
        return cls(return_value=queue.return_value, commands=list(queue.commands))

    @classmethod
    def from_wire(cls, wire: dict[str, Any]) -> Envelope:
        return cls(
            return_value=wire.get(RETURN_VALUE_FIELD),
            commands=[Command.from_wire(command) for command in wire.get(COMMANDS_FIELD, [])],
        )

    def to_wire(self) -> dict[str, Any]:
        wire: dict[str, Any] = {}
        if self.return_value is not None:
            wire[RETURN_VALUE_FIELD] = self.return_value
        wire[COMMANDS_FIELD] = [command.to_wire() for command in self.commands]
        return wire


def encode_response(queue: ResponseQueue) -> bytes:
    """Encode a finished queue into the wire envelope.

    UTF-8 queues get raw UTF-8 JSON. Any other character set gets ASCII-only
    JSON with non-ASCII characters escaped.

    Raises:
        EncodingError: If the queue's content type is not JSON
    """
    if queue.content_type != JSON_CONTENT_TYPE:
        raise EncodingError(queue.content_type)

    wire = Envelope.from_queue(queue).to_wire()
    logger.debug(f"Encoding response envelope with {len(wire[COMMANDS_FIELD])} commands")

    if queue.character_encoding.strip().lower() in _UTF_ENCODINGS:
        return to_json(wire)
    text = json.dumps(to_jsonable_python(wire), ensure_ascii=True, separators=(",", ":"))
    return text.encode("ascii")


def decode_envelope(raw: bytes | str) -> Envelope:
    """Parse an encoded envelope back into commands and return value."""
    return Envelope.from_wire(json.loads(raw))
