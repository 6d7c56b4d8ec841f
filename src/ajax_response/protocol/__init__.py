"""Response protocol layer.

Defines the commands a request handler queues for the browser and the
envelope they are sent in.

Key concepts:
- Commands: one instruction each, identified by a short code
- Queue: ordered commands plus an optional return value, per request
- Merge-on-append: adjacent scripts (and adjacent appends to the same
  element property) collapse into one command
- Envelope: the single JSON document encoding a finished queue
"""

from .commands import Command, CommandCode, SearchReplace
from .envelope import Envelope, decode_envelope, encode_response
from .queue import ResponseQueue

__all__ = [
    "Command",
    "CommandCode",
    "SearchReplace",
    "Envelope",
    "decode_envelope",
    "encode_response",
    "ResponseQueue",
]
