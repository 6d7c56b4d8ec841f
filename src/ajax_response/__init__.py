"""Server-side command queues for asynchronous browser requests."""

from .config import ResponseSettings, settings
from .errors import DataError, EncodingError, ResponseError
from .plugins import PluginRegistry, ResponsePlugin
from .protocol import (
    Command,
    CommandCode,
    Envelope,
    ResponseQueue,
    SearchReplace,
    decode_envelope,
    encode_response,
)

__all__ = [
    "Command",
    "CommandCode",
    "DataError",
    "EncodingError",
    "Envelope",
    "PluginRegistry",
    "ResponseError",
    "ResponsePlugin",
    "ResponseQueue",
    "ResponseSettings",
    "SearchReplace",
    "decode_envelope",
    "encode_response",
    "settings",
]
