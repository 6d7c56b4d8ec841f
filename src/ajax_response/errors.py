"""Errors raised while building or encoding a response."""


class ResponseError(Exception):
    """Base class for response queue errors."""


class DataError(ResponseError):
    """Raised when commands of an unsupported shape are merged into a queue."""


class EncodingError(ResponseError):
    """Raised when a queue cannot be encoded into the wire envelope."""

    def __init__(self, content_type: str) -> None:
        self.content_type = content_type
        super().__init__(f"Unsupported response content type: {content_type}")
