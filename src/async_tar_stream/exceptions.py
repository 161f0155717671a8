"""Custom exceptions for async tar streaming."""


class TarStreamError(Exception):
    """Base exception for all tar stream errors."""

    pass


class TarReadError(TarStreamError):
    """Raised when unable to read or parse a tar archive."""

    pass


class UnexpectedEndOfStream(TarReadError, EOFError):
    """Raised when a channel ends before the requested byte count was moved."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Unexpected end of stream: expected {expected} bytes, got {received}"
        )


class InvalidHeaderError(TarReadError):
    """Raised when a non-zero block cannot be decoded as a tar header."""

    pass


class DestinationError(TarStreamError):
    """Raised when an extraction destination cannot be opened or written."""

    pass


class ValidationError(TarStreamError):
    """Raised when configuration or header data is invalid."""

    pass
