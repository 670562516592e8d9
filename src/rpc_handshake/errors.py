"""Errors raised by the login handshake."""


class HandshakeError(Exception):
    """Base error for a failed handshake."""

    code = "handshake"

    def __init__(self, message: str, code: str | None = None) -> None:
        """Initialize with a human-readable message and an optional machine-readable code.

        Args:
            message: Human-readable failure cause.
            code: Overrides the class-level code (e.g. "rejected").

        """
        super().__init__(message)
        if code is not None:
            self.code = code


class TransportError(HandshakeError):
    """Sending or receiving on the channel failed, or the channel closed."""

    code = "transport"


class ProtocolViolationError(HandshakeError):
    """A response was missing or did not have the expected shape."""

    code = "protocol_violation"


class AuthenticationRejectedError(HandshakeError):
    """The broker answered hello or login with an error."""

    code = "rejected"


class EncodingError(HandshakeError):
    """A credential could not be represented as UTF-8 text."""

    code = "encoding"
