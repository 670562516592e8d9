"""Client login handshake: hello → nonce → login → client id.

The handshake owns the channel for its whole run and performs exactly two
strictly sequential round trips. It imposes no timeout of its own; bounded
waiting belongs to the channel (see ``rpc_handshake.channel``).
"""

import logging
from enum import StrEnum
from typing import Protocol
from urllib.parse import unquote_to_bytes, urlsplit

from rpc_handshake.crypto import sha1_password_hash
from rpc_handshake.errors import (
    AuthenticationRejectedError,
    EncodingError,
    HandshakeError,
    ProtocolViolationError,
    TransportError,
)
from rpc_handshake.login_params import LoginParams, LoginType
from rpc_handshake.protocol import RpcMessage, RpcValue

logger = logging.getLogger(__name__)

# Client ids are non-negative 32-bit signed integers
MAX_CLIENT_ID = 2**31 - 1


class MessageReader(Protocol):
    """Receives one message at a time."""

    def receive_message(self) -> RpcMessage | None:
        """Block until a message arrives; return None if the channel is closed."""
        ...


class MessageWriter(Protocol):
    """Sends one message at a time."""

    def send_message(self, msg: RpcMessage) -> None:
        """Send a message."""
        ...


class HandshakeState(StrEnum):
    """Progress of a handshake."""

    START = "start"
    HELLO_SENT = "hello_sent"
    NONCE_OBTAINED = "nonce_obtained"
    LOGIN_SENT = "login_sent"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class Handshake:
    """Single-use driver for one hello/login cycle."""

    def __init__(
        self, reader: MessageReader, writer: MessageWriter, url: str, *, device_id: str = "", mount_point: str = ""
    ) -> None:
        """Initialize the driver.

        Args:
            reader: Source of response messages.
            writer: Sink for request messages.
            url: Connection URL; its userinfo carries the user and the percent-encoded password.
            device_id: Optional device identifier announced at login.
            mount_point: Optional mount point, announced only when device_id is empty.

        """
        self._reader = reader
        self._writer = writer
        self._url = url
        self._device_id = device_id
        self._mount_point = mount_point
        self.state = HandshakeState.START
        self.client_id: int | None = None
        self.error: HandshakeError | None = None

    def run(self) -> int:
        """Perform the handshake and return the client id assigned by the broker.

        Raises:
            RuntimeError: The handshake has already been run.
            TransportError: The channel failed or closed.
            ProtocolViolationError: A response had an unexpected shape.
            AuthenticationRejectedError: The broker answered with an error.
            EncodingError: A credential is not valid UTF-8.

        """
        if self.state != HandshakeState.START:
            msg = f"Handshake already run (state: {self.state})."
            raise RuntimeError(msg)
        try:
            nonce = self._hello()
            self.client_id = self._login(nonce)
        except HandshakeError as e:
            self.state = HandshakeState.FAILED
            self.error = e
            logger.debug("Handshake failed (%s).", e.code)
            raise
        self.state = HandshakeState.AUTHENTICATED
        logger.debug("Authenticated, client id %d.", self.client_id)
        return self.client_id

    def _hello(self) -> str:
        """Send hello and extract the nonce from its response."""
        self._send(RpcMessage.request("hello"))
        self.state = HandshakeState.HELLO_SENT
        resp = self._receive() or RpcMessage()
        if resp.error is not None:
            raise AuthenticationRejectedError(resp.error.message)
        if not resp.has_result or not isinstance(resp.result, dict):
            raise ProtocolViolationError("Bad result: hello response carries no result map.")
        if "nonce" not in resp.result:
            raise ProtocolViolationError("Bad nonce: hello result has no 'nonce'.")
        nonce = resp.result["nonce"]
        if not isinstance(nonce, str):
            raise ProtocolViolationError(f"Bad nonce: expected a string, got {type(nonce).__name__}.")
        self.state = HandshakeState.NONCE_OBTAINED
        return nonce

    def _login(self, nonce: str) -> int:
        """Send login with the hashed password and extract the client id."""
        parts = urlsplit(self._url)
        password = unquote_to_bytes(parts.password or "")
        try:
            password.decode("utf-8")
        except UnicodeDecodeError:
            raise EncodingError("Password is not valid UTF-8 after percent-decoding.") from None
        digest = sha1_password_hash(password, nonce.encode())
        try:
            digest_text = digest.decode("utf-8")
        except UnicodeDecodeError:
            raise EncodingError("Password hash is not valid UTF-8.") from None

        params = LoginParams(
            user=parts.username or "",
            password=digest_text,
            login_type=LoginType.SHA1,
            device_id=self._device_id,
            mount_point=self._mount_point,
            heartbeat_interval=None,
        )
        self._send(RpcMessage.request("login", params.to_wire_value()))
        self.state = HandshakeState.LOGIN_SENT

        resp = self._receive()
        if resp is None:
            raise TransportError("Socket closed before login response.")
        if resp.has_result:
            return _client_id(resp.result)
        if resp.error is not None:
            raise AuthenticationRejectedError(resp.error.message)
        raise ProtocolViolationError("Unknown error: login response carries neither result nor error.")

    def _send(self, msg: RpcMessage) -> None:
        """Send a request, mapping channel faults to TransportError."""
        logger.debug("Sending %s (id %s).", msg.method, msg.request_id)
        try:
            self._writer.send_message(msg)
        except OSError as e:
            raise TransportError(f"Failed to send {msg.method}: {e}") from e

    def _receive(self) -> RpcMessage | None:
        """Receive one response, mapping channel faults to TransportError or ProtocolViolationError."""
        try:
            return self._reader.receive_message()
        except OSError as e:
            raise TransportError(f"Failed to receive response: {e}") from e
        except ValueError as e:
            raise ProtocolViolationError(f"Malformed response: {e}") from e


def _client_id(result: RpcValue) -> int:
    """Extract ``clientId`` from a login result; absent means an unnumbered session (0)."""
    if not isinstance(result, dict) or "clientId" not in result:
        return 0
    client_id = result["clientId"]
    if isinstance(client_id, bool) or not isinstance(client_id, int):
        raise ProtocolViolationError(f"Bad clientId: expected an integer, got {type(client_id).__name__}.")
    if not 0 <= client_id <= MAX_CLIENT_ID:
        raise ProtocolViolationError(f"Bad clientId: out of range ({client_id}).")
    return client_id


def login(
    reader: MessageReader, writer: MessageWriter, url: str, *, device_id: str = "", mount_point: str = ""
) -> int:
    """Run a fresh handshake on the channel and return the client id."""
    return Handshake(reader, writer, url, device_id=device_id, mount_point=mount_point).run()
