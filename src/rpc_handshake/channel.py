"""Socket channel: newline-framed JSON messages over TCP or a Unix socket."""

import logging
import socket
from urllib.parse import unquote, urlsplit

from rpc_handshake.errors import TransportError
from rpc_handshake.login_params import Scheme
from rpc_handshake.protocol import RpcMessage, decode_message, encode_message

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3755


class SocketChannel:
    """Duplex message channel over a connected stream socket."""

    def __init__(self, sock: socket.socket) -> None:
        """Wrap a connected socket. The channel takes ownership and closes it on close()."""
        self._sock = sock
        self._rfile = sock.makefile("rb")

    def receive_message(self) -> RpcMessage | None:
        """Read one message line; return None when the peer closed the connection.

        Raises:
            OSError: Socket failure or read timeout.
            ValueError: The line is not a valid message.

        """
        line = self._rfile.readline()
        if not line:
            return None
        return decode_message(line)

    def send_message(self, msg: RpcMessage) -> None:
        """Write one message line."""
        self._sock.sendall(encode_message(msg))

    def close(self) -> None:
        """Close the reader and the socket."""
        self._rfile.close()
        self._sock.close()

    def __enter__(self) -> "SocketChannel":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


def open_channel(url: str, timeout: float | None = None) -> SocketChannel:
    """Connect to the broker addressed by url.

    ``tcp://host[:port]`` connects over TCP (default port 3755);
    ``localsocket:///path`` and ``unix:///path`` connect to a Unix socket.
    The timeout applies to connecting and to every subsequent read.

    Raises:
        ValueError: Unsupported scheme or missing host/path.
        TransportError: Connection failed.

    """
    scheme = Scheme.from_url(url)
    parts = urlsplit(url)
    try:
        if scheme == Scheme.TCP:
            if not parts.hostname:
                msg = f"Missing host in URL: {url!r}"
                raise ValueError(msg)
            address = (parts.hostname, parts.port or DEFAULT_PORT)
            sock = socket.create_connection(address, timeout=timeout)
        else:
            path = unquote(parts.path)
            if not path:
                msg = f"Missing socket path in URL: {url!r}"
                raise ValueError(msg)
            address = path
            sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                sock.settimeout(timeout)
                sock.connect(path)
            except OSError:
                sock.close()
                raise
    except OSError as e:
        raise TransportError(f"Cannot connect to {scheme} broker: {e}") from e
    logger.info("Connected to %s broker at %s", scheme, address)
    return SocketChannel(sock)
