"""Login parameters and their wire representation."""

from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from urllib.parse import urlsplit

from rpc_handshake.protocol import RpcValue

# The broker drops a connection after three missed heartbeats
WATCHDOG_HEARTBEAT_MULTIPLIER = 3

DEFAULT_HEARTBEAT_INTERVAL = timedelta(seconds=60)


class LoginType(StrEnum):
    """How the password field is to be interpreted by the broker."""

    PLAIN = "PLAIN"
    SHA1 = "SHA1"


class Scheme(StrEnum):
    """Transport behind a connection URL."""

    TCP = "tcp"
    LOCAL_SOCKET = "localsocket"

    @staticmethod
    def from_url(url: str) -> "Scheme":
        """Resolve the transport from a URL scheme; ``unix`` is an alias of ``localsocket``.

        Raises:
            ValueError: Unsupported scheme.

        """
        scheme = urlsplit(url).scheme.lower()
        if scheme == "unix":
            return Scheme.LOCAL_SOCKET
        try:
            return Scheme(scheme)
        except ValueError:
            msg = f"Unsupported URL scheme: {scheme!r}"
            raise ValueError(msg) from None


@dataclass(frozen=True)
class LoginParams:
    """How to authenticate against the broker. Built fresh for every login attempt."""

    user: str = ""
    password: str = ""
    login_type: LoginType = LoginType.SHA1
    device_id: str = ""
    mount_point: str = ""
    heartbeat_interval: timedelta | None = DEFAULT_HEARTBEAT_INTERVAL

    def to_wire_value(self) -> RpcValue:
        """Build the ``login`` request parameters.

        ``login`` and ``options`` are always emitted, ``options`` possibly empty.
        ``options.device`` is emitted only when a device id or mount point is set,
        and a device id takes precedence over a mount point.
        """
        options: dict[str, RpcValue] = {}
        if self.heartbeat_interval is not None:
            options["idleWatchDogTimeOut"] = int(self.heartbeat_interval.total_seconds()) * WATCHDOG_HEARTBEAT_MULTIPLIER
        if self.device_id:
            options["device"] = {"deviceId": self.device_id}
        elif self.mount_point:
            options["device"] = {"mountPoint": self.mount_point}
        return {
            "login": {"user": self.user, "password": self.password, "type": str(self.login_type)},
            "options": options,
        }


def to_wire_value(params: LoginParams) -> RpcValue:
    """Build the ``login`` request parameters for params."""
    return params.to_wire_value()
