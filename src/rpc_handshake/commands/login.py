"""Log in to the broker."""

from urllib.parse import urlsplit, urlunsplit

import typer

from rpc_handshake.app_context import use_context
from rpc_handshake.channel import open_channel
from rpc_handshake.errors import HandshakeError
from rpc_handshake.handshake import login as run_login


def login(
    ctx: typer.Context,
    url: str | None = typer.Argument(default=None, help="Broker URL (defaults to the configured url)"),
) -> None:
    """Log in to the broker and print the assigned client id."""
    app = use_context(ctx)
    url = url or app.cfg.url
    try:
        with open_channel(url, timeout=app.cfg.read_timeout) as channel:
            client_id = run_login(
                channel, channel, url, device_id=app.cfg.device_id, mount_point=app.cfg.mount_point
            )
    except HandshakeError as e:
        app.out.print_error_and_exit(e.code, str(e))
    except ValueError as e:
        app.out.print_error_and_exit("invalid_url", str(e))
    app.out.print_logged_in(redact_url(url), client_id)


def redact_url(url: str) -> str:
    """Replace the password in url with ``***``."""
    parts = urlsplit(url)
    if parts.password is None:
        return url
    host = parts.netloc.rpartition("@")[2]
    return urlunsplit(parts._replace(netloc=f"{parts.username}:***@{host}"))
