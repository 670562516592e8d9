"""Show login request parameters."""

from datetime import timedelta

import typer

from rpc_handshake.app_context import use_context
from rpc_handshake.login_params import LoginParams, LoginType


def params(
    ctx: typer.Context,
    *,
    user: str = typer.Option(default="", help="User name"),
    password: str = typer.Option(default="", help="Password or password hash"),
    login_type: LoginType = typer.Option(LoginType.SHA1, "--type", help="Password interpretation"),
    device_id: str | None = typer.Option(default=None, help="Device identifier (defaults to the configured one)"),
    mount_point: str | None = typer.Option(default=None, help="Mount point (defaults to the configured one)"),
    heartbeat: int | None = typer.Option(
        default=None, min=0, help="Heartbeat interval in seconds, 0 disables the watchdog (defaults to config)"
    ),
) -> None:
    """Print the parameters a login request would carry."""
    app = use_context(ctx)
    if heartbeat is None:
        heartbeat_interval = app.cfg.heartbeat
    else:
        heartbeat_interval = timedelta(seconds=heartbeat) if heartbeat else None
    login_params = LoginParams(
        user=user,
        password=password,
        login_type=login_type,
        device_id=app.cfg.device_id if device_id is None else device_id,
        mount_point=app.cfg.mount_point if mount_point is None else mount_point,
        heartbeat_interval=heartbeat_interval,
    )
    app.out.print_login_params(login_params.to_wire_value())
