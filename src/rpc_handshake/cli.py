"""CLI entry point for rpc-handshake."""

from pathlib import Path
from typing import Annotated

import typer
from mm_clikit import TyperPlus

from rpc_handshake.app_context import AppContext
from rpc_handshake.commands.login import login
from rpc_handshake.commands.params import params
from rpc_handshake.config import Config
from rpc_handshake.log import setup_logging
from rpc_handshake.output import Output

app = TyperPlus(package_name="rpc-handshake")


@app.callback()
def callback(
    ctx: typer.Context,
    *,
    json_output: Annotated[bool, typer.Option("--json", help="Output results as JSON.")] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Also log to stderr.")] = False,
) -> None:
    """Authenticate against an RPC broker with the hello/login handshake."""
    cfg = Config.build(data_dir)
    cfg.data_dir.mkdir(parents=True, exist_ok=True)
    setup_logging(cfg.log_path, verbose=verbose)
    ctx.obj = AppContext(out=Output(json_mode=json_output), cfg=cfg)


app.command(aliases=["l"])(login)
app.command(aliases=["p"])(params)
