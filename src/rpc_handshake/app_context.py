"""CLI context: output mode and loaded configuration, shared by the login and params commands."""

from dataclasses import dataclass

import typer

from rpc_handshake.config import Config
from rpc_handshake.output import Output


@dataclass(frozen=True, slots=True)
class AppContext:
    """Per-invocation state built by the CLI callback."""

    out: Output
    cfg: Config


def use_context(ctx: typer.Context) -> AppContext:
    """Extract application context from Typer context."""
    result: AppContext = ctx.obj
    return result
