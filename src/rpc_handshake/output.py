"""Structured output for CLI and JSON modes."""

# ruff: noqa: T201  # print() is how this module produces CLI output

import json
import sys
from typing import NoReturn

import typer

from rpc_handshake.protocol import RpcValue


class Output:
    """Handles all CLI output in JSON or human-readable format."""

    def __init__(self, *, json_mode: bool) -> None:
        """Initialize output handler.

        Args:
            json_mode: If True, output JSON envelopes; otherwise human-readable text.

        """
        self._json_mode = json_mode

    def _success(self, data: dict[str, object], message: str) -> None:
        """Print a success result in JSON or human-readable format."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": data}))
        else:
            print(message)

    def print_error_and_exit(self, code: str, message: str) -> NoReturn:
        """Print an error in JSON or human-readable format and exit with code 1.

        Raises:
            typer.Exit: Always, with code 1.

        """
        if self._json_mode:
            print(json.dumps({"ok": False, "error": code, "message": message}))
        else:
            print(f"Error: {message}", file=sys.stderr)
        raise typer.Exit(code=1)

    def print_logged_in(self, url: str, client_id: int) -> None:
        """Print successful login with the assigned client id."""
        self._success({"url": url, "client_id": client_id}, f"Logged in to {url}, client id {client_id}.")

    def print_login_params(self, params: RpcValue) -> None:
        """Print the login request parameters."""
        if self._json_mode:
            print(json.dumps({"ok": True, "data": {"params": params}}))
        else:
            print(json.dumps(params, indent=2))
