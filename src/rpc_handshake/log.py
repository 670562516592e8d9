"""Logging configuration for rpc-handshake."""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_path: Path, *, verbose: bool = False) -> None:
    """Attach a rotating file handler to the package logger, plus a stderr handler when verbose.

    Idempotent: skips if handlers are already attached.
    """
    root = logging.getLogger("rpc_handshake")
    if root.handlers:
        return

    file_handler = RotatingFileHandler(log_path, maxBytes=1_000_000, backupCount=3)
    file_handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
    root.addHandler(file_handler)

    if verbose:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setFormatter(logging.Formatter(fmt="%(levelname)s %(name)s: %(message)s"))
        root.addHandler(stderr_handler)

    root.setLevel(logging.DEBUG)
