"""Rich console logging for the tokensign entry points."""

import logging

from rich.console import Console
from rich.logging import RichHandler

_CONFIGURED = False


def setup_logging(level: str = "INFO") -> None:
    """Install a Rich handler on the root logger. Safe to call repeatedly."""
    global _CONFIGURED

    root = logging.getLogger()
    root.setLevel(level.upper())
    if _CONFIGURED:
        return

    handler = RichHandler(
        console=Console(stderr=True), rich_tracebacks=True, show_path=False, markup=False
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    root.addHandler(handler)
    # uvicorn installs its own handlers; route them through ours instead
    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).handlers.clear()
    _CONFIGURED = True
