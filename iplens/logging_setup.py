"""
Logging setup using Rich on stderr

stdout is reserved for the JSON result, so all log records go to the
error stream.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler


__all__ = ['setup_logging']

_CONSOLE_HANDLER = 'iplens_rich_handler'

DEFAULT_LEVEL = logging.WARNING


def setup_logging(level: int = DEFAULT_LEVEL, *, show_path: bool = False) -> None:
    """Configure root logging with a Rich stderr handler (idempotent)"""
    root = logging.getLogger()

    handler = next((h for h in root.handlers if h.name == _CONSOLE_HANDLER), None)
    if handler is None:
        handler = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=show_path,
            markup=False,
            rich_tracebacks=True,
        )
        handler.name = _CONSOLE_HANDLER
        root.addHandler(handler)

    handler.setLevel(level)
    root.setLevel(level)
