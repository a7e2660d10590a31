"""Konfiguracja logowania: RichHandler na stderr."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

err_console = Console(stderr=True)


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Idempotentnie ustawia handler głównego loggera."""
    resolved = logging.DEBUG if verbose else logging.getLevelName(level)
    if not isinstance(resolved, int):
        resolved = logging.WARNING

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        markup=False,
    ))
    root.setLevel(resolved)
