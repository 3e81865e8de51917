"""Logging facade with optional Rich support.

Five channels are exposed through the module-level :data:`logger`:

======== ========== ============= ======
channel  prefix     style         stream
======== ========== ============= ======
info     [INFO]     blue          stdout
error    [ERROR]    red           stderr
warning  [WARNING]  default       stderr
success  [SUCCESS]  green         stdout
default  (none)     default       stdout
======== ========== ============= ======

Each channel takes a ``%``-style format string plus arguments.  Silent
mode suppresses every channel except ``default``, which carries the
actual command output (listings, config values).

This module intentionally avoids module-level imports of Rich so
bootstrap paths (``--help``, ``--version``) remain functional even when
Rich is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from mine.exceptions import DependencyMissingError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``DependencyMissingError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise DependencyMissingError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = False) -> Any:
    """Create a Rich console targeting stdout, or stderr if requested."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr, soft_wrap=True)


class Logger:
    """Colourised, silence-aware output channels."""

    def __init__(self) -> None:
        self._silent: bool = False

    @property
    def silent(self) -> bool:
        return self._silent

    def set_silent(self, silent: bool) -> None:
        """Suppress (or restore) every channel except :meth:`default`."""
        self._silent = silent

    def info(self, message: str, *args: object) -> None:
        self._emit(message, args, prefix="INFO", style="blue", stderr=False)

    def error(self, message: str, *args: object) -> None:
        self._emit(message, args, prefix="ERROR", style="red", stderr=True)

    def warning(self, message: str, *args: object) -> None:
        self._emit(message, args, prefix="WARNING", style=None, stderr=True)

    def success(self, message: str, *args: object) -> None:
        self._emit(message, args, prefix="SUCCESS", style="green", stderr=False)

    def default(self, message: str, *args: object) -> None:
        self._emit(message, args, prefix=None, style=None, stderr=False, always=True)

    def _emit(
        self,
        message: str,
        args: tuple[object, ...],
        *,
        prefix: str | None,
        style: str | None,
        stderr: bool,
        always: bool = False,
    ) -> None:
        if self._silent and not always:
            return
        text = message % args if args else message
        if prefix is not None:
            text = f"[{prefix}] {text}"
        _write(text, style=style, stderr=stderr)


def _write(text: str, *, style: str | None, stderr: bool) -> None:
    """Render with Rich when available, else plain ``print``."""
    try:
        rich_console = get_rich_console(stderr=stderr)
    except DependencyMissingError:
        print(text, file=sys.stderr if stderr else sys.stdout)
        return
    rich_console.print(text, style=style, markup=False, highlight=False, emoji=False)


logger = Logger()
