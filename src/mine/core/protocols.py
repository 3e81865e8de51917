"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so the catalog and dispatcher stay testable without
touching the real filesystem or spawning processes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from mine.core.models import ConfigModel


class ScriptFilesystem(Protocol):
    """Contract for path expansion and script-file checks."""

    def resolve(self, raw: str) -> Path:
        """Expand ``$VARS`` and a leading ``~`` and return an absolute path.

        Raises
        ------
        PathResolutionError
            When *raw* is empty or ``~`` cannot be expanded.
        """
        ...  # pragma: no cover

    def collapse(self, path: Path) -> str:
        """Return the ``$HOME``-relative storage form of *path*."""
        ...  # pragma: no cover

    def ensure_directory(self, path: Path) -> None:
        """Create *path* and its parents if absent.

        Raises
        ------
        FilesystemError
            When the directory cannot be created.
        """
        ...  # pragma: no cover

    def require_file(self, path: Path, *, display: str | None = None) -> None:
        """Check that *path* is an existing regular file.

        *display* is the form of the path named in errors; defaults to
        *path* itself.

        Raises
        ------
        ScriptNotFoundError
            When nothing exists at *path*.
        NotAFileError
            When *path* is a directory.
        FilesystemError
            For any other stat failure.
        """
        ...  # pragma: no cover


class ConfigWriter(Protocol):
    """Contract for persisting a whole :class:`ConfigModel`."""

    def save(self, model: ConfigModel) -> None:
        """Write *model* to durable storage, replacing previous content.

        Raises
        ------
        FilesystemError
            When the write fails.
        """
        ...  # pragma: no cover


class CommandRunner(Protocol):
    """Contract for launching a fully built shell command line."""

    def run(self, command_line: str) -> None:
        """Run *command_line* in the foreground and wait for it.

        Raises
        ------
        ExecutorFailedError
            When the process cannot start or exits non-zero.
        """
        ...  # pragma: no cover
