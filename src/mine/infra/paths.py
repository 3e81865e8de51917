"""Infrastructure: user path expansion and script-file checks.

This module is the only place that reads ``$HOME`` and arbitrary
environment variables for path purposes.  It implements the
:class:`~mine.core.protocols.ScriptFilesystem` protocol via
:class:`LocalFilesystem`.

Rules
-----
* ``$NAME`` and ``${NAME}`` expand anywhere; unset variables expand to
  the empty string.
* ``~`` expands only as the whole path or a leading ``~/``.
* Paths are made absolute and normalised, never symlink-resolved.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import os
import re
import stat
from pathlib import Path

from mine.exceptions import (
    FilesystemError,
    NotAFileError,
    PathResolutionError,
    ScriptNotFoundError,
)

HOME_SHORTHAND: str = "$HOME"

_ENV_VAR_RE = re.compile(r"\$(?:\{([^}]*)\}|(\w+))")


# ---------------------------------------------------------------------------
# Expansion
# ---------------------------------------------------------------------------

def current_home_dir() -> str:
    """Return the user's home directory, or ``""`` if it is unknown."""
    home = os.environ.get("HOME", "")
    if home:
        return home
    try:
        return str(Path.home())
    except (RuntimeError, KeyError):
        return ""


def expand_env_vars(value: str) -> str:
    """Replace ``$NAME`` / ``${NAME}`` references with their values."""
    def _lookup(match: re.Match[str]) -> str:
        name = match.group(1) if match.group(1) is not None else match.group(2)
        return os.environ.get(name, "")

    return _ENV_VAR_RE.sub(_lookup, value)


def expand_home_shortcut(path: str) -> str:
    """Expand a leading ``~`` or ``~/``; leave every other ``~`` alone.

    Raises
    ------
    PathResolutionError
        When the home directory is needed but cannot be determined.
    """
    if path != "~" and not path.startswith(("~/", "~" + os.sep)):
        return path

    home = current_home_dir()
    if home == "":
        raise PathResolutionError(
            "cannot expand ~ because HOME is not set",
            path=path,
        )
    if path == "~":
        return home
    return os.path.join(home, path[2:])


def resolve_user_path(raw: str) -> Path:
    """Expand variables and ``~`` in *raw* and return an absolute path.

    Relative results are anchored at the current working directory.

    Raises
    ------
    PathResolutionError
        When *raw* is empty or ``~`` cannot be expanded.
    """
    if raw == "":
        raise PathResolutionError("path is empty", path=raw)
    expanded = expand_home_shortcut(expand_env_vars(raw))
    return Path(os.path.abspath(expanded))


def collapse_home_path(path: str | Path) -> str:
    """Return *path* rewritten relative to ``$HOME`` when it lies inside it.

    Paths outside the home directory are returned unchanged.
    """
    text = str(path)
    if text == "":
        return text

    home = current_home_dir()
    if home == "":
        return text

    clean_home = os.path.normpath(home)
    clean_path = os.path.normpath(text)
    if clean_path == clean_home:
        return HOME_SHORTHAND

    prefix = clean_home + os.sep
    if clean_path.startswith(prefix):
        return f"{HOME_SHORTHAND}/{Path(clean_path[len(prefix):]).as_posix()}"
    return text


# ---------------------------------------------------------------------------
# Protocol adapter
# ---------------------------------------------------------------------------

class LocalFilesystem:
    """Concrete :class:`ScriptFilesystem` backed by the local OS.

    Satisfies the :class:`~mine.core.protocols.ScriptFilesystem`
    protocol structurally — no explicit inheritance required.
    """

    def resolve(self, raw: str) -> Path:
        return resolve_user_path(raw)

    def collapse(self, path: Path) -> str:
        return collapse_home_path(path)

    def ensure_directory(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(
                f'unable to prepare directory "{path}": {exc.strerror or exc}',
                path=str(path),
            ) from exc

    def require_file(self, path: Path, *, display: str | None = None) -> None:
        shown = display if display is not None else str(path)
        try:
            info = path.stat()
        except FileNotFoundError as exc:
            raise ScriptNotFoundError(shown) from exc
        except OSError as exc:
            raise FilesystemError(
                f'unable to inspect command file "{shown}": {exc.strerror or exc}',
                path=shown,
            ) from exc
        if stat.S_ISDIR(info.st_mode):
            raise NotAFileError(shown)
