"""Infrastructure: config file location and lifecycle.

Rules
-----
* The config lives in ``<platform config home>/mine/`` unless the
  user names another file.
* A missing config file is created with defaults on first use.
* Loading never rewrites the file; only :meth:`ConfigStore.save` does.
* Writes replace the whole file and are not atomic.
* Raw ``OSError`` is re-raised as :class:`~mine.exceptions.FilesystemError`.
"""

from __future__ import annotations

import os
import platform
from pathlib import Path

from mine.core.codec import decode, encode
from mine.core.models import ConfigModel
from mine.exceptions import ConfigDecodeError, FilesystemError
from mine.infra.paths import current_home_dir

APP_NAME: str = "mine"
DEFAULT_CONFIG_NAME: str = "config.toml"
CONFIG_SUFFIX: str = ".toml"
COMMANDS_DIR_NAME: str = "commands"


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

def _platform_config_home() -> Path:
    """Return the per-user configuration root for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        appdata = os.environ.get("APPDATA", "")
        if not appdata:
            raise FilesystemError("%AppData% is not defined", path="%AppData%")
        return Path(appdata)

    home = current_home_dir()
    if system == "darwin":
        if not home:
            raise FilesystemError("$HOME is not defined", path="$HOME")
        return Path(home) / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg:
        return Path(xdg)
    if not home:
        raise FilesystemError(
            "neither $XDG_CONFIG_HOME nor $HOME are defined",
            path="$HOME",
        )
    return Path(home) / ".config"


def user_config_dir() -> Path:
    """Return (and create) the ``mine`` directory in the config home."""
    directory = _platform_config_home() / APP_NAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(
            f'unable to create config directory "{directory}": {exc.strerror or exc}',
            path=str(directory),
        ) from exc
    return directory


def resolve_config_path(name: str = "") -> Path:
    """Map a ``-config-file`` value to a config file path.

    * empty: ``config.toml`` in :func:`user_config_dir`;
    * a name without an extension gets ``.toml`` appended;
    * absolute paths are used as given;
    * names containing a path separator are relative to the cwd;
    * bare names live in :func:`user_config_dir`.
    """
    target = name or DEFAULT_CONFIG_NAME
    if Path(target).suffix == "":
        target += CONFIG_SUFFIX

    if os.path.isabs(target):
        return Path(target)
    if os.sep in target or (os.altsep is not None and os.altsep in target):
        return Path(os.path.abspath(target))
    return user_config_dir() / target


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class ConfigStore:
    """Loads, creates and saves one config file.

    Satisfies the :class:`~mine.core.protocols.ConfigWriter` protocol
    structurally.

    Parameters
    ----------
    path:
        Location of the config file.  It need not exist yet.
    """

    def __init__(self, path: Path) -> None:
        self._path: Path = path

    @classmethod
    def from_name(cls, name: str = "") -> ConfigStore:
        """Build a store for a ``-config-file`` value (see :func:`resolve_config_path`)."""
        return cls(resolve_config_path(name))

    @property
    def path(self) -> Path:
        return self._path

    def default_model(self) -> ConfigModel:
        """Model written when the config file does not exist yet."""
        return ConfigModel.with_defaults(str(self._path.parent / COMMANDS_DIR_NAME))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def load(self) -> ConfigModel:
        """Read and decode the config file.

        Built-in executors missing from the file are added to the
        returned model only; the file itself is left as it is.

        Raises
        ------
        ConfigDecodeError
            When the file is malformed; the error names the file.
        FilesystemError
            When the file cannot be read.
        """
        try:
            data = self._path.read_bytes()
        except OSError as exc:
            raise FilesystemError(
                f'unable to read config "{self._path}": {exc.strerror or exc}',
                path=str(self._path),
            ) from exc
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ConfigDecodeError(
                "invalid UTF-8 encoding",
                line_number=data.count(b"\n", 0, exc.start) + 1,
                path=str(self._path),
            ) from exc
        try:
            return decode(text)
        except ConfigDecodeError as exc:
            raise exc.with_path(str(self._path)) from exc

    def ensure(self) -> ConfigModel:
        """Load the config, creating it with defaults when absent."""
        self._ensure_parent()
        if not self._path.exists():
            model = self.default_model()
            self.save(model)
            return model
        return self.load()

    def save(self, model: ConfigModel) -> None:
        """Encode *model* and overwrite the config file with it.

        Raises
        ------
        FilesystemError
            When the directory or file cannot be written.
        """
        self._ensure_parent()
        try:
            self._path.write_text(encode(model), encoding="utf-8")
        except OSError as exc:
            raise FilesystemError(
                f'unable to update config "{self._path}": {exc.strerror or exc}',
                path=str(self._path),
            ) from exc

    def _ensure_parent(self) -> None:
        parent = self._path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise FilesystemError(
                f'unable to create config directory "{parent}": {exc.strerror or exc}',
                path=str(parent),
            ) from exc
