"""Infrastructure layer — operating-system integration.

This layer wraps the filesystem, the environment and process
spawning.  Every raw ``OSError`` must be caught here and re-raised as
a :class:`~mine.exceptions.MineError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from mine.infra.config_store import ConfigStore, resolve_config_path, user_config_dir
from mine.infra.paths import LocalFilesystem, collapse_home_path, resolve_user_path
from mine.infra.shell_runner import ShellRunner

__all__: list[str] = [
    "ConfigStore",
    "LocalFilesystem",
    "ShellRunner",
    "collapse_home_path",
    "resolve_config_path",
    "resolve_user_path",
    "user_config_dir",
]
