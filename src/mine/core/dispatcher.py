"""Core dispatcher — turns an alias into a shell command line and runs it.

Flow
----
1. Look the alias up in the catalog.
2. Re-resolve the stored path (it may be ``$HOME``/``~`` shorthand).
3. Check the script is a regular file.
4. Pick the executor template by lowercase file extension.
5. Substitute the single-quoted path for every ``{{path}}`` token.
6. Hand the command line to the injected
   :class:`~mine.core.protocols.CommandRunner`.

Steps 1–5 never spawn a process, so every configuration error is
reported before anything runs.
"""

from __future__ import annotations

from pathlib import PurePath

from mine.core.catalog import CommandCatalog
from mine.core.models import PATH_PLACEHOLDER, ConfigModel
from mine.core.protocols import CommandRunner, ScriptFilesystem
from mine.exceptions import (
    ExecutorNotConfiguredError,
    MissingCommandPathError,
    MissingExtensionError,
    MissingPlaceholderError,
)


# ---------------------------------------------------------------------------
# Command-line construction (pure)
# ---------------------------------------------------------------------------

def shell_quote(value: str) -> str:
    """Wrap *value* in single quotes for a POSIX shell.

    Embedded single quotes become ``'\\''`` so the shell sees exactly
    one word with the literal value.
    """
    if value == "":
        return "''"
    return "'" + value.replace("'", "'\\''") + "'"


def script_extension(path: str | PurePath) -> str:
    """Return the lowercase text after the last ``.`` of the file name."""
    name = PurePath(path).name
    _, dot, extension = name.rpartition(".")
    return extension.lower() if dot else ""


def build_executor_command(template: str, script_path: str, extension: str) -> str:
    """Substitute the quoted *script_path* into an executor *template*.

    Raises
    ------
    MissingPlaceholderError
        When *template* does not contain ``{{path}}``.
    """
    if PATH_PLACEHOLDER not in template:
        raise MissingPlaceholderError(extension)
    return template.replace(PATH_PLACEHOLDER, shell_quote(script_path))


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

class Dispatcher:
    """Runs registered commands through their extension's executor.

    Parameters
    ----------
    filesystem:
        Any object satisfying the :class:`ScriptFilesystem` protocol.
    runner:
        Any object satisfying the :class:`CommandRunner` protocol.
    """

    def __init__(self, filesystem: ScriptFilesystem, runner: CommandRunner) -> None:
        self._filesystem: ScriptFilesystem = filesystem
        self._runner: CommandRunner = runner

    def prepare(self, model: ConfigModel, alias: str) -> str:
        """Return the shell command line that would run *alias*.

        Raises
        ------
        CommandNotFoundError, MissingCommandPathError
            When the alias is unknown or has an empty path.
        PathResolutionError
            When the stored path cannot be expanded.
        ScriptNotFoundError, NotAFileError, FilesystemError
            When the script is not a regular file.
        MissingExtensionError, ExecutorNotConfiguredError, MissingPlaceholderError
            When no usable executor template exists for the file.
        """
        definition = CommandCatalog(model).get(alias)
        if definition.path == "":
            raise MissingCommandPathError(alias)

        script_path = self._filesystem.resolve(definition.path)
        self._filesystem.require_file(script_path, display=definition.path)

        extension = script_extension(script_path)
        if extension == "":
            raise MissingExtensionError(definition.path)

        template = model.executors.get(extension)
        if template is None:
            raise ExecutorNotConfiguredError(extension)

        return build_executor_command(template, str(script_path), extension)

    def execute(self, model: ConfigModel, alias: str) -> str:
        """Run *alias* in the foreground and return the command line used.

        Raises
        ------
        ExecutorFailedError
            When the process cannot start or exits non-zero.

        All errors of :meth:`prepare` are raised before any process is
        started.
        """
        command_line = self.prepare(model, alias)
        self._runner.run(command_line)
        return command_line
