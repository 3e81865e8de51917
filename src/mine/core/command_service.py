"""Core command service — registers scripts and lists the catalog.

This service delegates filesystem access to a
:class:`~mine.core.protocols.ScriptFilesystem` and persistence to a
:class:`~mine.core.protocols.ConfigWriter`, both injected at
construction time.  It is responsible for:

* Choosing where a script lives (commands folder vs. explicit path).
* Validating the script before touching the catalog.
* Enforcing alias uniqueness and persisting the result.
"""

from __future__ import annotations

import os

from mine.core.catalog import CommandCatalog
from mine.core.models import CommandDefinition, ConfigModel
from mine.core.protocols import ConfigWriter, ScriptFilesystem
from mine.exceptions import CommandsFolderNotConfiguredError


def is_simple_command_name(value: str) -> bool:
    """Return ``True`` when *value* is a bare file name.

    Bare names are looked up in the commands folder; anything absolute,
    containing a path separator, or starting with ``~`` or ``$`` is a
    path in its own right.
    """
    if value == "":
        return False
    if os.path.isabs(value):
        return False
    if value.startswith(("~", "$")):
        return False
    separators = {os.sep, os.altsep} - {None}
    return not any(separator in value for separator in separators)


class CommandService:
    """Service that drives the ``add`` and ``ls`` operations.

    Parameters
    ----------
    filesystem:
        Any object satisfying the :class:`ScriptFilesystem` protocol.
    writer:
        Any object satisfying the :class:`ConfigWriter` protocol.
    """

    def __init__(self, filesystem: ScriptFilesystem, writer: ConfigWriter) -> None:
        self._filesystem: ScriptFilesystem = filesystem
        self._writer: ConfigWriter = writer

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def add_command(
        self,
        model: ConfigModel,
        file_name: str,
        alias: str,
        description: str,
    ) -> CommandDefinition:
        """Register the script *file_name* under *alias* and persist.

        Parameters
        ----------
        model:
            The loaded config; receives the new entry.
        file_name:
            A bare name inside ``commands_folder`` or a path (absolute,
            relative to the cwd, or starting with ``~``/``$VAR``).
        alias:
            The name the script will be executed by.
        description:
            Free-form text shown by ``ls``.

        Returns
        -------
        CommandDefinition
            The stored entry, with the path in its ``$HOME`` form.

        Raises
        ------
        CommandsFolderNotConfiguredError
            When ``commands_folder`` is unset or empty.
        ScriptNotFoundError, NotAFileError, FilesystemError
            When the script is not a readable regular file.
        CommandExistsError
            When *alias* is taken.  Only checked once the file is valid.
        """
        catalog = CommandCatalog(model)
        if not catalog.commands_folder:
            raise CommandsFolderNotConfiguredError()

        commands_dir = self._filesystem.resolve(catalog.commands_folder)
        self._filesystem.ensure_directory(commands_dir)

        if is_simple_command_name(file_name):
            script_path = commands_dir / file_name
        else:
            script_path = self._filesystem.resolve(file_name)

        self._filesystem.require_file(script_path)

        definition = CommandDefinition(
            path=self._filesystem.collapse(script_path),
            description=description,
        )
        catalog.add(alias, definition)
        self._writer.save(model)
        return definition

    @staticmethod
    def list_commands(model: ConfigModel) -> list[str]:
        """Return ``"alias  description"`` lines sorted by alias."""
        return CommandCatalog(model).list_lines()
