"""In-memory catalog of registered commands.

:class:`CommandCatalog` is a thin view over a :class:`ConfigModel` that
owns the alias rules: aliases are unique, and a rejected insert leaves
the model untouched.  Pure — no I/O.
"""

from __future__ import annotations

from mine.core.codec import is_valid_alias
from mine.core.models import COMMANDS_FOLDER_KEY, CommandDefinition, ConfigModel
from mine.exceptions import CommandExistsError, CommandNotFoundError, InvalidAliasError


class CommandCatalog:
    """Alias registry backed by the ``commands`` table of a config model.

    Parameters
    ----------
    model:
        The loaded config.  Mutations are applied to it directly.
    """

    def __init__(self, model: ConfigModel) -> None:
        self._model: ConfigModel = model

    def __contains__(self, alias: object) -> bool:
        return alias in self._model.commands

    def __len__(self) -> int:
        return len(self._model.commands)

    @property
    def commands_folder(self) -> str:
        """Configured default directory for bare script names, or ``""``."""
        return self._model.scalars.get(COMMANDS_FOLDER_KEY, "")

    def get(self, alias: str) -> CommandDefinition:
        """Return the definition registered under *alias*.

        Raises
        ------
        CommandNotFoundError
            When *alias* is not registered.
        """
        try:
            return self._model.commands[alias]
        except KeyError:
            raise CommandNotFoundError(alias) from None

    def add(self, alias: str, definition: CommandDefinition) -> None:
        """Register *definition* under a new *alias*.

        Raises
        ------
        InvalidAliasError
            When *alias* is empty, padded with whitespace, or contains
            a line break or other non-printable character.
        CommandExistsError
            When *alias* is already taken.  The existing entry is kept.
        """
        if not is_valid_alias(alias):
            raise InvalidAliasError(alias)
        if alias in self._model.commands:
            raise CommandExistsError(alias)
        self._model.commands[alias] = definition

    def list_lines(self) -> list[str]:
        """Return ``"alias  description"`` lines sorted by alias."""
        commands = self._model.commands
        return [f"{alias}  {commands[alias].description}" for alias in sorted(commands)]
