"""Domain models for mine.

:class:`CommandDefinition` is a **frozen** value object.  :class:`ConfigModel`
is deliberately mutable: it is loaded once per invocation, passed
explicitly through the call chain, mutated, and handed back to the store
for persisting.  It is never held as module-level state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

PATH_PLACEHOLDER: str = "{{path}}"
"""Token replaced by the quoted script path in executor templates."""

COMMANDS_FOLDER_KEY: str = "commands_folder"
"""Scalar naming the directory that bare script names are looked up in."""

DEFAULT_EXECUTORS: dict[str, str] = {
    "sh": f"sh {PATH_PLACEHOLDER}",
    "py": f"python3 {PATH_PLACEHOLDER}",
    "js": f"node {PATH_PLACEHOLDER}",
}
"""Built-in interpreter templates keyed by lowercase file extension."""


# ---------------------------------------------------------------------------
# Registered command
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class CommandDefinition:
    """A script registered under an alias."""

    path: str
    """Absolute path or ``$HOME``-shorthand of the script."""

    description: str = ""
    """Free-form text shown by ``mine ls``."""


# ---------------------------------------------------------------------------
# Whole config file
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ConfigModel:
    """In-memory form of the config file."""

    scalars: dict[str, str] = field(default_factory=dict)
    executors: dict[str, str] = field(default_factory=dict)
    commands: dict[str, CommandDefinition] = field(default_factory=dict)

    @classmethod
    def with_defaults(cls, commands_folder: str) -> ConfigModel:
        """Build the model written the first time a config file is created."""
        return cls(
            scalars={COMMANDS_FOLDER_KEY: commands_folder},
            executors=dict(DEFAULT_EXECUTORS),
        )

    def merge_default_executors(self) -> None:
        """Add any built-in executor the model lacks; never overwrite."""
        for extension, template in DEFAULT_EXECUTORS.items():
            self.executors.setdefault(extension, template)
