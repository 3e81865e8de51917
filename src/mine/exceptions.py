"""Custom exception hierarchy for mine.

All exceptions that cross layer boundaries must inherit from
:class:`MineError`.  Raw ``OSError`` instances must NEVER propagate
beyond the infrastructure layer — they must be caught and re-raised as
a typed subclass defined here, chained with ``raise ... from exc``.

Each subclass carries the structured context of the failure (alias,
path, key, extension) as attributes so callers can branch on the type
and inspect the fields instead of matching message text.

Hierarchy
---------
MineError
├── ConfigDecodeError
├── ValidationError
│   ├── CommandsFolderNotConfiguredError
│   ├── CommandExistsError
│   ├── InvalidAliasError
│   ├── CommandNotFoundError
│   ├── MissingCommandPathError
│   ├── ConfigKeyNotFoundError
│   ├── InvalidConfigKeyError
│   └── PathResolutionError
├── FilesystemError
│   ├── ScriptNotFoundError
│   └── NotAFileError
├── ExecutorError
│   ├── MissingExtensionError
│   ├── ExecutorNotConfiguredError
│   ├── MissingPlaceholderError
│   └── ExecutorFailedError
└── DependencyMissingError
"""

from __future__ import annotations


class MineError(Exception):
    """Base exception for all mine errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Config decoding -------------------------------------------------------

class ConfigDecodeError(MineError):
    """Raised when the config text is malformed.

    Decoding is all-or-nothing: when this is raised no part of the text
    has been applied to any model.
    """

    def __init__(
        self,
        reason: str,
        *,
        line_number: int | None = None,
        line: str | None = None,
        path: str | None = None,
    ) -> None:
        self.reason: str = reason
        self.line_number: int | None = line_number
        self.line: str | None = line
        self.path: str | None = path
        super().__init__(self._render())

    def _render(self) -> str:
        location = self.path or ""
        if self.line_number is not None:
            if location:
                location = f"{location}:{self.line_number}"
            else:
                location = f"line {self.line_number}"
        return f"{location}: {self.reason}" if location else self.reason

    def with_path(self, path: str) -> ConfigDecodeError:
        """Return a copy of this error that also names the config file."""
        return ConfigDecodeError(
            self.reason,
            line_number=self.line_number,
            line=self.line,
            path=path,
        )


# --- Validation ------------------------------------------------------------

class ValidationError(MineError):
    """Raised when a request conflicts with the current catalog state."""


class CommandsFolderNotConfiguredError(ValidationError):
    """Raised when ``commands_folder`` is missing or empty."""

    def __init__(self) -> None:
        super().__init__(
            "commands_folder is not configured",
            hint="Set it with: mine -config commands_folder <directory>",
        )


class CommandExistsError(ValidationError):
    """Raised when an alias is registered twice."""

    def __init__(self, alias: str) -> None:
        super().__init__(f'command "{alias}" already exists')
        self.alias: str = alias


class InvalidAliasError(ValidationError):
    """Raised when an alias cannot be written as a section name."""

    def __init__(self, alias: str) -> None:
        super().__init__(
            f"invalid command alias {alias!r}",
            hint="Aliases must be non-empty printable text without surrounding spaces.",
        )
        self.alias: str = alias


class CommandNotFoundError(ValidationError):
    """Raised when an alias is not in the catalog."""

    def __init__(self, alias: str) -> None:
        super().__init__(
            f'command "{alias}" not found',
            hint="Run 'mine ls' to see the registered commands.",
        )
        self.alias: str = alias


class MissingCommandPathError(ValidationError):
    """Raised when a registered alias has an empty ``path``."""

    def __init__(self, alias: str) -> None:
        super().__init__(f'command "{alias}" has no path configured')
        self.alias: str = alias


class ConfigKeyNotFoundError(ValidationError):
    """Raised when a scalar setting is requested but not present."""

    def __init__(self, key: str) -> None:
        super().__init__(f'config item "{key}" not found')
        self.key: str = key


class InvalidConfigKeyError(ValidationError):
    """Raised when a setting name cannot be written as a config line."""

    def __init__(self, key: str) -> None:
        super().__init__(
            f"invalid config key {key!r}",
            hint="Keys must be non-empty printable text without '=', surrounding "
            "spaces, or a leading '#' or '['.",
        )
        self.key: str = key


class PathResolutionError(ValidationError):
    """Raised when a user-supplied path cannot be expanded."""

    def __init__(self, message: str, *, path: str) -> None:
        super().__init__(message)
        self.path: str = path


# --- Filesystem ------------------------------------------------------------

class FilesystemError(MineError):
    """Raised when a stat, read, write or mkdir call fails."""

    def __init__(self, message: str, *, path: str, hint: str | None = None) -> None:
        super().__init__(message, hint=hint)
        self.path: str = path


class ScriptNotFoundError(FilesystemError):
    """Raised when a command file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f'command file "{path}" does not exist', path=path)


class NotAFileError(FilesystemError):
    """Raised when a command path points at a directory."""

    def __init__(self, path: str) -> None:
        super().__init__(f'command path "{path}" is a directory, expected file', path=path)


# --- Executors -------------------------------------------------------------

class ExecutorError(MineError):
    """Raised when a registered command cannot be run."""


class MissingExtensionError(ExecutorError):
    """Raised when a command file has no extension to pick an executor by."""

    def __init__(self, path: str) -> None:
        super().__init__(f'command file "{path}" has no extension')
        self.path: str = path


class ExecutorNotConfiguredError(ExecutorError):
    """Raised when no executor template exists for an extension."""

    def __init__(self, extension: str) -> None:
        super().__init__(
            f'no executor configured for extension "{extension}"',
            hint=f"Add an entry for {extension} under [executors] in the config file.",
        )
        self.extension: str = extension


class MissingPlaceholderError(ExecutorError):
    """Raised when an executor template lacks the ``{{path}}`` token."""

    def __init__(self, extension: str) -> None:
        super().__init__(
            f'executor command for extension "{extension}" must include {{{{path}}}}'
        )
        self.extension: str = extension


class ExecutorFailedError(ExecutorError):
    """Raised when the executor process fails to start or exits non-zero."""

    def __init__(
        self,
        command_line: str,
        *,
        returncode: int | None = None,
        reason: str | None = None,
    ) -> None:
        detail = reason if reason is not None else f"exit status {returncode}"
        super().__init__(f"executor command failed: {detail}")
        self.command_line: str = command_line
        self.returncode: int | None = returncode


# --- Environment / tooling -------------------------------------------------

class DependencyMissingError(MineError):
    """Raised when an optional runtime dependency is not installed."""
