"""Core / service layer — config model, codec, catalog and dispatch.

Rules
-----
* No ``print()`` calls.
* No direct filesystem, environment or subprocess access — the
  ``ScriptFilesystem``, ``ConfigWriter`` and ``CommandRunner``
  protocols are injected instead.
* No imports from ``cli`` or ``infra``.
"""

from mine.core.catalog import CommandCatalog
from mine.core.codec import decode, encode
from mine.core.command_service import CommandService
from mine.core.dispatcher import Dispatcher, build_executor_command, shell_quote
from mine.core.models import CommandDefinition, ConfigModel
from mine.core.protocols import CommandRunner, ConfigWriter, ScriptFilesystem

__all__: list[str] = [
    "CommandCatalog",
    "CommandDefinition",
    "CommandRunner",
    "CommandService",
    "ConfigModel",
    "ConfigWriter",
    "Dispatcher",
    "ScriptFilesystem",
    "build_executor_command",
    "decode",
    "encode",
    "shell_quote",
]
