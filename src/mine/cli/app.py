"""CLI application entry point and command routing for mine.

This module is the **sole error boundary** for the entire application.
It catches :class:`~mine.exceptions.MineError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via
the logging facade and returning well-defined exit codes.

Usage
-----
::

    mine [-v] [-silent] [-config-file NAME] add FILE ALIAS DESCRIPTION...
    mine ls
    mine exec ALIAS
    mine -config [KEY [VALUE]]

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  services with infrastructure adapters injected.
* Each invocation is one load → (mutate → save) cycle on the config
  model; the model is passed explicitly, never stored globally.
* This module is the only place that translates between the domain
  world and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass

from mine.cli import exit_codes
from mine.cli.console import logger
from mine.core.models import ConfigModel
from mine.exceptions import MineError
from mine.infra.config_store import ConfigStore
from mine.version import __version__

_CONFIG_FLAGS: frozenset[str] = frozenset({"-config", "--config"})


# ---------------------------------------------------------------------------
# -config handling
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ConfigRequest:
    """A parsed ``-config [key [value]]`` invocation."""

    key: str | None = None
    value: str | None = None


def _extract_config_request(
    parser: argparse.ArgumentParser,
    argv: list[str],
) -> tuple[list[str], ConfigRequest | None]:
    """Split ``-config`` and everything after it off *argv*.

    ``-config`` takes zero, one or two positional values, so it cannot
    be expressed as a regular argparse option.
    """
    for index, token in enumerate(argv):
        if token not in _CONFIG_FLAGS:
            continue
        values = argv[index + 1:]
        if len(values) > 2:
            parser.error("-config takes at most two arguments")
        return argv[:index], ConfigRequest(*values)
    return argv, None


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser."""
    parser = argparse.ArgumentParser(
        prog="mine",
        description="Run your own scripts by short alias.",
        epilog=(
            "-config [KEY [VALUE]]  print the whole config, print one "
            "setting, or set one setting (cannot be combined with a command)"
        ),
        allow_abbrev=False,
    )
    parser.add_argument(
        "-v",
        "-version",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-config-file",
        "--config-file",
        dest="config_file",
        default="",
        metavar="NAME",
        help="config file name or path (default: config.toml)",
    )
    parser.add_argument(
        "-silent",
        "--silent",
        action="store_true",
        help="suppress everything except command output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    add_parser = subparsers.add_parser("add", help="register a script under an alias")
    add_parser.add_argument("file", help="script name in commands_folder, or a path")
    add_parser.add_argument("alias", help="name to run the script by")
    add_parser.add_argument("description", nargs="+", help="text shown by 'ls'")

    subparsers.add_parser("ls", help="list registered commands")

    exec_parser = subparsers.add_parser("exec", help="run a registered command")
    exec_parser.add_argument("alias", help="name of the command to run")

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_add(args: argparse.Namespace, store: ConfigStore, model: ConfigModel) -> int:
    """Register a script and persist the catalog."""
    from mine.core.command_service import CommandService
    from mine.infra.paths import LocalFilesystem

    service = CommandService(LocalFilesystem(), store)
    service.add_command(model, args.file, args.alias, " ".join(args.description))
    logger.success('command "%s" saved', args.alias)
    return exit_codes.SUCCESS


def _handle_list(args: argparse.Namespace, store: ConfigStore, model: ConfigModel) -> int:
    """Print one ``alias  description`` line per command."""
    from mine.core.command_service import CommandService

    for line in CommandService.list_commands(model):
        logger.default(line)
    return exit_codes.SUCCESS


def _handle_exec(args: argparse.Namespace, store: ConfigStore, model: ConfigModel) -> int:
    """Run a registered command in the foreground."""
    from mine.core.dispatcher import Dispatcher
    from mine.infra.paths import LocalFilesystem
    from mine.infra.shell_runner import ShellRunner

    dispatcher = Dispatcher(LocalFilesystem(), ShellRunner())
    dispatcher.execute(model, args.alias)
    logger.success("Execute %s done!", args.alias)
    return exit_codes.SUCCESS


def _handle_config(request: ConfigRequest, store: ConfigStore, model: ConfigModel) -> int:
    """Print the config, print one setting, or set one setting."""
    from mine.core.codec import encode, is_valid_key
    from mine.exceptions import ConfigKeyNotFoundError, InvalidConfigKeyError

    if request.key is None:
        logger.default(encode(model).rstrip("\n"))
        return exit_codes.SUCCESS

    if request.value is None:
        if request.key not in model.scalars:
            raise ConfigKeyNotFoundError(request.key)
        logger.default(model.scalars[request.key])
        return exit_codes.SUCCESS

    if not is_valid_key(request.key):
        raise InvalidConfigKeyError(request.key)
    model.scalars[request.key] = request.value
    store.save(model)
    logger.success("%s updated", request.key)
    return exit_codes.SUCCESS


_HANDLERS = {
    "add": _handle_add,
    "ls": _handle_list,
    "exec": _handle_exec,
}


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the mine CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.  Argument errors exit through argparse
        with :data:`exit_codes.USAGE_ERROR`.
    """
    parser = _build_parser()
    raw_args = list(sys.argv[1:] if argv is None else argv)
    remaining, config_request = _extract_config_request(parser, raw_args)
    args = parser.parse_args(remaining)

    logger.set_silent(args.silent)

    if config_request is not None and args.command is not None:
        parser.error("cannot combine -config with other commands")

    if config_request is None and args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    store = ConfigStore.from_name(args.config_file)
    model = store.ensure()

    if config_request is not None:
        return _handle_config(config_request, store, model)
    return _HANDLERS[args.command](args, store, model)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except MineError as exc:
        logger.error("%s", exc)
        if exc.hint:
            logger.info("Hint: %s", exc.hint)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        logger.warning("Aborted by user.")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        logger.error(
            "Unexpected error. Please report this issue.\n  %s: %s",
            type(exc).__name__,
            exc,
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
