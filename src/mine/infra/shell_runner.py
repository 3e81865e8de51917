"""Shell-backed implementation of :class:`~mine.core.protocols.CommandRunner`.

This module is the **only** place in the codebase that spawns a
process.  The child inherits stdin, stdout and stderr, so interactive
scripts work unchanged; nothing is captured, buffered, retried or
timed out.
"""

from __future__ import annotations

import subprocess

from mine.exceptions import ExecutorFailedError


class ShellRunner:
    """Concrete :class:`CommandRunner` that runs ``<shell> -c <line>``.

    Parameters
    ----------
    shell:
        POSIX shell used to interpret the command line.
    """

    def __init__(self, shell: str = "sh") -> None:
        self._shell: str = shell

    def run(self, command_line: str) -> None:
        """Run *command_line* and block until it exits.

        Raises
        ------
        ExecutorFailedError
            When the shell cannot be started or the command exits
            with a non-zero status.
        """
        try:
            completed = subprocess.run([self._shell, "-c", command_line], check=False)
        except OSError as exc:
            raise ExecutorFailedError(command_line, reason=str(exc)) from exc

        if completed.returncode < 0:
            raise ExecutorFailedError(
                command_line,
                returncode=completed.returncode,
                reason=f"terminated by signal {-completed.returncode}",
            )
        if completed.returncode != 0:
            raise ExecutorFailedError(command_line, returncode=completed.returncode)
