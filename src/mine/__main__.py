"""Allow ``python -m mine`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m mine`` behaves identically to the ``mine`` console
script.
"""

from __future__ import annotations

from mine.cli.app import cli

if __name__ == "__main__":
    cli()
