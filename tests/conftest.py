"""Shared pytest fixtures and configuration for the mine test suite.

Guidelines
----------
* Tests never touch the real home or config directory — ``HOME`` and
  ``XDG_CONFIG_HOME`` are redirected into ``tmp_path``.
* Core tests inject fakes for the filesystem, writer and runner.
* Only the shell-runner and end-to-end CLI tests spawn ``sh``.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from mine.cli.console import logger


@pytest.fixture(autouse=True)
def _reset_logger() -> Iterator[None]:
    """Silent mode is process-wide; never let one test leak it."""
    logger.set_silent(False)
    yield
    logger.set_silent(False)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fresh home directory exported as ``$HOME``."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home_dir / ".config"))
    return home_dir


@pytest.fixture
def write_script(tmp_path: Path):
    """Factory creating an executable script file and returning its path."""

    def _write(relative: str, content: str = "#!/bin/sh\n", base: Path | None = None) -> Path:
        target = (base or tmp_path) / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        target.chmod(0o755)
        return target

    return _write
