"""Tests for config file location and lifecycle (infra/config_store.py).

Coverage:
* Per-platform config home selection.
* ``-config-file`` name → path mapping.
* First use creates the file with defaults; later loads read it.
* Loading merges default executors without rewriting the file.
* Decode and I/O failures surface as typed errors naming the file.
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from unittest.mock import patch

import pytest

from mine.core.models import DEFAULT_EXECUTORS, CommandDefinition
from mine.exceptions import ConfigDecodeError, FilesystemError
from mine.infra.config_store import (
    ConfigStore,
    _platform_config_home,
    resolve_config_path,
    user_config_dir,
)


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

class TestPlatformConfigHome:
    @patch("mine.infra.config_store.platform.system", return_value="Linux")
    def test_linux_prefers_xdg(self, _mock_sys: object, home: Path) -> None:
        assert _platform_config_home() == home / ".config"

    @patch("mine.infra.config_store.platform.system", return_value="Linux")
    def test_linux_falls_back_to_dot_config(
        self, _mock_sys: object, home: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME")
        assert _platform_config_home() == home / ".config"

    @patch("mine.infra.config_store.platform.system", return_value="Linux")
    def test_linux_custom_xdg(
        self, _mock_sys: object, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        assert _platform_config_home() == tmp_path / "xdg"

    @patch("mine.infra.config_store.platform.system", return_value="Darwin")
    def test_darwin(self, _mock_sys: object, home: Path) -> None:
        assert _platform_config_home() == home / "Library" / "Application Support"

    @patch("mine.infra.config_store.platform.system", return_value="Windows")
    def test_windows(
        self, _mock_sys: object, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("APPDATA", str(tmp_path / "Roaming"))
        assert _platform_config_home() == tmp_path / "Roaming"

    @patch("mine.infra.config_store.platform.system", return_value="Windows")
    def test_windows_without_appdata(
        self, _mock_sys: object, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("APPDATA", raising=False)
        with pytest.raises(FilesystemError, match="AppData"):
            _platform_config_home()


class TestResolveConfigPath:
    @pytest.fixture(autouse=True)
    def _linux(self) -> Iterator[None]:
        with patch("mine.infra.config_store.platform.system", return_value="Linux"):
            yield

    def test_user_config_dir_is_created(self, home: Path) -> None:
        directory = user_config_dir()
        assert directory == home / ".config" / "mine"
        assert directory.is_dir()

    def test_default_name(self, home: Path) -> None:
        assert resolve_config_path("") == home / ".config" / "mine" / "config.toml"

    def test_bare_name_gets_suffix(self, home: Path) -> None:
        assert resolve_config_path("work") == home / ".config" / "mine" / "work.toml"

    def test_bare_name_with_extension_kept(self, home: Path) -> None:
        assert resolve_config_path("work.conf") == home / ".config" / "mine" / "work.conf"

    def test_absolute_path_honoured(self, home: Path, tmp_path: Path) -> None:
        assert resolve_config_path(str(tmp_path / "elsewhere.toml")) == tmp_path / "elsewhere.toml"

    def test_absolute_path_without_extension(self, home: Path, tmp_path: Path) -> None:
        assert resolve_config_path(str(tmp_path / "cfg")) == tmp_path / "cfg.toml"

    def test_relative_path_uses_cwd(
        self, home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        assert resolve_config_path("conf/team") == Path.cwd() / "conf" / "team.toml"


# ---------------------------------------------------------------------------
# ConfigStore lifecycle
# ---------------------------------------------------------------------------

class TestConfigStore:
    def test_ensure_creates_file_with_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "config.toml"
        store = ConfigStore(path)

        model = store.ensure()

        assert path.is_file()
        assert model.scalars == {"commands_folder": str(path.parent / "commands")}
        assert model.executors == DEFAULT_EXECUTORS
        assert model.commands == {}
        assert store.load() == model

    def test_ensure_loads_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('commands_folder = "/srv/c"\n', encoding="utf-8")

        model = ConfigStore(path).ensure()

        assert model.scalars == {"commands_folder": "/srv/c"}

    def test_load_merges_defaults_without_rewriting(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        original = '[executors]\nrb = "ruby {{path}}"\n'
        path.write_text(original, encoding="utf-8")

        model = ConfigStore(path).ensure()

        assert set(model.executors) == {"rb", "sh", "py", "js"}
        assert path.read_text(encoding="utf-8") == original

    def test_save_round_trips(self, tmp_path: Path) -> None:
        store = ConfigStore(tmp_path / "config.toml")
        model = store.ensure()
        model.scalars["editor"] = "vim"
        model.commands["deploy"] = CommandDefinition("$HOME/deploy.sh", "Run deployment")

        store.save(model)

        assert store.load() == model

    def test_decode_error_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('ok = "1"\n[bogus]\n', encoding="utf-8")

        with pytest.raises(ConfigDecodeError) as exc_info:
            ConfigStore(path).ensure()

        assert exc_info.value.path == str(path)
        assert exc_info.value.line_number == 2
        assert str(exc_info.value).startswith(f"{path}:2:")

    def test_non_utf8_config_is_decode_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_bytes(b'editor = "vim"\r\ncommands_folder = "caf\xe9"\n')

        with pytest.raises(ConfigDecodeError, match="invalid UTF-8") as exc_info:
            ConfigStore(path).load()

        assert exc_info.value.line_number == 2
        assert exc_info.value.path == str(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_crlf_line_endings(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_bytes(b'editor = "vim"\r\n\r\n[executors]\r\nrb = "ruby {{path}}"\r\n')

        model = ConfigStore(path).load()

        assert model.scalars == {"editor": "vim"}
        assert model.executors["rb"] == "ruby {{path}}"

    def test_unreadable_config_is_filesystem_error(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.mkdir()

        with pytest.raises(FilesystemError, match="unable to read config"):
            ConfigStore(path).ensure()

    def test_save_failure_is_filesystem_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        store = ConfigStore(blocker / "config.toml")

        with pytest.raises(FilesystemError) as exc_info:
            store.save(store.default_model())
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_from_name(self, tmp_path: Path) -> None:
        store = ConfigStore.from_name(str(tmp_path / "custom.toml"))
        assert store.path == tmp_path / "custom.toml"
