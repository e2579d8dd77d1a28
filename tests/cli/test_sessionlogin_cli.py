# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for CLI commands."""

from __future__ import annotations

import asyncio
from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from sessionlogin.cli.main import cli
from sessionlogin.session.adapters.file import FileSessionStore


def _config_dir(tmp_path: Path) -> Path:
    sessions = tmp_path / "sessions"
    (tmp_path / "sessionlogin.yaml").write_text(
        f"sessionlogin:\n  session:\n    file:\n      path: {sessions.as_posix()}\n"
    )
    return tmp_path


def _seed(tmp_path: Path) -> FileSessionStore:
    store = FileSessionStore(path=tmp_path / "sessions")

    async def _fill() -> None:
        await store.save("live1", {"username": "alice"}, ttl=60)
        await store.save("live2", {"username": "bob"}, ttl=60)
        await store.save("stale", {"username": "carol"}, ttl=-1)

    asyncio.run(_fill())
    return store


class TestCLI:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "sessionlogin" in result.output
        for command in ("run", "info", "sessions"):
            assert command in result.output


class TestInfoCommand:
    def test_memory_variant(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["info", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "memory" in result.output
        assert "3000" in result.output

    def test_file_variant(self, tmp_path: Path):
        config_dir = _config_dir(tmp_path)
        result = CliRunner().invoke(cli, ["info", "--config-dir", str(config_dir), "--profile", "file"])
        assert result.exit_code == 0, result.output
        assert "file" in result.output
        assert "Session directory" in result.output

    def test_invalid_configuration_is_usage_error(self, tmp_path: Path):
        (tmp_path / "sessionlogin.yaml").write_text("sessionlogin:\n  session:\n    store: redis\n")
        result = CliRunner().invoke(cli, ["info", "--config-dir", str(tmp_path)])
        assert result.exit_code == 2
        assert "Unknown session store" in result.output

    def test_disabled_purge_is_reported(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("SESSIONLOGIN_SESSION_REAP_INTERVAL", "0")
        result = CliRunner().invoke(cli, ["info", "--config-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert "disabled" in result.output
        assert "Configuration sources:" in result.output


class TestSessionsCommands:
    def test_list(self, tmp_path: Path):
        config_dir = _config_dir(tmp_path)
        _seed(tmp_path)
        result = CliRunner().invoke(cli, ["sessions", "list", "--config-dir", str(config_dir), "-p", "file"])
        assert result.exit_code == 0, result.output
        assert "live1" in result.output
        assert "live2" in result.output
        assert "stale" not in result.output
        assert "2 live session(s)" in result.output

    def test_purge(self, tmp_path: Path):
        config_dir = _config_dir(tmp_path)
        store = _seed(tmp_path)
        result = CliRunner().invoke(cli, ["sessions", "purge", "--config-dir", str(config_dir), "-p", "file"])
        assert result.exit_code == 0, result.output
        assert "Removed 1 expired session(s)" in result.output
        assert not (store.path / "stale.json").exists()

    def test_clear_with_confirmation(self, tmp_path: Path):
        config_dir = _config_dir(tmp_path)
        store = _seed(tmp_path)
        result = CliRunner().invoke(
            cli, ["sessions", "clear", "--config-dir", str(config_dir), "-p", "file"], input="y\n"
        )
        assert result.exit_code == 0, result.output
        assert len(asyncio.run(store.ids())) == 0

    def test_clear_aborted(self, tmp_path: Path):
        config_dir = _config_dir(tmp_path)
        store = _seed(tmp_path)
        result = CliRunner().invoke(
            cli, ["sessions", "clear", "--config-dir", str(config_dir), "-p", "file"], input="n\n"
        )
        assert result.exit_code != 0
        assert len(asyncio.run(store.ids())) == 2

    def test_memory_store_cannot_be_inspected(self, tmp_path: Path):
        result = CliRunner().invoke(cli, ["sessions", "list", "--config-dir", str(tmp_path)])
        assert result.exit_code == 1
        assert "memory store" in result.output


class TestRunCommand:
    @patch("sessionlogin.cli.run.UvicornServerAdapter")
    def test_run_serves_configured_app(self, mock_adapter, tmp_path: Path):
        result = CliRunner().invoke(cli, ["run", "--config-dir", str(tmp_path), "--port", "4000"])
        assert result.exit_code == 0, result.output

        serve = mock_adapter.return_value.serve
        serve.assert_called_once()
        app, server_props = serve.call_args.args
        assert server_props.port == 4000
        assert app.state.properties.session.store == "memory"

    @patch("sessionlogin.cli.run.UvicornServerAdapter")
    def test_run_file_profile(self, mock_adapter, tmp_path: Path):
        config_dir = _config_dir(tmp_path)
        result = CliRunner().invoke(cli, ["run", "--config-dir", str(config_dir), "--profile", "file"])
        assert result.exit_code == 0, result.output

        app, server_props = mock_adapter.return_value.serve.call_args.args
        assert server_props.port == 3000
        assert app.state.properties.session.store == "file"
        assert app.state.properties.session.secrets == ["demo 2"]
