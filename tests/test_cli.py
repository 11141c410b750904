"""Tests for CLI commands."""

import argparse
import json
import logging
from pathlib import Path

import pytest
import yaml

from pkg_provider import cli
from pkg_provider import logging as pkg_logging
from pkg_provider.cli import (
    _load_config,
    cmd_install,
    cmd_list,
    cmd_query,
    cmd_uninstall,
    cmd_version,
    _config_init,
)


class MockArgs(argparse.Namespace):
    """Mock argparse namespace for testing."""

    def __init__(self, **kwargs):
        super().__init__(
            config=kwargs.get("config"),
            json=kwargs.get("json", False),
            name=kwargs.get("name"),
            source=kwargs.get("source"),
        )


@pytest.fixture
def use_provider(monkeypatch: pytest.MonkeyPatch, provider):
    """Route CLI commands to the fake-backed provider."""
    monkeypatch.setattr(cli, "_create_provider", lambda args: provider)
    return provider


class TestLoadConfig:
    """Tests for _load_config."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        """Should load the given file."""
        config_file = tmp_path / "pkgprov.yaml"
        config_file.write_text("pkg_add: /usr/sbin/pkg_add\n")

        config, loaded_from = _load_config(str(config_file))

        assert config.pkg_add == "/usr/sbin/pkg_add"
        assert loaded_from == config_file

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        """Should fall back to defaults when no file is found."""
        monkeypatch.setattr(cli, "CONFIG_SEARCH_PATHS", [("Nowhere", tmp_path / "missing.yaml")])

        config, loaded_from = _load_config(None)

        assert loaded_from is None
        assert config.pkg_add == "pkg_add"

    def test_malformed_yaml(self, tmp_path: Path, capsys) -> None:
        """Should warn and use defaults when the file is not valid YAML."""
        config_file = tmp_path / "pkgprov.yaml"
        config_file.write_text("pkg_add: [unclosed\n")

        config, loaded_from = _load_config(str(config_file))

        assert loaded_from is None
        assert config.pkg_add == "pkg_add"
        assert "Failed to load" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "content",
        [
            "pkg_add_flags: {interactive: false}\n",
            "command_timeout_seconds: soon\n",
            "- pkg_add\n- pkg_info\n",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, capsys, content: str) -> None:
        """Should warn and use defaults when a value has the wrong type."""
        config_file = tmp_path / "pkgprov.yaml"
        config_file.write_text(content)

        config, loaded_from = _load_config(str(config_file))

        assert loaded_from is None
        assert config.pkg_add_flags == []
        assert "Failed to load" in capsys.readouterr().out

    def test_skips_broken_search_path(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys) -> None:
        """Should move on to the next search path after a broken file."""
        broken = tmp_path / "broken.yaml"
        broken.write_text(":\n  - : [\n")
        good = tmp_path / "good.yaml"
        good.write_text("pkg_add_flags: -I\n")
        monkeypatch.setattr(cli, "CONFIG_SEARCH_PATHS", [("Broken", broken), ("Good", good)])

        config, loaded_from = _load_config(None)

        assert loaded_from == good
        assert config.pkg_add_flags == ["-I"]
        assert "Failed to load" in capsys.readouterr().out


class TestCmdList:
    """Tests for the list command."""

    def test_table(self, use_provider, tools, pkginfo_list, capsys) -> None:
        """Should list installed packages."""
        tools.listing_output = pkginfo_list

        cmd_list(MockArgs())

        captured = capsys.readouterr()
        assert "bash" in captured.out
        assert "no_x11" in captured.out
        assert "Total: 10 packages" in captured.out

    def test_json(self, use_provider, tools, capsys) -> None:
        """Should output JSON with --json flag."""
        tools.listing_output = "bash-3.1.17  GNU Bourne Again Shell\n"

        cmd_list(MockArgs(json=True))

        data = json.loads(capsys.readouterr().out)
        assert data == [{"name": "bash", "ensure": "3.1.17", "flavor": None, "full_name": "bash-3.1.17"}]

    def test_execution_failure(self, use_provider, tools) -> None:
        """Should exit non-zero when pkg_info cannot run."""
        from pkg_provider.errors import ExecutionFailure

        tools.listing_output = ExecutionFailure("wawawa")

        with pytest.raises(SystemExit) as exc_info:
            cmd_list(MockArgs())

        assert exc_info.value.code == 1


class TestCmdVersion:
    """Tests for the version command."""

    def test_installed(self, use_provider, tools, capsys) -> None:
        """Should print the installed version."""
        tools.query_output["bash"] = "bash-3.1.17  GNU Bourne Again Shell\n"

        cmd_version(MockArgs(name="bash"))

        assert capsys.readouterr().out.strip() == "3.1.17"

    def test_not_installed(self, use_provider, capsys) -> None:
        """Should exit non-zero for a missing package."""
        with pytest.raises(SystemExit):
            cmd_version(MockArgs(name="zsh"))

        assert "zsh is not installed" in capsys.readouterr().out


class TestCmdQuery:
    """Tests for the query command."""

    def test_installed(self, use_provider, tools, pkginfo_detail, capsys) -> None:
        """Should print the ensure state."""
        tools.detail_output["bash"] = pkginfo_detail

        cmd_query(MockArgs(name="bash"))

        assert yaml.safe_load(capsys.readouterr().out) == {"ensure": "3.1.17"}


class TestCmdInstall:
    """Tests for the install and uninstall commands."""

    def test_install_with_source(self, use_provider, tools, capsys) -> None:
        """Should install from the given source."""
        cmd_install(MockArgs(name="bash", source="/whatever/"))

        assert tools.installs == [("bash", "/whatever/")]
        assert "Installed bash" in capsys.readouterr().out

    def test_install_without_source(self, use_provider, capsys) -> None:
        """Should report resolution errors and exit non-zero."""
        with pytest.raises(SystemExit) as exc_info:
            cmd_install(MockArgs(name="bash"))

        assert exc_info.value.code == 1
        assert "must specify a package source" in capsys.readouterr().out

    def test_uninstall(self, use_provider, tools, capsys) -> None:
        """Should remove the package."""
        cmd_uninstall(MockArgs(name="bash"))

        assert tools.deletes == ["bash"]
        assert "Removed bash" in capsys.readouterr().out


class TestConfigInit:
    """Tests for config init."""

    def test_creates_file(self, tmp_path: Path) -> None:
        """Should write the default config."""
        output = tmp_path / "pkgprov.yaml"

        _config_init(str(output))

        data = yaml.safe_load(output.read_text())
        assert data["repository_env_var"] == "PKG_PATH"

    def test_refuses_overwrite(self, tmp_path: Path) -> None:
        """Should not overwrite an existing file."""
        output = tmp_path / "pkgprov.yaml"
        output.write_text("keep: me\n")

        with pytest.raises(SystemExit):
            _config_init(str(output))

        assert output.read_text() == "keep: me\n"


class TestMain:
    """Tests for global options handled by main."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        yield
        pkg_logging.enable()
        logging.getLogger("pkg_provider").handlers.clear()
        logging.getLogger("pkg_provider").setLevel(logging.NOTSET)

    def test_quiet_silences_package_loggers(self, capsys) -> None:
        """Should drop records from every package logger with -q."""
        cli.main(["-q", "config", "path"])

        pkg_logging.get_logger("provider").error("Could not install bash")

        assert pkg_logging.is_disabled()
        assert capsys.readouterr().err == ""

    def test_default_logs_warnings(self, capsys) -> None:
        """Should log warnings to stderr without -q."""
        cli.main(["config", "path"])

        pkg_logging.get_logger("parsers").warning("Failed to match line 'junk'")

        assert not pkg_logging.is_disabled()
        assert "Failed to match line" in capsys.readouterr().err
