"""Tests for the command line interface."""

import json

import pytest

from fundamentals import __version__
from fundamentals.cli import build_parser, main
from fundamentals.config import get_config


class TestTourCommand:
    """The tour command prints walkthrough sections."""

    def test_single_section(self, capsys):
        assert main(["tour", "operators"]) == 0

        out = capsys.readouterr().out
        assert "== operators" in out
        assert "9 % 4 = 1" in out
        assert "== optionals" not in out

    def test_all_sections(self, capsys):
        assert main(["tour"]) == 0

        out = capsys.readouterr().out
        assert "== optionals" in out
        assert "== checks" in out

    def test_unknown_section(self, capsys):
        assert main(["tour", "generics"]) == 2

        err = capsys.readouterr().err
        assert "unknown tour section(s): generics" in err

    def test_build_mode_override(self, capsys):
        assert main(["--build-mode", "unchecked", "tour", "checks"]) == 0

        out = capsys.readouterr().out
        assert "build mode: unchecked" in out
        assert get_config().build_mode.value == "unchecked"


class TestConfigCommand:
    """The config command prints the resolved configuration as JSON."""

    def test_defaults(self, capsys):
        assert main(["config"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["build_mode"] == "debug"
        assert data["source"] is None

    def test_workspace_file(self, tmp_path, capsys):
        (tmp_path / "fundamentals.toml").write_text('[runtime]\nbuild_mode = "release"\n', encoding="utf-8")

        assert main(["--workspace", str(tmp_path), "config"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["build_mode"] == "release"
        assert data["source"].endswith("fundamentals.toml")

    def test_invalid_configuration(self, tmp_path, capsys):
        (tmp_path / "fundamentals.toml").write_text('[runtime]\nbuild_mode = "fast"\n', encoding="utf-8")

        assert main(["--workspace", str(tmp_path), "config"]) == 1

        err = capsys.readouterr().err
        assert "Unknown build mode 'fast'" in err
        assert "FND002" in err

    def test_malformed_configuration_file(self, tmp_path, capsys):
        (tmp_path / "fundamentals.toml").write_text('[runtime\nbuild_mode = "', encoding="utf-8")

        assert main(["--workspace", str(tmp_path), "config"]) == 1

        err = capsys.readouterr().err
        assert "Configuration file is not valid" in err
        assert "FND002" in err

    def test_log_level_option(self, capsys):
        assert main(["--log-level", "error", "config"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["log_level"] == "error"


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: fundamentals" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["--version"])
    assert exc_info.value.code == 0
    assert __version__ in capsys.readouterr().out
