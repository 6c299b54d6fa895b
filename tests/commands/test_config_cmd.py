"""Tests for the config command handler."""

import argparse
import json

import pytest


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def _args(action, **overrides):
    values = dict(config_action=action, config=None, json=False, quiet=False)
    values.update(overrides)
    return argparse.Namespace(**values)


class TestConfigShow:
    """Tests for `config show`."""

    def test_show_toml(self, capsys):
        import tomlkit

        from resolvediff.commands.config_cmd import run
        from resolvediff.config import DEFAULT_CONFIG

        assert run(_args("show")) == 0

        shown = tomlkit.parse(capsys.readouterr().out).unwrap()
        assert shown == DEFAULT_CONFIG

    def test_show_json(self, tmp_path, capsys):
        from resolvediff.commands.config_cmd import run

        (tmp_path / ".resolvediff.toml").write_text('[diff]\nmodified = ["cargo"]\n')

        assert run(_args("show", json=True)) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["diff"]["modified"] == ["cargo"]
        assert data["output"]["format"] == "text"


class TestConfigPath:
    """Tests for `config path`."""

    def test_path_found(self, tmp_path, capsys):
        from resolvediff.commands.config_cmd import run

        (tmp_path / ".resolvediff.toml").write_text("")

        assert run(_args("path")) == 0
        assert capsys.readouterr().out.strip().endswith(".resolvediff.toml")

    def test_path_not_found(self, capsys):
        from resolvediff.commands.config_cmd import run

        assert run(_args("path")) == 1
        assert "using defaults" in capsys.readouterr().err

    def test_missing_action(self, capsys):
        from resolvediff.commands.config_cmd import run

        assert run(_args(None)) == 1
        assert "Usage" in capsys.readouterr().err
