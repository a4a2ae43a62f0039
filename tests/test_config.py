"""Tests for configuration loading and precedence."""

from pathlib import Path

import pytest

from nodeconsole.db import DEFAULT_SECRET_PATTERN, load_config


def test_defaults(tmp_path):
    config = load_config(cwd=tmp_path, environ={})
    assert config.datadir == (Path.home() / ".expanse").resolve()
    assert config.history_path == config.datadir / "history"
    assert config.prompt == "> "
    assert config.log_level is None
    assert config.enable_completion is True
    assert config.confirm_transactions is True
    assert config.secret_pattern == DEFAULT_SECRET_PATTERN
    assert config.manifest_path is None
    assert config.log_batch_history is False
    assert config.poll_interval == 0.1


def test_file_sources_and_precedence(tmp_path):
    (tmp_path / ".env").write_text("LOG_LEVEL=info\nSHOW_BANNER='no'\n", encoding="utf-8")
    (tmp_path / "config.toml").write_text(
        '[log]\nlevel = "error"\n\n[confirm]\ntransactions = false\n',
        encoding="utf-8",
    )
    config = load_config(cwd=tmp_path, environ={})
    assert config.log_level == "ERROR"
    assert config.show_banner is False
    assert config.confirm_transactions is False


def test_environment_overrides_files(tmp_path):
    (tmp_path / "config.json").write_text('{"PROMPT": "json> "}', encoding="utf-8")
    environ = {
        "NODECONSOLE_PROMPT": "env> ",
        "NODECONSOLE_DATADIR": str(tmp_path / "data"),
        "PROMPT": "ignored> ",
    }
    config = load_config(cwd=tmp_path, environ=environ)
    assert config.prompt == "env> "
    assert config.history_path == (tmp_path / "data" / "history").resolve()


def test_explicit_overrides_win(tmp_path):
    config = load_config(
        {"prompt": "$ ", "history_file": str(tmp_path / "h.txt")},
        cwd=tmp_path,
        environ={"NODECONSOLE_PROMPT": "env> "},
    )
    assert config.prompt == "$ "
    assert config.history_path == tmp_path / "h.txt"


def test_ini_keeps_percent_signs(tmp_path):
    (tmp_path / "config.ini").write_text("[history]\nsecret_pattern = pass%word\n", encoding="utf-8")
    config = load_config(cwd=tmp_path, environ={})
    assert config.secret_pattern == "pass%word"


def test_unknown_keys_kept_in_extra(tmp_path):
    config = load_config({"FAVOURITE_COLOUR": "teal"}, cwd=tmp_path, environ={})
    assert config.extra == {"FAVOURITE_COLOUR": "teal"}


@pytest.mark.parametrize("overrides", [
    {"LOG_LEVEL": "loud"},
    {"ENABLE_COMPLETION": "maybe"},
    {"SECRET_PATTERN": "personal\\.["},
    {"POLL_INTERVAL": "0"},
    {"POLL_INTERVAL": "soon"},
])
def test_invalid_values(tmp_path, overrides):
    with pytest.raises(ValueError):
        load_config(overrides, cwd=tmp_path, environ={})
