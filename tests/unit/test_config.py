"""Unit tests for dojo configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from dojo.config import DojoConfig, load_config, resolve_config_path


@pytest.fixture(autouse=True)
def _isolated_home(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("DOJO_CONFIG", raising=False)


def test_missing_file_yields_defaults(tmp_path):
    config = load_config(tmp_path / "absent.yml")

    assert config == DojoConfig()
    assert config.jj_path == "jj"
    assert config.agent_command == ["claude"]
    assert config.default_name_prefix == "agent"


def test_loads_values_and_expands_env(tmp_path, monkeypatch):
    monkeypatch.setenv("AGENT_BIN", "/opt/bin/agent")
    path = tmp_path / "dojo.yml"
    path.write_text("jj_path: /usr/local/bin/jj\nagent_command: ['${AGENT_BIN}', '--yes']\ndefault_name_prefix: bot\n")

    config = load_config(path)

    assert config.jj_path == "/usr/local/bin/jj"
    assert config.agent_command == ["/opt/bin/agent", "--yes"]
    assert config.default_name_prefix == "bot"


def test_unknown_env_var_is_left_in_place(tmp_path):
    path = tmp_path / "dojo.yml"
    path.write_text("jj_path: ${DOJO_TEST_UNSET_VARIABLE}\n")

    assert load_config(path).jj_path == "${DOJO_TEST_UNSET_VARIABLE}"


def test_unknown_keys_are_kept_as_extra(tmp_path):
    path = tmp_path / "dojo.yml"
    path.write_text("colour: blue\n")

    config = load_config(path)

    assert config.model_extra == {"colour": "blue"}


def test_invalid_yaml_falls_back_to_defaults(tmp_path):
    path = tmp_path / "dojo.yml"
    path.write_text("jj_path: [unclosed\n")

    assert load_config(path) == DojoConfig()


def test_non_mapping_falls_back_to_defaults(tmp_path):
    path = tmp_path / "dojo.yml"
    path.write_text("- just\n- a list\n")

    assert load_config(path) == DojoConfig()


def test_invalid_prefix_is_rejected(tmp_path):
    path = tmp_path / "dojo.yml"
    path.write_text("default_name_prefix: 'bad prefix'\n")

    with pytest.raises(ValidationError):
        load_config(path)


def test_empty_agent_command_is_rejected(tmp_path):
    path = tmp_path / "dojo.yml"
    path.write_text("agent_command: []\n")

    with pytest.raises(ValidationError):
        load_config(path)


def test_resolve_config_path_prefers_explicit_then_env(tmp_path, monkeypatch):
    explicit = tmp_path / "explicit.yml"
    assert resolve_config_path(explicit) == explicit

    monkeypatch.setenv("DOJO_CONFIG", str(tmp_path / "env.yml"))
    assert resolve_config_path() == tmp_path / "env.yml"

    monkeypatch.delenv("DOJO_CONFIG")
    assert resolve_config_path() == Path(tmp_path / "home" / ".dojo" / "dojo.yml")


def test_env_var_selects_config_file(tmp_path, monkeypatch):
    path = tmp_path / "custom.yml"
    path.write_text("jj_path: custom-jj\n")
    monkeypatch.setenv("DOJO_CONFIG", str(path))

    assert load_config().jj_path == "custom-jj"
