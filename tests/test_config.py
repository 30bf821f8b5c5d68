"""Tests for configuration loading and validation."""

import json

import pytest

from registrar.db import DEFAULTS, load_config
from registrar.exceptions import ConfigError


class TestDefaults:
    """Tests for the built-in defaults."""

    def test_defaults(self, tmp_path):
        config = load_config(tmp_path, environ={})
        assert config.root == tmp_path.resolve()
        assert config.commands_path == tmp_path.resolve() / "plugins"
        assert config.catalog_path == tmp_path.resolve() / "data" / "commands.json"
        assert config.development is False
        assert config.generate_command_json is False
        assert config.catalog_mode == "batch"
        assert config.catalog_debounce_ms == DEFAULTS["CATALOG_DEBOUNCE_MS"]
        assert config.ready_debounce_ms == DEFAULTS["READY_DEBOUNCE_MS"]
        assert config.log_level is None
        assert config.log_file_path is None

    def test_catalog_needs_development_and_flag(self, make_config):
        assert not make_config(GENERATE_COMMAND_JSON=True).catalog_enabled
        assert not make_config(DEVELOPMENT=True).catalog_enabled
        assert make_config(DEVELOPMENT=True, GENERATE_COMMAND_JSON=True).catalog_enabled

    def test_default_prefix_by_environment(self, make_config):
        assert make_config().default_prefix == "b!"
        assert make_config(DEVELOPMENT=True).default_prefix == "b?"

    def test_config_is_frozen(self, make_config):
        config = make_config()
        with pytest.raises(AttributeError):
            config.development = True


class TestSources:
    """Tests for file and environment sources and their precedence."""

    def test_env_file(self, tmp_path):
        (tmp_path / ".env").write_text(
            "# comment\nDEVELOPMENT=yes\nDEFAULT_PREFIX_DEV='>>'\n", encoding="utf-8")
        config = load_config(tmp_path, environ={})
        assert config.development is True
        assert config.default_prefix_dev == ">>"

    def test_ini_file(self, tmp_path):
        (tmp_path / "config.ini").write_text(
            "[catalog]\ncatalog_mode = debounced\n", encoding="utf-8")
        assert load_config(tmp_path, environ={}).catalog_mode == "debounced"

    def test_nested_json_is_flattened(self, tmp_path):
        (tmp_path / "config.json").write_text(
            json.dumps({"default_prefix": {"prod": "!"}}), encoding="utf-8")
        assert load_config(tmp_path, environ={}).default_prefix_prod == "!"

    def test_toml_file(self, tmp_path):
        (tmp_path / "config.toml").write_text(
            'commands_path = "cmds"\nready_debounce_ms = 50\n', encoding="utf-8")
        config = load_config(tmp_path, environ={})
        assert config.commands_path == tmp_path.resolve() / "cmds"
        assert config.ready_debounce_ms == 50

    def test_later_files_win(self, tmp_path):
        (tmp_path / ".env").write_text("DEFAULT_PREFIX_PROD=env\n", encoding="utf-8")
        (tmp_path / "config.toml").write_text('default_prefix_prod = "toml"\n', encoding="utf-8")
        assert load_config(tmp_path, environ={}).default_prefix_prod == "toml"

    def test_environment_wins_over_files(self, tmp_path):
        (tmp_path / "config.toml").write_text('default_prefix_prod = "toml"\n', encoding="utf-8")
        config = load_config(tmp_path, environ={"REGISTRAR_DEFAULT_PREFIX_PROD": "env"})
        assert config.default_prefix_prod == "env"

    def test_unprefixed_environment_ignored(self, tmp_path):
        config = load_config(tmp_path, environ={"DEVELOPMENT": "true"})
        assert config.development is False

    def test_overrides_win(self, tmp_path):
        config = load_config(
            tmp_path,
            overrides={"development": False},
            environ={"REGISTRAR_DEVELOPMENT": "true"},
        )
        assert config.development is False

    def test_unknown_keys_kept_as_extra(self, tmp_path):
        config = load_config(tmp_path, environ={"REGISTRAR_SHARD_COUNT": "2"})
        assert config.extra == {"SHARD_COUNT": "2"}

    def test_absolute_paths_kept(self, tmp_path):
        target = tmp_path / "elsewhere"
        config = load_config(tmp_path, overrides={"DATA_PATH": str(target)}, environ={})
        assert config.catalog_path == target / "commands.json"


class TestValidation:
    """Tests for rejected values."""

    @pytest.mark.parametrize("key, value", [
        ("DEVELOPMENT", "maybe"),
        ("CATALOG_MODE", "sometimes"),
        ("CATALOG_DEBOUNCE_MS", "-1"),
        ("READY_DEBOUNCE_MS", "soon"),
        ("DEFAULT_PREFIX_DEV", ""),
        ("LOG_LEVEL", "LOUD"),
        ("COMMANDS_PATH", ""),
    ])
    def test_invalid_values(self, make_config, key, value):
        with pytest.raises(ConfigError):
            make_config(**{key: value})

    def test_config_error_is_value_error(self, make_config):
        with pytest.raises(ValueError):
            make_config(CATALOG_MODE="sometimes")

    def test_malformed_json(self, tmp_path):
        (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(tmp_path, environ={})

    def test_malformed_toml(self, tmp_path):
        (tmp_path / "config.toml").write_text("= nope", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(tmp_path, environ={})

    def test_log_level_normalized(self, make_config):
        assert make_config(LOG_LEVEL="debug").log_level == "DEBUG"

    def test_catalog_mode_normalized(self, make_config):
        assert make_config(CATALOG_MODE="Debounced").catalog_mode == "debounced"
