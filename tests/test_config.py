"""Tests for layered configuration loading."""

from __future__ import annotations

import textwrap

import pytest

from gitaudit.core.config import AuditConfig, find_config_file, load_config
from gitaudit.errors import ConfigError


class TestDefaults:
    def test_defaults(self):
        config = load_config(env={})
        assert config == AuditConfig()
        assert config.max_file_bytes == 1024 * 1024
        assert config.batch_size == 5
        assert config.github_token is None

    @pytest.mark.parametrize(
        "field, value",
        [
            ("max_file_bytes", 0),
            ("batch_size", -1),
            ("request_timeout", 0),
            ("rule_budget_seconds", -0.5),
        ],
    )
    def test_invalid_values_rejected(self, field, value):
        with pytest.raises(ConfigError, match=field):
            AuditConfig(**{field: value})


class TestLayers:
    def test_yaml_file_in_root(self, tmp_path):
        (tmp_path / ".gitaudit.yml").write_text(
            textwrap.dedent("""\
                batch_size: 3
                rule_budget_seconds: 0
            """),
            encoding="utf-8",
        )
        config = load_config(root=tmp_path, env={})
        assert config.batch_size == 3
        assert config.rule_budget_seconds == 0.0

    def test_explicit_path_wins_over_root(self, tmp_path):
        (tmp_path / ".gitaudit.yml").write_text("batch_size: 3\n", encoding="utf-8")
        explicit = tmp_path / "other.yml"
        explicit.write_text("batch_size: 8\n", encoding="utf-8")
        assert load_config(root=tmp_path, config_path=explicit, env={}).batch_size == 8

    def test_env_over_file(self, tmp_path):
        (tmp_path / ".gitaudit.yml").write_text("batch_size: 3\n", encoding="utf-8")
        config = load_config(root=tmp_path, env={"GITAUDIT_BATCH_SIZE": "7"})
        assert config.batch_size == 7

    def test_overrides_over_env_and_none_ignored(self):
        config = load_config(
            env={"GITAUDIT_MAX_FILE_BYTES": "2048", "GITAUDIT_BATCH_SIZE": "2"},
            overrides={"max_file_bytes": 4096, "batch_size": None},
        )
        assert config.max_file_bytes == 4096
        assert config.batch_size == 2

    def test_github_token_fallback(self):
        assert load_config(env={"GITHUB_TOKEN": "abc"}).github_token == "abc"
        config = load_config(env={"GITHUB_TOKEN": "abc", "GITAUDIT_GITHUB_TOKEN": "xyz"})
        assert config.github_token == "xyz"

    def test_empty_file_is_defaults(self, tmp_path):
        (tmp_path / ".gitaudit.yaml").write_text("", encoding="utf-8")
        assert find_config_file(tmp_path) == tmp_path / ".gitaudit.yaml"
        assert load_config(root=tmp_path, env={}) == AuditConfig()


class TestErrors:
    def test_unknown_key(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("colour: blue\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="unknown key"):
            load_config(config_path=path, env={})

    def test_not_a_number(self):
        with pytest.raises(ConfigError, match="batch_size"):
            load_config(env={"GITAUDIT_BATCH_SIZE": "many"})

    def test_boolean_is_not_a_number(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("batch_size: true\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(config_path=path, env={})

    def test_null_value(self, tmp_path):
        (tmp_path / ".gitaudit.yml").write_text("batch_size:\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="batch_size must not be null"):
            load_config(root=tmp_path, env={})

    def test_null_token_is_allowed(self, tmp_path):
        (tmp_path / ".gitaudit.yml").write_text("github_token:\n", encoding="utf-8")
        assert load_config(root=tmp_path, env={}).github_token is None

    def test_top_level_list(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(config_path=path, env={})

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "c.yml"
        path.write_text("batch_size: [1\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(config_path=path, env={})

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="cannot read"):
            load_config(config_path=tmp_path / "absent.yml", env={})
