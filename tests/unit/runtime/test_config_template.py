"""Unit tests for config_template module."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from src.catalog.runtime.config.config_data import ConfigData
from src.catalog.runtime.config.config_template import (
    apply_environment_overrides,
    load_config,
    load_templated_yaml,
    substitute_env_vars,
)

CONFIG_YAML = """
config:
  app:
    environment: ${APP_ENVIRONMENT:-development}
    port: ${APP_PORT:-8000}
  database:
    url: ${DATABASE_URL:-sqlite:///./catalog.db}
    seed_sample_data: ${SEED_SAMPLE_DATA:-true}
  uploads:
    directory: ${UPLOAD_DIR:-uploads}
  logging:
    file: ${LOG_FILE:-logs/app.log}
"""


def _write(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(content)
    return path


class TestSubstituteEnvVars:
    """Test cases for substitute_env_vars function."""

    def test_substitute_env_var_in_text(self):
        with patch.dict(os.environ, {"HOST": "localhost", "PORT": "8080"}):
            result = substitute_env_vars("Server running at http://${HOST}:${PORT}/api")
            assert result == "Server running at http://localhost:8080/api"

    def test_substitute_env_var_with_default(self):
        with patch.dict(os.environ, {}, clear=True):
            assert substitute_env_vars("${MISSING_VAR:-default_value}") == "default_value"

    def test_substitute_env_var_with_default_when_set(self):
        with patch.dict(os.environ, {"PRESENT_VAR": "actual_value"}):
            assert substitute_env_vars("${PRESENT_VAR:-default_value}") == "actual_value"

    def test_substitute_required_env_var_missing(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError, match="Required environment variable MISSING_VAR not set"
            ):
                substitute_env_vars("${MISSING_VAR}")

    def test_substitute_env_var_with_custom_error(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(
                ValueError,
                match="Required environment variable DATABASE_URL: needed for storage",
            ):
                substitute_env_vars("${DATABASE_URL:?needed for storage}")

    def test_text_without_placeholders_is_unchanged(self):
        assert substitute_env_vars("plain: value") == "plain: value"


class TestEnvironmentOverrides:
    def test_prefixed_variables_are_promoted(self):
        with patch.dict(
            os.environ, {"PRODUCTION_DATABASE_URL": "postgresql://db/catalog"}, clear=True
        ):
            apply_environment_overrides("production")

            assert os.environ["DATABASE_URL"] == "postgresql://db/catalog"

    def test_other_environments_are_ignored(self):
        with patch.dict(os.environ, {"PRODUCTION_DATABASE_URL": "postgresql://db"}, clear=True):
            apply_environment_overrides("development")

            assert "DATABASE_URL" not in os.environ


class TestLoadTemplatedYaml:
    def test_defaults_are_applied(self, tmp_path):
        path = _write(tmp_path, CONFIG_YAML)

        with patch.dict(os.environ, {}, clear=True):
            config = load_templated_yaml(path)

        assert isinstance(config, ConfigData)
        assert config.app.environment == "development"
        assert config.app.port == 8000
        assert config.database.url == "sqlite:///./catalog.db"
        assert config.database.seed_sample_data is True
        assert config.uploads.directory == "uploads"
        assert config.logging.file == "logs/app.log"

    def test_environment_values_win(self, tmp_path):
        path = _write(tmp_path, CONFIG_YAML)
        env = {
            "APP_ENVIRONMENT": "test",
            "APP_PORT": "9001",
            "DATABASE_URL": "sqlite://",
            "SEED_SAMPLE_DATA": "false",
            "UPLOAD_DIR": "/var/catalog/uploads",
        }

        with patch.dict(os.environ, env, clear=True):
            config = load_templated_yaml(path)

        assert config.app.environment == "test"
        assert config.app.port == 9001
        assert config.database.is_in_memory
        assert config.database.seed_sample_data is False
        assert config.uploads.directory == "/var/catalog/uploads"

    def test_empty_log_file_disables_file_logging(self, tmp_path):
        path = _write(tmp_path, CONFIG_YAML)

        with patch.dict(os.environ, {"LOG_FILE": ""}, clear=True):
            config = load_templated_yaml(path)

        assert config.logging.file is None

    def test_invalid_yaml_raises_value_error(self, tmp_path):
        path = _write(tmp_path, "config: [unclosed")

        with pytest.raises(ValueError, match="Error parsing YAML"):
            load_templated_yaml(path)

    def test_invalid_values_raise_value_error(self, tmp_path):
        path = _write(tmp_path, "config:\n  app:\n    port: not-a-number\n")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_templated_yaml(path)


class TestLoadConfig:
    def test_missing_file_falls_back_to_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.yaml")

        assert config == ConfigData()

    def test_existing_file_is_loaded(self, tmp_path):
        path = _write(tmp_path, "config:\n  app:\n    title: Shop\n")

        assert load_config(path).app.title == "Shop"
