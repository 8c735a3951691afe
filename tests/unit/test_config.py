"""Tests for config module."""

import os
from unittest.mock import patch

import pytest

from bigmodel_python.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from bigmodel_python.config import ClientSettings
from bigmodel_python.errors import ConfigurationError


class TestFromEnv:
    """Tests for environment settings."""

    def test_reads_variables(self) -> None:
        """Test every variable is read."""
        env = {
            "BIGMODEL_API_KEY": "env-key",
            "BIGMODEL_BASE_URL": "https://env.example.com/api",
            "BIGMODEL_TIMEOUT": "90s",
            "BIGMODEL_PATH": "custom/path",
            "BIGMODEL_PROXY": "http://proxy:3128",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = ClientSettings.from_env()

        assert settings == ClientSettings(
            api_key="env-key",
            base_url="https://env.example.com/api",
            timeout="90s",
            path="custom/path",
            proxy="http://proxy:3128",
        )

    def test_empty(self) -> None:
        """Test nothing set."""
        with patch.dict(os.environ, {}, clear=True):
            assert ClientSettings.from_env() == ClientSettings()


class TestFromYaml:
    """Tests for YAML settings."""

    def test_reads_mapping(self, tmp_path) -> None:
        """Test a YAML file."""
        path = tmp_path / "bigmodel.yaml"
        path.write_text("api_key: file-key\ntimeout: 45\nbase_url: https://file.example.com\n")

        settings = ClientSettings.from_yaml(path)

        assert settings.api_key == "file-key"
        assert settings.timeout == 45
        assert settings.base_url == "https://file.example.com"

    def test_empty_file(self, tmp_path) -> None:
        """Test an empty file."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert ClientSettings.from_yaml(path) == ClientSettings()

    def test_unknown_key(self, tmp_path) -> None:
        """Test unknown keys are rejected."""
        path = tmp_path / "bad.yaml"
        path.write_text("api_key: k\nretries: 3\n")
        with pytest.raises(ConfigurationError, match="retries"):
            ClientSettings.from_yaml(path)

    def test_not_a_mapping(self, tmp_path) -> None:
        """Test a list document."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            ClientSettings.from_yaml(path)

    def test_missing_file(self, tmp_path) -> None:
        """Test an unreadable file."""
        with pytest.raises(ConfigurationError):
            ClientSettings.from_yaml(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path) -> None:
        """Test a syntax error."""
        path = tmp_path / "broken.yaml"
        path.write_text("api_key: [unclosed\n")
        with pytest.raises(ConfigurationError):
            ClientSettings.from_yaml(path)


class TestLoad:
    """Tests for layered loading."""

    def test_env_over_file(self, tmp_path) -> None:
        """Test environment wins over the file."""
        path = tmp_path / "bigmodel.yaml"
        path.write_text("api_key: file-key\ntimeout: 45\npath: file/path\n")

        with patch.dict(os.environ, {"BIGMODEL_API_KEY": "env-key"}, clear=True):
            settings = ClientSettings.load(path)

        assert settings.api_key == "env-key"
        assert settings.timeout == 45
        assert settings.path == "file/path"

    def test_config_env_names_file(self, tmp_path) -> None:
        """Test BIGMODEL_CONFIG is used when no path is given."""
        path = tmp_path / "bigmodel.yaml"
        path.write_text("api_key: file-key\n")

        with patch.dict(os.environ, {"BIGMODEL_CONFIG": str(path)}, clear=True):
            settings = ClientSettings.load()

        assert settings.api_key == "file-key"

    def test_no_file(self) -> None:
        """Test environment only."""
        with patch.dict(os.environ, {"BIGMODEL_API_KEY": "k"}, clear=True):
            assert ClientSettings.load().api_key == "k"


class TestCreateClient:
    """Tests for building clients from settings."""

    def test_defaults(self) -> None:
        """Test unset fields keep client defaults."""
        client = ClientSettings(api_key="k").create_client()
        assert client.base_url == DEFAULT_BASE_URL
        assert client.timeout == DEFAULT_TIMEOUT

    def test_all_fields(self) -> None:
        """Test every field becomes an option."""
        client = ClientSettings(
            api_key="k",
            base_url="https://example.com/api",
            timeout="1m30s",
            path="x",
            proxy="http://proxy:3128",
        ).create_client()

        assert client.base_url == "https://example.com/api/"
        assert client.timeout == 90.0
        assert client.path == "x"
        assert client.config.proxy == "http://proxy:3128"

    @pytest.mark.parametrize(("value", "expected"), [("30", 30.0), (12, 12), ("2m", 120.0)])
    def test_timeout_forms(self, value, expected) -> None:
        """Test numeric and duration timeouts."""
        assert ClientSettings(timeout=value).timeout_seconds() == expected

    def test_bad_timeout(self) -> None:
        """Test an unparseable timeout."""
        with pytest.raises(ConfigurationError):
            ClientSettings(api_key="k", timeout="soon").create_client()

    def test_missing_key(self) -> None:
        """Test no API key."""
        with pytest.raises(ConfigurationError):
            ClientSettings().create_client()
