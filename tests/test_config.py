"""Tests for configuration loading."""

import json
import logging

import pytest
import yaml
from pydantic import ValidationError

from checkmk_actions.config import (
    AdapterConfig,
    CheckmkCredentials,
    load_config,
    load_config_file,
    load_credentials,
    merge_config,
)
from checkmk_actions.logging_utils import setup_logging


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run without picking up config files from the real cwd or home."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


@pytest.fixture
def yaml_config(isolated):
    path = isolated / "settings.yaml"
    path.write_text(yaml.safe_dump({
        "checkmk": {
            "host": "monitoring.example.com",
            "site": "prod",
            "username": "automation",
            "password": "secret",
        },
        "default_limit": 25,
    }))
    return path


class TestCheckmkCredentials:

    def test_scheme_is_added(self):
        creds = CheckmkCredentials(host="cmk.example.com/", site="s", username="u", password="p")

        assert creds.host == "https://cmk.example.com"
        assert creds.api_base_url == "https://cmk.example.com/s/check_mk/api/1.0"

    def test_password_hidden_from_repr(self):
        creds = CheckmkCredentials(host="https://cmk", site="s", username="u", password="hunter2")

        assert "hunter2" not in repr(creds)

    @pytest.mark.parametrize("field", ["host", "site", "username", "password"])
    def test_required_fields(self, field):
        values = {"host": "https://cmk", "site": "s", "username": "u", "password": "p"}
        values[field] = "  "

        with pytest.raises(ValidationError):
            CheckmkCredentials(**values)

    @pytest.mark.parametrize("timeout", [0, 301])
    def test_timeout_bounds(self, timeout):
        with pytest.raises(ValidationError):
            CheckmkCredentials(host="https://cmk", site="s", username="u", password="p", request_timeout=timeout)

    def test_credentials_are_frozen(self):
        creds = CheckmkCredentials(host="https://cmk", site="s", username="u", password="p")

        with pytest.raises(ValidationError):
            creds.site = "other"


class TestLoadConfig:

    def test_from_yaml_file(self, yaml_config):
        config = load_config(yaml_config)

        assert isinstance(config, AdapterConfig)
        assert config.credentials.host == "https://monitoring.example.com"
        assert config.credentials.site == "prod"
        assert config.default_limit == 25
        assert config.continue_on_fail is False

    def test_environment_overrides_file(self, yaml_config, monkeypatch):
        monkeypatch.setenv("CHECKMK_SITE", "staging")
        monkeypatch.setenv("CHECKMK_VERIFY_SSL", "false")
        monkeypatch.setenv("CONTINUE_ON_FAIL", "yes")
        monkeypatch.setenv("DEFAULT_LIMIT", "10")

        config = load_config(yaml_config)

        assert config.credentials.site == "staging"
        assert config.credentials.username == "automation"
        assert config.credentials.verify_ssl is False
        assert config.continue_on_fail is True
        assert config.default_limit == 10

    def test_environment_only(self, isolated, monkeypatch):
        monkeypatch.setenv("CHECKMK_HOST", "https://cmk.local")
        monkeypatch.setenv("CHECKMK_SITE", "main")
        monkeypatch.setenv("CHECKMK_USERNAME", "automation")
        monkeypatch.setenv("CHECKMK_PASSWORD", "secret")
        monkeypatch.setenv("CHECKMK_REQUEST_TIMEOUT", "60")

        creds = load_credentials()

        assert creds.host == "https://cmk.local"
        assert creds.request_timeout == 60

    def test_auto_discovered_json(self, isolated, monkeypatch):
        (isolated / ".checkmk-actions.json").write_text(json.dumps({
            "checkmk": {"host": "https://cmk", "site": "s", "username": "u", "password": "p"},
            "log_level": "DEBUG",
        }))

        config = load_config()

        assert config.log_level == "DEBUG"
        assert config.credentials.site == "s"

    def test_missing_explicit_file(self, isolated):
        with pytest.raises(FileNotFoundError):
            load_config(isolated / "nope.yaml")

    def test_missing_credentials(self, isolated):
        with pytest.raises(ValidationError):
            load_config()

    def test_unsupported_format(self, isolated):
        path = isolated / "config.toml"
        path.write_text("[checkmk]\n")

        with pytest.raises(ValueError):
            load_config_file(path)


def test_merge_config_is_deep():
    merged = merge_config({"checkmk": {"host": "a", "site": "s"}}, {"checkmk": {"host": "b"}})

    assert merged == {"checkmk": {"host": "b", "site": "s"}}


class TestSetupLogging:

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            setup_logging("LOUD")

    def test_quiets_urllib3(self):
        setup_logging("INFO")

        assert logging.getLogger("urllib3").level == logging.WARNING
