"""Pytest configuration and shared fixtures."""

import pytest
import os
import logging
from unittest.mock import Mock

from checkmk_actions.api_client import CheckmkClient
from checkmk_actions.config import CheckmkCredentials

# Disable logging during tests to reduce noise
logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def clean_env():
    """Clean environment variables before each test."""
    env_vars_to_clean = [
        "CHECKMK_HOST",
        "CHECKMK_SITE",
        "CHECKMK_USERNAME",
        "CHECKMK_PASSWORD",
        "CHECKMK_REQUEST_TIMEOUT",
        "CHECKMK_VERIFY_SSL",
        "LOG_LEVEL",
        "CONTINUE_ON_FAIL",
        "DEFAULT_LIMIT",
    ]

    # Store original values
    original_values = {}
    for var in env_vars_to_clean:
        original_values[var] = os.environ.get(var)
        if var in os.environ:
            del os.environ[var]

    yield

    # Restore original values
    for var, value in original_values.items():
        if value is not None:
            os.environ[var] = value
        elif var in os.environ:
            del os.environ[var]


@pytest.fixture
def make_response():
    """Factory for mock ``requests.Response`` objects.

    Without ``json_data`` the body is not JSON and ``text`` is used instead.
    """

    def _create_response(status_code=200, json_data=None, headers=None, text=""):
        response = Mock()
        response.status_code = status_code
        response.headers = headers or {}
        response.text = text
        if json_data is None:
            response.json.side_effect = ValueError("No JSON object could be decoded")
        else:
            response.json.return_value = json_data
        return response

    return _create_response


@pytest.fixture
def credentials():
    """Create test credentials."""
    return CheckmkCredentials(
        host="https://test-checkmk.com",
        site="test_site",
        username="test_user",
        password="test_pass",
        request_timeout=30,
    )


@pytest.fixture
def client(credentials):
    """Create CheckmkClient instance."""
    return CheckmkClient(credentials)


@pytest.fixture
def sample_host_data():
    """Sample host data for testing."""
    return {
        "id": "test-host",
        "title": "Test Host",
        "domainType": "host_config",
        "links": [],
        "members": {},
        "extensions": {
            "folder": "/test",
            "attributes": {
                "ipaddress": "192.168.1.100",
                "alias": "Test Host for Unit Tests",
            },
            "effective_attributes": {
                "ipaddress": "192.168.1.100",
                "alias": "Test Host for Unit Tests",
                "inherited_attr": "inherited_value",
            },
            "is_cluster": False,
            "is_offline": False,
        },
    }


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
