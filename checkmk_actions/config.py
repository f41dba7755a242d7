"""Configuration management for the Checkmk actions adapter."""

import os
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Union
from urllib.parse import urlparse

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CheckmkCredentials(BaseModel):
    """Connection credentials for a Checkmk site."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., description="Checkmk server URL")
    site: str = Field(..., description="Checkmk site name")
    username: str = Field(..., description="Automation user name")
    password: str = Field(..., description="Automation user secret", repr=False)
    request_timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")

    @field_validator('host')
    @classmethod
    def validate_host(cls, v: str) -> str:
        """Validate that host is a properly formatted URL."""
        if not v or not v.strip():
            raise ValueError("host cannot be empty")

        v = v.strip()
        # Add https:// if no scheme provided
        if not v.startswith(('http://', 'https://')):
            v = f'https://{v}'

        parsed = urlparse(v)
        if not parsed.netloc:
            raise ValueError(f"Invalid server URL format: {v}")

        return v.rstrip('/')

    @field_validator('site', 'username', 'password')
    @classmethod
    def validate_required_strings(cls, v: str) -> str:
        """Validate required string fields are not empty."""
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator('request_timeout')
    @classmethod
    def validate_request_timeout(cls, v: int) -> int:
        """Validate request_timeout is reasonable."""
        if v <= 0:
            raise ValueError("request_timeout must be positive")
        if v > 300:  # 5 minutes
            raise ValueError("request_timeout should not exceed 300 seconds")
        return v

    @property
    def api_base_url(self) -> str:
        """Root URL of the REST API for this site."""
        return f"{self.host}/{self.site}/check_mk/api/1.0"


class AdapterConfig(BaseModel):
    """Main adapter configuration."""

    credentials: CheckmkCredentials
    log_level: str = Field(default="INFO", description="Logging level")
    continue_on_fail: bool = Field(default=False, description="Record item errors instead of aborting")
    default_limit: int = Field(default=50, ge=1, description="Default limit for getMany operations")


def load_config_file(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load configuration from a file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    logger = logging.getLogger(__name__)

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            if config_path.suffix.lower() in ['.yaml', '.yml']:
                return yaml.safe_load(f) or {}

            elif config_path.suffix.lower() == '.json':
                return json.load(f) or {}

            else:
                raise ValueError(f"Unsupported config file format: {config_path.suffix}")

    except Exception as e:
        logger.error(f"Failed to load config file {config_path}: {e}")
        raise


def find_config_file() -> Optional[Path]:
    """Find configuration file in standard locations."""
    search_paths = [
        Path.cwd() / "config.yaml",
        Path.cwd() / "config.yml",
        Path.cwd() / "config.json",
        Path.cwd() / ".checkmk-actions.yaml",
        Path.cwd() / ".checkmk-actions.yml",
        Path.cwd() / ".checkmk-actions.json",
        Path.home() / ".config" / "checkmk-actions" / "config.yaml",
        Path.home() / ".config" / "checkmk-actions" / "config.yml",
        Path.home() / ".config" / "checkmk-actions" / "config.json",
    ]

    for config_path in search_paths:
        if config_path.exists():
            return config_path

    return None


def merge_config(base_config: Dict[str, Any], override_config: Dict[str, Any]) -> Dict[str, Any]:
    """Merge configuration dictionaries with override taking precedence."""
    merged = base_config.copy()

    for key, value in override_config.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = value

    return merged


def _as_bool(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ('true', '1', 'yes', 'on')
    return bool(value)


def _remove_none_values(d: Any) -> Any:
    if isinstance(d, dict):
        return {k: _remove_none_values(v) for k, v in d.items() if v is not None}
    return d


def load_config(config_file: Optional[Union[str, Path]] = None) -> AdapterConfig:
    """Load configuration from multiple sources with priority order.

    Priority (highest to lowest):
    1. Environment variables (including a .env file)
    2. Specified config file (if provided)
    3. Auto-discovered config file
    """
    logger = logging.getLogger(__name__)

    config_data: Dict[str, Any] = {}

    if config_file:
        config_path = Path(config_file)
        if config_path.exists():
            config_data = load_config_file(config_path)
            logger.info(f"Loaded configuration from: {config_path}")
        else:
            raise FileNotFoundError(f"Specified config file not found: {config_path}")
    else:
        config_path = find_config_file()
        if config_path:
            config_data = load_config_file(config_path)
            logger.info(f"Auto-discovered configuration file: {config_path}")

    load_dotenv()

    env_config = _remove_none_values({
        "checkmk": {
            "host": os.getenv("CHECKMK_HOST"),
            "site": os.getenv("CHECKMK_SITE"),
            "username": os.getenv("CHECKMK_USERNAME"),
            "password": os.getenv("CHECKMK_PASSWORD"),
            "request_timeout": os.getenv("CHECKMK_REQUEST_TIMEOUT"),
            "verify_ssl": os.getenv("CHECKMK_VERIFY_SSL"),
        },
        "log_level": os.getenv("LOG_LEVEL"),
        "continue_on_fail": os.getenv("CONTINUE_ON_FAIL"),
        "default_limit": os.getenv("DEFAULT_LIMIT"),
    })

    final_config = merge_config(config_data, env_config)

    checkmk_data = final_config.get("checkmk", {})
    credentials = CheckmkCredentials(
        host=checkmk_data.get("host", ""),
        site=checkmk_data.get("site", ""),
        username=checkmk_data.get("username", ""),
        password=checkmk_data.get("password", ""),
        request_timeout=int(checkmk_data.get("request_timeout", 30)),
        verify_ssl=_as_bool(checkmk_data.get("verify_ssl"), True),
    )

    return AdapterConfig(
        credentials=credentials,
        log_level=final_config.get("log_level", "INFO"),
        continue_on_fail=_as_bool(final_config.get("continue_on_fail"), False),
        default_limit=int(final_config.get("default_limit", 50)),
    )


def load_credentials(config_file: Optional[Union[str, Path]] = None) -> CheckmkCredentials:
    """Load only the Checkmk credentials."""
    return load_config(config_file).credentials
