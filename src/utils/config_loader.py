"""
Configuration loader module.

Loads application configuration from YAML files and environment variables.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class GoCollectConfig:
    """GoCollect API configuration."""

    api_key_env: str = "GOCOLLECT_API_TOKEN"
    base_url: str = "https://gocollect.com"
    timeout: float | None = None  # None = no timeout


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    format: str = DEFAULT_LOG_FORMAT
    json: bool = False
    file: str | None = None


@dataclass
class AppConfig:
    """
    Main application configuration.

    Aggregates all configuration sections into a single object.
    """

    gocollect: GoCollectConfig = field(default_factory=GoCollectConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_env(env_file: Path = Path(".env")) -> None:
    """
    Load environment variables from .env file.

    Args:
        env_file: Path to .env file.
    """
    if env_file.exists():
        load_dotenv(env_file)
        logger.debug(f"Loaded environment from: {env_file}")
    else:
        logger.debug(f"No .env file found at: {env_file}")


def load_config(config_file: Path = Path("config/config.yaml")) -> AppConfig:
    """
    Load application configuration from YAML file.

    Args:
        config_file: Path to configuration YAML file.

    Returns:
        AppConfig: Loaded configuration object, or defaults if the file is missing.

    Raises:
        yaml.YAMLError: If config file is invalid.
    """
    config_file = Path(config_file)
    if not config_file.exists():
        logger.warning(f"Config file not found: {config_file}. Using defaults.")
        return AppConfig()

    with open(config_file, encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    if raw_config is None:
        return AppConfig()

    config = _parse_config(raw_config)
    logger.info(f"Loaded configuration from: {config_file}")
    return config


def _parse_config(raw: dict[str, Any]) -> AppConfig:
    """
    Parse raw YAML dict into AppConfig dataclass.

    Args:
        raw: Raw dictionary from YAML file.

    Returns:
        AppConfig: Parsed configuration object.
    """
    gocollect_raw = raw.get("gocollect") or {}
    timeout = gocollect_raw.get("timeout")
    gocollect = GoCollectConfig(
        api_key_env=gocollect_raw.get("api_key_env", "GOCOLLECT_API_TOKEN"),
        base_url=gocollect_raw.get("base_url", "https://gocollect.com"),
        timeout=float(timeout) if timeout is not None else None,
    )

    logging_raw = raw.get("logging") or {}
    logging_config = LoggingConfig(
        level=logging_raw.get("level", "INFO"),
        format=logging_raw.get("format", DEFAULT_LOG_FORMAT),
        json=bool(logging_raw.get("json", False)),
        file=logging_raw.get("file"),
    )

    return AppConfig(gocollect=gocollect, logging=logging_config)


def get_env_var(key: str, default: str | None = None) -> str | None:
    """
    Get an environment variable with optional default.

    Args:
        key: Environment variable name.
        default: Default value if not set.

    Returns:
        Environment variable value or default.
    """
    return os.environ.get(key, default)


def get_api_token(config: AppConfig | None = None) -> str | None:
    """
    Get the GoCollect API token from the environment.

    Args:
        config: Configuration naming the environment variable to read.

    Returns:
        Token if set and non-blank, None otherwise.
    """
    env_name = config.gocollect.api_key_env if config else GoCollectConfig.api_key_env
    token = get_env_var(env_name)
    if token and token.strip():
        return token
    return None
