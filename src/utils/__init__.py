"""
Utility modules.

Common helpers for logging and configuration loading.
"""

from src.utils.config_loader import AppConfig, get_api_token, load_config, load_env
from src.utils.logging_setup import setup_logging

__all__ = [
    "load_config",
    "load_env",
    "get_api_token",
    "AppConfig",
    "setup_logging",
]
