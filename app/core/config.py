"""
Configuration loading following kkb_fastapi pattern.

Settings live in TOML files under app/cfg/, one per environment.
"""
import logging
import os
from functools import lru_cache
from pathlib import Path

import toml

from app.utils.constants import ConfigFile

CONFIG_DIR = Path(__file__).resolve().parent.parent / "cfg"

__all__ = ["Config", "ConfigFile", "get_config", "get_environment_config"]


class Config:
    """Parsed TOML configuration."""

    def __init__(self, config_file: str):
        self.config_file = config_file
        self.path = CONFIG_DIR / config_file
        self.data = toml.load(self.path)

    def section(self, name: str) -> dict:
        """Return a config section, empty if it is not defined."""
        return self.data.get(name, {})

    def __repr__(self):
        return f"<Config: {self.config_file}>"


@lru_cache
def get_config(config_file: str) -> Config:
    """
    Load configuration from file.

    Args:
        config_file: Configuration file name (e.g., "production.toml")

    Returns:
        Config instance with parsed data
    """
    logging.info(f"Loading config from {CONFIG_DIR / config_file}")
    return Config(config_file)


def get_environment_config() -> Config:
    """Config for the environment named by $ENVIRONMENT (default: development)."""
    env = os.getenv("ENVIRONMENT", "development")
    return get_config(f"{env}.toml")
