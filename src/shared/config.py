"""Configuration management for the Drupal MCP Server.

Settings come from the environment (and an optional `.env` file), with an
optional YAML file layered underneath. Configuration is loaded once and
cached for the lifetime of the process.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.models import DrupalConfig


class DrupalSettings(BaseSettings):
    """Drupal backend connection settings."""
    base_url: str = Field(default="https://your-drupal-site.com", description="Site root URL")
    username: Optional[str] = Field(default=None, description="Basic auth username")
    password: Optional[str] = Field(default=None, description="Basic auth password")
    access_token: Optional[str] = Field(default=None, description="OAuth bearer token")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    model_config = SettingsConfigDict(
        env_prefix="DRUPAL_",
        env_file=".env",
        extra="ignore"
    )

    def to_client_config(self) -> DrupalConfig:
        return DrupalConfig(
            base_url=self.base_url,
            username=self.username,
            password=self.password,
            access_token=self.access_token,
            timeout=self.timeout,
        )


class Settings(BaseSettings):
    """Main application settings."""
    server_name: str = Field(default="drupal-mcp-server")
    server_version: str = Field(default="1.0.0")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    drupal: DrupalSettings = Field(default_factory=DrupalSettings)

    model_config = SettingsConfigDict(
        env_prefix="DRUPAL_MCP_",
        env_file=".env",
        extra="ignore"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """
        Load settings from a YAML file.

        Values in the file are defaults; environment variables still win.
        A missing file yields environment-only settings.
        """
        data = load_yaml_config(path)
        drupal_data = data.pop("drupal", None) or {}

        drupal = DrupalSettings()
        overrides = {
            key: value for key, value in drupal_data.items()
            if f"DRUPAL_{key.upper()}" not in os.environ
        }
        if overrides:
            drupal = DrupalSettings(**{**drupal.model_dump(), **overrides})

        top_level = {
            key: value for key, value in data.items()
            if f"DRUPAL_MCP_{key.upper()}" not in os.environ
        }
        return cls(drupal=drupal, **top_level)


def load_yaml_config(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file."""
    path = Path(path)
    if not path.exists():
        return {}

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return data


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    config_path = os.environ.get("DRUPAL_MCP_CONFIG", "config/settings.yaml")
    return Settings.from_yaml(config_path)
