"""Configuration — config file, environment variables and built-in defaults."""

from __future__ import annotations

import os
from pathlib import Path

import typer
import yaml
from pydantic import BaseModel, ValidationError

from wat.errors import ConfigurationError
from wat.llm._prompts import DEFAULT_PROMPT
from wat.utils.yaml_io import load_yaml, save_yaml

APP_NAME = "wat"
CONFIG_FILE_NAME = "config.yaml"

# Defaults
DEFAULT_BASE_URL = "https://api.anthropic.com/v1/chat/completions"
DEFAULT_MODEL = "claude-3-5-sonnet-20241022"


class Config(BaseModel):
    """Contents of ``config.yaml``. Every key is optional."""
    base_url: str | None = None
    model: str | None = None
    api_key: str | None = None
    prompt: str | None = None


class Settings(BaseModel):
    """Fully resolved inputs for one completion call."""
    base_url: str
    api_key: str
    model: str
    prompt: str


def get_config_path() -> Path:
    """Return the config file location.

    ``WAT_CONFIG_DIR`` overrides the per-user application directory.
    """
    config_dir = os.environ.get("WAT_CONFIG_DIR") or typer.get_app_dir(APP_NAME)
    return Path(config_dir) / CONFIG_FILE_NAME


def load_config(path: Path | None = None) -> Config:
    """Load the config file, writing an empty default one if it is missing.

    Raises:
        ConfigurationError: If the file cannot be read, written or parsed.
    """
    path = path or get_config_path()
    if not path.exists():
        config = Config()
        try:
            save_yaml(config.model_dump(), path)
        except OSError as exc:
            raise ConfigurationError(f"Cannot write default config to {path}: {exc}") from exc
        return config

    try:
        data = load_yaml(path)
    except OSError as exc:
        raise ConfigurationError(f"Cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {exc}") from exc

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a YAML mapping in {path}, got {type(data).__name__}"
        )
    try:
        return Config.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid config file {path}: {exc}") from exc


def get_api_key(config: Config) -> str:
    """Return ``OPENAI_API_KEY`` from the environment, else the config value.

    Raises:
        ConfigurationError: If neither is set.
    """
    key = os.environ.get("OPENAI_API_KEY") or config.api_key
    if not key:
        raise ConfigurationError(
            f"Missing API key: set OPENAI_API_KEY or api_key in {get_config_path()}"
        )
    return key


def resolve_settings(config: Config, model: str | None = None) -> Settings:
    """Merge a CLI model override, the config file and the defaults."""
    return Settings(
        base_url=config.base_url or DEFAULT_BASE_URL,
        api_key=get_api_key(config),
        model=model or config.model or DEFAULT_MODEL,
        prompt=config.prompt or DEFAULT_PROMPT,
    )
