"""Configuration loading and management."""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator

from ask_bayes.types import Evidence, OutputFormat
from ask_bayes.utils import APP_DIR_NAME, CONFIG_FILE_NAME, DB_FILE_NAME


class StoreConfig(BaseModel):
    """Configuration for the prior store."""

    path: str = f"~/{APP_DIR_NAME}/{DB_FILE_NAME}"


class DefaultsConfig(BaseModel):
    """Values used when a command-line option is omitted."""

    prior: float = Field(default=0.5, ge=0.0, le=1.0)
    likelihood: float = Field(default=0.5, ge=0.0, le=1.0)
    likelihood_not: float = Field(default=0.5, ge=0.0, le=1.0)
    evidence: str = "observed"
    output: str = "table"

    @field_validator("evidence")
    @classmethod
    def _check_evidence(cls, value: str) -> str:
        Evidence.parse(value)
        return value

    @field_validator("output")
    @classmethod
    def _check_output(cls, value: str) -> str:
        OutputFormat.parse(value)
        return value


class Config(BaseModel):
    """Main configuration model."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.
    """
    if isinstance(value, str):
        pattern = r"\$\{([^}:]+)(?::-([^}]*))?\}"

        def replace(match: re.Match) -> str:
            var_name = match.group(1)
            default = match.group(2)
            return os.environ.get(var_name, default if default is not None else "")

        return re.sub(pattern, replace, value)
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def load_config(config_path: str | Path) -> Config:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Parsed Config object.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the config file is invalid.
    """
    config_path = Path(config_path).expanduser()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        try:
            raw_config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError(
            f"Invalid config file {config_path}: top level must be a mapping, "
            f"got {type(raw_config).__name__}"
        )

    return Config(**expand_env_vars(raw_config))


def find_config(config_path: str | Path | None = None) -> Config:
    """Load the configuration that applies to this run.

    Lookup order: the explicit path, ``ASK_BAYES_CONFIG``, then
    ``~/.ask-bayes/config.yaml`` if it exists. Falls back to defaults.
    """
    if config_path is not None:
        return load_config(config_path)

    env_path = os.environ.get("ASK_BAYES_CONFIG")
    if env_path:
        return load_config(env_path)

    try:
        user_path = Path.home() / APP_DIR_NAME / CONFIG_FILE_NAME
    except RuntimeError:
        return Config()
    if user_path.exists():
        return load_config(user_path)
    return Config()
