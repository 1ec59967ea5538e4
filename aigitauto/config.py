"""Configuration for aigitauto.

A Config value is built once at process start and passed to every
component. Values are resolved in this order (later wins):

1. Built-in defaults
2. ~/.aigitauto/config.yaml (see global_config)
3. Environment variables (a .env file is loaded if present)
4. Command-line flags
"""

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator


class ConfigError(Exception):
    """Raised when configuration values are invalid."""

    pass


class PromptProfile(Enum):
    """Prompt size profiles.

    The profile bounds how much diff text goes into the prompt so the
    request fits the model's context window.
    """

    COMPACT = "compact"
    DETAILED = "detailed"


# (max_detailed_files, max_diff_chars) per profile
PROFILE_LIMITS = {
    PromptProfile.COMPACT: (3, 1000),
    PromptProfile.DETAILED: (5, 2000),
}


# ============================================================
# DEFAULT VALUES
# ============================================================

DEFAULT_ENDPOINT = "http://localhost:11434"
DEFAULT_MODEL = "llama2"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 150
DEFAULT_TIMEOUT = 30.0
DEFAULT_PROFILE = PromptProfile.COMPACT

# Environment variables mapped to Config fields
ENV_VARS = {
    "OLLAMA_HOST": "endpoint",
    "AIGITAUTO_ENDPOINT": "endpoint",
    "AIGITAUTO_MODEL": "model",
}

# Keys accepted in the config file and by `config set`
CONFIG_KEYS = ("endpoint", "model", "temperature", "max_tokens", "timeout", "profile")


class Config(BaseModel):
    """Resolved runtime configuration."""

    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=1.0)
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    profile: PromptProfile = DEFAULT_PROFILE
    repo_path: Path = Path(".")

    model_config = {"frozen": True}

    @field_validator("endpoint")
    @classmethod
    def normalize_endpoint(cls, v: str) -> str:
        """Strip trailing slashes and add a scheme if missing."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("endpoint cannot be empty")
        if "://" not in v:
            v = f"http://{v}"
        return v

    @field_validator("model")
    @classmethod
    def model_must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("model cannot be empty")
        return v.strip()

    @property
    def max_detailed_files(self) -> int:
        return PROFILE_LIMITS[self.profile][0]

    @property
    def max_diff_chars(self) -> int:
        return PROFILE_LIMITS[self.profile][1]


def _env_overrides() -> dict[str, Any]:
    """Collect config values from environment variables."""
    load_dotenv()

    values = {}
    for env_var, key in ENV_VARS.items():
        value = os.getenv(env_var)
        if value:
            values[key] = value
    return values


def load_config(overrides: Optional[dict[str, Any]] = None, use_global: bool = True) -> Config:
    """Build the Config for this run.

    Args:
        overrides: Values from command-line flags. None entries are ignored.
        use_global: Whether to read ~/.aigitauto/config.yaml.

    Returns:
        The resolved Config.

    Raises:
        ConfigError: If any value is invalid.
    """
    values: dict[str, Any] = {}

    if use_global:
        from aigitauto import global_config

        try:
            file_values = global_config.load_global_config()
        except global_config.GlobalConfigError as e:
            raise ConfigError(str(e))
        values.update({k: v for k, v in file_values.items() if k in CONFIG_KEYS and v is not None})

    values.update(_env_overrides())

    if overrides:
        values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Config(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration:\n{e}")
