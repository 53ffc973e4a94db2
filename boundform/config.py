import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so env vars are available for YAML interpolation
load_dotenv(Path.cwd() / ".env")

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")

CONFIG_FILE_NAME = "boundform.yaml"


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def get_config_path() -> Path:
    return Path(os.environ.get("BOUNDFORM_CONFIG", Path.cwd() / CONFIG_FILE_NAME))


def load_form_config(config_path: Path | None = None) -> dict:
    """Load and parse boundform.yaml with environment variable interpolation."""
    config_path = config_path or get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"{CONFIG_FILE_NAME} not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BOUNDFORM_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    debug: bool = False

    # Hidden field names read back by the server side
    anti_forgery_field: str = "authenticity_token"
    method_field: str = "_method"

    # Check box values
    checkbox_on_value: str = "1"
    checkbox_off_value: str = "0"
    include_hidden_unchecked: bool = True

    # Method override middleware
    override_methods: list[str] = ["PUT", "PATCH", "DELETE"]
    override_header: str = "x-http-method-override"


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment and boundform.yaml."""
    base_settings = Settings()

    try:
        form_config = load_form_config()
    except FileNotFoundError:
        return base_settings

    # YAML values win over environment values
    updates = {k: v for k, v in form_config.items() if k in Settings.model_fields}
    if updates:
        return Settings(**updates)

    return base_settings
