"""User-level settings in ~/.smartcommit/.

config.yaml holds provider defaults (provider, model, max_tokens,
temperature, request_timeout, editor) and is validated into
GlobalSettings. credentials holds KEY=value API keys, readable by the
owner only.
"""

import os
import stat
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from smartcommit.config import API_KEY_ENV_VARS, LEGACY_API_KEY_ENV_VARS, LLMProvider


class GlobalConfigError(Exception):
    """Raised when ~/.smartcommit/ cannot be read, parsed or written."""

    pass


_CONFIG_DIR = Path.home() / ".smartcommit"

_CREDENTIALS_HEADER = "# smartcommit API credentials\n# Format: PROVIDER_API_KEY=your_key_here\n\n"


class GlobalSettings(BaseModel):
    """Validated contents of config.yaml; unset keys are None."""

    model_config = ConfigDict(extra="ignore", protected_namespaces=())

    provider: Optional[LLMProvider] = None
    model: Optional[str] = None
    max_tokens: Optional[int] = Field(None, gt=0)
    temperature: Optional[float] = Field(None, ge=0, le=2)
    request_timeout: Optional[float] = Field(None, gt=0)
    editor: Optional[str] = None

    @field_validator("provider", mode="before")
    @classmethod
    def unknown_provider_is_unset(cls, v):
        # Providers from other tools sharing the file are ignored
        if isinstance(v, str):
            v = "anthropic" if v.lower() == "claude" else v.lower()
            if v not in {p.value for p in LLMProvider}:
                return None
        return v


def get_global_config_dir() -> Path:
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    return get_global_config_dir() / "credentials"


def is_configured() -> bool:
    """True once config.yaml has been written."""
    return get_config_file_path().exists()


def load_global_config() -> dict[str, Any]:
    """Read config.yaml as a raw mapping (empty if missing).

    Raises:
        GlobalConfigError: If the file cannot be read or is not a mapping.
    """
    config_file = get_config_file_path()
    if not config_file.exists():
        return {}

    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(data, dict):
        raise GlobalConfigError(f"{config_file} must contain a mapping")
    return data


def load_global_settings() -> GlobalSettings:
    """Read and validate config.yaml.

    Raises:
        GlobalConfigError: If the file is unreadable or holds invalid values.
    """
    try:
        return GlobalSettings.model_validate(load_global_config())
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise GlobalConfigError(f"Invalid values in {get_config_file_path()}: {fields}")


def save_global_config(config: dict[str, Any]) -> None:
    ensure_global_config_dir()
    config_file = get_config_file_path()
    try:
        config_file.write_text(
            yaml.dump(config, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
    except OSError as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def get_active_provider() -> Optional[LLMProvider]:
    return load_global_settings().provider


def get_active_model() -> Optional[str]:
    return load_global_settings().model


def get_editor_preference() -> Optional[str]:
    return load_global_settings().editor


def set_provider_and_model(provider: LLMProvider, model: str) -> None:
    """Make provider/model the defaults, keeping the other keys."""
    config = load_global_config()
    config["provider"] = provider.value
    config["model"] = model
    save_global_config(config)


def load_credentials() -> dict[str, str]:
    """Parse the credentials file into {ENV_VAR_NAME: key}.

    Blank lines, comments and lines without "=" are skipped.
    """
    credentials_file = get_credentials_file_path()
    if not credentials_file.exists():
        return {}

    try:
        lines = credentials_file.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")

    credentials = {}
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        credentials[key.strip()] = value.strip()
    return credentials


def save_credential(provider_key: str, api_key: str) -> None:
    """Add or replace one key and rewrite the file with mode 0600."""
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    credentials = load_credentials()
    credentials[provider_key] = api_key

    body = "".join(f"{key}={value}\n" for key, value in credentials.items())
    try:
        credentials_file.write_text(_CREDENTIALS_HEADER + body, encoding="utf-8")
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(provider_key: str) -> Optional[str]:
    return load_credentials().get(provider_key)


def lookup_api_key(provider: LLMProvider) -> Optional[str]:
    """Find a provider's API key.

    The primary variable name (e.g. ANTHROPIC_API_KEY) is tried before
    legacy names (CLAUDE_API_KEY), first in the environment (including
    .env), then in the credentials file. An unreadable credentials file
    counts as having no key.
    """
    names = [API_KEY_ENV_VARS[provider]] + LEGACY_API_KEY_ENV_VARS.get(provider, [])

    for name in names:
        value = os.getenv(name)
        if value:
            return value

    try:
        credentials = load_credentials()
    except GlobalConfigError:
        return None

    for name in names:
        if credentials.get(name):
            return credentials[name]
    return None
