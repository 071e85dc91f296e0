"""Configuration for smartcommit LLM providers.

Provider and model defaults live here. User overrides are loaded from
~/.smartcommit/config.yaml; use 'smartcommit config' commands to modify them.
"""

from enum import Enum


class LLMProvider(Enum):
    """Supported LLM providers."""

    ANTHROPIC = "anthropic"
    OPENAI = "openai"
    GOOGLE = "google"


# ============================================================
# DEFAULT FALLBACK VALUES
# ============================================================
# These are used only if ~/.smartcommit/config.yaml doesn't exist

DEFAULT_PROVIDER = LLMProvider.ANTHROPIC
DEFAULT_MAX_TOKENS = 1000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_REQUEST_TIMEOUT = 60.0

DEFAULT_MODELS = {
    LLMProvider.ANTHROPIC: "claude-3-haiku-20240307",
    LLMProvider.OPENAI: "gpt-4",
    LLMProvider.GOOGLE: "gemini-2.0-flash",
}


# ============================================================
# ACTIVE CONFIGURATION (loaded from global config)
# ============================================================

# Initially set to defaults - will be overridden by load_config()
ACTIVE_PROVIDER = DEFAULT_PROVIDER
ACTIVE_MODEL = None
MAX_TOKENS = DEFAULT_MAX_TOKENS
TEMPERATURE = DEFAULT_TEMPERATURE
REQUEST_TIMEOUT = DEFAULT_REQUEST_TIMEOUT


def load_config():
    """Load configuration from global config file.

    This should be called by the CLI before using the LLM.
    """
    global ACTIVE_PROVIDER, ACTIVE_MODEL, MAX_TOKENS, TEMPERATURE, REQUEST_TIMEOUT

    # Import here to avoid circular dependency
    from smartcommit import global_config

    try:
        settings = global_config.load_global_settings()
    except global_config.GlobalConfigError:
        # Use defaults if the global config file is unreadable
        return

    if settings.provider:
        ACTIVE_PROVIDER = settings.provider
    if settings.model:
        ACTIVE_MODEL = settings.model
    if settings.max_tokens is not None:
        MAX_TOKENS = settings.max_tokens
    if settings.temperature is not None:
        TEMPERATURE = settings.temperature
    if settings.request_timeout is not None:
        REQUEST_TIMEOUT = settings.request_timeout


# ============================================================
# MODEL ALIASES PER PROVIDER
# ============================================================
# Short names accepted by --model-version. Anything else is passed through
# to the provider verbatim.

MODEL_ALIASES = {
    LLMProvider.ANTHROPIC: {
        "haiku": "claude-3-haiku-20240307",
        "sonnet": "claude-3-sonnet-20240229",
        "opus": "claude-3-opus-20240229",
    },
    LLMProvider.OPENAI: {
        "4": "gpt-4",
        "4-turbo": "gpt-4-turbo-preview",
        "3.5-turbo": "gpt-3.5-turbo",
    },
    LLMProvider.GOOGLE: {
        "flash": "gemini-2.0-flash",
        "pro": "gemini-2.5-pro",
    },
}


def resolve_model(provider: LLMProvider, model_version: str | None = None) -> str:
    """Resolve a model alias or explicit model name for a provider.

    Args:
        provider: The LLM provider.
        model_version: An alias (e.g. "haiku", "4-turbo"), a full model
            name, or None for the provider default.

    Returns:
        The concrete model name.
    """
    if not model_version:
        if ACTIVE_MODEL and provider == ACTIVE_PROVIDER:
            return ACTIVE_MODEL
        return DEFAULT_MODELS[provider]

    return MODEL_ALIASES[provider].get(model_version, model_version)


# ============================================================
# API KEY ENVIRONMENT VARIABLES
# ============================================================

API_KEY_ENV_VARS = {
    LLMProvider.ANTHROPIC: "ANTHROPIC_API_KEY",
    LLMProvider.OPENAI: "OPENAI_API_KEY",
    LLMProvider.GOOGLE: "GOOGLE_API_KEY",
}

# Additional variable names accepted for a provider, checked after the primary
LEGACY_API_KEY_ENV_VARS = {
    LLMProvider.ANTHROPIC: ["CLAUDE_API_KEY"],
}


def get_api_key_env_var(provider: LLMProvider) -> str:
    """Get the environment variable name for the API key.

    Args:
        provider: The LLM provider.

    Returns:
        The environment variable name.
    """
    return API_KEY_ENV_VARS[provider]
