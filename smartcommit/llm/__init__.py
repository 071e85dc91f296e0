"""LLM provider module for smartcommit.

This module provides a unified interface to multiple LLM providers.
Defaults come from smartcommit/config.py and ~/.smartcommit/config.yaml.
"""

from dotenv import load_dotenv

import smartcommit.config as _config
from smartcommit.config import LLMProvider, resolve_model
from smartcommit.llm.base import BaseLLMProvider
from smartcommit.llm.exceptions import (
    AllBackendsFailedError,
    LLMError,
    MissingAPIKeyError,
)

# Load environment variables from .env file
load_dotenv()


def get_provider(
    provider: LLMProvider | str | None = None,
    model_version: str | None = None,
) -> BaseLLMProvider:
    """Get an LLM provider instance.

    Args:
        provider: The provider to use. Defaults to ACTIVE_PROVIDER from config.
        model_version: Model alias or name. Defaults to the provider default.

    Returns:
        An instance of the appropriate LLM provider.

    Raises:
        ValueError: If the provider is not supported.
    """
    if provider is None:
        provider = _config.ACTIVE_PROVIDER
    try:
        provider = LLMProvider(provider)
    except ValueError:
        raise ValueError(f"Unsupported provider: {provider}")

    model = resolve_model(provider, model_version)

    if provider == LLMProvider.ANTHROPIC:
        from smartcommit.llm.anthropic_provider import AnthropicProvider

        return AnthropicProvider(model=model)

    elif provider == LLMProvider.OPENAI:
        from smartcommit.llm.openai_provider import OpenAIProvider

        return OpenAIProvider(model=model)

    elif provider == LLMProvider.GOOGLE:
        from smartcommit.llm.google_provider import GoogleProvider

        return GoogleProvider(model=model)

    raise ValueError(f"Unsupported provider: {provider}")


def build_backends(
    primary: BaseLLMProvider,
    ensemble: bool = False,
    ensemble_providers: list[str] | None = None,
) -> list[BaseLLMProvider]:
    """Build the ordered backend list for one generation.

    Args:
        primary: The requested provider; always first.
        ensemble: Whether to add further backends.
        ensemble_providers: Explicit extra backends as "provider" or
            "provider:model" entries. When None, every other provider family
            with an available API key is added with its default model.

    Returns:
        Backends in configured order, without duplicate identities.
    """
    backends = [primary]
    if not ensemble:
        return backends

    if ensemble_providers is None:
        candidates = [
            get_provider(provider)
            for provider in LLMProvider
            if provider != primary.provider
        ]
        candidates = [backend for backend in candidates if backend.has_api_key()]
    else:
        candidates = []
        for entry in ensemble_providers:
            name, _, model = entry.partition(":")
            candidates.append(get_provider(name.strip(), model.strip() or None))

    seen = {primary.backend_id}
    for backend in candidates:
        if backend.backend_id not in seen:
            seen.add(backend.backend_id)
            backends.append(backend)

    return backends


# Export commonly used items
__all__ = [
    "BaseLLMProvider",
    "LLMError",
    "MissingAPIKeyError",
    "AllBackendsFailedError",
    "get_provider",
    "build_backends",
]
