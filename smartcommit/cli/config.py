"""CLI commands for global configuration management."""

import typer

from smartcommit import global_config
from smartcommit.config import (
    API_KEY_ENV_VARS,
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODELS,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEMPERATURE,
    MODEL_ALIASES,
    LLMProvider,
)

VALID_PROVIDERS = ", ".join(provider.value for provider in LLMProvider)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global smartcommit configuration in ~/.smartcommit/",
    add_completion=False,
)


def _parse_provider(provider: str) -> LLMProvider:
    try:
        return LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {VALID_PROVIDERS}")
        raise typer.Exit(1)


def _mask(api_key: str) -> str:
    return api_key[:8] + "..." + api_key[-4:] if len(api_key) > 12 else "***"


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    try:
        if not global_config.is_configured():
            typer.echo("No configuration found. Run 'smartcommit config set-provider' to set up.")
            return

        config = global_config.load_global_config()

        typer.echo("Current smartcommit configuration (~/.smartcommit/config.yaml):")
        typer.echo()
        typer.echo(f"  Provider: {config.get('provider', 'not set')}")
        typer.echo(f"  Model: {config.get('model', 'not set')}")
        typer.echo(f"  Max Tokens: {config.get('max_tokens', DEFAULT_MAX_TOKENS)}")
        typer.echo(f"  Temperature: {config.get('temperature', DEFAULT_TEMPERATURE)}")
        typer.echo(f"  Request Timeout: {config.get('request_timeout', DEFAULT_REQUEST_TIMEOUT)}s")

        editor = config.get("editor")
        if editor:
            typer.echo(f"  Editor: {editor}")

        typer.echo()

        provider_str = config.get("provider")
        if provider_str:
            try:
                env_var = API_KEY_ENV_VARS[LLMProvider(provider_str)]
            except (ValueError, KeyError):
                return
            api_key = global_config.get_credential(env_var)
            if api_key:
                typer.echo(f"  API Key ({env_var}): {_mask(api_key)}")
            else:
                typer.echo(f"  API Key ({env_var}): not set")

    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)


@config_app.command("set-key")
def config_set_key(
    provider: str = typer.Argument(
        ...,
        help=f"Provider name ({VALID_PROVIDERS})",
    )
) -> None:
    """Set or update an API key for a provider."""
    llm_provider = _parse_provider(provider)
    env_var = API_KEY_ENV_VARS[llm_provider]

    typer.echo(f"Setting API key for {llm_provider.value}")
    api_key = typer.prompt(f"Enter your {llm_provider.value} API key", hide_input=True)

    try:
        global_config.save_credential(env_var, api_key.strip())
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ API key saved for {llm_provider.value}")


@config_app.command("set-provider")
def config_set_provider(
    provider: str = typer.Argument(
        ...,
        help=f"Provider name ({VALID_PROVIDERS})",
    ),
    model: str = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name or alias (defaults to the provider's default model)",
    ),
) -> None:
    """Set the active LLM provider and model."""
    llm_provider = _parse_provider(provider)

    if model:
        model = MODEL_ALIASES[llm_provider].get(model, model)
    else:
        model = DEFAULT_MODELS[llm_provider]

    try:
        global_config.set_provider_and_model(llm_provider, model)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Provider set to: {llm_provider.value}")
    typer.echo(f"✓ Model set to: {model}")


@config_app.command("list-models")
def config_list_models() -> None:
    """List the model aliases accepted by --model-version."""
    for llm_provider in LLMProvider:
        typer.echo(f"{llm_provider.value} (default: {DEFAULT_MODELS[llm_provider]}):")
        for alias, model in MODEL_ALIASES[llm_provider].items():
            typer.echo(f"  • {alias} -> {model}")
        typer.echo()
