"""CLI commands for global configuration management."""

from typing import Optional

import typer

from pushbrief import global_config
from pushbrief.config import (
    API_KEY_ENV_VARS,
    AVAILABLE_MODELS,
    DEFAULT_MAX_TOKENS,
    DEFAULT_TEMPERATURE,
    JIRA_PASSWORD_ENV_VAR,
    LLMProvider,
)

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global pushbrief configuration in ~/.pushbrief/",
    add_completion=False,
)

VALID_PROVIDERS = ", ".join(p.value for p in LLMProvider)


def _mask(secret: str) -> str:
    return secret[:8] + "..." + secret[-4:] if len(secret) > 12 else "***"


def _parse_provider(provider: str) -> LLMProvider:
    try:
        return LLMProvider(provider.lower())
    except ValueError:
        typer.echo(f"Invalid provider: {provider}", err=True)
        typer.echo(f"Valid providers: {VALID_PROVIDERS}", err=True)
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current global configuration."""
    if not global_config.is_configured():
        typer.echo("No configuration found. Run 'pushbrief config set-provider' to set up.")
        return

    try:
        config = global_config.load_global_config()
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Current pushbrief configuration (~/.pushbrief/config.yaml):")
    typer.echo()
    typer.echo(f"  Provider: {config.get('provider', 'not set')}")
    typer.echo(f"  Model: {config.get('model', 'not set')}")
    typer.echo(f"  Max Tokens: {config.get('max_tokens', DEFAULT_MAX_TOKENS)}")
    typer.echo(f"  Temperature: {config.get('temperature', DEFAULT_TEMPERATURE)}")

    jira = config.get("jira") or {}
    if jira:
        typer.echo()
        typer.echo("  Jira:")
        typer.echo(f"    Host: {jira.get('host', 'not set')}")
        typer.echo(f"    Username: {jira.get('username', 'not set')}")
        if jira.get("default_project"):
            typer.echo(f"    Default Project: {jira['default_project']}")

    typer.echo()

    for env_var in [*API_KEY_ENV_VARS.values(), JIRA_PASSWORD_ENV_VAR]:
        secret = global_config.get_credential(env_var)
        typer.echo(f"  {env_var}: {_mask(secret) if secret else 'not set'}")


@config_app.command("set-key")
def config_set_key(
    name: str = typer.Argument(
        ...,
        help=f"Provider name ({VALID_PROVIDERS}) or 'jira' for the Jira password",
    )
) -> None:
    """Set or update an API key or the Jira password."""
    if name.lower() == "jira":
        env_var = JIRA_PASSWORD_ENV_VAR
        label = "Jira password or API token"
    else:
        llm_provider = _parse_provider(name)
        env_var = API_KEY_ENV_VARS[llm_provider]
        label = f"{llm_provider.value} API key"

    secret = typer.prompt(f"Enter your {label}", hide_input=True)

    try:
        global_config.save_credential(env_var, secret)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Saved {label}")


@config_app.command("set-provider")
def config_set_provider(
    provider: str = typer.Argument(..., help=f"Provider name ({VALID_PROVIDERS})"),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Model name (optional, will prompt if not provided)",
    ),
) -> None:
    """Set the active LLM provider and model."""
    llm_provider = _parse_provider(provider)
    models = AVAILABLE_MODELS[llm_provider]

    if not model:
        typer.echo(f"Available models for {llm_provider.value}:")
        for i, m in enumerate(models, 1):
            typer.echo(f"  {i}. {m}")

        model_choice = typer.prompt(f"Select a model (1-{len(models)})", type=int, default=1)
        if model_choice < 1 or model_choice > len(models):
            typer.echo("Invalid choice. Aborting.", err=True)
            raise typer.Exit(1)

        model = models[model_choice - 1]
    elif model not in models:
        typer.echo(f"Warning: {model} is not in the list of known models for {llm_provider.value}")
        if not typer.confirm("Continue anyway?", default=False):
            raise typer.Exit(0)

    try:
        global_config.set_provider_and_model(llm_provider.value, model)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ Provider set to: {llm_provider.value}")
    typer.echo(f"✓ Model set to: {model}")


@config_app.command("set-jira")
def config_set_jira(
    host: Optional[str] = typer.Option(None, "--host", help="Jira host URL"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Jira username"),
    default_project: Optional[str] = typer.Option(
        None,
        "--default-project",
        "-p",
        help="Project offered first when selecting issues",
    ),
) -> None:
    """Store Jira connection details (the password is set with 'config set-key jira')."""
    if host is None and username is None and default_project is None:
        host = typer.prompt("Jira host (e.g., https://your-domain.atlassian.net)")
        username = typer.prompt("Jira username")

    try:
        global_config.set_jira_config(host, username, default_project)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("✓ Jira configuration saved")
