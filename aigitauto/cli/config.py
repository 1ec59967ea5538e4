"""CLI commands for global configuration management."""

import typer
from pydantic import ValidationError

from aigitauto import global_config
from aigitauto.config import CONFIG_KEYS, Config, ConfigError, load_config

# Subcommand group for configuration management
config_app = typer.Typer(
    name="config",
    help="Manage global configuration in ~/.aigitauto/",
    add_completion=False,
)


@config_app.command("show")
def config_show() -> None:
    """Show the effective configuration."""
    try:
        config = load_config()
    except ConfigError as e:
        typer.echo(f"Error reading configuration: {e}", err=True)
        raise typer.Exit(1)

    source = global_config.get_config_file_path()
    if global_config.is_configured():
        typer.echo(f"Current configuration ({source}):")
    else:
        typer.echo("Current configuration (defaults, no config file):")
    typer.echo()
    typer.echo(f"  Endpoint: {config.endpoint}")
    typer.echo(f"  Model: {config.model}")
    typer.echo(f"  Temperature: {config.temperature}")
    typer.echo(f"  Max Tokens: {config.max_tokens}")
    typer.echo(f"  Timeout: {config.timeout}s")
    typer.echo(
        f"  Profile: {config.profile.value} "
        f"({config.max_detailed_files} files, {config.max_diff_chars} chars per diff)"
    )


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help=f"Setting name ({', '.join(CONFIG_KEYS)})"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a value in ~/.aigitauto/config.yaml."""
    key = key.lower().replace("-", "_")
    if key not in CONFIG_KEYS:
        typer.echo(f"Invalid setting: {key}", err=True)
        typer.echo(f"Valid settings: {', '.join(CONFIG_KEYS)}")
        raise typer.Exit(1)

    try:
        validated = getattr(Config(**{key: value}), key)
    except ValidationError as e:
        typer.echo(f"Invalid value for {key}: {e}", err=True)
        raise typer.Exit(1)

    stored = getattr(validated, "value", validated)
    try:
        global_config.set_value(key, stored)
    except global_config.GlobalConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {key} set to: {stored}")
