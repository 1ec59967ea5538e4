"""CLI entry point for aigitauto.

This module provides the main CLI application that combines the default
workflow command and its subcommands into a single interface.
"""

import typer

from aigitauto.cli.config import config_app
from aigitauto.cli.main import main_command
from aigitauto.cli.suggest import suggest_command

# Main application
app = typer.Typer(
    name="ai-git-auto",
    help="ai-git-auto: Automated Git workflow with AI-generated commit messages",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Add individual commands
app.command("suggest")(suggest_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "main_command",
    "suggest_command",
]
