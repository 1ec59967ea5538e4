"""Main CLI command: the full stage, generate, commit and push workflow."""

from pathlib import Path
from typing import Optional

import typer

from aigitauto import __version__
from aigitauto.cli.utils import (
    TyperConsole,
    configure_logging,
    finish,
    list_models,
    resolve_config,
)
from aigitauto.llm import OllamaClient
from aigitauto.workflow import Workflow, WorkflowOptions


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"AI Git Auto v{__version__}")
        typer.echo("Automated Git workflow with AI-generated commit messages")
        raise typer.Exit()


def main_command(
    ctx: typer.Context,
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="Ollama model to use",
    ),
    endpoint: Optional[str] = typer.Option(
        None,
        "--endpoint",
        help="Ollama endpoint (default: http://localhost:11434)",
    ),
    temperature: Optional[float] = typer.Option(
        None,
        "--temperature",
        help="Temperature for the model (0.0-1.0)",
    ),
    max_tokens: Optional[int] = typer.Option(
        None,
        "--max-tokens",
        help="Maximum tokens for the response",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Request timeout in seconds",
    ),
    profile: Optional[str] = typer.Option(
        None,
        "--profile",
        help="Prompt size profile (compact, detailed)",
    ),
    show_models: bool = typer.Option(
        False,
        "--list-models",
        help="List available Ollama models and exit",
    ),
    interactive: bool = typer.Option(
        True,
        "--interactive/--no-interactive",
        help="Ask before committing and pushing",
    ),
    skip_stage: bool = typer.Option(
        False,
        "--skip-stage",
        "--skip-add",
        help="Skip 'git add .' and only commit staged files",
    ),
    skip_push: bool = typer.Option(
        False,
        "--skip-push",
        help="Skip 'git push' after committing",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be done without executing",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompts",
    ),
    repo: Optional[Path] = typer.Option(
        None,
        "--repo",
        "-C",
        help="Path to the git repository",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version information",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Stage changes, generate a commit message with a local model, commit and push."""
    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    configure_logging(verbose)
    config = resolve_config(model, endpoint, temperature, max_tokens, timeout, profile, repo)
    client = OllamaClient.from_config(config)

    if show_models:
        list_models(client)
        return

    typer.echo("AI Git Auto - Automated Git Workflow")
    typer.echo("=" * 38)

    options = WorkflowOptions(
        interactive=interactive,
        skip_stage=skip_stage,
        skip_push=skip_push,
        dry_run=dry_run,
        force=force,
    )
    try:
        result = Workflow(config, TyperConsole(), options, client).run()
    except KeyboardInterrupt:
        typer.echo("\nInterrupted.", err=True)
        raise typer.Exit(130)

    finish(result)
