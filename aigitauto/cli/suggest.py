"""CLI command that only suggests a message for already staged changes."""

from pathlib import Path
from typing import Optional

import typer

from aigitauto.cli.utils import (
    TyperConsole,
    configure_logging,
    finish,
    list_models,
    resolve_config,
)
from aigitauto.llm import OllamaClient
from aigitauto.workflow import Workflow, WorkflowOptions


def suggest_command(
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Ollama model to use"),
    endpoint: Optional[str] = typer.Option(None, "--endpoint", help="Ollama endpoint"),
    temperature: Optional[float] = typer.Option(None, "--temperature", help="Temperature (0.0-1.0)"),
    max_tokens: Optional[int] = typer.Option(None, "--max-tokens", help="Maximum tokens for the response"),
    profile: Optional[str] = typer.Option(None, "--profile", help="Prompt size profile (compact, detailed)"),
    repo: Optional[Path] = typer.Option(None, "--repo", "-C", help="Path to the git repository"),
    commit: bool = typer.Option(
        False,
        "--commit",
        "-c",
        help="Commit with the suggested message after confirmation",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Bypass confirmation prompt and commit immediately",
    ),
    show_models: bool = typer.Option(
        False,
        "--list-models",
        help="List available Ollama models and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Suggest a commit message for staged changes without staging or pushing."""
    configure_logging(verbose)
    config = resolve_config(model, endpoint, temperature, max_tokens, None, profile, repo)
    client = OllamaClient.from_config(config)

    if show_models:
        list_models(client)
        return

    typer.echo(f"Scanning staged changes in: {config.repo_path.resolve()}")

    options = WorkflowOptions(
        interactive=True,
        skip_stage=True,
        skip_push=True,
        force=yes,
        commit=commit,
    )
    try:
        result = Workflow(config, TyperConsole(), options, client).run()
    except KeyboardInterrupt:
        typer.echo("\nInterrupted.", err=True)
        raise typer.Exit(130)

    finish(result)
