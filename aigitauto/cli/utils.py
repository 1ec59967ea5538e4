"""Shared utility functions for CLI commands."""

import logging
from pathlib import Path
from typing import Optional

import typer

from aigitauto.config import Config, ConfigError, load_config
from aigitauto.llm import LLMError, OllamaClient, recommend_model
from aigitauto.workflow import WorkflowResult


class TyperConsole:
    """Console backed by typer.echo and typer.prompt."""

    def echo(self, message: str = "", err: bool = False) -> None:
        typer.echo(message, err=err)

    def prompt(self, question: str) -> str:
        try:
            return typer.prompt(question, default="", show_default=False)
        except typer.Abort:
            # typer.prompt turns Ctrl+C and end of input into Abort
            raise KeyboardInterrupt


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        force=True,
    )


def resolve_config(
    model: Optional[str] = None,
    endpoint: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    timeout: Optional[float] = None,
    profile: Optional[str] = None,
    repo: Optional[Path] = None,
) -> Config:
    """Build the run Config from command-line flags, exiting on invalid values."""
    overrides = {
        "model": model,
        "endpoint": endpoint,
        "temperature": temperature,
        "max_tokens": max_tokens,
        "timeout": timeout,
        "profile": profile.lower() if profile else None,
        "repo_path": repo,
    }
    try:
        return load_config(overrides)
    except ConfigError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1)


def finish(result: WorkflowResult) -> None:
    """Print the closing line for a run and exit non-zero if it aborted."""
    if not result.ok:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(1)
    typer.echo("\nWorkflow completed!")


def list_models(client: OllamaClient) -> None:
    """Print the models available on the Ollama server, exiting 1 if unreachable."""
    try:
        models = client.list_models()
    except LLMError as e:
        typer.echo(f"Failed to list models: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Available Ollama models:")
    for name in models:
        annotation = recommend_model(name)
        suffix = f" ({annotation})" if annotation else ""
        typer.echo(f"  - {name}{suffix}")
