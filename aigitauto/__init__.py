"""Automated Git workflow with AI-generated commit messages."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("ai-git-auto")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
