"""Commit workflow state machine.

A run moves through the states below and stops at DONE or ABORTED:

    IDLE -> VERIFYING -> STAGING -> SCANNING -> PROMPTING -> INFERRING
         -> AWAITING_COMMIT_APPROVAL -> COMMITTING
         -> AWAITING_PUSH_APPROVAL -> PUSHING -> DONE

Each state has one handler that returns the next state. Git and inference
errors raised inside a handler abort the run, except while pushing, where
a failure is only a warning because the commit already exists.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from aigitauto import git
from aigitauto.config import Config
from aigitauto.formatters import render_change_summary, render_suggestion
from aigitauto.git import GitError
from aigitauto.llm import LLMError, OllamaClient, parse_suggestion, recommend_model
from aigitauto.models import ChangeSet, CommitSuggestion
from aigitauto.prompt import build_prompt
from aigitauto.scanner import scan_staged_changes

logger = logging.getLogger(__name__)


# Unstaged files listed before `git add .`
UNSTAGED_PREVIEW_LIMIT = 5


class WorkflowState(Enum):
    """States of a single workflow run."""

    IDLE = "idle"
    VERIFYING = "verifying"
    STAGING = "staging"
    SCANNING = "scanning"
    PROMPTING = "prompting"
    INFERRING = "inferring"
    AWAITING_COMMIT_APPROVAL = "awaiting_commit_approval"
    COMMITTING = "committing"
    AWAITING_PUSH_APPROVAL = "awaiting_push_approval"
    PUSHING = "pushing"
    DONE = "done"
    ABORTED = "aborted"


TERMINAL_STATES = {WorkflowState.DONE, WorkflowState.ABORTED}

FAILURE_MESSAGES = {
    WorkflowState.VERIFYING: "Prerequisite check failed",
    WorkflowState.STAGING: "Failed to stage changes",
    WorkflowState.SCANNING: "Failed to scan changes",
    WorkflowState.PROMPTING: "Failed to build prompt",
    WorkflowState.INFERRING: "Failed to generate commit message",
    WorkflowState.COMMITTING: "Failed to commit",
}


class WorkflowAbort(Exception):
    """Raised by a state handler to end the run with a fatal error."""

    pass


class Console(Protocol):
    """User interaction used by the workflow."""

    def echo(self, message: str = "", err: bool = False) -> None:
        ...

    def prompt(self, question: str) -> str:
        """Ask a question and return the raw answer (may be empty)."""
        ...


@dataclass
class WorkflowOptions:
    """Per-run switches taken from the command line."""

    interactive: bool = True
    skip_stage: bool = False
    skip_push: bool = False
    dry_run: bool = False
    force: bool = False
    # When False, stop after showing the suggestion
    commit: bool = True


@dataclass
class WorkflowResult:
    """Outcome of a workflow run."""

    state: WorkflowState
    history: list[WorkflowState] = field(default_factory=list)
    change_set: Optional[ChangeSet] = None
    suggestion: Optional[CommitSuggestion] = None
    model: Optional[str] = None
    committed: bool = False
    commit_hash: Optional[str] = None
    pushed: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == WorkflowState.DONE


def is_affirmative(answer: str) -> bool:
    """Interpret a yes/no answer; an empty answer means yes."""
    return answer.strip().lower() in ("", "y", "yes")


def select_model(available: list[str], console: Console) -> str:
    """Let the user pick a model from the available list.

    Empty or invalid input selects the first model.

    Raises:
        WorkflowAbort: If no models are available.
    """
    if not available:
        raise WorkflowAbort(
            "No Ollama models available. Please pull a model first:\n   ollama pull llama3.2"
        )

    console.echo("Available models:")
    for i, name in enumerate(available, 1):
        annotation = recommend_model(name)
        suffix = f" ({annotation})" if annotation else ""
        console.echo(f"  {i}. {name}{suffix}")

    answer = console.prompt(f"Please select a model (1-{len(available)}) or press Enter for default").strip()
    if not answer:
        console.echo(f"Using default model: {available[0]}")
        return available[0]

    try:
        choice = int(answer)
    except ValueError:
        choice = 0

    if choice < 1 or choice > len(available):
        console.echo(f"Invalid selection. Using default model: {available[0]}")
        return available[0]

    selected = available[choice - 1]
    console.echo(f"Selected model: {selected}")
    return selected


class Workflow:
    """Runs stage -> scan -> prompt -> infer -> commit -> push for one repository."""

    def __init__(
        self,
        config: Config,
        console: Console,
        options: Optional[WorkflowOptions] = None,
        client: Optional[OllamaClient] = None,
    ):
        self.config = config
        self.console = console
        self.options = options or WorkflowOptions()
        self.client = client or OllamaClient.from_config(config)
        self.state = WorkflowState.IDLE
        self.history: list[WorkflowState] = [WorkflowState.IDLE]
        self.change_set: Optional[ChangeSet] = None
        self.prompt: Optional[str] = None
        self.suggestion: Optional[CommitSuggestion] = None
        self.commit_hash: Optional[str] = None
        self.committed = False
        self.pushed = False

        self._handlers = {
            WorkflowState.VERIFYING: self._verify,
            WorkflowState.STAGING: self._stage,
            WorkflowState.SCANNING: self._scan,
            WorkflowState.PROMPTING: self._build_prompt,
            WorkflowState.INFERRING: self._infer,
            WorkflowState.AWAITING_COMMIT_APPROVAL: self._await_commit_approval,
            WorkflowState.COMMITTING: self._commit,
            WorkflowState.AWAITING_PUSH_APPROVAL: self._await_push_approval,
            WorkflowState.PUSHING: self._push,
        }

    @property
    def repo_path(self):
        return self.config.repo_path

    def _enter(self, state: WorkflowState) -> None:
        logger.debug("Workflow state: %s -> %s", self.state.value, state.value)
        self.state = state
        self.history.append(state)

    def _auto_approved(self) -> bool:
        return not self.options.interactive or self.options.force

    def run(self) -> WorkflowResult:
        """Run the workflow until DONE or ABORTED."""
        error = None
        next_state = WorkflowState.VERIFYING

        while next_state not in TERMINAL_STATES:
            self._enter(next_state)
            try:
                next_state = self._handlers[next_state]()
            except WorkflowAbort as e:
                error = str(e)
                next_state = WorkflowState.ABORTED
            except (GitError, LLMError) as e:
                error = f"{FAILURE_MESSAGES.get(self.state, 'Workflow failed')}: {e}"
                next_state = WorkflowState.ABORTED

        self._enter(next_state)
        return WorkflowResult(
            state=self.state,
            history=list(self.history),
            change_set=self.change_set,
            suggestion=self.suggestion,
            model=self.config.model,
            committed=self.committed,
            commit_hash=self.commit_hash,
            pushed=self.pushed,
            error=error,
        )

    # ------------------------------------------------------------
    # State handlers
    # ------------------------------------------------------------

    def _verify(self) -> WorkflowState:
        echo = self.console.echo
        echo("Verifying prerequisites...")
        git.ensure_repository(self.repo_path)
        echo("  Git repository confirmed")

        echo(f"  Testing connection to Ollama at {self.config.endpoint}...")
        available = self.client.list_models()
        echo(f"  Connected successfully ({len(available)} models available)")

        if self.config.model not in available:
            echo(f"  Model '{self.config.model}' not found.")
            if available and not self.options.interactive:
                selected = available[0]
                echo(f"  Using first available model: {selected}")
            else:
                selected = select_model(available, self.console)
            self.config = self.config.model_copy(update={"model": selected})

        echo(f"  Using AI model: {self.config.model}")
        return WorkflowState.STAGING

    def _stage(self) -> WorkflowState:
        echo = self.console.echo
        if self.options.skip_stage:
            echo("\nStep 1: Using already staged changes...")
            return WorkflowState.SCANNING

        echo("\nStep 1: Staging changes (git add .)...")
        try:
            unstaged = git.get_unstaged_files(self.repo_path)
        except GitError as e:
            echo(f"  Warning: Could not list unstaged files: {e}", err=True)
        else:
            if unstaged:
                echo(f"  Found {len(unstaged)} unstaged file(s):")
                for name in unstaged[:UNSTAGED_PREVIEW_LIMIT]:
                    echo(f"    - {name}")
                if len(unstaged) > UNSTAGED_PREVIEW_LIMIT:
                    echo(f"    ... and {len(unstaged) - UNSTAGED_PREVIEW_LIMIT} more files")
            else:
                echo("  No unstaged files found")

        if self.options.dry_run:
            echo("  [DRY RUN] Would run: git add .")
        else:
            git.stage_all(self.repo_path)
            echo("  Changes staged successfully")
        return WorkflowState.SCANNING

    def _scan(self) -> WorkflowState:
        echo = self.console.echo
        echo("\nStep 2: Scanning staged changes...")
        self.change_set = scan_staged_changes(self.repo_path)

        if not self.change_set:
            echo("No staged changes found. Nothing to commit.")
            if self.options.skip_stage:
                echo("Tip: Stage your changes first with 'git add <files>'")
            else:
                echo("Tip: Make sure you have changes to commit")
            return WorkflowState.DONE

        echo(render_change_summary(self.change_set))
        return WorkflowState.PROMPTING

    def _build_prompt(self) -> WorkflowState:
        self.prompt = build_prompt(self.change_set, self.config)
        logger.debug("Prompt is %d characters", len(self.prompt))
        return WorkflowState.INFERRING

    def _infer(self) -> WorkflowState:
        echo = self.console.echo
        echo(f"\nStep 3: Generating AI commit message (using {self.config.model})...")
        raw = self.client.generate(
            self.config.model,
            self.prompt,
            temperature=self.config.temperature,
            max_tokens=self.config.max_tokens,
        )
        self.suggestion = parse_suggestion(raw, self.change_set)
        if not self.suggestion.subject:
            raise WorkflowAbort("Failed to generate commit message: the model returned an empty message")

        echo(render_suggestion(self.suggestion))

        if not self.options.commit:
            echo("\nTo commit with this message, run:")
            echo(f"  {git.format_commit_command(self.suggestion.subject, self.suggestion.body)}")
            return WorkflowState.DONE
        return WorkflowState.AWAITING_COMMIT_APPROVAL

    def _await_commit_approval(self) -> WorkflowState:
        echo = self.console.echo
        echo("\nStep 4: Committing changes...")
        if self._auto_approved():
            return WorkflowState.COMMITTING

        if is_affirmative(self.console.prompt("Do you want to commit with this message? (Y/n)")):
            return WorkflowState.COMMITTING

        echo("  Commit cancelled by user. You can commit manually with:")
        echo(f"  {git.format_commit_command(self.suggestion.subject, self.suggestion.body)}")
        return WorkflowState.DONE

    def _commit(self) -> WorkflowState:
        echo = self.console.echo
        command = git.format_commit_command(self.suggestion.subject, self.suggestion.body)
        if self.options.dry_run:
            echo(f"  [DRY RUN] Would run: {command}")
            return WorkflowState.AWAITING_PUSH_APPROVAL

        git.commit(self.suggestion.subject, self.suggestion.body, self.repo_path)
        self.committed = True
        echo("  Changes committed successfully")

        try:
            self.commit_hash = git.get_last_commit_hash(self.repo_path)
            echo(f"  Commit hash: {self.commit_hash}")
        except GitError as e:
            logger.debug("Could not read commit hash: %s", e)
        return WorkflowState.AWAITING_PUSH_APPROVAL

    def _await_push_approval(self) -> WorkflowState:
        echo = self.console.echo
        if self.options.skip_push:
            echo("\nStep 5: Skipping push (--skip-push flag used)")
            return WorkflowState.DONE

        echo("\nStep 5: Pushing to remote...")
        try:
            remotes = git.get_remotes(self.repo_path)
        except GitError as e:
            logger.debug("Could not list remotes: %s", e)
            remotes = []

        if not remotes:
            echo("  No remote repository configured, skipping push")
            echo("  Add a remote with: git remote add origin <url>")
            return WorkflowState.DONE

        echo(f"  Found remote(s): {', '.join(remotes)}")
        try:
            echo(f"  Current branch: {git.get_branch(self.repo_path)}")
        except GitError as e:
            logger.debug("Could not read branch: %s", e)

        if self._auto_approved() or is_affirmative(self.console.prompt("Do you want to push to remote? (Y/n)")):
            return WorkflowState.PUSHING

        echo("  Push skipped. You can push manually with: git push")
        return WorkflowState.DONE

    def _push(self) -> WorkflowState:
        echo = self.console.echo
        if self.options.dry_run:
            echo("  [DRY RUN] Would run: git push")
            return WorkflowState.DONE

        try:
            git.push(self.repo_path)
        except GitError as e:
            echo(f"  Warning: Failed to push: {e}", err=True)
            echo("  You can push manually later with: git push")
            return WorkflowState.DONE

        self.pushed = True
        echo("  Changes pushed successfully")
        return WorkflowState.DONE
