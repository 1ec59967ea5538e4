"""Tests for aigitauto.workflow module."""

from unittest.mock import MagicMock

import pytest

from aigitauto.config import Config
from aigitauto.git import GitError, NotARepositoryError
from aigitauto.llm import BackendUnavailableError
from aigitauto.models import ChangeSet
from aigitauto.workflow import (
    UNSTAGED_PREVIEW_LIMIT,
    Workflow,
    WorkflowAbort,
    WorkflowOptions,
    WorkflowState,
    is_affirmative,
    select_model,
)


class FakeConsole:
    """Console that records output and replays scripted answers."""

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.questions = []
        self.lines = []
        self.errors = []

    def echo(self, message: str = "", err: bool = False) -> None:
        (self.errors if err else self.lines).append(message)

    def prompt(self, question: str) -> str:
        self.questions.append(question)
        return self.answers.pop(0) if self.answers else ""

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def client():
    client = MagicMock()
    client.list_models.return_value = ["llama2", "mistral"]
    client.generate.return_value = "feat: add X\n\nDetails here."
    return client


@pytest.fixture
def git_mocks(mocker, sample_change_set):
    """Patch every git call the workflow makes."""
    mocks = {
        "ensure": mocker.patch("aigitauto.git.ensure_repository"),
        "unstaged": mocker.patch("aigitauto.git.get_unstaged_files", return_value=["a.go"]),
        "stage": mocker.patch("aigitauto.git.stage_all"),
        "commit": mocker.patch("aigitauto.git.commit"),
        "hash": mocker.patch("aigitauto.git.get_last_commit_hash", return_value="abc1234"),
        "remotes": mocker.patch("aigitauto.git.get_remotes", return_value=["origin"]),
        "branch": mocker.patch("aigitauto.git.get_branch", return_value="main"),
        "push": mocker.patch("aigitauto.git.push"),
        "scan": mocker.patch("aigitauto.workflow.scan_staged_changes", return_value=sample_change_set),
    }
    return mocks


def run_workflow(client, console=None, **options):
    console = console or FakeConsole()
    workflow = Workflow(Config(), console, WorkflowOptions(**options), client)
    return workflow.run(), console


class TestIsAffirmative:
    """Tests for is_affirmative function."""

    @pytest.mark.parametrize("answer", ["", "y", "Y", "yes", " YES "])
    def test_yes(self, answer):
        assert is_affirmative(answer) is True

    @pytest.mark.parametrize("answer", ["n", "no", "nope", "q"])
    def test_no(self, answer):
        assert is_affirmative(answer) is False


class TestSelectModel:
    """Tests for select_model function."""

    def test_no_models_aborts(self):
        """Test that an empty model list aborts with a pull hint."""
        with pytest.raises(WorkflowAbort, match="ollama pull"):
            select_model([], FakeConsole())

    def test_empty_input_selects_first(self):
        """Test that pressing Enter selects the first model."""
        console = FakeConsole([""])

        assert select_model(["llama3.2", "mistral"], console) == "llama3.2"

    def test_invalid_input_selects_first(self):
        """Test that invalid input falls back to the first model."""
        assert select_model(["llama3.2", "mistral"], FakeConsole(["abc"])) == "llama3.2"
        assert select_model(["llama3.2", "mistral"], FakeConsole(["9"])) == "llama3.2"
        assert select_model(["llama3.2", "mistral"], FakeConsole(["0"])) == "llama3.2"

    def test_valid_selection(self):
        """Test choosing a model by number."""
        assert select_model(["llama3.2", "mistral"], FakeConsole(["2"])) == "mistral"

    def test_lists_annotations(self):
        """Test that models are listed with their annotations."""
        console = FakeConsole([""])

        select_model(["llama3.2", "tiny"], console)

        assert "  1. llama3.2 (Recommended - Great for code)" in console.lines
        assert "  2. tiny" in console.lines


class TestWorkflowHappyPath:
    """Tests for a full successful run."""

    def test_full_run_history(self, client, git_mocks):
        """Test that every state is visited in order."""
        result, _ = run_workflow(client, force=True)

        assert result.state == WorkflowState.DONE
        assert result.ok
        assert result.history == [
            WorkflowState.IDLE,
            WorkflowState.VERIFYING,
            WorkflowState.STAGING,
            WorkflowState.SCANNING,
            WorkflowState.PROMPTING,
            WorkflowState.INFERRING,
            WorkflowState.AWAITING_COMMIT_APPROVAL,
            WorkflowState.COMMITTING,
            WorkflowState.AWAITING_PUSH_APPROVAL,
            WorkflowState.PUSHING,
            WorkflowState.DONE,
        ]

    def test_commits_and_pushes(self, client, git_mocks):
        """Test the git side effects of a full run."""
        result, console = run_workflow(client, force=True)

        git_mocks["stage"].assert_called_once()
        git_mocks["commit"].assert_called_once_with("feat: add X", "Details here.", Config().repo_path)
        git_mocks["push"].assert_called_once()
        assert result.committed is True
        assert result.commit_hash == "abc1234"
        assert result.pushed is True
        assert result.suggestion.subject == "feat: add X"
        assert result.suggestion.files_affected == ["a.go", "b.txt"]
        assert "Current branch: main" in console.output

    def test_generate_uses_config(self, client, git_mocks):
        """Test that the model call uses the configured parameters."""
        run_workflow(client, force=True)

        args, kwargs = client.generate.call_args
        assert args[0] == "llama2"
        assert "a.go" in args[1]
        assert kwargs == {"temperature": 0.7, "max_tokens": 150}

    def test_interactive_approvals(self, client, git_mocks):
        """Test that empty answers approve commit and push."""
        console = FakeConsole(["", ""])

        result, console = run_workflow(client, console)

        assert len(console.questions) == 2
        assert result.pushed is True


class TestWorkflowEarlyExits:
    """Tests for runs that end before pushing."""

    def test_nothing_staged(self, client, git_mocks):
        """Test that an empty ChangeSet ends the run successfully."""
        git_mocks["scan"].return_value = ChangeSet()

        result, console = run_workflow(client, force=True)

        assert result.state == WorkflowState.DONE
        assert result.history[-2:] == [WorkflowState.SCANNING, WorkflowState.DONE]
        assert "Nothing to commit" in console.output
        client.generate.assert_not_called()
        git_mocks["commit"].assert_not_called()

    def test_commit_declined(self, client, git_mocks):
        """Test that declining shows the manual command and does not commit."""
        result, console = run_workflow(client, FakeConsole(["n"]))

        assert result.state == WorkflowState.DONE
        assert result.committed is False
        git_mocks["commit"].assert_not_called()
        git_mocks["push"].assert_not_called()
        assert "git commit -m 'feat: add X' -m 'Details here.'" in console.output

    def test_push_declined(self, client, git_mocks):
        """Test that declining the push keeps the commit."""
        result, _ = run_workflow(client, FakeConsole(["y", "no"]))

        assert result.committed is True
        assert result.pushed is False
        git_mocks["push"].assert_not_called()

    def test_skip_stage(self, client, git_mocks):
        """Test that skip_stage leaves the index alone."""
        run_workflow(client, force=True, skip_stage=True)

        git_mocks["stage"].assert_not_called()
        git_mocks["unstaged"].assert_not_called()

    def test_skip_push(self, client, git_mocks):
        """Test that skip_push ends the run after committing."""
        result, _ = run_workflow(client, force=True, skip_push=True)

        assert result.committed is True
        assert WorkflowState.PUSHING not in result.history
        git_mocks["remotes"].assert_not_called()
        git_mocks["push"].assert_not_called()

    def test_no_remote(self, client, git_mocks):
        """Test that a repository without remotes skips the push."""
        git_mocks["remotes"].return_value = []

        result, console = run_workflow(client, force=True)

        assert result.ok
        assert result.pushed is False
        assert "No remote repository configured" in console.output
        git_mocks["push"].assert_not_called()

    def test_suggest_only(self, client, git_mocks):
        """Test that commit=False stops after the suggestion."""
        result, console = run_workflow(client, commit=False, skip_stage=True)

        assert result.ok
        assert result.history[-2:] == [WorkflowState.INFERRING, WorkflowState.DONE]
        assert "To commit with this message, run:" in console.output
        git_mocks["commit"].assert_not_called()


class TestWorkflowDryRun:
    """Tests for dry-run mode."""

    def test_dry_run_changes_nothing(self, client, git_mocks):
        """Test that dry-run reports actions without running them."""
        result, console = run_workflow(client, dry_run=True, force=True)

        assert result.ok
        git_mocks["stage"].assert_not_called()
        git_mocks["commit"].assert_not_called()
        git_mocks["push"].assert_not_called()
        assert console.questions == []
        assert "[DRY RUN] Would run: git add ." in console.output
        assert "[DRY RUN] Would run: git commit -m 'feat: add X' -m 'Details here.'" in console.output
        assert "[DRY RUN] Would run: git push" in console.output

    def test_interactive_dry_run_still_asks(self, client, git_mocks):
        """Test that an interactive dry run asks before each step."""
        result, console = run_workflow(client, FakeConsole(["y", "y"]), dry_run=True)

        assert result.ok
        assert len(console.questions) == 2
        git_mocks["commit"].assert_not_called()
        git_mocks["push"].assert_not_called()
        assert "[DRY RUN] Would run: git push" in console.output

    def test_interactive_dry_run_decline(self, client, git_mocks):
        """Test that declining in a dry run stops before the commit step."""
        result, console = run_workflow(client, FakeConsole(["n"]), dry_run=True)

        assert result.ok
        assert WorkflowState.COMMITTING not in result.history
        assert "[DRY RUN] Would run: git commit" not in console.output


class TestWorkflowUnstagedPreview:
    """Tests for the unstaged file preview."""

    def test_preview_is_limited(self, client, git_mocks):
        """Test that only the first files are listed."""
        git_mocks["unstaged"].return_value = [f"f{i}.py" for i in range(8)]

        _, console = run_workflow(client, force=True)

        assert "    - f4.py" in console.lines
        assert "    - f5.py" not in console.lines
        assert f"    ... and {8 - UNSTAGED_PREVIEW_LIMIT} more files" in console.lines

    def test_no_unstaged(self, client, git_mocks):
        """Test the message when nothing is unstaged."""
        git_mocks["unstaged"].return_value = []

        _, console = run_workflow(client, force=True)

        assert "  No unstaged files found" in console.lines


class TestWorkflowModelSelection:
    """Tests for model selection during verification."""

    def test_missing_model_prompts(self, client, git_mocks):
        """Test that a missing model triggers selection."""
        client.list_models.return_value = ["llama3.2", "mistral"]

        result, console = run_workflow(client, FakeConsole(["2", "", ""]))

        assert result.model == "mistral"
        assert client.generate.call_args[0][0] == "mistral"

    def test_no_models_aborts(self, client, git_mocks):
        """Test that a server with no models aborts."""
        client.list_models.return_value = []

        result, _ = run_workflow(client, force=True)

        assert result.state == WorkflowState.ABORTED
        assert "ollama pull" in result.error

    def test_non_interactive_picks_first_model(self, client, git_mocks):
        """Test that a non-interactive run uses the first model without asking."""
        client.list_models.return_value = ["llama3.2", "mistral"]

        result, console = run_workflow(client, interactive=False)

        assert result.ok
        assert result.model == "llama3.2"
        assert console.questions == []
        assert "  Using first available model: llama3.2" in console.lines

    def test_non_interactive_no_models_aborts(self, client, git_mocks):
        """Test that a non-interactive run with no models still aborts."""
        client.list_models.return_value = []

        result, _ = run_workflow(client, interactive=False)

        assert result.state == WorkflowState.ABORTED
        assert "ollama pull" in result.error


class TestWorkflowFailures:
    """Tests for fatal and non-fatal failures."""

    def test_not_a_repository(self, client, git_mocks):
        """Test that running outside a repo aborts during verification."""
        git_mocks["ensure"].side_effect = NotARepositoryError("Not in a git repository")

        result, _ = run_workflow(client, force=True)

        assert result.state == WorkflowState.ABORTED
        assert result.history == [WorkflowState.IDLE, WorkflowState.VERIFYING, WorkflowState.ABORTED]
        assert "Not in a git repository" in result.error
        assert not result.ok

    def test_backend_unavailable(self, client, git_mocks):
        """Test that an unreachable backend aborts."""
        client.list_models.side_effect = BackendUnavailableError("Connection refused")

        result, _ = run_workflow(client, force=True)

        assert result.state == WorkflowState.ABORTED
        assert result.error.startswith("Prerequisite check failed")

    def test_generation_failure(self, client, git_mocks):
        """Test that a failed generation aborts without committing."""
        client.generate.side_effect = BackendUnavailableError("timed out")

        result, _ = run_workflow(client, force=True)

        assert result.state == WorkflowState.ABORTED
        assert result.history[-2] == WorkflowState.INFERRING
        assert result.error.startswith("Failed to generate commit message")
        git_mocks["commit"].assert_not_called()

    def test_empty_generation_aborts(self, client, git_mocks):
        """Test that an empty model reply aborts."""
        client.generate.return_value = "   "

        result, _ = run_workflow(client, force=True)

        assert result.state == WorkflowState.ABORTED
        git_mocks["commit"].assert_not_called()

    def test_stage_failure(self, client, git_mocks):
        """Test that a failing git add aborts."""
        git_mocks["stage"].side_effect = GitError("index.lock exists")

        result, _ = run_workflow(client, force=True)

        assert result.state == WorkflowState.ABORTED
        assert result.error == "Failed to stage changes: index.lock exists"

    def test_commit_failure(self, client, git_mocks):
        """Test that a failing commit aborts."""
        git_mocks["commit"].side_effect = GitError("hook rejected")

        result, _ = run_workflow(client, force=True)

        assert result.state == WorkflowState.ABORTED
        assert result.committed is False
        git_mocks["push"].assert_not_called()

    def test_push_failure_is_warning(self, client, git_mocks):
        """Test that a failed push still ends the run successfully."""
        git_mocks["push"].side_effect = GitError("rejected")

        result, console = run_workflow(client, force=True)

        assert result.state == WorkflowState.DONE
        assert result.committed is True
        assert result.pushed is False
        assert any("Failed to push" in line for line in console.errors)
