"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from aigitauto.config import ENV_VARS
from aigitauto.models import ChangeKind, ChangeSet, FileChange


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep tests away from the real ~/.aigitauto and environment overrides."""
    for env_var in ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.setattr("aigitauto.global_config._CONFIG_DIR", tmp_path / ".aigitauto")
    return tmp_path / ".aigitauto"


def make_diff(path: str, added: int, removed: int) -> str:
    """Build a unified diff with the given number of added and removed lines."""
    lines = [
        f"diff --git a/{path} b/{path}",
        "index 1234567..abcdefg 100644",
        f"--- a/{path}",
        f"+++ b/{path}",
        f"@@ -1,{removed + 1} +1,{added + 1} @@",
        " context",
    ]
    lines += [f"-old line {i}" for i in range(removed)]
    lines += [f"+new line {i}" for i in range(added)]
    return "\n".join(lines) + "\n"


@pytest.fixture
def sample_diff():
    """Sample staged diff for a modified file."""
    return """diff --git a/existing_file.py b/existing_file.py
index 1234567..abcdefg 100644
--- a/existing_file.py
+++ b/existing_file.py
@@ -1,5 +1,8 @@
 def main():
-    print("old")
+    print("new")
+
+def helper():
+    return True
"""


@pytest.fixture
def sample_change_set():
    """Two staged files: a.go modified (+5 -2) and b.txt added (+10 -0)."""
    return ChangeSet([
        FileChange("a.go", ChangeKind.MODIFIED, make_diff("a.go", 5, 2)),
        FileChange("b.txt", ChangeKind.ADDED, make_diff("b.txt", 10, 0)),
    ])


@pytest.fixture
def mock_git_result():
    """Factory for subprocess.run results."""
    def _make(stdout: str = "", returncode: int = 0):
        result = MagicMock()
        result.stdout = stdout
        result.returncode = returncode
        return result
    return _make


@pytest.fixture
def diff_factory():
    """Factory building unified diffs with given added/removed line counts."""
    return make_diff
