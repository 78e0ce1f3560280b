"""Shared test fixtures and configuration."""

import tempfile
from pathlib import Path

import pytest

from pushbrief.git import CommandResult, GitRepository


ENV_VARS = [
    "OPENAI_API_KEY",
    "OPENAI_BASE_URI",
    "ANTHROPIC_API_KEY",
    "JIRA_HOST",
    "JIRA_USERNAME",
    "JIRA_PASSWORD",
    "JIRA_DEFAULT_ISSUE",
    "JIRA_DEFAULT_PROJECT",
    "PUSHBRIEF_LOG_LEVEL",
]


class FakeRunner:
    """Replays git output keyed by argv instead of running git.

    Values in ``responses`` may be a string (successful stdout), a
    CommandResult or an exception to raise. Unknown commands fail.
    """

    def __init__(self, responses=None, inside_work_tree=True):
        self.responses = {tuple(k): v for k, v in (responses or {}).items()}
        self.inside_work_tree = inside_work_tree
        self.calls = []

    def __call__(self, args, cwd):
        key = tuple(args)
        self.calls.append(key)

        if key in self.responses:
            value = self.responses[key]
            if isinstance(value, Exception):
                raise value
            if isinstance(value, str):
                return CommandResult(stdout=value, success=True)
            return value

        if key == ("rev-parse", "--is-inside-work-tree"):
            if self.inside_work_tree:
                return CommandResult(stdout="true\n", success=True)
            return CommandResult(stdout="", success=False, stderr="fatal: not a git repository")

        return CommandResult(stdout="", success=False, stderr=f"unexpected: git {' '.join(args)}")

    def called(self, *args):
        return tuple(args) in self.calls


@pytest.fixture(autouse=True)
def isolated_config(mocker, monkeypatch, tmp_path):
    """Keep tests away from ~/.pushbrief and the caller's environment."""
    config_dir = tmp_path / ".pushbrief"
    mocker.patch("pushbrief.global_config._CONFIG_DIR", config_dir)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return config_dir


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_repo(temp_dir):
    """Build a GitRepository over a FakeRunner with the given responses."""

    def _make(responses=None):
        runner = FakeRunner(responses)
        return GitRepository(temp_dir, runner=runner), runner

    return _make


@pytest.fixture
def sample_status():
    """Porcelain status output with every kind of change."""
    return (
        " M src/app.py\n"
        "A  src/new.py\n"
        "D  old.py\n"
        "R  a.py -> b.py\n"
        "?? notes.txt\n"
    )


@pytest.fixture
def sample_diff():
    """Combined working tree diff for two files."""
    return """diff --git a/src/app.py b/src/app.py
index 1234567..abcdefg 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,4 @@
 def main():
-    print("old")
+    print("new")
+    return 0
diff --git a/old.py b/old.py
deleted file mode 100644
index 89abcde..0000000
--- a/old.py
+++ /dev/null
@@ -1,2 +0,0 @@
-x = 1
-y = 2
"""


@pytest.fixture
def sample_commit_json_dict():
    """Sample commit message JSON as dictionary."""
    return {
        "title": "Add export command",
        "body_bullets": [
            "Add export command to the CLI",
            "Write exported data as CSV",
        ],
    }
