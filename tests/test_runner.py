"""Tests for pushbrief.git.runner module."""

import shutil
import subprocess
from unittest.mock import MagicMock

import pytest

from pushbrief.git import CommandResult, GitError, GitRepository, is_inside_work_tree, run_command


class TestRunCommand:
    """Tests for run_command function."""

    def test_successful_command(self, mocker, temp_dir):
        """Test stdout is returned untouched on success."""
        mock_result = MagicMock(stdout=" M file.py\n", stderr="", returncode=0)
        mock_run = mocker.patch("subprocess.run", return_value=mock_result)

        result = run_command(["status", "--porcelain"], temp_dir)

        assert result == CommandResult(stdout=" M file.py\n", success=True, stderr="")
        args, kwargs = mock_run.call_args
        assert args[0] == ["git", "status", "--porcelain"]
        assert kwargs["cwd"] == str(temp_dir)

    def test_failed_command_does_not_raise(self, mocker, temp_dir):
        """Test a non-zero exit is reported as a failed result."""
        mock_result = MagicMock(stdout="", stderr="fatal: bad revision", returncode=128)
        mocker.patch("subprocess.run", return_value=mock_result)

        result = run_command(["log"], temp_dir)

        assert not result.success
        assert result.stderr == "fatal: bad revision"

    def test_git_not_found_raises_error(self, mocker, temp_dir):
        """Test that missing git raises GitError."""
        mocker.patch("subprocess.run", side_effect=FileNotFoundError())

        with pytest.raises(GitError) as exc_info:
            run_command(["status"], temp_dir)

        assert "not installed" in str(exc_info.value)

    def test_stdin_is_not_inherited(self, mocker, temp_dir):
        """Test git never waits on the caller's stdin."""
        mock_run = mocker.patch(
            "subprocess.run", return_value=MagicMock(stdout="", stderr="", returncode=0)
        )

        run_command(["status"], temp_dir)

        assert mock_run.call_args.kwargs["stdin"] == subprocess.DEVNULL


class TestIsInsideWorkTree:
    """Tests for is_inside_work_tree function."""

    def test_true_when_git_says_true(self, temp_dir):
        """Test a work tree is detected."""
        runner = MagicMock(return_value=CommandResult(stdout="true\n", success=True))

        assert is_inside_work_tree(temp_dir, runner) is True
        runner.assert_called_once_with(["rev-parse", "--is-inside-work-tree"], temp_dir)

    def test_false_when_command_fails(self, temp_dir):
        """Test a failing check means not a repository."""
        runner = MagicMock(return_value=CommandResult(stdout="", success=False))

        assert is_inside_work_tree(temp_dir, runner) is False

    def test_false_inside_git_dir(self, temp_dir):
        """Test 'false' (e.g. inside .git) is not a work tree."""
        runner = MagicMock(return_value=CommandResult(stdout="false\n", success=True))

        assert is_inside_work_tree(temp_dir, runner) is False

    def test_missing_directory_skips_git(self, temp_dir):
        """Test a path that is not a directory is rejected without running git."""
        runner = MagicMock()

        assert is_inside_work_tree(temp_dir / "missing", runner) is False
        runner.assert_not_called()

    def test_git_not_installed(self, temp_dir):
        """Test a missing git binary means not a repository."""
        runner = MagicMock(side_effect=GitError("Git is not installed or not in PATH."))

        assert is_inside_work_tree(temp_dir, runner) is False


def _git(cwd, *args):
    subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
    )


class TestNonUtf8Output:
    """Tests for git output that is not valid UTF-8."""

    def test_decodes_with_replacement(self, mocker, temp_dir):
        """Test output is decoded as UTF-8 with undecodable bytes replaced."""
        mock_run = mocker.patch(
            "subprocess.run", return_value=MagicMock(stdout="", stderr="", returncode=0)
        )

        run_command(["diff"], temp_dir)

        assert mock_run.call_args.kwargs["encoding"] == "utf-8"
        assert mock_run.call_args.kwargs["errors"] == "replace"

    @pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")
    def test_latin1_file_does_not_abort_diffs(self, temp_dir):
        """Test a Latin-1 encoded file is diffed alongside UTF-8 files."""
        _git(temp_dir, "init", "-q")
        (temp_dir / "ok.txt").write_text("hello\n")
        (temp_dir / "latin.txt").write_bytes(b"caf\xe9\n")
        _git(temp_dir, "add", ".")
        _git(temp_dir, "commit", "-q", "-m", "initial")
        (temp_dir / "ok.txt").write_text("hello world\n")
        (temp_dir / "latin.txt").write_bytes(b"na\xefve\n")

        diffs = GitRepository(temp_dir).get_diffs()

        assert sorted(d.path for d in diffs) == ["latin.txt", "ok.txt"]
        latin = next(d for d in diffs if d.path == "latin.txt")
        assert "+na\ufffdve" in latin.patch
