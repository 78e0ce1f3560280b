"""Git command runner.

Contains:
- CommandResult: Captured output of one git invocation
- run_command: Run a git command in a working directory
- is_inside_work_tree: Check whether a path is inside a git work tree
"""

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence, Union

from loguru import logger

from pushbrief.git.exceptions import GitError


@dataclass(frozen=True)
class CommandResult:
    """Result of a single git invocation."""

    stdout: str
    success: bool
    stderr: str = ""


# Signature shared by run_command and the fakes used in tests
Runner = Callable[[Sequence[str], Union[str, Path]], CommandResult]


def run_command(args: Sequence[str], cwd: Union[str, Path]) -> CommandResult:
    """Run a git command and capture its output.

    Unlike the higher level helpers, this never raises on a non-zero exit
    status; callers decide whether a failure is fatal.

    Args:
        args: Arguments to pass to git (without the leading "git").
        cwd: Working directory for the command.

    Returns:
        The captured stdout, success flag and stderr.

    Raises:
        GitError: If git is not installed.
    """
    argv = ["git", *args]
    logger.debug("Running {} in {}", " ".join(argv), cwd)
    try:
        result = subprocess.run(
            argv,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            stdin=subprocess.DEVNULL,
        )
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")
    except NotADirectoryError:
        return CommandResult(stdout="", success=False, stderr=f"Not a directory: {cwd}")

    if result.returncode != 0:
        logger.debug("git exited with {}: {}", result.returncode, result.stderr.strip())
    return CommandResult(
        stdout=result.stdout,
        success=result.returncode == 0,
        stderr=result.stderr,
    )


def is_inside_work_tree(path: Union[str, Path], runner: Runner = run_command) -> bool:
    """Check whether the path is inside a git work tree.

    Args:
        path: Directory to check.
        runner: Command runner to use.

    Returns:
        True if git reports the path as being inside a work tree.
    """
    if not Path(path).is_dir():
        return False
    try:
        result = runner(["rev-parse", "--is-inside-work-tree"], path)
    except GitError:
        return False
    return result.success and result.stdout.strip() == "true"
