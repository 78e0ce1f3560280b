"""CLI commands that report on the git repository."""

import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer
import yaml

from pushbrief.cli.utils import (
    RULE,
    default_repo_path,
    echo_patch_window,
    open_repository,
    print_section,
    print_table,
    warn,
)
from pushbrief.formatters import changes_to_api, truncate_patch
from pushbrief.git import (
    GitError,
    GitRepository,
    NotAGitRepositoryError,
    is_staged_entry,
)

# Subcommand group for repository reports
git_app = typer.Typer(
    name="git",
    help="Show information about the git repository",
    add_completion=False,
)

DEFAULT_COMMIT_COUNT = 5


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"


def _show_repo_info(repo: GitRepository) -> None:
    try:
        info = repo.get_repo_info()
    except GitError as e:
        warn(f"Could not retrieve repository information: {e}")
        return

    print_section("Repository Information")
    print_table(
        ["Property", "Value"],
        [
            ["Remote URL", info.remote_url or "Not set"],
            ["Current Branch", info.current_branch],
            ["Total Commits", str(info.total_commits)],
        ],
    )

    if info.contributors:
        print_section("Contributors")
        print_table(["Name", "Commits"], [[c.name, str(c.commits)] for c in info.contributors])


def _show_commits(repo: GitRepository, count: int) -> None:
    try:
        commits = repo.get_latest_commits(count)
    except GitError as e:
        warn(f"Could not retrieve commit information: {e}")
        return

    print_section(f"Latest {count} Commits")
    if not commits:
        typer.echo("No commits found in this repository.")
        return

    print_table(
        ["Hash", "Author", "Date", "Message"],
        [[c.short_hash, c.author, c.date, c.message] for c in commits],
    )


def _show_changes(repo: GitRepository, staged: bool) -> None:
    try:
        entries = repo.get_changed_files()
    except GitError as e:
        warn(f"Could not retrieve changed files: {e}")
        return

    if staged:
        entries = [e for e in entries if is_staged_entry(e)]

    print_section("Staged Files" if staged else "Changed Files")
    if not entries:
        typer.secho(
            "No staged changes." if staged else "Working directory is clean. No changes detected.",
            fg=typer.colors.GREEN,
        )
        return

    print_table(["Status", "File"], [[e.status_label, e.path] for e in entries])


def _show_diffs(repo: GitRepository, staged: bool, diff_lines: int) -> None:
    try:
        diffs = repo.get_diffs(staged=staged)
    except GitError as e:
        warn(f"Could not retrieve diffs: {e}")
        return

    print_section("Diffs for Staged Files" if staged else "Diffs for Changed Files")
    if not diffs:
        typer.secho(
            "No staged changes to display." if staged else "No changes to display.",
            fg=typer.colors.GREEN,
        )
        return

    for index, diff in enumerate(diffs):
        if index > 0:
            typer.echo("")

        typer.echo(
            typer.style("File:", fg=typer.colors.GREEN)
            + f" {diff.path} "
            + typer.style(f"({diff.status_label})", fg=typer.colors.YELLOW)
        )
        typer.secho(RULE, fg=typer.colors.GREEN)

        window = truncate_patch(diff.patch, diff_lines)
        if window.truncated:
            typer.secho(
                f"Showing {window.shown_lines} of {window.total_lines} lines. "
                "Use --diff-lines=0 to show all.",
                fg=typer.colors.YELLOW,
            )
        echo_patch_window(window)

        typer.secho(RULE, fg=typer.colors.GREEN)


@git_app.command("info")
def info_command(
    repo_path: Optional[Path] = typer.Option(
        None,
        "--repo-path",
        "-r",
        help="Path to the git repository (defaults to the current directory)",
    ),
    show_commits: Optional[int] = typer.Option(
        None,
        "--show-commits",
        "-c",
        min=1,
        help="Number of commits to show",
    ),
    show_changes: bool = typer.Option(False, "--show-changes", help="Show changed files"),
    show_repo_info: bool = typer.Option(False, "--show-repo-info", help="Show repository information"),
    show_diffs: bool = typer.Option(
        False,
        "--show-diffs",
        "-d",
        help="Show diffs (patches) for changed files",
    ),
    diff_lines: int = typer.Option(
        100,
        "--diff-lines",
        min=0,
        help="Maximum number of lines to show per diff (0 for unlimited)",
    ),
    staged: bool = typer.Option(
        False,
        "--staged",
        "-s",
        help="Show staged changes instead of working directory changes",
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Show all information"),
) -> None:
    """Display information about the git repository."""
    if show_all:
        show_commits = show_commits or DEFAULT_COMMIT_COUNT
        show_changes = show_repo_info = show_diffs = True

    # If no specific options are provided, show the overview
    if not (show_commits or show_changes or show_repo_info or show_diffs):
        show_commits = DEFAULT_COMMIT_COUNT
        show_changes = show_repo_info = True

    repo = open_repository(repo_path)

    if show_repo_info:
        _show_repo_info(repo)
    if show_commits:
        _show_commits(repo, show_commits)
    if show_changes:
        _show_changes(repo, staged)
    if show_diffs:
        _show_diffs(repo, staged, diff_lines)


def _emit(data, output_format: OutputFormat) -> None:
    if output_format == OutputFormat.YAML:
        typer.echo(yaml.safe_dump(data, sort_keys=False, allow_unicode=True).rstrip())
    else:
        typer.echo(json.dumps(data, indent=4, ensure_ascii=False))


@git_app.command("api")
def api_command(
    repo_path: Optional[Path] = typer.Option(
        None,
        "--repo-path",
        "-r",
        help="Path to the git repository (defaults to the current directory)",
    ),
    staged: bool = typer.Option(
        False,
        "--staged",
        "-s",
        help="Show staged changes instead of working directory changes",
    ),
    include_diffs: bool = typer.Option(False, "--include-diffs", "-d", help="Include diffs in the output"),
    output_format: OutputFormat = typer.Option(
        OutputFormat.JSON,
        "--format",
        "-f",
        case_sensitive=False,
        help="Output format",
    ),
) -> None:
    """Print the changed files (and optionally their diffs) as JSON or YAML."""
    try:
        repo = GitRepository(repo_path or default_repo_path())
    except NotAGitRepositoryError as e:
        _emit({"error": str(e), "code": "not_git_repository"}, output_format)
        raise typer.Exit(1)

    try:
        entries = repo.get_changed_files()
        diffs = repo.get_diffs(staged=staged, entries=entries) if include_diffs else None
        if staged and diffs is None:
            entries = [e for e in entries if is_staged_entry(e)]
    except GitError as e:
        _emit({"error": str(e), "code": "general_error"}, output_format)
        raise typer.Exit(1)

    _emit(changes_to_api(entries, diffs), output_format)
