"""Shared utility functions for CLI commands."""

import os
from pathlib import Path
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.table import Table

from pushbrief.config import JiraSettings, get_default_issue, get_default_project
from pushbrief.formatters import DiffLineKind, PatchWindow, classify_diff_line
from pushbrief.git import GitError, GitRepository, NotAGitRepositoryError
from pushbrief.jira import JiraClient, JiraError, issue_key_from_branch, normalize_branch_name


RULE = "-" * 80

_LINE_COLORS = {
    DiffLineKind.ADDITION: typer.colors.GREEN,
    DiffLineKind.DELETION: typer.colors.RED,
    DiffLineKind.HUNK_HEADER: typer.colors.CYAN,
}


def default_repo_path() -> Path:
    return Path(os.getcwd())


def open_repository(repo_path: Optional[Path]) -> GitRepository:
    """Open the repository or exit with the not-a-repository error.

    Raises:
        typer.Exit: If the path is not a git repository.
    """
    try:
        return GitRepository(repo_path or default_repo_path())
    except NotAGitRepositoryError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        typer.echo("Please make sure you are running this command in a git repository.", err=True)
        typer.echo("You can initialize a git repository with: git init", err=True)
        raise typer.Exit(1)


def print_section(title: str) -> None:
    typer.echo()
    typer.secho(title, bold=True)
    typer.secho("-" * len(title), bold=True)


def print_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
    table = Table(*headers, show_lines=False)
    for row in rows:
        table.add_row(*row)
    Console(highlight=False, soft_wrap=True).print(table)


def warn(message: str) -> None:
    typer.secho(f"[WARNING] {message}", fg=typer.colors.YELLOW, err=True)


def echo_diff_line(line: str) -> None:
    """Print a patch line colored by its kind."""
    kind = classify_diff_line(line)
    if kind == DiffLineKind.BLANK:
        typer.echo("")
        return
    color = _LINE_COLORS.get(kind)
    if color:
        typer.secho(line, fg=color)
    else:
        typer.echo(line)


def echo_patch_window(window: PatchWindow) -> None:
    for line in window.head:
        echo_diff_line(line)
    if window.truncated:
        typer.secho(window.marker, fg=typer.colors.YELLOW)
        for line in window.tail:
            echo_diff_line(line)


def choose(prompt: str, choices: Sequence[tuple[str, str]]) -> str:
    """Ask the user to pick one of several (key, label) choices by number.

    Returns:
        The key of the chosen entry.

    Raises:
        typer.Exit: If the choice is out of range.
    """
    for i, (_, label) in enumerate(choices, 1):
        typer.echo(f"  {i}. {label}")

    choice = typer.prompt(f"{prompt} (1-{len(choices)})", type=int, default=1)
    if choice < 1 or choice > len(choices):
        typer.echo("Invalid choice. Aborting.", err=True)
        raise typer.Exit(1)
    return choices[choice - 1][0]


def prompt_jira_settings(settings: JiraSettings) -> JiraSettings:
    """Prompt for any Jira setting that options, environment and config left empty."""
    host = settings.host
    username = settings.username
    password = settings.password

    if not host:
        typer.echo("Jira host not found. You can set JIRA_HOST in your environment or .env file.", err=True)
        host = typer.prompt("Enter your Jira host URL (e.g., https://your-domain.atlassian.net)")
    else:
        typer.echo(f"Using Jira host: {host}", err=True)

    if not username:
        typer.echo("Jira username not found. You can set JIRA_USERNAME in your environment or .env file.", err=True)
        username = typer.prompt("Enter your Jira username (email)")
    else:
        typer.echo(f"Using Jira username: {username}", err=True)

    if not password:
        typer.echo("Jira API token not found. You can set JIRA_PASSWORD in your environment or .env file.", err=True)
        password = typer.prompt("Enter your Jira API token or password", hide_input=True)

    return JiraSettings(host=host.strip(), username=username.strip(), password=password)


def select_issue_interactively(client: JiraClient, default_project: Optional[str]) -> Optional[str]:
    """Let the user pick a project (unless one is given) and one of its open issues.

    Raises:
        JiraError: If projects or issues cannot be listed.
    """
    project_key = default_project
    if project_key:
        typer.echo(f"Using default project: {project_key}", err=True)
    else:
        projects = client.get_projects()
        if not projects:
            warn("No Jira projects found.")
            return None
        typer.echo("Select a Jira project:")
        project_key = choose("Project", [(p.key, f"{p.key} - {p.name}") for p in projects])

    issues = client.get_issues(project_key, active_only=True)
    if not issues:
        warn(f"No open issues found for project {project_key}.")
        return None

    typer.echo("Select a Jira issue:")
    return choose(
        "Issue",
        [
            (i.key, f"{i.key} - {i.summary} ({i.status})" + (f" <{i.assignee}>" if i.assignee else ""))
            for i in issues
        ],
    )


def resolve_issue_key(
    repo: GitRepository,
    client: JiraClient,
    issue_key: Optional[str] = None,
    from_branch: bool = False,
    default_issue: Optional[str] = None,
) -> Optional[str]:
    """Find the Jira issue to work on.

    Tries, in order: the explicit key, the branch name (with --from-branch),
    the default issue (option or JIRA_DEFAULT_ISSUE), then interactive
    selection, falling back to manual entry if Jira cannot be listed.

    Returns:
        The issue key, or None if the user could not pick one.
    """
    if issue_key:
        return issue_key

    if from_branch:
        branch = repo.get_current_branch()
        key = issue_key_from_branch(branch)
        if key:
            typer.echo(f"Extracted issue key from branch name: {key}", err=True)
            return key
        warn(f"Could not extract issue key from branch name: {normalize_branch_name(branch)}")

    default_issue = get_default_issue(default_issue)
    if default_issue:
        typer.echo(f"Using default issue key: {default_issue}", err=True)
        return default_issue

    typer.echo("Please select a Jira project and issue:", err=True)
    try:
        return select_issue_interactively(client, get_default_project())
    except JiraError as e:
        typer.echo(f"Failed to get Jira projects or issues: {e}", err=True)
        return typer.prompt("Enter the Jira issue key manually (e.g., PROJECT-123)").strip() or None


def create_commit(repo: GitRepository, message: str, stage_all: bool = False) -> None:
    """Create a git commit with the given message.

    Args:
        repo: The repository.
        message: Full commit message.
        stage_all: Run ``git add --all`` first.

    Raises:
        GitError: If staging or committing fails.
    """
    if stage_all:
        typer.echo("Staging all changes...", err=True)
        result = repo.run(["add", "--all"])
        if not result.success:
            raise GitError(f"Failed to stage changes: {result.stderr.strip()}")

    typer.echo("Creating commit...", err=True)
    result = repo.run(["commit", "-m", message])
    if not result.success:
        raise GitError(f"Failed to create commit: {result.stderr.strip() or result.stdout.strip()}")
    typer.echo(result.stdout.rstrip())
