"""CLI commands that work with Jira issues."""

from pathlib import Path
from typing import Optional

import typer

from pushbrief.cli.utils import (
    create_commit,
    open_repository,
    prompt_jira_settings,
    resolve_issue_key,
    warn,
)
from pushbrief.config import resolve_jira_settings, resolve_llm_settings
from pushbrief.git import GitError
from pushbrief.jira import JiraClient, JiraError
from pushbrief.jira.adf import build_analysis_comment
from pushbrief.llm import LLMError, analyze_changes, get_provider

# Subcommand group for Jira integration
jira_app = typer.Typer(
    name="jira",
    help="Create commit messages from Jira issues and post change analyses",
    add_completion=False,
)


def _repo_path_option():
    return typer.Option(
        None,
        "--repo-path",
        "-r",
        help="Path to the git repository (defaults to the current directory)",
    )


def _connect(host: Optional[str], username: Optional[str], password: Optional[str]) -> JiraClient:
    settings = resolve_jira_settings(host, username, password)
    if not settings.is_complete:
        settings = prompt_jira_settings(settings)

    try:
        return JiraClient(settings)
    except JiraError as e:
        typer.echo(f"Failed to set up Jira: {e}", err=True)
        raise typer.Exit(1)


@jira_app.command("commit")
def commit_command(
    repo_path: Optional[Path] = _repo_path_option(),
    jira_host: Optional[str] = typer.Option(None, "--jira-host", help="Jira host URL"),
    jira_username: Optional[str] = typer.Option(None, "--jira-username", help="Jira username"),
    jira_password: Optional[str] = typer.Option(None, "--jira-password", help="Jira password or API token"),
    issue_key: Optional[str] = typer.Option(None, "--issue-key", "-i", help="Jira issue key (e.g., PROJECT-123)"),
    default_issue: Optional[str] = typer.Option(
        None,
        "--default-issue",
        "-d",
        help="Default Jira issue key to use if not specified",
    ),
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Additional commit message"),
    from_branch: bool = typer.Option(False, "--from-branch", "-b", help="Extract issue key from branch name"),
    commit: bool = typer.Option(False, "--commit", "-c", help="Create the commit after generating the message"),
    staged: bool = typer.Option(False, "--staged", "-s", help="Commit only staged changes"),
    stage_all: bool = typer.Option(False, "--all", "-a", help="Stage all changes before committing"),
) -> None:
    """Create a commit message based on a Jira issue."""
    repo = open_repository(repo_path)

    with _connect(jira_host, jira_username, jira_password) as client:
        try:
            key = resolve_issue_key(repo, client, issue_key, from_branch, default_issue)
        except GitError as e:
            typer.echo(f"Git error: {e}", err=True)
            raise typer.Exit(1)

        if not key:
            typer.echo("No Jira issue key provided or found.", err=True)
            raise typer.Exit(1)

        commit_message = client.create_commit_message(key, message)

    typer.secho("Generated commit message:", fg=typer.colors.GREEN, err=True)
    typer.echo(commit_message)

    if commit:
        try:
            create_commit(repo, commit_message, stage_all=stage_all and not staged)
        except GitError as e:
            typer.echo(f"Git error: {e}", err=True)
            raise typer.Exit(1)
        typer.secho("Commit created successfully!", fg=typer.colors.GREEN, err=True)


@jira_app.command("analyze")
def analyze_command(
    repo_path: Optional[Path] = _repo_path_option(),
    jira_host: Optional[str] = typer.Option(None, "--jira-host", help="Jira host URL"),
    jira_username: Optional[str] = typer.Option(None, "--jira-username", help="Jira username"),
    jira_password: Optional[str] = typer.Option(None, "--jira-password", help="Jira password or API token"),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="API key for the LLM provider"),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="LLM provider (openai, anthropic)"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model to use"),
    issue_key: Optional[str] = typer.Option(None, "--issue-key", "-i", help="Jira issue key (e.g., PROJECT-123)"),
    default_issue: Optional[str] = typer.Option(
        None,
        "--default-issue",
        "-d",
        help="Default Jira issue key to use if not specified",
    ),
    from_branch: bool = typer.Option(False, "--from-branch", "-b", help="Extract issue key from branch name"),
    staged: bool = typer.Option(False, "--staged", "-s", help="Analyze only staged changes"),
) -> None:
    """Analyze changes with AI and add the result as a Jira comment."""
    repo = open_repository(repo_path)

    try:
        llm_settings = resolve_llm_settings(provider, model, api_key)
    except ValueError as e:
        typer.echo(f"Invalid LLM configuration: {e}", err=True)
        raise typer.Exit(1)

    with _connect(jira_host, jira_username, jira_password) as client:
        try:
            key = resolve_issue_key(repo, client, issue_key, from_branch, default_issue)
            diffs = repo.get_diffs(staged=staged)
        except GitError as e:
            typer.echo(f"Git error: {e}", err=True)
            raise typer.Exit(1)

        if not key:
            typer.echo("No Jira issue key provided or found.", err=True)
            raise typer.Exit(1)

        if not diffs:
            warn("No changes found to analyze.")
            return

        typer.echo(f"Analyzing {len(diffs)} changed file(s) with {llm_settings.model}...", err=True)
        try:
            results = analyze_changes(get_provider(llm_settings), diffs)
        except LLMError as e:
            typer.echo(f"Failed to analyze changes: {e}", err=True)
            raise typer.Exit(1)

        if not results:
            warn("No analysis results generated.")
            raise typer.Exit(1)

        try:
            client.add_comment(key, build_analysis_comment(results))
        except JiraError as e:
            typer.echo(f"Failed to add comment to Jira issue: {e}", err=True)
            raise typer.Exit(1)

    typer.secho(f"Analysis added as a comment to Jira issue {key}", fg=typer.colors.GREEN)
