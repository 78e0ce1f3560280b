"""CLI command for generating a commit message with an LLM."""

from pathlib import Path
from typing import Optional

import typer

from pushbrief.cli.utils import create_commit, open_repository
from pushbrief.config import resolve_llm_settings
from pushbrief.formatters import render_commit_message
from pushbrief.git import GitError, build_context_bundle
from pushbrief.llm import LLMError, generate_commit_message, get_provider


def message_command(
    repo_path: Optional[Path] = typer.Option(
        None,
        "--repo-path",
        "-r",
        help="Path to the git repository (defaults to the current directory)",
    ),
    working_tree: bool = typer.Option(
        False,
        "--working-tree",
        "-w",
        help="Describe working tree changes instead of staged changes",
    ),
    issue_key: Optional[str] = typer.Option(
        None,
        "--issue-key",
        "-i",
        help="Prefix the title with a Jira issue key (e.g., PROJECT-123)",
    ),
    provider: Optional[str] = typer.Option(None, "--provider", "-p", help="LLM provider (openai, anthropic)"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="Model to use"),
    max_diff_chars: int = typer.Option(
        50000,
        "--max-diff-chars",
        help="Maximum characters of diff sent to the LLM",
    ),
    commit: bool = typer.Option(False, "--commit", "-c", help="Commit staged changes with the generated message"),
) -> None:
    """Generate a commit message for the current changes with an LLM."""
    repo = open_repository(repo_path)

    try:
        settings = resolve_llm_settings(provider, model)
    except ValueError as e:
        typer.echo(f"Invalid LLM configuration: {e}", err=True)
        raise typer.Exit(1)

    try:
        context_bundle = build_context_bundle(repo, staged=not working_tree, max_chars=max_diff_chars)
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Generating commit message with {settings.model}...", err=True)
    try:
        data = generate_commit_message(get_provider(settings), context_bundle)
    except LLMError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    message = render_commit_message(data, issue_key=issue_key)
    typer.echo(message)

    if commit:
        try:
            create_commit(repo, message)
        except GitError as e:
            typer.echo(f"Git error: {e}", err=True)
            raise typer.Exit(1)
        typer.secho("Commit created successfully!", fg=typer.colors.GREEN, err=True)
