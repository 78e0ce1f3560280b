"""CLI entry point for pushbrief.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

from typing import Optional

import typer

from pushbrief import __version__
from pushbrief.cli.config import config_app
from pushbrief.cli.git import git_app
from pushbrief.cli.jira import jira_app
from pushbrief.cli.message import message_command
from pushbrief.config import load_env
from pushbrief.log import configure_logging

# Main application
app = typer.Typer(
    name="pushbrief",
    help="pushbrief: summarize git changes, link them to Jira and write commit messages",
    add_completion=False,
    no_args_is_help=True,
)

# Add subcommand groups
app.add_typer(git_app, name="git")
app.add_typer(jira_app, name="jira")
app.add_typer(config_app, name="config")

# Add individual commands
app.command("message")(message_command)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"pushbrief {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Set up logging and load .env before any command runs."""
    configure_logging(verbose)
    load_env()


__all__ = [
    "app",
    "git_app",
    "jira_app",
    "config_app",
    "message_command",
]
