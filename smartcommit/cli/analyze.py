"""CLI commands for commit history analysis."""

import typer

from smartcommit.git import GitError, is_git_repo
from smartcommit.history import (
    DEFAULT_ANALYZE_LIMIT,
    DEFAULT_SUMMARY_LIMIT,
    collect_and_analyze,
    collect_and_summarize,
)
from smartcommit.cli.utils import print_history_summary, print_statistics_report


def _require_repo() -> None:
    if not is_git_repo():
        raise GitError("Not in a git repository. Please run this command from a git repository.")


def analyze_command(
    limit: int = typer.Option(
        DEFAULT_ANALYZE_LIMIT,
        "--limit",
        "-n",
        min=1,
        help="Number of recent commits to analyze",
    ),
) -> None:
    """Print commit statistics and suggestions for improvement."""
    try:
        _require_repo()
        typer.echo("Generating commit statistics and insights...", err=True)
        print_statistics_report(collect_and_analyze(limit))
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)


def history_command(
    limit: int = typer.Option(
        DEFAULT_SUMMARY_LIMIT,
        "--limit",
        "-n",
        min=1,
        help="Number of recent commits to summarize",
    ),
) -> None:
    """Summarize the commit conventions used in this repository."""
    try:
        _require_repo()
        typer.echo("Analyzing commit history...", err=True)
        print_history_summary(collect_and_summarize(limit))
    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
