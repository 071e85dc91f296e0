"""CLI command for regenerating messages of existing commits."""

import logging
from pathlib import Path
from typing import Optional

import typer

from smartcommit.git import (
    GitError,
    get_commits_in_range,
    get_diff_for_commit,
    get_repo_root,
    is_git_repo,
)
from smartcommit.llm import LLMError, get_provider
from smartcommit.orchestrator import generate_single
from smartcommit.user_config import CommitSettings
from smartcommit.cli.utils import build_generation_context, configure_logging, load_run_settings

logger = logging.getLogger(__name__)

DEFAULT_BATCH_RANGE = "HEAD~3..HEAD"


def run_batch(revision_range: str, settings: CommitSettings) -> int:
    """Generate a message for every commit in a range and show it next to the original.

    Nothing is rewritten. A commit whose diff or generation fails is
    reported and skipped.

    Args:
        revision_range: A git revision range such as HEAD~3..HEAD.
        settings: Run settings; each commit gets the same scope detection,
            template and prompt options as a normal run.

    Returns:
        The number of commits that failed.

    Raises:
        GitError: If the range cannot be listed.
    """
    commits = get_commits_in_range(revision_range)

    if not commits:
        typer.echo("No commits found in the specified range.", err=True)
        return 0

    backend = get_provider(settings.model, settings.model_version)
    typer.echo(f"Found {len(commits)} commits in range", err=True)

    failed = 0
    for record in commits:
        summary = record.message.strip().splitlines()[0] if record.message.strip() else ""
        typer.echo("")
        typer.echo(f"Processing commit: {record.sha} - {summary}")

        try:
            context = build_generation_context(get_diff_for_commit(record.sha), settings)
            outcome = generate_single(backend, context)
        except (GitError, LLMError) as e:
            logger.warning("Batch generation failed for %s: %s", record.sha, e)
            typer.echo(f"Error processing commit {record.sha}: {e}", err=True)
            failed += 1
            continue

        typer.echo(f"Original message: {record.message.strip()}")
        typer.echo(f"Generated message: {outcome.message}")

    return failed


def batch_command(
    revision_range: str = typer.Argument(
        DEFAULT_BATCH_RANGE,
        help="Commit range to process (e.g. HEAD~3..HEAD)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a config file",
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="AI provider to use (anthropic, openai, google)",
    ),
    model_version: Optional[str] = typer.Option(
        None,
        "--model-version",
        "-v",
        help="Model version or alias",
    ),
    style: Optional[str] = typer.Option(
        None,
        "--style",
        "-s",
        help="Commit style",
    ),
    lang: Optional[str] = typer.Option(
        None,
        "--lang",
        "-l",
        help="Language of the commit messages",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging",
    ),
) -> None:
    """Compare existing commit messages with freshly generated ones."""
    configure_logging(verbose)

    from smartcommit.config import load_config
    load_config()

    try:
        if not is_git_repo():
            raise GitError("Not in a git repository. Please run this command from a git repository.")

        settings = load_run_settings(
            get_repo_root(),
            config,
            {"model": model, "model_version": model_version, "style": style, "lang": lang},
        )
        run_batch(revision_range, settings)

    except GitError as e:
        typer.echo(f"Git error: {e}", err=True)
        raise typer.Exit(1)
    except LLMError as e:
        typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)
