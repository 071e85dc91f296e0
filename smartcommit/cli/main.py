"""Main CLI command for generating commit messages."""

import logging
from pathlib import Path
from typing import Optional

import typer

from smartcommit import __version__
from smartcommit.git import (
    GitError,
    commit_with_message,
    get_diff,
    get_repo_root,
    is_git_repo,
    stage_all_changes,
)
from smartcommit.history import collect_and_analyze, collect_and_summarize
from smartcommit.llm import LLMError, MissingAPIKeyError, build_backends, get_provider
from smartcommit.models import GenerationOutcome
from smartcommit.orchestrator import generate_message
from smartcommit.refine import RefinementSession, RefineState
from smartcommit.user_config import CommitSettings
from smartcommit.cli.batch import DEFAULT_BATCH_RANGE, run_batch
from smartcommit.cli.utils import (
    PromptDecisionSource,
    build_generation_context,
    configure_logging,
    load_run_settings,
    print_history_summary,
    print_statistics_report,
)

logger = logging.getLogger(__name__)


def _print_candidates(outcome: GenerationOutcome) -> None:
    typer.echo("Generated commit messages from multiple models:", err=True)
    for index, candidate in enumerate(outcome.candidates, 1):
        typer.echo(f"{index}. [{candidate.backend_id}] {candidate.text}", err=True)


def _on_refine_state(state: RefineState, message: str) -> None:
    logger.debug("Refinement state: %s", state.value)


def run_generate(
    settings: CommitSettings,
    message_file: Optional[Path] = None,
) -> Optional[str]:
    """Generate a commit message for the pending changes.

    Args:
        settings: Validated run settings.
        message_file: When set (hook mode), the message is written there
            instead of being committed.

    Returns:
        The final message, or None if the user cancelled.

    Raises:
        GitError, LLMError: Propagated to the command boundary.
    """
    if message_file and settings.hooks.auto_stage:
        stage_all_changes()

    diff_text = get_diff(settings.diff)

    if len(diff_text) > settings.max_diff_size:
        logger.warning("Diff is large (%d chars)", len(diff_text))
        typer.echo(
            f"Warning: Diff is large ({len(diff_text)} chars). "
            "This may affect API response time and quality.",
            err=True,
        )
        typer.echo(
            "   Consider committing smaller changes or increasing the max_diff_size option if needed.",
            err=True,
        )

    primary = get_provider(settings.model, settings.model_version)
    typer.echo(f"Using {primary.display_name} model: {primary.model}", err=True)
    backends = build_backends(primary, settings.ensemble, settings.ensemble_providers)

    context = build_generation_context(diff_text, settings)

    if settings.ensemble:
        typer.echo("Generating commit messages using ensemble approach...", err=True)
    else:
        typer.echo("Generating commit message...", err=True)
    outcome = generate_message(context, backends, ensemble=settings.ensemble)

    if len(outcome.candidates) > 1:
        _print_candidates(outcome)

    message = outcome.message

    if settings.interactive and message_file is None:
        session = RefinementSession(
            message,
            regenerate=lambda: generate_message(context, backends, ensemble=settings.ensemble).message,
            on_state_change=_on_refine_state,
        )
        message = session.run(PromptDecisionSource())
        if not session.can_commit:
            typer.echo("Commit cancelled by user.", err=True)
            return None

    if message_file is not None:
        message_file.write_text(message + "\n", encoding="utf-8")
        return message

    typer.echo("")
    typer.echo("Generated commit message:")
    typer.echo(message)
    typer.echo("")

    if settings.apply:
        if settings.dry_run:
            typer.echo("Dry run mode: Would commit with the message above", err=True)
        else:
            result = commit_with_message(message)
            typer.echo("Committed successfully!", err=True)
            typer.echo(result)
    else:
        typer.echo("Tip: Use --apply to automatically commit with this message", err=True)

    return message


def _write_fallback(message_file: Path, settings: Optional[CommitSettings]) -> None:
    fallback = (settings or CommitSettings()).hooks.fallback_message
    message_file.write_text(fallback + "\n", encoding="utf-8")
    typer.echo(f"Using fallback commit message: {fallback}", err=True)


def execute(
    config_path: Optional[Path],
    overrides: dict,
    message_file: Optional[Path] = None,
) -> None:
    """Load settings and run analysis, batch or generation mode.

    In hook mode (message_file set) failures write the configured fallback
    message instead of aborting the commit.

    Raises:
        typer.Exit: On any git or LLM error outside hook mode.
    """
    settings = None
    try:
        if not is_git_repo():
            raise GitError("Not in a git repository. Please run this command from a git repository.")

        settings = load_run_settings(get_repo_root(), config_path, overrides)

        if settings.analyze:
            typer.echo("Generating commit statistics and insights...", err=True)
            print_statistics_report(collect_and_analyze())
            return

        if settings.learn_history:
            typer.echo("Analyzing commit history...", err=True)
            print_history_summary(collect_and_summarize())

        if settings.batch:
            revision_range = typer.prompt("Enter commit range", default=DEFAULT_BATCH_RANGE)
            run_batch(revision_range, settings)
            return

        run_generate(settings, message_file)

    except (GitError, LLMError) as e:
        if message_file is not None:
            typer.echo(f"Error: {e}", err=True)
            _write_fallback(message_file, settings)
            return
        if isinstance(e, MissingAPIKeyError):
            typer.echo(f"Error: {e}", err=True)
        elif isinstance(e, GitError):
            typer.echo(f"Git error: {e}", err=True)
        else:
            typer.echo(f"LLM error: {e}", err=True)
        raise typer.Exit(1)


def generate_command(
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
        help="Model version or alias (e.g. haiku, sonnet, opus, 4, 4-turbo)",
    ),
    diff: Optional[str] = typer.Option(
        None,
        "--diff",
        "-d",
        help="Which changes to describe (staged, unstaged, all)",
    ),
    style: Optional[str] = typer.Option(
        None,
        "--style",
        "-s",
        help="Commit style (plain, conventional, emoji, gitmoji, semantic, summary-body)",
    ),
    lang: Optional[str] = typer.Option(
        None,
        "--lang",
        "-l",
        help="Language of the commit message",
    ),
    prompt: Optional[str] = typer.Option(
        None,
        "--prompt",
        "-p",
        help="Custom instructions replacing the default instruction block",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a config file (default: .smartcommit.yaml in the repository root)",
    ),
    apply: bool = typer.Option(
        False,
        "--apply",
        "-a",
        help="Commit with the generated message",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="With --apply, show what would be committed without committing",
    ),
    max_diff_size: Optional[int] = typer.Option(
        None,
        "--max-diff-size",
        help="Warn when the diff exceeds this many characters (default: 10000)",
    ),
    detect_scope: bool = typer.Option(
        False,
        "--detect-scope",
        help="Infer the commit scope from the changed file paths",
    ),
    scope: Optional[str] = typer.Option(
        None,
        "--scope",
        help="Scope for the commit message",
    ),
    interactive: bool = typer.Option(
        False,
        "--interactive",
        "-i",
        help="Accept, edit, regenerate or cancel the generated message",
    ),
    learn_history: bool = typer.Option(
        False,
        "--learn-history",
        help="Print the conventions of recent commits before generating",
    ),
    ensemble: bool = typer.Option(
        False,
        "--ensemble",
        "-e",
        help="Generate with every configured provider and pick one message",
    ),
    template: Optional[str] = typer.Option(
        None,
        "--template",
        "-t",
        help="Name of a prompt template in the templates directory",
    ),
    templates_dir: Optional[str] = typer.Option(
        None,
        "--templates-dir",
        help="Directory holding <name>.txt templates (default: ./commit-templates)",
    ),
    analyze: bool = typer.Option(
        False,
        "--analyze",
        help="Print commit statistics and insights instead of generating",
    ),
    batch: bool = typer.Option(
        False,
        "--batch",
        help="Regenerate messages for a range of existing commits",
    ),
    message_file: Optional[Path] = typer.Option(
        None,
        "--message-file",
        help="Write the message to this file (used by the prepare-commit-msg hook)",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging",
    ),
) -> None:
    """Generate an AI-powered commit message from pending changes."""
    configure_logging(verbose)

    from smartcommit.config import load_config
    load_config()

    # Flags only override the config file when given
    overrides = {
        "model": model,
        "model_version": model_version,
        "diff": diff,
        "style": style,
        "lang": lang,
        "custom_prompt": prompt,
        "apply": apply or None,
        "dry_run": dry_run or None,
        "max_diff_size": max_diff_size,
        "detect_scope": detect_scope or None,
        "scope": scope,
        "interactive": interactive or None,
        "learn_history": learn_history or None,
        "ensemble": ensemble or None,
        "template": template,
        "templates_dir": templates_dir,
        "analyze": analyze or None,
        "batch": batch or None,
    }

    execute(config, overrides, message_file)


def main_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging",
    ),
) -> None:
    """smartcommit: AI-powered git commit messages.

    Without a subcommand, generates a message using the repository config.
    """
    if version:
        typer.echo(f"smartcommit {__version__}")
        raise typer.Exit(0)

    # If a subcommand is invoked, don't run the default behavior
    if ctx.invoked_subcommand is not None:
        return

    configure_logging(verbose)

    from smartcommit.config import load_config
    load_config()

    execute(None, {})
