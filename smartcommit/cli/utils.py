"""Shared utility functions for CLI commands."""

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from smartcommit import global_config
from smartcommit.history import CommitStatisticsReport, HistorySummary, top_entries
from smartcommit.models import GenerationContext
from smartcommit.refine import Decision, DecisionSource
from smartcommit.scope import infer_scope_from_diff
from smartcommit.templates import resolve_template
from smartcommit.user_config import (
    CommitSettings,
    ConfigFileError,
    format_validation_error,
    load_settings,
)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Send library log records to stderr; DEBUG with --verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


def load_run_settings(
    repo_root: Optional[Path],
    config_path: Optional[Path],
    overrides: dict[str, Any],
) -> CommitSettings:
    """Load settings, turning config problems into a CLI exit.

    Raises:
        typer.Exit: If the config file is unreadable or the settings are invalid.
    """
    try:
        return load_settings(repo_root=repo_root, config_path=config_path, overrides=overrides)
    except ConfigFileError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    except ValidationError as e:
        typer.echo("Invalid configuration:", err=True)
        typer.echo(format_validation_error(e), err=True)
        raise typer.Exit(1)


def build_generation_context(diff_text: str, settings: CommitSettings) -> GenerationContext:
    """Turn run settings and a diff into the context shared by every backend.

    The scope is the user-supplied one, else the inferred one when scope
    detection is enabled. A configured template is resolved here with
    everything except {{diff}} and {{model}}, which are filled per backend.
    """
    detected_scope = infer_scope_from_diff(diff_text) if settings.detect_scope else None
    scope = settings.scope or detected_scope

    template_prompt = None
    if settings.template:
        template_prompt = resolve_template(
            settings.template,
            settings.templates_dir,
            {
                "scope": scope,
                "style": settings.style,
                "lang": settings.lang,
                "detectedScope": detected_scope,
            },
        )

    return GenerationContext(
        diff_text=diff_text,
        style=settings.style,
        language=settings.lang,
        scope=scope,
        custom_instructions=settings.custom_prompt,
        template_prompt=template_prompt,
    )


def find_editor() -> list[str]:
    """Find an available text editor.

    Preference order:
    1. The editor from ~/.smartcommit/config.yaml
    2. $VISUAL, then $EDITOR
    3. nano, then vi

    Returns:
        List of command parts to run the editor.
    """
    try:
        preferred = global_config.get_editor_preference()
    except global_config.GlobalConfigError:
        preferred = None
    if preferred:
        return preferred.split()

    for var in ("VISUAL", "EDITOR"):
        editor = os.environ.get(var)
        if editor:
            return editor.split()

    # noinspection PyArgumentList
    if shutil.which("nano"):
        return ["nano"]

    return ["vi"]


def open_editor(file_path: Path) -> None:
    """Open the file in an editor and wait for it to close.

    Args:
        file_path: Path to the file to edit.
    """
    editor_cmd = find_editor()

    typer.echo(f"Opening editor: {' '.join(editor_cmd)}", err=True)

    try:
        result = subprocess.run(
            editor_cmd + [str(file_path)],
            check=False,
        )

        if result.returncode != 0:
            typer.echo(f"Warning: Editor exited with code {result.returncode}", err=True)

    except FileNotFoundError:
        typer.echo(f"Error: Editor not found: {editor_cmd[0]}", err=True)
        raise typer.Exit(1)


def edit_text(initial: str) -> str:
    """Let the user edit text in their editor and return the result."""
    with tempfile.NamedTemporaryFile(
        "w", suffix=".txt", prefix="smartcommit-", delete=False, encoding="utf-8"
    ) as handle:
        handle.write(initial)
        temp_path = Path(handle.name)

    try:
        open_editor(temp_path)
        return temp_path.read_text(encoding="utf-8")
    finally:
        temp_path.unlink(missing_ok=True)


class PromptDecisionSource(DecisionSource):
    """Asks the user what to do with each proposed message."""

    CHOICES = {
        "a": "accept",
        "e": "edit",
        "r": "regenerate",
        "c": "cancel",
    }

    def next_decision(self, message: str) -> Decision:
        typer.echo("")
        typer.echo("=" * 60)
        typer.echo(message)
        typer.echo("=" * 60)

        while True:
            choice = typer.prompt(
                "How would you like to proceed? [a]ccept, [e]dit, [r]egenerate, [c]ancel",
                default="a",
                show_default=False,
            ).strip().lower()
            action = self.CHOICES.get(choice[:1]) if choice else "accept"
            if action:
                break
            typer.echo(f"Invalid choice: {choice}", err=True)

        if action == "accept":
            return Decision.accept()
        if action == "edit":
            return Decision.edit(edit_text(message))
        if action == "regenerate":
            typer.echo("Regenerating commit message...", err=True)
            return Decision.regenerate()
        return Decision.cancel()


def print_statistics_report(report: CommitStatisticsReport) -> None:
    """Print a commit statistics report."""
    typer.echo("")
    typer.echo("=== Commit Statistics Report ===")
    typer.echo(f"Total commits analyzed: {report.total_count}")

    typer.echo("")
    typer.echo("Commit Types:")
    for commit_type, count in top_entries(report.type_frequency):
        percentage = count / report.total_count * 100
        typer.echo(f"  {commit_type}: {count} ({percentage:.1f}%)")

    typer.echo("")
    typer.echo("Common Scopes:")
    for scope, count in top_entries(report.scope_frequency, 10):
        typer.echo(f"  {scope}: {count}")

    lengths = report.message_lengths
    typer.echo("")
    typer.echo("Message Length Statistics:")
    typer.echo(f"  Min: {lengths.min} characters")
    typer.echo(f"  Max: {lengths.max} characters")
    typer.echo(f"  Average: {round(lengths.average)} characters")
    typer.echo(f"  Median: {round(lengths.median)} characters")

    typer.echo("")
    typer.echo("Commit Frequency (Busiest Hours):")
    for hour, count in top_entries(report.temporal_frequency.by_hour, 5):
        typer.echo(f"  {hour}:00: {count} commits")

    typer.echo("")
    typer.echo("Author Statistics:")
    authors = sorted(report.author_stats.items(), key=lambda item: item[1].count, reverse=True)
    for author, stats in authors:
        typer.echo(f"  {author}: {stats.count} commits (avg {stats.avg_length} chars)")

    if report.suggestions:
        typer.echo("")
        typer.echo("Suggestions for Improvement:")
        for suggestion in report.suggestions:
            typer.echo(f"  • {suggestion}")


def _format_top(frequency: dict[str, int]) -> str:
    return ", ".join(f"{key} ({count})" for key, count in top_entries(frequency, 5))


def print_history_summary(summary: HistorySummary) -> None:
    """Print the commit convention summary."""
    typer.echo("Commit history analysis:")
    typer.echo(f"- Most common commit types: {_format_top(summary.type_frequency)}")
    typer.echo(f"- Most common scopes: {_format_top(summary.scope_frequency)}")
    typer.echo(f"- Average message length: {round(summary.average_length)} characters")
    typer.echo(f'- Most common prefix: "{summary.most_common_prefix}"')
