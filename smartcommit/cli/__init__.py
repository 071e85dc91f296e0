"""CLI entry point for smartcommit.

This module provides the main CLI application that combines all commands
and subcommands into a single unified interface.
"""

import typer

from smartcommit.cli.analyze import analyze_command, history_command
from smartcommit.cli.batch import batch_command, run_batch
from smartcommit.cli.config import config_app
from smartcommit.cli.hook import hook_app
from smartcommit.cli.main import generate_command, main_command, run_generate
from smartcommit.cli.templates import templates_app

# Main application
app = typer.Typer(
    name="smartcommit",
    help="smartcommit: AI-powered git commit messages",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")
app.add_typer(hook_app, name="hook")
app.add_typer(templates_app, name="templates")

# Add individual commands
app.command("generate")(generate_command)
app.command("analyze")(analyze_command)
app.command("history")(history_command)
app.command("batch")(batch_command)

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "hook_app",
    "templates_app",
    "main_command",
    "generate_command",
    "analyze_command",
    "history_command",
    "batch_command",
    "run_generate",
    "run_batch",
]
