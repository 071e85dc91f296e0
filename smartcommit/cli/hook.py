"""CLI commands for git hook management."""

import typer

from smartcommit.git import GitError, install_hook
from smartcommit.git.hooks import DEFAULT_HOOK_COMMAND, HOOK_NAME

# Subcommand group for hooks
hook_app = typer.Typer(
    name="hook",
    help="Manage the smartcommit git hook",
    add_completion=False,
)


@hook_app.command("install")
def hook_install(
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Replace an existing prepare-commit-msg hook",
    ),
    command: str = typer.Option(
        DEFAULT_HOOK_COMMAND,
        "--command",
        help="smartcommit invocation run by the hook",
    ),
) -> None:
    """Install a prepare-commit-msg hook that writes generated messages."""
    try:
        hook_file = install_hook(force=force, command=command)
    except GitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✓ {HOOK_NAME} hook installed at {hook_file}")
