"""CLI commands for prompt templates."""

import typer

from smartcommit.templates import DEFAULT_TEMPLATES_DIR, write_default_templates

# Subcommand group for templates
templates_app = typer.Typer(
    name="templates",
    help="Manage commit prompt templates",
    add_completion=False,
)


@templates_app.command("init")
def templates_init(
    directory: str = typer.Option(
        DEFAULT_TEMPLATES_DIR,
        "--dir",
        help="Templates directory to create",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Overwrite existing templates",
    ),
) -> None:
    """Write the bundled templates into a templates directory."""
    try:
        written = write_default_templates(directory, overwrite=force)
    except OSError as e:
        typer.echo(f"Error writing templates: {e}", err=True)
        raise typer.Exit(1)

    if not written:
        typer.echo(f"Templates already exist in {directory}. Use --force to overwrite.")
        return

    for path in written:
        typer.echo(f"✓ Wrote {path}")
    typer.echo("")
    typer.echo("Use them with: smartcommit generate --template <name>")
