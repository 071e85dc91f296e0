"""Git hook installation.

Contains:
- HOOK_NAME: The hook smartcommit installs
- render_hook_script: Build the prepare-commit-msg script
- install_hook: Write the hook into .git/hooks
- stage_all_changes: Stage the working tree (hooks.auto_stage)
"""

import os
import stat
from pathlib import Path

from smartcommit.git.runner import _run_git_command
from smartcommit.git.exceptions import GitError

HOOK_NAME = "prepare-commit-msg"
HOOK_MARKER = "# smartcommit prepare-commit-msg hook"
DEFAULT_HOOK_COMMAND = "smartcommit generate --style conventional --lang en"


def render_hook_script(command: str = DEFAULT_HOOK_COMMAND) -> str:
    """Build the hook script.

    The hook only runs for plain `git commit` (no -m, merge, squash or
    amend source), and writes the generated message into the message file
    git passes as $1.
    """
    return (
        "#!/bin/sh\n"
        f"{HOOK_MARKER}\n"
        "\n"
        "# Only run for normal commits, not merges or rebases\n"
        'if [ -z "$2" ]; then\n'
        f'  {command} --message-file "$1"\n'
        "  exit $?\n"
        "fi\n"
    )


def get_hooks_dir() -> Path:
    """Get the hooks directory of the current repository.

    Raises:
        GitError: If not in a git repository.
    """
    git_dir = Path(_run_git_command(["rev-parse", "--git-dir"]))
    return git_dir / "hooks"


def install_hook(force: bool = False, command: str = DEFAULT_HOOK_COMMAND) -> Path:
    """Install the prepare-commit-msg hook.

    Args:
        force: Overwrite an existing hook that smartcommit did not write.
        command: The smartcommit invocation the hook runs.

    Returns:
        Path to the installed hook.

    Raises:
        GitError: If the hooks directory is missing or a foreign hook exists.
    """
    hooks_dir = get_hooks_dir()
    if not hooks_dir.is_dir():
        raise GitError(f"{hooks_dir} directory not found. Are you in a git repository?")

    hook_file = hooks_dir / HOOK_NAME
    if hook_file.exists() and not force:
        if HOOK_MARKER not in hook_file.read_text(errors="replace"):
            raise GitError(
                f"A {HOOK_NAME} hook already exists at {hook_file}. Use --force to replace it."
            )

    hook_file.write_text(render_hook_script(command))
    mode = os.stat(hook_file).st_mode
    os.chmod(hook_file, mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return hook_file


def stage_all_changes() -> None:
    """Stage every change in the working tree (`git add -A`)."""
    _run_git_command(["add", "-A"])
