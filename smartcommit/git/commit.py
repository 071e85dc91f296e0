"""Commit materialization."""

import subprocess

from smartcommit.git.exceptions import CommitFailedError


def commit_with_message(message: str) -> str:
    """Create a commit from the staged changes with the given message.

    The message is passed on stdin, so no shell quoting is involved.

    Args:
        message: The full commit message.

    Returns:
        The stdout of `git commit`.

    Raises:
        CommitFailedError: If git refuses the commit.
    """
    try:
        result = subprocess.run(
            ["git", "commit", "-F", "-"],
            input=message,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise CommitFailedError("Git is not installed or not in PATH.")

    if result.returncode != 0:
        raise CommitFailedError(
            f"Commit error: {(result.stderr or result.stdout).strip()}"
        )

    return result.stdout
