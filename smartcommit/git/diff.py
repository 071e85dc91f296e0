"""Git diff retrieval.

Contains:
- DiffSource: The change-set selectors understood by get_diff
- get_diff: Get the unified diff for a selector
- get_diff_for_commit: Get the diff introduced by a single commit
"""

from enum import Enum

from smartcommit.git.runner import _run_git_command
from smartcommit.git.exceptions import GitError, DiffUnavailableError


class DiffSource(Enum):
    """Which pending changes to describe."""

    STAGED = "staged"
    UNSTAGED = "unstaged"
    ALL = "all"


_DIFF_ARGS = {
    DiffSource.STAGED: ["diff", "--cached"],
    DiffSource.UNSTAGED: ["diff"],
    DiffSource.ALL: ["diff", "HEAD"],
}


def get_diff(source: DiffSource | str = DiffSource.STAGED) -> str:
    """Get the unified diff for the requested source.

    Args:
        source: staged, unstaged, or all (working tree against HEAD).

    Returns:
        The diff text.

    Raises:
        DiffUnavailableError: If the source is unknown, git fails, or there
            are no changes to describe.
    """
    try:
        source = DiffSource(source)
    except ValueError:
        raise DiffUnavailableError(
            f"Unknown diff source: {source}. Use staged, unstaged, or all."
        )

    try:
        diff = _run_git_command(_DIFF_ARGS[source], strip=False)
    except GitError as e:
        raise DiffUnavailableError(f"Git diff error: {e}")

    if not diff.strip():
        raise DiffUnavailableError(
            f"No {source.value} changes found. Make sure you have staged or made changes."
        )

    return diff


def get_diff_for_commit(commit_sha: str) -> str:
    """Get the diff introduced by a single commit.

    Args:
        commit_sha: The commit hash.

    Returns:
        The diff text (may be empty for merge or empty commits). A root
        commit is diffed against the empty tree.

    Raises:
        DiffUnavailableError: If git cannot produce the diff.
    """
    try:
        return _run_git_command(
            ["diff-tree", "-p", "--root", "--no-commit-id", commit_sha], strip=False
        )
    except GitError as e:
        raise DiffUnavailableError(f"Git diff error: {e}")
