"""Git-related exception classes.

Contains all exception classes for Git operations:
- GitError: Base exception for git-related errors
- DiffUnavailableError: Raised when no change-set could be retrieved
- HistoryUnavailableError: Raised when the commit log cannot be queried
- CommitFailedError: Raised when `git commit` fails
"""


class GitError(Exception):
    """Custom exception for git-related errors."""

    pass


class DiffUnavailableError(GitError):
    """Raised when there are no changes for the requested diff source."""

    pass


class HistoryUnavailableError(GitError):
    """Raised when the commit history cannot be read."""

    pass


class CommitFailedError(GitError):
    """Raised when creating the commit fails."""

    pass
