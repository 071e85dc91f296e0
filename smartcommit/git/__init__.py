"""Git collaborators for smartcommit.

This package wraps the git binary:
- exceptions: GitError, DiffUnavailableError, HistoryUnavailableError, CommitFailedError
- runner: _run_git_command, get_repo_root, is_git_repo
- models: CommitRecord
- changeset: ChangeSet, DiffHunk, parse_change_set
- diff: DiffSource, get_diff, get_diff_for_commit
- log: get_commit_records, get_commits_in_range
- commit: commit_with_message
- hooks: install_hook, stage_all_changes
"""

# Exceptions
from smartcommit.git.exceptions import (
    GitError,
    DiffUnavailableError,
    HistoryUnavailableError,
    CommitFailedError,
)

# Runner utilities
from smartcommit.git.runner import (
    _run_git_command,
    get_repo_root,
    is_git_repo,
)

# Data models
from smartcommit.git.models import CommitRecord
from smartcommit.git.changeset import (
    ChangeSet,
    DiffHunk,
    parse_change_set,
)

# Diff and log queries
from smartcommit.git.diff import (
    DiffSource,
    get_diff,
    get_diff_for_commit,
)
from smartcommit.git.log import (
    get_commit_records,
    get_commits_in_range,
)

# Materialization and hooks
from smartcommit.git.commit import commit_with_message
from smartcommit.git.hooks import (
    install_hook,
    stage_all_changes,
)


__all__ = [
    # Exceptions
    "GitError",
    "DiffUnavailableError",
    "HistoryUnavailableError",
    "CommitFailedError",
    # Runner
    "_run_git_command",
    "get_repo_root",
    "is_git_repo",
    # Models
    "CommitRecord",
    "ChangeSet",
    "DiffHunk",
    "parse_change_set",
    # Diff / log
    "DiffSource",
    "get_diff",
    "get_diff_for_commit",
    "get_commit_records",
    "get_commits_in_range",
    # Commit / hooks
    "commit_with_message",
    "install_hook",
    "stage_all_changes",
]
