"""Git log retrieval.

Contains:
- get_commit_records: Read the most recent commits as CommitRecords
- get_commits_in_range: Read the commits of a revision range
"""

from datetime import datetime

from smartcommit.git.models import CommitRecord
from smartcommit.git.runner import _run_git_command
from smartcommit.git.exceptions import GitError, HistoryUnavailableError

# Unit and record separators keep multi-line messages intact
_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = f"%H{_FIELD_SEP}%an{_FIELD_SEP}%aI{_FIELD_SEP}%B{_RECORD_SEP}"


def _parse_log_output(output: str) -> list[CommitRecord]:
    """Parse `git log` output produced with _LOG_FORMAT."""
    records = []
    for chunk in output.split(_RECORD_SEP):
        chunk = chunk.strip("\n")
        if not chunk:
            continue
        parts = chunk.split(_FIELD_SEP, 3)
        if len(parts) != 4:
            raise HistoryUnavailableError(f"Unexpected git log output: {chunk[:80]!r}")
        sha, author, date_str, message = parts
        try:
            timestamp = datetime.fromisoformat(date_str.strip())
        except ValueError:
            raise HistoryUnavailableError(f"Invalid commit date for {sha}: {date_str!r}")
        records.append(
            CommitRecord(
                sha=sha.strip(),
                message=message.strip(),
                author_name=author.strip(),
                timestamp=timestamp,
            )
        )
    return records


def get_commit_records(limit: int = 100) -> list[CommitRecord]:
    """Get the most recent commits, newest first.

    Args:
        limit: Maximum number of commits to read.

    Returns:
        List of CommitRecords. Empty if the repository has no commits.

    Raises:
        HistoryUnavailableError: If the log cannot be read.
    """
    try:
        has_head = bool(_run_git_command(["rev-list", "-n1", "--all"]))
    except GitError as e:
        raise HistoryUnavailableError(f"Git log analysis error: {e}")

    if not has_head:
        return []

    try:
        output = _run_git_command(
            ["log", f"--max-count={limit}", f"--pretty=format:{_LOG_FORMAT}"],
            strip=False,
        )
    except GitError as e:
        raise HistoryUnavailableError(f"Git log analysis error: {e}")

    return _parse_log_output(output)


def get_commits_in_range(revision_range: str) -> list[CommitRecord]:
    """Get the commits of a revision range such as HEAD~3..HEAD.

    A range without an upper bound ("abc123..") ends at HEAD.

    Raises:
        HistoryUnavailableError: If the log cannot be read.
    """
    start, sep, end = revision_range.partition("..")
    normalized = f"{start}..{end or 'HEAD'}" if sep else revision_range

    try:
        output = _run_git_command(["log", f"--pretty=format:{_LOG_FORMAT}", normalized], strip=False)
    except GitError as e:
        raise HistoryUnavailableError(f"Git log error: {e}")

    return _parse_log_output(output)
