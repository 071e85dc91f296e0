"""Data models for git history."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CommitRecord:
    """A single commit read from the repository history.

    Attributes:
        sha: Full commit hash.
        message: Full commit message (subject and body).
        author_name: Author name, empty when git reports none.
        timestamp: Author date with its original UTC offset.
    """

    sha: str
    message: str
    author_name: str
    timestamp: datetime
