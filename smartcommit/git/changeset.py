"""Unified diff parsing into change-sets.

A change-set is the ordered list of file sections in a unified diff. Each
section references the path before and after the change; additions and
deletions use /dev/null on one side, which is represented here as None.
"""

from dataclasses import dataclass, field
from typing import Optional

NULL_PATH = "/dev/null"


@dataclass(frozen=True)
class DiffHunk:
    """One file section of a unified diff."""

    old_path: Optional[str]
    new_path: Optional[str]


@dataclass(frozen=True)
class ChangeSet:
    """Ordered file sections of a unified diff."""

    hunks: tuple[DiffHunk, ...] = field(default_factory=tuple)

    @property
    def touched_paths(self) -> list[str]:
        """Deduplicated paths in first-seen order, sentinels excluded."""
        seen: dict[str, None] = {}
        for hunk in self.hunks:
            for path in (hunk.old_path, hunk.new_path):
                if path is not None:
                    seen.setdefault(path, None)
        return list(seen)

    def __bool__(self) -> bool:
        return bool(self.hunks)


def _strip_side_prefix(raw: str, prefix: str) -> Optional[str]:
    """Turn a '--- a/path' or '+++ b/path' operand into a path or None."""
    raw = raw.rstrip("\n").split("\t", 1)[0].strip()
    if raw == NULL_PATH or not raw:
        return None
    if raw.startswith(prefix):
        raw = raw[len(prefix):]
    return raw or None


def _paths_from_git_header(line: str) -> tuple[Optional[str], Optional[str]]:
    """Extract paths from a 'diff --git a/x b/y' line.

    Paths with spaces are ambiguous here; the ---/+++ lines that follow
    take precedence when present.
    """
    rest = line[len("diff --git "):]
    marker = rest.find(" b/")
    if not rest.startswith("a/") or marker == -1:
        return None, None
    return rest[2:marker] or None, rest[marker + 3:] or None


def parse_change_set(diff_text: str) -> ChangeSet:
    """Parse unified diff text into a ChangeSet.

    Args:
        diff_text: Output of `git diff` (or any unified diff).

    Returns:
        A ChangeSet with one DiffHunk per file section. Malformed input
        yields an empty ChangeSet rather than raising.
    """
    hunks: list[DiffHunk] = []
    old_path: Optional[str] = None
    new_path: Optional[str] = None
    in_section = False
    # Header lines are only meaningful before the first @@ of a section;
    # a removed line reading "-- x" would otherwise look like "--- x".
    in_body = False
    git_section = False

    def flush() -> None:
        if in_section and (old_path is not None or new_path is not None):
            hunks.append(DiffHunk(old_path=old_path, new_path=new_path))

    for line in (diff_text or "").splitlines():
        if line.startswith("diff --git "):
            flush()
            old_path, new_path = _paths_from_git_header(line)
            in_section = True
            in_body = False
            git_section = True
        elif line.startswith("@@"):
            in_body = True
        elif line.startswith("--- ") and (not in_section or (in_body and not git_section)):
            # Plain unified diff without git headers: each ---/+++ pair
            # opens a new file section.
            flush()
            old_path = _strip_side_prefix(line[4:], "a/")
            new_path = None
            in_section = True
            in_body = False
        elif in_body:
            continue
        elif line.startswith("--- "):
            old_path = _strip_side_prefix(line[4:], "a/")
        elif line.startswith("+++ ") and in_section:
            new_path = _strip_side_prefix(line[4:], "b/")
        elif line.startswith("new file mode") and in_section:
            old_path = None
        elif line.startswith("deleted file mode") and in_section:
            new_path = None

    flush()
    return ChangeSet(hunks=tuple(hunks))
