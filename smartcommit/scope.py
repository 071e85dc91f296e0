"""Scope inference for smartcommit.

Derives a short scope label such as "api" or "src/components" from the
paths touched by a change-set, for messages like feat(api): ...

Two passes are made over the grouping keys (first path segment, or the
file name without extension for root-level files):
- dominant: a key holding a strict majority of the paths wins outright
- conventional roots: a well-known top-level directory (src, lib, ...)
  holding more than a third of the paths wins, refined to its dominant
  subdirectory when one exists
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from smartcommit.git.changeset import parse_change_set


# Checked in this order; the first qualifying directory is used
CONVENTIONAL_ROOTS = [
    "src",
    "lib",
    "test",
    "tests",
    "components",
    "pages",
    "utils",
    "config",
]

# A key must hold more than this fraction of paths to be dominant
MAJORITY_FRACTION = 1 / 2

# A conventional root must hold more than this fraction of paths
CONVENTIONAL_ROOT_FRACTION = 1 / 3


@dataclass
class ScopeResult:
    """Result of scope inference."""

    scope: Optional[str]
    reason: str  # Human-readable explanation
    candidates: list[tuple[str, int]] = field(default_factory=list)  # (key, count) in first-seen order


def normalize_path(path: str) -> str:
    """Normalize a file path for consistent processing.

    Args:
        path: The file path to normalize.

    Returns:
        Normalized path with forward slashes.
    """
    return path.replace("\\", "/").strip("/")


def grouping_key(path: str) -> str:
    """Get the grouping key of a normalized path.

    Args:
        path: A normalized file path.

    Returns:
        The first directory for nested paths, otherwise the file name up to
        its first dot (README.md -> README, .env -> "").
    """
    if "/" in path:
        return path.split("/", 1)[0]
    return path.split(".", 1)[0]


def dominant_key(counts: Counter) -> Optional[tuple[str, int]]:
    """Find the most frequent key, keeping the earliest on ties.

    A single scan in insertion order keeps the first key whose count
    strictly exceeds the running maximum, so ties go to the key seen first.

    Args:
        counts: Key counts in first-seen order.

    Returns:
        (key, count), or None if counts is empty.
    """
    best: Optional[tuple[str, int]] = None
    for key, count in counts.items():
        if best is None or count > best[1]:
            best = (key, count)
    return best


def _clean_paths(paths: Iterable[str]) -> list[str]:
    cleaned = []
    for path in paths:
        if not isinstance(path, str):
            continue
        normalized = normalize_path(path)
        if normalized:
            cleaned.append(normalized)
    return cleaned


def _refine_with_subdirectory(root: str, paths: list[str]) -> Optional[str]:
    """Pick the dominant second-level directory under a conventional root."""
    second_level = Counter()
    for path in paths:
        parts = path.split("/")
        if len(parts) > 1 and parts[0] == root and parts[1]:
            second_level[parts[1]] += 1

    best = dominant_key(second_level)
    if best is None:
        return None

    key, count = best
    total = sum(second_level.values())
    if count > total * MAJORITY_FRACTION:
        return f"{root}/{key}"
    return None


def infer_scope_detailed(paths: Iterable[str]) -> ScopeResult:
    """Infer a scope from changed file paths, with an explanation.

    Args:
        paths: Touched file paths (sentinels already removed).

    Returns:
        ScopeResult with the inferred scope (or None) and the reason.
    """
    files = _clean_paths(paths)

    if not files:
        return ScopeResult(scope=None, reason="No files to analyze")

    total = len(files)
    keys = [grouping_key(path) for path in files]
    counts = Counter(keys)
    candidates = list(counts.items())

    best = dominant_key(counts)
    if best is not None:
        key, count = best
        if key and count > total * MAJORITY_FRACTION:
            return ScopeResult(
                scope=key,
                reason=f"'{key}' covers {count}/{total} files",
                candidates=candidates,
            )

    for root in CONVENTIONAL_ROOTS:
        occurrences = counts.get(root, 0)
        if occurrences > total * CONVENTIONAL_ROOT_FRACTION:
            refined = _refine_with_subdirectory(root, files)
            if refined:
                return ScopeResult(
                    scope=refined,
                    reason=f"'{root}' covers {occurrences}/{total} files, mostly under '{refined}'",
                    candidates=candidates,
                )
            return ScopeResult(
                scope=root,
                reason=f"'{root}' covers {occurrences}/{total} files",
                candidates=candidates,
            )

    return ScopeResult(
        scope=None,
        reason=f"Mixed changes across {len(counts)} groups, no dominant scope",
        candidates=candidates,
    )


def infer_scope(paths: Iterable[str]) -> Optional[str]:
    """Infer a scope label from changed file paths.

    Args:
        paths: Touched file paths.

    Returns:
        The scope label, or None when no structural grouping dominates.
    """
    return infer_scope_detailed(paths).scope


def infer_scope_from_diff(diff_text: str) -> Optional[str]:
    """Infer a scope label from unified diff text.

    Args:
        diff_text: The diff to analyze.

    Returns:
        The scope label, or None.
    """
    return infer_scope(parse_change_set(diff_text).touched_paths)
