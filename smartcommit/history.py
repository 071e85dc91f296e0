"""Commit history analysis for smartcommit.

Mines a window of recent commits for conventions (conventional commit
types and scopes, message lengths, common prefixes) and produces a
statistics report with improvement suggestions.

Contains:
- analyze_history: Full CommitStatisticsReport for a record sequence
- summarize_history: Lighter HistorySummary of conventions
- collect_and_analyze / collect_and_summarize: Read the git log and analyze it
"""

import re
from collections import Counter
from dataclasses import dataclass, field
from datetime import timezone
from statistics import median
from typing import Optional, Sequence

from smartcommit.git.log import get_commit_records
from smartcommit.git.models import CommitRecord
from smartcommit.scope import dominant_key


TYPE_PATTERN = re.compile(r"^(\w+)(?:\(.+\))?:")
SCOPE_PATTERN = re.compile(r"^\w+\((.+)\):")

PREFIX_LENGTH = 10

# Suggestion thresholds
MIN_CONVENTIONAL_RATIO = 0.5
MAX_AVERAGE_LENGTH = 72
MAX_COMMITS_PER_DAY = 10

DEFAULT_ANALYZE_LIMIT = 100
DEFAULT_SUMMARY_LIMIT = 50


@dataclass(frozen=True)
class MessageLengthStats:
    """Message length distribution in characters."""

    min: int = 0
    max: int = 0
    average: float = 0.0
    median: float = 0.0


@dataclass(frozen=True)
class TemporalFrequency:
    """Commit counts per calendar day (YYYY-MM-DD, UTC) and per hour ("0"-"23")."""

    by_day: dict[str, int] = field(default_factory=dict)
    by_hour: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class AuthorStats:
    """Per-author commit count and rounded average message length."""

    count: int
    avg_length: int


@dataclass(frozen=True)
class CommitStatisticsReport:
    """Aggregate statistics over a window of commits."""

    total_count: int
    type_frequency: dict[str, int]
    scope_frequency: dict[str, int]
    message_lengths: MessageLengthStats
    temporal_frequency: TemporalFrequency
    author_stats: dict[str, AuthorStats]
    suggestions: list[str]


@dataclass(frozen=True)
class HistorySummary:
    """Conventions learned from recent commits."""

    type_frequency: dict[str, int]
    scope_frequency: dict[str, int]
    average_length: float
    most_common_prefix: str


def extract_type(message: str) -> Optional[str]:
    """Extract the conventional commit type ("feat" from "feat(api): x")."""
    match = TYPE_PATTERN.match(message)
    return match.group(1) if match else None


def extract_scope(message: str) -> Optional[str]:
    """Extract the conventional commit scope ("api" from "feat(api): x")."""
    match = SCOPE_PATTERN.match(message)
    return match.group(1) if match else None


def _window(records: Sequence[CommitRecord], limit: Optional[int]) -> list[CommitRecord]:
    if limit is None:
        return list(records)
    return list(records)[:max(limit, 0)]


def _length_stats(lengths: list[int]) -> MessageLengthStats:
    if not lengths:
        return MessageLengthStats()
    return MessageLengthStats(
        min=min(lengths),
        max=max(lengths),
        average=sum(lengths) / len(lengths),
        median=float(median(lengths)),
    )


def build_suggestions(
    total_count: int,
    typed_count: int,
    lengths: MessageLengthStats,
    by_day: dict[str, int],
) -> list[str]:
    """Build improvement suggestions from aggregated statistics.

    Rules are independent and always reported in this order: conventional
    format adoption, message length, commit batching.
    """
    suggestions = []

    if total_count and typed_count / total_count < MIN_CONVENTIONAL_RATIO:
        suggestions.append("Consider adopting conventional commit format for better consistency")

    if lengths.average > MAX_AVERAGE_LENGTH:
        suggestions.append(
            f"Average commit message length ({round(lengths.average)} chars) "
            f"exceeds recommended {MAX_AVERAGE_LENGTH} characters"
        )

    busiest = dominant_key(Counter(by_day))
    if busiest and busiest[1] > MAX_COMMITS_PER_DAY:
        day, count = busiest
        suggestions.append(
            f"High commit frequency on {day} ({count} commits) - consider batching related changes"
        )

    return suggestions


def analyze_history(
    records: Sequence[CommitRecord],
    limit: Optional[int] = DEFAULT_ANALYZE_LIMIT,
) -> CommitStatisticsReport:
    """Build a statistics report for the first `limit` records.

    Args:
        records: Commits, newest first.
        limit: Maximum number of records to analyze (None for all).

    Returns:
        A CommitStatisticsReport. An empty sequence yields zero counts,
        empty maps and no suggestions.
    """
    window = _window(records, limit)

    type_counts: Counter[str] = Counter()
    scope_counts: Counter[str] = Counter()
    by_day: Counter[str] = Counter()
    by_hour: Counter[str] = Counter()
    author_counts: Counter[str] = Counter()
    author_lengths: Counter[str] = Counter()
    lengths: list[int] = []

    for record in window:
        message = record.message.strip()
        lengths.append(len(message))

        commit_type = extract_type(message)
        if commit_type:
            type_counts[commit_type] += 1

        commit_scope = extract_scope(message)
        if commit_scope:
            scope_counts[commit_scope] += 1

        day_key = record.timestamp.astimezone(timezone.utc).date().isoformat()
        by_day[day_key] += 1
        by_hour[str(record.timestamp.hour)] += 1

        if record.author_name:
            author_counts[record.author_name] += 1
            author_lengths[record.author_name] += len(message)

    length_stats = _length_stats(lengths)

    author_stats = {
        author: AuthorStats(
            count=count,
            avg_length=round(author_lengths[author] / count),
        )
        for author, count in author_counts.items()
    }

    return CommitStatisticsReport(
        total_count=len(window),
        type_frequency=dict(type_counts),
        scope_frequency=dict(scope_counts),
        message_lengths=length_stats,
        temporal_frequency=TemporalFrequency(by_day=dict(by_day), by_hour=dict(by_hour)),
        author_stats=author_stats,
        suggestions=build_suggestions(
            total_count=len(window),
            typed_count=sum(type_counts.values()),
            lengths=length_stats,
            by_day=dict(by_day),
        ),
    )


def summarize_history(
    records: Sequence[CommitRecord],
    limit: Optional[int] = DEFAULT_SUMMARY_LIMIT,
) -> HistorySummary:
    """Summarize the commit conventions of the first `limit` records.

    Args:
        records: Commits, newest first.
        limit: Maximum number of records to analyze (None for all).

    Returns:
        A HistorySummary. The most common prefix is the first 10 characters
        shared by the most messages (earliest on ties), or "" if no message
        is at least 10 characters long.
    """
    window = _window(records, limit)

    type_counts: Counter[str] = Counter()
    scope_counts: Counter[str] = Counter()
    prefix_counts: Counter[str] = Counter()
    total_length = 0

    for record in window:
        message = record.message.strip()
        total_length += len(message)

        commit_type = extract_type(message)
        if commit_type:
            type_counts[commit_type] += 1

        commit_scope = extract_scope(message)
        if commit_scope:
            scope_counts[commit_scope] += 1

        if len(message) >= PREFIX_LENGTH:
            prefix_counts[message[:PREFIX_LENGTH]] += 1

    best_prefix = dominant_key(prefix_counts)

    return HistorySummary(
        type_frequency=dict(type_counts),
        scope_frequency=dict(scope_counts),
        average_length=total_length / len(window) if window else 0.0,
        most_common_prefix=best_prefix[0] if best_prefix else "",
    )


def collect_and_analyze(limit: int = DEFAULT_ANALYZE_LIMIT) -> CommitStatisticsReport:
    """Read the most recent commits and build a statistics report.

    Raises:
        HistoryUnavailableError: If the commit log cannot be read.
    """
    return analyze_history(get_commit_records(limit), limit)


def collect_and_summarize(limit: int = DEFAULT_SUMMARY_LIMIT) -> HistorySummary:
    """Read the most recent commits and summarize their conventions.

    Raises:
        HistoryUnavailableError: If the commit log cannot be read.
    """
    return summarize_history(get_commit_records(limit), limit)


def top_entries(frequency: dict[str, int], n: Optional[int] = None) -> list[tuple[str, int]]:
    """Sort a frequency map by descending count, earliest key first on ties."""
    ordered = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return ordered if n is None else ordered[:n]
