"""Tests for smartcommit.history module."""

from datetime import datetime, timedelta, timezone

import pytest

from smartcommit.git.exceptions import HistoryUnavailableError
from smartcommit.history import (
    MessageLengthStats,
    analyze_history,
    build_suggestions,
    collect_and_analyze,
    collect_and_summarize,
    extract_scope,
    extract_type,
    summarize_history,
    top_entries,
)

ADOPT_SUGGESTION = "Consider adopting conventional commit format for better consistency"


class TestExtractTypeAndScope:
    """Tests for extract_type and extract_scope functions."""

    def test_type_without_scope(self):
        """Test extracting a type from 'fix: x'."""
        assert extract_type("fix: handle empty input") == "fix"
        assert extract_scope("fix: handle empty input") is None

    def test_type_with_scope(self):
        """Test extracting type and scope from 'feat(api): x'."""
        assert extract_type("feat(api): add endpoint") == "feat"
        assert extract_scope("feat(api): add endpoint") == "api"

    def test_plain_message(self):
        """Test that a plain message has neither."""
        assert extract_type("Update readme") is None
        assert extract_scope("Update readme") is None


class TestAnalyzeHistory:
    """Tests for analyze_history function."""

    def test_empty_history(self):
        """Test that no commits give a zero report without suggestions."""
        report = analyze_history([])

        assert report.total_count == 0
        assert report.type_frequency == {}
        assert report.scope_frequency == {}
        assert report.message_lengths == MessageLengthStats()
        assert report.temporal_frequency.by_day == {}
        assert report.author_stats == {}
        assert report.suggestions == []

    def test_type_and_scope_frequency(self, record_factory):
        """Test counting conventional types and scopes."""
        records = [
            record_factory("feat(api): add endpoint"),
            record_factory("feat(ui): add button"),
            record_factory("fix(api): fix crash"),
            record_factory("Update readme"),
        ]

        report = analyze_history(records)

        assert report.total_count == 4
        assert report.type_frequency == {"feat": 2, "fix": 1}
        assert report.scope_frequency == {"api": 2, "ui": 1}

    def test_adopt_suggestion_when_few_typed(self, record_factory):
        """Test that 4 typed commits out of 10 suggest conventional format."""
        records = [record_factory(f"feat: change {i}") for i in range(4)]
        records += [record_factory(f"Change {i}") for i in range(6)]

        report = analyze_history(records)

        assert report.suggestions == [ADOPT_SUGGESTION]

    def test_no_adopt_suggestion_at_half(self, record_factory):
        """Test that exactly half typed commits do not trigger the suggestion."""
        records = [record_factory("feat: a"), record_factory("plain b")]

        assert ADOPT_SUGGESTION not in analyze_history(records).suggestions

    def test_long_message_suggestion(self, record_factory):
        """Test that an average length above 72 triggers a suggestion."""
        records = [record_factory("feat: " + "x" * 94)]

        report = analyze_history(records)

        assert report.message_lengths.average == 100
        assert report.suggestions == [
            "Average commit message length (100 chars) exceeds recommended 72 characters"
        ]

    def test_busy_day_suggestion(self, record_factory):
        """Test that more than 10 commits on one day triggers a suggestion."""
        base = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
        records = [
            record_factory("fix: bug", timestamp=base + timedelta(minutes=i))
            for i in range(11)
        ]

        report = analyze_history(records)

        assert report.temporal_frequency.by_day == {"2024-03-01": 11}
        assert report.suggestions == [
            "High commit frequency on 2024-03-01 (11 commits) - consider batching related changes"
        ]

    def test_ten_commits_per_day_is_fine(self, record_factory):
        """Test that exactly 10 commits on a day is not flagged."""
        records = [record_factory("fix: bug") for _ in range(10)]

        assert analyze_history(records).suggestions == []

    def test_median_odd_and_even(self, record_factory):
        """Test median for odd and even record counts."""
        odd = analyze_history([record_factory("a" * n) for n in (1, 3, 10)])
        even = analyze_history([record_factory("a" * n) for n in (1, 3, 5, 10)])

        assert odd.message_lengths.median == 3
        assert even.message_lengths.median == 4
        assert even.message_lengths.min == 1
        assert even.message_lengths.max == 10

    def test_message_length_is_trimmed(self, record_factory):
        """Test that surrounding whitespace is not counted."""
        report = analyze_history([record_factory("  fix: x  \n\n")])

        assert report.message_lengths.max == len("fix: x")

    def test_hour_buckets(self, record_factory):
        """Test hourly buckets keyed by hour number."""
        records = [
            record_factory("a", timestamp=datetime(2024, 1, 1, 9, 5, tzinfo=timezone.utc)),
            record_factory("b", timestamp=datetime(2024, 1, 2, 9, 55, tzinfo=timezone.utc)),
            record_factory("c", timestamp=datetime(2024, 1, 2, 17, 0, tzinfo=timezone.utc)),
        ]

        report = analyze_history(records)

        assert report.temporal_frequency.by_hour == {"9": 2, "17": 1}

    def test_author_stats(self, record_factory):
        """Test per-author counts and rounded average lengths."""
        records = [
            record_factory("abcd", author="Alice"),
            record_factory("abcdefg", author="Alice"),
            record_factory("ab", author="Bob"),
            record_factory("anonymous", author=""),
        ]

        report = analyze_history(records)

        assert set(report.author_stats) == {"Alice", "Bob"}
        assert report.author_stats["Alice"].count == 2
        assert report.author_stats["Alice"].avg_length == 6
        assert report.author_stats["Bob"].avg_length == 2

    def test_limit_applies_to_newest(self, record_factory):
        """Test that only the first `limit` records are analyzed."""
        records = [record_factory(f"feat: {i}") for i in range(5)]

        assert analyze_history(records, limit=3).total_count == 3


class TestBuildSuggestions:
    """Tests for build_suggestions function."""

    def test_rules_in_fixed_order(self):
        """Test that all rules can fire together in order."""
        suggestions = build_suggestions(
            total_count=12,
            typed_count=0,
            lengths=MessageLengthStats(min=80, max=80, average=80.0, median=80.0),
            by_day={"2024-01-01": 12},
        )

        assert len(suggestions) == 3
        assert suggestions[0] == ADOPT_SUGGESTION
        assert suggestions[1].startswith("Average commit message length (80 chars)")
        assert suggestions[2].startswith("High commit frequency on 2024-01-01 (12 commits)")


class TestSummarizeHistory:
    """Tests for summarize_history function."""

    def test_most_common_prefix(self, record_factory):
        """Test that the most shared 10-character prefix is reported."""
        records = [
            record_factory("chore(deps): bump a"),
            record_factory("chore(deps): bump b"),
            record_factory("feat(api): add c"),
        ]

        summary = summarize_history(records)

        assert summary.most_common_prefix == "chore(deps"
        assert summary.type_frequency == {"chore": 2, "feat": 1}
        assert summary.scope_frequency == {"deps": 2, "api": 1}

    def test_prefix_tie_keeps_first(self, record_factory):
        """Test that tied prefixes resolve to the earliest one."""
        records = [record_factory("0123456789 a"), record_factory("abcdefghij b")]

        assert summarize_history(records).most_common_prefix == "0123456789"

    def test_short_messages_have_no_prefix(self, record_factory):
        """Test that messages under 10 characters give an empty prefix."""
        summary = summarize_history([record_factory("fix: x")])

        assert summary.most_common_prefix == ""
        assert summary.average_length == 6

    def test_empty(self):
        """Test the summary of no commits."""
        summary = summarize_history([])

        assert summary.average_length == 0.0
        assert summary.most_common_prefix == ""


class TestCollect:
    """Tests for collect_and_analyze and collect_and_summarize."""

    def test_collect_and_analyze_reads_log(self, mocker, record_factory):
        """Test that the git log is read with the requested limit."""
        mock_records = mocker.patch(
            "smartcommit.history.get_commit_records",
            return_value=[record_factory("feat: a")],
        )

        report = collect_and_analyze(25)

        mock_records.assert_called_once_with(25)
        assert report.total_count == 1

    def test_collect_and_summarize_propagates_errors(self, mocker):
        """Test that log errors surface as HistoryUnavailableError."""
        mocker.patch(
            "smartcommit.history.get_commit_records",
            side_effect=HistoryUnavailableError("Git log analysis error: boom"),
        )

        with pytest.raises(HistoryUnavailableError):
            collect_and_summarize()


class TestTopEntries:
    """Tests for top_entries function."""

    def test_sorted_descending_stable(self):
        """Test descending order with ties in insertion order."""
        assert top_entries({"a": 1, "b": 3, "c": 1, "d": 3}) == [
            ("b", 3), ("d", 3), ("a", 1), ("c", 1)
        ]

    def test_limit(self):
        """Test truncation to n entries."""
        assert top_entries({"a": 1, "b": 2}, 1) == [("b", 2)]
