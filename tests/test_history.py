"""Tests for the dashboard progress summary."""

from datetime import datetime, timedelta, timezone

from learning_analytics.history import summarize_progress
from learning_analytics.models import AttemptRecord

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)


def _attempt(score, total, days_ago):
    return AttemptRecord(score=score, total_questions=total, completed_at=NOW - timedelta(days=days_ago))


def test_empty_history():
    summary = summarize_progress([], now=NOW)
    assert summary.total_attempts == 0
    assert summary.average_score == 0
    assert summary.recent_activity == 0
    assert summary.score_trend == []


def test_average_is_pooled_over_questions():
    attempts = [_attempt(10, 10, 1), _attempt(0, 30, 2)]
    # 10 of 40 questions, not the mean of 100% and 0%
    assert summarize_progress(attempts, now=NOW).average_score == 25


def test_recent_activity_counts_last_week():
    attempts = [_attempt(5, 10, 0), _attempt(5, 10, 6), _attempt(5, 10, 7), _attempt(5, 10, 30)]
    assert summarize_progress(attempts, now=NOW).recent_activity == 2


def test_naive_timestamps_are_utc():
    attempts = [AttemptRecord(score=1, total_questions=2, completed_at=datetime(2026, 3, 14, 12, 0))]
    assert summarize_progress(attempts, now=NOW).recent_activity == 1


def test_score_trend_is_oldest_first_and_capped():
    attempts = [_attempt(i, 10, i) for i in range(12)]
    trend = summarize_progress(attempts, now=NOW).score_trend
    assert trend == [90, 80, 70, 60, 50, 40, 30, 20, 10, 0]
