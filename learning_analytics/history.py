from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Sequence

from .models import AttemptRecord, ProgressSummary
from .scorer import round_half_up


def summarize_progress(
    attempts: Sequence[AttemptRecord],
    now: Optional[datetime] = None,
    recent_days: int = 7,
    trend_size: int = 10,
) -> ProgressSummary:
    """
    Dashboard figures for a student's attempts, given newest first.

    average_score is pooled over all questions rather than averaged per
    attempt; score_trend lists the newest ``trend_size`` attempts oldest first.
    """
    total_score = sum(attempt.score for attempt in attempts)
    total_questions = sum(attempt.total_questions for attempt in attempts)
    average_score = round_half_up(total_score / total_questions * 100) if total_questions > 0 else 0

    now = now or datetime.now(timezone.utc)
    cutoff = now - timedelta(days=recent_days)
    recent_activity = sum(1 for attempt in attempts if _as_aware(attempt.completed_at) > _as_aware(cutoff))

    trend: List[int] = [
        round_half_up(attempt.score / attempt.total_questions * 100)
        for attempt in reversed(attempts[:trend_size])
        if attempt.total_questions > 0
    ]

    return ProgressSummary(
        total_attempts=len(attempts),
        average_score=average_score,
        recent_activity=recent_activity,
        score_trend=trend,
    )


def _as_aware(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
