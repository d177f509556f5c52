from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping, Sequence, Tuple

from .errors import PreconditionError
from .models import (
    AttemptAnalysis,
    Difficulty,
    GradedAnswer,
    PerformanceLevel,
    PerformanceMetrics,
    QuizQuestion,
    TopicStat,
    WeakArea,
)

logger = logging.getLogger(__name__)

WEAK_AREA_ACCURACY_THRESHOLD = 60

MASTERY_RECOMMENDATIONS = [
    "Great job! You've mastered all topics in this quiz.",
    "Consider taking advanced quizzes to challenge yourself further.",
    "Review concepts periodically to maintain your understanding.",
]

# Highest band first; the first threshold the percentage reaches wins.
PERFORMANCE_BANDS: List[Tuple[float, PerformanceLevel, str]] = [
    (90, PerformanceLevel.EXCELLENT, "Outstanding performance! Keep up the great work!"),
    (75, PerformanceLevel.GOOD, "Good job! A little more practice will make you excellent."),
    (60, PerformanceLevel.AVERAGE, "You're on the right track. Focus on your weak areas."),
    (40, PerformanceLevel.BELOW_AVERAGE, "More practice needed. Review the concepts thoroughly."),
    (float("-inf"), PerformanceLevel.NEEDS_IMPROVEMENT, "Don't worry! Start with basics and build gradually."),
]


def score_attempt(answers: Iterable[GradedAnswer]) -> List[str]:
    """Return the weak topics of an attempt, most weak first."""
    return [area.topic for area in find_weak_areas(answers)]


def find_weak_areas(answers: Iterable[GradedAnswer]) -> List[WeakArea]:
    """
    Group answers by topic and keep the topics answered with < 60% accuracy.
    Sorted by weakness percentage descending; equal weaknesses keep the order
    in which their topics first appeared.
    """
    topic_stats: Dict[str, TopicStat] = {}
    for answer in answers:
        stat = topic_stats.setdefault(answer.topic, TopicStat(topic=answer.topic))
        stat.total_count += 1
        if answer.is_correct:
            stat.correct_count += 1

    weak_areas = [
        WeakArea(topic=stat.topic, weakness_percentage=100 - stat.accuracy)
        for stat in topic_stats.values()
        if stat.accuracy < WEAK_AREA_ACCURACY_THRESHOLD
    ]
    weak_areas.sort(key=lambda area: area.weakness_percentage, reverse=True)
    logger.debug(
        "Scored %d topics, %d weak: %s",
        len(topic_stats),
        len(weak_areas),
        [area.topic for area in weak_areas],
    )
    return weak_areas


def build_recommendations(weak_areas: Sequence[str]) -> List[str]:
    if not weak_areas:
        return list(MASTERY_RECOMMENDATIONS)

    recommendations = [
        f"Focus on improving your understanding of: {', '.join(weak_areas)}",
        "Review the knowledge base materials for these topics",
        "Practice more questions in your weak areas",
        "Consider watching video tutorials or reading additional resources",
    ]
    if len(weak_areas) > 3:
        recommendations.extend(
            [
                "Start with one or two topics to avoid feeling overwhelmed",
                "Set specific learning goals for each weak area",
            ]
        )
    return recommendations


def classify_performance(
    score: int,
    total_questions: int,
    weak_area_count: int,
) -> PerformanceMetrics:
    """
    Map an attempt score onto a performance band.
    The band is picked from the exact percentage; the reported percentage is
    rounded half-up. strengths_count subtracts the weak *topic* count from the
    *question* count, which is what existing consumers expect.
    """
    percentage = _percentage(score, total_questions)
    if weak_area_count < 0:
        raise PreconditionError("weak_area_count must be >= 0.")

    for threshold, level, message in PERFORMANCE_BANDS:
        if percentage >= threshold:
            break

    return PerformanceMetrics(
        percentage=round_half_up(percentage),
        performance_level=level,
        message=message,
        weak_areas_count=weak_area_count,
        strengths_count=total_questions - weak_area_count,
    )


def recommend_difficulty(
    current_difficulty: Difficulty | str,
    score: int,
    total_questions: int,
) -> Difficulty:
    percentage = _percentage(score, total_questions)

    if current_difficulty == Difficulty.EASY:
        return Difficulty.MEDIUM if percentage >= 80 else Difficulty.EASY
    if current_difficulty == Difficulty.MEDIUM:
        if percentage >= 85:
            return Difficulty.HARD
        if percentage < 60:
            return Difficulty.EASY
        return Difficulty.MEDIUM
    # HARD, and anything unrecognised.
    return Difficulty.MEDIUM if percentage < 60 else Difficulty.HARD


def grade_answers(
    questions: Sequence[QuizQuestion],
    submitted: Mapping[str, Any],
) -> Tuple[List[GradedAnswer], int]:
    """
    Compare submitted answer indexes (keyed by question id) with each
    question's correct index. Unanswered questions count as incorrect.
    """
    graded: List[GradedAnswer] = []
    score = 0
    for question in questions:
        is_correct = submitted.get(question.id) == question.correct_answer
        if is_correct:
            score += 1
        graded.append(
            GradedAnswer(
                question_id=question.id,
                topic=question.topic,
                is_correct=is_correct,
            )
        )
    return graded, score


def analyze_attempt(
    questions: Sequence[QuizQuestion],
    submitted: Mapping[str, Any],
    current_difficulty: Difficulty | str,
) -> AttemptAnalysis:
    if not questions:
        raise PreconditionError("An attempt needs at least one question.")

    graded, score = grade_answers(questions, submitted)
    total_questions = len(questions)
    weak_areas = score_attempt(graded)
    analysis = AttemptAnalysis(
        score=score,
        total_questions=total_questions,
        weak_areas=weak_areas,
        metrics=classify_performance(score, total_questions, len(weak_areas)),
        recommendations=build_recommendations(weak_areas),
        next_difficulty=recommend_difficulty(current_difficulty, score, total_questions),
    )
    logger.info(
        "Analyzed attempt: score=%d/%d weak_areas=%d next=%s",
        score,
        total_questions,
        len(weak_areas),
        analysis.next_difficulty.value,
    )
    return analysis


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _percentage(score: int, total_questions: int) -> float:
    if total_questions < 1:
        raise PreconditionError("total_questions must be >= 1.")
    if score < 0 or score > total_questions:
        raise PreconditionError(
            f"score must be between 0 and total_questions ({total_questions}), got {score}."
        )
    return score / total_questions * 100
