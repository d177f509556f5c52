from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .errors import PreconditionError


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class PerformanceLevel(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    BELOW_AVERAGE = "Below Average"
    NEEDS_IMPROVEMENT = "Needs Improvement"


@dataclass
class GradedAnswer:
    question_id: str
    topic: Optional[str]
    is_correct: bool

    def __post_init__(self) -> None:
        # Untagged questions still count, under an empty topic.
        if self.topic is None:
            self.topic = ""


@dataclass
class TopicStat:
    topic: str
    correct_count: int = 0
    total_count: int = 0

    @property
    def accuracy(self) -> float:
        return self.correct_count / self.total_count * 100


@dataclass
class WeakArea:
    topic: str
    weakness_percentage: float


@dataclass
class PerformanceMetrics:
    percentage: int
    performance_level: PerformanceLevel
    message: str
    weak_areas_count: int
    strengths_count: int


@dataclass(frozen=True)
class KnowledgeDocument:
    id: str
    topic: str
    subject: str
    difficulty: str
    keywords: Tuple[str, ...] = ()
    content: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KnowledgeDocument":
        """Build a document from a loosely shaped record.

        ``topic`` is mandatory; every other field falls back to a default so
        that no ``None`` leaks into scoring.
        """
        if not isinstance(data, dict):
            raise PreconditionError(f"Knowledge document must be an object, got {type(data).__name__}.")
        topic = data.get("topic")
        if not isinstance(topic, str) or not topic.strip():
            raise PreconditionError("Knowledge document is missing a 'topic'.")
        keywords = data.get("keywords")
        if keywords is None:
            keywords = ()
        if not isinstance(keywords, (list, tuple)) or not all(isinstance(k, str) for k in keywords):
            raise PreconditionError(f"Keywords for '{topic}' must be a list of strings.")
        return cls(
            id=str(data.get("id") or topic),
            topic=topic,
            subject=_optional_str(data, "subject", topic) or "",
            difficulty=_optional_str(data, "difficulty", topic) or Difficulty.MEDIUM.value,
            keywords=tuple(keywords),
            content=_optional_str(data, "content", topic) or "",
        )


@dataclass
class ScoredDocument:
    document: KnowledgeDocument
    relevance_score: int

    @property
    def id(self) -> str:
        return self.document.id

    @property
    def topic(self) -> str:
        return self.document.topic

    @property
    def subject(self) -> str:
        return self.document.subject

    @property
    def difficulty(self) -> str:
        return self.document.difficulty

    @property
    def keywords(self) -> Tuple[str, ...]:
        return self.document.keywords

    @property
    def content(self) -> str:
        return self.document.content


@dataclass
class FormattedMaterial:
    title: str
    topic: str
    difficulty: str
    preview: str
    key_concepts: List[str]


@dataclass
class FormattedRecommendations:
    summary: str
    materials: List[FormattedMaterial]


@dataclass
class StudyPlanEntry:
    day: int
    focus: str
    materials: List[str]
    activities: List[str]


@dataclass
class QuizQuestion:
    id: str
    topic: Optional[str]
    correct_answer: int


@dataclass
class AttemptAnalysis:
    score: int
    total_questions: int
    weak_areas: List[str]
    metrics: PerformanceMetrics
    recommendations: List[str]
    next_difficulty: Difficulty


@dataclass
class MaterialRecommendations:
    weak_areas: List[str]
    summary: str
    materials: List[FormattedMaterial]
    study_plan: List[StudyPlanEntry]
    search_query: str
    total_materials_found: int


@dataclass
class AttemptRecord:
    score: int
    total_questions: int
    completed_at: datetime
    weak_areas: List[str] = field(default_factory=list)


@dataclass
class ProgressSummary:
    total_attempts: int
    average_score: int
    recent_activity: int
    score_trend: List[int]


def _optional_str(data: Dict[str, Any], key: str, topic: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise PreconditionError(
            f"Field '{key}' of '{topic}' must be a string, got {type(value).__name__}."
        )
    return value
