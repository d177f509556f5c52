from __future__ import annotations

import re
from typing import List, Sequence

from .models import FormattedMaterial, FormattedRecommendations, ScoredDocument, StudyPlanEntry

MAX_KEY_CONCEPTS = 10
MAX_PLAN_DAYS = 7
MAX_MATERIALS_PER_DAY = 2
PREVIEW_LENGTH = 200

_BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
_LIST_ITEM_PATTERN = re.compile(r"^[0-9\-*]\.\s+(.+)$", re.MULTILINE)


def extract_key_concepts(content: str) -> List[str]:
    """
    Pull display concepts out of markdown-ish content: bold spans first, then
    "1. item" style list lines shorter than 100 characters. Duplicates are
    removed keeping first occurrence; at most 10 are returned.
    """
    concepts: List[str] = []

    for match in _BOLD_PATTERN.findall(content):
        concept = match.strip()
        if concept:
            concepts.append(concept)

    for match in _LIST_ITEM_PATTERN.findall(content):
        concept = match.strip()
        if 0 < len(concept) < 100:
            concepts.append(concept)

    return list(dict.fromkeys(concepts))[:MAX_KEY_CONCEPTS]


def format_recommendations(
    materials: Sequence[ScoredDocument],
    weak_areas: Sequence[str],
) -> FormattedRecommendations:
    if weak_areas:
        summary = (
            f"Based on your performance, we recommend focusing on: {', '.join(weak_areas)}. "
            "Here are curated materials to help you improve:"
        )
    else:
        summary = "Great job! Here are some materials to further enhance your knowledge:"

    formatted = [
        FormattedMaterial(
            title=material.topic,
            topic=material.topic,
            difficulty=material.difficulty,
            preview=material.content[:PREVIEW_LENGTH] + "...",
            key_concepts=extract_key_concepts(material.content),
        )
        for material in materials
    ]
    return FormattedRecommendations(summary=summary, materials=formatted)


def build_study_plan(
    weak_areas: Sequence[str],
    materials: Sequence[ScoredDocument],
) -> List[StudyPlanEntry]:
    """One day per weak area, most weak first, capped at a week."""
    plan: List[StudyPlanEntry] = []
    for index, area in enumerate(weak_areas[:MAX_PLAN_DAYS]):
        needle = area.lower()
        relevant = [m.topic for m in materials if needle in m.topic.lower()]
        plan.append(
            StudyPlanEntry(
                day=index + 1,
                focus=area,
                materials=relevant[:MAX_MATERIALS_PER_DAY],
                activities=_activities_for(area),
            )
        )
    return plan


def _activities_for(area: str) -> List[str]:
    return [
        f"Read knowledge base material on {area}",
        f"Practice 5-10 questions on {area}",
        "Take notes on key concepts",
        "Review and summarize your understanding",
    ]
