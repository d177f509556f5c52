from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .config import DEFAULT_MATERIAL_LIMIT
from .errors import PreconditionError
from .models import KnowledgeDocument, ScoredDocument

logger = logging.getLogger(__name__)

TOPIC_MATCH_POINTS = 10
KEYWORD_MATCH_POINTS = 3
CONTENT_MATCH_POINTS = 2


def retrieve_materials(
    corpus: Iterable[KnowledgeDocument],
    weak_areas: Sequence[str],
    limit: int = DEFAULT_MATERIAL_LIMIT,
) -> List[ScoredDocument]:
    """
    Rank candidate documents against the weak areas.
    Documents scoring 0 are dropped; equal scores keep their corpus order.
    """
    if limit < 0:
        raise PreconditionError("limit must be >= 0.")
    if not weak_areas:
        return []

    scored = [
        ScoredDocument(document=doc, relevance_score=calculate_relevance_score(doc, weak_areas))
        for doc in corpus
    ]
    relevant = [doc for doc in scored if doc.relevance_score > 0]
    # sorted() is stable, so ties stay in corpus order.
    ranked = sorted(relevant, key=lambda doc: doc.relevance_score, reverse=True)
    logger.debug(
        "Ranked %d of %d documents for weak areas %s",
        len(ranked),
        len(scored),
        list(weak_areas),
    )
    return ranked[:limit]


def calculate_relevance_score(document: KnowledgeDocument, weak_areas: Sequence[str]) -> int:
    score = 0
    topic = document.topic.lower()
    keywords = [keyword.lower() for keyword in document.keywords]
    content = document.content.lower()

    for weak_area in weak_areas:
        area = weak_area.lower()

        if area in topic or topic in area:
            score += TOPIC_MATCH_POINTS

        for keyword in keywords:
            if keyword in area or area in keyword:
                score += KEYWORD_MATCH_POINTS

        if area in content:
            score += CONTENT_MATCH_POINTS

    return score


def build_search_query(weak_areas: Sequence[str]) -> str:
    if not weak_areas:
        return ""
    return f"Explain concepts related to: {', '.join(weak_areas)}"


def parse_weak_areas(raw: Optional[str]) -> List[str]:
    """Split a comma-separated weak-area parameter, trimming each entry."""
    if not raw:
        return []
    return [area.strip() for area in raw.split(",")]
