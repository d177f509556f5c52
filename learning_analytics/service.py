from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .config import DEFAULT_MATERIAL_LIMIT
from .knowledge_base import filter_by_subject, load_knowledge_base
from .models import KnowledgeDocument, MaterialRecommendations
from .retrieval import build_search_query, retrieve_materials
from .scorer import analyze_attempt
from .study_plan import build_study_plan, format_recommendations

logger = logging.getLogger(__name__)

__all__ = ["analyze_attempt", "recommend_materials"]


def recommend_materials(
    weak_areas: Sequence[str],
    corpus: Optional[Iterable[KnowledgeDocument]] = None,
    subject: Optional[str] = None,
    limit: int = DEFAULT_MATERIAL_LIMIT,
) -> MaterialRecommendations:
    """
    Entry point for study-material recommendations.
    Inputs: weak areas (most weak first), an optional candidate corpus (the
    configured knowledge base when omitted), an optional subject filter and
    the result limit.
    Output: ranked materials, summary, study plan and search query.
    """
    weak_areas = list(weak_areas)
    documents: List[KnowledgeDocument] = (
        list(corpus) if corpus is not None else load_knowledge_base()
    )
    candidates = filter_by_subject(documents, subject)

    materials = retrieve_materials(candidates, weak_areas, limit)
    formatted = format_recommendations(materials, weak_areas)
    study_plan = build_study_plan(weak_areas, materials)
    logger.info(
        "Recommended %d materials from %d candidates (subject=%s)",
        len(materials),
        len(candidates),
        subject or "*",
    )

    return MaterialRecommendations(
        weak_areas=weak_areas,
        summary=formatted.summary,
        materials=formatted.materials,
        study_plan=study_plan,
        search_query=build_search_query(weak_areas),
        total_materials_found=len(materials),
    )
