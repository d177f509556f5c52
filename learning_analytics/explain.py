from __future__ import annotations

import logging
import time
from typing import Sequence

from .config import GENERATION_MODEL, get_genai_client
from .errors import ExplanationError
from .retrieval import build_search_query
from .utils.token_log import extract_token_counts, log_token_usage

logger = logging.getLogger(__name__)


def explain_weak_areas(
    weak_areas: Sequence[str],
    model: str = GENERATION_MODEL,
) -> str:
    """
    Ask the generation model for a short study explanation of the weak areas.
    Returns "" when there is nothing to explain; raises ExplanationError if the
    model call fails or comes back empty.
    """
    query = build_search_query(weak_areas)
    if not query:
        return ""

    prompt = _build_explanation_prompt(query)
    response = None
    start = time.time()
    try:
        response = get_genai_client().models.generate_content(
            model=model,
            contents=[{"parts": [{"text": prompt}]}],
        )
        text = (response.text or "").strip()
    except Exception as exc:
        logger.warning("Explanation failed for weak areas %s: %s", list(weak_areas), exc)
        raise ExplanationError(f"Explanation request failed: {exc}") from exc
    finally:
        input_toks, output_toks = extract_token_counts(response) if response else (None, None)
        log_token_usage(
            usage=f"explain: {len(weak_areas)} weak areas",
            input_tokens=input_toks,
            output_tokens=output_toks,
            runtime_seconds=time.time() - start,
        )

    if not text:
        raise ExplanationError("Explanation model returned an empty response.")
    return text


def _build_explanation_prompt(query: str) -> str:
    return f"""
        You are a patient tutor helping a student who just finished a quiz.

        {query}

        For each topic give the core idea in two or three sentences and one
        common mistake to avoid. Plain text only, no markdown tables.
        """
