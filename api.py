from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional
import logging
import time

from fastapi import FastAPI, Header, HTTPException, Query, Request, Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from learning_analytics.config import DEFAULT_MATERIAL_LIMIT, LOG_LEVEL
from learning_analytics.errors import ExplanationError, PreconditionError
from learning_analytics.explain import explain_weak_areas
from learning_analytics.history import summarize_progress
from learning_analytics.models import (
    AttemptAnalysis,
    AttemptRecord,
    FormattedMaterial,
    MaterialRecommendations,
    PerformanceMetrics,
    ProgressSummary,
    QuizQuestion,
    StudyPlanEntry,
)
from learning_analytics.retrieval import parse_weak_areas
from learning_analytics.service import analyze_attempt, recommend_materials
from learning_analytics.utils.json_naming_converter import convert_keys_snake_to_camel
from learning_analytics.utils.token_log import get_token_entries, reset_token_log

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)


class QuestionPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    topic: Optional[str] = None
    correct_answer: int = Field(alias="correctAnswer")


class AttemptAnalysisRequest(BaseModel):
    questions: List[QuestionPayload] = Field(min_length=1,
        description="Questions of the quiz, each with its topic and correct option index.",
    )
    answers: Dict[str, Optional[int]] = Field(default_factory=dict,
        description="Submitted option index keyed by question id.",
    )
    difficulty: str = Field(default="MEDIUM",
        description="Difficulty of the quiz that was attempted.",
    )


class AttemptPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(ge=0)
    total_questions: int = Field(alias="totalQuestions", ge=0)
    completed_at: datetime = Field(alias="completedAt")
    weak_areas: List[str] = Field(default_factory=list, alias="weakAreas")


class ProgressSummaryRequest(BaseModel):
    attempts: List[AttemptPayload] = Field(
        description="Attempts of one student, newest first."
    )


class ExplanationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    weak_areas: List[str] = Field(alias="weakAreas",
        description="Weak topics ordered most weak first.",
    )


class ExplanationResponse(BaseModel):
    explanation: str
    log: Optional[List[Dict[str, Any]]] = None


app = FastAPI(
    title="Learning Analytics API",
    version="0.1.0",
)


@app.middleware("http")
async def add_runtime_header(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start
    response.headers["X-Runtime-Seconds"] = f"{elapsed:.2f}"
    return response


@app.exception_handler(PreconditionError)
async def precondition_error_handler(request: Request, exc: PreconditionError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/favicon.ico", include_in_schema=False)
def favicon() -> Response:
    return Response(status_code=204)


@app.post("/v1/attempt-analysis")
def post_attempt_analysis(request: AttemptAnalysisRequest) -> Dict[str, Any]:
    questions = [
        QuizQuestion(id=q.id, topic=q.topic, correct_answer=q.correct_answer)
        for q in request.questions
    ]
    analysis = analyze_attempt(questions, request.answers, request.difficulty)
    return convert_keys_snake_to_camel(_serialize_analysis(analysis))


@app.get("/v1/recommendations")
def get_recommendations(
    weak_areas: Optional[str] = Query(None, alias="weakAreas"),
    subject: Optional[str] = Query(None),
    limit: int = Query(DEFAULT_MATERIAL_LIMIT, ge=0),
) -> Dict[str, Any]:
    if not weak_areas:
        raise HTTPException(status_code=400, detail="Weak areas parameter is required")

    result = recommend_materials(
        weak_areas=parse_weak_areas(weak_areas),
        subject=subject or None,
        limit=limit,
    )
    return convert_keys_snake_to_camel(_serialize_recommendations(result))


@app.post("/v1/progress-summary")
def post_progress_summary(request: ProgressSummaryRequest) -> Dict[str, Any]:
    attempts = [
        AttemptRecord(
            score=a.score,
            total_questions=a.total_questions,
            completed_at=a.completed_at,
            weak_areas=a.weak_areas,
        )
        for a in request.attempts
    ]
    return convert_keys_snake_to_camel(_serialize_progress(summarize_progress(attempts)))


@app.post(
    "/v1/explanations",
    response_model=ExplanationResponse,
    response_model_exclude_none=True,
)
def post_explanation(
    request: ExplanationRequest,
    include_log: bool = Header(True, convert_underscores=False),
) -> ExplanationResponse:
    reset_token_log()
    try:
        explanation = explain_weak_areas(request.weak_areas)
    except ExplanationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    if include_log:
        return ExplanationResponse(explanation=explanation, log=get_token_entries())

    return ExplanationResponse(explanation=explanation)


def _serialize_analysis(analysis: AttemptAnalysis) -> Dict[str, Any]:
    return {
        "score": analysis.score,
        "total_questions": analysis.total_questions,
        "weak_areas": list(analysis.weak_areas),
        "analysis": {
            "metrics": _serialize_metrics(analysis.metrics),
            "recommendations": list(analysis.recommendations),
            "next_difficulty": analysis.next_difficulty.value,
        },
    }


def _serialize_metrics(metrics: PerformanceMetrics) -> Dict[str, Any]:
    return {
        "percentage": metrics.percentage,
        "performance_level": metrics.performance_level.value,
        "message": metrics.message,
        "weak_areas_count": metrics.weak_areas_count,
        "strengths_count": metrics.strengths_count,
    }


def _serialize_recommendations(result: MaterialRecommendations) -> Dict[str, Any]:
    return {
        "weak_areas": list(result.weak_areas),
        "summary": result.summary,
        "materials": [_serialize_material(m) for m in result.materials],
        "study_plan": [_serialize_plan_entry(entry) for entry in result.study_plan],
        "search_query": result.search_query,
        "total_materials_found": result.total_materials_found,
    }


def _serialize_material(material: FormattedMaterial) -> Dict[str, Any]:
    return {
        "title": material.title,
        "topic": material.topic,
        "difficulty": material.difficulty,
        "preview": material.preview,
        "key_concepts": list(material.key_concepts),
    }


def _serialize_plan_entry(entry: StudyPlanEntry) -> Dict[str, Any]:
    return {
        "day": entry.day,
        "focus": entry.focus,
        "materials": list(entry.materials),
        "activities": list(entry.activities),
    }


def _serialize_progress(summary: ProgressSummary) -> Dict[str, Any]:
    return {
        "total_attempts": summary.total_attempts,
        "average_score": summary.average_score,
        "recent_activity": summary.recent_activity,
        "score_trend": list(summary.score_trend),
    }
