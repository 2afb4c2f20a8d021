"""
Solutions Router — /api

Endpoints:
  POST /api/generate-solution — generate + store the AI answer/solution for one question
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from database.database import get_db
from database.schemas import (
    GenerateSolutionRequest,
    GenerateSolutionResponse,
    QuestionResponse,
)
from generation.answer_client import get_answer_client
from generation.errors import (
    PersistenceFailure,
    QuestionNotFound,
    ResponseParseFailure,
    SolutionGenerationError,
    UpstreamCallFailure,
)
from generation.solution_generator import SolutionGenerator

router = APIRouter(prefix="/api", tags=["solutions"])

# Use Python's standard logger so output appears in the uvicorn console
log = logging.getLogger("generation.solutions")
logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)s  %(message)s")

_STATUS_BY_ERROR = {
    QuestionNotFound: 404,
    UpstreamCallFailure: 502,
    ResponseParseFailure: 502,
    PersistenceFailure: 500,
}


def get_solution_generator(db: Session = Depends(get_db)) -> SolutionGenerator:
    """Request-scoped generator wired to the shared answer client."""
    try:
        client = get_answer_client()
    except RuntimeError as e:
        raise HTTPException(
            status_code=503,
            detail={"error": "AI service is not configured", "category": "internal", "details": str(e)},
        )
    return SolutionGenerator(db, client)


def _error_detail(err: SolutionGenerationError) -> dict:
    detail = {"error": err.message, "category": err.category}
    if err.details:
        detail["details"] = err.details
    if isinstance(err, ResponseParseFailure):
        detail["raw"] = err.raw
    return detail


@router.post("/generate-solution", response_model=GenerateSolutionResponse)
async def generate_solution(
    request: GenerateSolutionRequest,
    generator: SolutionGenerator = Depends(get_solution_generator),
):
    """
    **Generate and store the answer + step-by-step solution for one question.**

    Regenerating overwrites any previously stored answer/solution. Nothing is
    written unless the model returns a valid JSON object with non-empty
    `answer` and `solution`. Failures carry a `category`; there is no retry,
    so call again to retry.
    """
    question_id = (request.question_id or "").strip()
    if not question_id:
        raise HTTPException(
            status_code=400,
            detail={"error": "Question ID is required", "category": "bad_request"},
        )

    try:
        result = await generator.generate(question_id)
    except SolutionGenerationError as e:
        status = _STATUS_BY_ERROR.get(type(e), 500)
        raise HTTPException(status_code=status, detail=_error_detail(e))
    except Exception as e:
        log.exception(f"[SOLUTION] Unhandled error for question {question_id}: {e}")
        raise HTTPException(
            status_code=500,
            detail={"error": "Internal server error", "category": "internal", "details": str(e)},
        )

    return GenerateSolutionResponse(
        message="Solution generated and saved successfully!",
        question=QuestionResponse.model_validate(result.question),
        generated_at=result.generated_at,
    )
