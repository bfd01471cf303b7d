"""
Vendor Q&A moderation API routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.question import (
    AnsweredFilter,
    VisibilityFilter,
    QuestionCreate,
    QuestionResponse,
)
from services.question_service import get_question_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api/qa", tags=["Q&A"])


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# QUESTIONS
# ===================

@router.get("/questions", response_model=list[QuestionResponse])
async def list_questions(
    search: Optional[str] = Query(None, description="Search text"),
    answered: AnsweredFilter = Query(AnsweredFilter.ALL),
    visibility: VisibilityFilter = Query(VisibilityFilter.ALL)
):
    """List questions with their answers, newest first."""
    try:
        return get_question_service().get_all(
            search=search,
            answered=answered,
            visibility=visibility
        )

    except Exception as e:
        return handle_error(e)


@router.post("/questions", response_model=QuestionResponse, status_code=201)
async def create_question(data: QuestionCreate):
    """Create a question for a customer."""
    try:
        return get_question_service().create(data)

    except Exception as e:
        return handle_error(e)


@router.post("/questions/{question_id}/toggle-visibility")
async def toggle_question_visibility(question_id: str):
    """Show or hide a question."""
    try:
        value = get_question_service().toggle_question_visibility(question_id)
        return {"id": question_id, "is_visible": value}

    except Exception as e:
        return handle_error(e)


@router.post("/questions/{question_id}/toggle-approval")
async def toggle_question_approval(question_id: str):
    """Approve or unapprove a question."""
    try:
        value = get_question_service().toggle_question_approval(question_id)
        return {"id": question_id, "is_approved": value}

    except Exception as e:
        return handle_error(e)


@router.delete("/questions/{question_id}", status_code=204)
async def delete_question(question_id: str):
    """Delete a question and its answers."""
    try:
        get_question_service().delete_question(question_id)
        return None

    except Exception as e:
        return handle_error(e)


# ===================
# ANSWERS
# ===================

@router.post("/answers/{answer_id}/toggle-visibility")
async def toggle_answer_visibility(answer_id: str):
    """Show or hide an answer."""
    try:
        value = get_question_service().toggle_answer_visibility(answer_id)
        return {"id": answer_id, "is_visible": value}

    except Exception as e:
        return handle_error(e)


@router.delete("/answers/{answer_id}", status_code=204)
async def delete_answer(answer_id: str):
    """Delete an answer."""
    try:
        get_question_service().delete_answer(answer_id)
        return None

    except Exception as e:
        return handle_error(e)
