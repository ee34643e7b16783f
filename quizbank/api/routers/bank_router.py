"""
Bank router for question storage and browsing.

Endpoints for:
- Saving questions to the bank
- Listing and filtering banked questions
- Category and type listings for filter pickers
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from loguru import logger
from pydantic import BaseModel, Field

from quizbank.api.dependencies import get_workspace
from quizbank.bank.models import BankQuestion, QuestionType
from quizbank.core.errors import QuestionNotFoundError
from quizbank.sampling.criteria import QuizCriteria
from quizbank.workspace import Workspace

router = APIRouter()


# ========================================
# Request/Response Models
# ========================================


class QuestionCreateRequest(BaseModel):
    """Request model for saving a question to the bank."""

    id: Optional[str] = Field(None, description="Question ID (generated when omitted)")
    question_text: str = Field(..., min_length=1, description="Question text")
    question_type: QuestionType = Field(
        QuestionType.UNKNOWN,
        description="Question type: mcq, short_answer, true_false, fill_in_the_blank, unknown",
    )
    options: List[str] = Field(default_factory=list, description="MCQ options")
    answer: Optional[str] = Field(None, description="Correct answer or model answer")
    explanation: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    category: str = Field("Uncategorized", description="Subject category")
    marks: Optional[int] = Field(None, ge=0)
    relevant_image_description: Optional[str] = None
    owner_id: Optional[str] = Field(None, description="Owning user ID")

    def to_question(self) -> BankQuestion:
        return BankQuestion(
            id=self.id or "",
            question_text=self.question_text,
            question_type=self.question_type,
            options=list(self.options),
            answer=self.answer,
            explanation=self.explanation,
            tags=list(self.tags),
            category=self.category,
            marks=self.marks,
            relevant_image_description=self.relevant_image_description,
        )


class QuestionResponse(BaseModel):
    """Response model for a banked question."""

    id: str
    question_text: str
    question_type: QuestionType
    type_label: str
    options: List[str]
    answer: Optional[str]
    explanation: Optional[str]
    tags: List[str]
    category: str
    marks: Optional[int]
    relevant_image_description: Optional[str]
    owner_id: Optional[str]
    created_at: Optional[datetime]

    @classmethod
    def from_question(cls, question: BankQuestion) -> "QuestionResponse":
        return cls(
            id=question.id,
            question_text=question.question_text,
            question_type=question.question_type,
            type_label=question.question_type.label,
            options=question.options,
            answer=question.answer,
            explanation=question.explanation,
            tags=question.tags,
            category=question.category,
            marks=question.marks,
            relevant_image_description=question.relevant_image_description,
            owner_id=question.owner_id,
            created_at=question.created_at,
        )


class SaveQuestionResponse(BaseModel):
    """Response model for saving a question."""

    success: bool
    question_id: Optional[str]
    message: str


class QuestionTypeResponse(BaseModel):
    value: QuestionType
    label: str


# ========================================
# Endpoints
# ========================================


@router.post(
    "/questions",
    response_model=SaveQuestionResponse,
    status_code=201,
    summary="Save question to bank",
)
def save_question(
    request: QuestionCreateRequest,
    workspace: Workspace = Depends(get_workspace),
) -> SaveQuestionResponse:
    """Save a question to the bank. Saving an existing ID is rejected with 409."""
    try:
        result = workspace.bank.save(request.to_question(), owner_id=request.owner_id)
    except Exception as exc:
        logger.exception("Failed to save question")
        raise HTTPException(status_code=500, detail=str(exc))

    if not result.success:
        raise HTTPException(status_code=409, detail=result.message)

    return SaveQuestionResponse(
        success=result.success,
        question_id=result.question_id,
        message=result.message,
    )


@router.get(
    "/questions",
    response_model=List[QuestionResponse],
    summary="List banked questions",
)
def list_questions(
    search: Optional[str] = Query(None, description="Case-insensitive text search"),
    category: Optional[str] = Query(None),
    question_type: Optional[str] = Query(None),
    tags: Optional[List[str]] = Query(None, description="Required tags"),
    owner_id: Optional[str] = Query(None),
    workspace: Workspace = Depends(get_workspace),
) -> List[QuestionResponse]:
    """List questions, filtered by any combination of search text, category, type and tags."""
    criteria = QuizCriteria.build(
        description=search,
        tags=tags,
        category=category,
        question_type=question_type,
    )
    questions = workspace.bank.filter(criteria, owner_id=owner_id)
    logger.debug(f"Listing {len(questions)} of {len(workspace.bank)} questions")
    return [QuestionResponse.from_question(q) for q in questions]


@router.get(
    "/questions/{question_id}",
    response_model=QuestionResponse,
    summary="Get banked question",
)
def get_question(
    question_id: str,
    workspace: Workspace = Depends(get_workspace),
) -> QuestionResponse:
    try:
        question = workspace.bank.require(question_id)
    except QuestionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    return QuestionResponse.from_question(question)


@router.delete(
    "/questions/{question_id}",
    summary="Remove question from bank",
)
def delete_question(
    question_id: str,
    workspace: Workspace = Depends(get_workspace),
) -> dict[str, str]:
    if not workspace.bank.remove(question_id):
        raise HTTPException(status_code=404, detail="Question not found")
    return {"status": "deleted", "question_id": question_id}


@router.get(
    "/categories",
    response_model=List[str],
    summary="List categories",
)
def list_categories(workspace: Workspace = Depends(get_workspace)) -> List[str]:
    return workspace.bank.categories()


@router.get(
    "/types",
    response_model=List[QuestionTypeResponse],
    summary="List question types in the bank",
)
def list_types(workspace: Workspace = Depends(get_workspace)) -> List[QuestionTypeResponse]:
    return [
        QuestionTypeResponse(value=t, label=t.label)
        for t in workspace.bank.question_types()
    ]
