"""
Quiz router for generation, assembly and grading.

Endpoints for:
- Criteria-based quiz generation from cyclic pools
- Pool inspection and reset
- Hand-picked quiz assembly
- Grading submissions and session history
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from pydantic import BaseModel, Field

from config import get_settings
from quizbank.api.dependencies import get_workspace
from quizbank.api.routers.bank_router import QuestionResponse
from quizbank.core.errors import EmptyAssemblyError, EmptyPoolError, QuestionNotFoundError
from quizbank.quiz.assembly import AssemblyOutcome
from quizbank.quiz.models import Quiz, QuizSession
from quizbank.quiz.sessions import grade_quiz
from quizbank.sampling.criteria import QuizCriteria
from quizbank.workspace import Workspace

router = APIRouter()
settings = get_settings()


# ========================================
# Request/Response Models
# ========================================


class GenerateQuizRequest(BaseModel):
    """Request model for criteria-based quiz generation."""

    description: Optional[str] = Field(None, description="Text that question text must contain")
    tags: List[str] = Field(default_factory=list, description="Tags every question must carry")
    category: Optional[str] = None
    question_type: Optional[str] = None
    count: int = Field(settings.quiz_default_questions, ge=1, description="Number of questions")
    owner_id: Optional[str] = None
    title: Optional[str] = None

    def to_criteria(self) -> QuizCriteria:
        return QuizCriteria.build(
            description=self.description,
            tags=self.tags,
            category=self.category,
            question_type=self.question_type,
        )


class QuizResponse(BaseModel):
    """Response model for a quiz."""

    id: str
    title: str
    subject: Optional[str]
    topic: Optional[str]
    created_at: datetime
    created_by: Optional[str]
    questions: List[QuestionResponse]

    @classmethod
    def from_quiz(cls, quiz: Quiz) -> "QuizResponse":
        return cls(
            id=quiz.id,
            title=quiz.title,
            subject=quiz.subject,
            topic=quiz.topic,
            created_at=quiz.created_at,
            created_by=quiz.created_by,
            questions=[QuestionResponse.from_question(q) for q in quiz.questions],
        )


class GenerateQuizResponse(BaseModel):
    """Response model for a generated quiz."""

    quiz: QuizResponse
    cycle_complete: bool
    pool_size: int
    notice: Optional[str]


class PoolResponse(BaseModel):
    """Response model for pool state."""

    key: str
    size: int
    cursor: int
    remaining: int


class AssemblyAddRequest(BaseModel):
    question_id: str


class AssemblyAddResponse(BaseModel):
    outcome: AssemblyOutcome
    title: str
    message: str
    count: int


class AssemblyResponse(BaseModel):
    count: int
    questions: List[QuestionResponse]


class AssembleQuizRequest(BaseModel):
    title: str = Field(..., min_length=1)
    subject: Optional[str] = None
    topic: Optional[str] = None
    created_by: Optional[str] = None


class SubmitQuizRequest(BaseModel):
    """Request model for submitting a quiz attempt."""

    quiz_id: str
    answers: Dict[str, Optional[str]] = Field(
        default_factory=dict,
        description="Question ID -> submitted answer",
    )


class AnswerResponse(BaseModel):
    question_id: str
    answer: Optional[str]
    is_correct: bool
    correct_answer: Optional[str]


class SessionResponse(BaseModel):
    """Response model for a completed quiz session."""

    id: str
    quiz_id: str
    quiz_title: str
    score: int
    correct_count: int
    completed_at: datetime
    subject: Optional[str]
    topic: Optional[str]
    quiz_type: str
    answers: List[AnswerResponse]

    @classmethod
    def from_session(cls, session: QuizSession) -> "SessionResponse":
        return cls(
            id=session.id,
            quiz_id=session.quiz_id,
            quiz_title=session.quiz_title,
            score=session.score,
            correct_count=session.correct_count,
            completed_at=session.completed_at,
            subject=session.subject,
            topic=session.topic,
            quiz_type=session.quiz_type,
            answers=[
                AnswerResponse(
                    question_id=a.question_id,
                    answer=a.answer,
                    is_correct=a.is_correct,
                    correct_answer=a.correct_answer,
                )
                for a in session.answers
            ],
        )


# ========================================
# Generation & Pools
# ========================================


@router.post(
    "/generate",
    response_model=GenerateQuizResponse,
    summary="Generate quiz by criteria",
)
def generate_quiz(
    request: GenerateQuizRequest,
    workspace: Workspace = Depends(get_workspace),
) -> GenerateQuizResponse:
    """
    Generate a quiz from banked questions matching the criteria.

    Repeated requests with the same criteria serve every matching question
    once before any repeats; `cycle_complete` is set on the request that
    exhausts the pool.
    """
    logger.info(f"Generating {request.count}-question quiz")

    try:
        generated = workspace.assembler.generate(
            request.to_criteria(),
            request.count,
            owner_id=request.owner_id,
            title=request.title,
        )
    except EmptyPoolError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except Exception as exc:
        logger.exception("Failed to generate quiz")
        raise HTTPException(status_code=500, detail=str(exc))

    workspace.remember(generated.quiz)
    return GenerateQuizResponse(
        quiz=QuizResponse.from_quiz(generated.quiz),
        cycle_complete=generated.cycle_complete,
        pool_size=generated.pool_size,
        notice=generated.notice,
    )


@router.get(
    "/pools",
    response_model=List[PoolResponse],
    summary="List question pools",
)
def list_pools(workspace: Workspace = Depends(get_workspace)) -> List[PoolResponse]:
    return [
        PoolResponse(
            key=str(snapshot.key),
            size=snapshot.size,
            cursor=snapshot.cursor,
            remaining=snapshot.remaining,
        )
        for snapshot in workspace.pool.snapshots()
    ]


@router.delete(
    "/pools",
    summary="Reset all question pools",
)
def reset_pools(workspace: Workspace = Depends(get_workspace)) -> dict[str, Any]:
    removed = workspace.pool.reset()
    return {"status": "reset", "pools_removed": removed}


@router.get(
    "/quizzes/{quiz_id}",
    response_model=QuizResponse,
    summary="Get quiz",
)
def get_quiz(
    quiz_id: str,
    workspace: Workspace = Depends(get_workspace),
) -> QuizResponse:
    quiz = workspace.quizzes.get(quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return QuizResponse.from_quiz(quiz)


# ========================================
# Assembly
# ========================================


@router.get(
    "/assembly",
    response_model=AssemblyResponse,
    summary="Get assembled questions",
)
def get_assembly(workspace: Workspace = Depends(get_workspace)) -> AssemblyResponse:
    questions = workspace.assembly.questions()
    return AssemblyResponse(
        count=len(questions),
        questions=[QuestionResponse.from_question(q) for q in questions],
    )


@router.post(
    "/assembly",
    response_model=AssemblyAddResponse,
    summary="Add question to assembly",
)
def add_to_assembly(
    request: AssemblyAddRequest,
    workspace: Workspace = Depends(get_workspace),
) -> AssemblyAddResponse:
    """Add a banked question. Duplicates and non-MCQ questions are reported, not added."""
    try:
        question = workspace.bank.require(request.question_id)
    except QuestionNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))

    result = workspace.assembly.add(question)
    return AssemblyAddResponse(
        outcome=result.outcome,
        title=result.title,
        message=result.message,
        count=workspace.assembly.count(),
    )


@router.delete(
    "/assembly/{question_id}",
    summary="Remove question from assembly",
)
def remove_from_assembly(
    question_id: str,
    workspace: Workspace = Depends(get_workspace),
) -> dict[str, Any]:
    if not workspace.assembly.remove(question_id):
        raise HTTPException(status_code=404, detail="Question not in assembly")
    return {"status": "removed", "count": workspace.assembly.count()}


@router.delete(
    "/assembly",
    summary="Clear assembly",
)
def clear_assembly(workspace: Workspace = Depends(get_workspace)) -> dict[str, Any]:
    workspace.assembly.clear()
    return {"status": "cleared", "count": 0}


@router.post(
    "/assembly/quiz",
    response_model=QuizResponse,
    summary="Build quiz from assembly",
)
def build_assembled_quiz(
    request: AssembleQuizRequest,
    workspace: Workspace = Depends(get_workspace),
) -> QuizResponse:
    try:
        quiz = workspace.assembly.build_quiz(
            title=request.title,
            subject=request.subject,
            topic=request.topic,
            created_by=request.created_by,
        )
    except EmptyAssemblyError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    workspace.remember(quiz)
    return QuizResponse.from_quiz(quiz)


# ========================================
# Sessions
# ========================================


@router.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=201,
    summary="Submit quiz attempt",
)
def submit_quiz(
    request: SubmitQuizRequest,
    workspace: Workspace = Depends(get_workspace),
) -> SessionResponse:
    """Grade an attempt at a generated or assembled quiz and record the session."""
    quiz = workspace.quizzes.get(request.quiz_id)
    if quiz is None:
        raise HTTPException(status_code=404, detail="Quiz not found")

    session = grade_quiz(quiz, request.answers)
    workspace.sessions.add(session)
    return SessionResponse.from_session(session)


@router.get(
    "/sessions",
    response_model=List[SessionResponse],
    summary="List quiz sessions",
)
def list_sessions(workspace: Workspace = Depends(get_workspace)) -> List[SessionResponse]:
    return [SessionResponse.from_session(s) for s in workspace.sessions.list()]


@router.get(
    "/sessions/{session_id}",
    response_model=SessionResponse,
    summary="Get quiz session",
)
def get_session(
    session_id: str,
    workspace: Workspace = Depends(get_workspace),
) -> SessionResponse:
    session = workspace.sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return SessionResponse.from_session(session)
