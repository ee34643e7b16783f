"""
Quiz grading and in-memory session history.

Sessions are kept newest first for the lifetime of the workspace.
"""
from __future__ import annotations

import random
import string
import threading
import time
from datetime import datetime
from typing import Mapping

from loguru import logger

from quizbank.quiz.models import Quiz, QuizSession, UserAnswer


def _normalize_answer(value: str | None) -> str:
    return (value or "").strip().lower()


def _session_id() -> str:
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=5))
    return f"session-{int(time.time() * 1000)}-{suffix}"


def grade_quiz(quiz: Quiz, responses: Mapping[str, str | None]) -> QuizSession:
    """
    Grade a quiz attempt.

    Args:
        quiz: Quiz that was taken
        responses: question_id -> submitted answer (missing means unanswered)

    Returns:
        QuizSession with per-question results and a percentage score
    """
    answers = []
    for question in quiz.questions:
        submitted = responses.get(question.id)
        is_correct = (
            submitted is not None
            and question.answer is not None
            and _normalize_answer(submitted) == _normalize_answer(question.answer)
        )
        answers.append(
            UserAnswer(
                question_id=question.id,
                answer=submitted,
                is_correct=is_correct,
                correct_answer=question.answer,
            )
        )

    total = len(quiz.questions)
    correct = sum(1 for a in answers if a.is_correct)
    # half-up rounding to a whole percent
    score = int(correct * 100 / total + 0.5) if total else 0

    return QuizSession(
        id=_session_id(),
        quiz_id=quiz.id,
        quiz_title=quiz.title,
        score=score,
        completed_at=datetime.now(),
        answers=answers,
        subject=quiz.subject,
        topic=quiz.topic,
        quiz_type=quiz.questions[0].question_type.value if quiz.questions else "custom",
    )


class QuizSessionStore:
    """Completed quiz sessions, newest first."""

    def __init__(self):
        self._sessions: list[QuizSession] = []
        self._lock = threading.Lock()

    def add(self, session: QuizSession) -> None:
        with self._lock:
            self._sessions.insert(0, session)
        logger.info(
            'Session "{}" completed with score {}%',
            session.quiz_title,
            session.score,
        )

    def list(self) -> list[QuizSession]:
        with self._lock:
            return list(self._sessions)

    def get(self, session_id: str) -> QuizSession | None:
        with self._lock:
            return next((s for s in self._sessions if s.id == session_id), None)

    def __len__(self) -> int:
        return len(self._sessions)
