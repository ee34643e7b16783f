"""Quiz, answer and session data structures."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from quizbank.bank.models import BankQuestion


@dataclass
class Quiz:
    """An assembled or generated quiz."""
    id: str
    title: str
    questions: list[BankQuestion]
    subject: str | None = None
    topic: str | None = None
    created_at: datetime = field(default_factory=datetime.now)
    created_by: str | None = None

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "questions": [q.to_dict() for q in self.questions],
            "subject": self.subject,
            "topic": self.topic,
            "created_at": self.created_at.isoformat(),
            "created_by": self.created_by,
        }


@dataclass
class UserAnswer:
    """A learner's answer to one quiz question."""
    question_id: str
    answer: str | None
    is_correct: bool = False
    correct_answer: str | None = None


@dataclass
class QuizSession:
    """A completed quiz attempt."""
    id: str
    quiz_id: str
    quiz_title: str
    score: int  # percent, 0-100
    completed_at: datetime
    answers: list[UserAnswer] = field(default_factory=list)
    subject: str | None = None
    topic: str | None = None
    quiz_type: str = "custom"

    @property
    def correct_count(self) -> int:
        return sum(1 for a in self.answers if a.is_correct)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "quiz_id": self.quiz_id,
            "quiz_title": self.quiz_title,
            "score": self.score,
            "completed_at": self.completed_at.isoformat(),
            "answers": [
                {
                    "question_id": a.question_id,
                    "answer": a.answer,
                    "is_correct": a.is_correct,
                    "correct_answer": a.correct_answer,
                }
                for a in self.answers
            ],
            "subject": self.subject,
            "topic": self.topic,
            "quiz_type": self.quiz_type,
        }
