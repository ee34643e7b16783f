"""
Hand-picked quiz assembly.

Learners browse the bank and add questions one at a time; the assembly
can then be turned into a quiz.
"""
from __future__ import annotations

import threading
import uuid
from dataclasses import dataclass
from enum import Enum

from loguru import logger

from quizbank.bank.models import BankQuestion, QuestionType
from quizbank.core.errors import EmptyAssemblyError
from quizbank.quiz.models import Quiz


class AssemblyOutcome(str, Enum):
    ADDED = "added"
    DUPLICATE = "duplicate"
    UNSUPPORTED_TYPE = "unsupported_type"


@dataclass
class AssemblyResult:
    """Outcome of adding a question to the assembly."""
    outcome: AssemblyOutcome
    title: str
    message: str

    @property
    def added(self) -> bool:
        return self.outcome is AssemblyOutcome.ADDED


class QuizAssembly:
    """Ordered, duplicate-free selection of questions for a quiz."""

    def __init__(self, mcq_only: bool = True, preview_chars: int = 30):
        self.mcq_only = mcq_only
        self.preview_chars = preview_chars
        self._questions: list[BankQuestion] = []
        self._lock = threading.Lock()

    def add(self, question: BankQuestion) -> AssemblyResult:
        with self._lock:
            if any(q.id == question.id for q in self._questions):
                return AssemblyResult(
                    AssemblyOutcome.DUPLICATE,
                    "Already Added",
                    "This question is already in your quiz assembly.",
                )
            if self.mcq_only and question.question_type is not QuestionType.MCQ:
                return AssemblyResult(
                    AssemblyOutcome.UNSUPPORTED_TYPE,
                    "Unsupported Type",
                    "Only MCQ questions can be added to the assembly at this time.",
                )
            self._questions.append(question)

        logger.debug("Added {} to assembly", question.id)
        return AssemblyResult(
            AssemblyOutcome.ADDED,
            "Question Added",
            f'"{question.preview(self.preview_chars)}" added to assembly.',
        )

    def remove(self, question_id: str) -> bool:
        with self._lock:
            before = len(self._questions)
            self._questions = [q for q in self._questions if q.id != question_id]
            return len(self._questions) < before

    def contains(self, question_id: str) -> bool:
        return any(q.id == question_id for q in self._questions)

    def count(self) -> int:
        return len(self._questions)

    def questions(self) -> list[BankQuestion]:
        """Copy of the assembled questions."""
        with self._lock:
            return list(self._questions)

    def clear(self) -> None:
        with self._lock:
            self._questions = []
        logger.debug("Assembly cleared")

    def build_quiz(
        self,
        title: str,
        subject: str | None = None,
        topic: str | None = None,
        created_by: str | None = None,
    ) -> Quiz:
        """
        Turn the current assembly into a quiz.

        Raises:
            EmptyAssemblyError: If no questions have been assembled
        """
        questions = self.questions()
        if not questions:
            raise EmptyAssemblyError("No questions in the assembly")

        return Quiz(
            id=f"quiz-{uuid.uuid4().hex[:12]}",
            title=title,
            questions=questions,
            subject=subject,
            topic=topic,
            created_by=created_by,
        )

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, question_id: object) -> bool:
        return isinstance(question_id, str) and self.contains(question_id)
