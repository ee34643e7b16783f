"""
In-memory question bank.

Holds banked questions for the lifetime of a workspace. Nothing is
persisted; a fresh workspace starts with an empty bank.
"""
from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, Iterable, Iterator

from loguru import logger

from quizbank.bank.models import BankQuestion, QuestionType, SaveResult
from quizbank.core.errors import QuestionNotFoundError
from quizbank.sampling.criteria import QuizCriteria


class QuestionBank:
    """
    Store of banked questions keyed by id, in insertion order.

    Handles:
    - Saving questions (ids assigned when missing, duplicates rejected)
    - Removal and lookup
    - Filtering by criteria and owner
    - Category and type listings for filter pickers
    """

    def __init__(self, preview_chars: int = 30):
        self.preview_chars = preview_chars
        self._questions: dict[str, BankQuestion] = {}
        self._lock = threading.Lock()

    def save(self, question: BankQuestion, owner_id: str | None = None) -> SaveResult:
        """
        Save a copy of a question to the bank.

        The caller's object is never modified, and a question whose id is
        already banked leaves the stored record untouched.

        Args:
            question: Question to bank
            owner_id: Owner to stamp on the question (keeps an existing owner if None)

        Returns:
            SaveResult with the assigned question id
        """
        preview = question.preview(self.preview_chars)

        with self._lock:
            if question.id and question.id in self._questions:
                logger.warning("Question {} already in bank, skipping", question.id)
                return SaveResult(
                    success=False,
                    question_id=question.id,
                    message=f'Question "{preview}" is already in the bank.',
                )

            stored = replace(
                question,
                id=question.id or f"q-{uuid.uuid4().hex[:12]}",
                options=list(question.options),
                tags=list(question.tags),
                owner_id=owner_id if owner_id is not None else question.owner_id,
                created_at=question.created_at or datetime.now(),
            )
            self._questions[stored.id] = stored

        logger.info("Saved question {} ({}) to bank", stored.id, stored.question_type.value)
        return SaveResult(
            success=True,
            question_id=stored.id,
            message=f'Question "{preview}" saved to bank.',
        )

    def load(self, records: Iterable[dict[str, Any]], owner_id: str | None = None) -> int:
        """
        Bulk-save question records. Returns the number saved.

        Raises:
            ValueError: If a record is not an object or has malformed fields
        """
        saved = 0
        for index, record in enumerate(records):
            if not isinstance(record, dict):
                raise ValueError(f"Record {index} is not a question object")
            try:
                question = BankQuestion.from_dict(record)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Record {index} is malformed: {e}") from e
            if self.save(question, owner_id=owner_id).success:
                saved += 1
        logger.info("Loaded {} question(s) into bank", saved)
        return saved

    def remove(self, question_id: str) -> bool:
        with self._lock:
            removed = self._questions.pop(question_id, None)
        if removed is not None:
            logger.info("Removed question {} from bank", question_id)
        return removed is not None

    def get(self, question_id: str) -> BankQuestion | None:
        return self._questions.get(question_id)

    def require(self, question_id: str) -> BankQuestion:
        """Get a question or raise QuestionNotFoundError."""
        question = self.get(question_id)
        if question is None:
            raise QuestionNotFoundError(question_id)
        return question

    def list(self, owner_id: str | None = None) -> list[BankQuestion]:
        """
        List banked questions in insertion order.

        An empty owner_id string matches nothing, so callers without a
        resolved user get an empty bank rather than everyone's questions.
        """
        with self._lock:
            questions = list(self._questions.values())
        if owner_id is None:
            return questions
        if not owner_id:
            logger.warning("Owner id not provided, returning empty question list")
            return []
        return [q for q in questions if q.owner_id == owner_id]

    def filter(self, criteria: QuizCriteria, owner_id: str | None = None) -> list[BankQuestion]:
        """Questions matching the criteria (and owner, when given)."""
        criteria = criteria.normalized()
        return [q for q in self.list(owner_id) if criteria.matches(q)]

    def categories(self) -> list[str]:
        """Distinct categories, case-insensitively, in the spelling first banked."""
        seen: dict[str, str] = {}
        for q in self.list():
            seen.setdefault(q.category.lower(), q.category)
        return sorted(seen.values(), key=str.lower)

    def question_types(self) -> list[QuestionType]:
        return sorted({q.question_type for q in self.list()}, key=lambda t: t.value)

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self) -> Iterator[BankQuestion]:
        return iter(self.list())

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._questions
