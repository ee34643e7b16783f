"""Exceptions raised by quizbank services."""

from __future__ import annotations


class QuizBankError(Exception):
    """Base class for quizbank errors."""
    pass


class EmptyPoolError(QuizBankError):
    """Raised when no questions match the criteria a pool is drawn from."""

    def __init__(self, criteria_key: str | None = None):
        self.criteria_key = criteria_key
        super().__init__("No questions match the selected criteria")


class EmptyAssemblyError(QuizBankError):
    """Raised when building a quiz from an empty assembly."""
    pass


class QuestionNotFoundError(QuizBankError):
    """Raised when a question id is not in the bank."""

    def __init__(self, question_id: str):
        self.question_id = question_id
        super().__init__(f"Question not found: {question_id}")
