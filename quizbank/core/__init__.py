"""Core utilities: errors and logging setup."""

from .errors import (
    EmptyAssemblyError,
    EmptyPoolError,
    QuestionNotFoundError,
    QuizBankError,
)
from .logging import configure_logging

__all__ = [
    "QuizBankError",
    "EmptyPoolError",
    "EmptyAssemblyError",
    "QuestionNotFoundError",
    "configure_logging",
]
