"""
Quiz module for assembly, generation and grading.

This module provides:
- QuizAssembly: Hand-picked question assembly (MCQ only, no duplicates)
- QuizAssembler: Criteria-based generation from cyclic pools
- QuizSessionStore: Completed attempts, newest first
- grade_quiz: Score a submitted attempt
"""

from .assembler import GeneratedQuiz, QuizAssembler
from .assembly import AssemblyOutcome, AssemblyResult, QuizAssembly
from .models import Quiz, QuizSession, UserAnswer
from .sessions import QuizSessionStore, grade_quiz

__all__ = [
    "Quiz",
    "QuizSession",
    "UserAnswer",
    "QuizAssembly",
    "AssemblyOutcome",
    "AssemblyResult",
    "QuizAssembler",
    "GeneratedQuiz",
    "QuizSessionStore",
    "grade_quiz",
]
