"""
quizbank: in-memory question bank and quiz assembly service.

Bank extracted or hand-written questions, filter them, assemble quizzes by
hand or by criteria, and grade attempts. Criteria-based generation cycles
through every matching question before repeating any.
"""

__version__ = "0.1.0"

from .bank import BankQuestion, QuestionBank, QuestionType
from .core.errors import EmptyAssemblyError, EmptyPoolError, QuizBankError
from .quiz import QuizAssembler, QuizAssembly, QuizSessionStore, grade_quiz
from .sampling import CyclicSamplingPool, QuizCriteria
from .workspace import Workspace

__all__ = [
    "BankQuestion",
    "QuestionBank",
    "QuestionType",
    "QuizCriteria",
    "CyclicSamplingPool",
    "QuizAssembly",
    "QuizAssembler",
    "QuizSessionStore",
    "grade_quiz",
    "Workspace",
    "QuizBankError",
    "EmptyPoolError",
    "EmptyAssemblyError",
]
