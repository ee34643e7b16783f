"""
Question bank module.

Question Types:
- mcq: Multiple choice question
- short_answer: Free text answer
- true_false: True/False
- fill_in_the_blank: Fill in blank
- unknown: Extracted question whose type could not be determined
"""

from .models import QUESTION_TYPE_LABELS, BankQuestion, QuestionType, SaveResult
from .question_bank import QuestionBank

__all__ = [
    "BankQuestion",
    "QuestionType",
    "QUESTION_TYPE_LABELS",
    "SaveResult",
    "QuestionBank",
]
