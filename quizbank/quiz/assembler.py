"""
Criteria-based quiz generation.

Filters the bank by the learner's criteria and draws the next batch from
that criteria's cyclic pool, so repeated generations with the same
criteria walk through every matching question before reusing one.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass

from loguru import logger

from quizbank.bank.question_bank import QuestionBank
from quizbank.quiz.models import Quiz
from quizbank.sampling.criteria import QuizCriteria
from quizbank.sampling.cyclic_pool import CyclicSamplingPool


@dataclass
class GeneratedQuiz:
    """A generated quiz plus pool bookkeeping for the caller."""
    quiz: Quiz
    cycle_complete: bool
    pool_size: int

    @property
    def notice(self) -> str | None:
        """User-facing note when the pool was exhausted and reshuffled."""
        if not self.cycle_complete:
            return None
        return (
            f"All {self.pool_size} matching questions have been used. "
            "The pool has been reshuffled for your next quiz."
        )


class QuizAssembler:
    """Generates quizzes from the bank using per-criteria cyclic pools."""

    def __init__(
        self,
        bank: QuestionBank,
        pool: CyclicSamplingPool,
        max_questions: int = 100,
    ):
        self.bank = bank
        self.pool = pool
        self.max_questions = max_questions

    def generate(
        self,
        criteria: QuizCriteria,
        count: int,
        owner_id: str | None = None,
        title: str | None = None,
    ) -> GeneratedQuiz:
        """
        Generate a quiz from questions matching the criteria.

        Args:
            criteria: Filter parameters
            count: Requested number of questions
            owner_id: Restrict to one owner's questions
            title: Quiz title (derived from the criteria when None)

        Returns:
            GeneratedQuiz

        Raises:
            ValueError: If count is out of range
            EmptyPoolError: If no questions match
        """
        if count < 1 or count > self.max_questions:
            raise ValueError(f"count must be between 1 and {self.max_questions}, got {count}")

        criteria = criteria.normalized()
        matching = self.bank.filter(criteria, owner_id=owner_id)
        key = criteria.key() if owner_id is None else f"{owner_id}:{criteria.key()}"

        result = self.pool.draw(key, matching, count)

        if result.cycle_complete:
            logger.info(
                "All {} matching questions used, reshuffling pool for {}",
                result.pool_size,
                key,
            )

        quiz = Quiz(
            id=f"quiz-{uuid.uuid4().hex[:12]}",
            title=title or f"{criteria.category or 'Mixed'} Quiz",
            questions=result.items,
            subject=criteria.category,
            topic=criteria.description,
            created_by=owner_id,
        )
        logger.info(
            "Generated quiz {} with {} of {} matching questions",
            quiz.id,
            quiz.total_questions,
            len(matching),
        )
        return GeneratedQuiz(
            quiz=quiz,
            cycle_complete=result.cycle_complete,
            pool_size=result.pool_size,
        )
