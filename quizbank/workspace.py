"""
Per-session service container.

A Workspace owns every piece of in-memory state for one process or
session: the bank, the pools, the assembly and the session history.
Dropping the workspace discards all of it.
"""
from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field

from loguru import logger

from config import Settings, get_settings
from quizbank.bank.question_bank import QuestionBank
from quizbank.quiz.assembler import QuizAssembler
from quizbank.quiz.assembly import QuizAssembly
from quizbank.quiz.models import Quiz
from quizbank.quiz.sessions import QuizSessionStore
from quizbank.sampling.cyclic_pool import CyclicSamplingPool, Shuffle


@dataclass
class Workspace:
    bank: QuestionBank
    pool: CyclicSamplingPool
    assembly: QuizAssembly
    sessions: QuizSessionStore
    assembler: QuizAssembler = field(init=False)
    max_questions: int = 100
    registry_size: int = 200
    quizzes: OrderedDict[str, Quiz] = field(default_factory=OrderedDict)

    def __post_init__(self):
        self.assembler = QuizAssembler(self.bank, self.pool, max_questions=self.max_questions)

    def remember(self, quiz: Quiz) -> Quiz:
        """
        Keep a quiz so a later submission can be graded against it.

        Only the newest `registry_size` quizzes are kept.
        """
        self.quizzes[quiz.id] = quiz
        self.quizzes.move_to_end(quiz.id)
        while len(self.quizzes) > self.registry_size:
            dropped, _ = self.quizzes.popitem(last=False)
            logger.debug("Dropped quiz {} from registry", dropped)
        return quiz

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        shuffle: Shuffle | None = None,
    ) -> "Workspace":
        """Build a workspace from settings, optionally with an injected shuffle."""
        settings = settings or get_settings()
        logger.debug(
            "Creating workspace (seed={}, rebuild_policy={})",
            settings.pool_seed,
            settings.pool_rebuild_policy,
        )
        return cls(
            bank=QuestionBank(preview_chars=settings.preview_chars),
            pool=CyclicSamplingPool(
                shuffle=shuffle,
                seed=settings.pool_seed,
                rebuild_policy=settings.pool_rebuild_policy,
            ),
            assembly=QuizAssembly(
                mcq_only=settings.assembly_mcq_only,
                preview_chars=settings.preview_chars,
            ),
            sessions=QuizSessionStore(),
            max_questions=settings.quiz_max_questions,
            registry_size=settings.quiz_registry_size,
        )
