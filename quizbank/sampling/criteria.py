"""
Quiz criteria and their canonical keys.

Criteria are the filter parameters a caller picks when generating a quiz
from the bank. Two criteria that differ only in case, surrounding
whitespace or tag order normalize to the same key, so they share one
question pool.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterable


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class QuizCriteria:
    """Filter parameters for selecting questions from the bank."""
    description: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    category: str | None = None
    question_type: str | None = None

    @classmethod
    def build(
        cls,
        description: str | None = None,
        tags: Iterable[str] | None = None,
        category: str | None = None,
        question_type: str | None = None,
    ) -> "QuizCriteria":
        """Build normalized criteria from raw caller input."""
        return cls(
            description=description,
            tags=frozenset(tags or ()),
            category=category,
            question_type=question_type,
        ).normalized()

    def normalized(self) -> "QuizCriteria":
        description = _clean(self.description)
        question_type = _clean(self.question_type)
        return QuizCriteria(
            description=description.lower() if description else None,
            tags=frozenset(t.strip().lower() for t in self.tags if t and t.strip()),
            category=_clean(self.category),
            question_type=question_type.lower().replace("-", "_") if question_type else None,
        )

    def is_empty(self) -> bool:
        c = self.normalized()
        return not (c.description or c.tags or c.category or c.question_type)

    def to_dict(self) -> dict[str, Any]:
        c = self.normalized()
        return {
            "description": c.description,
            "tags": sorted(c.tags),
            "category": c.category.lower() if c.category else None,
            "question_type": c.question_type,
        }

    def key(self) -> str:
        """Canonical serialization used as the pool key."""
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))

    def matches(self, question: Any) -> bool:
        """
        Check whether a banked question satisfies every filter.

        Args:
            question: Object with question_text, category, question_type and tags

        Returns:
            True if all set filters match
        """
        c = self.normalized()

        if c.description and c.description not in question.question_text.lower():
            return False

        if c.category and (question.category or "").lower() != c.category.lower():
            return False

        if c.question_type:
            qtype = getattr(question.question_type, "value", question.question_type)
            if qtype != c.question_type:
                return False

        if c.tags:
            question_tags = {t.lower() for t in question.tags}
            if not c.tags <= question_tags:
                return False

        return True
