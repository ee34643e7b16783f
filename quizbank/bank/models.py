"""
Question bank data structures.

Questions are extracted from PDFs or written by hand, then banked for
later browsing and quiz assembly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class QuestionType(str, Enum):
    """Types of banked questions."""
    MCQ = "mcq"
    SHORT_ANSWER = "short_answer"
    TRUE_FALSE = "true_false"
    FILL_IN_THE_BLANK = "fill_in_the_blank"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return QUESTION_TYPE_LABELS[self]

    @classmethod
    def parse(cls, value: Any) -> "QuestionType":
        """Parse a type value, falling back to UNKNOWN for anything unrecognised."""
        if isinstance(value, QuestionType):
            return value
        if not isinstance(value, str):
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower().replace("-", "_"))
        except ValueError:
            return cls.UNKNOWN


QUESTION_TYPE_LABELS = {
    QuestionType.MCQ: "Multiple Choice",
    QuestionType.SHORT_ANSWER: "Short Answer",
    QuestionType.TRUE_FALSE: "True/False",
    QuestionType.FILL_IN_THE_BLANK: "Fill in the Blank",
    QuestionType.UNKNOWN: "Unknown Type",
}


@dataclass
class BankQuestion:
    """A single question stored in the bank."""
    id: str
    question_text: str
    question_type: QuestionType = QuestionType.UNKNOWN
    options: list[str] = field(default_factory=list)
    answer: str | None = None
    explanation: str | None = None
    tags: list[str] = field(default_factory=list)
    category: str = "Uncategorized"
    marks: int | None = None
    relevant_image_description: str | None = None
    owner_id: str | None = None
    created_at: datetime | None = None

    def preview(self, chars: int = 30) -> str:
        """Shortened question text for user-facing messages."""
        return f"{self.question_text[:chars]}..."

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "question_text": self.question_text,
            "question_type": self.question_type.value,
            "options": list(self.options),
            "answer": self.answer,
            "explanation": self.explanation,
            "tags": list(self.tags),
            "category": self.category,
            "marks": self.marks,
            "relevant_image_description": self.relevant_image_description,
            "owner_id": self.owner_id,
        }
        if self.created_at is not None:
            result["created_at"] = self.created_at.isoformat()
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BankQuestion":
        """
        Create from a dictionary.

        Accepts both snake_case keys and the camelCase keys produced by the
        PDF extraction flow (questionText, suggestedTags, suggestedCategory).
        """
        created_at = data.get("created_at")
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        elif created_at is not None and not isinstance(created_at, datetime):
            raise ValueError(f"created_at must be an ISO date string, got {created_at!r}")

        return cls(
            id=data.get("id") or "",
            question_text=data.get("question_text") or data.get("questionText") or "",
            question_type=QuestionType.parse(
                data.get("question_type") or data.get("questionType")
            ),
            options=list(data.get("options") or []),
            answer=data.get("answer"),
            explanation=data.get("explanation"),
            tags=list(data.get("tags") or data.get("suggestedTags") or []),
            category=(
                data.get("category") or data.get("suggestedCategory") or "Uncategorized"
            ),
            marks=data.get("marks"),
            relevant_image_description=(
                data.get("relevant_image_description")
                or data.get("relevantImageDescription")
            ),
            owner_id=data.get("owner_id") or data.get("userId"),
            created_at=created_at,
        )


@dataclass
class SaveResult:
    """Outcome of saving a question to the bank."""
    success: bool
    message: str
    question_id: str | None = None
