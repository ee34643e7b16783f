"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Settings
from quizbank.bank.models import BankQuestion
from quizbank.workspace import Workspace


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests (HTTP API)")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def keep_order(ids):
    """Shuffle that leaves ids in corpus order, for predictable pools."""
    return None


SAMPLE_QUESTIONS = [
    {
        "id": "bank-q1",
        "question_text": "What is the powerhouse of the cell?",
        "question_type": "mcq",
        "options": ["Nucleus", "Mitochondria", "Ribosome", "Endoplasmic Reticulum"],
        "answer": "Mitochondria",
        "explanation": "Mitochondria generate most of the cell's supply of ATP.",
        "tags": ["biology", "cell biology", "organelles"],
        "category": "Biology",
        "marks": 2,
    },
    {
        "id": "bank-q2",
        "question_text": "Explain the process of photosynthesis in brief.",
        "question_type": "short_answer",
        "answer": "Plants harness energy from sunlight and turn it into chemical energy.",
        "tags": ["biology", "plants", "photosynthesis", "energy"],
        "category": "Biology",
        "marks": 5,
    },
    {
        "id": "bank-q3",
        "question_text": "True or False: The Earth is flat.",
        "question_type": "true_false",
        "answer": "False",
        "tags": ["geography", "science", "earth"],
        "category": "General Science",
    },
    {
        "id": "bank-q4",
        "question_text": "Solve for x: 2x + 5 = 15",
        "question_type": "mcq",
        "options": ["x = 3", "x = 5", "x = 7", "x = 10"],
        "answer": "x = 5",
        "tags": ["mathematics", "algebra", "equations"],
        "category": "Mathematics",
        "marks": 3,
    },
]


@pytest.fixture
def settings():
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def sample_records():
    """Raw question records, as stored in a bank file."""
    return [dict(r) for r in SAMPLE_QUESTIONS]


@pytest.fixture
def sample_questions(sample_records):
    """Sample questions for testing."""
    return [BankQuestion.from_dict(r) for r in sample_records]


@pytest.fixture
def workspace(settings, sample_records):
    """Workspace with the sample questions banked and an order-keeping shuffle."""
    ws = Workspace.create(settings, shuffle=keep_order)
    ws.bank.load(sample_records)
    return ws
