"""
Smoke Tests for CLI Commands.

These tests verify that CLI commands run without errors and produce output.
They don't validate correctness deeply - just that commands work.

Usage:
    pytest tests/smoke/test_cli_commands.py -v
    pytest tests/smoke/test_cli_commands.py -v -m smoke
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

# Mark all tests in this module as smoke tests
pytestmark = pytest.mark.smoke

# Project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


def run_cli_command(*args: str, timeout: int = 30) -> tuple[int, str, str]:
    """
    Run a CLI command and return exit code, stdout, stderr.

    Args:
        args: Arguments after 'python -m quizbank.cli.main'
        timeout: Maximum time to wait

    Returns:
        Tuple of (exit_code, stdout, stderr)
    """
    env = dict(os.environ, COLUMNS="200")
    result = subprocess.run(
        [sys.executable, "-m", "quizbank.cli.main", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        timeout=timeout,
        env=env,
    )

    return result.returncode, result.stdout, result.stderr


@pytest.fixture
def bank_file(tmp_path, sample_records):
    path = tmp_path / "questions.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return str(path)


class TestCLIHelp:
    """Test that help commands work."""

    def test_main_help(self):
        code, stdout, stderr = run_cli_command("--help")

        assert code == 0, f"Help failed: {stderr}"
        assert "bank" in stdout
        assert "quiz" in stdout

    def test_generate_help(self):
        code, stdout, stderr = run_cli_command("quiz", "generate", "--help")

        assert code == 0, f"Help failed: {stderr}"
        assert "--rounds" in stdout


class TestBankCommands:
    def test_list(self, bank_file):
        code, stdout, stderr = run_cli_command("bank", "list", bank_file, "--category", "Biology")

        assert code == 0, stderr
        assert "bank-q1" in stdout
        assert "bank-q4" not in stdout

    def test_list_no_matches(self, bank_file):
        code, stdout, _ = run_cli_command("bank", "list", bank_file, "--category", "History")

        assert code == 0
        assert "No questions match your current filters." in stdout

    def test_stats(self, bank_file):
        code, stdout, stderr = run_cli_command("bank", "stats", bank_file)

        assert code == 0, stderr
        assert "Mathematics" in stdout
        assert "True/False" in stdout

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            '{"id": "bank-q1"}',
            '["not a dict"]',
            '[{"id": "x", "question_text": "?", "created_at": "yesterday"}]',
        ],
    )
    def test_invalid_file(self, tmp_path, content):
        path = tmp_path / "broken.json"
        path.write_text(content, encoding="utf-8")

        code, stdout, stderr = run_cli_command("bank", "list", str(path))

        assert code == 1
        assert "Traceback" not in stderr
        assert "broken.json" in stdout

    def test_non_string_type_loads_as_unknown(self, tmp_path):
        path = tmp_path / "questions.json"
        path.write_text('[{"id": "x", "question_text": "Odd type", "question_type": 5}]', encoding="utf-8")

        code, stdout, stderr = run_cli_command("bank", "list", str(path))

        assert code == 0, stderr
        assert "Unknown Type" in stdout


class TestQuizCommands:
    def test_generate_rounds(self, bank_file):
        code, stdout, stderr = run_cli_command(
            "quiz", "generate", bank_file, "--count", "4", "--rounds", "2", "--seed", "smoke"
        )

        assert code == 0, stderr
        assert "Round 1" in stdout
        assert "Round 2" in stdout
        assert "All 4 matching questions have been used." in stdout

    def test_generate_no_matches(self, bank_file):
        code, stdout, _ = run_cli_command("quiz", "generate", bank_file, "--category", "History")

        assert code == 1
        assert "No questions match your criteria." in stdout
