"""
Typer CLI for quizbank.

Commands:
    quizbank bank list FILE         - Show banked questions, optionally filtered
    quizbank bank stats FILE        - Category and type counts
    quizbank quiz generate FILE     - Generate quizzes by criteria from a cyclic pool
    quizbank serve                  - Run the HTTP API

FILE is a JSON array of question records, as saved by the bank.

Usage:
    quizbank --help
    quizbank bank list questions.json --category Biology
    quizbank quiz generate questions.json --count 5 --rounds 3 --seed demo
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from config import get_settings
from quizbank.bank.question_bank import QuestionBank
from quizbank.core.errors import EmptyPoolError
from quizbank.core.logging import configure_logging
from quizbank.quiz.models import Quiz
from quizbank.sampling.criteria import QuizCriteria
from quizbank.workspace import Workspace

app = typer.Typer(
    help="quizbank CLI: question bank browsing and criteria-based quiz generation",
    no_args_is_help=True,
)
bank_app = typer.Typer(help="Browse a question bank file", no_args_is_help=True)
quiz_app = typer.Typer(help="Generate quizzes", no_args_is_help=True)
app.add_typer(bank_app, name="bank")
app.add_typer(quiz_app, name="quiz")

console = Console()


# ========================================
# Helpers
# ========================================


def _load_workspace(path: Path, seed: Optional[str] = None) -> Workspace:
    """Create a workspace and load the bank file into it."""
    settings = get_settings()
    if seed is not None:
        settings = settings.model_copy(update={"pool_seed": seed})

    try:
        records = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read {path}: {e}[/red]")
        raise typer.Exit(code=1)

    if not isinstance(records, list):
        console.print(f"[red]{path} must contain a JSON array of questions[/red]")
        raise typer.Exit(code=1)

    workspace = Workspace.create(settings)
    try:
        workspace.bank.load(records)
    except ValueError as e:
        console.print(f"[red]Could not load {path}: {e}[/red]")
        raise typer.Exit(code=1)
    return workspace


def _questions_table(title: str, questions) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Type")
    table.add_column("Category", style="magenta")
    table.add_column("Question")
    table.add_column("Tags", style="dim")

    for q in questions:
        text = q.question_text if len(q.question_text) <= 80 else q.question_text[:80] + "..."
        table.add_row(q.id, q.question_type.label, q.category, text, ", ".join(q.tags[:5]))
    return table


def _print_quiz(quiz: Quiz) -> None:
    console.print(f"\n[bold]{quiz.title}[/bold] [dim]({quiz.id})[/dim]")
    for i, q in enumerate(quiz.questions, 1):
        console.print(f"  {i}. {q.question_text}")
        for option in q.options:
            console.print(f"     - {option}")


# ========================================
# Bank Commands
# ========================================


@bank_app.command("list")
def bank_list(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Question bank JSON file"),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Text the question must contain"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    question_type: Optional[str] = typer.Option(None, "--type", "-t"),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Required tag (repeatable)"),
):
    """List questions in a bank file."""
    workspace = _load_workspace(file)
    criteria = QuizCriteria.build(search, tags, category, question_type)
    questions = workspace.bank.filter(criteria)

    if not questions:
        console.print("[yellow]No questions match your current filters.[/yellow]")
        return

    console.print(_questions_table(f"Question Bank ({len(questions)}/{len(workspace.bank)})", questions))


@bank_app.command("stats")
def bank_stats(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Question bank JSON file"),
):
    """Show category and question type counts."""
    bank: QuestionBank = _load_workspace(file).bank

    table = Table(title=f"Question Bank: {len(bank)} questions")
    table.add_column("Group")
    table.add_column("Value")
    table.add_column("Questions", justify="right")

    for category in bank.categories():
        count = len(bank.filter(QuizCriteria.build(category=category)))
        table.add_row("Category", category, str(count))
    for qtype in bank.question_types():
        count = len(bank.filter(QuizCriteria.build(question_type=qtype.value)))
        table.add_row("Type", qtype.label, str(count))

    console.print(table)


# ========================================
# Quiz Commands
# ========================================


@quiz_app.command("generate")
def quiz_generate(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Question bank JSON file"),
    count: Optional[int] = typer.Option(None, "--count", "-n", min=1, help="Questions per quiz"),
    rounds: int = typer.Option(1, "--rounds", "-r", min=1, help="Quizzes to generate from the same pool"),
    search: Optional[str] = typer.Option(None, "--search", "-s"),
    category: Optional[str] = typer.Option(None, "--category", "-c"),
    question_type: Optional[str] = typer.Option(None, "--type", "-t"),
    tags: Optional[List[str]] = typer.Option(None, "--tag"),
    seed: Optional[str] = typer.Option(None, "--seed", help="Seed for reproducible shuffles"),
):
    """
    Generate quizzes by criteria.

    Consecutive rounds draw from the same pool, so no question repeats
    until every matching question has been used.
    """
    workspace = _load_workspace(file, seed=seed)
    criteria = QuizCriteria.build(search, tags, category, question_type)
    count = count or get_settings().quiz_default_questions

    for round_number in range(1, rounds + 1):
        try:
            generated = workspace.assembler.generate(criteria, count)
        except EmptyPoolError:
            console.print(
                "[red]No questions match your criteria. "
                "Try broadening your search or adding more questions to the bank.[/red]"
            )
            raise typer.Exit(code=1)
        except ValueError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(code=1)

        console.print(f"\n[bold cyan]Round {round_number}[/bold cyan]")
        _print_quiz(generated.quiz)
        if generated.notice:
            console.print(f"[yellow]{generated.notice}[/yellow]")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind host (defaults to settings)"),
    port: Optional[int] = typer.Option(None, help="Bind port (defaults to settings)"),
    reload: bool = typer.Option(False, help="Auto-reload on code changes"),
):
    """Run the quizbank HTTP API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "quizbank.api.main:app",
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


# =============================================================================
# Entry Point
# =============================================================================

def main() -> None:
    """CLI entry point."""
    configure_logging(level="WARNING")
    app()


if __name__ == "__main__":
    main()
