"""Command line interface for quizbank."""
