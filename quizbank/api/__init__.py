"""HTTP API for quizbank."""
