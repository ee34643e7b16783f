"""
Entry point for the quizbank service.

Run with:
    uvicorn main:app --reload --port 8200
    python main.py
"""
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import uvicorn
from config import get_settings
from quizbank.api.main import app

settings = get_settings()

if __name__ == "__main__":
    uvicorn.run(
        "quizbank.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
        log_level=settings.log_level.lower(),
    )
