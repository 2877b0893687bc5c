"""
Configuration for the BookSwap registry.

Values come from environment variables, optionally loaded from a
``.env`` file in the working directory.  Every field has a default so
the service runs out of the box with the in-memory store.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "BookSwap API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # ``memory`` keeps every record in process; ``mongo`` stores one
    # collection per entity in ``mongo_db``.
    store_backend: str = os.getenv("STORE_BACKEND", "memory")
    mongo_url: str = os.getenv("MONGO_URL", "mongodb://localhost:27017")
    mongo_db: str = os.getenv("MONGO_DB", "bookswapdb")

    # Header carrying the caller principal.  Issuing and verifying the
    # principal happens upstream of this service.
    caller_header: str = os.getenv("CALLER_HEADER", "X-Caller-Principal")

    recent_books_limit: int = int(os.getenv("RECENT_BOOKS_LIMIT", "10"))
    leaderboard_size: int = int(os.getenv("LEADERBOARD_SIZE", "5"))


settings = Settings()
