"""
Environment configuration for WordPecker.

Values are read once, at import time, from the process environment. A .env
file at the project root is loaded first so secrets stay out of git:

    OPENAI_API_KEY=sk-...
    FIREBASE_CREDENTIALS_PATH=./firebase-credentials.json
"""

import os
from typing import Optional

from dotenv import load_dotenv

from .logger import logger


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    try:
        return int(raw) if raw else default
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default


def mask_secret(value: Optional[str]) -> str:
    """Mask a secret for logging (show first 8 and last 4 chars)."""
    if not value:
        return "<unset>"
    return f"{value[:8]}...{value[-4:]}" if len(value) > 12 else "***"


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

if load_dotenv():
    logger.env_success("dotenv file loaded")
else:
    logger.env("No .env file found, using process environment only")

OPENAI_API_KEY: Optional[str] = os.getenv("OPENAI_API_KEY") or None
CHAT_MODEL = os.getenv("WORDPECKER_CHAT_MODEL", "gpt-4o-mini")
REQUEST_TIMEOUT = _env_int("WORDPECKER_REQUEST_TIMEOUT", 30)

FIREBASE_CREDENTIALS_PATH: Optional[str] = os.getenv("FIREBASE_CREDENTIALS_PATH") or None
USER_ID = os.getenv("WORDPECKER_USER_ID", "default_user")

# Development builds raise on contract violations; production logs and ignores them.
STRICT_TRANSITIONS = _env_flag("WORDPECKER_STRICT_TRANSITIONS", True)

if OPENAI_API_KEY:
    logger.env_success(f"OPENAI_API_KEY found: {mask_secret(OPENAI_API_KEY)}")
else:
    logger.env("OPENAI_API_KEY not set, lessons will come from the offline word tables")
logger.env(f"Chat model: {CHAT_MODEL} (timeout {REQUEST_TIMEOUT}s)")

# ---------------------------------------------------------------------------
# Learning rules
# ---------------------------------------------------------------------------

PASS_THRESHOLD = 70             # final score needed to complete a level
LEARNING_CHECKPOINT = 50        # progress written when practice begins
FALLBACK_WORD_COUNT = 10        # words per offline level
LEVEL_COMPLETION_XP = 50        # awarded the first time a level is completed
