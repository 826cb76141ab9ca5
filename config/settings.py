"""
Settings for the communication style test bot.

Everything configurable comes from environment variables; the domain
constants (colours, answer scale, statuses, stages) live here as well so
that every layer imports them from one place.
"""

import logging
import os
from enum import Enum, IntEnum
from pathlib import Path

# ═══════════════════════════════════════════════════════════
# ENVIRONMENT
# ═══════════════════════════════════════════════════════════

BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
DATABASE_URL = os.getenv("DATABASE_URL")

DB_POOL_MIN_SIZE = int(os.getenv("DB_POOL_MIN_SIZE", "1"))
DB_POOL_MAX_SIZE = int(os.getenv("DB_POOL_MAX_SIZE", "5"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ═══════════════════════════════════════════════════════════
# PATHS
# ═══════════════════════════════════════════════════════════

BASE_DIR = Path(__file__).parent.parent
QUESTIONS_PATH = Path(os.getenv("QUESTIONS_PATH", str(BASE_DIR / "config" / "questions.yaml")))

_REQUIRED_ENV = {
    "TELEGRAM_BOT_TOKEN": BOT_TOKEN,
    "DATABASE_URL": DATABASE_URL,
}


def validate_env() -> list[str]:
    """Names of required environment variables that are not set."""
    return [name for name, value in _REQUIRED_ENV.items() if not value]


def get_logger(name: str) -> logging.Logger:
    """Module logger; handlers and format are configured once in bot.py."""
    return logging.getLogger(name)


# ═══════════════════════════════════════════════════════════
# DOMAIN
# ═══════════════════════════════════════════════════════════

class Category(str, Enum):
    """Colour a statement belongs to. Values match the stored column values."""
    BLUE = "blauw"
    RED = "rood"
    GREEN = "groen"
    YELLOW = "geel"


# Tie-break order for the dominant colour: earlier wins on equal subtotals.
CATEGORY_ORDER: tuple[Category, ...] = (
    Category.BLUE,
    Category.RED,
    Category.GREEN,
    Category.YELLOW,
)


class AnswerValue(IntEnum):
    """Three-level recognisability scale."""
    NOT_RECOGNIZABLE = 1
    SOMEWHAT_RECOGNIZABLE = 2
    VERY_RECOGNIZABLE = 3


ANSWER_VALUES: tuple[int, ...] = tuple(v.value for v in AnswerValue)


class AssessmentStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Stage(str, Enum):
    START = "start"
    QUESTIONS = "questions"
    RESULT = "result"


# Optional participant fields (may be skipped in the form)
PARTICIPANT_REQUIRED_FIELDS = ("full_name", "email")
PARTICIPANT_OPTIONAL_FIELDS = ("organization", "role")
PARTICIPANT_FIELDS = PARTICIPANT_REQUIRED_FIELDS + PARTICIPANT_OPTIONAL_FIELDS
