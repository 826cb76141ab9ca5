"""
Question catalogue loaded from YAML.

The catalogue is the source used to seed communication_questions; the bot
itself reads questions from the database at runtime.
"""

from pathlib import Path
from typing import Optional

import yaml

from config import get_logger, Category, QUESTIONS_PATH
from core.scoring import Question

logger = get_logger(__name__)

_REQUIRED_KEYS = ('number', 'color', 'cluster', 'question')


class CatalogError(ValueError):
    """Catalogue file is missing or malformed."""


def load_question_catalog(path: Optional[Path] = None) -> list[Question]:
    """Load statements from the YAML catalogue.

    Question ids are not known before seeding, so the display number is
    used as a provisional id.

    Args:
        path: catalogue file (defaults to QUESTIONS_PATH)

    Returns:
        Questions sorted by number

    Raises:
        CatalogError: missing file, missing field, unknown colour or
            duplicate number
    """
    path = Path(path or QUESTIONS_PATH)
    if not path.exists():
        raise CatalogError(f"Question catalogue not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    questions = []
    seen_numbers = set()

    for i, item in enumerate(data.get('questions', [])):
        missing = [k for k in _REQUIRED_KEYS if item.get(k) in (None, '')]
        if missing:
            raise CatalogError(f"Question #{i + 1} in {path.name} is missing {', '.join(missing)}")

        number = int(item['number'])
        if number in seen_numbers:
            raise CatalogError(f"Duplicate question number {number} in {path.name}")
        seen_numbers.add(number)

        try:
            category = Category(item['color'])
        except ValueError:
            raise CatalogError(f"Unknown color '{item['color']}' for question {number}") from None

        questions.append(Question(
            id=number,
            number=number,
            category=category,
            cluster=str(item['cluster']),
            text=str(item['question']).strip(),
        ))

    questions.sort(key=lambda q: q.number)

    empty = [c.value for c in Category if not any(q.category == c for q in questions)]
    if empty:
        logger.warning(f"Catalogue {path.name} has no questions for: {', '.join(empty)}")

    logger.info(f"Loaded {len(questions)} questions from {path.name}")
    return questions
