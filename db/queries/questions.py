"""
Queries for the question catalogue (table communication_questions).
"""

from typing import Iterable, List

from config import get_logger, Category
from core.scoring import Question
from db.connection import get_pool

logger = get_logger(__name__)


def _row_to_question(row) -> Question:
    return Question(
        id=row['id'],
        number=row['number'],
        category=Category(row['color']),
        cluster=row['cluster'] or '',
        text=row['question'],
    )


async def list_questions() -> List[Question]:
    """All questions ordered by display number."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch('''
            SELECT id, number, color, cluster, question
            FROM communication_questions
            ORDER BY number
        ''')
        return [_row_to_question(r) for r in rows]


async def upsert_questions(questions: Iterable[Question]) -> int:
    """Insert or update catalogue questions keyed by number.

    Returns:
        Number of questions written
    """
    rows = [(q.number, q.category.value, q.cluster, q.text) for q in questions]
    if not rows:
        return 0

    pool = await get_pool()
    async with pool.acquire() as conn:
        async with conn.transaction():
            await conn.executemany('''
                INSERT INTO communication_questions (number, color, cluster, question)
                VALUES ($1, $2, $3, $4)
                ON CONFLICT (number) DO UPDATE SET
                    color = EXCLUDED.color,
                    cluster = EXCLUDED.cluster,
                    question = EXCLUDED.question
            ''', rows)

    logger.info(f"Upserted {len(rows)} questions")
    return len(rows)
