"""
Queries for per-question answers (table communication_answers).
"""

from typing import List, NamedTuple

from config import get_logger
from db.connection import get_pool

logger = get_logger(__name__)


class AnswerRecord(NamedTuple):
    """One stored answer."""
    assessment_id: int
    question_id: int
    answer_value: int


async def insert_answers(rows: List[AnswerRecord]) -> int:
    """Insert an answer batch in one transaction (all or nothing).

    Returns:
        Number of rows inserted
    """
    if not rows:
        return 0

    pool = await get_pool()
    async with pool.acquire() as conn:
        async with conn.transaction():
            await conn.executemany('''
                INSERT INTO communication_answers
                (assessment_id, question_id, answer_value)
                VALUES ($1, $2, $3)
            ''', [tuple(r) for r in rows])

    logger.info(f"Inserted {len(rows)} answers for assessment_id={rows[0].assessment_id}")
    return len(rows)


async def get_answers(assessment_id: int) -> dict[int, int]:
    """Stored answers of an assessment as {question_id: value}."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch('''
            SELECT question_id, answer_value
            FROM communication_answers
            WHERE assessment_id = $1
        ''', assessment_id)

        return {row['question_id']: row['answer_value'] for row in rows}
