"""
Queries for test sessions (table communication_assessments).
"""

from datetime import datetime
from typing import Optional

from config import get_logger, AssessmentStatus
from core.scoring import ScoreSummary
from db.connection import get_pool

logger = get_logger(__name__)


async def create_assessment(
    participant_id: int,
    status: AssessmentStatus = AssessmentStatus.IN_PROGRESS,
) -> Optional[int]:
    """Create a test session for a participant.

    Returns:
        Assessment id, or None if nothing was returned
    """
    pool = await get_pool()
    async with pool.acquire() as conn:
        row = await conn.fetchrow(
            '''INSERT INTO communication_assessments (participant_id, status)
               VALUES ($1, $2)
               RETURNING id''',
            participant_id,
            AssessmentStatus(status).value,
        )
        return row['id'] if row else None


async def update_assessment(
    assessment_id: int,
    status: AssessmentStatus,
    completed_at: datetime,
    summary: ScoreSummary,
) -> bool:
    """Store status, completion time and the score summary.

    Returns:
        True if a row was updated
    """
    pool = await get_pool()
    async with pool.acquire() as conn:
        result = await conn.execute(
            '''UPDATE communication_assessments
               SET status = $2,
                   completed_at = $3,
                   total_score = $4,
                   blue_score = $5,
                   red_score = $6,
                   green_score = $7,
                   yellow_score = $8
               WHERE id = $1''',
            assessment_id,
            AssessmentStatus(status).value,
            completed_at,
            summary.total,
            summary.blue,
            summary.red,
            summary.green,
            summary.yellow,
        )
        # result format: "UPDATE N"
        updated = int(result.split()[-1]) if result else 0
        if not updated:
            logger.warning(f"update_assessment: no row for assessment_id={assessment_id}")
        return updated > 0


async def get_assessment(assessment_id: int) -> Optional[dict]:
    """Assessment row with the score summary as ScoreSummary (or None if not completed)."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        row = await conn.fetchrow(
            'SELECT * FROM communication_assessments WHERE id = $1', assessment_id
        )

        if not row:
            return None

        summary = None
        if row['total_score'] is not None:
            summary = ScoreSummary(
                total=row['total_score'],
                blue=row['blue_score'] or 0,
                red=row['red_score'] or 0,
                green=row['green_score'] or 0,
                yellow=row['yellow_score'] or 0,
            )

        return {
            'id': row['id'],
            'participant_id': row['participant_id'],
            'status': row['status'],
            'summary': summary,
            'created_at': row['created_at'],
            'completed_at': row['completed_at'],
        }
