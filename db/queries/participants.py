"""
Queries for participants (table communication_participants).
"""

from typing import Optional

from config import get_logger
from db.connection import get_pool

logger = get_logger(__name__)


async def upsert_participant(
    full_name: str,
    email: str,
    organization: Optional[str] = None,
    role: Optional[str] = None,
) -> Optional[int]:
    """Create the participant or update the existing one with the same email.

    Empty organization/role are stored as NULL.

    Returns:
        Participant id, or None if nothing was returned
    """
    pool = await get_pool()
    async with pool.acquire() as conn:
        row = await conn.fetchrow(
            '''INSERT INTO communication_participants
               (full_name, email, organization, role)
               VALUES ($1, $2, $3, $4)
               ON CONFLICT (email) DO UPDATE SET
                   full_name = EXCLUDED.full_name,
                   organization = EXCLUDED.organization,
                   role = EXCLUDED.role,
                   updated_at = NOW()
               RETURNING id''',
            full_name,
            email,
            organization or None,
            role or None,
        )
        return row['id'] if row else None

