"""
Database schema (SQL).

Four tables: participants (unique by email), assessments (one per test
run, with the denormalized score summary), questions (the catalogue) and
answers (one row per assessment × question).
"""

import asyncpg
from config import get_logger

logger = get_logger(__name__)


async def create_tables(pool: asyncpg.Pool):
    """Create all tables if they do not exist"""
    async with pool.acquire() as conn:
        # ═══════════════════════════════════════════════════════════
        # PARTICIPANTS
        # ═══════════════════════════════════════════════════════════
        await conn.execute('''
            CREATE TABLE IF NOT EXISTS communication_participants (
                id SERIAL PRIMARY KEY,
                full_name TEXT NOT NULL,
                email TEXT NOT NULL UNIQUE,
                organization TEXT DEFAULT NULL,
                role TEXT DEFAULT NULL,

                created_at TIMESTAMPTZ DEFAULT NOW(),
                updated_at TIMESTAMPTZ DEFAULT NOW()
            )
        ''')

        # ═══════════════════════════════════════════════════════════
        # ASSESSMENTS (test sessions)
        # ═══════════════════════════════════════════════════════════
        await conn.execute('''
            CREATE TABLE IF NOT EXISTS communication_assessments (
                id SERIAL PRIMARY KEY,
                participant_id INTEGER NOT NULL
                    REFERENCES communication_participants(id),
                status TEXT NOT NULL DEFAULT 'in_progress',

                -- Denormalized summary, re-derivable from communication_answers
                total_score INTEGER DEFAULT NULL,
                blue_score INTEGER DEFAULT NULL,
                red_score INTEGER DEFAULT NULL,
                green_score INTEGER DEFAULT NULL,
                yellow_score INTEGER DEFAULT NULL,

                created_at TIMESTAMPTZ DEFAULT NOW(),
                completed_at TIMESTAMPTZ DEFAULT NULL
            )
        ''')

        await conn.execute('''
            CREATE INDEX IF NOT EXISTS idx_communication_assessments_participant
            ON communication_assessments(participant_id)
        ''')

        # ═══════════════════════════════════════════════════════════
        # QUESTIONS (catalogue)
        # ═══════════════════════════════════════════════════════════
        await conn.execute('''
            CREATE TABLE IF NOT EXISTS communication_questions (
                id SERIAL PRIMARY KEY,
                number INTEGER NOT NULL UNIQUE,
                color TEXT NOT NULL
                    CHECK (color IN ('blauw', 'rood', 'groen', 'geel')),
                cluster TEXT NOT NULL DEFAULT '',
                question TEXT NOT NULL
            )
        ''')

        # ═══════════════════════════════════════════════════════════
        # ANSWERS
        # ═══════════════════════════════════════════════════════════
        await conn.execute('''
            CREATE TABLE IF NOT EXISTS communication_answers (
                id SERIAL PRIMARY KEY,
                assessment_id INTEGER NOT NULL
                    REFERENCES communication_assessments(id) ON DELETE CASCADE,
                question_id INTEGER NOT NULL
                    REFERENCES communication_questions(id),
                answer_value SMALLINT NOT NULL
                    CHECK (answer_value BETWEEN 1 AND 3),
                created_at TIMESTAMPTZ DEFAULT NOW(),

                UNIQUE (assessment_id, question_id)
            )
        ''')

        logger.info("Database tables ready")
