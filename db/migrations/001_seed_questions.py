"""
Migration 001: seed communication_questions from config/questions.yaml

Creates the tables if needed and upserts the catalogue keyed by number,
so running it again updates texts without changing question ids.

Run:
    python -m db.migrations.001_seed_questions
"""

import asyncio
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from config import QUESTIONS_PATH
from core.catalog import load_question_catalog
from db import init_db, close_db
from db.queries.questions import upsert_questions, list_questions


async def migrate():
    """Seed the question catalogue"""
    questions = load_question_catalog(QUESTIONS_PATH)
    print(f"Loaded {len(questions)} questions from {QUESTIONS_PATH}")

    print("Connecting to the database...")
    await init_db()

    try:
        written = await upsert_questions(questions)
        stored = await list_questions()
        print(f"Upserted {written} questions, {len(stored)} in communication_questions")
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(migrate())
