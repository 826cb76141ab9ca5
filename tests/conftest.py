"""
pytest configuration: project root on sys.path, an in-memory store and
question fixtures.
"""

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

import pytest

# Add the project root to the path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Category, AssessmentStatus
from core.scoring import Question, ScoreSummary
from db.queries.answers import AnswerRecord
from db.store import DataStore, StoreError


@pytest.fixture
def anyio_backend():
    return "asyncio"


def make_questions(per_category: int = 6) -> List[Question]:
    """per_category statements for each colour, interleaved blue/red/green/yellow."""
    order = [Category.BLUE, Category.RED, Category.GREEN, Category.YELLOW]
    questions = []
    for i in range(per_category * len(order)):
        number = i + 1
        questions.append(Question(
            id=100 + number,
            number=number,
            category=order[i % len(order)],
            cluster="cluster",
            text=f"Statement {number}",
        ))
    return questions


class FakeStore(DataStore):
    """
    In-memory DataStore.

    Add a method name to `fail` to make it raise StoreError.
    `questions_gate` holds list_questions() and `insert_gate` holds
    insert_answers() until the event is set.
    """

    def __init__(self, questions: Optional[List[Question]] = None):
        self.questions = list(questions if questions is not None else make_questions())
        self.fail: set[str] = set()
        self.questions_gate: Optional[asyncio.Event] = None
        self.insert_gate: Optional[asyncio.Event] = None

        self.participants: dict[str, dict] = {}
        self.assessments: dict[int, dict] = {}
        self.answers: List[AnswerRecord] = []
        self.calls: List[str] = []

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail:
            raise StoreError(f"{name} failed")

    async def upsert_participant(self, full_name, email, organization=None, role=None) -> int:
        self._check("upsert_participant")
        existing = self.participants.get(email)
        participant_id = existing['id'] if existing else len(self.participants) + 1
        self.participants[email] = {
            'id': participant_id,
            'full_name': full_name,
            'organization': organization,
            'role': role,
        }
        return participant_id

    async def create_assessment(self, participant_id, status=AssessmentStatus.IN_PROGRESS) -> int:
        self._check("create_assessment")
        assessment_id = len(self.assessments) + 1
        self.assessments[assessment_id] = {
            'participant_id': participant_id,
            'status': status,
            'summary': None,
            'completed_at': None,
        }
        return assessment_id

    async def list_questions(self) -> List[Question]:
        if self.questions_gate is not None:
            await self.questions_gate.wait()
        self._check("list_questions")
        return list(self.questions)

    async def insert_answers(self, rows: List[AnswerRecord]) -> None:
        self._check("insert_answers")
        if self.insert_gate is not None:
            await self.insert_gate.wait()
        self.answers.extend(rows)

    async def update_assessment(self, assessment_id, status, completed_at, summary: ScoreSummary) -> None:
        self._check("update_assessment")
        self.assessments[assessment_id].update(
            status=status, completed_at=completed_at, summary=summary,
        )


@pytest.fixture
def questions() -> List[Question]:
    return make_questions()


@pytest.fixture
def store(questions) -> FakeStore:
    return FakeStore(questions)
