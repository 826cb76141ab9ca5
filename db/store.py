"""
Data store used by the assessment session.

DataStore is the abstract CRUD surface the session depends on; PostgresStore
implements it over db.queries. Driver and network failures are translated
into StoreError so callers handle a single exception type.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, TypeVar

import asyncpg

from config import AssessmentStatus
from core.scoring import Question, ScoreSummary
from db import queries
from db.queries.answers import AnswerRecord

logger = logging.getLogger(__name__)

T = TypeVar('T')

_DRIVER_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
)


class StoreError(Exception):
    """Store unreachable or write rejected."""


class DataStore(ABC):
    """Persistence the session needs: participants, assessments, questions, answers."""

    @abstractmethod
    async def upsert_participant(
        self,
        full_name: str,
        email: str,
        organization: Optional[str] = None,
        role: Optional[str] = None,
    ) -> int:
        """Participant id; an existing email returns the existing participant."""

    @abstractmethod
    async def create_assessment(
        self,
        participant_id: int,
        status: AssessmentStatus = AssessmentStatus.IN_PROGRESS,
    ) -> int:
        """New assessment id."""

    @abstractmethod
    async def list_questions(self) -> List[Question]:
        """Catalogue ordered by display number."""

    @abstractmethod
    async def insert_answers(self, rows: List[AnswerRecord]) -> None:
        """Insert the batch, all or nothing."""

    @abstractmethod
    async def update_assessment(
        self,
        assessment_id: int,
        status: AssessmentStatus,
        completed_at: datetime,
        summary: ScoreSummary,
    ) -> None:
        """Store status, completion time and score summary."""


class PostgresStore(DataStore):
    """DataStore over the asyncpg query functions."""

    async def _call(self, description: str, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await operation()
        except _DRIVER_ERRORS as e:
            logger.error(f"[Store] {description} failed: {e}")
            raise StoreError(f"{description} failed: {e}") from e

    async def upsert_participant(self, full_name, email, organization=None, role=None) -> int:
        participant_id = await self._call(
            f"upsert_participant(email={email})",
            lambda: queries.upsert_participant(full_name, email, organization, role),
        )
        if participant_id is None:
            raise StoreError(f"upsert_participant(email={email}) returned no id")
        return participant_id

    async def create_assessment(self, participant_id, status=AssessmentStatus.IN_PROGRESS) -> int:
        assessment_id = await self._call(
            f"create_assessment(participant_id={participant_id})",
            lambda: queries.create_assessment(participant_id, status),
        )
        if assessment_id is None:
            raise StoreError(f"create_assessment(participant_id={participant_id}) returned no id")
        return assessment_id

    async def list_questions(self) -> List[Question]:
        return await self._call("list_questions()", queries.list_questions)

    async def insert_answers(self, rows: List[AnswerRecord]) -> None:
        await self._call(
            f"insert_answers({len(rows)} rows)",
            lambda: queries.insert_answers(rows),
        )

    async def update_assessment(self, assessment_id, status, completed_at, summary) -> None:
        updated = await self._call(
            f"update_assessment(assessment_id={assessment_id})",
            lambda: queries.update_assessment(assessment_id, status, completed_at, summary),
        )
        if not updated:
            raise StoreError(f"update_assessment(assessment_id={assessment_id}) matched no row")
