"""
Assessment session: the start → questions → result flow of one participant.

Stages are explicit variants (StartStage, QuestionsStage, ResultStage), so a
result without a score summary or a questions stage without session ids
cannot be represented. Transitions only go forward:

    start ──start()──▶ questions ──submit()──▶ result

Entering `questions` schedules the catalogue load as an asyncio task. The
load carries a CancellationToken; leaving the stage (or close()) cancels the
token and a late result is dropped instead of written into the session.

Failures from the store become a user-facing `error` text and leave the
stage unchanged, except for the final summary update after answers are
stored, which is only logged.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Union

from config import (
    get_logger,
    Category,
    Stage,
    AssessmentStatus,
    ANSWER_VALUES,
    PARTICIPANT_FIELDS,
    PARTICIPANT_REQUIRED_FIELDS,
)
from core.scoring import Question, ScoreSummary, compute_scores, dominant_category
from db.queries.answers import AnswerRecord
from db.store import DataStore, StoreError
from i18n import t

logger = get_logger(__name__)


class CancellationToken:
    """Set once; checked by the question load before it writes anything."""

    def __init__(self):
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


@dataclass
class ParticipantDraft:
    """Contact details as typed in the start form."""
    full_name: str = ""
    email: str = ""
    organization: str = ""
    role: str = ""

    def missing_required(self) -> list[str]:
        return [name for name in PARTICIPANT_REQUIRED_FIELDS if not getattr(self, name).strip()]


@dataclass(frozen=True)
class StartStage:
    stage = Stage.START


@dataclass
class QuestionsStage:
    participant_id: int
    assessment_id: int
    questions: list[Question] = field(default_factory=list)
    answers: dict[int, int] = field(default_factory=dict)
    loading: bool = True
    token: CancellationToken = field(default_factory=CancellationToken)

    stage = Stage.QUESTIONS


@dataclass(frozen=True)
class ResultStage:
    participant_id: int
    assessment_id: int
    questions: tuple[Question, ...]
    answers: dict[int, int]
    summary: ScoreSummary

    stage = Stage.RESULT


StageState = Union[StartStage, QuestionsStage, ResultStage]


class AssessmentSession:
    """
    In-memory state of one test run.

    The presentation layer reads `stage`, `participant`, `questions`,
    `answers`, `error`, `loading` and `scores`, and triggers `start()`,
    `record_answer()` and `submit()`.
    """

    def __init__(self, store: DataStore):
        self.store = store
        self.participant = ParticipantDraft()
        self.error: Optional[str] = None
        self.state: StageState = StartStage()

        self._busy = False
        self._closed = False
        self._load_task: Optional[asyncio.Task] = None

    # =================================================================
    # READ SIDE
    # =================================================================

    @property
    def stage(self) -> Stage:
        return self.state.stage

    @property
    def participant_id(self) -> Optional[int]:
        return getattr(self.state, 'participant_id', None)

    @property
    def assessment_id(self) -> Optional[int]:
        return getattr(self.state, 'assessment_id', None)

    @property
    def questions(self) -> list[Question]:
        return list(getattr(self.state, 'questions', ()))

    @property
    def answers(self) -> dict[int, int]:
        return dict(getattr(self.state, 'answers', {}))

    @property
    def loading(self) -> bool:
        if self._busy:
            return True
        return isinstance(self.state, QuestionsStage) and self.state.loading

    @property
    def scores(self) -> Optional[ScoreSummary]:
        if isinstance(self.state, ResultStage):
            return self.state.summary
        return None

    @property
    def dominant(self) -> Optional[Category]:
        return dominant_category(self.scores)

    @property
    def closed(self) -> bool:
        return self._closed

    def unanswered_questions(self) -> list[Question]:
        answers = getattr(self.state, 'answers', {})
        return [q for q in self.questions if q.id not in answers]

    # =================================================================
    # START STAGE
    # =================================================================

    def set_participant_field(self, name: str, value: Optional[str]) -> bool:
        """Update one draft field (only while in `start`)."""
        if name not in PARTICIPANT_FIELDS:
            raise ValueError(f"Unknown participant field: {name}")
        if not isinstance(self.state, StartStage):
            logger.warning(f"[Session] set_participant_field({name}) ignored in stage {self.stage.value}")
            return False

        setattr(self.participant, name, (value or "").strip())
        return True

    def clear_error(self) -> None:
        self.error = None

    async def start(self) -> bool:
        """Create participant + assessment and move to `questions`.

        Returns:
            True if the session moved to `questions`
        """
        if not isinstance(self.state, StartStage) or self._busy or self._closed:
            logger.warning(f"[Session] start() ignored in stage {self.stage.value}")
            return False

        self.error = None
        if self.participant.missing_required():
            self.error = t('errors.name_email_required')
            return False

        draft = self.participant
        self._busy = True
        try:
            try:
                participant_id = await self.store.upsert_participant(
                    full_name=draft.full_name,
                    email=draft.email,
                    organization=draft.organization or None,
                    role=draft.role or None,
                )
            except StoreError as e:
                logger.error(f"[Session] Could not save participant {draft.email}: {e}")
                self.error = t('errors.save_participant')
                return False

            # Not atomic with the upsert: a failure here leaves the participant
            # without an assessment. A retry reuses it through the email key.
            try:
                assessment_id = await self.store.create_assessment(
                    participant_id, AssessmentStatus.IN_PROGRESS
                )
            except StoreError as e:
                logger.error(f"[Session] Could not create assessment for participant {participant_id}: {e}")
                self.error = t('errors.start_session')
                return False
        finally:
            self._busy = False

        if self._closed:
            logger.info(f"[Session] Closed while starting, assessment {assessment_id} left in progress")
            return False

        stage = QuestionsStage(participant_id=participant_id, assessment_id=assessment_id)
        self._set_state(stage)
        self._load_task = asyncio.create_task(self._load_questions(stage, stage.token))
        return True

    # =================================================================
    # QUESTIONS STAGE
    # =================================================================

    async def _load_questions(self, stage: QuestionsStage, token: CancellationToken) -> None:
        try:
            questions = await self.store.list_questions()
        except Exception as e:
            if token.cancelled:
                logger.info(f"[Session] Discarding failed stale question load for assessment {stage.assessment_id}: {e}")
                return
            if isinstance(e, StoreError):
                logger.error(f"[Session] Could not load questions for assessment {stage.assessment_id}: {e}")
            else:
                logger.exception(f"[Session] Unexpected error loading questions for assessment {stage.assessment_id}")
            self.error = t('errors.load_questions')
            stage.loading = False
            return

        if token.cancelled:
            logger.info(f"[Session] Discarding stale question load for assessment {stage.assessment_id}")
            return

        stage.questions = list(questions)
        stage.loading = False
        logger.info(f"[Session] Loaded {len(stage.questions)} questions for assessment {stage.assessment_id}")

    async def wait_until_loaded(self) -> None:
        """Wait for the pending question load, if any."""
        if self._load_task is not None:
            await self._load_task

    def record_answer(self, question_id: int, value: int) -> bool:
        """Set the answer for a question; the last value wins.

        Raises:
            ValueError: value is not on the 1-3 scale

        Returns:
            False if not in `questions`, while saving, or the question is not loaded
        """
        if value not in ANSWER_VALUES:
            raise ValueError(f"Answer value must be one of {ANSWER_VALUES}, got {value!r}")

        if self._busy:
            logger.warning(f"[Session] record_answer({question_id}) ignored while saving")
            return False

        stage = self.state
        if not isinstance(stage, QuestionsStage):
            logger.warning(f"[Session] record_answer({question_id}) ignored in stage {self.stage.value}")
            return False

        if not any(q.id == question_id for q in stage.questions):
            logger.warning(f"[Session] record_answer: question {question_id} is not loaded")
            return False

        stage.answers[question_id] = int(value)
        return True

    async def submit(self) -> bool:
        """Store the answers, compute scores and move to `result`.

        Checks, first failure wins: session started, questions loaded,
        every question answered.

        Returns:
            True if the session moved to `result`
        """
        if self._busy or self._closed or isinstance(self.state, ResultStage):
            logger.warning(f"[Session] submit() ignored in stage {self.stage.value}")
            return False

        stage = self.state
        if not isinstance(stage, QuestionsStage) or not stage.assessment_id:
            self.error = t('errors.no_session')
            return False

        if not stage.questions:
            self.error = t('errors.no_questions')
            return False

        unanswered = [q for q in stage.questions if q.id not in stage.answers]
        if unanswered:
            self.error = t('errors.unanswered', count=len(unanswered))
            return False

        self.error = None
        self._busy = True
        try:
            answers = {q.id: stage.answers[q.id] for q in stage.questions}
            rows = [
                AnswerRecord(stage.assessment_id, q.id, answers[q.id])
                for q in stage.questions
            ]
            try:
                await self.store.insert_answers(rows)
            except StoreError as e:
                logger.error(f"[Session] Could not save answers for assessment {stage.assessment_id}: {e}")
                self.error = t('errors.save_answers')
                return False

            summary = compute_scores(stage.questions, answers)

            # Answers are stored; the summary on the assessment row is re-derivable.
            try:
                await self.store.update_assessment(
                    stage.assessment_id,
                    AssessmentStatus.COMPLETED,
                    datetime.now(timezone.utc),
                    summary,
                )
            except StoreError as e:
                logger.error(
                    f"[Session] Could not update summary of assessment {stage.assessment_id} "
                    f"(answers are stored): {e}"
                )
        finally:
            self._busy = False

        self._set_state(ResultStage(
            participant_id=stage.participant_id,
            assessment_id=stage.assessment_id,
            questions=tuple(stage.questions),
            answers=answers,
            summary=summary,
        ))
        return True

    # =================================================================
    # LIFECYCLE
    # =================================================================

    def close(self) -> None:
        """Abandon the session; a pending question load is discarded."""
        self._closed = True
        if isinstance(self.state, QuestionsStage):
            self.state.token.cancel()

    def _set_state(self, new_state: StageState) -> None:
        old_state = self.state
        if isinstance(old_state, QuestionsStage):
            old_state.token.cancel()
        self.state = new_state
        logger.info(
            f"[Session] {old_state.stage.value} -> {new_state.stage.value} "
            f"(assessment_id={getattr(new_state, 'assessment_id', None)})"
        )
