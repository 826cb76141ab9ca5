"""
View: test result.

Shows the total, the subtotal per colour and the dominant colour.
The result stage is final; /start begins a new test.
"""

from aiogram.types import Message

from config import get_logger, Stage
from core.scoring import format_result
from core.session import AssessmentSession
from states.base import BaseState

logger = get_logger(__name__)


class ResultState(BaseState):
    """Result screen."""

    name = "assessment.result"
    stage = Stage.RESULT

    async def enter(self, chat_id: int, session: AssessmentSession) -> None:
        summary = session.scores
        logger.info(
            f"[Result] chat {chat_id}, assessment {session.assessment_id}: "
            f"total={summary.total} dominant={session.dominant.value if session.dominant else None}"
        )
        await self.send(
            chat_id,
            format_result(summary, session.questions),
            parse_mode="Markdown",
        )
        await self.send(chat_id, self.t('result.restart_hint'))

    async def handle(self, chat_id: int, session: AssessmentSession, message: Message) -> None:
        await self.send(chat_id, self.t('result.restart_hint'))
