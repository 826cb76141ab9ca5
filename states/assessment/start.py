"""
View: start form.

Asks the contact fields one by one (name, email, then organization and
role, which can be skipped), shows a summary and starts the test.

Input: /start
Output: questions stage (after AssessmentSession.start() succeeds)
"""

from typing import Dict

from aiogram.types import Message, CallbackQuery

from config import get_logger, Stage, PARTICIPANT_FIELDS, PARTICIPANT_OPTIONAL_FIELDS
from core.callback_protocol import ACTION_SKIP, ACTION_START, decode
from core.session import AssessmentSession
from integrations.telegram.keyboards import kb_skip, kb_start
from states.base import BaseState

logger = get_logger(__name__)


class StartState(BaseState):
    """
    Start form.

    The index of the field being asked is kept per chat in _steps;
    len(PARTICIPANT_FIELDS) means the summary is shown.
    """

    name = "assessment.start"
    stage = Stage.START

    def __init__(self, bot):
        super().__init__(bot)
        self._steps: Dict[int, int] = {}

    # =================================================================
    # ENTER
    # =================================================================

    async def enter(self, chat_id: int, session: AssessmentSession) -> None:
        self._steps[chat_id] = 0
        await self.send(
            chat_id,
            f"{self.t('start.title')}\n\n{self.t('start.intro')}",
            parse_mode="Markdown",
        )
        await self._ask(chat_id, session)

    # =================================================================
    # HANDLE (text messages)
    # =================================================================

    async def handle(self, chat_id: int, session: AssessmentSession, message: Message) -> None:
        step = self._steps.get(chat_id, 0)
        if step >= len(PARTICIPANT_FIELDS):
            await self._send_summary(chat_id, session)
            return

        field_name = PARTICIPANT_FIELDS[step]
        text = (message.text or "").strip()
        if not text and field_name not in PARTICIPANT_OPTIONAL_FIELDS:
            await self._ask(chat_id, session)
            return

        session.set_participant_field(field_name, text)
        self._steps[chat_id] = step + 1
        await self._ask(chat_id, session)

    # =================================================================
    # HANDLE CALLBACK (inline button presses)
    # =================================================================

    async def handle_callback(self, chat_id: int, session: AssessmentSession, callback: CallbackQuery) -> None:
        _, action, _ = decode(callback.data or "")
        step = self._steps.get(chat_id, 0)

        if action == ACTION_SKIP:
            await callback.answer()
            if step < len(PARTICIPANT_FIELDS) and PARTICIPANT_FIELDS[step] in PARTICIPANT_OPTIONAL_FIELDS:
                session.set_participant_field(PARTICIPANT_FIELDS[step], "")
                self._steps[chat_id] = step + 1
                await callback.message.edit_reply_markup(reply_markup=None)
                await self._ask(chat_id, session)
            return

        if action == ACTION_START:
            if session.loading:
                await callback.answer(self.t('start.busy'))
                return
            await callback.answer()
            await callback.message.edit_reply_markup(reply_markup=None)

            if await session.start():
                return

            await self.send_error(chat_id, session)
            missing = session.participant.missing_required()
            if missing:
                self._steps[chat_id] = PARTICIPANT_FIELDS.index(missing[0])
                await self._ask(chat_id, session)
            else:
                await self._send_summary(chat_id, session)
            return

        await callback.answer()

    # =================================================================
    # EXIT
    # =================================================================

    async def exit(self, chat_id: int) -> None:
        self._steps.pop(chat_id, None)

    # =================================================================
    # INTERNAL METHODS
    # =================================================================

    async def _ask(self, chat_id: int, session: AssessmentSession) -> None:
        """Ask the current field, or show the summary when all are asked."""
        step = self._steps.get(chat_id, 0)
        if step >= len(PARTICIPANT_FIELDS):
            await self._send_summary(chat_id, session)
            return

        field_name = PARTICIPANT_FIELDS[step]
        kwargs = {"parse_mode": "Markdown"}
        if field_name in PARTICIPANT_OPTIONAL_FIELDS:
            kwargs["reply_markup"] = kb_skip()
        await self.send(chat_id, self.t(f'start.ask_{field_name}'), **kwargs)

    async def _send_summary(self, chat_id: int, session: AssessmentSession) -> None:
        # Plain text: typed values may contain Markdown characters
        empty = self.t('start.empty_field')
        draft = session.participant
        await self.send(
            chat_id,
            self.t(
                'start.summary',
                full_name=draft.full_name or empty,
                email=draft.email or empty,
                organization=draft.organization or empty,
                role=draft.role or empty,
            ),
            reply_markup=kb_start(),
        )
