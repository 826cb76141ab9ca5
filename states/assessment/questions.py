"""
View: the statements.

Waits for the catalogue load, then asks the statements one at a time with
three scale buttons. An answered statement is edited in place to show the
chosen value; pressing another button on it changes the answer. When all
statements are answered a submit button is shown.

Input: questions stage (after the start form)
Output: result stage (after AssessmentSession.submit() succeeds)
"""

from typing import Optional

from aiogram.types import Message, CallbackQuery

from config import get_logger, Stage
from core.callback_protocol import ACTION_ANSWER, ACTION_SUBMIT, decode, decode_answer
from core.scoring import Question, format_progress_bar
from core.session import AssessmentSession
from integrations.telegram.keyboards import answer_label, kb_answers, kb_submit
from states.base import BaseState

logger = get_logger(__name__)


class QuestionsState(BaseState):
    """Statement-by-statement questionnaire."""

    name = "assessment.questions"
    stage = Stage.QUESTIONS

    # =================================================================
    # ENTER
    # =================================================================

    async def enter(self, chat_id: int, session: AssessmentSession) -> None:
        await self.send(
            chat_id,
            f"{self.t('questions.title')}\n{self.t('questions.subtitle')}",
            parse_mode="Markdown",
        )
        await self.send(chat_id, self.t('questions.loading'))

        await session.wait_until_loaded()
        if session.closed or session.stage != Stage.QUESTIONS:
            return

        if session.error:
            await self.send_error(chat_id, session)
            await self.send(chat_id, self.t('result.restart_hint'))
            return

        if not session.questions:
            await self.send(chat_id, f"⚠️ {self.t('errors.no_questions')}")
            await self.send(chat_id, self.t('result.restart_hint'))
            return

        await self._ask_next(chat_id, session)

    # =================================================================
    # HANDLE (text messages)
    # =================================================================

    async def handle(self, chat_id: int, session: AssessmentSession, message: Message) -> None:
        await self.send(chat_id, self.t('questions.use_buttons'))

    # =================================================================
    # HANDLE CALLBACK (inline button presses)
    # =================================================================

    async def handle_callback(self, chat_id: int, session: AssessmentSession, callback: CallbackQuery) -> None:
        _, action, payload = decode(callback.data or "")

        if action == ACTION_ANSWER:
            await self._process_answer(chat_id, session, callback, payload)
            return

        if action == ACTION_SUBMIT:
            await self._process_submit(chat_id, session, callback)
            return

        await callback.answer()

    # =================================================================
    # INTERNAL METHODS
    # =================================================================

    async def _process_answer(
        self, chat_id: int, session: AssessmentSession, callback: CallbackQuery, payload: str
    ) -> None:
        await callback.answer()
        try:
            question_id, value = decode_answer(payload)
            was_answered = question_id in session.answers
            recorded = session.record_answer(question_id, value)
        except ValueError:
            logger.warning(f"[Questions] Malformed answer callback from {chat_id}: {payload!r}")
            return

        if not recorded:
            return

        question = self._find(session, question_id)
        await callback.message.edit_text(
            self.t(
                'questions.answered',
                number=question.number,
                question=question.text,
                answer=answer_label(value),
            ),
            reply_markup=kb_answers(question_id),
        )

        if not was_answered:
            await self._ask_next(chat_id, session)

    async def _process_submit(self, chat_id: int, session: AssessmentSession, callback: CallbackQuery) -> None:
        await callback.answer()
        if session.loading:
            return

        await callback.message.edit_reply_markup(reply_markup=None)
        await self.send(chat_id, self.t('questions.saving'))

        if await session.submit():
            return

        await self.send_error(chat_id, session)
        if session.unanswered_questions():
            await self._ask_next(chat_id, session)
        elif session.questions and session.assessment_id:
            await self.send(chat_id, self.t('questions.all_answered'), reply_markup=kb_submit())

    async def _ask_next(self, chat_id: int, session: AssessmentSession) -> None:
        """Ask the first unanswered statement, or offer to submit."""
        unanswered = session.unanswered_questions()
        if not unanswered:
            await self.send(chat_id, self.t('questions.all_answered'), reply_markup=kb_submit())
            return

        question = unanswered[0]
        questions = session.questions
        current = questions.index(question) + 1
        total = len(questions)

        await self.send(
            chat_id,
            self.t(
                'questions.question',
                current=current,
                total=total,
                progress=format_progress_bar(len(session.answers) + 1, total),
                number=question.number,
                question=question.text,
            ),
            reply_markup=kb_answers(question.id),
        )

    @staticmethod
    def _find(session: AssessmentSession, question_id: int) -> Optional[Question]:
        for question in session.questions:
            if question.id == question_id:
                return question
        return None
