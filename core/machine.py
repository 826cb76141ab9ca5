"""
State Machine: dispatches Telegram updates to the view of the session's stage.

One AssessmentSession per chat. The session decides the stage; the machine
picks the registered view for that stage, and when a handler moved the
session to another stage it calls exit() on the old view and enter() on the
new one.

Usage:
    from core.machine import StateMachine

    machine = StateMachine(bot, store_factory=PostgresStore)
    machine.register_all([StartState(bot), QuestionsState(bot), ResultState(bot)])

    await machine.start(chat_id)
    await machine.handle(chat_id, message)
"""

import logging
import traceback
from typing import Callable, Optional

from aiogram import Bot

from config import Stage
from core.session import AssessmentSession
from db.store import DataStore
from i18n import t
from states.base import BaseState

logger = logging.getLogger(__name__)


class StateMachine:
    """
    Central dispatcher.

    Responsible for:
    - registering views per stage
    - keeping the session of each chat
    - calling exit()/enter() when a session changes stage
    """

    def __init__(self, bot: Bot, store_factory: Callable[[], DataStore]):
        self.bot = bot
        self._store_factory = store_factory
        self._states: dict[Stage, BaseState] = {}
        self._sessions: dict[int, AssessmentSession] = {}

    def register(self, state: BaseState) -> None:
        """
        Register one view.

        Args:
            state: view instance with `stage` set
        """
        if state.stage is None:
            raise ValueError(f"State {state.name} has no stage")
        self._states[state.stage] = state
        logger.debug(f"Registered state: {state.name}")

    def register_all(self, states: list[BaseState]) -> None:
        for state in states:
            self.register(state)
        logger.info(f"Registered states: {len(states)}")

    def get_state(self, stage: Stage) -> Optional[BaseState]:
        return self._states.get(stage)

    def get_session(self, chat_id: int) -> Optional[AssessmentSession]:
        return self._sessions.get(chat_id)

    # =================================================================
    # LIFECYCLE
    # =================================================================

    async def start(self, chat_id: int) -> AssessmentSession:
        """
        Begin a new test for the chat, replacing any running one.

        Args:
            chat_id: Telegram chat

        Returns:
            the new session
        """
        await self._drop(chat_id)

        session = AssessmentSession(self._store_factory())
        self._sessions[chat_id] = session
        logger.info(f"[SM] New session for chat_id={chat_id}")

        start_state = self.get_state(Stage.START)
        if start_state is None:
            logger.error("Start state is not registered")
            return session

        await self._run(chat_id, session, start_state.enter(chat_id, session))
        return session

    async def cancel(self, chat_id: int) -> bool:
        """
        Abandon the chat's test.

        Returns:
            False if the chat had no session
        """
        if chat_id not in self._sessions:
            return False
        await self._drop(chat_id)
        logger.info(f"[SM] Session cancelled for chat_id={chat_id}")
        return True

    async def _drop(self, chat_id: int) -> None:
        session = self._sessions.pop(chat_id, None)
        if session is None:
            return
        session.close()
        state = self.get_state(session.stage)
        if state is not None:
            await state.exit(chat_id)

    # =================================================================
    # DISPATCH
    # =================================================================

    async def handle(self, chat_id: int, message) -> bool:
        """
        Handle a text message.

        Returns:
            False if the chat has no session
        """
        session = self.get_session(chat_id)
        if session is None:
            return False

        state = self.get_state(session.stage)
        if state is None:
            logger.error(f"State not found for stage: {session.stage.value}")
            return True

        await self._run(chat_id, session, state.handle(chat_id, session, message))
        return True

    async def handle_callback(self, chat_id: int, callback) -> bool:
        """
        Handle an inline button press.

        Returns:
            False if the chat has no session
        """
        session = self.get_session(chat_id)
        if session is None:
            return False

        state = self.get_state(session.stage)
        if state is None:
            logger.error(f"State not found for callback in stage: {session.stage.value}")
            await callback.answer()
            return True

        await self._run(chat_id, session, state.handle_callback(chat_id, session, callback))
        return True

    async def _run(self, chat_id: int, session: AssessmentSession, step) -> None:
        """Await a view coroutine, then enter the next view while the stage keeps changing."""
        stage = session.stage
        try:
            await step
            while session.stage != stage and self._sessions.get(chat_id) is session:
                from_state = self.get_state(stage)
                to_state = self.get_state(session.stage)
                logger.info(
                    f"[SM] Transition: {from_state.name if from_state else stage.value} -> "
                    f"{to_state.name if to_state else session.stage.value} for chat_id={chat_id}"
                )
                stage = session.stage
                if from_state is not None:
                    await from_state.exit(chat_id)
                if to_state is None:
                    logger.error(f"State not found for stage: {stage.value}")
                    return
                await to_state.enter(chat_id, session)
        except Exception as e:
            logger.error(f"Error in stage {stage.value} for chat_id={chat_id}: {e}")
            logger.error(traceback.format_exc())
            try:
                await self.bot.send_message(chat_id, t('errors.processing'))
            except Exception as send_error:
                logger.error(f"Could not send error message to {chat_id}: {send_error}")
