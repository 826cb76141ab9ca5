"""
Base class for the stage views.

Each stage of an AssessmentSession (start, questions, result) has one view
that renders it and forwards user input to the session. The StateMachine
(core/machine.py) picks the view from `session.stage` and calls `enter()`
on the new view when the stage changes.

Example:

    from states.base import BaseState

    class MyState(BaseState):
        name = "assessment.my_state"
        stage = Stage.START

        async def enter(self, chat_id, session):
            await self.send(chat_id, self.t("my_state.welcome"))

        async def handle(self, chat_id, session, message):
            session.set_participant_field("full_name", message.text)
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from aiogram import Bot
from aiogram.types import Message, CallbackQuery

from config import Stage
from core.session import AssessmentSession
from i18n import t

logger = logging.getLogger(__name__)


class BaseState(ABC):
    """
    Base class for all views.

    Class attributes:
        name: unique view id (format "category.name")
        stage: session stage this view renders
    """

    name: str = "base"
    stage: Optional[Stage] = None

    def __init__(self, bot: Bot):
        self.bot = bot

    async def enter(self, chat_id: int, session: AssessmentSession) -> None:
        """
        Called when the session enters this view's stage.

        Args:
            chat_id: Telegram chat
            session: the chat's assessment session
        """
        pass

    @abstractmethod
    async def handle(self, chat_id: int, session: AssessmentSession, message: Message) -> None:
        """
        Handle a text message.

        Args:
            chat_id: Telegram chat
            session: the chat's assessment session
            message: incoming message
        """
        pass

    async def handle_callback(self, chat_id: int, session: AssessmentSession, callback: CallbackQuery) -> None:
        """Handle an inline button press. Default: acknowledge only."""
        await callback.answer()

    async def exit(self, chat_id: int) -> None:
        """Called when the session leaves this stage or is replaced; drop per-chat data."""
        pass

    # =========================================
    # Helpers
    # =========================================

    def t(self, key: str, **kwargs) -> str:
        return t(key, **kwargs)

    async def send(self, chat_id: int, text: str, **kwargs) -> Message:
        """Shortcut for bot.send_message."""
        return await self.bot.send_message(chat_id, text, **kwargs)

    async def send_error(self, chat_id: int, session: AssessmentSession) -> Optional[Message]:
        """Show the session's error message, if any."""
        if not session.error:
            return None
        return await self.send(chat_id, f"⚠️ {session.error}")

    def __repr__(self) -> str:
        return f"<State: {self.name}>"
