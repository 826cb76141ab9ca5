"""
Inline button handlers.

Every button of the test carries the "cs:" prefix (core/callback_protocol.py)
and is routed to the view of the chat's session.
"""

import logging

from aiogram import Router
from aiogram.types import CallbackQuery

from core.callback_protocol import matches
from i18n import t

logger = logging.getLogger(__name__)

callbacks_router = Router(name="callbacks")


def _is_assessment_callback(callback: CallbackQuery) -> bool:
    """Does the callback belong to the test's buttons?"""
    return matches(callback.data or "")


@callbacks_router.callback_query(_is_assessment_callback)
async def cb_assessment(callback: CallbackQuery):
    from handlers import get_machine
    chat_id = callback.message.chat.id

    handled = await get_machine().handle_callback(chat_id, callback)
    if not handled:
        logger.info(f"[Callbacks] '{callback.data}' from chat_id={chat_id} without a session")
        await callback.answer(t('commands.no_session'), show_alert=True)
