"""
Fallback handlers: text messages and unknown callbacks.

With a running session the message goes to the session's view,
otherwise a hint to send /start is shown.
"""

import logging

from aiogram import Router
from aiogram.types import Message, CallbackQuery

from i18n import t

logger = logging.getLogger(__name__)

fallback_router = Router(name="fallback")


@fallback_router.message()
async def on_message(message: Message):
    from handlers import get_machine
    chat_id = message.chat.id

    handled = await get_machine().handle(chat_id, message)
    if not handled:
        await message.answer(t('commands.no_session'))


@fallback_router.callback_query()
async def on_unknown_callback(callback: CallbackQuery):
    logger.warning(f"[Fallback] Unknown callback '{callback.data}' from user {callback.from_user.id}")
    await callback.answer()
