"""
Command handlers: /start and /cancel.
"""

import logging

from aiogram import Router
from aiogram.filters import Command
from aiogram.types import Message

from i18n import t

logger = logging.getLogger(__name__)

commands_router = Router(name="commands")


@commands_router.message(Command("start"))
async def cmd_start(message: Message):
    """Begin a new test, replacing a running one."""
    from handlers import get_machine
    chat_id = message.chat.id
    logger.info(f"[Commands] /start from chat_id={chat_id}")
    await get_machine().start(chat_id)


@commands_router.message(Command("cancel"))
async def cmd_cancel(message: Message):
    from handlers import get_machine
    chat_id = message.chat.id
    if await get_machine().cancel(chat_id):
        await message.answer(t('commands.cancelled'))
    else:
        await message.answer(t('commands.no_session'))
