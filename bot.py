"""
Communication style test: Telegram bot.

Participants fill in their contact details, rate 24 statements on a
three-point scale and get a score per colour (blue, red, green, yellow)
with their dominant colour. Participants, assessments, questions and
answers are stored in PostgreSQL.

Run:
    python -m db.migrations.001_seed_questions   # once, to load the questions
    python bot.py
"""

import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand

from config import BOT_TOKEN, LOG_LEVEL, validate_env
from core.machine import StateMachine
from db import init_db, close_db
from db.store import PostgresStore
from handlers import setup_handlers
from states.registry import register_all_states

# ============= CONFIGURATION =============

missing = validate_env()
if missing:
    raise ValueError(f"Environment variables not set: {', '.join(missing)}")

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stdout
)
logging.getLogger("aiogram.event").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


# ============= STARTUP =============

async def main():
    # Database: pool + tables
    await init_db()

    bot = Bot(token=BOT_TOKEN)
    dp = Dispatcher()

    machine = StateMachine(bot, store_factory=PostgresStore)
    register_all_states(machine, bot)
    setup_handlers(dp, machine)

    await bot.set_my_commands([
        BotCommand(command="start", description="Start de test"),
        BotCommand(command="cancel", description="Stop de test"),
    ])

    logger.info("Bot started")
    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()
        await close_db()
        logger.info("Bot stopped")


if __name__ == "__main__":
    asyncio.run(main())
