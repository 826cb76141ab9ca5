"""
Registry of the StateMachine views.

When adding a view:
1. Import it here
2. Add it to the list in register_all_states
"""

import logging

from aiogram import Bot

from core.machine import StateMachine
from states.assessment import StartState, QuestionsState, ResultState

logger = logging.getLogger(__name__)


def register_all_states(machine: StateMachine, bot: Bot) -> None:
    """
    Register one view per session stage.

    Args:
        machine: StateMachine instance
        bot: Telegram Bot instance
    """
    states = [
        StartState(bot),
        QuestionsState(bot),
        ResultState(bot),
    ]

    machine.register_all(states)
    logger.info(f"Registered {len(states)} states")

