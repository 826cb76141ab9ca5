"""
Registration of the aiogram handlers.

All handlers are thin wrappers that delegate to core/machine.py.
"""

from aiogram import Dispatcher

from core.machine import StateMachine

# Module-level reference, set during setup_handlers()
_machine: StateMachine = None


def get_machine() -> StateMachine:
    """Get the state machine. Must be called after setup_handlers()."""
    return _machine


def setup_handlers(dp: Dispatcher, machine: StateMachine) -> None:
    """Include the commands, callbacks and fallback routers.

    The fallback router is a catch-all and is included last.

    Args:
        dp: aiogram Dispatcher
        machine: our core.machine.StateMachine
    """
    global _machine
    _machine = machine

    from .commands import commands_router
    from .callbacks import callbacks_router
    from .fallback import fallback_router

    dp.include_router(commands_router)
    dp.include_router(callbacks_router)
    dp.include_router(fallback_router)
