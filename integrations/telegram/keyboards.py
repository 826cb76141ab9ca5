"""
Inline keyboards for the communication style test bot.
"""

from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from config import AnswerValue
from core.callback_protocol import (
    SERVICE_ID,
    ACTION_SKIP,
    ACTION_START,
    ACTION_SUBMIT,
    encode,
    encode_answer,
)
from i18n import t


def answer_label(value: int) -> str:
    """Label of a scale value ("Niet herkenbaar", ...)."""
    return t(f'answers.{AnswerValue(value).name.lower()}')


# ============= START FORM =============

def kb_skip() -> InlineKeyboardMarkup:
    """Skip an optional form field"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=t('start.btn_skip'), callback_data=encode(SERVICE_ID, ACTION_SKIP))]
    ])


def kb_start() -> InlineKeyboardMarkup:
    """Start the test"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=f"🚀 {t('start.btn_start')}", callback_data=encode(SERVICE_ID, ACTION_START))]
    ])


# ============= QUESTIONS =============

def kb_answers(question_id: int) -> InlineKeyboardMarkup:
    """Three scale buttons for one statement, one per row"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=answer_label(v), callback_data=encode_answer(question_id, v.value))]
        for v in AnswerValue
    ])


def kb_submit() -> InlineKeyboardMarkup:
    """Submit all answers"""
    return InlineKeyboardMarkup(inline_keyboard=[
        [InlineKeyboardButton(text=f"📨 {t('questions.btn_submit')}", callback_data=encode(SERVICE_ID, ACTION_SUBMIT))]
    ])
