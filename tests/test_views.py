"""
View tests: the start form, the questionnaire and the result screen
driven through the StateMachine with a mocked bot.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from config import Stage
from core.callback_protocol import encode, encode_answer, SERVICE_ID, ACTION_SKIP, ACTION_START, ACTION_SUBMIT
from core.machine import StateMachine
from i18n import t
from states.assessment import StartState, QuestionsState, ResultState

from conftest import FakeStore

CHAT_ID = 7


def _message(text):
    message = MagicMock()
    message.text = text
    return message


def _callback(data):
    callback = AsyncMock()
    callback.data = data
    return callback


def _sent_texts(bot) -> list[str]:
    return [c.args[1] for c in bot.send_message.await_args_list]


@pytest.fixture
def bot():
    return AsyncMock()


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def machine(bot, store):
    machine = StateMachine(bot, store_factory=lambda: store)
    machine.register_all([StartState(bot), QuestionsState(bot), ResultState(bot)])
    return machine


async def _fill_form(machine):
    await machine.start(CHAT_ID)
    await machine.handle(CHAT_ID, _message("Anna de Vries"))
    await machine.handle(CHAT_ID, _message("anna@example.nl"))
    await machine.handle_callback(CHAT_ID, _callback(encode(SERVICE_ID, ACTION_SKIP)))
    await machine.handle(CHAT_ID, _message("Teamleider"))


class TestStartForm:

    @pytest.mark.anyio
    async def test_asks_fields_in_order(self, machine, bot):
        await _fill_form(machine)
        texts = _sent_texts(bot)

        assert t('start.ask_full_name') in texts
        assert texts.index(t('start.ask_email')) > texts.index(t('start.ask_full_name'))
        assert t('start.ask_organization') in texts
        assert t('start.ask_role') in texts

        session = machine.get_session(CHAT_ID)
        assert session.participant.full_name == "Anna de Vries"
        assert session.participant.organization == ""
        assert session.participant.role == "Teamleider"
        assert "Teamleider" in texts[-1]

    @pytest.mark.anyio
    async def test_empty_required_field_is_asked_again(self, machine, bot):
        await machine.start(CHAT_ID)
        await machine.handle(CHAT_ID, _message("   "))

        assert _sent_texts(bot)[-1] == t('start.ask_full_name')
        assert machine.get_session(CHAT_ID).participant.full_name == ""

    @pytest.mark.anyio
    async def test_start_failure_shows_error(self, machine, bot, store):
        store.fail.add("upsert_participant")
        await _fill_form(machine)
        await machine.handle_callback(CHAT_ID, _callback(encode(SERVICE_ID, ACTION_START)))

        assert machine.get_session(CHAT_ID).stage == Stage.START
        assert f"⚠️ {t('errors.save_participant')}" in _sent_texts(bot)


class TestQuestionnaire:

    @pytest.mark.anyio
    async def test_full_run_shows_result(self, machine, bot, store):
        await _fill_form(machine)
        await machine.handle_callback(CHAT_ID, _callback(encode(SERVICE_ID, ACTION_START)))

        session = machine.get_session(CHAT_ID)
        assert session.stage == Stage.QUESTIONS
        assert len(session.questions) == 24

        for question in session.questions:
            await machine.handle_callback(CHAT_ID, _callback(encode_answer(question.id, 3)))
        assert _sent_texts(bot)[-1] == t('questions.all_answered')

        await machine.handle_callback(CHAT_ID, _callback(encode(SERVICE_ID, ACTION_SUBMIT)))

        assert session.stage == Stage.RESULT
        assert len(store.answers) == 24
        texts = _sent_texts(bot)
        assert t('result.title') in texts[-2]
        assert texts[-1] == t('result.restart_hint')

    @pytest.mark.anyio
    async def test_text_during_questions(self, machine, bot):
        await _fill_form(machine)
        await machine.handle_callback(CHAT_ID, _callback(encode(SERVICE_ID, ACTION_START)))
        await machine.handle(CHAT_ID, _message("hallo"))

        assert _sent_texts(bot)[-1] == t('questions.use_buttons')

    @pytest.mark.anyio
    async def test_changing_an_answer_does_not_repeat_next_question(self, machine, bot):
        await _fill_form(machine)
        await machine.handle_callback(CHAT_ID, _callback(encode(SERVICE_ID, ACTION_START)))
        first = machine.get_session(CHAT_ID).questions[0]

        await machine.handle_callback(CHAT_ID, _callback(encode_answer(first.id, 1)))
        sent = bot.send_message.await_count
        callback = _callback(encode_answer(first.id, 3))
        await machine.handle_callback(CHAT_ID, callback)

        assert bot.send_message.await_count == sent
        assert machine.get_session(CHAT_ID).answers[first.id] == 3
        callback.message.edit_text.assert_awaited()

    @pytest.mark.anyio
    async def test_load_failure(self, machine, bot, store):
        store.fail.add("list_questions")
        await _fill_form(machine)
        await machine.handle_callback(CHAT_ID, _callback(encode(SERVICE_ID, ACTION_START)))

        texts = _sent_texts(bot)
        assert f"⚠️ {t('errors.load_questions')}" in texts
        assert texts[-1] == t('result.restart_hint')
