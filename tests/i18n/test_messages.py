"""
Message catalogue tests

Run:
    pytest tests/i18n/
"""

import re

import pytest

from config import Category, AnswerValue
from i18n import Messages, get_messages, reload, t


CRITICAL_KEYS = [
    'start.title',
    'start.ask_full_name',
    'start.ask_email',
    'start.ask_organization',
    'start.ask_role',
    'start.summary',
    'questions.question',
    'questions.answered',
    'questions.all_answered',
    'result.title',
    'result.total',
    'result.dominant',
    'result.restart_hint',
    'errors.name_email_required',
    'errors.save_participant',
    'errors.start_session',
    'errors.load_questions',
    'errors.no_session',
    'errors.no_questions',
    'errors.unanswered',
    'errors.save_answers',
    'errors.processing',
]


class TestCompleteness:
    """Every key the bot uses is present"""

    @pytest.mark.parametrize("key", CRITICAL_KEYS)
    def test_critical_key_present(self, key):
        assert key in get_messages().get_all_keys()

    def test_answer_labels(self):
        keys = get_messages().get_all_keys()
        for value in AnswerValue:
            assert f'answers.{value.name.lower()}' in keys

    def test_colour_labels(self):
        keys = get_messages().get_all_keys()
        for category in Category:
            assert f'colors.{category.value}.label' in keys
            assert f'colors.{category.value}.short' in keys


class TestPlaceholders:
    """Placeholders {count}, {current}, ..."""

    @pytest.mark.parametrize("key,expected", [
        ('errors.unanswered', {'count'}),
        ('questions.question', {'current', 'total', 'progress', 'number', 'question'}),
        ('questions.answered', {'number', 'question', 'answer'}),
        ('start.summary', {'full_name', 'email', 'organization', 'role'}),
    ])
    def test_placeholders(self, key, expected):
        text = get_messages().messages[key]
        assert set(re.findall(r'\{(\w+)\}', text)) == expected

    def test_format(self):
        assert '3' in t('errors.unanswered', count=3)


class TestFallback:

    def test_missing_key_returns_key(self):
        assert t('no.such.key') == 'no.such.key'

    def test_missing_placeholder_returns_raw_text(self):
        text = t('errors.unanswered', other=1)
        assert '{count}' in text

    def test_nested_keys_are_flattened(self, tmp_path):
        path = tmp_path / "messages.yaml"
        path.write_text("a:\n  b:\n    c: \"deep {x}\"\n  empty: \"\"\n", encoding="utf-8")
        messages = Messages(path)

        assert messages.get_all_keys() == {'a.b.c'}
        assert messages.t('a.b.c', x=1) == "deep 1"

    def test_missing_file(self, tmp_path):
        messages = Messages(tmp_path / "missing.yaml")
        assert messages.get_all_keys() == set()

    def test_reload_reads_catalog_again(self):
        before = get_messages()
        reload()
        after = get_messages()

        assert after is not before
        assert after.get_all_keys() == before.get_all_keys()
        assert t('errors.load_questions') == before.t('errors.load_questions')
