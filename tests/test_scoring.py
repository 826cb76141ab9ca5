"""
Scoring engine tests: subtotals, dominant colour, result text.

Run:
    pytest tests/test_scoring.py -v
"""

from config import Category
from core.scoring import (
    Question,
    ScoreSummary,
    compute_scores,
    dominant_category,
    max_per_category,
    format_progress_bar,
    format_score_bar,
    format_result,
)
from i18n import t


def _q(qid: int, category: Category) -> Question:
    return Question(id=qid, number=qid, category=category, cluster="", text=f"q{qid}")


class TestComputeScores:
    """Per-colour sums"""

    def test_all_maximum_answers(self, questions):
        answers = {q.id: 3 for q in questions}
        summary = compute_scores(questions, answers)

        assert summary == ScoreSummary(total=72, blue=18, red=18, green=18, yellow=18)

    def test_total_is_sum_of_subtotals(self, questions):
        answers = {q.id: (i % 3) + 1 for i, q in enumerate(questions)}
        summary = compute_scores(questions, answers)

        assert summary.total == summary.blue + summary.red + summary.green + summary.yellow
        assert summary.total == sum(answers.values())

    def test_mixed_answers(self):
        questions = [_q(1, Category.BLUE), _q(2, Category.BLUE), _q(3, Category.RED), _q(4, Category.YELLOW)]
        summary = compute_scores(questions, {1: 1, 2: 3, 3: 2, 4: 1})

        assert summary.blue == 4
        assert summary.red == 2
        assert summary.green == 0
        assert summary.yellow == 1
        assert summary.total == 7

    def test_unanswered_counts_as_zero(self):
        questions = [_q(1, Category.GREEN), _q(2, Category.GREEN)]
        summary = compute_scores(questions, {1: 2})

        assert summary.green == 2
        assert summary.total == 2

    def test_answers_for_unknown_questions_are_ignored(self):
        questions = [_q(1, Category.RED)]
        summary = compute_scores(questions, {1: 3, 999: 3})

        assert summary.total == 3

    def test_empty_input(self):
        assert compute_scores([], {}) == ScoreSummary()

    def test_subtotals_in_canonical_order(self):
        summary = ScoreSummary(total=10, blue=1, red=2, green=3, yellow=4)
        assert list(summary.subtotals().items()) == [
            (Category.BLUE, 1),
            (Category.RED, 2),
            (Category.GREEN, 3),
            (Category.YELLOW, 4),
        ]


class TestDominantCategory:
    """Highest subtotal, ties resolved by canonical order"""

    def test_none_without_summary(self):
        assert dominant_category(None) is None

    def test_clear_winner(self):
        summary = ScoreSummary(total=30, blue=5, red=6, green=7, yellow=12)
        assert dominant_category(summary) == Category.YELLOW

    def test_tie_prefers_earlier_colour(self):
        summary = ScoreSummary(total=40, blue=8, red=12, green=12, yellow=8)
        assert dominant_category(summary) == Category.RED

    def test_all_equal_is_blue(self):
        summary = ScoreSummary(total=72, blue=18, red=18, green=18, yellow=18)
        assert dominant_category(summary) == Category.BLUE

    def test_all_zero_is_blue(self):
        assert dominant_category(ScoreSummary()) == Category.BLUE


class TestFormatting:
    """Bars and result text"""

    def test_max_per_category(self, questions):
        assert max_per_category(questions) == 18
        assert max_per_category([]) == 0

    def test_progress_bar(self):
        assert format_progress_bar(6, 12, length=12) == "▓" * 6 + "░" * 6
        assert format_progress_bar(1, 0, length=4) == "░░░░"

    def test_score_bar_is_capped(self):
        assert format_score_bar(18, 18, length=6) == "██████"
        assert format_score_bar(30, 18, length=6) == "██████"
        assert format_score_bar(0, 0, length=3) == "░░░"

    def test_result_contains_scores_and_dominant(self, questions):
        answers = {q.id: (3 if q.category == Category.GREEN else 1) for q in questions}
        summary = compute_scores(questions, answers)
        text = format_result(summary, questions)

        assert t('result.title') in text
        assert f"*{summary.total}*" in text
        assert "18/18" in text
        assert "6/18" in text
        assert t('colors.groen.label') in text
        assert t('result.explanation') in text


class TestProperties:
    """Scenarios from the scoring rules"""

    def test_one_question_per_colour(self):
        questions = [
            _q(1, Category.BLUE), _q(2, Category.RED), _q(3, Category.GREEN), _q(4, Category.YELLOW),
        ]
        summary = compute_scores(questions, {1: 3, 2: 2, 3: 1, 4: 1})

        assert summary == ScoreSummary(total=7, blue=3, red=2, green=1, yellow=1)
        assert dominant_category(summary) == Category.BLUE

    def test_deterministic(self, questions):
        answers = {q.id: (q.number % 3) + 1 for q in questions}
        first = compute_scores(questions, answers)

        assert all(compute_scores(questions, answers) == first for _ in range(5))
        assert all(dominant_category(first) == dominant_category(first) for _ in range(5))

    def test_no_answers_all_zero(self, questions):
        summary = compute_scores(questions, {})
        assert summary.total == 0
        assert all(value == 0 for value in summary.subtotals().values())
