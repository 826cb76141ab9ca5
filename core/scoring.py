"""
Scoring engine for the communication style test.

Pure functions: per-colour subtotals and total from the loaded questions and
the answer map, dominant colour resolution, and text formatting of the
result. No I/O here.
"""

from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from config import Category, CATEGORY_ORDER, AnswerValue
from i18n import t

CATEGORY_EMOJI = {
    Category.BLUE: "🔵",
    Category.RED: "🔴",
    Category.GREEN: "🟢",
    Category.YELLOW: "🟡",
}


@dataclass(frozen=True)
class Question:
    """One statement of the catalogue."""
    id: int
    number: int
    category: Category
    cluster: str
    text: str


@dataclass(frozen=True)
class ScoreSummary:
    """Per-colour subtotals plus the grand total."""
    total: int = 0
    blue: int = 0
    red: int = 0
    green: int = 0
    yellow: int = 0

    def subtotal(self, category: Category) -> int:
        return getattr(self, _FIELD_BY_CATEGORY[category])

    def subtotals(self) -> dict[Category, int]:
        """Subtotals in canonical colour order."""
        return {c: self.subtotal(c) for c in CATEGORY_ORDER}


_FIELD_BY_CATEGORY = {
    Category.BLUE: "blue",
    Category.RED: "red",
    Category.GREEN: "green",
    Category.YELLOW: "yellow",
}


def compute_scores(questions: Iterable[Question], answers: Mapping[int, int]) -> ScoreSummary:
    """Sum answer values per colour.

    Unanswered questions count as 0, so partial answer maps are fine.

    Args:
        questions: loaded question set
        answers: {question_id: value}

    Returns:
        ScoreSummary whose total equals the sum of the four subtotals
    """
    sums = {c: 0 for c in CATEGORY_ORDER}
    total = 0

    for question in questions:
        value = answers.get(question.id, 0)
        total += value
        sums[question.category] += value

    return ScoreSummary(
        total=total,
        blue=sums[Category.BLUE],
        red=sums[Category.RED],
        green=sums[Category.GREEN],
        yellow=sums[Category.YELLOW],
    )


def dominant_category(summary: Optional[ScoreSummary]) -> Optional[Category]:
    """Colour with the highest subtotal.

    Equal subtotals are resolved by CATEGORY_ORDER: the earlier colour wins.

    Returns:
        Category, or None when there is no summary yet
    """
    if summary is None:
        return None

    dominant = CATEGORY_ORDER[0]
    max_score = summary.subtotal(dominant)

    for category in CATEGORY_ORDER[1:]:
        score = summary.subtotal(category)
        if score > max_score:
            max_score = score
            dominant = category

    return dominant


def max_per_category(questions: Iterable[Question]) -> int:
    """Highest possible subtotal for any colour (question count × top of the scale)."""
    counts: dict[Category, int] = {}
    for q in questions:
        counts[q.category] = counts.get(q.category, 0) + 1

    if not counts:
        return 0
    return max(counts.values()) * max(AnswerValue)


def format_progress_bar(current: int, total: int, length: int = 12) -> str:
    """Progress bar for the current question.

    Args:
        current: current question (1-based)
        total: number of questions
        length: bar length in characters
    """
    if total <= 0:
        return "░" * length
    filled = round(current / total * length)
    return "▓" * filled + "░" * (length - filled)


def format_score_bar(score: int, max_score: int, length: int = 12) -> str:
    """Text bar for a subtotal, scaled to `length` characters."""
    if max_score <= 0:
        return "░" * length
    filled = min(length, round(score / max_score * length))
    return "█" * filled + "░" * (length - filled)


def category_label(category: Category) -> str:
    return t(f'colors.{category.value}.label')


def format_result(summary: ScoreSummary, questions: Iterable[Question]) -> str:
    """Result text: total, subtotals with bars and the dominant colour.

    Args:
        summary: computed scores
        questions: the question set the scores were computed from

    Returns:
        Markdown-formatted result message
    """
    max_score = max_per_category(questions)
    dominant = dominant_category(summary)

    lines = []
    for category in CATEGORY_ORDER:
        score = summary.subtotal(category)
        title = t(f'colors.{category.value}.short')
        bar = format_score_bar(score, max_score)
        lines.append(f"{CATEGORY_EMOJI[category]} {title}:  {bar}  {score}/{max_score}")

    text = (
        f"{t('result.title')}\n"
        f"{t('result.subtitle')}\n\n"
        f"{t('result.total')}: *{summary.total}*\n\n"
        + "\n".join(lines)
    )

    if dominant is not None:
        text += (
            f"\n\n{t('result.dominant')}: "
            f"{CATEGORY_EMOJI[dominant]} *{category_label(dominant)}*"
        )

    return text + f"\n\n_{t('result.explanation')}_"
