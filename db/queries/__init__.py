"""
Database query functions.

Modules:
- participants.py: communication_participants
- assessment.py: communication_assessments
- questions.py: communication_questions
- answers.py: communication_answers
"""

from .participants import (
    upsert_participant,
)

from .assessment import (
    create_assessment,
    update_assessment,
    get_assessment,
)

from .questions import (
    list_questions,
    upsert_questions,
)

from .answers import (
    AnswerRecord,
    insert_answers,
    get_answers,
)

__all__ = [
    # participants
    'upsert_participant',

    # assessment
    'create_assessment',
    'update_assessment',
    'get_assessment',

    # questions
    'list_questions',
    'upsert_questions',

    # answers
    'AnswerRecord',
    'insert_answers',
    'get_answers',
]
