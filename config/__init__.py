"""
Bot configuration.

Contains:
- settings.py: environment, paths, logging helper and domain constants
- questions.yaml: the statement catalogue used to seed the database
"""

from .settings import (
    # Environment
    BOT_TOKEN,
    DATABASE_URL,
    DB_POOL_MIN_SIZE,
    DB_POOL_MAX_SIZE,
    LOG_LEVEL,
    validate_env,

    # Logging
    get_logger,

    # Paths
    BASE_DIR,
    QUESTIONS_PATH,

    # Domain
    Category,
    CATEGORY_ORDER,
    AnswerValue,
    ANSWER_VALUES,
    AssessmentStatus,
    Stage,
    PARTICIPANT_REQUIRED_FIELDS,
    PARTICIPANT_OPTIONAL_FIELDS,
    PARTICIPANT_FIELDS,
)

__all__ = [
    'BOT_TOKEN',
    'DATABASE_URL',
    'DB_POOL_MIN_SIZE',
    'DB_POOL_MAX_SIZE',
    'LOG_LEVEL',
    'validate_env',
    'get_logger',
    'BASE_DIR',
    'QUESTIONS_PATH',
    'Category',
    'CATEGORY_ORDER',
    'AnswerValue',
    'ANSWER_VALUES',
    'AssessmentStatus',
    'Stage',
    'PARTICIPANT_REQUIRED_FIELDS',
    'PARTICIPANT_OPTIONAL_FIELDS',
    'PARTICIPANT_FIELDS',
]
