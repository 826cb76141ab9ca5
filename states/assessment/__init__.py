"""
Communication style test.

Views:
- StartState: contact form → start
- QuestionsState: statements → submit
- ResultState: scores and dominant colour
"""

from .start import StartState
from .questions import QuestionsState
from .result import ResultState

__all__ = [
    'StartState',
    'QuestionsState',
    'ResultState',
]
