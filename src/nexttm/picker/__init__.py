"""
Selection of the next actionable task or subtask.
"""

from .core import Outcome, build_sequence, select_next
from .indexer import parse_skip, validate_skip
from .ordering import sort_key

__all__ = [
    'Outcome',
    'build_sequence',
    'select_next',
    'parse_skip',
    'validate_skip',
    'sort_key',
]
