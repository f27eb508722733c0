"""
nexttm - next actionable task selection for hierarchical task lists.

Tasks own subtasks; the subtasks of an in-progress task are offered before
other top-level work. A skip offset lets independent agents each take a
different unit from the same ordered sequence.
"""

from .version import VERSION
from .models import (
    TaskStatus,
    TaskPriority,
    UnitKind,
    WorkItem,
    Task,
    SubTask,
    TaskList,
    TaskFile,
    ProjectConfig,
)
from .recovery import NextTMError, SkipValidationError
from .picker import Outcome, build_sequence, select_next
from .data import DataCore

__version__ = VERSION

__all__ = [
    "VERSION",
    "TaskStatus",
    "TaskPriority",
    "UnitKind",
    "WorkItem",
    "Task",
    "SubTask",
    "TaskList",
    "TaskFile",
    "ProjectConfig",
    "NextTMError",
    "SkipValidationError",
    "Outcome",
    "build_sequence",
    "select_next",
    "DataCore",
]
