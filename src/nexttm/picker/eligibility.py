"""
Eligibility rules: which tasks and subtasks may be handed out at all.

A dependency is satisfied only when it resolves to an item in the same snapshot
whose status is done. Ids that resolve to nothing keep the dependant blocked.
"""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from nexttm.logs import get_logger
from nexttm.models import SubTask, Task, TaskStatus, UnitKind, WorkItem

log = get_logger("picker.eligibility")

SELECTABLE_TASK_STATUSES = frozenset({TaskStatus.PENDING, TaskStatus.DEFERRED})
SELECTABLE_SUBTASK_STATUSES = frozenset({TaskStatus.PENDING})

class StatusIndex:
    """Status lookup by address over one snapshot."""

    def __init__(self, statuses: Dict[str, TaskStatus]):
        self._statuses = statuses

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> 'StatusIndex':
        statuses = {}
        for task in tasks:
            statuses[task.address] = task.status
            for subtask in task.subtasks:
                statuses[subtask.address] = subtask.status
        return cls(statuses)

    def resolve(self, unit: WorkItem, dependency: str) -> Optional[TaskStatus]:
        """
        Look up the status a dependency of ``unit`` refers to.

        Dotted ids ("3.1") always name a subtask. For subtasks an undotted id
        names a sibling first and a top-level task otherwise.
        """
        if '.' in dependency:
            return self._statuses.get(dependency)
        if unit.kind is UnitKind.SUBTASK:
            sibling = self._statuses.get(f"{unit.parent_id}.{dependency}")
            if sibling is not None:
                return sibling
        return self._statuses.get(dependency)

    def is_satisfied(self, unit: WorkItem) -> bool:
        for dependency in unit.dependencies:
            status = self.resolve(unit, dependency)
            if status is None:
                log.debug(f"{unit.address}: dependency {dependency} does not resolve, treating as unmet")
                return False
            if status is not TaskStatus.DONE:
                return False
        return True

def eligible_tasks(tasks: Sequence[Task], index: StatusIndex) -> List[Task]:
    """Top-level tasks that are pending or deferred with every dependency done."""
    return [t for t in tasks if t.status in SELECTABLE_TASK_STATUSES and index.is_satisfied(t)]

def eligible_subtasks(task: Task, index: StatusIndex) -> List[SubTask]:
    """Pending subtasks with met dependencies; only an in-progress parent offers any."""
    if task.status is not TaskStatus.IN_PROGRESS:
        return []
    return [st for st in task.subtasks if st.status in SELECTABLE_SUBTASK_STATUSES and index.is_satisfied(st)]

def active_parents(tasks: Sequence[Task], index: StatusIndex) -> List[Tuple[Task, List[SubTask]]]:
    """In-progress tasks paired with their eligible subtasks, skipping those with none."""
    groups = []
    for task in tasks:
        subtasks = eligible_subtasks(task, index)
        if subtasks:
            groups.append((task, subtasks))
    return groups
