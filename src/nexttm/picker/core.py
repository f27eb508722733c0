"""
Next-unit selection.

``select_next`` turns a task snapshot and a skip offset into an ``Outcome``.
Subtasks of in-progress parents come first, grouped per parent and with the
parents in priority order, followed by the eligible top-level tasks. The skip
offset indexes into that combined sequence, which lets several independent
callers each take a different unit by asking for a different offset.
"""
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from nexttm.logs import get_logger
from nexttm.models import SubTask, Task, TaskList, WorkItem
from .eligibility import StatusIndex, active_parents, eligible_tasks
from .hierarchy import resolve_hierarchy
from .indexer import pick, validate_skip
from .ordering import sort_key, sort_units

log = get_logger("picker")

Snapshot = Union[TaskList, Sequence[Task]]

class Outcome(BaseModel):
    """Result of one selection, ready for a presentation layer."""

    task: Optional[Union[Task, SubTask]] = Field(default=None, description="The selected unit, if any")
    found: bool = Field(description="Whether a unit exists at the requested offset")
    available_task_count: int = Field(description="Length of the eligible sequence")
    skip_value: int = Field(description="The offset that was applied")
    has_any_tasks: bool = Field(description="Whether the snapshot held any task at all, eligible or not")

    def to_payload(self, tag: str, storage_type: str) -> Dict[str, Any]:
        """
        The JSON document emitted by ``ntm next --format json``.

        ``task.id`` is the unit's address, so a subtask reports ``"7.2"``
        and never collides with a top-level task ``"2"``.
        """
        task = None
        if self.task is not None:
            task = self.task.model_dump(mode='json', by_alias=True)
            task["id"] = self.task.address
        return {
            "task": task,
            "found": self.found,
            "tag": tag,
            "storageType": storage_type,
            "hasAnyTasks": self.has_any_tasks,
            "skipValue": self.skip_value,
            "availableTaskCount": self.available_task_count,
        }

def _tasks_of(snapshot: Snapshot) -> List[Task]:
    if isinstance(snapshot, TaskList):
        return snapshot.tasks
    return list(snapshot)

def build_sequence(snapshot: Snapshot) -> List[WorkItem]:
    """The full ordered sequence of selectable units for a snapshot."""
    tasks = _tasks_of(snapshot)
    index = StatusIndex.from_tasks(tasks)
    groups = active_parents(tasks, index)
    top_level = resolve_hierarchy(eligible_tasks(tasks, index), groups)

    sequence = []
    for parent, subtasks in sorted(groups, key=lambda group: sort_key(group[0])):
        sequence.extend(sort_units(subtasks))
    sequence.extend(sort_units(top_level))

    log.debug(f"{len(tasks)} tasks -> {len(sequence)} selectable units ({len(groups)} active parents)")
    return sequence

def select_next(snapshot: Snapshot, skip=None) -> Outcome:
    """
    Select the unit at offset ``skip`` (default 0).

    Raises:
        SkipValidationError: if ``skip`` is not a non-negative integer. The
            snapshot is not looked at in that case.
    """
    skip = validate_skip(skip)
    tasks = _tasks_of(snapshot)
    unit, available = pick(build_sequence(tasks), skip)

    if unit is None:
        log.info(f"No eligible unit at skip {skip}; {available} available")
    else:
        log.info(f"Selected {unit.address} at skip {skip} of {available}")

    return Outcome(
        task=unit,
        found=unit is not None,
        available_task_count=available,
        skip_value=skip,
        has_any_tasks=len(tasks) > 0,
    )
