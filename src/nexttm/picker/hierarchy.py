from typing import List, Sequence, Tuple

from nexttm.models import SubTask, Task

def resolve_hierarchy(top_level: Sequence[Task], groups: Sequence[Tuple[Task, List[SubTask]]]) -> List[Task]:
    """
    Drop every top-level task that is already represented by its eligible subtasks.

    A parent with k eligible subtasks must occupy exactly k offsets, so it never
    keeps a slot of its own next to them.
    """
    represented = {parent.id for parent, subtasks in groups if subtasks}
    return [task for task in top_level if task.id not in represented]
