"""The single total order used for every candidate sequence."""
import re
from typing import Iterable, List, Tuple

from nexttm.models import WorkItem

_NUMERIC_ID = re.compile(r'^[0-9]+$')

def id_key(local_id: str) -> Tuple[int, int, str]:
    """Numeric ids compare as numbers and sort before any non-numeric id."""
    if _NUMERIC_ID.match(local_id):
        return (0, int(local_id), "")
    return (1, 0, local_id)

def sort_key(unit: WorkItem) -> Tuple[int, int, Tuple[int, int, str]]:
    """Priority first (critical leads), then fewer dependencies, then id."""
    return (unit.priority.rank, len(unit.dependencies), id_key(unit.id))

def sort_units(units: Iterable[WorkItem]) -> List[WorkItem]:
    return sorted(units, key=sort_key)
