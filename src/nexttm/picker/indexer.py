import math
import re
from typing import NamedTuple, Optional, Sequence

from nexttm.models import WorkItem
from nexttm.recovery import SkipValidationError

_SKIP_PATTERN = re.compile(r'^[0-9]+$')

class IndexResult(NamedTuple):
    unit: Optional[WorkItem]
    available: int

def _invalid_skip(raw):
    raise SkipValidationError(
        f"Invalid skip count: {raw}. Skip must be a non-negative integer.",
        context={"provided": raw}
    )

def validate_skip(raw) -> int:
    """Normalise a skip offset; ``None`` means 0."""
    if raw is None:
        return 0
    if isinstance(raw, bool):
        _invalid_skip(raw)
    if isinstance(raw, int):
        value = raw
    elif isinstance(raw, float) and math.isfinite(raw) and raw.is_integer():
        value = int(raw)
    else:
        _invalid_skip(raw)
    if value < 0:
        _invalid_skip(raw)
    return value

def parse_skip(text: Optional[str]) -> int:
    """Parse a skip offset typed on the command line."""
    if text is None:
        return 0
    if not _SKIP_PATTERN.match(text.strip()):
        _invalid_skip(text)
    return int(text.strip())

def pick(sequence: Sequence[WorkItem], skip: int) -> IndexResult:
    """Return the unit at zero-based position ``skip``, or no unit when out of range."""
    available = len(sequence)
    if skip < available:
        return IndexResult(sequence[skip], available)
    return IndexResult(None, available)
