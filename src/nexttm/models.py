from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

DEFAULT_TAG = "master"

# Raw documents may carry numeric ids; the models normalise them to strings.
_RAW_ID_SCHEMA = {"type": ["string", "integer"]}

class TaskStatus(Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    DONE = "done"
    CANCELLED = "cancelled"
    DEFERRED = "deferred"

class TaskPriority(Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Position in the fixed order critical > high > medium > low (0 sorts first)."""
        return _PRIORITY_RANKS[self]

_PRIORITY_RANKS = {
    TaskPriority.CRITICAL: 0,
    TaskPriority.HIGH: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.LOW: 3,
}

class UnitKind(Enum):
    TASK = "task"
    SUBTASK = "subtask"

def _coerce_id(v):
    if isinstance(v, bool):
        raise ValueError(f"Invalid task id: {v!r}")
    if isinstance(v, int):
        v = str(v)
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError("Task id must not be empty")
    return v

class WorkItem(BaseModel):
    """Fields and behaviour shared by tasks and subtasks; anything selectable is a WorkItem."""

    model_config = ConfigDict(populate_by_name=True)
    kind: ClassVar[UnitKind]

    id: str = Field(description="Identifier, unique within its scope", json_schema_extra=_RAW_ID_SCHEMA)
    title: str = Field(default="", description="Short human readable title")
    description: Optional[str] = Field(default=None, description="What the work is about")
    details: Optional[str] = Field(default=None, description="Implementation notes")
    test_strategy: Optional[str] = Field(default=None, alias="testStrategy", description="How the work is verified")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Current status")
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM, description="Priority of the work")
    dependencies: List[str] = Field(
        default_factory=list,
        description="Ids that must be done before this item can start",
        json_schema_extra={"items": _RAW_ID_SCHEMA}
    )

    @field_validator('id', mode='before')
    @classmethod
    def validate_id(cls, v):
        v = _coerce_id(v)
        if isinstance(v, str) and '.' in v:
            raise ValueError(f"Task id must not contain '.': {v}")
        return v

    @field_validator('dependencies', mode='before')
    @classmethod
    def normalize_dependencies(cls, v):
        if not isinstance(v, (list, tuple)):
            return v
        deps = []
        for dep in v:
            dep = _coerce_id(dep)
            if dep not in deps:
                deps.append(dep)
        return deps

    @property
    def address(self) -> str:
        """The externally visible identifier."""
        return self.id

class SubTask(WorkItem):
    kind: ClassVar[UnitKind] = UnitKind.SUBTASK

    parent_id: Optional[str] = Field(
        default=None, alias="parentId", description="Id of the owning task",
        json_schema_extra={"anyOf": [{"type": "string"}, {"type": "integer"}, {"type": "null"}]}
    )

    @field_validator('parent_id', mode='before')
    @classmethod
    def validate_parent_id(cls, v):
        return None if v is None else _coerce_id(v)

    @property
    def address(self) -> str:
        if self.parent_id is None:
            return self.id
        return f"{self.parent_id}.{self.id}"

class Task(WorkItem):
    kind: ClassVar[UnitKind] = UnitKind.TASK

    subtasks: List[SubTask] = Field(default_factory=list, description="Subtasks owned by this task")
    tags: List[str] = Field(default_factory=list, description="Free-form labels")

    @model_validator(mode='after')
    def adopt_subtasks(self):
        seen = set()
        for subtask in self.subtasks:
            if subtask.id in seen:
                raise ValueError(f"Duplicate subtask id {subtask.id} in task {self.id}")
            seen.add(subtask.id)
            if subtask.parent_id is not None and subtask.parent_id != self.id:
                raise ValueError(f"Subtask {subtask.id} names parent {subtask.parent_id} but belongs to task {self.id}")
            subtask.parent_id = self.id
        return self

class TaskList(BaseModel):
    """All top-level tasks of one tag; the snapshot a selection runs over."""

    tasks: List[Task] = Field(default_factory=list, description="Top-level tasks")

    @model_validator(mode='after')
    def validate_unique_ids(self):
        seen = set()
        for task in self.tasks:
            if task.id in seen:
                raise ValueError(f"Duplicate task id: {task.id}")
            seen.add(task.id)
        return self

class TaskFile(BaseModel):
    """The tasks document on disk: task lists keyed by tag."""

    tags: Dict[str, TaskList] = Field(default_factory=dict, description="Task lists keyed by tag name")

    @model_validator(mode='before')
    @classmethod
    def accept_legacy_layouts(cls, data):
        return cls.normalize(data)

    @staticmethod
    def normalize(data: Any) -> Any:
        """
        Bring older document layouts into the tagged form.

        ``{"tasks": [...]}`` becomes the default tag and ``{"<tag>": {"tasks": [...]}}``
        is wrapped under ``tags``.
        """
        if not isinstance(data, dict) or 'tags' in data:
            return data
        if 'tasks' in data:
            return {'tags': {DEFAULT_TAG: {'tasks': data['tasks']}}}
        if data and all(isinstance(v, dict) and 'tasks' in v for v in data.values()):
            return {'tags': {tag: {'tasks': v['tasks']} for tag, v in data.items()}}
        return data

    def snapshot(self, tag: str = DEFAULT_TAG) -> TaskList:
        """Return the task list for a tag; an unknown tag has no tasks."""
        return self.tags.get(tag) or TaskList()

class ProjectConfig(BaseModel):
    """Per-project settings stored in config.yml."""

    active_tag: str = Field(default=DEFAULT_TAG, description="Tag used when none is given")
    tasks_file: str = Field(default="tasks.yml", description="Tasks document, relative to the project data dir")

    @field_validator('tasks_file')
    @classmethod
    def validate_tasks_file(cls, v):
        if not v.endswith(('.yml', '.yaml', '.json')):
            raise ValueError(f"Unsupported tasks file type: {v}")
        return v
