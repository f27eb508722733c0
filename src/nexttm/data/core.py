"""
DataCore - storage collaborator for nexttm.

Locates the project data directory, reads the project configuration and loads
the tasks document into validated snapshots for the selection core.
"""
import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from nexttm.recovery import CorruptionError, FileOperationError
from nexttm.models import ProjectConfig, TaskFile, TaskList, DEFAULT_TAG
from nexttm.logs import get_logger
from .io import atomic_write, data_type_for, load_model, read_document, DATA_YAML
from .validate import validate_document

log = get_logger("data")

class DataCore:
    PROJECT_DATA_DIR = Path(".ntm")
    CONFIG_FILE = "config.yml"
    storage_type = "file"

    def __init__(self, project_dir: Union[Path, str, None] = None):
        env_dir = os.getenv('NEXTTM_PROJECT_DIR')
        self.project_dir = Path(project_dir or env_dir or DataCore.PROJECT_DATA_DIR)

    @property
    def config_path(self) -> Path:
        return self.project_dir / DataCore.CONFIG_FILE

    def is_initialized(self) -> bool:
        return self.project_dir.is_dir()

    def load_config(self) -> ProjectConfig:
        """Read config.yml; a missing file means defaults."""
        if not self.config_path.exists():
            log.debug(f"No config at {self.config_path}, using defaults")
            return ProjectConfig()
        return load_model(ProjectConfig, self.config_path)

    def resolve_tag(self, tag: Optional[str] = None) -> str:
        return tag or self.load_config().active_tag

    def tasks_path(self, override: Union[Path, str, None] = None) -> Path:
        if override:
            return Path(override)
        return self.project_dir / self.load_config().tasks_file

    def load_task_file(self, path: Union[Path, str, None] = None) -> TaskFile:
        """
        Read, schema-check and parse the tasks document.

        Raises:
            FileOperationError: if the document is missing or unreadable
            CorruptionError: if it cannot be parsed or fails validation
        """
        path = self.tasks_path(path)
        data = validate_document(read_document(path), path)
        try:
            task_file = TaskFile.model_validate(data)
        except ValidationError as e:
            raise CorruptionError(f"Invalid tasks file {path}: {e}", context={"path": str(path)}) from e
        log.debug(f"Loaded {path}: tags {sorted(task_file.tags)}")
        return task_file

    def load_snapshot(self, tag: Optional[str] = None, path: Union[Path, str, None] = None) -> TaskList:
        """The task list of one tag, freshly read from disk on every call."""
        tag = self.resolve_tag(tag)
        snapshot = self.load_task_file(path).snapshot(tag)
        log.info(f"Loaded {len(snapshot.tasks)} tasks for tag '{tag}'")
        return snapshot

    def init_project(self, tag: str = DEFAULT_TAG) -> List[Path]:
        """
        Create the project data directory with a config and an empty tasks document.

        Raises:
            FileOperationError: if the project is already initialized
        """
        if self.is_initialized():
            raise FileOperationError(f"Project already initialized ({self.project_dir} exists)")

        config = ProjectConfig(active_tag=tag)
        tasks_path = self.project_dir / config.tasks_file
        atomic_write(DATA_YAML, self.config_path, config.model_dump(mode='json'), create_dirs=True)
        atomic_write(data_type_for(tasks_path), tasks_path, TaskFile(tags={tag: TaskList()}).model_dump(mode='json', by_alias=True))
        log.info(f"Initialized project in {self.project_dir}")
        return [self.config_path, tasks_path]
