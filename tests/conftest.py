"""Shared fixtures for nexttm tests."""

import os
import tempfile

# Keep test runs out of the user's log directory; must happen before nexttm is imported
os.environ.setdefault("NEXTTM_LOG_DIR", tempfile.mkdtemp(prefix="nexttm-logs-"))

import pytest

from nexttm.models import Task, SubTask


@pytest.fixture
def make_task():
    """Build a Task with pending/medium defaults, like a freshly added task."""
    def _make(id, priority="medium", status="pending", dependencies=None, subtasks=None, **fields):
        return Task(
            id=id,
            title=fields.pop("title", f"Task {id}"),
            priority=priority,
            status=status,
            dependencies=dependencies or [],
            subtasks=subtasks or [],
            **fields
        )
    return _make


@pytest.fixture
def make_subtask():
    def _make(id, priority="medium", status="pending", dependencies=None, **fields):
        return SubTask(
            id=id,
            title=fields.pop("title", f"Subtask {id}"),
            priority=priority,
            status=status,
            dependencies=dependencies or [],
            **fields
        )
    return _make


@pytest.fixture
def project(tmp_path, monkeypatch):
    """An empty working directory with no project env override."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("NEXTTM_PROJECT_DIR", raising=False)
    return tmp_path
