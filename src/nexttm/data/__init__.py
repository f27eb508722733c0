"""
Data management submodule: configuration and task document storage.
"""

from .core import DataCore
from .validate import task_file_schema, validate_document

__all__ = [
    'DataCore',
    'task_file_schema',
    'validate_document',
]
