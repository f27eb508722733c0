from typing import Any, Dict, Union
from pathlib import Path

from jsonschema import validate, ValidationError, SchemaError

from nexttm.logs import get_logger
from nexttm.models import TaskFile
from nexttm.recovery import CorruptionError, FatalError

log = get_logger("data.validate")

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"

def task_file_schema() -> dict:
    """JSON Schema of the tasks document, generated from the TaskFile model."""
    schema = TaskFile.model_json_schema()
    schema["$schema"] = JSON_SCHEMA_DIALECT
    return schema

def validate_document(data: Dict[str, Any], file_path: Union[Path, str] = "<memory>") -> Dict[str, Any]:
    """
    Validate a raw tasks document against the tasks schema.

    Older layouts are normalised to the tagged form first; the normalised
    document is returned.

    Raises:
        CorruptionError: if the document does not match the schema
    """
    data = TaskFile.normalize(data)
    try:
        validate(instance=data, schema=task_file_schema())
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        log.error(f"File '{file_path}' FAILED validation at {location}: {e.message}")
        raise CorruptionError(
            f"Invalid tasks file {file_path} at {location}: {e.message}",
            context={"path": str(file_path), "location": location}
        ) from e
    except SchemaError as e:
        log.critical(f"The tasks schema itself is invalid: {e.message}")
        raise FatalError(f"Tasks schema is invalid: {e.message}") from e

    log.debug(f"File '{file_path}' is VALID")
    return data
