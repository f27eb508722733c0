import tempfile, yaml, json, os
from typing import Union, Dict, Any, Type
from pathlib import Path
from pydantic import BaseModel, ValidationError
from nexttm.recovery import FileOperationError, FatalError, CorruptionError
from nexttm.logs import get_logger

log = get_logger("io")

DATA_YAML = 0
DATA_JSON = 1

def data_type_for(file_path: Union[Path, str]) -> int:
    """Pick the serialization format from a file suffix."""
    suffix = Path(file_path).suffix.lower()
    if suffix in ('.yml', '.yaml'):
        return DATA_YAML
    if suffix == '.json':
        return DATA_JSON
    raise FatalError(f"Unsupported data format: {file_path}")

def _cleanup(temp_path):
    if temp_path is not None and os.path.exists(temp_path):
        try:
            os.unlink(temp_path)
            log.debug(f"Cleaned up temporary file: {temp_path}")
        except OSError as cleanup_error:
            log.warning(f"Could not clean up temp file {temp_path}: {cleanup_error}")

def _create_dirs(file_path: Path):
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
    except (OSError, PermissionError) as e:
        error_msg = f"Cannot create directory {file_path.parent}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

def atomic_write(data_type: int, file_path: Union[Path, str], data: Dict[str, Any], create_dirs: bool = False):
    """
    Serialize and save data to a YAML or JSON file using atomic updates.
    """
    file_path = Path(file_path)
    temp_path = None

    if create_dirs:
        _create_dirs(file_path)

    try:
        # Temporary file lives next to the target so os.replace stays atomic
        with tempfile.NamedTemporaryFile(mode='w', encoding='utf-8', dir=file_path.parent, prefix=f".{file_path.name}.", suffix='.tmp', delete=False) as temp_file:
            temp_path = temp_file.name
            if data_type == DATA_YAML:
                yaml.safe_dump(data, temp_file, default_flow_style=False, sort_keys=False, indent=2, allow_unicode=True)
            elif data_type == DATA_JSON:
                json.dump(data, temp_file, indent=2, ensure_ascii=False)
            else:
                raise FatalError("Unsupported Data Format")
            temp_file.flush()
            os.fsync(temp_file.fileno())

        os.replace(temp_path, file_path)
        log.debug(f"Successfully saved file: {file_path}")
        return True

    except (yaml.YAMLError, TypeError, ValueError) as e:
        _cleanup(temp_path)
        error_msg = (f"Data serialization failed for {file_path}. "
                    f"In-memory data may be corrupt or contain non-serializable types: {e}")
        log.critical(error_msg)
        raise FatalError(error_msg) from e

    except (IOError, OSError, PermissionError) as e:
        _cleanup(temp_path)
        error_msg = f"I/O error saving file {file_path}: {e}"
        log.error(error_msg)
        raise FileOperationError(error_msg) from e

    except FatalError:
        _cleanup(temp_path)
        raise

def read_document(file_path: Union[Path, str]) -> Dict[str, Any]:
    """
    Load and parse a YAML or JSON document.

    Args:
        file_path: Path to the document; the suffix selects the parser

    Returns:
        Parsed data as dict (empty documents give an empty dict)

    Raises:
        FileOperationError: if the file is missing or unreadable
        CorruptionError: if the content cannot be parsed or is not a mapping
    """
    file_path = Path(file_path)
    data_type = data_type_for(file_path)
    if not file_path.exists():
        raise FileOperationError(f"File not found: {file_path}", context={"path": str(file_path)})

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            if data_type == DATA_YAML:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        # Syntax errors mean a corrupted file
        raise CorruptionError(f"Syntax error in {file_path}: {e}", context={"path": str(file_path)}) from e
    except (IOError, OSError, PermissionError) as e:
        raise FileOperationError(f"Failed to read file {file_path}: {e}", context={"path": str(file_path)}) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise CorruptionError(f"File {file_path} contains invalid data structure", context={"path": str(file_path)})
    return data

def load_model(model_type: Type[BaseModel], file_path: Union[Path, str]) -> BaseModel:
    """
    Load a document and validate it into ``model_type``.

    Raises:
        CorruptionError: if the document does not match the model
    """
    data = read_document(file_path)
    try:
        return model_type.model_validate(data)
    except ValidationError as e:
        raise CorruptionError(f"Invalid data in {file_path}: {e}", context={"path": str(file_path)}) from e
