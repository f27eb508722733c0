class NextTMError(Exception):
    """Base exception for all nexttm errors."""

    code = "NEXTTM_ERROR"

    def __init__(self, message: str, code: str = None, context: dict = None):
        super().__init__(message)
        if code:
            self.code = code
        self.context = context or {}

class RecoverableError(NextTMError):
    """An error that can be recovered from without data loss."""
    pass

class FatalError(NextTMError):
    """An error that requires application termination or major intervention."""
    pass

class CorruptionError(FatalError):
    """Corrupted Data Error - from syntax errors in data formats, to just unknown data"""
    code = "CORRUPT_DATA"

class FileOperationError(RecoverableError):
    """File operation failed but can be retried."""
    code = "FILE_OPERATION"

class SkipValidationError(RecoverableError):
    """The requested skip offset is not a non-negative integer."""
    code = "VALIDATION_ERROR"
