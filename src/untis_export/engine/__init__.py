"""untis-export pipeline engine."""

from .coordinator import EXPORT_FILE_PATTERN, ExportCoordinator
from .errors import (
    ErrorCategory,
    ExportError,
    ParseError,
    UploadError,
    classify_http_error,
)
from .guard import RunGuard, RunState
from .transforms import remove_exams, replace_substitution_types

__all__ = [
    "EXPORT_FILE_PATTERN",
    "ErrorCategory",
    "ExportCoordinator",
    "ExportError",
    "ParseError",
    "RunGuard",
    "RunState",
    "UploadError",
    "classify_http_error",
    "remove_exams",
    "replace_substitution_types",
]
