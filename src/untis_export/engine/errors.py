"""Error classification for untis-export runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Classification of errors for log output and operators."""

    TRANSIENT = "transient"  # Timeouts, network, 5xx
    PERMANENT = "permanent"  # Malformed input, auth, 4xx
    UNKNOWN = "unknown"


@dataclass
class ExportError(Exception):
    """Base error with classification and context."""

    message: str
    category: ErrorCategory = ErrorCategory.UNKNOWN
    context: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.category.value}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ParseError(ExportError):
    """Raised when an export file cannot be turned into records."""

    category: ErrorCategory = ErrorCategory.PERMANENT


@dataclass
class UploadError(ExportError):
    """Raised when the endpoint does not accept an upload."""

    pass


def classify_http_error(status_code: int) -> ErrorCategory:
    """Classify an HTTP status code returned by the endpoint.

    Args:
        status_code: HTTP status code.

    Returns:
        The error category.
    """
    if status_code == 408 or status_code == 429:
        return ErrorCategory.TRANSIENT

    if 500 <= status_code < 600:
        return ErrorCategory.TRANSIENT

    if 400 <= status_code < 500:
        return ErrorCategory.PERMANENT

    return ErrorCategory.UNKNOWN
