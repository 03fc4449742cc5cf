"""untis-export data models."""

from .records import EXAM_ID, LEGACY_FIELD_NAMES, Infotext, Substitution
from .settings import (
    ColumnSettings,
    EndpointSettings,
    ExportSettings,
    Settings,
    UntisSettings,
)

__all__ = [
    "EXAM_ID",
    "LEGACY_FIELD_NAMES",
    "ColumnSettings",
    "EndpointSettings",
    "ExportSettings",
    "Infotext",
    "Settings",
    "Substitution",
    "UntisSettings",
]
