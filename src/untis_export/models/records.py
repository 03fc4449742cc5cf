"""Record models produced by the Untis parser."""

from __future__ import annotations

from datetime import date as Date
from datetime import datetime, time
from typing import Any

from pydantic import BaseModel, Field

# Untis writes 0 into the id column of exam rows
EXAM_ID = 0

LEGACY_FIELD_NAMES = {
    "id": "ID",
    "date": "Date",
    "lesson": "Lesson",
    "teacher": "AbsenceTeacher",
    "replacement_teacher": "ReplacementTeacher",
    "subject": "Subject",
    "replacement_subject": "ReplacementSubject",
    "room": "Room",
    "replacement_room": "ReplacementRoom",
    "grades": "Classes",
    "replacement_grades": "ReplacementClasses",
    "reason": "AbsenceReason",
    "remark": "Description",
    "type": "Type",
}


class Substitution(BaseModel):
    """A single substituted, cancelled or moved lesson."""

    id: int
    date: Date
    lesson: int
    teacher: str | None = None
    replacement_teacher: str | None = None
    subject: str | None = None
    replacement_subject: str | None = None
    room: str | None = None
    replacement_room: str | None = None
    grades: list[str] = Field(default_factory=list)
    replacement_grades: list[str] = Field(default_factory=list)
    reason: str | None = None
    remark: str | None = None
    type: str | None = None

    @property
    def is_exam(self) -> bool:
        return self.id == EXAM_ID

    def to_legacy(self) -> dict[str, Any]:
        """Serialize using the field names of the legacy ICC endpoint.

        The legacy endpoint expects the date as a midnight timestamp.
        """
        data = self.model_dump(mode="json")
        data["date"] = datetime.combine(self.date, time()).isoformat()
        return {LEGACY_FIELD_NAMES[key]: value for key, value in data.items()}


class Infotext(BaseModel):
    """Free-text message of the day."""

    date: Date
    content: str
