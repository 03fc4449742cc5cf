"""Parser for Untis HTML substitution exports."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup, Tag

from untis_export.engine.errors import ParseError
from untis_export.models import EXAM_ID, Infotext, Substitution

from .base import ParseResult, RecordParser

if TYPE_CHECKING:
    from untis_export.models import ExportSettings

logger = logging.getLogger(__name__)

BROKEN_P_TAG = re.compile(r"</?p\b[^>]*>", re.IGNORECASE)
LESSON_PATTERN = re.compile(r"^(\d+)\s*(?:-\s*(\d+))?$")
ABSENT_PATTERN = re.compile(r"^\((.*)\)$")

INFO_HEADER = "Nachrichten zum Tag"


def _has_class(tag: Tag, name: str) -> bool:
    return name in (tag.get("class") or [])


class UntisHtmlParser(RecordParser):
    """Parse the "mon_list" HTML export Untis writes for substitution plans.

    Each day starts with a ``div.mon_title`` holding the date, followed by an
    optional ``table.info`` with the messages of the day and a
    ``table.mon_list`` with one row per substitution.
    """

    def parse(self, settings: ExportSettings, text: str) -> ParseResult:
        if settings.fix_broken_p_tags:
            text = BROKEN_P_TAG.sub("", text)

        soup = BeautifulSoup(text, "html.parser")
        result = ParseResult()
        current_date: date | None = None

        for element in soup.find_all(["div", "table"]):
            if element.name == "div" and _has_class(element, "mon_title"):
                current_date = self._parse_title_date(settings, element)
            elif element.name == "table" and _has_class(element, "info"):
                result.infotexts.extend(self._parse_infotexts(current_date, element))
            elif element.name == "table" and _has_class(element, "mon_list"):
                result.substitutions.extend(
                    self._parse_substitutions(settings, current_date, element)
                )

        logger.debug(
            f"Parsed {len(result.substitutions)} substitutions "
            f"and {len(result.infotexts)} infotexts"
        )
        return result

    def _parse_title_date(self, settings: ExportSettings, title: Tag) -> date:
        tokens = title.get_text(" ", strip=True).split()
        if not tokens:
            raise ParseError("Empty day title in export", context={"title": str(title)})
        return self._parse_date(settings, tokens[0])

    @staticmethod
    def _parse_date(settings: ExportSettings, value: str) -> date:
        try:
            return datetime.strptime(value, settings.date_time_format).date()
        except ValueError as e:
            raise ParseError(
                f"Invalid date '{value}' for format '{settings.date_time_format}'",
                context={"value": value},
            ) from e

    def _parse_infotexts(self, current_date: date | None, table: Tag) -> list[Infotext]:
        infotexts: list[Infotext] = []
        for row in table.find_all("tr"):
            cells = [cell.get_text(" ", strip=True) for cell in row.find_all("td")]
            cells = [cell for cell in cells if cell]
            if not cells or cells[0] == INFO_HEADER:
                continue
            if current_date is None:
                raise ParseError("Infotext found before any day title")
            infotexts.append(Infotext(date=current_date, content=": ".join(cells)))
        return infotexts

    def _parse_substitutions(
        self,
        settings: ExportSettings,
        current_date: date | None,
        table: Tag,
    ) -> list[Substitution]:
        substitutions: list[Substitution] = []
        columns = settings.columns

        for row in table.find_all("tr"):
            cells = [cell.get_text(" ", strip=True) for cell in row.find_all("td")]
            if not cells:
                # Header row
                continue

            def cell(index: int) -> str | None:
                if index < 0 or index >= len(cells):
                    return None
                value = cells[index]
                if not value or value in settings.empty_values:
                    return None
                return value

            def value(index: int) -> str | None:
                return self._absent_aware(settings, cell(index))

            def values(index: int) -> list[str]:
                raw = cell(index)
                if raw is None:
                    return []
                items = (self._absent_aware(settings, part.strip()) for part in raw.split(","))
                return [item for item in items if item]

            row_date = current_date
            date_cell = cell(columns.date)
            if date_cell is not None:
                row_date = self._parse_date(settings, date_cell)
            if row_date is None:
                raise ParseError("Substitution row without a date", context={"row": cells})

            base = {
                "id": self._parse_id(cell(columns.id)),
                "date": row_date,
                "teacher": value(columns.teachers),
                "replacement_teacher": value(columns.replacement_teachers),
                "subject": value(columns.subject),
                "replacement_subject": value(columns.replacement_subject),
                "room": value(columns.room),
                "replacement_room": value(columns.replacement_room),
                "grades": values(columns.grades),
                "replacement_grades": values(columns.replacement_grades),
                "remark": cell(columns.remark),
                "type": cell(columns.type),
            }

            for lesson in self._parse_lessons(cell(columns.lesson)):
                substitutions.append(Substitution(lesson=lesson, **base))

        return substitutions

    @staticmethod
    def _parse_id(value: str | None) -> int:
        if value is None:
            return EXAM_ID
        try:
            return int(value)
        except ValueError as e:
            raise ParseError(f"Invalid substitution id '{value}'") from e

    @staticmethod
    def _parse_lessons(value: str | None) -> list[int]:
        """Expand '3' or '3 - 4' into the list of lessons."""
        if value is None:
            raise ParseError("Substitution row without a lesson")
        match = LESSON_PATTERN.match(value)
        if not match:
            raise ParseError(f"Invalid lesson '{value}'")
        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else start
        if end < start:
            raise ParseError(f"Invalid lesson range '{value}'")
        return list(range(start, end + 1))

    @staticmethod
    def _absent_aware(settings: ExportSettings, value: str | None) -> str | None:
        """Handle values Untis wraps in parentheses to mark them absent."""
        if value is None:
            return None
        match = ABSENT_PATTERN.match(value)
        if not match:
            return value
        if not settings.include_absent_values:
            return None
        return match.group(1).strip() or None
