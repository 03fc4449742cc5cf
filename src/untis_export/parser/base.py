"""Record parser interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from untis_export.models import ExportSettings, Infotext, Substitution


@dataclass
class ParseResult:
    """Records parsed from one export file, in document order."""

    substitutions: list[Substitution] = field(default_factory=list)
    infotexts: list[Infotext] = field(default_factory=list)


class RecordParser(ABC):
    """Turns the raw text of an export file into records."""

    @abstractmethod
    def parse(self, settings: ExportSettings, text: str) -> ParseResult:
        """Parse a single export file.

        Args:
            settings: Parser configuration for the current run.
            text: Full text of the file.

        Returns:
            ParseResult with substitutions and infotexts.

        Raises:
            ParseError: If the text is not a valid export.
        """
