"""Fakes and factories shared by the test suite."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Callable, Sequence
from datetime import date

from untis_export.engine.errors import ParseError
from untis_export.models import ExportSettings, Infotext, Substitution
from untis_export.parser import ParseResult, RecordParser
from untis_export.upload import Uploader

DAY = date(2026, 10, 19)


def make_substitution(id: int, type: str | None = None, lesson: int = 1) -> Substitution:
    """Create a minimal substitution."""
    return Substitution(id=id, date=DAY, lesson=lesson, type=type)


class FakeParser(RecordParser):
    """Parser returning canned results keyed by file text.

    Text starting with "BROKEN" raises a ParseError.
    """

    def __init__(self, results: dict[str, ParseResult] | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[ExportSettings, str]] = []
        self.on_parse: Callable[[str], None] | None = None

    def parse(self, settings: ExportSettings, text: str) -> ParseResult:
        self.calls.append((settings, text))
        if self.on_parse is not None:
            self.on_parse(text)
        if text.startswith("BROKEN"):
            raise ParseError(f"Cannot parse {text!r}")
        result = self.results.get(text, ParseResult())
        return ParseResult(
            substitutions=[s.model_copy() for s in result.substitutions],
            infotexts=list(result.infotexts),
        )


class FakeUploader(Uploader):
    """Uploader recording every call."""

    def __init__(self) -> None:
        self.substitution_calls: list[list[Substitution]] = []
        self.infotext_calls: list[list[Infotext]] = []
        self.substitutions_error: BaseException | None = None
        self.infotexts_error: BaseException | None = None
        self.delay: float = 0.0
        self.gate: threading.Event | None = None

    async def _wait(self) -> None:
        if self.gate is not None:
            await asyncio.to_thread(self.gate.wait, 5.0)
        if self.delay:
            await asyncio.sleep(self.delay)

    async def upload_substitutions(self, substitutions: Sequence[Substitution]) -> None:
        await self._wait()
        self.substitution_calls.append(list(substitutions))
        if self.substitutions_error is not None:
            raise self.substitutions_error

    async def upload_infotexts(self, infotexts: Sequence[Infotext]) -> None:
        await self._wait()
        self.infotext_calls.append(list(infotexts))
        if self.infotexts_error is not None:
            raise self.infotexts_error
