"""Change-triggered export pipeline for untis-export."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING

from untis_export.config import ConfigError
from untis_export.models import ExportSettings, Infotext, Substitution

from .errors import ErrorCategory, UploadError
from .guard import RunGuard, RunState
from .transforms import remove_exams, replace_substitution_types

if TYPE_CHECKING:
    from untis_export.config import SettingsProvider
    from untis_export.models import Settings
    from untis_export.parser import RecordParser
    from untis_export.upload import Uploader

logger = logging.getLogger(__name__)

EXPORT_FILE_PATTERN = "*.htm"

SleepFunc = Callable[[float], Awaitable[None]]


class ExportCoordinator:
    """Runs one export per change notification, never two at once.

    A notification that arrives while a run is active is dropped. Errors
    raised by a run are logged and never reach the notification source.
    """

    def __init__(
        self,
        settings_provider: SettingsProvider,
        parser: RecordParser,
        uploader: Uploader,
        guard: RunGuard | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        """Initialize the coordinator.

        Args:
            settings_provider: Source of the settings read at each notification.
            parser: Parser turning export files into records.
            uploader: Uploader receiving the final records.
            guard: Single-flight guard, shared if several entry points exist.
            sleep: Coroutine used for the settle delay.
        """
        self.settings_provider = settings_provider
        self.parser = parser
        self.uploader = uploader
        self.guard = guard or RunGuard()
        self._sleep = sleep

    @property
    def state(self) -> RunState:
        return self.guard.state

    def notify(self) -> None:
        """Handle a change notification without blocking the caller.

        The run itself executes on a worker thread with its own event loop.
        """
        settings = self._begin()
        if settings is None:
            return

        try:
            thread = threading.Thread(
                target=lambda: asyncio.run(self._run_and_release(settings)),
                name="untis-export-run",
                daemon=True,
            )
            thread.start()
        except Exception as e:
            logger.exception(f"Cannot start export run: {e}")
            self.guard.release()

    async def handle_change(self) -> None:
        """Handle a change notification and wait for the run to finish."""
        settings = self._begin()
        if settings is None:
            return

        await self._run_and_release(settings)

    def _begin(self) -> Settings | None:
        """Decide whether a run starts; acquires the guard if it does."""
        logger.info("Detected filesystem changes.")
        settings = self._reload_settings()

        if not settings.enabled:
            logger.info("Do not publish as service is disabled in settings file.")
            return None

        if not self.guard.try_acquire():
            logger.debug("Export is already running, skipping.")
            return None

        return settings

    def _reload_settings(self) -> Settings:
        """Re-read the settings source, keeping the previous settings if it became invalid."""
        try:
            return self.settings_provider.reload()
        except ConfigError as e:
            logger.error(f"Keeping previous settings: {e}")
            return self.settings_provider.settings

    async def _run_and_release(self, settings: Settings) -> None:
        try:
            await self.run_export(settings)
        except Exception as e:
            logger.exception(f"Export failed: {e}")
        finally:
            self.guard.release()

    async def run_export(self, settings: Settings) -> None:
        """Read, parse, transform and upload all export files.

        Callers must hold the guard. Errors propagate.

        Args:
            settings: Settings snapshot for this run.
        """
        if settings.threshold > 0:
            logger.debug(f"Waiting {settings.threshold} seconds for Untis to create all files.")
            await self._sleep(settings.threshold)

        files = self.collect_files(settings)
        for file in files:
            logger.debug(f"Found file {file}.")

        export_settings = ExportSettings.from_settings(settings)
        substitutions: list[Substitution] = []
        infotexts: list[Infotext] = []

        for file in files:
            text = file.read_text(encoding=settings.encoding)
            result = self.parser.parse(export_settings, text)
            substitutions.extend(result.substitutions)
            infotexts.extend(result.infotexts)

        replace_substitution_types(substitutions, settings.untis.type_replacements)
        remove_exams(substitutions, settings.untis.remove_exams)

        await self._upload(substitutions, infotexts)
        logger.info(
            f"Successfully published {len(substitutions)} substitutions "
            f"and {len(infotexts)} infotexts."
        )

    @staticmethod
    def collect_files(settings: Settings) -> list[Path]:
        """List export files of the watched directory, sorted by name.

        Raises:
            FileNotFoundError: If the directory does not exist.
        """
        directory = Path(settings.html_path).expanduser()
        if not directory.is_dir():
            raise FileNotFoundError(f"Export directory not found: {directory}")

        return sorted(
            (path for path in directory.glob(EXPORT_FILE_PATTERN) if path.is_file()),
            key=lambda path: path.name,
        )

    async def _upload(
        self,
        substitutions: list[Substitution],
        infotexts: list[Infotext],
    ) -> None:
        """Upload both record lists; both are attempted even if one fails."""
        results = await asyncio.gather(
            self.uploader.upload_substitutions(substitutions),
            self.uploader.upload_infotexts(infotexts),
            return_exceptions=True,
        )

        errors = [result for result in results if isinstance(result, BaseException)]
        for error in errors[1:]:
            logger.error(f"Additional upload failure: {error}")
        if errors:
            error = errors[0]
            if not isinstance(error, Exception):
                raise UploadError(
                    f"Upload interrupted: {error!r}", category=ErrorCategory.TRANSIENT
                ) from error
            raise error
