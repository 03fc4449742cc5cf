"""Export service wiring the watcher to the export pipeline."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from untis_export.engine import EXPORT_FILE_PATTERN, ExportCoordinator
from untis_export.parser import UntisHtmlParser
from untis_export.upload import HttpUploader

from .file_watcher import DirectoryWatcher

if TYPE_CHECKING:
    from untis_export.config import SettingsProvider
    from untis_export.parser import RecordParser
    from untis_export.upload import Uploader

logger = logging.getLogger(__name__)


class ExportService:
    """Publishes the Untis export whenever the export directory changes."""

    def __init__(
        self,
        settings_provider: SettingsProvider,
        watcher: DirectoryWatcher | None = None,
        parser: RecordParser | None = None,
        uploader: Uploader | None = None,
    ) -> None:
        """Initialize the export service.

        Args:
            settings_provider: Source of the service settings.
            watcher: Directory watcher, a new one by default.
            parser: Record parser, the Untis HTML parser by default.
            uploader: Uploader, an HTTP uploader for the configured endpoint by default.
        """
        self.settings_provider = settings_provider
        self.watcher = watcher or DirectoryWatcher()
        self.coordinator = ExportCoordinator(
            settings_provider=settings_provider,
            parser=parser or UntisHtmlParser(),
            uploader=uploader or HttpUploader(settings_provider=settings_provider),
        )

    @property
    def is_running(self) -> bool:
        return self.watcher.is_running

    def start(self) -> None:
        """Register the export pipeline and start watching."""
        html_path = self.settings_provider.settings.html_path
        self.watcher.watch(html_path, self.coordinator.notify, pattern=EXPORT_FILE_PATTERN)
        self.watcher.start()
        logger.info("Export service started.")

    def stop(self) -> None:
        """Stop watching; a run already in progress is not cancelled."""
        self.watcher.stop()
        logger.info("Export service stopped.")
