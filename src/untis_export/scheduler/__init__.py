"""untis-export change detection.

Watches the Untis export directory with watchdog and triggers the export
pipeline on every change.
"""

from .file_watcher import ChangeHandler, DirectoryWatcher
from .service import ExportService

__all__ = ["ChangeHandler", "DirectoryWatcher", "ExportService"]
