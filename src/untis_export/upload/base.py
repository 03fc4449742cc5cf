"""Uploader interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from untis_export.models import Infotext, Substitution


class Uploader(ABC):
    """Delivers the records of an export run to a remote system."""

    @abstractmethod
    async def upload_substitutions(self, substitutions: Sequence[Substitution]) -> None:
        """Upload substitutions.

        Raises:
            UploadError: If the remote system did not accept them.
        """

    @abstractmethod
    async def upload_infotexts(self, infotexts: Sequence[Infotext]) -> None:
        """Upload infotexts.

        Raises:
            UploadError: If the remote system did not accept them.
        """
