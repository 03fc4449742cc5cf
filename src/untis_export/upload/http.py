"""HTTP uploader posting export records as JSON."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Any

import httpx

from untis_export.engine.errors import ErrorCategory, UploadError, classify_http_error

from .base import Uploader

if TYPE_CHECKING:
    from untis_export.config import SettingsProvider
    from untis_export.models import EndpointSettings, Infotext, Substitution

logger = logging.getLogger(__name__)


class HttpUploader(Uploader):
    """Upload substitutions and infotexts to the configured endpoint URLs."""

    def __init__(
        self,
        endpoint: EndpointSettings | None = None,
        settings_provider: SettingsProvider | None = None,
    ) -> None:
        """Initialize the uploader.

        A fixed endpoint wins over the provider.

        Args:
            endpoint: Fixed endpoint URLs, API key and serialization options.
            settings_provider: Source of the endpoint settings, read at each upload
                so reloaded settings take effect.
        """
        if endpoint is None and settings_provider is None:
            raise ValueError("Either endpoint or settings_provider is required")
        self._endpoint = endpoint
        self.settings_provider = settings_provider

    @property
    def endpoint(self) -> EndpointSettings:
        if self._endpoint is not None:
            return self._endpoint
        return self.settings_provider.settings.endpoint  # type: ignore[union-attr]

    async def upload_substitutions(self, substitutions: Sequence[Substitution]) -> None:
        endpoint = self.endpoint
        if endpoint.legacy:
            payload = [substitution.to_legacy() for substitution in substitutions]
        else:
            payload = [substitution.model_dump(mode="json") for substitution in substitutions]

        await self._post(endpoint, "substitutions", endpoint.substitutions, payload)

    async def upload_infotexts(self, infotexts: Sequence[Infotext]) -> None:
        endpoint = self.endpoint
        payload = [infotext.model_dump(mode="json") for infotext in infotexts]
        await self._post(endpoint, "infotexts", endpoint.infotexts, payload)

    def _headers(self, endpoint: EndpointSettings) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if endpoint.api_key:
            headers["X-Token"] = endpoint.api_key
        return headers

    async def _post(
        self,
        endpoint: EndpointSettings,
        kind: str,
        url: Any,
        payload: list[dict[str, Any]],
    ) -> None:
        """POST a JSON array and raise UploadError on any failure."""
        if url is None:
            raise UploadError(
                f"No endpoint URL configured for {kind}",
                category=ErrorCategory.PERMANENT,
            )

        started_at = datetime.now()
        logger.debug(f"Uploading {len(payload)} {kind} to {url}")

        try:
            async with httpx.AsyncClient(timeout=endpoint.timeout) as client:
                response = await client.post(str(url), json=payload, headers=self._headers(endpoint))
        except httpx.TimeoutException as e:
            raise UploadError(
                f"Uploading {kind} timed out after {endpoint.timeout}s",
                category=ErrorCategory.TRANSIENT,
            ) from e
        except httpx.HTTPError as e:
            raise UploadError(
                f"Uploading {kind} failed: {e}",
                category=ErrorCategory.TRANSIENT,
            ) from e

        if not response.is_success:
            raise UploadError(
                f"Uploading {kind} failed with HTTP {response.status_code}: "
                f"{response.reason_phrase}",
                category=classify_http_error(response.status_code),
                context={"status_code": response.status_code, "body": response.text},
            )

        duration_ms = int((datetime.now() - started_at).total_seconds() * 1000)
        logger.info(f"Uploaded {len(payload)} {kind} in {duration_ms}ms")
