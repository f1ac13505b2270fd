from __future__ import annotations
import logging, time
from typing import Protocol
from urllib.parse import quote

import httpx

from .config import DriveSettings
from .errors import MetadataError, RetrievalError
from .metadata import METADATA_FIELDS
from .models import DriveFileMetadata
from .ratelimit import RateLimiter

logger = logging.getLogger(__name__)

DRIVE_API_BASE = "https://www.googleapis.com"
FILES_PATH = "/drive/v3/files"


def _file_url(file_id: str) -> str:
    # ids are opaque; never let one change the endpoint
    return f"{FILES_PATH}/{quote(file_id, safe='')}"


class DocumentClient(Protocol):
    def get_metadata(self, file_id: str) -> DriveFileMetadata: ...

    def export(self, file_id: str, mime_type: str) -> bytes: ...


class DriveClient:
    """Synchronous Drive v3 client: metadata lookup and full-body content export."""

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str = DRIVE_API_BASE,
        timeout: float = 30,
        rate_limit_per_min: int = 60,
        transport: httpx.BaseTransport | None = None,
    ):
        headers = {"Accept": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        self._client = httpx.Client(base_url=base_url, headers=headers, timeout=timeout, transport=transport)
        self._limiter = RateLimiter(rate_limit_per_min)

    @classmethod
    def from_settings(cls, settings: DriveSettings, transport: httpx.BaseTransport | None = None) -> "DriveClient":
        return cls(
            access_token=settings.access_token,
            base_url=settings.base_url,
            timeout=settings.timeout,
            rate_limit_per_min=settings.rate_limit_per_min,
            transport=transport,
        )

    def _request(self, url: str, params: dict) -> httpx.Response:
        # simple throttle + one backoff on quota responses
        self._limiter.wait()
        r = self._client.get(url, params=params)
        if r.status_code in (403, 429):
            try:
                retry = int(r.headers.get("Retry-After", "1"))
            except ValueError:
                retry = 1
            retry = max(0, min(retry, 5))
            logger.debug("drive returned %s for %s, retrying in %ss", r.status_code, url, retry)
            time.sleep(retry)
            self._limiter.wait()
            r = self._client.get(url, params=params)
        r.raise_for_status()
        return r

    def get_metadata(self, file_id: str) -> DriveFileMetadata:
        try:
            r = self._request(_file_url(file_id), {"fields": METADATA_FIELDS})
            return DriveFileMetadata.model_validate(r.json())
        except httpx.HTTPError as e:
            raise MetadataError(f"failed accessing Google Metadata API: {e}") from e
        except ValueError as e:
            raise MetadataError(f"malformed metadata for {file_id}: {e}") from e

    def export(self, file_id: str, mime_type: str) -> bytes:
        try:
            r = self._request(_file_url(file_id) + "/export", {"mimeType": mime_type})
        except httpx.HTTPError as e:
            raise RetrievalError(f"failed exporting {file_id} as {mime_type}: {e}") from e
        return r.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "DriveClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
