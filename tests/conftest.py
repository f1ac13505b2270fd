"""Shared fixtures: an in-memory stand-in for the Drive client and a sample FileInfo."""
from __future__ import annotations

import pytest

from drivehog.errors import RetrievalError
from drivehog.models import DriveFileMetadata, FileInfo


class FakeDriveClient:
    def __init__(self, content: bytes = b"", metadata: dict | None = None, fail_export: bool = False):
        self.content = content
        self.metadata = metadata or {}
        self.fail_export = fail_export
        self.metadata_calls: list[str] = []
        self.export_calls: list[tuple[str, str]] = []

    def get_metadata(self, file_id: str) -> DriveFileMetadata:
        self.metadata_calls.append(file_id)
        return DriveFileMetadata.model_validate(self.metadata)

    def export(self, file_id: str, mime_type: str) -> bytes:
        self.export_calls.append((file_id, mime_type))
        if self.fail_export:
            raise RetrievalError("403 Forbidden")
        return self.content


@pytest.fixture
def file_info() -> FileInfo:
    return FileInfo(
        file_id="1AbCdEf",
        mime_type="text/plain",
        modified_time="2019-12-21T16:32:31+00:00",
        web_link="https://docs.google.com/document/d/1AbCdEf/edit",
        parents=["0AFolder"],
        name="notes",
    )


@pytest.fixture
def make_client():
    return FakeDriveClient
