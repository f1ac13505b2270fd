from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .errors import UnsupportedDocumentType
from .models import EXPORT_MIME_TYPES, DriveFileMetadata, FileInfo

if TYPE_CHECKING:
    from .drive import DocumentClient

logger = logging.getLogger(__name__)

METADATA_FIELDS = "kind, id, name, mimeType, webViewLink, modifiedTime, parents"


def export_mime_type(native_mime_type: str) -> str:
    try:
        return EXPORT_MIME_TYPES[native_mime_type]
    except KeyError:
        raise UnsupportedDocumentType(native_mime_type) from None


def file_info_from_metadata(file_id: str, meta: DriveFileMetadata) -> FileInfo:
    return FileInfo(
        file_id=file_id,
        mime_type=export_mime_type(meta.mime_type),
        modified_time=meta.modified_time,
        web_link=meta.web_view_link,
        parents=tuple(meta.parents),
        name=meta.name,
    )


def resolve_file_info(file_id: str, client: DocumentClient) -> FileInfo:
    """
    Look up a Drive document and describe it for scanning.
    One metadata request; errors from the client propagate untouched and an
    unsupported native type raises UnsupportedDocumentType.
    """
    meta = client.get_metadata(file_id)
    info = file_info_from_metadata(file_id, meta)
    logger.debug("resolved %s as %s (%s)", file_id, info.path, info.mime_type)
    return info
