class DriveHogError(Exception):
    """Base class for errors raised while resolving or scanning a document."""


class UnsupportedDocumentType(DriveHogError, ValueError):
    def __init__(self, mime_type: str):
        self.mime_type = mime_type
        super().__init__(f"unsupported document type {mime_type}")


class MetadataError(DriveHogError):
    """The Drive metadata lookup failed."""


class RetrievalError(DriveHogError):
    """The Drive content export failed; nothing was scanned."""
