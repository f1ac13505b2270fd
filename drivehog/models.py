from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from typing import TYPE_CHECKING, Any, Dict, List, Tuple

if TYPE_CHECKING:
    from .drive import DocumentClient


EXPORT_MIME_TYPES: Dict[str, str] = {
    "application/vnd.google-apps.spreadsheet": "text/csv",
    "application/vnd.google-apps.document": "text/plain",
}


class DriveFileMetadata(BaseModel):
    """The subset of a Drive v3 `files.get` response that scanning needs."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = None
    name: str
    mime_type: str = Field(alias="mimeType")
    modified_time: str = Field(alias="modifiedTime")
    web_view_link: str = Field(alias="webViewLink")
    parents: List[str] = Field(default_factory=list)

    @field_validator("parents", mode="before")
    @classmethod
    def _parents_default(cls, v: Any) -> Any:
        return [] if v is None else v


class FileInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    file_id: str
    mime_type: str
    modified_time: str
    web_link: str
    parents: Tuple[str, ...] = ()
    name: str

    @field_validator("mime_type")
    @classmethod
    def _known_export_type(cls, v: str) -> str:
        if v not in EXPORT_MIME_TYPES.values():
            raise ValueError(f"unsupported export type {v}")
        return v

    @computed_field  # type: ignore[misc]
    @property
    def path(self) -> str:
        # parent ids, not folder names
        return "/".join(self.parents) + "/" + self.name

    @classmethod
    def from_drive(cls, file_id: str, client: "DocumentClient") -> "FileInfo":
        from .metadata import resolve_file_info
        return resolve_file_info(file_id, client)


class Finding(BaseModel):
    # frozen models hash on every field, which is what dedup relies on
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str
    diff: str
    path: str
    strings_found: Tuple[str, ...] = Field(default=(), alias="stringsFound")
    g_drive_id: str
    reason: str
    web_link: str

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")
