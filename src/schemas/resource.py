"""Resource schema definitions.

A ResourceRecord unifies the backend's "study material" and "lab" shapes.
The two differ only in field names, so aliases map both onto one model.
"""

import mimetypes
from pathlib import Path
from typing import BinaryIO, Dict, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

import config


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ResourceRecord(BaseModel):
    """A study material or lab with up to two delivery channels."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Union[int, str] = Field(validation_alias=AliasChoices("material_id", "id"))
    title: str = ""
    subject: Optional[str] = None
    category: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("material_type", "lab_type", "category"),
    )
    description: Optional[str] = None
    file_path: Optional[str] = None
    external_link: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("external_link", "access_url"),
    )
    cover_image_url: Optional[str] = None
    class_group: Optional[str] = None
    uploaded_by: Optional[Union[int, str]] = None

    @field_validator("file_path", "external_link", "cover_image_url", mode="before")
    @classmethod
    def blank_channel_is_unset(cls, value):
        return _blank_to_none(value)


class PickedFile(BaseModel):
    """Opaque handle yielded by the file picker: a local file to upload."""

    model_config = ConfigDict(frozen=True)

    path: Path
    name: str
    content_type: str = "application/octet-stream"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "PickedFile":
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            path=path,
            name=path.name,
            content_type=guessed or "application/octet-stream",
        )

    def open(self) -> BinaryIO:
        return open(self.path, "rb")


class ResourceFormState(BaseModel):
    """Editable buffer behind the add/edit material modal."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    subject: str = ""
    class_group: str = ""
    material_type: str = config.DEFAULT_MATERIAL_TYPE
    external_link: str = ""
    uploaded_by: Optional[Union[int, str]] = None
    new_file: Optional[PickedFile] = Field(
        default=None,
        description="File picked in this editing session, not yet uploaded.",
    )
    stored_file_path: Optional[str] = Field(
        default=None,
        description="Path of the file already stored for the record being edited.",
    )


class MultipartSubmission(BaseModel):
    """Exact multipart body for POST/PUT /study-materials."""

    fields: Dict[str, str] = Field(default_factory=dict)
    files: Dict[str, PickedFile] = Field(default_factory=dict)


DeliveryKind = Literal["download", "open_link"]


class DeliveryCapabilities(BaseModel):
    """Which delivery channels a resource offers."""

    model_config = ConfigDict(frozen=True)

    has_file: bool = False
    has_link: bool = False


class DeliveryAction(BaseModel):
    """A presentable way to access a resource."""

    model_config = ConfigDict(frozen=True)

    kind: DeliveryKind
    label: str
    url: str
