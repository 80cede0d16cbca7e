"""User schema definitions.

This module defines the UserRecord returned by the backend, the editable
UserFormState, and the role-discriminated payloads sent back on save.
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

Role = Literal["student", "teacher"]


class UserRecord(BaseModel):
    """A user account as held by the backend system of record."""

    model_config = ConfigDict(extra="ignore")

    id: Union[int, str] = Field(description="Opaque identifier assigned by the backend.")
    username: str = Field(description="Student ID or teacher email. Unique, case-sensitive.")
    full_name: str = Field(default="", description="Display name.")
    role: Role = Field(default="student")
    class_group: str = Field(default="", description="One of the directory categories.")
    subjects_taught: Optional[List[str]] = Field(
        default=None,
        description="Subjects taught, in display order. Teachers only.",
    )

    @model_validator(mode="after")
    def drop_student_subjects(self):
        if self.role == "student":
            self.subjects_taught = None
        return self

    def subjects_display(self) -> str:
        return ", ".join(self.subjects_taught or [])


class UserFormState(BaseModel):
    """Editable buffer behind the add/edit user modal.

    Transitions never mutate an instance; they return a copy.
    """

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = ""
    full_name: str = ""
    role: Role = "student"
    class_group: str = ""
    subjects_taught: List[str] = Field(default_factory=list)
    last_student_class_group: Optional[str] = Field(
        default=None,
        description="Last non-staff class group picked, restored on switching back to student.",
    )


class StudentPayload(BaseModel):
    """Body of POST/PUT /users for a student. Has no subjects field."""

    model_config = ConfigDict(extra="forbid")

    role: Literal["student"] = "student"
    username: str
    full_name: str
    class_group: str
    password: Optional[str] = None


class TeacherPayload(BaseModel):
    """Body of POST/PUT /users for a teacher."""

    model_config = ConfigDict(extra="forbid")

    role: Literal["teacher"] = "teacher"
    username: str
    full_name: str
    class_group: str
    subjects_taught: List[str] = Field(default_factory=list)
    password: Optional[str] = None


UserPayload = Annotated[
    Union[StudentPayload, TeacherPayload], Field(discriminator="role")
]


def payload_to_json(payload: Union[StudentPayload, TeacherPayload]) -> dict:
    """Serialize a payload, leaving out an unset password."""
    return payload.model_dump(exclude_none=True)
