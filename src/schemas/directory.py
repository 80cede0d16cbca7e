"""Directory schema definitions.

This module defines the GroupKeySet that partitions the user directory and
the GroupedCollection produced from it.
"""

from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

import config
from core.exceptions import ConfigurationError
from schemas.user import UserRecord


class GroupKeySet(BaseModel):
    """Fixed, ordered category keys with one distinguished staff key."""

    model_config = ConfigDict(frozen=True)

    keys: Tuple[str, ...] = Field(default_factory=lambda: tuple(config.CLASS_CATEGORIES))
    staff_key: str = config.STAFF_CATEGORY

    @model_validator(mode="after")
    def check_keys(self):
        if len(set(self.keys)) != len(self.keys):
            raise ConfigurationError(f"Duplicate group keys: {list(self.keys)}")
        if self.staff_key not in self.keys:
            raise ConfigurationError(
                f"Staff category '{self.staff_key}' is not one of the group keys"
            )
        if len(self.keys) < 2:
            raise ConfigurationError("At least one non-staff group key is required")
        return self

    @property
    def student_keys(self) -> List[str]:
        """Keys a student may belong to, in declared order."""
        return [key for key in self.keys if key != self.staff_key]

    @property
    def first_student_key(self) -> str:
        return self.student_keys[0]

    def __contains__(self, key: object) -> bool:
        return key in self.keys

    def __len__(self) -> int:
        return len(self.keys)


class GroupedCollection(BaseModel):
    """Users bucketed by class group, one bucket per declared key."""

    buckets: Dict[str, List[UserRecord]] = Field(default_factory=dict)
    ungrouped: List[UserRecord] = Field(
        default_factory=list,
        description="Records whose class group matches no declared key.",
    )

    def get(self, key: str) -> List[UserRecord]:
        return self.buckets.get(key, [])

    def count(self, key: str) -> int:
        return len(self.get(key))

    def header(self, key: str) -> str:
        """Accordion header text, e.g. 'Class 3 (2)'."""
        return f"{key} ({self.count(key)})"

    def keys(self) -> List[str]:
        return list(self.buckets.keys())
