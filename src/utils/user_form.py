"""User form model.

Builds and validates the editable representation of a user account. Students
belong to one class group; teachers always sit in the staff category and carry
a subject list. All functions are pure: they take a UserFormState and return a
new one, leaving network calls to the caller.
"""

import logging
from typing import Optional

from core.exceptions import MissingPasswordError, MissingRequiredFieldError
from schemas.directory import GroupKeySet
from schemas.user import (
    Role,
    StudentPayload,
    TeacherPayload,
    UserFormState,
    UserPayload,
    UserRecord,
)

logger = logging.getLogger(__name__)


def init_user_form(
    existing: Optional[UserRecord], keys: GroupKeySet
) -> UserFormState:
    """Create the form buffer for an add or edit action.

    Args:
        existing: The user being edited, or None when adding.
        keys: Directory categories, used for the default class group.

    Returns:
        A fresh UserFormState. The password is always blank.
    """
    if existing is None:
        return UserFormState(
            role="student",
            class_group=keys.first_student_key,
            last_student_class_group=keys.first_student_key,
        )

    last_student_group = None
    if existing.role == "student" and existing.class_group != keys.staff_key:
        last_student_group = existing.class_group
    return UserFormState(
        username=existing.username,
        password="",
        full_name=existing.full_name,
        role=existing.role,
        class_group=keys.staff_key if existing.role == "teacher" else existing.class_group,
        subjects_taught=list(existing.subjects_taught or []),
        last_student_class_group=last_student_group,
    )


def set_role(state: UserFormState, role: Role, keys: GroupKeySet) -> UserFormState:
    """Switch the role, keeping the class group consistent with it."""
    if role == "teacher":
        return state.model_copy(update={"role": "teacher", "class_group": keys.staff_key})

    class_group = state.last_student_class_group or keys.first_student_key
    return state.model_copy(update={"role": "student", "class_group": class_group})


def set_class_group(
    state: UserFormState, class_group: str, keys: GroupKeySet
) -> UserFormState:
    """Pick a class group for a student.

    Raises:
        ValueError: If the user is a teacher or the key is not a student key.
    """
    if state.role == "teacher":
        raise ValueError("A teacher's class group is fixed to the staff category")
    if class_group not in keys.student_keys:
        raise ValueError(f"Unknown class group: {class_group}")
    return state.model_copy(
        update={"class_group": class_group, "last_student_class_group": class_group}
    )


def set_subjects_from_text(state: UserFormState, text: str) -> UserFormState:
    """Parse a comma-separated subject list.

    Tokens are trimmed and empty ones dropped. Order and duplicates are kept.
    """
    subjects = [token.strip() for token in text.split(",")]
    return state.model_copy(update={"subjects_taught": [s for s in subjects if s]})


def subjects_text(state: UserFormState) -> str:
    return ", ".join(state.subjects_taught)


def to_payload(
    state: UserFormState, keys: Optional[GroupKeySet] = None
) -> UserPayload:
    """Build the request body for POST/PUT /users.

    A student payload has no ``subjects_taught`` field at all, even if the
    buffer still holds subjects from before a role switch. A blank password
    is left out, which the backend reads as "unchanged". A teacher payload
    always carries the staff category.
    """
    keys = keys or GroupKeySet()
    password = state.password or None
    if state.role == "teacher":
        return TeacherPayload(
            username=state.username,
            full_name=state.full_name,
            class_group=keys.staff_key,
            subjects_taught=list(state.subjects_taught),
            password=password,
        )
    return StudentPayload(
        username=state.username,
        full_name=state.full_name,
        class_group=state.class_group,
        password=password,
    )


def validate(
    state: UserFormState, is_editing: bool, keys: Optional[GroupKeySet] = None
) -> UserPayload:
    """Check required fields and return the payload.

    Args:
        state: Form buffer to validate.
        is_editing: True when updating an existing user. The password is
            optional on edit and required on create.
        keys: Directory categories. Defaults to the configured set.

    Returns:
        The payload to send.

    Raises:
        MissingRequiredFieldError: Username, full name, or a student's class
            group is blank.
        MissingPasswordError: Creating a user without a password.
    """
    if not state.username.strip():
        raise MissingRequiredFieldError("username", "Username and Full Name are required.")
    if not state.full_name.strip():
        raise MissingRequiredFieldError("full_name", "Username and Full Name are required.")
    if state.role == "student" and not state.class_group:
        raise MissingRequiredFieldError("class_group", "Class is required for students.")
    if not is_editing and not state.password:
        raise MissingPasswordError()

    keys = keys or GroupKeySet()
    if state.role == "teacher" and state.class_group != keys.staff_key:
        logger.warning(
            "Teacher %s had class group %r, using %r",
            state.username, state.class_group, keys.staff_key,
        )

    logger.debug("Validated %s form for %s", state.role, state.username)
    return to_payload(state, keys)
