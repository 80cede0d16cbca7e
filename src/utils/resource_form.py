"""Resource form model.

Handles the add/edit form of a study material: a newly picked file is kept in
its own slot next to the path of the file already stored on the backend, and
the two are reconciled only when the multipart submission is built.
"""

import logging
from typing import Optional, Union

import config
from core.exceptions import MissingRequiredFieldError
from schemas.resource import (
    MultipartSubmission,
    PickedFile,
    ResourceFormState,
    ResourceRecord,
)

logger = logging.getLogger(__name__)


def init_resource_form(
    existing: Optional[ResourceRecord], uploaded_by: Optional[Union[int, str]] = None
) -> ResourceFormState:
    """Create the form buffer for an add or edit action.

    Args:
        existing: The resource being edited, or None when adding.
        uploaded_by: ID of the user submitting the form.
    """
    if existing is None:
        return ResourceFormState(uploaded_by=uploaded_by)
    return ResourceFormState(
        title=existing.title,
        description=existing.description or "",
        subject=existing.subject or "",
        class_group=existing.class_group or "",
        material_type=existing.category or config.DEFAULT_MATERIAL_TYPE,
        external_link=existing.external_link or "",
        uploaded_by=uploaded_by if uploaded_by is not None else existing.uploaded_by,
        new_file=None,
        stored_file_path=existing.file_path,
    )


def attach_file(state: ResourceFormState, new_file: PickedFile) -> ResourceFormState:
    """Put a newly picked file in the file slot.

    The stored path is left alone until the backend confirms the save.
    """
    return state.model_copy(update={"new_file": new_file})


def file_label(state: ResourceFormState) -> str:
    """Text of the file button: picked file, else stored file, else a prompt."""
    if state.new_file is not None:
        return state.new_file.name
    if state.stored_file_path:
        return state.stored_file_path.rstrip("/").split("/")[-1] or config.NO_FILE_LABEL
    return config.NO_FILE_LABEL


def validate(state: ResourceFormState) -> None:
    """Check required fields.

    Raises:
        MissingRequiredFieldError: Title or class group is blank.
    """
    if not state.title.strip():
        raise MissingRequiredFieldError("title", "Title and Class are required.")
    if not state.class_group.strip():
        raise MissingRequiredFieldError("class_group", "Title and Class are required.")


def to_submission(state: ResourceFormState, is_editing: bool) -> MultipartSubmission:
    """Build the multipart body for POST/PUT /study-materials.

    Every scalar field is sent. A newly picked file goes under the file
    field. Without one, an edit sends the stored path under the retention
    field so the backend keeps it; a create sends neither.
    """
    fields = {
        "title": state.title,
        "description": state.description,
        "class_group": state.class_group,
        "subject": state.subject,
        "material_type": state.material_type,
        "external_link": state.external_link,
        "uploaded_by": "" if state.uploaded_by is None else str(state.uploaded_by),
    }
    files = {}
    if state.new_file is not None:
        files[config.MATERIAL_FILE_FIELD] = state.new_file
    elif is_editing:
        fields[config.EXISTING_FILE_FIELD] = state.stored_file_path or ""

    logger.debug(
        "Built %s submission for '%s' (new file: %s)",
        "update" if is_editing else "create",
        state.title,
        state.new_file is not None,
    )
    return MultipartSubmission(fields=fields, files=files)
