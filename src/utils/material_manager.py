"""Study material management for teachers and admins."""

import logging
from typing import List, Optional, Union

from api.client import SchoolApiClient
from core.exceptions import NetworkFailureError
from schemas.resource import DeliveryAction, ResourceFormState, ResourceRecord
from utils import delivery_resolver, resource_form
from utils.url_launcher import UrlLauncher, WebBrowserLauncher

logger = logging.getLogger(__name__)


class MaterialManager:
    """Manages the materials uploaded by one teacher."""

    def __init__(
        self,
        api: SchoolApiClient,
        teacher_id: Union[int, str],
        launcher: Optional[UrlLauncher] = None,
    ):
        self.api = api
        self.teacher_id = teacher_id
        self.launcher = launcher or WebBrowserLauncher()
        self.materials: List[ResourceRecord] = []
        self.is_loading = False

    def refresh(self) -> List[ResourceRecord]:
        """Fetch this teacher's materials, replacing the cached list.

        Raises:
            NetworkFailureError: The fetch failed. The previous list is kept.
        """
        self.is_loading = True
        try:
            self.materials = self.api.list_teacher_materials(self.teacher_id)
        finally:
            self.is_loading = False
        logger.info("Loaded %d materials for teacher %s", len(self.materials), self.teacher_id)
        return self.materials

    def class_options(self) -> List[str]:
        return self.api.list_student_classes()

    def new_form(self, material: Optional[ResourceRecord] = None) -> ResourceFormState:
        return resource_form.init_resource_form(material, uploaded_by=self.teacher_id)

    def save(
        self, form: ResourceFormState, editing: Optional[ResourceRecord] = None
    ) -> str:
        """Upload a new material or update an existing one, then refresh.

        Raises:
            ValidationError: Title or class is blank. Nothing was sent.
            NetworkFailureError: The backend rejected the upload.
        """
        resource_form.validate(form)
        is_editing = editing is not None
        submission = resource_form.to_submission(form, is_editing)
        if is_editing:
            self.api.update_material(editing.id, submission)
        else:
            self.api.create_material(submission)
        logger.info("%s material '%s'", "Updated" if is_editing else "Uploaded", form.title)
        try:
            self.refresh()
        except NetworkFailureError as e:
            logger.warning("Refresh after upload failed, list may be stale: %s", e)
        return f"Material {'updated' if is_editing else 'uploaded'} successfully."

    def delete(self, material: ResourceRecord) -> str:
        """Delete a material and drop it from the list once confirmed."""
        self.api.delete_material(material.id)
        self.materials = [m for m in self.materials if m.id != material.id]
        logger.info("Deleted material %s", material.id)
        return "Material deleted."

    def actions_for(self, material: ResourceRecord) -> List[DeliveryAction]:
        return delivery_resolver.resolve_actions(material, self.api.base_url)

    def open(self, action: DeliveryAction) -> None:
        delivery_resolver.open_action(action, self.launcher)
