"""HTTP client for the school backend CRUD API.

This module wraps the backend endpoints used by the admin screens. Every
non-2xx response and every transport error is raised as NetworkFailureError
carrying the server's message when it sent one. Nothing is retried.
"""

import logging
from contextlib import ExitStack
from typing import Any, List, Optional, Union

import requests

import config
from core.exceptions import NetworkFailureError
from schemas.resource import MultipartSubmission, ResourceRecord
from schemas.user import StudentPayload, TeacherPayload, UserRecord, payload_to_json

logger = logging.getLogger(__name__)

_api_client_instance: Optional["SchoolApiClient"] = None


def get_api_client() -> "SchoolApiClient":
    """Return a singleton SchoolApiClient bound to API_BASE_URL."""
    global _api_client_instance
    if _api_client_instance is None:
        _api_client_instance = SchoolApiClient()
    return _api_client_instance


class SchoolApiClient:
    """Thin wrapper over the users and study-materials endpoints."""

    def __init__(
        self,
        base_url: str = config.API_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = config.API_TIMEOUT,
    ):
        """Initialize SchoolApiClient.

        Args:
            base_url: Backend base URL, without the /api prefix.
            session: Optional requests session, mainly for tests.
            timeout: Per-request timeout in seconds, None to wait forever.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}{config.API_PREFIX}{path}"

    def _request(self, method: str, path: str, default_error: str, **kwargs) -> Any:
        url = self._url(path)
        logger.info("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise NetworkFailureError(str(e)) from e

        body = self._json_or_none(response)
        if not response.ok:
            message = default_error
            if isinstance(body, dict) and body.get("message"):
                message = body["message"]
            logger.warning("%s %s -> %s: %s", method, url, response.status_code, message)
            raise NetworkFailureError(message, status_code=response.status_code)
        return body

    @staticmethod
    def _json_or_none(response: requests.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # --- Users ---

    def list_users(self) -> List[UserRecord]:
        data = self._request("GET", "/users", "Failed to fetch data from the server.")
        return [UserRecord.model_validate(item) for item in data or []]

    def create_user(self, payload: Union[StudentPayload, TeacherPayload]) -> Any:
        return self._request(
            "POST", "/users", "Failed to create the user.", json=payload_to_json(payload)
        )

    def update_user(
        self, user_id: Union[int, str], payload: Union[StudentPayload, TeacherPayload]
    ) -> Any:
        return self._request(
            "PUT",
            f"/users/{user_id}",
            "Failed to update the user.",
            json=payload_to_json(payload),
        )

    def delete_user(self, user_id: Union[int, str]) -> None:
        self._request("DELETE", f"/users/{user_id}", "Failed to delete the user.")

    def reset_password(self, user_id: Union[int, str], new_password: str) -> str:
        """Set a new password and return the server's confirmation message."""
        body = self._request(
            "PATCH",
            f"/users/{user_id}/reset-password",
            "Failed to reset the password.",
            json={"newPassword": new_password},
        )
        if isinstance(body, dict) and body.get("message"):
            return body["message"]
        return "Password reset successfully."

    # --- Study materials ---

    def list_teacher_materials(self, teacher_id: Union[int, str]) -> List[ResourceRecord]:
        data = self._request(
            "GET",
            f"/study-materials/teacher/{teacher_id}",
            "Failed to fetch your materials.",
        )
        return [ResourceRecord.model_validate(item) for item in data or []]

    def create_material(self, submission: MultipartSubmission) -> Any:
        return self._send_multipart("POST", "/study-materials", submission)

    def update_material(
        self, material_id: Union[int, str], submission: MultipartSubmission
    ) -> Any:
        return self._send_multipart("PUT", f"/study-materials/{material_id}", submission)

    def delete_material(self, material_id: Union[int, str]) -> None:
        self._request("DELETE", f"/study-materials/{material_id}", "Failed to delete.")

    def list_student_classes(self) -> List[str]:
        """Class options for the material form. Empty on failure."""
        try:
            data = self._request("GET", "/student-classes", "Failed to fetch classes.")
        except NetworkFailureError as e:
            logger.error("Could not load student classes: %s", e)
            return []
        return [str(item) for item in data or []]

    def _send_multipart(
        self, method: str, path: str, submission: MultipartSubmission
    ) -> Any:
        # requests sets the multipart boundary header itself
        with ExitStack() as stack:
            files = {
                field: (picked.name, stack.enter_context(picked.open()), picked.content_type)
                for field, picked in submission.files.items()
            }
            return self._request(
                method,
                path,
                "Save failed.",
                data=submission.fields,
                files=files or None,
            )
