"""User directory management.

DirectoryManager owns the fetched user collection, the accordion state and
the mutate-then-refresh sequencing of the user management screen. A refresh
is only issued after the backend has confirmed a mutation.
"""

import logging
from typing import List, Optional

from api.client import SchoolApiClient
from core.exceptions import MissingPasswordError, NetworkFailureError
from schemas.directory import GroupedCollection, GroupKeySet
from schemas.user import UserFormState, UserRecord
from utils import record_grouper, user_form

logger = logging.getLogger(__name__)


class DirectoryManager:
    """Manages the user directory on behalf of an administrator."""

    def __init__(self, api: SchoolApiClient, keys: Optional[GroupKeySet] = None):
        """Initialize DirectoryManager.

        Args:
            api: Client of the backend CRUD API.
            keys: Directory categories. Defaults to the configured ones.
        """
        self.api = api
        self.keys = keys or GroupKeySet()
        self.users: List[UserRecord] = []
        self.expanded: Optional[str] = None
        self.is_loading = False

    @property
    def grouped(self) -> GroupedCollection:
        return record_grouper.group(self.users, self.keys)

    def refresh(self) -> List[UserRecord]:
        """Fetch all users, replacing the cached collection.

        Raises:
            NetworkFailureError: The fetch failed. The previous collection
                is kept.
        """
        self.is_loading = True
        try:
            self.users = self.api.list_users()
        finally:
            self.is_loading = False
        logger.info("Loaded %d users", len(self.users))
        return self.users

    def _refresh_after_change(self) -> None:
        # The mutation is already committed; a stale list is not a failed save.
        try:
            self.refresh()
        except NetworkFailureError as e:
            logger.warning("Refresh after change failed, list may be stale: %s", e)

    def toggle(self, key: str) -> Optional[str]:
        self.expanded = record_grouper.toggle_expansion(self.expanded, key)
        return self.expanded

    def new_form(self, user: Optional[UserRecord] = None) -> UserFormState:
        return user_form.init_user_form(user, self.keys)

    def save(self, form: UserFormState, editing_user: Optional[UserRecord] = None) -> str:
        """Create or update a user, then refresh.

        Args:
            form: The filled-in form buffer.
            editing_user: The user being edited, None when creating.

        Returns:
            Success message for the user.

        Raises:
            ValidationError: The form is incomplete. Nothing was sent.
            NetworkFailureError: The backend rejected the save. The
                collection is not refreshed and the form can be resubmitted.
                A failed refresh after a confirmed save is only logged.
        """
        is_editing = editing_user is not None
        payload = user_form.validate(form, is_editing, self.keys)
        if is_editing:
            self.api.update_user(editing_user.id, payload)
        else:
            self.api.create_user(payload)
        logger.info("%s user %s", "Updated" if is_editing else "Created", form.username)
        self._refresh_after_change()
        return f"User {'updated' if is_editing else 'created'} successfully!"

    def delete(self, user: UserRecord) -> str:
        """Delete a user, then refresh.

        The user stays in the collection unless the backend confirms.
        """
        self.api.delete_user(user.id)
        logger.info("Deleted user %s", user.username)
        self._refresh_after_change()
        return f'"{user.full_name}" was removed successfully.'

    def reset_password(self, user: UserRecord, new_password: Optional[str]) -> str:
        """Set a new temporary password and return the server's message.

        Raises:
            MissingPasswordError: The new password is blank.
            NetworkFailureError: The backend rejected the reset.
        """
        if not new_password or not new_password.strip():
            raise MissingPasswordError("Password cannot be empty.")
        message = self.api.reset_password(user.id, new_password)
        logger.info("Reset password for %s", user.username)
        return message
