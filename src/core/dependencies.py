"""Factory functions wiring managers to the shared API client.

Front ends call these instead of constructing managers themselves, so that
every manager talks to the backend through the same session.
"""

from typing import Optional, Union

from api.client import SchoolApiClient, get_api_client
from schemas.directory import GroupKeySet
from utils import directory_manager
from utils import material_manager
from utils.url_launcher import UrlLauncher


def get_directory_manager(
    api: Optional[SchoolApiClient] = None,
) -> directory_manager.DirectoryManager:
    """Get a DirectoryManager over the configured directory categories.

    Args:
        api: Optional client. Defaults to the shared singleton.

    Returns:
        DirectoryManager instance.
    """
    return directory_manager.DirectoryManager(api or get_api_client(), GroupKeySet())


def get_material_manager(
    teacher_id: Union[int, str],
    api: Optional[SchoolApiClient] = None,
    launcher: Optional[UrlLauncher] = None,
) -> material_manager.MaterialManager:
    """Get a MaterialManager for the given teacher.

    Args:
        teacher_id: ID of the teacher whose uploads are managed.
        api: Optional client. Defaults to the shared singleton.
        launcher: Optional URL launcher. Defaults to the web browser.

    Returns:
        MaterialManager instance.
    """
    return material_manager.MaterialManager(
        api or get_api_client(), teacher_id, launcher=launcher
    )
