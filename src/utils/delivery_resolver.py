"""Delivery channel resolution for study materials and labs.

A resource can be reached through a stored file, an external link, both, or
neither. This module turns a record into the actions a screen should offer
and opens them through a URL launcher.
"""

import logging
from typing import List, Optional

from core.exceptions import CannotOpenResourceError
from schemas.resource import DeliveryAction, DeliveryCapabilities, ResourceRecord
from utils.url_launcher import UrlLauncher

logger = logging.getLogger(__name__)


def delivery_capabilities(resource: ResourceRecord) -> DeliveryCapabilities:
    return DeliveryCapabilities(
        has_file=bool(resource.file_path),
        has_link=bool(resource.external_link),
    )


def resolve_actions(resource: ResourceRecord, base_url: str) -> List[DeliveryAction]:
    """List the presentable delivery actions, file first.

    Args:
        resource: The study material or lab.
        base_url: Backend base URL that stored file paths are relative to.

    Returns:
        Zero, one or two actions. The download target is ``base_url`` joined
        with the stored path; the link target is the link as given.
    """
    capabilities = delivery_capabilities(resource)
    actions = []
    if capabilities.has_file:
        actions.append(
            DeliveryAction(
                kind="download",
                label="Download File",
                url=f"{base_url}{resource.file_path}",
            )
        )
    if capabilities.has_link:
        actions.append(
            DeliveryAction(
                kind="open_link",
                label="Open Link",
                url=resource.external_link,
            )
        )
    return actions


def resolve_cover_image(resource: ResourceRecord, base_url: str) -> Optional[str]:
    """Locator of the cover image, or None to use the default icon."""
    if not resource.cover_image_url:
        return None
    return f"{base_url}{resource.cover_image_url}"


def open_action(action: DeliveryAction, launcher: UrlLauncher) -> None:
    """Open a delivery action.

    Raises:
        CannotOpenResourceError: The launcher rejected the URL or failed.
    """
    what = "file" if action.kind == "download" else "URL"
    try:
        supported = launcher.can_open(action.url)
    except Exception as e:
        logger.error("Launcher failed on %s: %s", action.url, e)
        raise CannotOpenResourceError(action.url, "An unexpected error occurred.") from e
    if not supported:
        raise CannotOpenResourceError(action.url, f"Cannot open this {what}: {action.url}")

    try:
        launcher.open(action.url)
    except Exception as e:
        logger.error("Launcher failed on %s: %s", action.url, e)
        raise CannotOpenResourceError(action.url, "An unexpected error occurred.") from e
    logger.info("Opened %s: %s", what, action.url)
