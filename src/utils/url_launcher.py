"""URL launchers used to open resource locators."""

import logging
import webbrowser
from typing import Protocol
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https", "mailto", "file")


class UrlLauncher(Protocol):
    """Anything able to hand a URL to the operating system."""

    def can_open(self, url: str) -> bool: ...

    def open(self, url: str) -> None: ...


class WebBrowserLauncher:
    """Opens URLs in the user's default browser."""

    def can_open(self, url: str) -> bool:
        parsed = urlparse(url)
        if parsed.scheme not in SUPPORTED_SCHEMES:
            return False
        return bool(parsed.netloc or parsed.scheme in ("mailto", "file"))

    def open(self, url: str) -> None:
        if not webbrowser.open(url):
            raise RuntimeError(f"No browser available to open {url}")
        logger.debug("Handed %s to the browser", url)
