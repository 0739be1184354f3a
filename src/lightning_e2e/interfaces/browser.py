"""
Browser Interface - Abstract base class for browser lifecycle management.

The interaction layer talks to Playwright pages directly; this interface
only covers launching a browser and handing out pages, so a scenario
runner can swap the launcher (e.g. connect to a remote browser) without
touching the page objects.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.async_api import Page
    from lightning_e2e.config.settings import BrowserSettings


class BrowserType(Enum):
    """Supported browser types."""
    CHROMIUM = "chromium"
    FIREFOX = "firefox"
    WEBKIT = "webkit"


class IBrowser(ABC):
    """
    Abstract interface for browser management.
    
    One browser serves one test at a time; pages are never shared between
    concurrently running scenarios.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the browser is connected and running."""
        ...

    @abstractmethod
    async def launch(self, settings: "BrowserSettings") -> None:
        """
        Launch a browser instance.
        
        Args:
            settings: Launch, viewport and timeout settings
        """
        ...

    @abstractmethod
    async def new_page(self) -> "Page":
        """
        Create a new page in a fresh, isolated context.
        
        Returns:
            A Playwright page with default timeouts applied
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the browser and cleanup resources."""
        ...
