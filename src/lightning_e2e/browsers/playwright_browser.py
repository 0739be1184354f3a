"""
Playwright Browser - Implementation of IBrowser using Playwright.
"""

from typing import Any, List, Optional, TYPE_CHECKING
import logging

from playwright.async_api import async_playwright
from playwright.async_api import Error as PlaywrightError

from lightning_e2e.config.settings import BrowserSettings
from lightning_e2e.interfaces.browser import IBrowser, BrowserType
from lightning_e2e.exceptions.browser import (
    BrowserLaunchError,
    BrowserConnectionError,
)

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


class PlaywrightBrowser(IBrowser):
    """
    Playwright implementation of IBrowser.
    
    Example:
        >>> browser = PlaywrightBrowser()
        >>> await browser.launch(settings.browser)
        >>> page = await browser.new_page()
        >>> await browser.close()
    """
    
    def __init__(self):
        """Initialize the browser (not launched yet)."""
        self._playwright: Any = None
        self._browser: Any = None
        self._settings: Optional[BrowserSettings] = None
        self._contexts: List[Any] = []
    
    @property
    def is_connected(self) -> bool:
        """Check if browser is connected."""
        return self._browser is not None and self._browser.is_connected()
    
    async def launch(self, settings: Optional[BrowserSettings] = None) -> None:
        """
        Launch the browser.
        
        Args:
            settings: Browser settings (defaults if omitted)
        """
        settings = settings or BrowserSettings()
        browser_type = BrowserType(settings.browser_type)
        try:
            self._playwright = await async_playwright().start()
            
            browser_launchers = {
                BrowserType.CHROMIUM: self._playwright.chromium,
                BrowserType.FIREFOX: self._playwright.firefox,
                BrowserType.WEBKIT: self._playwright.webkit,
            }
            launcher = browser_launchers[browser_type]
            
            # Chromium switches are meaningless to the other engines
            args = settings.launch_args if browser_type is BrowserType.CHROMIUM else []
            self._browser = await launcher.launch(
                headless=settings.headless,
                slow_mo=settings.slow_mo,
                args=args,
            )
            self._settings = settings
            
            logger.info(f"Launched {browser_type.value} browser (headless={settings.headless})")
            
        except PlaywrightError as e:
            await self.close()
            raise BrowserLaunchError(f"Failed to launch browser: {e}") from e
    
    async def new_page(self) -> "Page":
        """
        Create a new page in its own context.
        
        Returns:
            Playwright page with navigation/action timeouts applied
        """
        if not self._browser or self._settings is None:
            raise BrowserConnectionError("Browser not launched. Call launch() first.")
        
        settings = self._settings
        context = await self._browser.new_context(
            viewport={"width": settings.viewport_width, "height": settings.viewport_height},
            ignore_https_errors=settings.ignore_https_errors,
        )
        context.set_default_navigation_timeout(settings.navigation_timeout_ms)
        context.set_default_timeout(settings.action_timeout_ms)
        self._contexts.append(context)
        return await context.new_page()
    
    async def close(self) -> None:
        """Close the browser and cleanup."""
        for context in self._contexts:
            try:
                await context.close()
            except PlaywrightError as e:
                logger.debug(f"Context already closed: {e}")
        self._contexts.clear()
        
        if self._browser:
            await self._browser.close()
            self._browser = None
        
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None
        
        logger.info("Browser closed")
