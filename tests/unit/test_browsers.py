"""
Tests for browser lifecycle management.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from lightning_e2e.browsers import PlaywrightBrowser
from lightning_e2e.config import BrowserSettings
from lightning_e2e.exceptions import BrowserConnectionError
from lightning_e2e.interfaces import BrowserType, IBrowser


class TestPlaywrightBrowser:
    """Test PlaywrightBrowser without launching a real browser."""
    
    def test_implements_interface(self):
        assert isinstance(PlaywrightBrowser(), IBrowser)
    
    def test_not_connected_before_launch(self):
        assert PlaywrightBrowser().is_connected is False
    
    @pytest.mark.asyncio
    async def test_new_page_requires_launch(self):
        with pytest.raises(BrowserConnectionError):
            await PlaywrightBrowser().new_page()
    
    @pytest.mark.asyncio
    async def test_close_without_launch(self):
        await PlaywrightBrowser().close()
    
    @pytest.mark.asyncio
    async def test_new_page_applies_settings(self):
        page = MagicMock()
        context = MagicMock()
        context.new_page = AsyncMock(return_value=page)
        context.close = AsyncMock()
        inner = MagicMock()
        inner.new_context = AsyncMock(return_value=context)
        inner.close = AsyncMock()
        
        browser = PlaywrightBrowser()
        browser._browser = inner
        browser._settings = BrowserSettings(
            viewport_width=1280, viewport_height=720, navigation_timeout_ms=45000, action_timeout_ms=9000
        )
        
        assert await browser.new_page() is page
        inner.new_context.assert_awaited_once_with(
            viewport={"width": 1280, "height": 720},
            ignore_https_errors=browser._settings.ignore_https_errors,
        )
        context.set_default_navigation_timeout.assert_called_once_with(45000)
        context.set_default_timeout.assert_called_once_with(9000)
        
        await browser.close()
        context.close.assert_awaited_once()
        inner.close.assert_awaited_once()
    
    def test_browser_types(self):
        assert BrowserType(BrowserSettings().browser_type) is BrowserType.CHROMIUM
