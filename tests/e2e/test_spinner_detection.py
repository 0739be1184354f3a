"""
Spinner detection against real markup in headless Chromium.

Needs a Playwright browser (``playwright install chromium``) but no org.
"""

import pytest
import pytest_asyncio

from lightning_e2e.browsers import PlaywrightBrowser
from lightning_e2e.config import BrowserSettings
from lightning_e2e.engine.wait_engine import WaitEngine
from lightning_e2e.exceptions import BrowserLaunchError


@pytest_asyncio.fixture
async def chromium_page():
    browser = PlaywrightBrowser()
    try:
        await browser.launch(BrowserSettings(headless=True))
    except BrowserLaunchError as e:
        pytest.skip(f"Chromium not available: {e}")
    page = await browser.new_page()
    yield page
    await browser.close()


def waits_for(page):
    return WaitEngine(page, spinner_timeout_ms=300, settle_ms=0, poll_interval_ms=20)


class TestSpinnersCleared:
    """The in-page check over each way a spinner can be absent."""
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("markup,cleared", [
        ("<main>No indicators at all</main>", True),
        ('<div class="slds-spinner_container" style="display: none"></div>', True),
        ('<div class="slds-spinner" style="visibility: hidden; width: 40px; height: 40px"></div>', True),
        ('<div style="display: none"><lightning-spinner>loading</lightning-spinner></div>', True),
        ('<div class="slds-spinner" style="width: 0; height: 0"></div>', True),
        ('<div class="slds-spinner_container" style="width: 40px; height: 40px"></div>', False),
        ('<lightning-spinner style="display: block; width: 40px; height: 40px"></lightning-spinner>', False),
        (
            '<div class="slds-spinner" style="display: none"></div>'
            '<div class="slds-spinner_container" style="width: 40px; height: 40px"></div>',
            False,
        ),
    ])
    async def test_markup(self, chromium_page, markup, cleared):
        await chromium_page.set_content(f"<html><body>{markup}</body></html>")
        
        assert await waits_for(chromium_page).spinners_cleared() is cleared
    
    @pytest.mark.asyncio
    async def test_wait_returns_once_spinner_hidden(self, chromium_page):
        await chromium_page.set_content(
            '<html><body><div id="s" class="slds-spinner_container" style="width: 40px; height: 40px"></div>'
            "<script>setTimeout(() => { document.getElementById('s').style.display = 'none'; }, 100);</script>"
            "</body></html>"
        )
        
        assert await waits_for(chromium_page).wait_for_spinners(timeout_ms=2000) is True
    
    @pytest.mark.asyncio
    async def test_stuck_spinner_times_out(self, chromium_page):
        await chromium_page.set_content(
            '<html><body><div class="slds-spinner" style="width: 40px; height: 40px"></div></body></html>'
        )
        
        assert await waits_for(chromium_page).wait_for_spinners() is False
