"""
Pytest fixtures for live Lightning scenarios.

Provides an authenticated page and ready-to-use page objects. Scenarios
must run serially: the org is single-tenant and shared by the whole run.

Usage in a conftest.py:
    pytest_plugins = ["lightning_e2e.pytest_plugin"]

    @pytest.mark.live
    async def test_create_lead(lead_page):
        confirmation = await lead_page.create_lead(generate_lead_data())
        assert confirmation.record_id
"""

from datetime import datetime
import logging

import pytest
import pytest_asyncio

from lightning_e2e.browsers.playwright_browser import PlaywrightBrowser
from lightning_e2e.config import get_settings
from lightning_e2e.engine.toolkit import LightningToolkit
from lightning_e2e.pages.lead_page import LeadPage
from lightning_e2e.pages.login_page import LoginPage
from lightning_e2e.pages.opportunity_page import OpportunityPage
from lightning_e2e.reporting.screenshot_manager import ScreenshotManager

logger = logging.getLogger(__name__)


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "live: drives a real Salesforce org (skipped without credentials)"
    )


def pytest_collection_modifyitems(config, items):
    live_items = [item for item in items if "live" in item.keywords]
    if not live_items:
        return
    settings = get_settings()
    if settings.salesforce.has_credentials and settings.salesforce.base_url:
        return
    skip = pytest.mark.skip(reason="SF_BASE_URL, SF_USERNAME and SF_PASSWORD are not all set")
    for item in live_items:
        item.add_marker(skip)


@pytest.fixture(scope="session")
def e2e_settings():
    """Settings loaded once for the run."""
    return get_settings()


@pytest.fixture(scope="session")
def screenshots(e2e_settings):
    """Run-scoped screenshot directory."""
    run_id = datetime.now().strftime("run_%Y%m%d_%H%M%S")
    return ScreenshotManager(e2e_settings.reporting.output_dir, run_id)


@pytest_asyncio.fixture
async def e2e_browser(e2e_settings):
    browser = PlaywrightBrowser()
    await browser.launch(e2e_settings.browser)
    yield browser
    await browser.close()


@pytest_asyncio.fixture
async def e2e_page(e2e_browser):
    page = await e2e_browser.new_page()
    yield page
    await page.close()


@pytest_asyncio.fixture
async def toolkit(e2e_page, e2e_settings, screenshots):
    return LightningToolkit(e2e_page, e2e_settings, screenshots)


@pytest_asyncio.fixture
async def authenticated_page(toolkit):
    """Logs in before handing the page to the test."""
    await LoginPage(toolkit).login()
    return toolkit.page


@pytest_asyncio.fixture
async def lead_page(authenticated_page, toolkit):
    return LeadPage(toolkit)


@pytest_asyncio.fixture
async def opportunity_page(authenticated_page, toolkit):
    return OpportunityPage(toolkit)
