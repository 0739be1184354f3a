"""
Live login scenarios. Skipped unless SF_BASE_URL, SF_USERNAME and
SF_PASSWORD are set.
"""

import pytest

from lightning_e2e.engine.interstitials import SessionState
from lightning_e2e.exceptions import AuthenticationError
from lightning_e2e.pages import LoginPage

pytestmark = pytest.mark.live


class TestLiveLogin:
    
    @pytest.mark.asyncio
    async def test_login_reaches_lightning(self, toolkit):
        login_page = LoginPage(toolkit)
        
        assert await login_page.login() is SessionState.AUTHENTICATED
        assert "lightning" in toolkit.page.url
        assert await login_page.nav_bar_visible()
    
    @pytest.mark.asyncio
    async def test_wrong_password_shows_error(self, toolkit):
        login_page = LoginPage(toolkit)
        username, _ = toolkit.settings.salesforce.require_credentials()
        
        with pytest.raises(AuthenticationError):
            await login_page.login(username, "definitely-not-the-password")
        
        assert await login_page.login_error_visible()
