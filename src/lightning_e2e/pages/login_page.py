"""
Login Page - Salesforce Classic login at login.salesforce.com.

After a successful login Salesforce redirects to Lightning Experience,
sometimes by way of an optional interstitial screen.
"""

from typing import Optional, TYPE_CHECKING
import logging

from playwright.async_api import Error as PlaywrightError

from lightning_e2e.engine.interstitials import InterstitialHandler, SessionState
from lightning_e2e.exceptions.auth import AuthenticationError
from lightning_e2e.exceptions.browser import NavigationError
from lightning_e2e.pages.selectors import LIGHTNING, LOGIN

if TYPE_CHECKING:
    from lightning_e2e.engine.toolkit import LightningToolkit

logger = logging.getLogger(__name__)


class LoginPage:
    """
    Authenticate the session.
    
    Example:
        >>> login_page = LoginPage(toolkit)
        >>> await login_page.login()
        <SessionState.AUTHENTICATED: 'authenticated'>
    """
    
    def __init__(self, toolkit: "LightningToolkit"):
        self.kit = toolkit
        self.session_state = SessionState.UNAUTHENTICATED
        self.last_handler: Optional[InterstitialHandler] = None
    
    @property
    def is_authenticated(self) -> bool:
        return self.session_state is SessionState.AUTHENTICATED
    
    async def goto(self) -> None:
        """Open the login form."""
        login_url = self.kit.settings.salesforce.login_url
        try:
            await self.kit.page.goto(login_url, wait_until="domcontentloaded")
        except PlaywrightError as e:
            raise NavigationError(f"Failed to open login page {login_url}: {e}", url=login_url) from e
    
    async def submit(self, username: str, password: str) -> None:
        """Fill and submit the login form without waiting for the redirect."""
        await self.kit.fill_field(LOGIN.USERNAME, username)
        await self.kit.fill_field(LOGIN.PASSWORD, password)
        resolved = await self.kit.resolve(LOGIN.LOGIN_BTN)
        await resolved.locator.click()
    
    async def login(self, username: Optional[str] = None, password: Optional[str] = None) -> SessionState:
        """
        Log in and wait until Lightning is usable.
        
        Args:
            username: Overrides the configured username
            password: Overrides the configured password
            
        Returns:
            SessionState.AUTHENTICATED
            
        Raises:
            AuthenticationError: credentials missing, or Lightning never loaded
        """
        username, password = self.kit.settings.salesforce.require_credentials(username, password)
        
        await self.goto()
        await self.submit(username, password)
        
        timeouts = self.kit.settings.timeouts
        handler = InterstitialHandler(
            self.kit.page,
            self.kit.resolver,
            redirect_timeout_ms=timeouts.redirect_ms,
            probe_timeout_ms=timeouts.interstitial_probe_ms,
            secondary_timeout_ms=timeouts.redirect_ms,
        )
        self.last_handler = handler
        try:
            self.session_state = await handler.resolve()
        except AuthenticationError:
            self.session_state = handler.session_state
            raise
        
        await self.kit.wait_for_page_ready()
        logger.info(f"Logged in as {username}")
        return self.session_state
    
    async def login_error_visible(self) -> bool:
        """True if the login form shows its error banner."""
        return await self.kit.is_visible(LOGIN.ERROR, probe_timeout_ms=self.kit.settings.timeouts.toast_ms)
    
    async def nav_bar_visible(self) -> bool:
        """True once Lightning's global navigation has rendered."""
        return await self.kit.is_visible(LIGHTNING.NAV_BAR, probe_timeout_ms=self.kit.settings.timeouts.redirect_ms)
