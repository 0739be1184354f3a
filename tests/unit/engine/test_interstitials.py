"""
Tests for the post-login interstitial state machine.
"""

import pytest

from lightning_e2e.engine.interstitials import (
    AUTHENTICATED_URL_PATTERN,
    HandlerState,
    InterstitialHandler,
    SessionState,
)
from lightning_e2e.engine.target_resolver import SelectorResolver
from lightning_e2e.exceptions import AuthenticationError


LIGHTNING_HOME = "https://acme.lightning.force.com/lightning/page/home"
REMIND = 'text="Remind Me Later"'
SKIP = "role=button[name=/skip/i]"


def go_home(page):
    page.url = LIGHTNING_HOME


@pytest.fixture
def handler(fake_page):
    def build(**kwargs):
        kwargs.setdefault("redirect_timeout_ms", 100)
        kwargs.setdefault("probe_timeout_ms", 20)
        kwargs.setdefault("secondary_timeout_ms", 300)
        return InterstitialHandler(fake_page, SelectorResolver(fake_page), **kwargs)
    return build


class TestInterstitialHandler:
    """Redirect, then prompts, then a second redirect wait."""
    
    @pytest.mark.asyncio
    async def test_direct_redirect(self, fake_page, handler):
        fake_page.url = LIGHTNING_HOME
        h = handler()
        
        assert await h.resolve() is SessionState.AUTHENTICATED
        assert h.report.states == [HandlerState.AWAITING_REDIRECT, HandlerState.RESOLVED]
        assert fake_page.probes() == []
    
    @pytest.mark.asyncio
    async def test_skip_prompt(self, fake_page, handler):
        fake_page.add(SKIP, on_click=go_home)
        h = handler()
        
        assert await h.resolve() is SessionState.AUTHENTICATED
        
        assert fake_page.elements[SKIP].clicks == 1
        assert h.report.clicked_prompt == "skip"
        assert h.report.final_url == LIGHTNING_HOME
        assert h.report.states == [
            HandlerState.AWAITING_REDIRECT,
            HandlerState.PROBING_INTERSTITIAL,
            HandlerState.RESOLVED,
        ]
    
    @pytest.mark.asyncio
    async def test_only_first_visible_prompt_clicked(self, fake_page, handler):
        fake_page.add(REMIND, on_click=go_home)
        fake_page.add(SKIP, on_click=go_home)
        
        await handler().resolve()
        
        assert fake_page.elements[REMIND].clicks == 1
        assert fake_page.elements[SKIP].clicks == 0
        assert fake_page.probes() == [REMIND]
    
    @pytest.mark.asyncio
    async def test_no_prompt_no_redirect_fails(self, fake_page, handler):
        h = handler()
        
        with pytest.raises(AuthenticationError) as exc_info:
            await h.resolve()
        
        assert exc_info.value.last_url == "https://login.salesforce.com/"
        assert exc_info.value.timeout_ms == 300
        assert fake_page.events("wait_for_url") == [
            ("wait_for_url", AUTHENTICATED_URL_PATTERN.pattern, 100),
            ("wait_for_url", AUTHENTICATED_URL_PATTERN.pattern, 300),
        ]
        assert fake_page.events("click") == []
        assert h.state is HandlerState.FAILED
        assert h.session_state is SessionState.AUTHENTICATION_FAILED
    
    @pytest.mark.asyncio
    async def test_prompt_probe_error_moves_on(self, fake_page, handler):
        fake_page.add(REMIND, error="frame was detached")
        fake_page.add(SKIP, on_click=go_home)
        
        assert await handler().resolve() is SessionState.AUTHENTICATED
        assert fake_page.elements[SKIP].clicks == 1
    
    @pytest.mark.asyncio
    async def test_prompt_clicked_but_still_stuck(self, fake_page, handler):
        fake_page.add(SKIP)
        h = handler()
        
        with pytest.raises(AuthenticationError):
            await h.resolve()
        
        assert h.report.clicked_prompt == "skip"
    
    @pytest.mark.asyncio
    async def test_prompt_gone_before_click(self, fake_page, handler):
        fake_page.add(SKIP, click_error="Element is not attached to the DOM")
        h = handler()
        
        with pytest.raises(AuthenticationError):
            await h.resolve()
        
        assert h.report.clicked_prompt is None
        assert h.state is HandlerState.FAILED
        assert len(fake_page.events("wait_for_url")) == 2
    
    @pytest.mark.asyncio
    async def test_redirect_after_failed_click(self, fake_page, handler):
        fake_page.add(SKIP, click_error="Element is not attached to the DOM")
        fake_page.add(REMIND, visible=False)
        h = handler()
        original_wait = fake_page.wait_for_url
        
        async def wait_for_url(url, timeout=None):
            # the org finishes its own redirect while the prompt is probed
            if len(fake_page.events("wait_for_url")) == 1:
                fake_page.url = LIGHTNING_HOME
            await original_wait(url, timeout=timeout)
        
        fake_page.wait_for_url = wait_for_url
        
        assert await h.resolve() is SessionState.AUTHENTICATED
        assert h.report.clicked_prompt is None
