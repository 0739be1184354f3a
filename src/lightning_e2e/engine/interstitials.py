"""
Interstitial Handler - Get from the login form into Lightning.

Depending on org configuration, Salesforce may show an optional screen
after login (phone registration, setup wizards) before redirecting to
Lightning. Whether one appears is not predictable, so the handler runs a
two-phase state machine:

    AWAITING_REDIRECT --redirect--> RESOLVED
           |
        timeout
           v
    PROBING_INTERSTITIAL --click first visible prompt (or none)-->
    re-wait for redirect --> RESOLVED | FAILED
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, TYPE_CHECKING
import logging
import re

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from lightning_e2e.engine.selectors import ProbeResult
from lightning_e2e.exceptions.auth import AuthenticationError

if TYPE_CHECKING:
    from playwright.async_api import Page
    from lightning_e2e.engine.target_resolver import SelectorResolver

logger = logging.getLogger(__name__)


AUTHENTICATED_URL_PATTERN = re.compile(r"lightning", re.IGNORECASE)


class HandlerState(Enum):
    """Interstitial handler states."""
    AWAITING_REDIRECT = "awaiting_redirect"
    PROBING_INTERSTITIAL = "probing_interstitial"
    RESOLVED = "resolved"
    FAILED = "failed"


class SessionState(Enum):
    """Authentication state of the browsing session."""
    UNAUTHENTICATED = "unauthenticated"
    INTERSTITIAL_PENDING = "interstitial_pending"
    AUTHENTICATED = "authenticated"
    AUTHENTICATION_FAILED = "authentication_failed"


@dataclass(frozen=True)
class InterstitialPrompt:
    """A known optional screen and the affordance that dismisses it."""
    name: str
    selector: str


DEFAULT_PROMPTS = (
    InterstitialPrompt("remind_me_later", 'text="Remind Me Later"'),
    InterstitialPrompt("skip", "role=button[name=/skip/i]"),
)


@dataclass
class InterstitialReport:
    """What the handler saw, for diagnostics."""
    states: List[HandlerState] = field(default_factory=list)
    clicked_prompt: Optional[str] = None
    final_url: str = ""


class InterstitialHandler:
    """
    Resolve post-login ambiguity.

    Example:
        >>> handler = InterstitialHandler(page, resolver)
        >>> await handler.resolve()
        <SessionState.AUTHENTICATED: 'authenticated'>
    """

    def __init__(
        self,
        page: "Page",
        resolver: "SelectorResolver",
        redirect_timeout_ms: int = 30000,
        probe_timeout_ms: int = 3000,
        secondary_timeout_ms: int = 30000,
        prompts: Sequence[InterstitialPrompt] = DEFAULT_PROMPTS,
    ):
        """
        Args:
            page: Playwright page, just after the login form was submitted
            resolver: Selector resolver used for prompt probes
            redirect_timeout_ms: First wait for the Lightning URL
            probe_timeout_ms: Visibility probe per prompt
            secondary_timeout_ms: Wait for the Lightning URL after prompts
            prompts: Known optional screens, in probe order
        """
        self.page = page
        self.resolver = resolver
        self.redirect_timeout_ms = redirect_timeout_ms
        self.probe_timeout_ms = probe_timeout_ms
        self.secondary_timeout_ms = secondary_timeout_ms
        self.prompts = list(prompts)
        self.state = HandlerState.AWAITING_REDIRECT
        self.session_state = SessionState.UNAUTHENTICATED
        self.report = InterstitialReport(states=[self.state])

    def _transition(self, state: HandlerState) -> None:
        logger.debug(f"Interstitial handler: {self.state.value} -> {state.value}")
        self.state = state
        self.report.states.append(state)
        if state is HandlerState.PROBING_INTERSTITIAL:
            self.session_state = SessionState.INTERSTITIAL_PENDING
        elif state is HandlerState.RESOLVED:
            self.session_state = SessionState.AUTHENTICATED
        elif state is HandlerState.FAILED:
            self.session_state = SessionState.AUTHENTICATION_FAILED

    async def _await_redirect(self, timeout_ms: int) -> bool:
        try:
            await self.page.wait_for_url(AUTHENTICATED_URL_PATTERN, timeout=timeout_ms)
            return True
        except PlaywrightTimeoutError:
            return False

    async def dismiss_interstitial(self) -> Optional[InterstitialPrompt]:
        """
        Click the first visible known prompt.

        At most one prompt is clicked; if none is visible nothing is clicked.
        A prompt that vanishes before the click (the org redirected on its
        own) counts as not clicked.
        """
        for prompt in self.prompts:
            locator = self.page.locator(prompt.selector).first
            outcome = await self.resolver.probe(locator, self.probe_timeout_ms, prompt.selector)
            if outcome.result is ProbeResult.VISIBLE:
                logger.info(f"Dismissing interstitial '{prompt.name}'")
                try:
                    await locator.click(timeout=self.probe_timeout_ms)
                except PlaywrightError as e:
                    logger.warning(f"Could not click interstitial '{prompt.name}': {e}")
                    return None
                return prompt
            if outcome.result is ProbeResult.PROBE_ERROR:
                logger.warning(f"Probe error for interstitial '{prompt.name}': {outcome.error}")
        logger.info("No known interstitial found")
        return None

    async def resolve(self) -> SessionState:
        """
        Run the state machine to completion.

        Returns:
            SessionState.AUTHENTICATED

        Raises:
            AuthenticationError: the Lightning URL never appeared
        """
        if await self._await_redirect(self.redirect_timeout_ms):
            self._transition(HandlerState.RESOLVED)
            self.report.final_url = self.page.url
            return self.session_state

        logger.info(
            f"No redirect to Lightning within {self.redirect_timeout_ms}ms "
            f"(at {self.page.url}); probing for interstitials"
        )
        self._transition(HandlerState.PROBING_INTERSTITIAL)
        prompt = await self.dismiss_interstitial()
        if prompt:
            self.report.clicked_prompt = prompt.name

        if await self._await_redirect(self.secondary_timeout_ms):
            self._transition(HandlerState.RESOLVED)
            self.report.final_url = self.page.url
            return self.session_state

        self._transition(HandlerState.FAILED)
        self.report.final_url = self.page.url
        raise AuthenticationError(
            f"Login did not reach Lightning within {self.secondary_timeout_ms}ms "
            f"after interstitial handling (clicked: {self.report.clicked_prompt or 'nothing'})",
            last_url=self.page.url,
            timeout_ms=self.secondary_timeout_ms,
        )
