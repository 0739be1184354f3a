"""
Wait Engine - Decide when Lightning is ready for interaction.

Handles:
- Polling side-effect-free wait conditions with a hard timeout
- Waiting for loading spinners to clear (best effort)
- Page readiness: document load, spinners, then a short settle delay
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Sequence, TYPE_CHECKING
import asyncio
import logging
import time

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from lightning_e2e.exceptions.browser import SpinnerTimeoutError, WaitTimeoutError

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


# Markers Lightning uses for loading indicators
SPINNER_SELECTORS = (
    "div.slds-spinner_container",
    "div.slds-spinner",
    "lightning-spinner",
)

# True when every indicator is absent or not rendered
SPINNERS_CLEARED_JS = """
(selectors) => {
    const spinners = document.querySelectorAll(selectors.join(', '));
    return [...spinners].every((s) => {
        const style = window.getComputedStyle(s);
        if (style.display === 'none' || style.visibility === 'hidden') return true;
        if (!s.offsetParent) return true;
        const rect = s.getBoundingClientRect();
        return rect.width === 0 || rect.height === 0;
    });
}
"""


@dataclass
class WaitCondition:
    """
    A predicate over page state plus a maximum duration.

    The predicate must only observe; it may be evaluated any number of times.

    Attributes:
        description: What is being waited for (used in errors)
        predicate: Async callable returning True once satisfied
        timeout_ms: Maximum total wait
        poll_interval_ms: Delay between evaluations
    """
    description: str
    predicate: Callable[[], Awaitable[bool]]
    timeout_ms: int
    poll_interval_ms: int = 100

    async def wait(self) -> bool:
        """
        Poll until the predicate holds.

        The predicate is always evaluated at least once, so an already
        satisfied condition returns without sleeping.

        Raises:
            WaitTimeoutError: if the predicate is still false at the deadline
        """
        deadline = time.monotonic() + self.timeout_ms / 1000
        polls = 0
        while True:
            polls += 1
            if await self.predicate():
                logger.debug(f"'{self.description}' satisfied after {polls} poll(s)")
                return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise WaitTimeoutError(
                    f"Timed out after {self.timeout_ms}ms waiting for {self.description}",
                    condition=self.description,
                    timeout_ms=self.timeout_ms,
                )
            await asyncio.sleep(min(self.poll_interval_ms / 1000, remaining))


class WaitEngine:
    """
    Synchronization against Lightning's asynchronous rendering.

    Example:
        >>> waits = WaitEngine(page)
        >>> await waits.wait_for_page_ready()
        >>> await waits.wait_for_spinners(timeout_ms=5000)
    """

    def __init__(
        self,
        page: "Page",
        spinner_timeout_ms: int = 30000,
        settle_ms: int = 1000,
        poll_interval_ms: int = 100,
        load_timeout_ms: int = 60000,
        spinner_selectors: Sequence[str] = SPINNER_SELECTORS,
    ):
        """
        Args:
            page: Playwright page
            spinner_timeout_ms: Default spinner wait
            settle_ms: Fixed delay after spinners clear in wait_for_page_ready()
            poll_interval_ms: Poll interval for spinner checks
            load_timeout_ms: Limit for the domcontentloaded wait
            spinner_selectors: Loading indicator markers
        """
        self.page = page
        self.spinner_timeout_ms = spinner_timeout_ms
        self.settle_ms = settle_ms
        self.poll_interval_ms = poll_interval_ms
        self.load_timeout_ms = load_timeout_ms
        self.spinner_selectors = list(spinner_selectors)

    async def spinners_cleared(self) -> bool:
        """
        Single observation: True if no loading indicator is rendered.

        A navigation destroys the execution context mid-check; that counts
        as "not yet" so polling continues on the new document.
        """
        try:
            return bool(await self.page.evaluate(SPINNERS_CLEARED_JS, self.spinner_selectors))
        except PlaywrightError as e:
            logger.debug(f"Spinner check failed, retrying: {e}")
            return False

    def spinner_condition(self, timeout_ms: Optional[int] = None) -> WaitCondition:
        return WaitCondition(
            description="loading spinners to clear",
            predicate=self.spinners_cleared,
            timeout_ms=self.spinner_timeout_ms if timeout_ms is None else timeout_ms,
            poll_interval_ms=self.poll_interval_ms,
        )

    async def check_spinners(self, timeout_ms: Optional[int] = None) -> None:
        """
        Wait for spinners and fail loudly if they never clear.

        Raises:
            SpinnerTimeoutError: spinners still rendered at the deadline
        """
        condition = self.spinner_condition(timeout_ms)
        try:
            await condition.wait()
        except WaitTimeoutError as e:
            raise SpinnerTimeoutError(
                e.message, condition=e.condition, timeout_ms=e.timeout_ms
            ) from e

    async def wait_for_spinners(self, timeout_ms: Optional[int] = None) -> bool:
        """
        Best-effort wait for spinners to clear.

        Some transitions legitimately never show a spinner and some leave a
        stale one behind, so a timeout is logged rather than raised. Callers
        that need a guarantee verify a toast or navigation afterwards, or
        use check_spinners().

        Returns:
            True if spinners cleared, False on timeout
        """
        try:
            await self.check_spinners(timeout_ms)
            return True
        except SpinnerTimeoutError as e:
            logger.warning(f"Spinners still visible after {e.timeout_ms}ms; continuing")
            return False

    async def wait_for_page_ready(self) -> None:
        """
        Wait until the page is "truly" ready.

        domcontentloaded is not enough for Lightning: the Aura framework
        keeps rendering afterwards. The settle delay is a heuristic for
        hydration that finishes after the last spinner and is a known
        source of residual flakiness.

        Raises:
            WaitTimeoutError: the document did not load in time
        """
        try:
            await self.page.wait_for_load_state("domcontentloaded", timeout=self.load_timeout_ms)
        except PlaywrightTimeoutError as e:
            raise WaitTimeoutError(
                f"Document not loaded after {self.load_timeout_ms}ms",
                condition="domcontentloaded",
                timeout_ms=self.load_timeout_ms,
            ) from e
        await self.wait_for_spinners()
        if self.settle_ms:
            await self.page.wait_for_timeout(self.settle_ms)
