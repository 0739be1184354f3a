"""
Target Resolver - Ordered selector-fallback resolution.

Strategy (first match wins):
1. CANDIDATE - each explicit selector, in the order given
2. ROLE_FALLBACK - the target's role query, only once every candidate failed

Every probe is a real wait of up to ``probe_timeout_ms`` for the element to
become visible. Playwright's ``is_visible()`` does not wait, which is why
probes go through ``locator.wait_for(state="visible")``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, TYPE_CHECKING
import logging
import re

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from lightning_e2e.engine.selectors import (
    InteractionTarget,
    ProbeOutcome,
    ProbeResult,
)
from lightning_e2e.exceptions.browser import NotFoundError

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)


class ResolutionStrategy(Enum):
    """Which strategy resolved the target."""
    CANDIDATE = "candidate"
    ROLE_FALLBACK = "role_fallback"


@dataclass
class ResolvedTarget:
    """
    A resolved, visible element.

    Attributes:
        locator: Playwright locator for the element (``.first`` applied)
        selector: The pattern that matched
        strategy: Candidate list or role fallback
        index: Position of the matching candidate (-1 for the fallback)
        probes: Every probe performed, in order
    """
    locator: Any
    selector: str
    strategy: ResolutionStrategy = ResolutionStrategy.CANDIDATE
    index: int = 0
    probes: List[ProbeOutcome] = field(default_factory=list)


class SelectorResolver:
    """
    Resolve an InteractionTarget to its first visible match.

    Resolution only observes the page; it never clicks or types.

    Example:
        >>> resolver = SelectorResolver(page, probe_timeout_ms=5000)
        >>> resolved = await resolver.resolve(LEAD.NEW_BTN)
        >>> await resolved.locator.click()
    """

    def __init__(self, page: "Page", probe_timeout_ms: int = 5000):
        """
        Args:
            page: Playwright page
            probe_timeout_ms: Default per-candidate probe timeout
        """
        self.page = page
        self.probe_timeout_ms = probe_timeout_ms

    async def probe(self, locator: "Locator", timeout_ms: int, selector: str = "") -> ProbeOutcome:
        """
        Wait up to ``timeout_ms`` for ``locator`` to be visible.

        A timeout is NOT_VISIBLE; any other Playwright failure (bad selector
        syntax, detached frame) is PROBE_ERROR so it is not mistaken for
        absence.
        """
        try:
            await locator.wait_for(state="visible", timeout=timeout_ms)
            return ProbeOutcome(selector, ProbeResult.VISIBLE)
        except PlaywrightTimeoutError:
            return ProbeOutcome(selector, ProbeResult.NOT_VISIBLE)
        except PlaywrightError as e:
            return ProbeOutcome(selector, ProbeResult.PROBE_ERROR, error=str(e))

    async def resolve(
        self,
        target: InteractionTarget,
        probe_timeout_ms: Optional[int] = None,
    ) -> ResolvedTarget:
        """
        Find the first visible candidate of ``target``.

        Args:
            target: Ordered candidates (and optional role fallback)
            probe_timeout_ms: Per-candidate probe timeout (default from init)

        Returns:
            ResolvedTarget for the first visible match

        Raises:
            NotFoundError: listing every candidate when nothing was visible
        """
        timeout = self.probe_timeout_ms if probe_timeout_ms is None else probe_timeout_ms
        probes: List[ProbeOutcome] = []

        for index, selector in enumerate(target.candidates):
            locator = self.page.locator(selector).first
            outcome = await self.probe(locator, timeout, selector)
            probes.append(outcome)
            if outcome.result is ProbeResult.VISIBLE:
                logger.debug(f"Resolved '{target.describe()}' via candidate {index + 1}: {selector}")
                return ResolvedTarget(locator=locator, selector=selector, index=index, probes=probes)
            if outcome.result is ProbeResult.PROBE_ERROR:
                logger.warning(f"Probe error for '{selector}': {outcome.error}")

        if target.fallback:
            query = target.fallback
            locator = self.page.get_by_role(
                query.role, name=re.compile(query.name_pattern, re.IGNORECASE)
            ).first
            outcome = await self.probe(locator, timeout, query.describe())
            probes.append(outcome)
            if outcome.result is ProbeResult.VISIBLE:
                logger.info(
                    f"'{target.describe()}' resolved by role fallback {query.describe()}; "
                    f"candidate selectors may be stale"
                )
                return ResolvedTarget(
                    locator=locator,
                    selector=query.describe(),
                    strategy=ResolutionStrategy.ROLE_FALLBACK,
                    index=-1,
                    probes=probes,
                )

        probe_errors = {p.selector: p.error for p in probes if p.result is ProbeResult.PROBE_ERROR}
        raise NotFoundError(
            f"No visible element for '{target.describe()}' after probing "
            f"{len(probes)} selector(s) for {timeout}ms each",
            candidates=target.all_patterns(),
            probe_errors=probe_errors,
            timeout_ms=timeout,
        )
