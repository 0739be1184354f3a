"""
Record ID Extractor - Identify the record a save just created.

After a successful save Lightning navigates to the record detail view,
``/lightning/r/<Object>/<RecordId>/view``. The same compiled pattern is used
to wait for that URL and to parse it, so the two can never drift apart.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import logging
import re

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from lightning_e2e.exceptions.browser import NavigationTimeoutError

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


RECORD_VIEW_PATTERN = re.compile(r"/lightning/r/(\w+)/(\w+)/view", re.IGNORECASE)


@dataclass(frozen=True)
class NavigationOutcome:
    """Where a save landed."""
    url: str
    object_name: Optional[str]
    record_id: Optional[str]


def parse_record_id(url: str) -> Optional[str]:
    """
    Extract the record id from a record view URL.

    >>> parse_record_id("https://x.lightning.force.com/lightning/r/Lead/00Q5g00000AbCde/view")
    '00Q5g00000AbCde'
    """
    match = RECORD_VIEW_PATTERN.search(url)
    return match.group(2) if match else None


class RecordIdExtractor:
    """
    Wait for the post-save record view and read the id from its URL.

    Example:
        >>> records = RecordIdExtractor(page, timeout_ms=60000)
        >>> record_id = await records.extract_record_id()
    """

    def __init__(self, page: "Page", timeout_ms: int = 60000):
        self.page = page
        self.timeout_ms = timeout_ms

    async def wait_for_record_view(self, timeout_ms: Optional[int] = None) -> NavigationOutcome:
        """
        Wait for the URL to reach a record detail view.

        Raises:
            NavigationTimeoutError: the save did not navigate (e.g. validation
                errors kept the form open)
        """
        timeout = self.timeout_ms if timeout_ms is None else timeout_ms
        try:
            await self.page.wait_for_url(RECORD_VIEW_PATTERN, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise NavigationTimeoutError(
                f"Save did not navigate to a record view within {timeout}ms; "
                f"still at {self.page.url}",
                url=self.page.url,
                expected_pattern=RECORD_VIEW_PATTERN.pattern,
                timeout_ms=timeout,
            ) from e

        url = self.page.url
        match = RECORD_VIEW_PATTERN.search(url)
        if match is None:
            # Only reachable if another navigation happened after the wait
            logger.warning(f"URL {url} no longer matches the record view pattern")
            return NavigationOutcome(url=url, object_name=None, record_id=None)
        return NavigationOutcome(url=url, object_name=match.group(1), record_id=match.group(2))

    async def extract_record_id(self, timeout_ms: Optional[int] = None) -> Optional[str]:
        """Return the id of the record the page navigated to, or None."""
        outcome = await self.wait_for_record_view(timeout_ms)
        if outcome.record_id:
            logger.info(f"{outcome.object_name} record id: {outcome.record_id}")
        return outcome.record_id
