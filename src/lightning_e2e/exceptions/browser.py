"""
Browser and page-level exceptions.
"""

from typing import List, Optional, Sequence

from lightning_e2e.exceptions.base import LightningE2EError


class BrowserError(LightningE2EError):
    """Base exception for browser-related errors."""
    pass


class BrowserLaunchError(BrowserError):
    """
    Error launching the browser.
    
    Raised when the browser fails to start, which could be due to:
    - Missing browser binaries (``playwright install`` not run)
    - Invalid launch options
    """
    pass


class BrowserConnectionError(BrowserError):
    """
    Browser is not available.
    
    Raised when a page is requested before launch() or after close().
    """
    pass


class PageError(BrowserError):
    """Base exception for page-related errors."""
    pass


class NotFoundError(PageError):
    """
    No selector candidate resolved to a visible element.
    
    Carries the full, ordered candidate list so a failure can be diagnosed
    from the report alone.
    
    Attributes:
        candidates: Every selector that was probed, in probe order
        probe_errors: Candidates whose probe raised, mapped to the error text
        timeout_ms: Per-candidate probe timeout
    """
    
    def __init__(
        self,
        message: str,
        candidates: Sequence[str],
        probe_errors: Optional[dict] = None,
        timeout_ms: Optional[int] = None,
    ):
        super().__init__(
            message,
            {
                "candidates": list(candidates),
                "probe_errors": probe_errors or {},
                "timeout_ms": timeout_ms,
            },
        )
        self.candidates: List[str] = list(candidates)
        self.probe_errors = probe_errors or {}
        self.timeout_ms = timeout_ms


class NavigationError(PageError):
    """
    Error during page navigation.
    
    Raised when goto() fails (invalid URL, network error, timeout).
    """
    
    def __init__(self, message: str, url: str | None = None):
        super().__init__(message, {"url": url})
        self.url = url


class NavigationTimeoutError(NavigationError):
    """
    The page never reached the expected URL pattern.
    
    Raised after a save when the application stayed on the form (for
    example, a required field was left empty).
    
    Attributes:
        expected_pattern: Regex the URL was expected to match
        timeout_ms: How long we waited
    """
    
    def __init__(self, message: str, url: str | None, expected_pattern: str, timeout_ms: int):
        super().__init__(message, url=url)
        self.details.update({"expected_pattern": expected_pattern, "timeout_ms": timeout_ms})
        self.expected_pattern = expected_pattern
        self.timeout_ms = timeout_ms


class WaitTimeoutError(PageError):
    """
    A polled wait condition was not satisfied in time.
    """
    
    def __init__(self, message: str, condition: str, timeout_ms: int):
        super().__init__(message, {"condition": condition, "timeout_ms": timeout_ms})
        self.condition = condition
        self.timeout_ms = timeout_ms


class SpinnerTimeoutError(WaitTimeoutError):
    """
    Loading indicators never cleared.
    
    WaitEngine.wait_for_spinners() logs and swallows this; only
    check_spinners() lets it reach the caller.
    """
    pass
