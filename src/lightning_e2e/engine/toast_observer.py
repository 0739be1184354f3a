"""
Toast Observer - Capture Lightning toast notifications before they vanish.

Toasts are single-shot: if one disappears before observation starts it is
gone for good, and the capture fails with a timeout.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, TYPE_CHECKING
import logging
import re

from playwright.async_api import Error as PlaywrightError

from lightning_e2e.exceptions.toast import ToastMismatchError, ToastTimeoutError

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)


TOAST_CONTAINER = "div.slds-notify_toast, div.toastContainer"
TOAST_READ_TIMEOUT_MS = 1000
READ_TOAST_JS = "(el) => [el.textContent, el.className]"
SUCCESS_CLASS_PATTERN = re.compile(r"slds-theme_success|toastMessage", re.IGNORECASE)


class ToastKind(Enum):
    """Inferred toast classification."""
    SUCCESS = "success"
    OTHER = "other"


@dataclass
class ToastMessage:
    """A captured toast."""
    text: str
    kind: ToastKind
    captured_at: datetime = field(default_factory=datetime.now)

    def contains(self, expected: str) -> bool:
        return expected.lower() in self.text.lower()


def classify_toast(class_attr: Optional[str]) -> ToastKind:
    """Classify a toast container by its class attribute."""
    if class_attr and SUCCESS_CLASS_PATTERN.search(class_attr):
        return ToastKind.SUCCESS
    return ToastKind.OTHER


class ToastObserver:
    """
    Wait for, read and check a toast.

    Example:
        >>> toasts = ToastObserver(page, timeout_ms=15000)
        >>> message = await toasts.capture_toast("created")
    """

    def __init__(self, page: "Page", timeout_ms: int = 15000, container_selector: str = TOAST_CONTAINER):
        self.page = page
        self.timeout_ms = timeout_ms
        self.container_selector = container_selector

    async def capture_toast(
        self,
        expected_substring: str,
        expected_kind: ToastKind = ToastKind.SUCCESS,
        timeout_ms: Optional[int] = None,
    ) -> ToastMessage:
        """
        Capture the next visible toast and verify it.

        Args:
            expected_substring: Text the toast must contain (case-insensitive)
            expected_kind: SUCCESS also requires a success-style class
            timeout_ms: How long the toast may take to appear

        Returns:
            The captured ToastMessage

        Raises:
            ToastTimeoutError: no toast was visible in time, or it vanished
                before it was read
            ToastMismatchError: wrong text or wrong type; never retried
        """
        timeout = self.timeout_ms if timeout_ms is None else timeout_ms
        toast = self.page.locator(self.container_selector).first

        try:
            await toast.wait_for(state="visible", timeout=timeout)
        except PlaywrightError as e:
            raise ToastTimeoutError(
                f"No toast appeared within {timeout}ms (expected text containing "
                f"'{expected_substring}')",
                expected_text=expected_substring,
                timeout_ms=timeout,
            ) from e

        # One round trip; the toast may be gone on the next call
        try:
            raw_text, class_attr = await toast.evaluate(READ_TOAST_JS, timeout=TOAST_READ_TIMEOUT_MS)
        except PlaywrightError as e:
            raise ToastTimeoutError(
                f"Toast disappeared before it could be read (expected text containing "
                f"'{expected_substring}')",
                expected_text=expected_substring,
                timeout_ms=timeout,
            ) from e
        text = (raw_text or "").strip()
        message = ToastMessage(text=text, kind=classify_toast(class_attr))
        logger.info(f"Toast captured ({message.kind.value}): {text!r}")

        if not message.contains(expected_substring):
            raise ToastMismatchError(
                f"Toast text {text!r} does not contain {expected_substring!r}",
                expected_text=expected_substring,
                actual_text=text,
                expected_kind=expected_kind.value,
                actual_classes=class_attr,
            )

        if expected_kind is ToastKind.SUCCESS and message.kind is not ToastKind.SUCCESS:
            raise ToastMismatchError(
                f"Toast {text!r} is not a success toast (classes: {class_attr!r})",
                expected_text=expected_substring,
                actual_text=text,
                expected_kind=expected_kind.value,
                actual_classes=class_attr,
            )

        return message
