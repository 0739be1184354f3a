"""
Toast notification exceptions.
"""

from typing import Optional

from lightning_e2e.exceptions.browser import PageError


class ToastError(PageError):
    """Base exception for toast-related errors."""
    pass


class ToastTimeoutError(ToastError):
    """
    No toast became visible within the timeout.
    
    Also raised when the toast already disappeared before observation
    started; toasts cannot be replayed.
    """
    
    def __init__(self, message: str, expected_text: str, timeout_ms: int):
        super().__init__(message, {"expected_text": expected_text, "timeout_ms": timeout_ms})
        self.expected_text = expected_text
        self.timeout_ms = timeout_ms


class ToastMismatchError(ToastError):
    """
    A toast appeared but its text or type was not the expected one.
    
    Attributes:
        expected_text: Substring that should have been present
        actual_text: Full text read from the toast
        expected_kind: Expected classification
        actual_classes: Class attribute of the toast container
    """
    
    def __init__(
        self,
        message: str,
        expected_text: str,
        actual_text: str,
        expected_kind: str,
        actual_classes: Optional[str] = None,
    ):
        super().__init__(
            message,
            {
                "expected_text": expected_text,
                "actual_text": actual_text,
                "expected_kind": expected_kind,
                "actual_classes": actual_classes,
            },
        )
        self.expected_text = expected_text
        self.actual_text = actual_text
        self.expected_kind = expected_kind
        self.actual_classes = actual_classes
