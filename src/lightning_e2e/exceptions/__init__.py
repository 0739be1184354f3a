"""
Exceptions module - Custom exception hierarchy.

Every failure the interaction layer reports reaches the calling scenario as
one of these typed errors; nothing is downgraded to a silent partial success
except the documented best-effort spinner wait.
"""

from lightning_e2e.exceptions.base import (
    LightningE2EError,
    ConfigurationError,
)
from lightning_e2e.exceptions.browser import (
    BrowserError,
    BrowserLaunchError,
    BrowserConnectionError,
    PageError,
    NotFoundError,
    NavigationError,
    NavigationTimeoutError,
    WaitTimeoutError,
    SpinnerTimeoutError,
)
from lightning_e2e.exceptions.toast import (
    ToastError,
    ToastTimeoutError,
    ToastMismatchError,
)
from lightning_e2e.exceptions.auth import AuthenticationError

__all__ = [
    # Base exceptions
    "LightningE2EError",
    "ConfigurationError",
    # Browser exceptions
    "BrowserError",
    "BrowserLaunchError",
    "BrowserConnectionError",
    "PageError",
    "NotFoundError",
    "NavigationError",
    "NavigationTimeoutError",
    "WaitTimeoutError",
    "SpinnerTimeoutError",
    # Toast exceptions
    "ToastError",
    "ToastTimeoutError",
    "ToastMismatchError",
    # Authentication
    "AuthenticationError",
]
