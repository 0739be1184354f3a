"""
Authentication exceptions.
"""

from typing import List, Optional

from lightning_e2e.exceptions.base import LightningE2EError


class AuthenticationError(LightningE2EError):
    """
    Authentication did not complete.
    
    Raised when mandatory credentials are missing, or when the login flow
    never reached the authenticated area, even after handling interstitials.
    
    Attributes:
        missing_keys: Configuration keys that were absent, if any
        last_url: URL observed when the login flow gave up
    """
    
    def __init__(
        self,
        message: str,
        missing_keys: Optional[List[str]] = None,
        last_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ):
        details = {}
        if missing_keys:
            details["missing_keys"] = missing_keys
        if last_url is not None:
            details["last_url"] = last_url
        if timeout_ms is not None:
            details["timeout_ms"] = timeout_ms
        super().__init__(message, details)
        self.missing_keys = missing_keys or []
        self.last_url = last_url
        self.timeout_ms = timeout_ms
