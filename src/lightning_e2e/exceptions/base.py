"""
Base exceptions for Lightning E2E.
"""


class LightningE2EError(Exception):
    """
    Base exception for all Lightning E2E errors.
    
    All custom exceptions inherit from this class, so a scenario can catch
    any failure raised by the interaction layer in one place.
    
    Attributes:
        message: Human-readable error message
        details: Diagnostic context (candidates, expected vs. actual, timeouts)
    """
    
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(LightningE2EError):
    """
    Error in configuration.
    
    Raised when settings, environment variables or config files are
    missing a value the layer cannot work without (e.g. the base URL).
    """
    pass
