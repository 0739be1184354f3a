"""
Settings - Pydantic models for type-safe configuration.

All timeouts are in milliseconds. The defaults below are the documented
fallback constants; nothing else is invented when a value is missing.

Example:
    >>> from lightning_e2e.config import load_config
    >>> settings = load_config()  # Loads from .env, yaml, env vars and defaults
    >>> settings.timeouts.toast_ms
    15000
"""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from lightning_e2e.exceptions.auth import AuthenticationError


DEFAULT_LOGIN_URL = "https://login.salesforce.com"


class SalesforceSettings(BaseModel):
    """
    Target org and credentials.
    
    Attributes:
        base_url: Lightning base URL of the org (e.g. https://x.lightning.force.com)
        login_url: Classic login form URL
        username: Login username
        password: Login password
    """
    base_url: Optional[str] = None
    login_url: str = DEFAULT_LOGIN_URL
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    
    def require_credentials(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
    ) -> tuple[str, str]:
        """
        Return (username, password) or raise if either is missing.
        
        Explicit arguments win; each falls back to its configured value
        on its own.
        
        Raises:
            AuthenticationError: naming every missing key
        """
        username = username or self.username
        if not password and self.password is not None:
            password = self.password.get_secret_value()
        missing = []
        if not username:
            missing.append("salesforce.username")
        if not password:
            missing.append("salesforce.password")
        if missing:
            raise AuthenticationError(
                "Salesforce credentials are not configured. Set SF_USERNAME and "
                "SF_PASSWORD (or LIGHTNING_E2E__SALESFORCE__USERNAME/PASSWORD).",
                missing_keys=missing,
            )
        return username, password
    
    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and self.password is not None and bool(self.password.get_secret_value())


class TimeoutSettings(BaseModel):
    """
    Per-class timeouts, in milliseconds.
    
    Attributes:
        page_load_ms: Navigation and post-save record view wait
        toast_ms: How long a toast may take to appear
        modal_ms: Dropdowns, listboxes and modals
        spinner_ms: Loading indicator wait
        probe_ms: Visibility probe per selector candidate
        interstitial_probe_ms: Visibility probe per interstitial prompt
        redirect_ms: Post-login redirect wait (used for both phases)
        settle_ms: Fixed settle delay after spinners clear
        poll_interval_ms: Poll interval for wait conditions
    """
    page_load_ms: int = Field(default=60000, ge=1000, le=600000)
    toast_ms: int = Field(default=15000, ge=100, le=120000)
    modal_ms: int = Field(default=10000, ge=100, le=120000)
    spinner_ms: int = Field(default=30000, ge=100, le=300000)
    probe_ms: int = Field(default=5000, ge=0, le=60000)
    interstitial_probe_ms: int = Field(default=3000, ge=0, le=60000)
    redirect_ms: int = Field(default=30000, ge=100, le=300000)
    settle_ms: int = Field(default=1000, ge=0, le=10000)
    poll_interval_ms: int = Field(default=100, ge=10, le=5000)


class BrowserSettings(BaseModel):
    """
    Browser launch and context settings.
    
    Attributes:
        headless: Run browser in headless mode
        browser_type: Playwright browser engine
        viewport_width: Viewport width in pixels
        viewport_height: Viewport height in pixels
        navigation_timeout_ms: Playwright default navigation timeout
        action_timeout_ms: Playwright default action timeout
        ignore_https_errors: Accept self-signed sandbox certificates
        slow_mo: Slow down operations by this amount (ms), for debugging
        launch_args: Extra Chromium command line switches
    """
    headless: bool = True
    browser_type: Literal["chromium", "firefox", "webkit"] = "chromium"
    viewport_width: int = Field(default=1920, ge=320, le=3840)
    viewport_height: int = Field(default=1080, ge=240, le=2160)
    navigation_timeout_ms: int = Field(default=60000, ge=1000, le=600000)
    action_timeout_ms: int = Field(default=30000, ge=1000, le=300000)
    ignore_https_errors: bool = True
    slow_mo: int = Field(default=0, ge=0, le=5000)
    launch_args: List[str] = Field(
        default_factory=lambda: ["--disable-blink-features=AutomationControlled"]
    )


class ReportingSettings(BaseModel):
    """
    Run artifacts.
    
    Attributes:
        output_dir: Base directory for screenshots
        screenshot_on_failure: Capture a full-page screenshot when a CLI run fails
    """
    output_dir: str = "./reports"
    screenshot_on_failure: bool = True


class LoggingSettings(BaseModel):
    """
    Logging configuration.
    
    Attributes:
        level: Log level
        file: Log file path (None for console only)
    """
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file: Optional[str] = None


class Settings(BaseSettings):
    """
    Root settings container - single source of truth for all configuration.
    
    Example:
        >>> settings = Settings()  # Load from LIGHTNING_E2E__* env vars
        >>> settings = Settings(timeouts=TimeoutSettings(toast_ms=5000))
    """
    
    model_config = SettingsConfigDict(
        env_prefix="LIGHTNING_E2E__",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )
    
    salesforce: SalesforceSettings = Field(default_factory=SalesforceSettings)
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    debug: bool = False
    
    def merge_with(self, overrides: dict) -> "Settings":
        """
        Create a new Settings instance with overrides applied.
        
        Args:
            overrides: Nested dictionary of values to override
            
        Returns:
            New Settings instance with overrides applied
        """
        current = self.model_dump()
        return Settings(**deep_merge(current, overrides))


def deep_merge(base: dict, updates: dict) -> dict:
    """Recursively merge ``updates`` into ``base`` (in place) and return it."""
    for key, value in updates.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
