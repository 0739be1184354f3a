"""
Lightning Toolkit - The interaction capability set shared by page objects.

Page objects hold a toolkit instead of inheriting from a base page. Every
click and fill waits for spinners first and then goes through the selector
resolver; saves are confirmed by a toast or by navigation to the record.
"""

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING
import logging

from playwright.async_api import Error as PlaywrightError

from lightning_e2e.engine.record_id import NavigationOutcome, RecordIdExtractor
from lightning_e2e.engine.selectors import InteractionTarget, RoleQuery
from lightning_e2e.engine.target_resolver import ResolvedTarget, SelectorResolver
from lightning_e2e.engine.toast_observer import ToastKind, ToastMessage, ToastObserver
from lightning_e2e.engine.wait_engine import WaitEngine
from lightning_e2e.exceptions.base import ConfigurationError
from lightning_e2e.exceptions.browser import NavigationError, NotFoundError
from lightning_e2e.exceptions.toast import ToastTimeoutError

if TYPE_CHECKING:
    from playwright.async_api import Page
    from lightning_e2e.config.settings import Settings
    from lightning_e2e.reporting.screenshot_manager import Screenshot, ScreenshotManager

logger = logging.getLogger(__name__)


NEW_BUTTON_FALLBACK = RoleQuery("button", "new")
SAVE_BUTTON_FALLBACK = RoleQuery("button", "save")


def option_target(option_text: str) -> InteractionTarget:
    """Target for a picklist option by its accessible name."""
    escaped = option_text.replace('"', '\\"')
    return InteractionTarget.of(f'role=option[name="{escaped}"]', label=f"option '{option_text}'")


@dataclass
class SaveConfirmation:
    """
    Evidence that a save succeeded.

    Either a success toast or a record id is enough.
    """
    toast: Optional[ToastMessage]
    navigation: NavigationOutcome

    @property
    def record_id(self) -> Optional[str]:
        return self.navigation.record_id

    @property
    def confirmed(self) -> bool:
        return self.toast is not None or bool(self.record_id)


class LightningToolkit:
    """
    Resilient interactions against one Lightning page.

    Example:
        >>> kit = LightningToolkit(page, settings)
        >>> await kit.navigate_to("/lightning/o/Lead/list")
        >>> await kit.click_new(LEAD.NEW_BTN)
        >>> await kit.fill_field(LEAD.LAST_NAME, "Smith")
        >>> confirmation = await kit.save_record(LEAD.SAVE_BTN)
    """

    def __init__(
        self,
        page: "Page",
        settings: "Settings",
        screenshots: Optional["ScreenshotManager"] = None,
    ):
        self.page = page
        self.settings = settings
        self.screenshots = screenshots
        timeouts = settings.timeouts
        self.waits = WaitEngine(
            page,
            spinner_timeout_ms=timeouts.spinner_ms,
            settle_ms=timeouts.settle_ms,
            poll_interval_ms=timeouts.poll_interval_ms,
            load_timeout_ms=timeouts.page_load_ms,
        )
        self.resolver = SelectorResolver(page, probe_timeout_ms=timeouts.probe_ms)
        self.toasts = ToastObserver(page, timeout_ms=timeouts.toast_ms)
        self.records = RecordIdExtractor(page, timeout_ms=timeouts.page_load_ms)

    # ------------------------------------------------------------------
    # Synchronization
    # ------------------------------------------------------------------

    async def wait_for_page_ready(self) -> None:
        await self.waits.wait_for_page_ready()

    async def wait_for_spinners(self, timeout_ms: Optional[int] = None) -> bool:
        return await self.waits.wait_for_spinners(timeout_ms)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def navigate_to(self, url_segment: str) -> None:
        """
        Open a Lightning path directly.

        More reliable than clicking through the App Launcher.

        Raises:
            ConfigurationError: no base URL configured
            NavigationError: the page failed to load
        """
        base_url = self.settings.salesforce.base_url
        if not base_url:
            raise ConfigurationError(
                "salesforce.base_url is not configured (set SF_BASE_URL)",
                {"url_segment": url_segment},
            )
        url = f"{base_url.rstrip('/')}{url_segment}"
        logger.info(f"Navigating to {url}")
        try:
            await self.page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.settings.timeouts.page_load_ms,
            )
        except PlaywrightError as e:
            raise NavigationError(f"Failed to navigate to {url}: {e}", url=url) from e
        await self.waits.wait_for_page_ready()

    # ------------------------------------------------------------------
    # Interactions
    # ------------------------------------------------------------------

    async def resolve(self, target: InteractionTarget, probe_timeout_ms: Optional[int] = None) -> ResolvedTarget:
        """Wait for spinners, then resolve ``target``."""
        await self.waits.wait_for_spinners()
        return await self.resolver.resolve(target, probe_timeout_ms)

    async def click(self, target: InteractionTarget) -> ResolvedTarget:
        resolved = await self.resolve(target)
        await resolved.locator.click()
        await self.waits.wait_for_spinners()
        return resolved

    async def click_new(self, target: InteractionTarget) -> ResolvedTarget:
        """Click "New" on a list view; Lightning is inconsistent about its markup."""
        await self.waits.wait_for_page_ready()
        if target.fallback is None:
            target = target.with_fallback(NEW_BUTTON_FALLBACK)
        return await self.click(target)

    async def click_save(self, target: InteractionTarget) -> ResolvedTarget:
        if target.fallback is None:
            target = target.with_fallback(SAVE_BUTTON_FALLBACK)
        return await self.click(target)

    async def fill_field(self, target: InteractionTarget, value: str) -> ResolvedTarget:
        """
        Fill a Lightning input.

        Inputs sit inside layers of wrappers; focus the inner input and
        clear it before typing.
        """
        resolved = await self.resolve(target)
        field = resolved.locator
        await field.click()
        await field.fill("")
        await field.fill(value)
        logger.debug(f"Filled '{target.describe()}'")
        return resolved

    async def select_picklist(self, trigger: InteractionTarget, option_text: str) -> ResolvedTarget:
        """
        Pick a value from a Lightning combobox.

        Click the trigger, wait for the listbox to render, click the option.
        """
        await self.click(trigger)
        option = await self.resolver.resolve(
            option_target(option_text), probe_timeout_ms=self.settings.timeouts.modal_ms
        )
        await option.locator.click()
        await self.waits.wait_for_spinners()
        return option

    async def is_visible(self, target: InteractionTarget, probe_timeout_ms: Optional[int] = None) -> bool:
        """Resolve ``target`` and report whether anything matched."""
        try:
            await self.resolver.resolve(target, probe_timeout_ms)
            return True
        except NotFoundError:
            return False

    # ------------------------------------------------------------------
    # Confirmation
    # ------------------------------------------------------------------

    async def assert_toast(
        self,
        expected_text: str,
        kind: ToastKind = ToastKind.SUCCESS,
        timeout_ms: Optional[int] = None,
    ) -> ToastMessage:
        return await self.toasts.capture_toast(expected_text, kind, timeout_ms)

    async def get_record_id(self) -> Optional[str]:
        return await self.records.extract_record_id()

    async def save_record(
        self,
        save_target: InteractionTarget,
        expected_toast: str = "created",
    ) -> SaveConfirmation:
        """
        Click Save and confirm the record was created.

        The toast is looked for first because it is short-lived. A missing
        toast is tolerated when the page reaches the record view; a toast
        with the wrong text or type fails immediately.

        Raises:
            ToastMismatchError: a toast appeared with unexpected content
            NavigationTimeoutError: the form never navigated to the record
            ToastTimeoutError: navigated, but neither toast nor id confirmed it
        """
        await self.click_save(save_target)

        toast: Optional[ToastMessage] = None
        toast_error: Optional[ToastTimeoutError] = None
        try:
            toast = await self.toasts.capture_toast(expected_toast, ToastKind.SUCCESS)
        except ToastTimeoutError as e:
            logger.info(f"No toast seen after save ({e.timeout_ms}ms); checking navigation")
            toast_error = e

        navigation = await self.records.wait_for_record_view()
        confirmation = SaveConfirmation(toast=toast, navigation=navigation)
        if not confirmation.confirmed:
            raise toast_error
        return confirmation

    # ------------------------------------------------------------------
    # Artifacts
    # ------------------------------------------------------------------

    async def screenshot(self, name: str) -> Optional["Screenshot"]:
        """Capture a named full-page screenshot, if a manager is attached."""
        if self.screenshots is None:
            logger.debug(f"Screenshot '{name}' skipped: no screenshot manager")
            return None
        return await self.screenshots.capture(self.page, name)
