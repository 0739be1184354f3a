"""
Pytest configuration and fixtures.

The unit tests drive the interaction layer against FakePage, an in-memory
stand-in for a Playwright page. Elements are registered by the exact
selector string the code under test will ask for.
"""

import os
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

pytest_plugins = ["lightning_e2e.pytest_plugin"]


# =============================================================================
# FAKE PLAYWRIGHT PAGE
# =============================================================================

class FakeElement:
    """State of one element on the fake page."""
    
    def __init__(
        self,
        visible: bool = True,
        text: str = "",
        classes: str = "",
        on_click: Optional[Callable[["FakePage"], None]] = None,
        error: Optional[str] = None,
        click_error: Optional[str] = None,
        read_error: Optional[str] = None,
    ):
        self.visible = visible
        self.text = text
        self.classes = classes
        self.on_click = on_click
        self.error = error
        self.click_error = click_error
        self.read_error = read_error
        self.value: Optional[str] = None
        self.clicks = 0


class FakeLocator:
    """Locator over a single selector key; ``.first`` is itself."""
    
    def __init__(self, page: "FakePage", key: str):
        self._page = page
        self.key = key
    
    @property
    def first(self) -> "FakeLocator":
        return self
    
    @property
    def _element(self) -> Optional[FakeElement]:
        return self._page.elements.get(self.key)
    
    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self._page.log.append(("probe", self.key))
        element = self._element
        if element is not None and element.error:
            raise PlaywrightError(element.error)
        if element is not None and element.visible:
            return
        raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.key}")
    
    async def click(self, **options: Any) -> None:
        self._page.log.append(("click", self.key))
        element = self._element
        if element.click_error:
            raise PlaywrightError(element.click_error)
        element.clicks += 1
        if element.on_click:
            element.on_click(self._page)
    
    async def fill(self, value: str, **options: Any) -> None:
        self._page.log.append(("fill", self.key, value))
        self._element.value = value
    
    async def evaluate(self, expression: str, arg: Any = None, timeout: Optional[float] = None) -> Any:
        self._page.log.append(("read", self.key, timeout))
        element = self._element
        if element.read_error:
            raise PlaywrightTimeoutError(element.read_error)
        return [element.text, element.classes]


class FakePage:
    """
    Minimal async Playwright page.
    
    Attributes:
        url: Current URL; change it to simulate navigation
        elements: Selector key -> FakeElement
        spinner_states: Successive results of the spinner check; the last
            value repeats. An exception instance is raised instead.
        log: Every probe, click, fill and wait, in order
    """
    
    def __init__(self, url: str = "https://login.salesforce.com/"):
        self.url = url
        self.elements: Dict[str, FakeElement] = {}
        self.spinner_states: List[bool] = [True]
        self.log: List[tuple] = []
        self.goto_error: Optional[str] = None
    
    def add(self, key: str, **kwargs: Any) -> FakeElement:
        element = FakeElement(**kwargs)
        self.elements[key] = element
        return element
    
    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)
    
    def get_by_role(self, role: str, name: Any = None) -> FakeLocator:
        pattern = name.pattern if isinstance(name, re.Pattern) else name
        return FakeLocator(self, f"role={role}[name=/{pattern}/i]")
    
    def probes(self) -> List[str]:
        return [entry[1] for entry in self.log if entry[0] == "probe"]
    
    def events(self, kind: str) -> List[tuple]:
        return [entry for entry in self.log if entry[0] == kind]
    
    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        self.log.append(("evaluate",))
        if len(self.spinner_states) > 1:
            state = self.spinner_states.pop(0)
        else:
            state = self.spinner_states[0]
        if isinstance(state, Exception):
            raise state
        return state
    
    async def goto(self, url: str, **options: Any) -> None:
        self.log.append(("goto", url))
        if self.goto_error:
            raise PlaywrightError(self.goto_error)
        self.url = url
    
    async def wait_for_load_state(self, state: str = "load", timeout: Optional[float] = None) -> None:
        self.log.append(("load_state", state, timeout))
    
    async def wait_for_timeout(self, timeout: float) -> None:
        self.log.append(("settle", timeout))
    
    async def wait_for_url(self, url: "re.Pattern[str]", timeout: Optional[float] = None) -> None:
        self.log.append(("wait_for_url", url.pattern, timeout))
        if not url.search(self.url):
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for URL {url.pattern}")
    
    async def screenshot(self, path: Optional[Path] = None, full_page: bool = False, **options: Any) -> bytes:
        self.log.append(("screenshot", str(path), full_page))
        data = b"\x89PNG fake"
        if path:
            Path(path).write_bytes(data)
        return data


# =============================================================================
# FIXTURES
# =============================================================================

BASE_URL = "https://acme.lightning.force.com"


@pytest.fixture
def fake_page():
    """An empty fake page on the login form."""
    return FakePage()


@pytest.fixture
def settings(tmp_path):
    """Settings with short timeouts and no settle delay."""
    from lightning_e2e.config import Settings, SalesforceSettings, TimeoutSettings, ReportingSettings
    
    return Settings(
        salesforce=SalesforceSettings(
            base_url=BASE_URL,
            username="qa@acme.test",
            password="s3cret",
        ),
        timeouts=TimeoutSettings(
            page_load_ms=1000,
            toast_ms=500,
            modal_ms=500,
            spinner_ms=200,
            probe_ms=50,
            interstitial_probe_ms=50,
            redirect_ms=500,
            settle_ms=0,
            poll_interval_ms=10,
        ),
        reporting=ReportingSettings(output_dir=str(tmp_path / "reports")),
    )


@pytest.fixture
def kit(fake_page, settings):
    """A toolkit bound to the fake page."""
    from lightning_e2e.engine.toolkit import LightningToolkit
    
    return LightningToolkit(fake_page, settings)


@pytest.fixture
def record_form(fake_page):
    """
    Build a fake create-record form.
    
    ``record_form(LEAD, option_values, saves=True)`` registers the New
    button, the first candidate of every field on ``catalog`` and one
    option per value in ``option_values``. When ``saves`` is True, clicking
    Save shows a success toast and navigates to the record view.
    """
    from lightning_e2e.engine.selectors import InteractionTarget
    
    def build(
        catalog: Any,
        option_values: tuple = (),
        saves: bool = True,
        record_id: str = "00Q5g00000AbCde",
        object_name: str = "Lead",
        toast_text: str = 'Lead "AutoTest" was created.',
    ) -> FakePage:
        for attr in dir(catalog):
            target = getattr(catalog, attr)
            if isinstance(target, InteractionTarget) and attr != "SAVE_BTN":
                fake_page.add(target.candidates[0])
        for value in option_values:
            fake_page.add(f'role=option[name="{value}"]')
        
        def save(page: FakePage) -> None:
            if not saves:
                return
            page.add(
                "div.slds-notify_toast, div.toastContainer",
                text=toast_text,
                classes="slds-notify_toast slds-theme_success",
            )
            page.url = f"{BASE_URL}/lightning/r/{object_name}/{record_id}/view"
        
        fake_page.add(catalog.SAVE_BTN.candidates[0], on_click=save)
        return fake_page
    
    return build


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run from an empty directory with no SF_* or LIGHTNING_E2E__* variables."""
    def ours(name):
        return name.startswith("SF_") or name.startswith("LIGHTNING_E2E__")
    
    original = {name for name in os.environ if ours(name)}
    for name in original:
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    # load_dotenv writes straight into os.environ
    for name in list(os.environ):
        if ours(name) and name not in original:
            del os.environ[name]
