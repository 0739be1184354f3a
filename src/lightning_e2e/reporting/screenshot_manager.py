"""
Screenshot Manager - Named screenshots written to a run-scoped directory.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, TYPE_CHECKING
import logging
import re

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class Screenshot:
    """
    A captured screenshot.
    
    Attributes:
        name: Caller-supplied key
        path: File path to the screenshot
        timestamp: When the screenshot was taken
        is_error: Whether this was taken because something failed
    """
    name: str
    path: Path
    timestamp: datetime
    is_error: bool = False


class ScreenshotManager:
    """
    Capture and keep track of named screenshots for one run.
    
    Example:
        >>> manager = ScreenshotManager(output_dir="./reports", run_id="run_123")
        >>> shot = await manager.capture(page, "lead-created-detail")
        >>> shot.path
        PosixPath('reports/run_123/lead-created-detail.png')
    """
    
    def __init__(self, output_dir: str | Path, run_id: str):
        """
        Args:
            output_dir: Base directory for screenshots
            run_id: Unique run identifier (sub-directory name)
        """
        self.output_dir = Path(output_dir) / run_id
        self.run_id = run_id
        self._screenshots: list[Screenshot] = []
        
        self.output_dir.mkdir(parents=True, exist_ok=True)
    
    def path_for(self, name: str) -> Path:
        """File path for ``name``, made filesystem-safe."""
        safe = _UNSAFE.sub("_", name).strip("_") or "screenshot"
        return self.output_dir / f"{safe}.png"
    
    async def capture(
        self,
        page: "Page",
        name: str,
        full_page: bool = True,
        is_error: bool = False,
    ) -> Screenshot:
        """
        Capture a screenshot keyed by ``name``.
        
        A second capture under the same name overwrites the file.
        """
        path = self.path_for(name)
        await page.screenshot(path=path, full_page=full_page)
        
        screenshot = Screenshot(name=name, path=path, timestamp=datetime.now(), is_error=is_error)
        self._screenshots.append(screenshot)
        
        logger.debug(f"Captured screenshot: {path}")
        return screenshot
    
    async def capture_on_error(self, page: "Page", name: str) -> Optional[Screenshot]:
        """
        Capture a failure screenshot.
        
        Never raises: the original failure is what matters, so a page that
        can no longer be captured is only logged.
        """
        try:
            return await self.capture(page, f"error-{name}", is_error=True)
        except Exception as e:
            logger.warning(f"Could not capture error screenshot '{name}': {e}")
            return None
    
    def get_screenshots(self) -> list[Screenshot]:
        """Get all captured screenshots."""
        return self._screenshots.copy()
    
    def get(self, name: str) -> Optional[Screenshot]:
        """Most recent screenshot captured under ``name``."""
        for screenshot in reversed(self._screenshots):
            if screenshot.name == name:
                return screenshot
        return None
