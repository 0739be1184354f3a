"""
Reporting module - Run artifacts.
"""

from lightning_e2e.reporting.screenshot_manager import Screenshot, ScreenshotManager

__all__ = [
    "Screenshot",
    "ScreenshotManager",
]
