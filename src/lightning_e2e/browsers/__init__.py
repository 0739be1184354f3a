"""
Browsers module - Browser automation implementations.
"""

from lightning_e2e.browsers.playwright_browser import PlaywrightBrowser

__all__ = [
    "PlaywrightBrowser",
]
