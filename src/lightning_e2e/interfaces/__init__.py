"""
Interfaces module - Abstract contracts.
"""

from lightning_e2e.interfaces.browser import IBrowser, BrowserType

__all__ = [
    "IBrowser",
    "BrowserType",
]
