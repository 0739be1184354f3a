"""
Utilities module - Common utility functions.
"""

from lightning_e2e.utils.logging import setup_logging

__all__ = [
    "setup_logging",
]
