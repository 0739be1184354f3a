"""
Lightning E2E - Resilient end-to-end checks for Salesforce Lightning.

Lightning renders the same element with different markup across releases,
blocks interaction behind spinners, flashes toasts for a few seconds and
sometimes inserts screens after login. This package wraps Playwright so
record-creation scenarios survive all of that.

Example:
    >>> from lightning_e2e import LightningToolkit, load_config
    >>> kit = LightningToolkit(page, load_config())
    >>> await LoginPage(kit).login()
    >>> confirmation = await LeadPage(kit).create_lead(generate_lead_data())
"""

__version__ = "0.1.0"

# Public API exports
from lightning_e2e.config import Settings, load_config
from lightning_e2e.engine.toolkit import LightningToolkit, SaveConfirmation
from lightning_e2e.engine.selectors import InteractionTarget, RoleQuery
from lightning_e2e.pages import LoginPage, LeadPage, OpportunityPage

__all__ = [
    "Settings",
    "load_config",
    "LightningToolkit",
    "SaveConfirmation",
    "InteractionTarget",
    "RoleQuery",
    "LoginPage",
    "LeadPage",
    "OpportunityPage",
    "__version__",
]
