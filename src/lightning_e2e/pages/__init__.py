"""
Pages module - Page objects composed with a LightningToolkit.
"""

from lightning_e2e.pages.login_page import LoginPage
from lightning_e2e.pages.lead_page import LeadPage
from lightning_e2e.pages.opportunity_page import OpportunityPage

__all__ = [
    "LoginPage",
    "LeadPage",
    "OpportunityPage",
]
