"""
Opportunity Page - Create Opportunities and check their detail view.
"""

from typing import TYPE_CHECKING
import logging

from lightning_e2e.engine.toolkit import option_target
from lightning_e2e.pages.selectors import OPPORTUNITY, record_heading, stage_marker

if TYPE_CHECKING:
    from lightning_e2e.engine.toolkit import LightningToolkit, SaveConfirmation
    from lightning_e2e.testdata import OpportunityData

logger = logging.getLogger(__name__)


class OpportunityPage:
    """Opportunity list view and record form."""
    
    def __init__(self, toolkit: "LightningToolkit"):
        self.kit = toolkit
    
    async def open_new_form(self) -> None:
        await self.kit.navigate_to(OPPORTUNITY.TAB_URL_SEGMENT)
        await self.kit.click_new(OPPORTUNITY.NEW_BTN)
    
    async def select_account(self, account_name: str) -> None:
        """Type into the account lookup and pick the matching suggestion."""
        await self.kit.fill_field(OPPORTUNITY.ACCOUNT_NAME, account_name)
        option = await self.kit.resolver.resolve(
            option_target(account_name),
            probe_timeout_ms=self.kit.settings.timeouts.modal_ms,
        )
        await option.locator.click()
        await self.kit.wait_for_spinners()
    
    async def fill_form(self, opportunity: "OpportunityData") -> None:
        await self.kit.fill_field(OPPORTUNITY.OPP_NAME, opportunity.name)
        await self.kit.fill_field(OPPORTUNITY.CLOSE_DATE, opportunity.close_date)
        await self.kit.select_picklist(OPPORTUNITY.STAGE, opportunity.stage)
        if opportunity.amount:
            await self.kit.fill_field(OPPORTUNITY.AMOUNT, opportunity.amount)
        if opportunity.account_name:
            await self.select_account(opportunity.account_name)
    
    async def create_opportunity(self, opportunity: "OpportunityData") -> "SaveConfirmation":
        """
        Create an Opportunity through the UI.
        
        Raises:
            NavigationTimeoutError: the form did not save
        """
        await self.open_new_form()
        await self.fill_form(opportunity)
        confirmation = await self.kit.save_record(OPPORTUNITY.SAVE_BTN)
        logger.info(f"Opportunity created: {opportunity.name} ({confirmation.record_id})")
        return confirmation
    
    async def verify_opportunity_detail(self, opportunity: "OpportunityData") -> None:
        """
        Check the detail page shows the new Opportunity and its stage.
        
        Raises:
            NotFoundError: name or stage not rendered
        """
        timeouts = self.kit.settings.timeouts
        await self.kit.wait_for_page_ready()
        await self.kit.resolver.resolve(record_heading(opportunity.name), probe_timeout_ms=timeouts.toast_ms)
        await self.kit.resolver.resolve(stage_marker(opportunity.stage), probe_timeout_ms=timeouts.modal_ms)
