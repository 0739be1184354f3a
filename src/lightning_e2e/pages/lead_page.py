"""
Lead Page - Create Leads and check their detail view.
"""

from typing import TYPE_CHECKING
import logging

from lightning_e2e.pages.selectors import LEAD, detail_text, record_heading

if TYPE_CHECKING:
    from lightning_e2e.engine.toolkit import LightningToolkit, SaveConfirmation
    from lightning_e2e.testdata import LeadData

logger = logging.getLogger(__name__)


class LeadPage:
    """
    Lead list view and record form.
    
    Example:
        >>> confirmation = await LeadPage(toolkit).create_lead(generate_lead_data())
        >>> confirmation.record_id
        '00Q5g00000AbCde'
    """
    
    def __init__(self, toolkit: "LightningToolkit"):
        self.kit = toolkit
    
    async def open_new_form(self) -> None:
        await self.kit.navigate_to(LEAD.TAB_URL_SEGMENT)
        await self.kit.click_new(LEAD.NEW_BTN)
    
    async def fill_form(self, lead: "LeadData") -> None:
        """Populate every non-empty field of ``lead``."""
        if lead.salutation:
            await self.kit.select_picklist(LEAD.SALUTATION, lead.salutation)
        for target, value in (
            (LEAD.FIRST_NAME, lead.first_name),
            (LEAD.LAST_NAME, lead.last_name),
            (LEAD.COMPANY, lead.company),
            (LEAD.TITLE, lead.title),
            (LEAD.EMAIL, lead.email),
            (LEAD.PHONE, lead.phone),
        ):
            if value:
                await self.kit.fill_field(target, value)
        if lead.lead_status:
            await self.kit.select_picklist(LEAD.LEAD_STATUS, lead.lead_status)
    
    async def create_lead(self, lead: "LeadData") -> "SaveConfirmation":
        """
        Create a Lead through the UI.
        
        Raises:
            NavigationTimeoutError: the form did not save (e.g. a required
                field was missing)
        """
        await self.open_new_form()
        await self.fill_form(lead)
        confirmation = await self.kit.save_record(LEAD.SAVE_BTN)
        logger.info(f"Lead created: {lead.full_name} ({confirmation.record_id})")
        return confirmation
    
    async def verify_lead_detail(self, lead: "LeadData") -> None:
        """
        Check the detail page shows the new Lead.
        
        Raises:
            NotFoundError: name or company not rendered
        """
        timeouts = self.kit.settings.timeouts
        await self.kit.wait_for_page_ready()
        await self.kit.resolver.resolve(record_heading(lead.last_name), probe_timeout_ms=timeouts.toast_ms)
        await self.kit.resolver.resolve(detail_text(lead.company), probe_timeout_ms=timeouts.modal_ms)
