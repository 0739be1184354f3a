"""
Live Opportunity creation.
"""

import pytest

from lightning_e2e.testdata import generate_opportunity_data

pytestmark = pytest.mark.live


class TestLiveOpportunityCreation:
    
    @pytest.mark.asyncio
    async def test_create_opportunity(self, opportunity_page, toolkit):
        opportunity = generate_opportunity_data()
        
        confirmation = await opportunity_page.create_opportunity(opportunity)
        await toolkit.screenshot("opportunity-created-detail")
        
        assert confirmation.record_id
        await opportunity_page.verify_opportunity_detail(opportunity)
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("stage", ["Qualification", "Needs Analysis"])
    async def test_create_in_stage(self, opportunity_page, stage):
        opportunity = generate_opportunity_data(stage=stage)
        
        confirmation = await opportunity_page.create_opportunity(opportunity)
        
        assert confirmation.confirmed
