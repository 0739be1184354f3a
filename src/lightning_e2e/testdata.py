"""
Test data factory.

Every scenario creates UNIQUE records using a timestamp suffix, which avoids
name collisions in the shared org and makes it easy to tell which run
created which records during cleanup.
"""

from dataclasses import dataclass, replace
from datetime import date, timedelta
import random
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits)) or "0"


def uid() -> str:
    """Millisecond timestamp in base 36 plus four random characters."""
    suffix = "".join(random.choices(_BASE36, k=4))
    return _to_base36(int(time.time() * 1000)) + suffix


@dataclass(frozen=True)
class LeadData:
    """Field values for a new Lead. Empty strings are left untouched on the form."""
    last_name: str
    company: str
    salutation: str = ""
    first_name: str = ""
    title: str = ""
    email: str = ""
    phone: str = ""
    lead_status: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


@dataclass(frozen=True)
class OpportunityData:
    """Field values for a new Opportunity."""
    name: str
    close_date: str
    stage: str
    amount: str = ""
    account_name: str = ""


def generate_lead_data(**overrides: str) -> LeadData:
    """
    A Lead with every standard field populated.

    Example:
        >>> minimal = generate_lead_data(first_name="", title="", email="", phone="")
    """
    run_id = uid()
    lead = LeadData(
        salutation="Mr.",
        first_name="AutoTest",
        last_name=f"Lead_{run_id}",
        company=f"TestCorp_{run_id}",
        title="QA Engineer",
        email=f"lead_{run_id}@testautomation.dev",
        phone="5551234567",
        lead_status="Open - Not Contacted",
    )
    return replace(lead, **overrides)


def format_close_date(value: date) -> str:
    """Lightning's en_US date input format."""
    return value.strftime("%m/%d/%Y")


def generate_opportunity_data(**overrides: str) -> OpportunityData:
    """An Opportunity closing 30 days from today."""
    opportunity = OpportunityData(
        name=f"AutoTest_Opp_{uid()}",
        close_date=format_close_date(date.today() + timedelta(days=30)),
        stage="Prospecting",
        amount="25000",
    )
    return replace(opportunity, **overrides)
