"""
Centralised Salesforce Lightning selectors.

Lightning's DOM is deeply nested with dynamic attributes and shifts between
releases. Each logical element lists its known variants, most reliable
first; updating a release means editing this file only.
"""

import re

from lightning_e2e.engine.selectors import InteractionTarget, RoleQuery

T = InteractionTarget.parse


class LOGIN:
    """Classic login form at login.salesforce.com."""
    USERNAME = T("#username", label="username")
    PASSWORD = T("#password", label="password")
    LOGIN_BTN = T("#Login", fallback=RoleQuery("button", "log in"), label="login button")
    ERROR = T("#error", label="login error")


class LIGHTNING:
    """Lightning global UI."""
    APP_LAUNCHER_BTN = T("button.slds-icon-waffle_container, div.appLauncher button", label="app launcher")
    GLOBAL_SEARCH = T("button[aria-label='Search'], input[placeholder='Search...']", label="global search")
    NAV_BAR = T("one-app-nav-bar, nav[role='navigation']", label="navigation bar")
    MODAL = T("div.slds-modal__container, section[role='dialog']", label="modal")
    MODAL_FOOTER_SAVE = T(
        "button[name='SaveEdit'], footer button.slds-button_brand, button.slds-button_brand",
        label="modal save",
    )


_NEW_BTN = T("a[title='New'], button[name='New'], div[title='New']", label="New button")


class LEAD:
    """Lead list view and record form."""
    TAB_URL_SEGMENT = "/lightning/o/Lead/list"
    NEW_BTN = _NEW_BTN

    SALUTATION = T("button[aria-label='Salutation'], a[aria-label='Salutation']", label="Salutation")
    FIRST_NAME = T("input[name='firstName']", label="First Name")
    LAST_NAME = T("input[name='lastName']", label="Last Name")
    COMPANY = T("input[name='Company'], input[placeholder='Company']", label="Company")
    TITLE = T("input[name='Title']", label="Title")
    EMAIL = T("input[name='Email']", label="Email")
    PHONE = T("input[name='Phone']", label="Phone")
    LEAD_STATUS = T("button[aria-label='Lead Status'], a[aria-label='Lead Status']", label="Lead Status")
    SAVE_BTN = T("button[name='SaveEdit']", label="Save")


class OPPORTUNITY:
    """Opportunity list view and record form."""
    TAB_URL_SEGMENT = "/lightning/o/Opportunity/list"
    NEW_BTN = _NEW_BTN

    OPP_NAME = T("input[name='Name']", label="Opportunity Name")
    CLOSE_DATE = T("input[name='CloseDate']", label="Close Date")
    STAGE = T("button[aria-label='Stage'], a[aria-label='Stage']", label="Stage")
    AMOUNT = T("input[name='Amount']", label="Amount")
    ACCOUNT_NAME = T("input[placeholder='Search Accounts...']", label="Account Name")
    SAVE_BTN = T("button[name='SaveEdit']", label="Save")


def detail_text(text: str) -> InteractionTarget:
    """A field value rendered on a record detail page."""
    quoted = text.replace('"', '\\"')
    return InteractionTarget.of(
        f'lightning-formatted-text:has-text("{quoted}")',
        f'span:has-text("{quoted}")',
        label=f"detail value '{text}'",
    )


def record_heading(name: str) -> InteractionTarget:
    """The record name in the detail page header."""
    quoted = name.replace('"', '\\"')
    return InteractionTarget.of(
        f'lightning-formatted-name:has-text("{quoted}")',
        f'h1:has-text("{quoted}")',
        fallback=RoleQuery("heading", re.escape(name)),
        label=f"record heading '{name}'",
    )


def stage_marker(stage: str) -> InteractionTarget:
    """The current stage on the opportunity path or detail."""
    quoted = stage.replace('"', '\\"')
    return InteractionTarget.of(
        f'a[title="{quoted}"]',
        f'span:has-text("{quoted}")',
        label=f"stage '{stage}'",
    )
