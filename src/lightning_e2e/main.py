"""
Lightning E2E - CLI Entry Point.

Smoke-runs the record-creation workflows against a real org, outside of
pytest. Useful for checking selectors after a Salesforce release.

Configuration Priority:
    1. CLI arguments (--visible, --config)
    2. SF_* environment variables (SF_BASE_URL, SF_USERNAME, SF_PASSWORD)
    3. Config file (lightning-e2e.yaml)
    4. LIGHTNING_E2E__* environment variables

Usage:
    lightning-e2e login
    lightning-e2e create-lead --visible
    lightning-e2e create-opportunity --stage Qualification --amount 50000
"""

import asyncio
from datetime import datetime
from typing import Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from lightning_e2e import __version__
from lightning_e2e.browsers.playwright_browser import PlaywrightBrowser
from lightning_e2e.config import Settings, load_config
from lightning_e2e.engine.toolkit import LightningToolkit, SaveConfirmation
from lightning_e2e.exceptions import LightningE2EError
from lightning_e2e.pages import LeadPage, LoginPage, OpportunityPage
from lightning_e2e.reporting.screenshot_manager import ScreenshotManager
from lightning_e2e.testdata import generate_lead_data, generate_opportunity_data
from lightning_e2e.utils.logging import setup_logging

T = TypeVar("T")

app = typer.Typer(
    name="lightning-e2e",
    help="Resilient end-to-end checks for Salesforce Lightning",
    add_completion=False,
)

console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"lightning-e2e {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Resilient end-to-end checks for Salesforce Lightning."""


def _load(config: Optional[str], visible: bool, verbose: bool) -> Settings:
    overrides = {}
    if visible:
        overrides["browser"] = {"headless": False}
    if verbose:
        overrides["logging"] = {"level": "DEBUG"}
    try:
        settings = load_config(config_path=config, **overrides)
    except LightningE2EError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    setup_logging(settings.logging.level, settings.logging.file)
    return settings


async def _with_session(
    settings: Settings,
    name: str,
    scenario: Callable[[LightningToolkit], Awaitable[T]],
) -> T:
    """Launch a browser, log in, run ``scenario`` and always clean up."""
    settings.salesforce.require_credentials()
    run_id = datetime.now().strftime("run_%Y%m%d_%H%M%S")
    screenshots = ScreenshotManager(settings.reporting.output_dir, run_id)
    browser = PlaywrightBrowser()
    await browser.launch(settings.browser)
    try:
        page = await browser.new_page()
        kit = LightningToolkit(page, settings, screenshots)
        try:
            await LoginPage(kit).login()
            return await scenario(kit)
        except LightningE2EError:
            if settings.reporting.screenshot_on_failure:
                shot = await screenshots.capture_on_error(page, name)
                if shot:
                    console.print(f"[dim]Failure screenshot: {shot.path}[/dim]")
            raise
    finally:
        await browser.close()


def _run(settings: Settings, name: str, scenario: Callable[[LightningToolkit], Awaitable[T]]) -> T:
    try:
        return asyncio.run(_with_session(settings, name, scenario))
    except LightningE2EError as e:
        console.print(Panel.fit(
            f"[bold red]{type(e).__name__}[/bold red]\n{escape(e.message)}",
            border_style="red",
        ))
        for key, value in e.details.items():
            console.print(f"  [dim]{key}:[/dim] {escape(str(value))}")
        raise typer.Exit(1)


def _print_confirmation(title: str, confirmation: SaveConfirmation, fields: dict) -> None:
    lines = [f"[bold green]{title}[/bold green]"]
    lines.append(f"[dim]Record ID:[/dim] {confirmation.record_id or '-'}")
    if confirmation.toast:
        lines.append(f"[dim]Toast:[/dim] {confirmation.toast.text}")
    for label, value in fields.items():
        lines.append(f"[dim]{label}:[/dim] {value}")
    console.print(Panel.fit("\n".join(lines), border_style="green"))


@app.command()
def login(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config file"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """
    Log in and report the session state.
    """
    settings = _load(config, visible, verbose)

    async def scenario(kit: LightningToolkit) -> str:
        return kit.page.url

    url = _run(settings, "login", scenario)
    console.print(Panel.fit(
        f"[bold green]Authenticated[/bold green]\n[dim]URL:[/dim] {url}",
        border_style="green",
    ))


@app.command("create-lead")
def create_lead(
    last_name: Optional[str] = typer.Option(None, "--last-name", help="Lead last name (generated if omitted)"),
    company: Optional[str] = typer.Option(None, "--company", help="Company (generated if omitted)"),
    minimal: bool = typer.Option(False, "--minimal", help="Only fill the required fields"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config file"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """
    Create a Lead through the UI and print its record id.
    """
    settings = _load(config, visible, verbose)
    overrides = {}
    if last_name:
        overrides["last_name"] = last_name
    if company:
        overrides["company"] = company
    if minimal:
        overrides.update(salutation="", first_name="", title="", email="", phone="", lead_status="")
    lead = generate_lead_data(**overrides)

    async def scenario(kit: LightningToolkit) -> SaveConfirmation:
        confirmation = await LeadPage(kit).create_lead(lead)
        await kit.screenshot("lead-created-detail")
        return confirmation

    confirmation = _run(settings, "create-lead", scenario)
    _print_confirmation("Lead created", confirmation, {"Name": lead.full_name, "Company": lead.company})


@app.command("create-opportunity")
def create_opportunity(
    name: Optional[str] = typer.Option(None, "--name", help="Opportunity name (generated if omitted)"),
    stage: str = typer.Option("Prospecting", "--stage", help="Stage picklist value"),
    amount: str = typer.Option("25000", "--amount", help="Amount"),
    account: str = typer.Option("", "--account", help="Existing account to link"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config file"),
    visible: bool = typer.Option(False, "--visible", "-v", help="Run with visible browser"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
):
    """
    Create an Opportunity through the UI and print its record id.
    """
    settings = _load(config, visible, verbose)
    overrides = {"stage": stage, "amount": amount, "account_name": account}
    if name:
        overrides["name"] = name
    opportunity = generate_opportunity_data(**overrides)

    async def scenario(kit: LightningToolkit) -> SaveConfirmation:
        confirmation = await OpportunityPage(kit).create_opportunity(opportunity)
        await kit.screenshot("opportunity-created-detail")
        return confirmation

    confirmation = _run(settings, "create-opportunity", scenario)
    _print_confirmation(
        "Opportunity created",
        confirmation,
        {"Name": opportunity.name, "Stage": opportunity.stage, "Close Date": opportunity.close_date},
    )


@app.command("show-config")
def show_config(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to YAML config file"),
):
    """
    Print the effective configuration (password masked).
    """
    try:
        settings = load_config(config_path=config)
    except LightningE2EError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(title="Effective configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for section, values in settings.model_dump(mode="json").items():
        if not isinstance(values, dict):
            table.add_row(section, escape(str(values)))
            continue
        for key, value in values.items():
            table.add_row(f"{section}.{key}", escape(str(value)))
    console.print(table)


if __name__ == "__main__":
    app()
