"""booking-flow command line."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from playwright.sync_api import Error as PlaywrightError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from booking_flow.config import BookingSettings
from booking_flow.engine import BookingDriver, BookingFlowEngine, BookingFlowError, FlowLoader
from booking_flow.engine.surface import PlaywrightSurface, UISurface
from booking_flow.logging_config import configure_logging

logger = logging.getLogger(__name__)

app = typer.Typer(help="Drive the partner booking wizard end to end.")
console = Console()


@contextmanager
def open_session(settings: BookingSettings) -> Iterator[UISurface]:
    """Launch Chromium and yield a surface over a fresh page."""
    from playwright.sync_api import sync_playwright

    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=settings.headless)
        try:
            context = browser.new_context(base_url=settings.base_url)
            page = context.new_page()
            page.set_default_timeout(settings.action_timeout_ms)
            yield PlaywrightSurface(page, navigation_timeout_ms=settings.navigation_timeout_ms)
        finally:
            browser.close()


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, help="YAML settings file"),
    base_url: Optional[str] = typer.Option(None, help="Booking app URL, e.g. http://localhost:5173"),
    subdomain: Optional[str] = typer.Option(None, help="Partner subdomain"),
    phone: Optional[str] = typer.Option(None, help="Client phone"),
    name: Optional[str] = typer.Option(None, help="Client name"),
    email: Optional[str] = typer.Option(None, help="Client e-mail"),
    flow: str = typer.Option("booking", help="Flow definition to run"),
    service: Optional[str] = typer.Option(None, help="Service id (default: first listed)"),
    professional: Optional[str] = typer.Option(None, help="Professional id (default: first listed)"),
    location: Optional[str] = typer.Option(None, help="Location id (default: first listed)"),
    date: Optional[str] = typer.Option(None, help="Date, YYYY-MM-DD (default: first listed)"),
    time: Optional[str] = typer.Option(None, help="Time slot, HH:MM (default: first listed)"),
    settle_scale: Optional[float] = typer.Option(None, help="Multiplier for settle waits"),
    headed: bool = typer.Option(False, "--headed", help="Show the browser window"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Run a booking flow up to the confirmation step."""
    settings = BookingSettings.load(config).with_overrides(
        base_url=base_url,
        subdomain=subdomain,
        client_phone=phone,
        client_name=name,
        client_email=email,
        settle_scale=settle_scale,
    )
    if headed:
        settings = settings.with_overrides(headless=False)
    if verbose:
        settings = settings.with_overrides(verbose=True, log_level='DEBUG')

    configure_logging(settings.log_level)

    selections = {
        category: item_id
        for category, item_id in (
            ('service', service),
            ('professional', professional),
            ('location', location),
            ('date', date),
            ('time', time),
        )
        if item_id
    }

    console.print(f"Running flow [bold]{flow}[/bold] on {settings.base_url} ({settings.subdomain})")
    try:
        with open_session(settings) as surface:
            driver = BookingDriver.from_settings(surface, settings)
            engine = BookingFlowEngine(driver)
            result = engine.execute_flow(
                flow,
                subdomain=settings.subdomain,
                client=settings.default_client(),
                selections=selections,
            )
    except (BookingFlowError, ValueError, FileNotFoundError, PlaywrightError) as e:
        console.print(f"[red]✗ {type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ {result.message}[/green]")


@app.command("show-flow")
def show_flow(
    flow: str = typer.Argument("booking", help="Flow definition to show"),
    base_path: Optional[Path] = typer.Option(None, help="Directory holding flows/"),
):
    """Print the steps of a flow definition."""
    loader = FlowLoader(base_path=base_path)
    try:
        definition = loader.load_flow(flow)
    except FileNotFoundError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"{definition.name} v{definition.version}")
    table.add_column("Step")
    table.add_column("Type")
    table.add_column("Wizard step")
    table.add_column("Next")
    for step in definition.steps:
        if isinstance(step.next, dict):
            next_label = ', '.join(f"{key}: {value}" for key, value in step.next.items())
        else:
            next_label = step.next or ''
        wizard_step = step.wizard_step.value if step.wizard_step else ''
        kind = f"{step.type} ({step.category.value})" if step.category else step.type
        if step.optional:
            kind += " optional"
        table.add_row(step.id, kind, wizard_step, next_label)

    console.print(table)
    console.print(f"Entry path: {definition.entry_path}")


if __name__ == "__main__":
    app()
