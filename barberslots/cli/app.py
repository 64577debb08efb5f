"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.graphql_client import GraphQLScheduleClient
from ..adapters.mock_schedule_client import MockScheduleClient
from ..adapters.session_store import SessionStore
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BarberSlotsError
from ..domain.slot_generator import SlotGenerator
from ..services.booking_slots import BookingSlotService

app = typer.Typer(
    name="barberslots",
    help="Find bookable appointment slots for a barber",
    add_completion=False
)

console = Console()


def _load_config(config_file: Optional[Path], allow_missing: bool = False) -> AppConfig:
    """Load the config file, or built-in defaults when allowed and missing."""
    config_path = config_file or get_default_config_path()
    try:
        return AppConfig.load_from_yaml(config_path)
    except FileNotFoundError:
        if allow_missing:
            return AppConfig()
        raise


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True
    )


@app.command()
def slots(
    barber: Annotated[str, typer.Argument(help="Barber name from the config or barber id")],
    date: Annotated[Optional[str], typer.Option("--date", help="Date (YYYY-MM-DD), defaults to today")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Total service duration in minutes")] = None,
    default_hours: Annotated[bool, typer.Option("--default-hours", help="Ignore the barber's schedule and use default business hours.")] = False,
    mock: Annotated[bool, typer.Option("--mock", help="Use bundled mock data instead of the API.")] = False,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    List appointment slots for a barber on one date.

    Examples:

        barberslots slots alex --date 2024-11-25 --duration 45

        barberslots slots barber-1 --mock

        barberslots slots alex --default-hours
    """
    try:
        config = _load_config(config_file, allow_missing=mock)
        _configure_logging("DEBUG" if verbose else config.log_level)

        tz = config.timezone

        if date:
            try:
                day = pendulum.from_format(date, "YYYY-MM-DD", tz=tz).date()
            except ValueError as e:
                console.print(f"[red]Could not parse date: {e}[/red]")
                raise typer.Exit(1)
        else:
            day = pendulum.today(tz).date()

        barber_id = config.resolve_barber(barber)
        service_duration = duration if duration is not None else config.defaults.duration_minutes

        generator = SlotGenerator(
            timezone=tz,
            slot_interval_minutes=config.defaults.slot_interval_minutes,
            default_period=config.defaults.get_default_period()
        )

        if mock:
            console.print("[yellow]⚠  MOCK MODE: using bundled test data[/yellow]\n")

        if default_hours:
            found = generator.generate_default_slots(
                day,
                service_duration,
                now=pendulum.now(tz)
            )
        else:
            if mock:
                source = MockScheduleClient(timezone=tz)
            else:
                source = GraphQLScheduleClient(
                    api_url=config.api_url,
                    access_token=SessionStore().get_token(),
                    timezone=tz
                )

            service = BookingSlotService(schedule_source=source, slot_generator=generator)
            found = service.find_slots(
                barber_id=barber_id,
                day=day,
                service_duration_minutes=service_duration
            )

        console.print(
            f"[bold cyan]Slots for {barber_id} on {day.format('dddd, DD.MM.YYYY')}[/bold cyan] "
            f"({service_duration} min)\n"
        )

        available = [slot for slot in found if slot.is_available]

        if not available:
            console.print("[yellow]⚠ No availability on this date.[/yellow]")
        else:
            console.print(f"[bold green]✓ {len(available)} of {len(found)} slot(s) available:[/bold green]\n")

        for slot in found:
            style = "green" if slot.is_available else "dim"
            console.print(f"  [{style}]{slot.format_display()}[/{style}]")

        console.print()

    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def list_barbers(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    ),
    mock: bool = typer.Option(
        False,
        "--mock",
        help="List the barbers in the bundled mock data."
    )
):
    """
    List all configured barbers, or the barbers of the bundled mock data.
    """
    try:
        config = _load_config(config_file, allow_missing=mock)

        if mock:
            names = {barber.barber_id: barber.name for barber in config.barbers}
            rows = [(names.get(barber_id, "-"), barber_id) for barber_id in MockScheduleClient().barber_ids()]
        else:
            rows = [(barber.name, barber.barber_id) for barber in config.barbers]

        if not rows:
            console.print("[yellow]No barbers defined in the config file.[/yellow]")
            return

        table = Table(
            title="Mock barbers" if mock else "Configured barbers",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Name (Alias)", style="bold yellow")
        table.add_column("Barber ID", style="dim")

        for name, barber_id in rows:
            table.add_row(name, barber_id)

        console.print()
        console.print(table)
        console.print()

    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


@app.command()
def login(
    token: str = typer.Option(..., "--token", prompt=True, hide_input=True, help="API access token")
):
    """
    Store an API access token for later requests.
    """
    store = SessionStore()
    store.set_token(token)
    console.print(f"\n[green]✓ Token saved ({store.backend}).[/green]\n")


@app.command()
def logout():
    """
    Clear the stored session.
    """
    SessionStore().clear()
    console.print("\n[green]✓ Session cleared.[/green]\n")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]barberslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
