"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, NoReturn, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..adapters.schedule_repository import JsonScheduleRepository
from ..config import AppConfig, get_default_config_path
from ..domain.clock import FixedClock, SystemClock
from ..domain.exceptions import ServiceHoursError
from ..domain.models import ResolvedTimeWindow, ServiceType
from ..domain.templates import build_template, list_templates
from ..services.ordering_schedule import OrderingScheduleService

app = typer.Typer(
    name="servicehours",
    help="Check restaurant service hours and list orderable time slots",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")]
SchedulesOption = Annotated[Optional[Path], typer.Option("--schedules", "-s", help="Schedules JSON file. Overrides the config setting.")]
ServiceOption = Annotated[Optional[ServiceType], typer.Option("--service", help="Service type (delivery or takeout)")]
AtOption = Annotated[Optional[str], typer.Option("--at", help="Pretend the current time is 'YYYY-MM-DD HH:mm'")]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    """
    Load the configuration file.

    An explicitly passed file must exist; without one, defaults are used
    when no config.yaml can be found.
    """
    if config_file is not None:
        return AppConfig.load_from_yaml(config_file)

    config_path = get_default_config_path()
    if config_path.exists():
        return AppConfig.load_from_yaml(config_path)
    return AppConfig()


def _build_service(
    *,
    config: AppConfig,
    schedules_file: Optional[Path],
    at: Optional[str]
) -> OrderingScheduleService:
    tz = config.timezone

    if at:
        try:
            clock = FixedClock(pendulum.from_format(at, "YYYY-MM-DD HH:mm", tz=tz))
        except ValueError as e:
            raise ValueError(f"Could not parse --at '{at}', expected YYYY-MM-DD HH:mm ({e})") from e
    else:
        clock = SystemClock(tz)

    repository = JsonScheduleRepository(schedules_file or config.schedules_file)

    return OrderingScheduleService(
        repository=repository,
        clock=clock,
        lead_time_minutes=config.ordering.lead_time_minutes
    )


def _fail(error: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    raise typer.Exit(1)


@app.command()
def status(
    config_file: ConfigOption = None,
    schedules: SchedulesOption = None,
    service: ServiceOption = None,
    at: AtOption = None,
    verbose: VerboseOption = False,
):
    """
    Show whether a service is open right now.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        service_type = service or config.ordering.default_service_type
        ordering = _build_service(config=config, schedules_file=schedules, at=at)
        result = ordering.availability(service_type)
    except (ServiceHoursError, FileNotFoundError, ValueError) as e:
        _fail(e)

    name = service_type.value.capitalize()

    if not result.has_any_schedules:
        body = f"[bold green]✓ {name} is available[/bold green]\nNo hours configured, orders are always accepted."
    elif result.is_open:
        body = f"[bold green]✓ {name} is open[/bold green]"
        if result.closes_at:
            body += f"\nUntil {result.closes_at}"
    else:
        body = f"[bold red]✗ {name} is closed[/bold red]"
        if result.opens_at:
            body += f"\nOpens today at {result.opens_at}"

    console.print(Panel.fit(body, title=config.restaurant_name))


@app.command()
def dates(
    config_file: ConfigOption = None,
    schedules: SchedulesOption = None,
    service: ServiceOption = None,
    at: AtOption = None,
    verbose: VerboseOption = False,
):
    """
    List the dates orders can be scheduled for.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        service_type = service or config.ordering.default_service_type
        ordering = _build_service(config=config, schedules_file=schedules, at=at)
        options = ordering.date_options(service_type)
    except (ServiceHoursError, FileNotFoundError, ValueError) as e:
        _fail(e)

    table = Table(
        title=f"{service_type.value.capitalize()} dates",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="dim")
    table.add_column("Label", style="bold yellow")
    table.add_column("Open")

    for option in options:
        table.add_row(
            option.iso_date,
            option.label,
            "[green]yes[/green]" if option.is_operating_day else "[red]no[/red]"
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def slots(
    date: Annotated[Optional[str], typer.Option("--date", "-d", help="Date (YYYY-MM-DD). Defaults to today.")] = None,
    config_file: ConfigOption = None,
    schedules: SchedulesOption = None,
    service: ServiceOption = None,
    at: AtOption = None,
    verbose: VerboseOption = False,
):
    """
    List the orderable time slots for a day.

    Examples:

        servicehours slots
        servicehours slots --date 2024-01-05 --service delivery
        servicehours slots --at "2024-01-05 21:50"
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        service_type = service or config.ordering.default_service_type
        ordering = _build_service(config=config, schedules_file=schedules, at=at)

        if date:
            try:
                target = pendulum.from_format(date, "YYYY-MM-DD", tz=config.timezone)
            except ValueError as e:
                raise ValueError(f"Could not parse date '{date}': {e}") from e
        else:
            target = ordering.now()

        day_slots = ordering.slots_for_date(service_type, target)
    except (ServiceHoursError, FileNotFoundError, ValueError) as e:
        _fail(e)

    day_text = day_slots.date.format("dddd, MMM D")
    console.print()

    if day_slots.is_closed_day:
        console.print(f"[yellow]⚠ {service_type.value.capitalize()} is closed on {day_text}.[/yellow]\n")
        return

    if day_slots.is_past_cutoff:
        console.print(
            f"[yellow]⚠ It is too late to schedule {service_type.value} for {day_text}.[/yellow]\n"
            "Please pick another day."
        )
        console.print()
        return

    window_text = ", ".join(window.format_display() for window in day_slots.windows)
    console.print(f"[bold green]✓ {len(day_slots.slots)} slot(s) on {day_text}[/bold green] [dim]({window_text})[/dim]\n")

    for slot in day_slots.slots:
        console.print(f"  {slot.format_display()}")

    console.print()


@app.command()
def hours(
    config_file: ConfigOption = None,
    schedules: SchedulesOption = None,
    verbose: VerboseOption = False,
):
    """
    List the configured service windows.
    """
    _configure_logging(verbose)

    try:
        config = _load_config(config_file)
        windows = JsonScheduleRepository(schedules or config.schedules_file).get_schedules()
    except (ServiceHoursError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not windows:
        console.print("[yellow]No service hours configured, orders are always accepted.[/yellow]")
        return

    table = Table(
        title=f"{config.restaurant_name} hours",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Service", style="bold yellow")
    table.add_column("Days")
    table.add_column("Hours")
    table.add_column("Enabled")

    for window in windows:
        table.add_row(
            window.service_type.value,
            window.describe_days(),
            ResolvedTimeWindow(open=window.time_start, close=window.time_stop).format_display(),
            "[green]yes[/green]" if window.is_enabled else "[dim]no[/dim]"
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def templates():
    """
    List the available schedule templates.
    """
    table = Table(
        title="Schedule templates",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="bold yellow")
    table.add_column("Description", style="dim")

    for template in list_templates():
        table.add_row(template.name, template.description)

    console.print()
    console.print(table)
    console.print()


@app.command()
def apply_template(
    name: Annotated[str, typer.Argument(help="Template name, e.g. 'Lunch & Dinner'")],
    output: Annotated[Path, typer.Option("--output", "-o", help="Schedules JSON file to write")],
    service: Annotated[Optional[List[ServiceType]], typer.Option("--service", help="Service type(s). Defaults to both.")] = None,
):
    """
    Write the schedule rows of a template to a schedules file.
    """
    service_types = service or [ServiceType.DELIVERY, ServiceType.TAKEOUT]

    try:
        windows = build_template(name, service_types)
        JsonScheduleRepository(output).save_schedules(windows)
    except ServiceHoursError as e:
        _fail(e)

    console.print(f"\n[green]✓ Applied \"{name}\" - wrote {len(windows)} schedule rows to {output}[/green]\n")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]servicehours[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
