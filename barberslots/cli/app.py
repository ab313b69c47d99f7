"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..adapters.booking_client import BookingClient
from ..adapters.mock_booking_client import MockBookingClient
from ..config import AppConfig, load_config
from ..domain.booking import validate_registration
from ..domain.calendar import format_price, next_booking_days, resolve_day_label
from ..domain.exceptions import BarberSlotsError
from ..services.availability import AvailabilityService

app = typer.Typer(
    name="barberslots",
    help="Agende horários na barbearia: serviços, profissionais e horários livres",
    add_completion=False
)

console = Console()

state = {"verbose": False}

STATUS_LABELS = {
    "pending": "⏳ Pendente",
    "confirmed": "✓ Confirmado",
    "canceled": "✕ Cancelado",
    "completed": "✓ Concluído",
}

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]
MockOption = Annotated[
    bool,
    typer.Option("--mock", help="Usar dados de teste em vez do servidor."),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Barbershop booking client.
    """
    state["verbose"] = verbose


def _setup_logging(config: AppConfig) -> None:
    """Route log records through rich at the configured level."""
    level = logging.DEBUG if state["verbose"] else config.get_log_level()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _prepare(config_file: Optional[Path], mock: bool):
    """Load config, configure logging and build the backend client."""
    config = load_config(config_file)
    _setup_logging(config)

    if mock:
        console.print("[yellow]⚠  MODO DE TESTE: usando dados simulados[/yellow]\n")
        client = MockBookingClient()
    else:
        client = BookingClient(
            base_url=config.api_base_url,
            company_id=config.company_id,
            timeout=config.request_timeout,
        )

    return config, client


def _resolve_day(day: str, config: AppConfig) -> str:
    """Accept an ISO date or a day label such as 'Hoje', 'Sexta' or '25/12'."""
    return resolve_day_label(day, config.today())


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[bold red]Erro:[/bold red] {escape(str(exc))}")
    raise typer.Exit(1)


@app.command()
def services(config_file: ConfigOption = None, mock: MockOption = False):
    """
    List the services offered by the shop.
    """
    try:
        _, client = _prepare(config_file, mock)
        catalogue = AvailabilityService(client).list_services()
    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not catalogue:
        console.print("[yellow]Nenhum serviço disponível.[/yellow]")
        return

    table = Table(title="Serviços", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Serviço", style="bold yellow")
    table.add_column("Duração")
    table.add_column("Preço", justify="right")

    for service in catalogue:
        table.add_row(
            str(service.service_id),
            service.service_name,
            f"{service.service_duration} min",
            format_price(service.service_price),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def professionals(config_file: ConfigOption = None, mock: MockOption = False):
    """
    List the professionals that accept appointments.
    """
    try:
        _, client = _prepare(config_file, mock)
        members = AvailabilityService(client).list_professionals()
    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not members:
        console.print("[yellow]Nenhum profissional com agenda disponível.[/yellow]")
        return

    table = Table(title="Profissionais", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Nome", style="bold yellow")
    table.add_column("Cargo")

    for member in members:
        table.add_row(str(member.id), member.name, member.position_label())

    console.print()
    console.print(table)
    console.print()


@app.command()
def days(config_file: ConfigOption = None):
    """
    Show the upcoming booking days.
    """
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    for day in next_booking_days(config.today(), count=config.booking_days):
        console.print(f"  [bold]{day.label:<8}[/bold] {day.date.format('DD/MM/YYYY')}")


@app.command()
def slots(
    professional_id: Annotated[int, typer.Argument(help="ID do profissional")],
    day: Annotated[str, typer.Argument(help="Data (YYYY-MM-DD, DD/MM, Hoje, Amanhã ou dia da semana)")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    Show the free time slots of a professional on a date.

    Examples:

        barberslots slots 1 2026-10-19

        barberslots slots 2 Sexta --mock
    """
    try:
        config, client = _prepare(config_file, mock)
        iso_day = _resolve_day(day, config)
        free_slots = AvailabilityService(client).available_slots(professional_id, iso_day)
    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    console.print(f"[bold cyan]🗓️  Horários livres em {iso_day}[/bold cyan]\n")

    if not free_slots:
        console.print("[yellow]⚠ Nenhum horário disponível para esta data.[/yellow]")
        return

    console.print(f"[bold green]✓ {len(free_slots)} horário(s) disponível(is):[/bold green]\n")
    console.print("  " + "  ".join(free_slots))
    console.print()


@app.command()
def book(
    professional_id: Annotated[int, typer.Argument(help="ID do profissional")],
    day: Annotated[str, typer.Argument(help="Data do agendamento")],
    time: Annotated[str, typer.Argument(help="Horário (HH:MM)")],
    service_ids: Annotated[List[int], typer.Argument(help="IDs dos serviços (repita para quantidade)")],
    client_id: Annotated[int, typer.Option("--client-id", help="ID do cliente cadastrado")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    Book an appointment for a registered client.
    """
    try:
        config, client = _prepare(config_file, mock)
        iso_day = _resolve_day(day, config)
        confirmation = AvailabilityService(client).book(
            client_id=client_id,
            professional_id=professional_id,
            appointment_date=iso_day,
            start_time=time,
            service_ids=service_ids,
        )
    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    console.print(Panel.fit(
        f"[bold green]Agendamento marcado com sucesso! ✨[/bold green]\n\n"
        f"📅 Data: {confirmation.request.appointment_date}\n"
        f"⏰ Horário: {confirmation.request.start_time}\n"
        f"💈 Profissional: {confirmation.request.professional_id}\n"
        f"🔖 Código: {confirmation.appointment_id or 'N/A'}",
        title="✓ Agendamento"
    ))


@app.command()
def register(
    name: Annotated[str, typer.Option(prompt="Nome")],
    email: Annotated[str, typer.Option(prompt="E-mail")],
    phone_number: Annotated[str, typer.Option("--phone", prompt="Telefone")],
    password: Annotated[str, typer.Option(prompt="Senha", hide_input=True)],
    confirm_password: Annotated[str, typer.Option(prompt="Confirmar senha", hide_input=True)],
    document: Annotated[Optional[str], typer.Option(help="CPF (opcional)")] = None,
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    Register a new client account.
    """
    try:
        registration = validate_registration(
            name=name,
            email=email,
            phone_number=phone_number,
            password=password,
            confirm_password=confirm_password,
            document=document,
        )
        _, client = _prepare(config_file, mock)
        result = client.create_client(registration)
    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    console.print(
        f"\n[green]✓ Cadastro realizado com sucesso![/green] "
        f"Seu ID de cliente é [bold]{result.get('id', 'N/A')}[/bold].\n"
    )


@app.command()
def appointments(
    client_id: Annotated[int, typer.Argument(help="ID do cliente")],
    config_file: ConfigOption = None,
    mock: MockOption = False,
):
    """
    List a client's upcoming appointments.
    """
    try:
        config, client = _prepare(config_file, mock)
        upcoming = AvailabilityService(client).upcoming_appointments(client_id, config.today())
    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not upcoming:
        console.print("[yellow]Nenhum agendamento futuro.[/yellow]")
        return

    table = Table(title="Meus agendamentos", show_header=True, header_style="bold cyan")
    table.add_column("Data", style="bold yellow")
    table.add_column("Horário")
    table.add_column("Profissional")
    table.add_column("Serviços")
    table.add_column("Status")

    for appointment in upcoming:
        table.add_row(
            appointment.appointment_date[:10],
            appointment.start_time[:5],
            appointment.professional_name or "-",
            ", ".join(appointment.services) or "-",
            STATUS_LABELS.get(appointment.status, appointment.status),
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def plans(config_file: ConfigOption = None, mock: MockOption = False):
    """
    List the subscription plans.
    """
    try:
        _, client = _prepare(config_file, mock)
        available_plans = client.get_plans()
    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not available_plans:
        console.print("[yellow]Nenhum plano disponível.[/yellow]")
        return

    for plan in available_plans:
        benefits = "\n".join(f"  ✓ {benefit}" for benefit in plan.benefits)
        console.print(Panel.fit(
            f"[bold]{format_price(plan.price)}[/bold] / mês\n"
            f"{plan.description}\n{benefits}".rstrip(),
            title=f"👑 {plan.name}"
        ))


@app.command()
def photos(config_file: ConfigOption = None, mock: MockOption = False):
    """
    List the entries of the client photo feed.
    """
    try:
        _, client = _prepare(config_file, mock)
        feed = client.get_client_photos()
    except (BarberSlotsError, FileNotFoundError, ValueError) as e:
        _fail(e)

    if not feed:
        console.print("[yellow]Nenhuma foto disponível.[/yellow]")
        return

    for photo in feed:
        caption = f" - {photo.description}" if photo.description else ""
        console.print(f"  [bold]{photo.client_name}[/bold]{caption}\n    [dim]{photo.photo_url}[/dim]")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]barberslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
