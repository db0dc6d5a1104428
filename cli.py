"""CLI commands for wedding guest and seating management."""

import asyncio
from uuid import UUID

import typer
import uvicorn

from src.config.logging import setup_logging
from src.config.settings import settings
from src.dashboard.read_models import SqlDashboardReadModel
from src.email_service import get_notification_dispatcher
from src.guests.dtos import (
    CapacityExceededError,
    GuestStatus,
    NotFoundError,
    NotificationFailedError,
    ValidationFailedError,
)
from src.guests.features.create_guest.write_model import SqlGuestCreateWriteModel
from src.guests.repository.write_models import SqlRSVPWriteModel
from src.seating.repository.write_models import SqlSeatingWriteModel

app = typer.Typer(help="CLI commands for wedding guest and seating management")

# expected failures are reported in red, anything else propagates
HANDLED_ERRORS = (
    NotFoundError,
    ValidationFailedError,
    CapacityExceededError,
    NotificationFailedError,
)


@app.callback()
def main():
    setup_logging()


@app.command()
def serve(
    reload: bool = typer.Option(False, "--reload", help="Restart on code changes"),
):
    """Run the API server."""
    uvicorn.run("src.main:app", host=settings.app_host, port=settings.app_port, reload=reload)


@app.command()
def create_guest(
    first_name: str = typer.Argument(..., help="First name of the guest"),
    last_name: str = typer.Argument(..., help="Last name of the guest"),
    email: str = typer.Argument(..., help="Where the invitation is sent"),
    group: str = typer.Option(None, "--group", "-g", help="Group or family label"),
    people: int = typer.Option(1, "--people", "-n", help="Number of people in the party"),
    table_id: UUID = typer.Option(None, "--table", "-t", help="Table UUID to seat the guest at"),
    send_invitation: bool = typer.Option(
        True, "--send-invitation/--no-invitation", help="Email the RSVP link"
    ),
):
    """Create a guest, issue their RSVP link and optionally email it."""
    dispatcher = get_notification_dispatcher() if send_invitation else None
    write_model = SqlGuestCreateWriteModel(
        rsvp_write_model=SqlRSVPWriteModel(dispatcher=dispatcher),
        dispatcher=dispatcher,
    )

    try:
        created = asyncio.run(
            write_model.create_guest(
                first_name=first_name,
                last_name=last_name,
                email=email,
                group_family=group,
                number_of_people=people,
                status=GuestStatus.PENDING,
                table_id=table_id,
                send_invitation=send_invitation,
            )
        )
    except HANDLED_ERRORS as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Guest created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {created.guest.full_name}", fg=typer.colors.BLUE)
    typer.secho(f"  Guest ID: {created.guest.id}", fg=typer.colors.CYAN)
    typer.secho(f"  RSVP URL: {created.rsvp_link}", fg=typer.colors.CYAN)
    if send_invitation and not created.invitation_sent:
        typer.secho("  The invitation email could not be sent.", fg=typer.colors.YELLOW)


@app.command()
def resend_invitation(
    guest_id: UUID = typer.Argument(..., help="Guest UUID"),
):
    """Replace the guest's RSVP link and email the new one."""
    write_model = SqlRSVPWriteModel(dispatcher=get_notification_dispatcher())
    try:
        token = asyncio.run(write_model.regenerate_token(guest_id))
    except HANDLED_ERRORS as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Invitation sent!", fg=typer.colors.GREEN)
    typer.secho(f"  RSVP URL: {write_model.rsvp_link(token.token)}", fg=typer.colors.CYAN)
    typer.secho(f"  Expires: {token.expires_at:%Y-%m-%d}", fg=typer.colors.BLUE)


@app.command()
def create_table(
    name: str = typer.Argument(..., help="Unique table name"),
    capacity: int = typer.Argument(..., help="Number of seats (1-50)"),
    description: str = typer.Option(None, "--description", "-d"),
):
    """Create a seating table."""
    try:
        table = asyncio.run(SqlSeatingWriteModel().create_table(name, capacity, description))
    except HANDLED_ERRORS as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Table created!", fg=typer.colors.GREEN)
    typer.secho(f"  {table.name}: {table.capacity} seats", fg=typer.colors.BLUE)
    typer.secho(f"  Table ID: {table.id}", fg=typer.colors.CYAN)


@app.command()
def assign_guest(
    guest_id: UUID = typer.Argument(..., help="Guest UUID"),
    table_id: UUID = typer.Argument(..., help="Table UUID"),
):
    """Seat a guest and their party at a table."""
    try:
        assignment = asyncio.run(SqlSeatingWriteModel().assign_guest(guest_id, table_id))
    except HANDLED_ERRORS as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    table = assignment.table
    typer.secho(f"{assignment.guest.full_name} seated at {table.name}", fg=typer.colors.GREEN)
    typer.secho(f"  Occupancy: {table.occupancy}/{table.capacity}", fg=typer.colors.BLUE)


@app.command()
def unassign_guest(
    guest_id: UUID = typer.Argument(..., help="Guest UUID"),
):
    """Remove a guest from their table."""
    try:
        guest = asyncio.run(SqlSeatingWriteModel().unassign_guest(guest_id))
    except HANDLED_ERRORS as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(f"{guest.full_name} is no longer seated", fg=typer.colors.GREEN)


@app.command()
def delete_table(
    table_id: UUID = typer.Argument(..., help="Table UUID"),
):
    """Delete a table. Its guests are kept and become unassigned."""
    try:
        asyncio.run(SqlSeatingWriteModel().delete_table(table_id))
    except HANDLED_ERRORS as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Table deleted!", fg=typer.colors.GREEN)


@app.command()
def stats():
    """Print guest and seating figures."""
    result = asyncio.run(SqlDashboardReadModel().get_stats())

    guests = result.guests
    typer.secho("Guests", fg=typer.colors.GREEN)
    typer.secho(f"  Total: {guests.total} ({guests.total_people} people)", fg=typer.colors.BLUE)
    typer.secho(
        f"  Confirmed: {guests.confirmed} ({guests.confirmed_people} people)",
        fg=typer.colors.BLUE,
    )
    typer.secho(f"  Declined: {guests.declined}", fg=typer.colors.BLUE)
    typer.secho(f"  Pending: {guests.pending}", fg=typer.colors.BLUE)
    typer.secho(f"  Confirmation rate: {guests.confirmation_rate}%", fg=typer.colors.CYAN)

    tables = result.tables
    typer.echo()
    typer.secho("Tables", fg=typer.colors.GREEN)
    typer.secho(f"  Total: {tables.total}", fg=typer.colors.BLUE)
    typer.secho(
        f"  Seats: {tables.occupied}/{tables.total_capacity} ({tables.available} available)",
        fg=typer.colors.BLUE,
    )
    if tables.over_capacity:
        typer.secho(f"  Over capacity: {tables.over_capacity}", fg=typer.colors.RED)

    if result.by_group:
        typer.echo()
        typer.secho("By group", fg=typer.colors.GREEN)
        for group in result.by_group:
            typer.secho(
                f"  {group.group}: {group.count} guests, {group.total_people} people, "
                f"{group.confirmed} confirmed",
                fg=typer.colors.BLUE,
            )


if __name__ == "__main__":
    app()
