"""CLI commands for wedding planner administration."""

import asyncio
from dataclasses import asdict
from pathlib import Path

import typer

from src.communications.repository.write_models import SqlCommunicationWriteModel
from src.config.logging import setup_logging
from src.email_service import get_email_service
from src.guests.export import export_guests_csv
from src.guests.features.rsvp_dashboard.controller import RSVPDashboard
from src.guests.mappers import parse_import
from src.guests.repository.read_models import SqlGuestReadModel, SqlRSVPReadModel
from src.guests.repository.write_models import SqlGuestWriteModel
from src.realtime.change_feed import change_feed

app = typer.Typer(help="CLI commands for wedding planner administration")


@app.callback()
def main() -> None:
    setup_logging()


@app.command()
def import_guests(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        help="CSV file with First,Last,Email,Phone,Dietary,PlusOne,Relationship,TablePref,Notes rows",
    ),
):
    """Bulk-create guests from a CSV file. Rows without an email are skipped."""
    records = parse_import(path.read_text(encoding="utf-8"))
    result = asyncio.run(SqlGuestWriteModel().import_guests(records))

    typer.secho(f"Imported {result.imported} guests", fg=typer.colors.GREEN)
    if result.skipped:
        typer.secho(f"Skipped {result.skipped} rows without an email", fg=typer.colors.YELLOW)
    if result.failed:
        typer.secho(f"{result.failed} rows failed, see the log", fg=typer.colors.RED)
        raise typer.Exit(code=1)


@app.command()
def export_guests(
    output: Path = typer.Option(
        Path("guests.csv"), "--output", "-o", help="Where to write the CSV file"
    ),
):
    """Write every guest to a CSV file."""
    guests = asyncio.run(SqlGuestReadModel().list_guests())
    output.write_text(export_guests_csv(guests), encoding="utf-8")
    typer.secho(f"Exported {len(guests)} guests to {output}", fg=typer.colors.GREEN)


async def _load_dashboard() -> RSVPDashboard:
    dashboard = RSVPDashboard(
        read_model=SqlRSVPReadModel(),
        change_feed=change_feed,
        email_service=get_email_service(),
        communication_write_model=SqlCommunicationWriteModel(change_feed=change_feed),
    )
    await dashboard.load()
    return dashboard


@app.command()
def rsvp_stats():
    """Print the RSVP statistics snapshot."""
    dashboard = asyncio.run(_load_dashboard())
    for name, value in asdict(dashboard.stats).items():
        suffix = "%" if name in ("response_rate", "capacity_used") else ""
        typer.echo(f"{name.replace('_', ' '):<22}{value}{suffix}")


async def _send_reminders():
    dashboard = await _load_dashboard()
    return await dashboard.send_reminders()


@app.command()
def send_reminders():
    """Email a reminder to every guest whose RSVP is still pending."""
    result = asyncio.run(_send_reminders())

    typer.secho(f"Sent {result.sent} reminders", fg=typer.colors.GREEN)
    if result.skipped:
        typer.secho(f"Skipped {result.skipped} RSVPs without an email", fg=typer.colors.YELLOW)
    if result.failed:
        typer.secho(f"{result.failed} reminders failed", fg=typer.colors.RED)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
