"""CLI interface for member-poster."""

import logging
import os
import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .batch import send_posters
from .config import MailSettings, PosterConfig
from .constants import DEFAULT_MAX_WORKERS, DESIGNATIONS
from .errors import MailError, PosterError, StoreError
from .mailer import Mailer
from .models import Member, MemberProfile, PosterJob
from .output import supported_output_formats
from .poster_pipeline import create_poster
from .store import MemberStore

# Load environment variables from .env file
load_dotenv()

console = Console()
err_console = Console(stderr=True)
SUPPORTED_OUTPUT_FORMATS_TEXT = ", ".join(supported_output_formats()).upper()
DEFAULT_STORE = os.getenv("MEMBER_STORE_PATH", "output/members.xlsx")


class CLIError(Exception):
    """Base exception for CLI errors with user-friendly messages."""
    pass


app = typer.Typer(help="Generate and email personalized member posters.")
members_app = typer.Typer(help="Manage the member register.")
app.add_typer(members_app, name="members")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(e: Exception) -> None:
    err_console.print(f"[bold red]Error:[/bold red] {e}")
    sys.exit(1)


def _poster_config(output_format: str, quality: int) -> PosterConfig:
    fmt = output_format.lower()
    if fmt == "jpg":
        fmt = "jpeg"
    if fmt not in supported_output_formats():
        raise CLIError(f"Unsupported format '{output_format}'. Choose from: {SUPPORTED_OUTPUT_FORMATS_TEXT}")
    if not 1 <= quality <= 100:
        raise CLIError("Quality must be between 1 and 100")
    return PosterConfig().with_overrides(output_format=fmt, quality=quality)


@app.command()
def render(
    template: Path = typer.Argument(..., help="Template image the footer is appended to"),
    logo: Path = typer.Argument(..., help="Brand logo image"),
    photo: Path = typer.Argument(..., help="Member photo"),
    name: str = typer.Option(..., "--name", "-n", help="Member display name"),
    designation: str = typer.Option(DESIGNATIONS[1], "--designation", "-d", help="Member designation"),
    phone: str = typer.Option(..., "--phone", "-p", help="Member phone number"),
    out: Path = typer.Option(Path("poster.jpg"), "--output", "-o", help="Where to write the poster"),
    output_format: str = typer.Option(
        "jpeg", "--format", "-f", help=f"Output format ({SUPPORTED_OUTPUT_FORMATS_TEXT})"
    ),
    quality: int = typer.Option(90, "--quality", "-q", help="Encoder quality (1-100)"),
) -> None:
    """Render one poster for a member without touching the register."""
    try:
        config = _poster_config(output_format, quality)
        job = PosterJob(
            template_source=template,
            member=MemberProfile(name=name, designation=designation, phone=phone, photo=photo),
            logo_source=logo,
            output_target=out,
        )
        console.print(f"[bold blue]Rendering poster for {name}...[/bold blue]")
        written = create_poster(job, config)
        console.print(f"[green]✓[/green] Poster saved to {written}")
    except (CLIError, PosterError) as e:
        _fail(e)


@app.command()
def send(
    template: Path = typer.Argument(..., help="Template image the footer is appended to"),
    logo: Path = typer.Argument(..., help="Brand logo image"),
    store: Path = typer.Option(Path(DEFAULT_STORE), "--store", help="Member register (.xlsx)"),
    designation: str = typer.Option(
        None, "--designation", "-d", help=f"Only members with this designation ({', '.join(DESIGNATIONS)})"
    ),
    output_dir: Path = typer.Option(Path("output/posters"), "--output-dir", help="Where posters are written"),
    workers: int = typer.Option(DEFAULT_MAX_WORKERS, "--workers", "-w", help="Posters processed at once"),
    output_format: str = typer.Option(
        "jpeg", "--format", "-f", help=f"Output format ({SUPPORTED_OUTPUT_FORMATS_TEXT})"
    ),
    quality: int = typer.Option(90, "--quality", "-q", help="Encoder quality (1-100)"),
) -> None:
    """Render and email a poster to every matching member."""
    try:
        config = _poster_config(output_format, quality)
        if workers < 1:
            raise CLIError("--workers must be at least 1")
        mailer = Mailer(MailSettings.from_env(), brand=config.brand_name)
        members = MemberStore(store).list_members()
        console.print(f"[bold blue]Sending posters to {len(members)} registered members...[/bold blue]")
        results = send_posters(
            members,
            template,
            logo,
            output_dir,
            mailer,
            config=config,
            designation=designation,
            max_workers=workers,
        )
    except (CLIError, StoreError, MailError) as e:
        _fail(e)
        return

    for result in results:
        mark = "[green]✓[/green]" if result.ok else "[red]✗[/red]"
        console.print(f"{mark} {result.message}")
    failed = sum(1 for r in results if not r.ok)
    console.print(f"\n{len(results) - failed} sent, {failed} failed")
    if failed:
        sys.exit(1)


@members_app.command("list")
def list_members(
    store: Path = typer.Option(Path(DEFAULT_STORE), "--store", help="Member register (.xlsx)"),
    search: str = typer.Option("", "--search", "-s", help="Filter by name, email, phone or designation"),
) -> None:
    """Show registered members."""
    try:
        members = MemberStore(store).search(search)
    except StoreError as e:
        _fail(e)
        return

    table = Table(title=f"Members ({len(members)})")
    for column in ("Name", "Email", "Phone", "Designation"):
        table.add_column(column)
    for m in members:
        table.add_row(m.name, m.email, m.phone, m.designation)
    console.print(table)


@members_app.command("add")
def add_member(
    name: str = typer.Option(..., "--name", "-n"),
    email: str = typer.Option(..., "--email", "-e"),
    phone: str = typer.Option(..., "--phone", "-p"),
    designation: str = typer.Option(..., "--designation", "-d"),
    photo: Path = typer.Option(..., "--photo", help="Path to the member photo"),
    store: Path = typer.Option(Path(DEFAULT_STORE), "--store", help="Member register (.xlsx)"),
) -> None:
    """Register a member."""
    try:
        if not photo.is_file():
            raise CLIError(f"Photo '{photo}' not found")
        member = Member(name=name, email=email, phone=phone, designation=designation, photo=str(photo))
        MemberStore(store).add(member)
        console.print(f"[green]✓[/green] Registered {name} as {designation}")
    except (CLIError, StoreError) as e:
        _fail(e)


@members_app.command("delete")
def delete_member(
    email: str = typer.Argument(...),
    designation: str = typer.Argument(...),
    store: Path = typer.Option(Path(DEFAULT_STORE), "--store", help="Member register (.xlsx)"),
) -> None:
    """Remove a member by email and designation."""
    try:
        MemberStore(store).delete(email, designation)
        console.print(f"[green]✓[/green] Deleted {email} ({designation})")
    except StoreError as e:
        _fail(e)


if __name__ == "__main__":
    app()
