"""CLI application for vaultcmd using Rich and Typer."""

import logging
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vaultcmd.core.cache import IndexCache
from vaultcmd.core.config import VaultConfig, load_config, setup_logging
from vaultcmd.core.context import find_relevant_context
from vaultcmd.core.errors import VaultCommanderError
from vaultcmd.core.types import ImportKind
from vaultcmd.vault.daily import (
    append_to_daily,
    ensure_daily_note,
    get_daily_note_info,
    get_daily_note_relative_path,
)
from vaultcmd.vault.imports import get_importer
from vaultcmd.vault.layout import build_obsidian_uri, note_uri, vault_name
from vaultcmd.vault.notes import create_capture_note
from vaultcmd.vault.search import search_vault

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="vaultcmd",
    help="vaultcmd - capture, append and search your note vault",
    no_args_is_help=True,
)
meetings_app = typer.Typer(help="Import meeting notes into today's daily note")
voice_app = typer.Typer(help="Import voice transcripts into today's daily note")
app.add_typer(meetings_app, name="meetings")
app.add_typer(voice_app, name="voice")

console = Console()

# One index cache per process; commands that change the vault invalidate it
index_cache = IndexCache()

VaultOption = typer.Option(
    None,
    "--vault",
    "-v",
    help="Path to vault directory (default: $VAULT_PATH)",
)

ArchiveOption = typer.Option(
    None,
    "--archive/--no-archive",
    help="Archive sources after import (default: $VAULT_ARCHIVE_IMPORTS, on)",
)


def _load(vault: Optional[str]) -> VaultConfig:
    try:
        config = load_config(vault)
    except VaultCommanderError as e:
        _fail(e)
    index_cache.ttl_seconds = config.index_ttl_seconds
    return config


def _fail(error: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    raise typer.Exit(1)


@app.command()
def capture(
    text: str = typer.Argument(..., help="Text to capture"),
    vault: Optional[str] = VaultOption,
):
    """Capture a thought as a new inbox note."""
    content = text.strip()
    if not content:
        console.print("[yellow]Nothing to capture[/yellow]")
        return

    config = _load(vault)
    try:
        note = create_capture_note(config, content)
    except (VaultCommanderError, OSError) as e:
        _fail(e)
    index_cache.invalidate()
    console.print(f"[green]Captured to {config.inbox_dir}/{note.filename}[/green]")


@app.command()
def add(
    section: str = typer.Argument(..., help="Section key, e.g. tasks or notes"),
    text: str = typer.Argument(..., help="Text to add"),
    vault: Optional[str] = VaultOption,
):
    """Append text to a section of today's daily note."""
    content = text.strip()
    if not content:
        console.print("[yellow]Nothing to add[/yellow]")
        return

    config = _load(vault)
    try:
        append_to_daily(config, section, content)
    except (VaultCommanderError, OSError) as e:
        _fail(e)
    index_cache.invalidate()
    console.print(f"[green]Added to {config.sections[section]}[/green]")


@app.command()
def today(vault: Optional[str] = VaultOption):
    """Create today's daily note if needed and print its viewer URI."""
    config = _load(vault)
    info = get_daily_note_info(config)
    try:
        path = ensure_daily_note(config)
    except OSError as e:
        _fail(e)
    if not info.exists:
        index_cache.invalidate()

    uri = build_obsidian_uri(
        vault_name(config.vault_path), get_daily_note_relative_path(config)
    )
    status = "existing" if info.exists else "created"
    console.print(f"[green]{info.date_string}[/green] [dim]({status})[/dim]")
    console.print(str(path))
    console.print(uri)


@app.command()
def search(
    query: str = typer.Argument("", help="Search text (empty shows recent notes)"),
    limit: int = typer.Option(20, "--limit", "-n", help="Rows to show"),
    vault: Optional[str] = VaultOption,
):
    """Fuzzy-search the vault."""
    config = _load(vault)
    with console.status("[bold blue]Indexing vault...[/bold blue]"):
        index = index_cache.get_or_build(config.vault_path)

    results = search_vault(index, query)
    if not results:
        console.print("[dim]No matching notes.[/dim]")
        return

    table = Table(title=f"{len(results)} notes", show_header=True)
    table.add_column("Note", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Preview")
    table.add_column("Open", style="dim")
    for result in results[:limit]:
        table.add_row(
            escape(result.filename),
            f"{result.score:.3f}",
            escape(result.preview.replace("\n", " ")),
            note_uri(config.vault_path, result.path),
        )
    console.print(table)


@app.command()
def context(
    question: str = typer.Argument(..., help="Question or theme"),
    vault: Optional[str] = VaultOption,
):
    """Print the vault context that would accompany a question."""
    config = _load(vault)
    index = index_cache.get_or_build(config.vault_path)
    console.print(Panel(escape(find_relevant_context(index, question)), title="Context"))


def _pending(kind: ImportKind, vault: Optional[str]) -> None:
    config = _load(vault)
    importer = get_importer(config, kind)
    if importer.source_dir is None:
        console.print(f"[yellow]No {kind} folder configured[/yellow]")
        return

    entries = importer.list_sources()
    if not entries:
        console.print(f"[dim]No pending {kind} files.[/dim]")
        return

    table = Table(title=f"Pending {kind} files", show_header=True)
    table.add_column("#", style="dim")
    table.add_column("File")
    table.add_column("Modified")
    for i, entry in enumerate(entries, 1):
        table.add_row(
            str(i), escape(entry.filename), entry.timestamp.strftime("%Y-%m-%d %H:%M")
        )
    console.print(table)


def _import(kind: ImportKind, vault: Optional[str], archive: Optional[bool]) -> None:
    config = _load(vault)
    if archive is None:
        archive = config.archive_imports
    importer = get_importer(config, kind)
    if importer.source_dir is None:
        _fail(VaultCommanderError(f"No {kind} folder configured"))

    outcome = importer.import_all(archive=archive)
    if outcome.results:
        index_cache.invalidate()

    for failure in outcome.errors:
        console.print(
            f"[red]{escape(failure.source.filename)}: {escape(str(failure.error))}[/red]"
        )
    console.print(
        f"[green]Imported {outcome.imported_count}[/green]"
        f" [dim]({outcome.failed_count} failed)[/dim]"
    )
    if outcome.errors:
        raise typer.Exit(1)


@meetings_app.command("list")
def meetings_list(vault: Optional[str] = VaultOption):
    """List meeting notes waiting to be imported."""
    _pending(ImportKind.MEETING, vault)


@meetings_app.command("import")
def meetings_import(
    vault: Optional[str] = VaultOption,
    archive: Optional[bool] = ArchiveOption,
):
    """Import all pending meeting notes."""
    _import(ImportKind.MEETING, vault, archive)


@voice_app.command("list")
def voice_list(vault: Optional[str] = VaultOption):
    """List voice transcripts waiting to be imported."""
    _pending(ImportKind.VOICE, vault)


@voice_app.command("import")
def voice_import(
    vault: Optional[str] = VaultOption,
    archive: Optional[bool] = ArchiveOption,
):
    """Import all pending voice transcripts."""
    _import(ImportKind.VOICE, vault, archive)


@app.callback()
def callback(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """vaultcmd - capture, append and search your note vault."""
    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        console.print("[dim]Debug logging enabled[/dim]")
    else:
        setup_logging()


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
