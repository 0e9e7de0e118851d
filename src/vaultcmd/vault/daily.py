"""Daily notes for the vault.

A daily note lives at ``{vault}/{daily_dir}/{formatted date}.md`` and is
created lazily from a fixed section template. Creation never overwrites an
existing note.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from vaultcmd.core.config import DEFAULT_DAILY_FORMAT, DEFAULT_SECTIONS, NOTE_EXTENSION
from vaultcmd.core.errors import SectionNotFoundError
from vaultcmd.core.types import DailyNoteDescriptor
from vaultcmd.vault.dates import format_date
from vaultcmd.vault.sections import append_to_section
from vaultcmd.vault.store import file_exists, write_file

if TYPE_CHECKING:
    from vaultcmd.core.config import VaultConfig

logger = logging.getLogger(__name__)


def _today(target_date: date | datetime | None) -> date | datetime:
    return target_date if target_date is not None else datetime.now()


def format_daily_date(
    target_date: date | datetime | None = None,
    pattern: str = DEFAULT_DAILY_FORMAT,
) -> str:
    """Format a date for a daily note filename."""
    return format_date(_today(target_date), pattern)


def get_daily_note_template(markers: Iterable[str] | None = None) -> str:
    """
    Build the daily note template.

    One header per section, in declaration order, each followed by a blank
    line. No title line: the filename carries the date.

    Args:
        markers: Section headers (defaults to the standard seven)

    Returns:
        Template text
    """
    if markers is None:
        markers = DEFAULT_SECTIONS.values()
    return "\n".join(f"{marker}\n" for marker in markers)


def get_daily_note_link(
    target_date: date | datetime | None = None,
    pattern: str = DEFAULT_DAILY_FORMAT,
) -> str:
    """Get the wikilink backlink for a date, e.g. ``[[2026-01-15-Thu]]``."""
    return f"[[{format_daily_date(target_date, pattern)}]]"


def get_daily_note_path(
    config: VaultConfig, target_date: date | datetime | None = None
) -> Path:
    """Get the absolute path to a daily note."""
    date_string = format_daily_date(target_date, config.daily_format)
    return config.daily_path / f"{date_string}{NOTE_EXTENSION}"


def get_daily_note_relative_path(
    config: VaultConfig, target_date: date | datetime | None = None
) -> str:
    """Get the vault-relative daily note path without extension (for viewer URIs)."""
    date_string = format_daily_date(target_date, config.daily_format)
    return f"{config.daily_dir.rstrip('/')}/{date_string}"


def get_daily_note_info(
    config: VaultConfig, target_date: date | datetime | None = None
) -> DailyNoteDescriptor:
    """Get daily note metadata, including a point-in-time existence check."""
    path = get_daily_note_path(config, target_date)
    return DailyNoteDescriptor(
        date_string=format_daily_date(target_date, config.daily_format),
        path=path,
        exists=file_exists(path),
    )


def ensure_daily_note(
    config: VaultConfig,
    target_date: date | datetime | None = None,
    template: str | None = None,
) -> Path:
    """
    Ensure the daily note exists, creating it from the template if needed.

    An existing note is never touched, whatever template is passed.

    Args:
        config: Vault configuration
        target_date: Date for the note (defaults to today)
        template: Template override (defaults to the configured sections)

    Returns:
        Path to the daily note
    """
    path = get_daily_note_path(config, target_date)
    if file_exists(path):
        return path

    if template is None:
        template = get_daily_note_template(config.sections.values())
    write_file(path, template)
    logger.info(f"Created daily note {path}")
    return path


def append_to_daily(
    config: VaultConfig,
    section: str,
    content: str,
    target_date: date | datetime | None = None,
) -> Path:
    """
    Append content below a named section of the daily note.

    Args:
        config: Vault configuration
        section: Section key (e.g. "tasks")
        content: Text to insert
        target_date: Date for the note (defaults to today)

    Returns:
        Path to the daily note

    Raises:
        SectionNotFoundError: If the key is not configured or its header is
            missing from the note.
    """
    marker = config.section_marker(section)
    if marker is None:
        raise SectionNotFoundError(section)

    path = ensure_daily_note(config, target_date)
    append_to_section(path, marker, content)
    return path
