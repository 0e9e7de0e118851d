"""Capture notes for the vault inbox.

Each capture is a new file named after the second it was taken. Two
captures within the same second share a filename and the later one
overwrites the earlier.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from vaultcmd.core.config import NOTE_EXTENSION
from vaultcmd.core.types import CaptureNote
from vaultcmd.vault.dates import format_date, format_timestamp
from vaultcmd.vault.daily import get_daily_note_link
from vaultcmd.vault.store import write_file

if TYPE_CHECKING:
    from vaultcmd.core.config import VaultConfig

logger = logging.getLogger(__name__)


def generate_capture_filename(timestamp: datetime | None = None) -> str:
    """Generate ``capture-YYYY-MM-DD-HHmmss.md`` for a capture time."""
    timestamp = timestamp or datetime.now()
    return f"capture-{format_date(timestamp, 'YYYY-MM-DD-HHmmss')}{NOTE_EXTENSION}"


def create_capture_note(
    config: VaultConfig,
    content: str,
    timestamp: datetime | None = None,
) -> CaptureNote:
    """
    Create an atomic capture note in the inbox.

    The backlink may point at a daily note that does not exist yet; daily
    notes are created separately.

    Args:
        config: Vault configuration
        content: Captured text
        timestamp: Capture time (defaults to now)

    Returns:
        The written capture note
    """
    timestamp = timestamp or datetime.now()
    filename = generate_capture_filename(timestamp)
    path = config.inbox_path / filename
    daily_note_link = get_daily_note_link(timestamp, config.daily_format)
    time_str = format_timestamp(timestamp)

    note_content = f"{daily_note_link} - {time_str}\n\n{content}\n"
    write_file(path, note_content)
    logger.info(f"Captured note {filename}")

    return CaptureNote(
        filename=filename,
        path=path,
        content=note_content,
        daily_note_link=daily_note_link,
        timestamp=time_str,
    )
