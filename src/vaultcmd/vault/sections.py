"""Section-scoped insertion into Markdown notes."""

import logging
from pathlib import Path

from vaultcmd.core.errors import SectionNotFoundError
from vaultcmd.vault.store import read_file, write_file

logger = logging.getLogger(__name__)


def insert_below_marker(text: str, marker: str, content: str) -> str | None:
    """
    Splice content in directly below the first occurrence of a marker.

    The insertion point is the first newline after the marker (end of text
    if there is none). Everything before and after it is kept unchanged.

    Returns:
        New text, or None if the marker does not occur
    """
    header_index = text.find(marker)
    if header_index == -1:
        return None

    after_header = header_index + len(marker)
    insert_point = text.find("\n", after_header)
    if insert_point == -1:
        insert_point = len(text)

    return f"{text[:insert_point]}\n{content}{text[insert_point:]}"


def append_to_section(file_path: Path | str, marker: str, content: str) -> None:
    """
    Insert content below a section header in a file.

    The whole file is rewritten. The file is left untouched if the marker
    is missing.

    Args:
        file_path: Note to modify
        marker: Exact header text, e.g. "## Tasks"
        content: Text to insert

    Raises:
        NotFoundError: If the file does not exist.
        SectionNotFoundError: If the marker does not occur in the file.
    """
    path = Path(file_path)
    updated = insert_below_marker(read_file(path), marker, content)
    if updated is None:
        raise SectionNotFoundError(marker, path)

    write_file(path, updated)
    logger.debug(f"Appended {len(content)} chars below {marker!r} in {path}")
