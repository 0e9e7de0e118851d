"""Import pipeline for external drop folders.

Meeting notes and voice transcripts are dropped as text files into folders
outside the vault. Importing one appends it to a section of today's daily
note and then renames the source in place with an archive prefix, which
hides it from every later scan. The rename is the only record of what was
imported: a crash between the append and the rename re-imports the file on
the next run.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar

from vaultcmd.core.errors import (
    AlreadyArchivedError,
    VaultCommanderError,
)
from vaultcmd.core.types import (
    BulkImportResult,
    ImportFailure,
    ImportKind,
    ImportResult,
    ImportSourceFile,
)
from vaultcmd.vault.dates import format_timestamp
from vaultcmd.vault.daily import ensure_daily_note, get_daily_note_link
from vaultcmd.vault.sections import append_to_section
from vaultcmd.vault.store import read_file

if TYPE_CHECKING:
    from vaultcmd.core.config import VaultConfig

logger = logging.getLogger(__name__)

IMPORTED_PREFIX = ".imported-"

# First lines at or above this length are not used as titles
MAX_TITLE_LENGTH = 100

_HEADER_RE = re.compile(r"^#+\s*(.+)")


def extract_title(content: str, filename: str) -> str:
    """
    Extract a meeting title.

    Prefers a leading Markdown heading, then a short first line, then the
    filename without its extension.
    """
    lines = [line for line in content.split("\n") if line.strip()]
    first_line = lines[0] if lines else ""

    header_match = _HEADER_RE.match(first_line)
    if header_match:
        return header_match.group(1).strip()

    if 0 < len(first_line) < MAX_TITLE_LENGTH:
        return first_line.strip()

    return re.sub(r"\.(md|txt)$", "", filename, flags=re.IGNORECASE)


class ImportPipeline:
    """Discover, format, append and archive source files of one kind.

    Subclasses set the kind, the daily note section they write to and how
    an entry is rendered.
    """

    kind: ClassVar[ImportKind]
    extensions: ClassVar[tuple[str, ...]] = (".md", ".txt")
    archive_prefix: ClassVar[str] = IMPORTED_PREFIX

    def __init__(self, config: VaultConfig):
        self.config = config

    # --- Discovery ---

    def is_candidate(self, path: Path) -> bool:
        name = path.name
        if name.startswith(".") or name.startswith(self.archive_prefix):
            return False
        return path.suffix.lower() in self.extensions and path.is_file()

    def read_entry(self, path: Path) -> ImportSourceFile:
        """Read one source file into an ImportSourceFile."""
        # Drop folders hold text from other tools; bad bytes become U+FFFD
        content = read_file(path, errors="replace")
        return ImportSourceFile(
            filename=path.name,
            path=path,
            content=content,
            timestamp=datetime.fromtimestamp(path.stat().st_mtime),
        )

    @property
    def source_dir(self) -> Path | None:
        """The configured drop folder for this kind, if any."""
        return None

    def list_sources(
        self, source_dir: Path | str | None = None
    ) -> list[ImportSourceFile]:
        """
        List importable files, oldest first.

        Hidden and already-archived files are skipped. A missing or
        unreadable directory yields an empty list.

        Args:
            source_dir: Drop folder to scan (defaults to the configured one)

        Returns:
            Source files sorted by ascending modification time
        """
        if source_dir is None:
            source_dir = self.source_dir
        if source_dir is None:
            return []
        directory = Path(source_dir)
        try:
            candidates = sorted(p for p in directory.iterdir() if self.is_candidate(p))
        except OSError as e:
            logger.debug(f"Cannot scan {directory}: {e}")
            return []

        entries: list[ImportSourceFile] = []
        for path in candidates:
            try:
                entries.append(self.read_entry(path))
            except OSError as e:
                logger.warning(f"Skipping unreadable {self.kind} file {path}: {e}")
        entries.sort(key=lambda entry: entry.timestamp)
        return entries

    def pending_count(self, source_dir: Path | str | None = None) -> int:
        """Count files waiting to be imported."""
        return len(self.list_sources(source_dir))

    # --- Import ---

    @property
    def section_marker(self) -> str:
        """Header of the daily note section entries go under. Subclasses override."""
        raise NotImplementedError(f"{type(self).__name__}.section_marker")

    def format(self, entry: ImportSourceFile) -> str:
        """Render an entry for the daily note. Subclasses override."""
        raise NotImplementedError(f"{type(self).__name__}.format")

    def archive_path_for(self, entry: ImportSourceFile) -> Path:
        return entry.path.parent / f"{self.archive_prefix}{entry.filename}"

    def import_one(
        self,
        entry: ImportSourceFile,
        archive: bool = True,
        target_date: date | datetime | None = None,
    ) -> ImportResult:
        """
        Import one source file into the daily note.

        Args:
            entry: Source file from list_sources()
            archive: Rename the source with the archive prefix afterwards
            target_date: Daily note date (defaults to today)

        Returns:
            ImportResult with the daily note and archive paths

        Raises:
            AlreadyArchivedError: If the archive name is already taken. The
                daily note is not modified in that case.
            SectionNotFoundError: If the daily note lacks the target section.
        """
        archive_path = self.archive_path_for(entry) if archive else None
        if archive_path is not None and archive_path.exists():
            raise AlreadyArchivedError(archive_path)

        daily_note_path = ensure_daily_note(self.config, target_date)
        append_to_section(daily_note_path, self.section_marker, self.format(entry))

        if archive_path is not None:
            entry.path.rename(archive_path)
            logger.info(
                f"Imported {self.kind} {entry.filename}, archived as {archive_path.name}"
            )
        else:
            logger.info(f"Imported {self.kind} {entry.filename}")

        return ImportResult(
            source=entry,
            daily_note_path=daily_note_path,
            archive_path=archive_path,
        )

    def import_all(
        self,
        source_dir: Path | str | None = None,
        archive: bool = True,
        target_date: date | datetime | None = None,
    ) -> BulkImportResult:
        """
        Import every pending file, continuing past per-file failures.

        Returns:
            BulkImportResult with the successes and the captured failures
        """
        outcome = BulkImportResult()
        for entry in self.list_sources(source_dir):
            try:
                outcome.results.append(self.import_one(entry, archive, target_date))
            except (VaultCommanderError, OSError) as e:
                logger.warning(f"Failed to import {self.kind} {entry.filename}: {e}")
                outcome.errors.append(ImportFailure(source=entry, error=e))
        return outcome


class MeetingImporter(ImportPipeline):
    """Meeting notes, appended under the meeting notes section."""

    kind = ImportKind.MEETING

    @property
    def source_dir(self) -> Path | None:
        return self.config.meeting_path

    def read_entry(self, path: Path) -> ImportSourceFile:
        entry = super().read_entry(path)
        return replace(entry, title=extract_title(entry.content, entry.filename))

    @property
    def section_marker(self) -> str:
        return self.config.sections[self.config.meeting_section]

    def format(self, entry: ImportSourceFile) -> str:
        title = entry.title or extract_title(entry.content, entry.filename)
        time_str = format_timestamp(entry.timestamp)
        return f"### {title} ({time_str})\n\n{entry.content.strip()}\n"


class VoiceImporter(ImportPipeline):
    """Voice transcripts, appended under the voice notes section."""

    kind = ImportKind.VOICE

    @property
    def source_dir(self) -> Path | None:
        return self.config.voice_path

    @property
    def section_marker(self) -> str:
        return self.config.sections[self.config.voice_section]

    def format(self, entry: ImportSourceFile) -> str:
        link = get_daily_note_link(entry.timestamp, self.config.daily_format)
        time_str = format_timestamp(entry.timestamp)
        return f"{link} - {time_str} (voice)\n\n{entry.content.strip()}\n"


def get_importer(config: VaultConfig, kind: ImportKind | str) -> ImportPipeline:
    """Get the import pipeline for a kind of source."""
    match ImportKind(kind):
        case ImportKind.MEETING:
            return MeetingImporter(config)
        case ImportKind.VOICE:
            return VoiceImporter(config)
    raise ValueError(f"Unknown import kind: {kind}")
