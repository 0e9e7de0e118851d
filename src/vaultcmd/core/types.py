"""Shared types and data structures for vaultcmd."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path


class ImportKind(StrEnum):
    """Kinds of external sources the import pipeline understands."""

    MEETING = "meeting"
    VOICE = "voice"


class SummaryStyle(StrEnum):
    """How much detail a note summary should keep."""

    BRIEF = "brief"
    DETAILED = "detailed"
    BULLETS = "bullets"


@dataclass(frozen=True)
class DailyNoteDescriptor:
    """Daily note metadata.

    ``exists`` is a snapshot taken at construction time; re-check before
    relying on it.
    """

    date_string: str
    path: Path
    exists: bool


@dataclass(frozen=True)
class CaptureNote:
    """A capture note as written to the inbox."""

    filename: str
    path: Path
    content: str
    daily_note_link: str
    timestamp: str


@dataclass(frozen=True)
class IndexEntry:
    """Entry in the search index."""

    path: Path
    filename: str
    content: str
    """First 500 characters of the file."""


SearchIndex = tuple[IndexEntry, ...]


@dataclass(frozen=True)
class SearchResult:
    """A ranked search hit (score 0 is a perfect match, 1 no match)."""

    path: Path
    filename: str
    preview: str
    score: float


@dataclass(frozen=True)
class ImportSourceFile:
    """A meeting note or voice transcript found in a drop folder."""

    filename: str
    path: Path
    content: str
    timestamp: datetime
    title: str | None = None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of importing one source file."""

    source: ImportSourceFile
    daily_note_path: Path
    archive_path: Path | None = None


@dataclass(frozen=True)
class ImportFailure:
    """A source file that failed to import, with the reason."""

    source: ImportSourceFile
    error: Exception


@dataclass
class BulkImportResult:
    """Partial-success outcome of importing a whole drop folder."""

    results: list[ImportResult] = field(default_factory=list)
    errors: list[ImportFailure] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.results)

    @property
    def failed_count(self) -> int:
        return len(self.errors)


@dataclass(frozen=True)
class CacheEntry:
    """The single cached search index slot."""

    index: SearchIndex
    vault_path: Path
    built_at: float


__all__ = [
    "BulkImportResult",
    "CacheEntry",
    "CaptureNote",
    "DailyNoteDescriptor",
    "ImportFailure",
    "ImportKind",
    "ImportResult",
    "ImportSourceFile",
    "IndexEntry",
    "SearchIndex",
    "SearchResult",
]
