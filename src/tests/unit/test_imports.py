"""Tests for vaultcmd.vault.imports module."""

import os
from datetime import datetime

import pytest

from vaultcmd.core.config import VaultConfig
from vaultcmd.core.errors import AlreadyArchivedError
from vaultcmd.core.types import ImportKind
from vaultcmd.vault.daily import get_daily_note_path
from vaultcmd.vault.imports import (
    IMPORTED_PREFIX,
    ImportPipeline,
    MeetingImporter,
    VoiceImporter,
    extract_title,
    get_importer,
)

FIXED_NOW = datetime(2026, 1, 15, 14, 35, 42)

# Local modification times on 2026-01-15
T_0900 = datetime(2026, 1, 15, 9, 0).timestamp()
T_1030 = datetime(2026, 1, 15, 10, 30).timestamp()
T_1100 = datetime(2026, 1, 15, 11, 0).timestamp()


@pytest.fixture
def meetings_dir(vault_config):
    path = vault_config.meeting_path
    path.mkdir()
    return path


@pytest.fixture
def voice_dir(vault_config):
    path = vault_config.voice_path
    path.mkdir()
    return path


class TestExtractTitle:
    """Tests for extract_title."""

    def test_markdown_heading(self):
        """A leading heading is used without its hashes."""
        assert extract_title("\n\n## Standup  \nbody", "x.md") == "Standup"

    def test_short_first_line(self):
        """A short first line is used as-is."""
        assert extract_title("Design review\nnotes", "x.md") == "Design review"

    def test_long_first_line_falls_back_to_filename(self):
        """Long first lines fall back to the filename stem."""
        assert extract_title("x" * 120, "Weekly Sync.txt") == "Weekly Sync"

    def test_empty_content(self):
        """Empty content falls back to the filename stem."""
        assert extract_title("", "notes.MD") == "notes"


class TestListSources:
    """Tests for listing drop folder contents."""

    def test_missing_directory_is_empty(self, vault_config, tmp_path):
        """A missing folder yields an empty list."""
        importer = MeetingImporter(vault_config)

        assert importer.list_sources(tmp_path / "nowhere") == []
        assert importer.pending_count(tmp_path / "nowhere") == 0

    def test_unconfigured_folder_is_empty(self, vault_root):
        """No configured folder and no argument yields an empty list."""
        importer = VoiceImporter(VaultConfig(vault_path=vault_root))

        assert importer.list_sources() == []

    def test_filters_and_sorts(self, vault_config, meetings_dir, make_note):
        """Only visible .md/.txt files, oldest first."""
        make_note(meetings_dir / "b.md", "# Later", mtime=T_1030)
        make_note(meetings_dir / "a.txt", "Earlier", mtime=T_0900)
        make_note(meetings_dir / "audio.m4a", "binary")
        make_note(meetings_dir / ".hidden.md", "hidden")
        make_note(meetings_dir / f"{IMPORTED_PREFIX}old.md", "done")
        (meetings_dir / "folder.md").mkdir()

        entries = MeetingImporter(vault_config).list_sources()

        assert [e.filename for e in entries] == ["a.txt", "b.md"]
        assert entries[0].content == "Earlier"
        assert entries[0].timestamp == datetime.fromtimestamp(T_0900)
        assert entries[1].title == "Later"

    def test_voice_entries_have_no_title(self, vault_config, voice_dir, make_note):
        """Titles are only derived for meeting notes."""
        make_note(voice_dir / "memo.txt", "hello")

        (entry,) = VoiceImporter(vault_config).list_sources()

        assert entry.title is None


class TestFormat:
    """Tests for entry formatting."""

    def test_meeting_format(self, vault_config, meetings_dir, make_note):
        """Meeting notes become an H3 block with the time."""
        make_note(meetings_dir / "m.md", "# Standup\n\nShipped it.\n\n", mtime=T_0900)
        importer = MeetingImporter(vault_config)
        (entry,) = importer.list_sources()

        assert importer.format(entry) == (
            "### Standup (9:00am)\n\n# Standup\n\nShipped it.\n"
        )

    def test_voice_format(self, vault_config, voice_dir, make_note):
        """Voice notes get a backlink, time and (voice) tag."""
        make_note(voice_dir / "v.txt", "  remember the thing \n", mtime=T_1030)
        importer = VoiceImporter(vault_config)
        (entry,) = importer.list_sources()

        assert importer.format(entry) == (
            "[[2026-01-15-Thu]] - 10:30am (voice)\n\nremember the thing\n"
        )


class TestImportOne:
    """Tests for importing a single file."""

    def test_appends_and_archives(self, vault_config, meetings_dir, make_note):
        """Content is appended to the meeting section and the source archived."""
        make_note(meetings_dir / "m.md", "# Retro\nwent well", mtime=T_0900)
        importer = MeetingImporter(vault_config)
        (entry,) = importer.list_sources()

        result = importer.import_one(entry, target_date=FIXED_NOW)

        daily = get_daily_note_path(vault_config, FIXED_NOW)
        assert result.daily_note_path == daily
        expected = "## Meeting Notes\n### Retro (9:00am)\n\n# Retro\nwent well\n"
        assert expected in daily.read_text()
        assert result.archive_path == meetings_dir / ".imported-m.md"
        assert result.archive_path.exists()
        assert not (meetings_dir / "m.md").exists()

    def test_rescan_excludes_archived(self, vault_config, meetings_dir, make_note):
        """After archiving, the file is gone from listings under either name."""
        make_note(meetings_dir / "m.md", "notes")
        importer = MeetingImporter(vault_config)
        (entry,) = importer.list_sources()

        importer.import_one(entry, target_date=FIXED_NOW)

        names = [e.filename for e in importer.list_sources()]
        assert "m.md" not in names
        assert ".imported-m.md" not in names
        assert names == []

    def test_no_archive_keeps_source(self, vault_config, voice_dir, make_note):
        """archive=False leaves the source in place."""
        make_note(voice_dir / "v.txt", "memo")
        importer = VoiceImporter(vault_config)
        (entry,) = importer.list_sources()

        result = importer.import_one(entry, archive=False, target_date=FIXED_NOW)

        assert result.archive_path is None
        assert (voice_dir / "v.txt").exists()
        daily = get_daily_note_path(vault_config, FIXED_NOW).read_text()
        assert "## Voice Notes\n[[" in daily

    def test_archive_collision(self, vault_config, meetings_dir, make_note):
        """An existing archive name raises and leaves the daily note alone."""
        make_note(meetings_dir / "m.md", "new notes")
        make_note(meetings_dir / ".imported-m.md", "old notes")
        importer = MeetingImporter(vault_config)
        (entry,) = importer.list_sources()

        with pytest.raises(AlreadyArchivedError) as exc_info:
            importer.import_one(entry, target_date=FIXED_NOW)

        assert exc_info.value.archive_path == meetings_dir / ".imported-m.md"
        assert (meetings_dir / ".imported-m.md").read_text() == "old notes"
        assert (meetings_dir / "m.md").exists()
        assert not get_daily_note_path(vault_config, FIXED_NOW).exists()


class TestImportAll:
    """Tests for bulk import."""

    def test_partial_success(self, vault_config, meetings_dir, make_note):
        """One collision is captured; the other files still import."""
        make_note(meetings_dir / "one.md", "first", mtime=T_0900)
        make_note(meetings_dir / "two.md", "second", mtime=T_1030)
        make_note(meetings_dir / "three.md", "third", mtime=T_1100)
        make_note(meetings_dir / ".imported-two.md", "archived earlier")

        outcome = MeetingImporter(vault_config).import_all(target_date=FIXED_NOW)

        assert outcome.imported_count == 2
        assert outcome.failed_count == 1
        assert [r.source.filename for r in outcome.results] == ["one.md", "three.md"]
        failure = outcome.errors[0]
        assert failure.source.filename == "two.md"
        assert isinstance(failure.error, AlreadyArchivedError)

    def test_processes_oldest_first(self, vault_config, voice_dir, make_note):
        """Entries are appended in chronological order."""
        make_note(voice_dir / "late.txt", "LATE", mtime=T_1030)
        make_note(voice_dir / "early.txt", "EARLY", mtime=T_0900)

        VoiceImporter(vault_config).import_all(target_date=FIXED_NOW)

        daily = get_daily_note_path(vault_config, FIXED_NOW).read_text()
        # Each insert goes directly under the header, so the newest ends up first
        assert daily.index("LATE") < daily.index("EARLY")

    def test_non_utf8_source_imports_with_replacement(
        self, vault_config, meetings_dir, make_note
    ):
        """A Latin-1 file neither aborts listing nor the rest of the batch."""
        make_note(meetings_dir / "good.md", "# Good\nall fine", mtime=T_0900)
        latin1 = meetings_dir / "latin1.txt"
        latin1.write_bytes(b"caf\xe9 notes")
        os.utime(latin1, (T_1030, T_1030))
        importer = MeetingImporter(vault_config)

        assert importer.pending_count() == 2
        outcome = importer.import_all(target_date=FIXED_NOW)

        assert outcome.imported_count == 2
        assert outcome.errors == []
        daily = get_daily_note_path(vault_config, FIXED_NOW).read_text()
        assert "caf\ufffd notes" in daily
        assert "all fine" in daily

    def test_empty_folder(self, vault_config, voice_dir):
        """Nothing to import is an empty success."""
        outcome = VoiceImporter(vault_config).import_all(target_date=FIXED_NOW)

        assert outcome.results == []
        assert outcome.errors == []


class TestImportPipelineBase:
    """Tests for the shared base class."""

    def test_subclass_hooks_required(self, vault_config, voice_dir, make_note):
        """The base class does not know where or how to write entries."""
        make_note(voice_dir / "v.txt", "memo")
        base = ImportPipeline(vault_config)
        (entry,) = base.list_sources(voice_dir)

        with pytest.raises(NotImplementedError, match="ImportPipeline.format"):
            base.format(entry)
        with pytest.raises(NotImplementedError, match="section_marker"):
            base.section_marker


class TestGetImporter:
    """Tests for get_importer."""

    @pytest.mark.parametrize(
        "kind,cls",
        [
            (ImportKind.MEETING, MeetingImporter),
            ("voice", VoiceImporter),
        ],
    )
    def test_kinds(self, vault_config, kind, cls):
        """Kinds map to their pipelines."""
        assert isinstance(get_importer(vault_config, kind), cls)

    def test_unknown_kind(self, vault_config):
        """Unknown kinds are rejected."""
        with pytest.raises(ValueError):
            get_importer(vault_config, "fax")
