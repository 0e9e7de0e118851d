"""Tests for vaultcmd.vault.daily module."""

from datetime import date, datetime

import pytest

from vaultcmd.core.config import VaultConfig
from vaultcmd.core.errors import SectionNotFoundError
from vaultcmd.vault.daily import (
    append_to_daily,
    ensure_daily_note,
    format_daily_date,
    get_daily_note_info,
    get_daily_note_link,
    get_daily_note_path,
    get_daily_note_relative_path,
    get_daily_note_template,
)

FIXED_NOW = datetime(2026, 1, 15, 14, 35, 42)

EXPECTED_TEMPLATE = """## Schedule

## Tasks

## Running

## Meeting Notes

## Voice Notes

## Notes

## Evening Review
"""


class TestTemplate:
    """Tests for the daily note template."""

    def test_default_template(self):
        """Seven headers in order, blank line between, no title."""
        assert get_daily_note_template() == EXPECTED_TEMPLATE

    def test_custom_markers(self):
        """Template follows the configured markers."""
        assert get_daily_note_template(["## A", "## B"]) == "## A\n\n## B\n"


class TestPaths:
    """Tests for daily note path helpers."""

    def test_format_daily_date(self):
        """Default format includes the short weekday."""
        assert format_daily_date(FIXED_NOW) == "2026-01-15-Thu"

    def test_path(self, vault_config, vault_root):
        """Path is vault/daily_dir/date.md."""
        path = get_daily_note_path(vault_config, FIXED_NOW)

        assert path == vault_root / "Journal" / "Daily" / "2026-01-15-Thu.md"

    def test_path_custom_format(self, vault_root):
        """The configured date format is used."""
        cfg = VaultConfig(
            vault_path=vault_root, daily_dir="Daily", daily_format="YYYY-MM-DD"
        )

        path = get_daily_note_path(cfg, date(2026, 2, 3))

        assert path == vault_root / "Daily" / "2026-02-03.md"

    def test_relative_path(self, vault_config):
        """Relative path omits the extension."""
        assert get_daily_note_relative_path(vault_config, FIXED_NOW) == (
            "Journal/Daily/2026-01-15-Thu"
        )

    def test_backlink(self):
        """Backlinks wrap the formatted date in double brackets."""
        assert get_daily_note_link(FIXED_NOW) == "[[2026-01-15-Thu]]"
        assert get_daily_note_link(FIXED_NOW, "YYYY-MM-DD") == "[[2026-01-15]]"


class TestDailyNoteInfo:
    """Tests for get_daily_note_info."""

    def test_reports_existence_snapshot(self, vault_config):
        """exists reflects the file at call time only."""
        before = get_daily_note_info(vault_config, FIXED_NOW)
        ensure_daily_note(vault_config, FIXED_NOW)
        after = get_daily_note_info(vault_config, FIXED_NOW)

        assert before.date_string == "2026-01-15-Thu"
        assert before.exists is False
        assert after.exists is True
        assert before.path == after.path


class TestEnsureDailyNote:
    """Tests for ensure_daily_note."""

    def test_creates_from_template(self, vault_config):
        """A missing note is created with the template."""
        path = ensure_daily_note(vault_config, FIXED_NOW)

        assert path.read_text() == EXPECTED_TEMPLATE

    def test_second_call_is_noop(self, vault_config):
        """A second call never rewrites the note, whatever the template."""
        path = ensure_daily_note(vault_config, FIXED_NOW)
        first = path.read_text()

        ensure_daily_note(vault_config, FIXED_NOW, template="## Something else\n")

        assert path.read_text() == first

    def test_keeps_user_edits(self, vault_config):
        """Existing content is never overwritten."""
        path = get_daily_note_path(vault_config, FIXED_NOW)
        path.parent.mkdir(parents=True)
        path.write_text("my own note\n")

        assert ensure_daily_note(vault_config, FIXED_NOW) == path
        assert path.read_text() == "my own note\n"


class TestAppendToDaily:
    """Tests for append_to_daily."""

    def test_appends_under_section(self, vault_config):
        """Content lands directly below the section header."""
        path = append_to_daily(vault_config, "tasks", "- [ ] ship it", FIXED_NOW)

        text = path.read_text()
        assert "## Tasks\n- [ ] ship it\n\n## Running" in text

    def test_unknown_section_key(self, vault_config):
        """Unknown keys raise SectionNotFoundError without creating the note."""
        with pytest.raises(SectionNotFoundError, match="nope"):
            append_to_daily(vault_config, "nope", "text", FIXED_NOW)

        assert not get_daily_note_path(vault_config, FIXED_NOW).exists()
