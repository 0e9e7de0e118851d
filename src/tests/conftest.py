"""Shared test fixtures and configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from vaultcmd.core.config import VaultConfig


@pytest.fixture
def vault_root(tmp_path):
    """Provide an empty vault directory."""
    root = tmp_path / "MyVault"
    root.mkdir()
    return root


@pytest.fixture
def vault_config(vault_root, tmp_path):
    """VaultConfig pointing at the temp vault, with drop folders."""
    return VaultConfig(
        vault_path=vault_root,
        meeting_path=tmp_path / "meetings",
        voice_path=tmp_path / "voice",
    )


@pytest.fixture
def mock_env(monkeypatch, vault_root):
    """Set up mock environment variables."""
    env_vars = {
        "VAULT_PATH": str(vault_root),
        "LOG_LEVEL": "DEBUG",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    for key in (
        "VAULT_DAILY_DIR",
        "VAULT_DAILY_FORMAT",
        "VAULT_INBOX_DIR",
        "VAULT_VOICE_PATH",
        "VAULT_MEETING_PATH",
        "VAULT_SCRIPTS_PATH",
        "VAULT_INDEX_TTL",
        "VAULT_ARCHIVE_IMPORTS",
        "ANTHROPIC_API_KEY",
        "TODOIST_API_KEY",
    ):
        monkeypatch.delenv(key, raising=False)
    return env_vars


@pytest.fixture
def make_note():
    """Factory for note files with an optional modification time."""

    def _make_note(path: Path, content: str = "", mtime: float | None = None) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return path

    return _make_note
