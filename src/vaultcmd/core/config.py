"""Configuration management for vaultcmd."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from vaultcmd.core.errors import ConfigError, ConfigurationMissing
from vaultcmd.vault.layout import expand_path

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    return default


# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO") or "INFO"

# Vault layout defaults
DEFAULT_DAILY_DIR = "Journal/Daily"
DEFAULT_DAILY_FORMAT = "YYYY-MM-DD-ddd"
DEFAULT_INBOX_DIR = "Inbox"
NOTE_EXTENSION = ".md"

# Search index lifetime within one process
DEFAULT_INDEX_TTL_SECONDS = 5 * 60

# Optional per-vault overrides, read from the vault root
VAULT_CONFIG_FILENAME = "vault-commander.yaml"

# Default section headers, in daily note template order
DEFAULT_SECTIONS: dict[str, str] = {
    "schedule": "## Schedule",
    "tasks": "## Tasks",
    "running": "## Running",
    "meeting_notes": "## Meeting Notes",
    "voice_notes": "## Voice Notes",
    "notes": "## Notes",
    "evening_review": "## Evening Review",
}


def setup_logging() -> logging.Logger:
    """Configure and return logger."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    )
    return logging.getLogger(__name__)


class VaultConfig(BaseModel):
    """Resolved configuration passed to every core operation.

    Frozen to prevent accidental mutation.
    Extra fields are forbidden to catch typos in config.
    All paths are absolute (post ~ expansion) except the vault-relative
    ``daily_dir`` and ``inbox_dir``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    vault_path: Path
    daily_dir: str = DEFAULT_DAILY_DIR
    daily_format: str = DEFAULT_DAILY_FORMAT
    inbox_dir: str = DEFAULT_INBOX_DIR
    sections: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_SECTIONS))
    meeting_section: str = "meeting_notes"
    voice_section: str = "voice_notes"

    # External drop folders
    voice_path: Path | None = None
    meeting_path: Path | None = None
    scripts_path: Path | None = None

    # Search and import behaviour
    index_ttl_seconds: int = Field(default=DEFAULT_INDEX_TTL_SECONDS, gt=0)
    archive_imports: bool = True

    # Third-party API keys, consumed by external collaborators only
    anthropic_api_key: str | None = None
    todoist_api_key: str | None = None

    @model_validator(mode="after")
    def _check_sections(self) -> "VaultConfig":
        if not self.sections:
            raise ValueError("sections must not be empty")
        for key, marker in self.sections.items():
            if not marker.strip():
                raise ValueError(f"section {key!r} has an empty marker")
        for attr in ("meeting_section", "voice_section"):
            key = getattr(self, attr)
            if key not in self.sections:
                raise ValueError(f"{attr} {key!r} is not a configured section")
        return self

    def section_marker(self, key: str) -> str | None:
        """Return the header marker for a section key, if configured."""
        return self.sections.get(key)

    @property
    def inbox_path(self) -> Path:
        return self.vault_path / self.inbox_dir

    @property
    def daily_path(self) -> Path:
        return self.vault_path / self.daily_dir


def _optional_path(raw: str | None) -> Path | None:
    if not raw or not raw.strip():
        return None
    return expand_path(raw.strip())


def _load_vault_overrides(vault_path: Path) -> dict[str, Any]:
    """Read per-vault overrides from vault-commander.yaml, if present."""
    config_file = vault_path / VAULT_CONFIG_FILENAME
    if not config_file.exists():
        logger.debug(f"No config file at {config_file}")
        return {}

    logger.debug(f"Loading config from {config_file}")
    try:
        with open(config_file, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {config_file}: {e}")
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if raw is None:
        return {}

    if not isinstance(raw, dict):
        raise ConfigError(
            f"{VAULT_CONFIG_FILENAME} must be a mapping, got {type(raw).__name__}"
        )

    allowed = {
        "daily_dir",
        "daily_format",
        "inbox_dir",
        "sections",
        "meeting_section",
        "voice_section",
    }
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise ConfigError(
            f"Unknown keys in {config_file}: {', '.join(str(k) for k in unknown)}"
        )
    return raw


def load_config(vault_path: str | None = None) -> VaultConfig:
    """
    Resolve the vault configuration once, from the environment.

    Args:
        vault_path: Raw vault root; defaults to the VAULT_PATH variable

    Returns:
        Immutable VaultConfig

    Raises:
        ConfigurationMissing: If no vault root is configured.
        ConfigError: If the per-vault config file or a value is invalid.
    """
    raw_vault = vault_path if vault_path is not None else get_env("VAULT_PATH")
    if not raw_vault or not raw_vault.strip():
        raise ConfigurationMissing(
            "Missing VAULT_PATH - set it to the root of your note vault"
        )

    root = expand_path(raw_vault.strip())
    values: dict[str, Any] = {
        "vault_path": root,
        "daily_dir": get_env("VAULT_DAILY_DIR", DEFAULT_DAILY_DIR),
        "daily_format": get_env("VAULT_DAILY_FORMAT", DEFAULT_DAILY_FORMAT),
        "inbox_dir": get_env("VAULT_INBOX_DIR", DEFAULT_INBOX_DIR),
        "voice_path": _optional_path(get_env("VAULT_VOICE_PATH")),
        "meeting_path": _optional_path(get_env("VAULT_MEETING_PATH")),
        "scripts_path": _optional_path(get_env("VAULT_SCRIPTS_PATH")),
        "index_ttl_seconds": get_env_int("VAULT_INDEX_TTL", DEFAULT_INDEX_TTL_SECONDS),
        "archive_imports": get_env_bool("VAULT_ARCHIVE_IMPORTS", True),
        "anthropic_api_key": get_env("ANTHROPIC_API_KEY") or None,
        "todoist_api_key": get_env("TODOIST_API_KEY") or None,
    }
    values.update(_load_vault_overrides(root))

    try:
        config = VaultConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid vault configuration: {e}") from e

    logger.debug(
        f"Vault config loaded: root={config.vault_path}, "
        f"sections={len(config.sections)}"
    )
    return config
