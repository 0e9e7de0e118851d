"""Error hierarchy for vault operations."""

from pathlib import Path


class VaultCommanderError(Exception):
    """Base error for all classified vault failures."""


class ConfigError(VaultCommanderError):
    """Raised when configuration is invalid."""


class ConfigurationMissing(ConfigError):
    """Raised when a required setting (the vault root) is absent or empty."""


class NotFoundError(VaultCommanderError, FileNotFoundError):
    """Raised when a file to read does not exist or cannot be read."""

    def __init__(self, path: Path | str, reason: str | None = None):
        self.path = Path(path)
        message = f"File not found: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]


class SectionNotFoundError(VaultCommanderError):
    """Raised when a section marker is absent from the target file."""

    def __init__(self, marker: str, path: Path | str | None = None):
        self.marker = marker
        self.path = Path(path) if path is not None else None
        if self.path is None:
            message = f'Section "{marker}" not found'
        else:
            message = f'Section "{marker}" not found in {self.path}'
        super().__init__(message)


class AlreadyArchivedError(VaultCommanderError):
    """Raised when an import archive target already exists."""

    def __init__(self, archive_path: Path | str):
        self.archive_path = Path(archive_path)
        super().__init__(f"Archive file already exists: {self.archive_path}")
