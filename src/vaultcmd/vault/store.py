"""Primitive file operations against the vault.

Every write is a full overwrite. Callers that need append semantics
read-modify-write through ``vaultcmd.vault.sections``.
"""

import logging
from pathlib import Path

from vaultcmd.core.errors import NotFoundError

logger = logging.getLogger(__name__)


def ensure_directory(dir_path: Path | str) -> Path:
    """Create a directory and any missing parents. Safe to call repeatedly."""
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def write_file(file_path: Path | str, content: str) -> Path:
    """
    Write content to a file, creating parent directories if needed.

    Args:
        file_path: Destination file
        content: Full file content (replaces anything already there)

    Returns:
        Path written
    """
    path = Path(file_path)
    ensure_directory(path.parent)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"Wrote {len(content)} chars to {path}")
    return path


def read_file(file_path: Path | str, errors: str = "strict") -> str:
    """
    Read a file as UTF-8 text.

    Args:
        file_path: File to read
        errors: Decoding error handler; "replace" never fails on bad bytes

    Raises:
        NotFoundError: If the file does not exist, cannot be read, or is
            not valid UTF-8 under the strict handler.
    """
    path = Path(file_path)
    try:
        return path.read_text(encoding="utf-8", errors=errors)
    except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
        raise NotFoundError(path, e.strerror) from e
    except UnicodeDecodeError as e:
        raise NotFoundError(path, f"not valid UTF-8 at byte {e.start}") from e


def file_exists(file_path: Path | str) -> bool:
    """Check if a file exists. Never raises."""
    try:
        return Path(file_path).exists()
    except (OSError, ValueError):
        return False
