"""Vault layout and path helpers.

Path resolution for the vault root and the addressing scheme used to open
notes in the external viewer.
"""

import os
from pathlib import Path
from urllib.parse import quote

# Fallback display name for a vault path without segments
DEFAULT_VAULT_NAME = "vault"

# Characters JavaScript's encodeURIComponent leaves alone
_URI_SAFE = "-_.!~*'()"


def expand_path(raw: str) -> Path:
    """
    Expand a user-supplied path into a normalized absolute path.

    A leading ``~`` is replaced with the home directory; anything else is
    resolved against the current working directory.

    Args:
        raw: Path as typed by the user

    Returns:
        Absolute path
    """
    if raw.startswith("~"):
        raw = os.path.expanduser(raw)
    return Path(os.path.abspath(raw))


def vault_name(vault_path: Path | str) -> str:
    """
    Get the display name of a vault (last non-empty path segment).

    Args:
        vault_path: Vault root

    Returns:
        Vault name, or "vault" if the path has no segments
    """
    segments = [s for s in str(vault_path).replace("\\", "/").split("/") if s]
    return segments[-1] if segments else DEFAULT_VAULT_NAME


def relative_vault_path(vault_path: Path | str, file_path: Path | str) -> str:
    """
    Get a note's path relative to the vault root, without ``.md``.

    Args:
        vault_path: Vault root
        file_path: Absolute path to a note inside the vault

    Returns:
        Vault-relative path using forward slashes
    """
    rel = Path(os.path.relpath(file_path, vault_path)).as_posix()
    if rel.endswith(".md"):
        rel = rel[: -len(".md")]
    return rel


def build_obsidian_uri(name: str, relative_path: str) -> str:
    """
    Build the viewer URI for opening a note.

    Args:
        name: Vault display name
        relative_path: Vault-relative note path without extension

    Returns:
        obsidian:// URI with both components percent-encoded
    """
    return (
        f"obsidian://open?vault={quote(name, safe=_URI_SAFE)}"
        f"&file={quote(relative_path, safe=_URI_SAFE)}"
    )


def note_uri(vault_path: Path | str, file_path: Path | str) -> str:
    """Build the viewer URI for a note given its absolute path."""
    return build_obsidian_uri(
        vault_name(vault_path), relative_vault_path(vault_path, file_path)
    )
