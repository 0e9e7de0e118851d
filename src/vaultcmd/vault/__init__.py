"""Vault module: file operations against a Markdown note vault.

The vault is a plain directory tree of Markdown notes. This package holds
the operations that read and mutate it:
- Daily notes created lazily from a section template
- Section-scoped appends into existing notes
- Timestamped capture notes in the inbox
- Imports of meeting notes and voice transcripts from drop folders
- An in-memory fuzzy search index
"""

from vaultcmd.vault.layout import (
    build_obsidian_uri,
    expand_path,
    note_uri,
    relative_vault_path,
    vault_name,
)

__all__ = [
    "build_obsidian_uri",
    "expand_path",
    "note_uri",
    "relative_vault_path",
    "vault_name",
]
