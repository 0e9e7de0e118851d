"""vaultcmd core library - configuration, types and the index cache."""

from typing import TYPE_CHECKING

from vaultcmd.core.errors import (
    AlreadyArchivedError,
    ConfigError,
    ConfigurationMissing,
    NotFoundError,
    SectionNotFoundError,
    VaultCommanderError,
)

if TYPE_CHECKING:
    from vaultcmd.core.cache import IndexCache
    from vaultcmd.core.config import VaultConfig, load_config

__all__ = [
    # Errors
    "AlreadyArchivedError",
    "ConfigError",
    "ConfigurationMissing",
    "NotFoundError",
    "SectionNotFoundError",
    "VaultCommanderError",
    # Lazily loaded
    "IndexCache",
    "VaultConfig",
    "load_config",
]


def __getattr__(name: str):
    if name == "IndexCache":
        from vaultcmd.core.cache import IndexCache

        return IndexCache
    if name == "VaultConfig":
        from vaultcmd.core.config import VaultConfig

        return VaultConfig
    if name == "load_config":
        from vaultcmd.core.config import load_config

        return load_config
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
