"""vaultcmd - fast, structured access to a Markdown note vault."""

__version__ = "0.1.0"
