"""Allow running as ``python -m vaultcmd``."""

from vaultcmd.interfaces.cli.app import main

if __name__ == "__main__":
    main()
