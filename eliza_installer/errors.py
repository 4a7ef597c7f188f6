from __future__ import annotations

from typing import Sequence


class InstallerError(RuntimeError):
    """Base class for installer failures."""


class CommandError(InstallerError):
    """A foreground command exited non-zero."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {' '.join(self.argv)}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)


class InstallCancelled(Exception):
    """The operator declined the confirmation prompt."""
