from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Sequence

from . import ui
from .command import CmdResult, run_shell

logger = logging.getLogger(__name__)


def nvm_script(nvm_dir: Path) -> Path:
    return nvm_dir / "nvm.sh"


def source_lines(nvm_dir: Path) -> list[str]:
    """Shell lines that load nvm into an interactive shell."""

    return [
        f"export NVM_DIR={shlex.quote(str(nvm_dir))}",
        '[ -s "$NVM_DIR/nvm.sh" ] && . "$NVM_DIR/nvm.sh"',
    ]


def install_nvm(*, install_url: str, nvm_dir: Path, dry_run: bool = False) -> None:
    """Run nvm's install.sh into nvm_dir.

    install.sh refuses an explicit NVM_DIR that does not exist, so the directory
    is created first and removed again if the installer leaves it empty.
    """

    created = False
    if not dry_run and not nvm_dir.exists():
        nvm_dir.mkdir(parents=True)
        created = True
    try:
        ui.spin(
            "Installing NVM...",
            ["bash", "-c", f"set -o pipefail; curl -fsSL -o- {shlex.quote(install_url)} | bash"],
            env={"NVM_DIR": str(nvm_dir)},
            dry_run=dry_run,
        )
    except Exception:
        if created and not any(nvm_dir.iterdir()):
            nvm_dir.rmdir()
        raise
    if not dry_run and not nvm_script(nvm_dir).exists():
        raise RuntimeError(f"nvm installer finished but {nvm_script(nvm_dir)} is missing")


def nvm_exec(
    nvm_dir: Path,
    commands: Sequence[str],
    *,
    title: str | None = None,
    cwd: str | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run commands in a bash that has sourced nvm.sh.

    nvm is a shell function, so each invocation loads it afresh; commands are
    chained with && and the first failure ends the chain.
    """

    script = " && ".join([f". {shlex.quote(str(nvm_script(nvm_dir)))}", *commands])
    env = {"NVM_DIR": str(nvm_dir)}
    if title:
        return ui.spin(title, ["bash", "-c", script], cwd=cwd, env=env, dry_run=dry_run)
    return run_shell(script, cwd=cwd, env=env, dry_run=dry_run)
