from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Sequence

from . import ui
from .command import fmt_argv, run_cmd, run_shell, sudo_prefix

logger = logging.getLogger(__name__)


def apt_update(*, dry_run: bool = False) -> None:
    ui.spin("Refreshing package lists...", [*sudo_prefix(), "apt-get", "update"], dry_run=dry_run)


def apt_install(
    packages: Sequence[str],
    *,
    spinner_title: str | None = None,
    dry_run: bool = False,
) -> None:
    if not packages:
        return
    ui.spin(
        spinner_title or f"Installing {', '.join(packages)}...",
        [*sudo_prefix(), "apt-get", "install", "-y", *packages],
        dry_run=dry_run,
    )


def add_signed_apt_repo(
    *,
    key_url: str,
    keyring: str,
    sources_list: str,
    repo_line: str,
    dry_run: bool = False,
) -> None:
    """Register an apt source whose packages are verified by a dearmored key.

    repo_line is the part after `deb`; the signed-by option is added here.
    """

    sudo = sudo_prefix()
    run_cmd([*sudo, "mkdir", "-p", str(Path(keyring).parent)], dry_run=dry_run)

    gpg = fmt_argv([*sudo, "gpg", "--dearmor", "--yes", "-o", keyring])
    run_shell(f"set -o pipefail; curl -fsSL {shlex.quote(key_url)} | {gpg}", dry_run=dry_run)

    line = f"deb [signed-by={keyring}] {repo_line}\n"
    run_cmd([*sudo, "tee", sources_list], input_text=line, dry_run=dry_run)
    logger.info("Configured apt source %s: %s", sources_list, line.strip())
