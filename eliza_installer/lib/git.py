from __future__ import annotations

import logging
from pathlib import Path

from . import ui
from .command import run_cmd

logger = logging.getLogger(__name__)


def clone(url: str, dest: Path, *, dry_run: bool = False) -> None:
    ui.spin(
        f"Cloning {url}...",
        ["git", "clone", url, dest.name],
        cwd=str(dest.parent),
        dry_run=dry_run,
    )


def latest_tag(repo: Path, *, dry_run: bool = False) -> str:
    r = run_cmd(["git", "describe", "--tags", "--abbrev=0"], cwd=str(repo), dry_run=dry_run)
    tag = r.stdout.strip()
    if not tag and not dry_run:
        raise RuntimeError(f"No tags found in {repo}")
    return tag


def checkout(repo: Path, ref: str, *, dry_run: bool = False) -> None:
    run_cmd(["git", "checkout", ref], cwd=str(repo), dry_run=dry_run)
