"""Operator-facing output built on the `gum` CLI.

Every helper degrades to plain text when gum is not installed (first run,
dry runs on a bare host). Messages are mirrored into the log.
"""

from __future__ import annotations

import logging
import sys
from typing import Mapping, Sequence

from .command import CmdResult, have_binary, run_cmd

logger = logging.getLogger(__name__)

GUM = "gum"

BOX_STYLE = ["--border", "double", "--align", "center", "--width", "50", "--margin", "1 2", "--padding", "1 2"]


def gum_available() -> bool:
    return have_binary(GUM)


def _emit(text: str) -> None:
    sys.stdout.write(text if text.endswith("\n") else text + "\n")
    sys.stdout.flush()


def style(*lines: str, options: Sequence[str] = ()) -> None:
    if not gum_available():
        _emit("\n".join(lines))
        return
    r = run_cmd([GUM, "style", *options, *lines], quiet=True)
    _emit(r.stdout)


def box(*lines: str) -> None:
    style(*lines, options=BOX_STYLE)


def info(msg: str) -> None:
    logger.info(msg)
    style(f"ℹ️  {msg}", options=["--foreground", "4"])


def success(msg: str) -> None:
    logger.info(msg)
    style(f"✅ {msg}", options=["--foreground", "2"])


def error(msg: str) -> None:
    logger.error(msg)
    style(f"❌ {msg}", options=["--foreground", "1"])


def spin(
    title: str,
    argv: Sequence[str],
    *,
    cwd: str | None = None,
    env: Mapping[str, str] | None = None,
    dry_run: bool = False,
) -> CmdResult:
    """Run argv behind a spinner; the exit code is the wrapped command's."""

    if not gum_available():
        logger.info(title)
        return run_cmd(argv, cwd=cwd, env=env, dry_run=dry_run)
    return run_cmd(
        [GUM, "spin", "--spinner", "dot", "--title", title, "--show-error", "--", *argv],
        cwd=cwd,
        env=env,
        capture=False,
        dry_run=dry_run,
    )


def confirm(prompt: str) -> bool:
    if not gum_available():
        try:
            answer = input(f"{prompt} [y/N] ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}

    # 0 = yes, 1 = no, 130 = interrupted
    r = run_cmd([GUM, "confirm", prompt], check=False, capture=False, quiet=True)
    return r.returncode == 0
