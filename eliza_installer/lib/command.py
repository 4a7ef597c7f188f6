from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from ..errors import CommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def have_binary(name: str) -> bool:
    return shutil.which(name) is not None


def sudo_prefix() -> list[str]:
    """`sudo` unless we already are root."""
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        return []
    return ["sudo"]


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    capture: bool = True,
    quiet: bool = False,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging.

    - Always logs the command (at DEBUG when quiet, e.g. UI chrome).
    - capture=False lets the child draw on the terminal (spinners, prompts).
    - dry_run logs but does not execute.
    - check raises CommandError carrying the child's exit code.
    """

    argv_list = list(argv)
    logger.log(logging.DEBUG if quiet else logging.INFO, "CMD %s", fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    p = subprocess.run(
        argv_list,
        input=input_text,
        text=True,
        stdout=subprocess.PIPE if capture else None,
        stderr=subprocess.PIPE if capture else None,
        cwd=cwd,
        env=dict(os.environ, **(env or {})),
    )
    stdout = p.stdout or ""
    stderr = p.stderr or ""

    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(argv_list, p.returncode, stderr)

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)


def run_shell(
    script: str,
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    capture: bool = True,
    dry_run: bool = False,
) -> CmdResult:
    """Run a bash snippet (pipelines, sourced shell functions)."""

    return run_cmd(["bash", "-c", script], check=check, env=env, cwd=cwd, capture=capture, dry_run=dry_run)
