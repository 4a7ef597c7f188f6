from __future__ import annotations

import logging

from .command import run_cmd

logger = logging.getLogger(__name__)

# pane_current_command values that mean "nothing is running in the foreground"
SHELLS = frozenset({"bash", "sh", "zsh", "fish", "dash", "ksh"})


def has_session(name: str, *, dry_run: bool = False) -> bool:
    r = run_cmd(["tmux", "has-session", "-t", name], check=False, dry_run=dry_run)
    return r.returncode == 0


def new_session(name: str, *, cwd: str | None = None, dry_run: bool = False) -> None:
    argv = ["tmux", "new-session", "-d", "-s", name]
    if cwd:
        argv += ["-c", cwd]
    run_cmd(argv, dry_run=dry_run)


def send_line(name: str, line: str, *, dry_run: bool = False) -> None:
    """Type a line into the session's active pane and press Enter.

    -l sends the text literally so words like "Enter" are not read as keys.
    """

    run_cmd(["tmux", "send-keys", "-t", name, "-l", line], dry_run=dry_run)
    run_cmd(["tmux", "send-keys", "-t", name, "Enter"], dry_run=dry_run)


def pane_command(name: str, *, dry_run: bool = False) -> str:
    r = run_cmd(
        ["tmux", "display-message", "-p", "-t", name, "#{pane_current_command}"],
        check=False,
        dry_run=dry_run,
    )
    return r.stdout.strip()


def capture_tail(name: str, *, lines: int = 20, dry_run: bool = False) -> str:
    r = run_cmd(["tmux", "capture-pane", "-p", "-t", name, "-S", f"-{lines}"], check=False, dry_run=dry_run)
    return r.stdout.rstrip()
