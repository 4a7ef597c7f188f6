from __future__ import annotations

import logging

from . import ui
from .command import have_binary, run_cmd

logger = logging.getLogger(__name__)

OPENERS = ("xdg-open", "open")


def open_url(url: str, *, dry_run: bool = False) -> str | None:
    """Best-effort browser launch.

    Returns the opener used, or None when the URL was only printed.
    """

    for opener in OPENERS:
        if not have_binary(opener):
            continue
        r = run_cmd([opener, url], check=False, dry_run=dry_run)
        if r.ok:
            return opener
        logger.warning("%s exited %s for %s", opener, r.returncode, url)
    ui.info(f"Please open {url} in your browser")
    return None
