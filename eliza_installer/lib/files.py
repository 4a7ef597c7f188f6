from __future__ import annotations

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def copy_if_missing(src: Path, dst: Path, *, dry_run: bool = False) -> bool:
    """Copy src to dst unless dst exists. Returns True when a copy happened."""

    if dst.exists():
        logger.info("%s exists; leaving it untouched", dst)
        return False

    if dry_run:
        logger.info("Would copy %s -> %s", src, dst)
        return True

    if not src.exists():
        raise FileNotFoundError(str(src))

    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
    return True
