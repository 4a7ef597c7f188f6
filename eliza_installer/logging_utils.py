from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

FALLBACK_LOG_NAME = "eliza-installer.log"


def configure_logging(
    log_path: str,
    level: int = logging.INFO,
    also_console: bool = False,
) -> str:
    """Configure logging.

    Every command and decision goes to the log file. Console output is the
    gum UI, so the console handler is only added for --verbose runs.

    Notes:
    - If the requested log directory is not writable we fall back to a file in
      the current working directory and report both paths in the run record.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_eliza_configured", False):
        return getattr(logger, "_eliza_log_path", log_path)

    chosen_path = log_path
    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
    except OSError:
        chosen_path = str(Path.cwd() / FALLBACK_LOG_NAME)
        file_handler = logging.FileHandler(chosen_path)
    file_handler.setFormatter(fmt)
    handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_eliza_configured", True)
    setattr(logger, "_eliza_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
