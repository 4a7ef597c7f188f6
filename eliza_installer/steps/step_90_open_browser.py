from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib.browser import open_url
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)


class OpenBrowserStep:
    step_id = "90_open_browser"
    title = "Browser"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        url = ctx.cfg.app_url
        if not ctx.open_browser:
            return StepOutcome.skipped("disabled by --no-browser", url=url)

        opener = open_url(url, dry_run=ctx.dry_run)
        if opener is None:
            return StepOutcome.skipped("no browser opener found", url=url)
        return StepOutcome.applied(f"opened with {opener}", url=url)
