from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib import ui
from ..lib.pkg import add_signed_apt_repo, apt_install, apt_update
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)


class EnsureUiToolStep:
    step_id = "10_ensure_ui_tool"
    title = "UI helper (gum)"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        if ui.gum_available():
            return StepOutcome.skipped("gum already installed")

        cfg = ctx.cfg
        ui.info("Installing gum for better UI...")
        add_signed_apt_repo(
            key_url=cfg.gum_key_url,
            keyring=cfg.gum_keyring,
            sources_list=cfg.gum_sources_list,
            repo_line=cfg.gum_repo_line,
            dry_run=ctx.dry_run,
        )
        apt_update(dry_run=ctx.dry_run)
        apt_install(["gum"], dry_run=ctx.dry_run)
        return StepOutcome.applied("gum installed")
