from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib import tmux, ui
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)


class EnsureSessionStep:
    step_id = "70_ensure_session"
    title = "tmux session"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        name = ctx.cfg.session_name
        if tmux.has_session(name, dry_run=ctx.dry_run):
            ui.info("Tmux session already exists")
            return StepOutcome.skipped(f"session {name} exists")

        ui.info(f"Creating new tmux session: {name}")
        tmux.new_session(name, cwd=str(ctx.repo_dir), dry_run=ctx.dry_run)
        ui.success("Tmux session created")
        return StepOutcome.applied(f"session {name} created")
