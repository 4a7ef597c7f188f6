from __future__ import annotations

import logging
import shlex
import time
from typing import List

from ..context import InstallCtx
from ..lib import tmux, ui
from ..lib.nvm import nvm_exec, source_lines
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)

START_SERVICES = "pnpm start & pnpm start:client"


class BuildAndLaunchStep:
    step_id = "80_build_and_launch"
    title = "Build and launch"

    def launch_lines(self, ctx: InstallCtx) -> List[str]:
        return [
            f"cd {shlex.quote(str(ctx.repo_dir))}",
            *source_lines(ctx.nvm_dir),
            f"nvm use {shlex.quote(ctx.cfg.node_alias)}",
            START_SERVICES,
        ]

    def _build(self, ctx: InstallCtx) -> None:
        use = f"nvm use {shlex.quote(ctx.cfg.node_alias)} >/dev/null"
        cwd = str(ctx.repo_dir)

        nvm_exec(
            ctx.nvm_dir,
            [use, "pnpm clean", "pnpm install --no-frozen-lockfile"],
            title="Installing project dependencies...",
            cwd=cwd,
            dry_run=ctx.dry_run,
        )
        ui.success("Dependencies installed")

        nvm_exec(ctx.nvm_dir, [use, "pnpm build"], title="Building project...", cwd=cwd, dry_run=ctx.dry_run)
        ui.success("Project built successfully")

    def _check_launch(self, ctx: InstallCtx) -> tuple[str, str]:
        """Look at the pane once the launch delay has passed.

        A pane back at its shell means the foreground service already exited.
        """

        name = ctx.cfg.session_name
        current = tmux.pane_command(name, dry_run=ctx.dry_run)
        if current and current in tmux.SHELLS:
            return "exited", tmux.capture_tail(name, dry_run=ctx.dry_run)
        return "running", ""

    def run(self, ctx: InstallCtx) -> StepOutcome:
        self._build(ctx)

        name = ctx.cfg.session_name
        ui.info("Starting Eliza services in tmux session...")
        for line in self.launch_lines(ctx):
            tmux.send_line(name, line, dry_run=ctx.dry_run)

        if ctx.cfg.launch_delay_s > 0 and not ctx.dry_run:
            time.sleep(ctx.cfg.launch_delay_s)

        status, tail = self._check_launch(ctx)
        if status == "exited":
            ui.error(f"Eliza services exited right after launch; run `tmux attach -t {name}` to inspect")
            logger.error("Pane output:\n%s", tail)
            return StepOutcome.applied("services launched but exited", launch_status=status, pane_tail=tail)

        return StepOutcome.applied(f"services launched in {name}", launch_status=status)
