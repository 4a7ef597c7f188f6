from __future__ import annotations

import logging
import shlex

from ..context import InstallCtx
from ..lib import ui
from ..lib.nvm import nvm_exec
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)


class SetupRuntimeStep:
    step_id = "40_setup_runtime"
    title = "Node.js and pnpm"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        version = shlex.quote(ctx.cfg.node_version)
        alias = shlex.quote(ctx.cfg.node_alias)

        nvm_exec(
            ctx.nvm_dir,
            [f"nvm install {version}", f"nvm alias {alias} {version}", f"nvm use {alias}"],
            title=f"Setting up Node.js {ctx.cfg.node_version}...",
            dry_run=ctx.dry_run,
        )
        nvm_exec(
            ctx.nvm_dir,
            [f"nvm use {alias} >/dev/null", "npm install -g pnpm"],
            title="Installing pnpm...",
            dry_run=ctx.dry_run,
        )
        ui.success("Node.js and pnpm setup complete")
        return StepOutcome.applied(
            f"node {ctx.cfg.node_version} as {ctx.cfg.node_alias}",
            node_version=ctx.cfg.node_version,
            alias=ctx.cfg.node_alias,
        )
