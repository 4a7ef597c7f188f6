from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib import ui
from ..lib.files import copy_if_missing
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)


class MaterializeEnvFileStep:
    step_id = "60_materialize_env_file"
    title = "Environment file"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        if not copy_if_missing(ctx.env_template, ctx.env_file, dry_run=ctx.dry_run):
            return StepOutcome.skipped(f"{ctx.env_file.name} already present")
        ui.success("Environment file created")
        return StepOutcome.applied(f"{ctx.env_template.name} -> {ctx.env_file.name}")
