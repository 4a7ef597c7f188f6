from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib import ui
from ..lib.nvm import install_nvm
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)


class EnsureRuntimeManagerStep:
    step_id = "30_ensure_runtime_manager"
    title = "NVM"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        nvm_dir = ctx.nvm_dir
        if nvm_dir.is_dir():
            ui.info("NVM already installed")
            return StepOutcome.skipped(f"{nvm_dir} exists", nvm_dir=str(nvm_dir))

        install_nvm(install_url=ctx.cfg.nvm_install_url, nvm_dir=nvm_dir, dry_run=ctx.dry_run)
        ui.success("NVM installed")
        return StepOutcome.applied(f"{ctx.cfg.nvm_version} -> {nvm_dir}", nvm_dir=str(nvm_dir))
