from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib import ui
from ..lib.pkg import apt_install, apt_update
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)


class InstallOsPackagesStep:
    step_id = "20_install_os_packages"
    title = "System dependencies"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        packages = ctx.cfg.os_packages
        apt_update(dry_run=ctx.dry_run)
        apt_install(packages, spinner_title="Installing system dependencies...", dry_run=ctx.dry_run)
        ui.success("Dependencies installed")
        return StepOutcome.applied(" ".join(packages), packages=packages)
