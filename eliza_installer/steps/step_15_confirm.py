from __future__ import annotations

import logging

from ..context import InstallCtx
from ..errors import InstallCancelled
from ..lib import ui
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)

BANNER = r"""Welcome to

 EEEEEE LL    IIII ZZZZZZZ  AAAA
 EE     LL     II      ZZ  AA  AA
 EEEE   LL     II    ZZZ   AAAAAA
 EE     LL     II   ZZ     AA  AA
 EEEEEE LLLLL IIII ZZZZZZZ AA  AA

Eliza is an open-source AI agent.
"""


class ConfirmStep:
    step_id = "15_confirm"
    title = "Confirmation"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        ui.style(BANNER)
        ui.box("Installation Setup", "", "This script will set up Eliza for you")

        if ctx.assume_yes:
            return StepOutcome.skipped("confirmed by --yes")

        if not ui.confirm("Ready to install Eliza?"):
            ui.info("Installation cancelled")
            raise InstallCancelled()
        return StepOutcome.applied("confirmed by operator")
