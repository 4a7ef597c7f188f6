from __future__ import annotations

import logging

from ..context import InstallCtx
from ..lib import git, ui
from ..pipeline import StepOutcome

logger = logging.getLogger(__name__)


class AcquireRepositoryStep:
    step_id = "50_acquire_repository"
    title = "Eliza repository"

    def run(self, ctx: InstallCtx) -> StepOutcome:
        repo = ctx.repo_dir
        if repo.is_dir():
            # Existing checkouts are reused as-is: no fetch, no checkout.
            ui.info("Eliza directory already exists")
            return StepOutcome.skipped(f"reusing {repo}", repo_dir=str(repo))

        git.clone(ctx.cfg.repo_url, repo, dry_run=ctx.dry_run)
        tag = git.latest_tag(repo, dry_run=ctx.dry_run)
        if tag:
            git.checkout(repo, tag, dry_run=ctx.dry_run)
        ui.success(f"Repository cloned and checked out to latest tag: {tag}")
        return StepOutcome.applied(f"{ctx.cfg.repo_url} @ {tag}", repo_dir=str(repo), tag=tag)
