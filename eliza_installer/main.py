from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .context import InstallCtx
from .errors import InstallCancelled
from .install_config import InstallConfig, load_install_config
from .lib import ui
from .lib.env import default_log_path, default_state_path
from .logging_utils import configure_logging
from .pipeline import PipelineResult, StepStatus, run_pipeline
from .state_store import begin_run, ensure_defaults, load_state, save_state
from .steps import (
    AcquireRepositoryStep,
    BuildAndLaunchStep,
    ConfirmStep,
    EnsureRuntimeManagerStep,
    EnsureSessionStep,
    EnsureUiToolStep,
    InstallOsPackagesStep,
    MaterializeEnvFileStep,
    OpenBrowserStep,
    SetupRuntimeStep,
)

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    StepStatus.APPLIED: "✅",
    StepStatus.SKIPPED: "⏭️ ",
    StepStatus.FAILED: "❌",
}


def build_steps():
    return [
        EnsureUiToolStep(),
        ConfirmStep(),
        InstallOsPackagesStep(),
        EnsureRuntimeManagerStep(),
        SetupRuntimeStep(),
        AcquireRepositoryStep(),
        MaterializeEnvFileStep(),
        EnsureSessionStep(),
        BuildAndLaunchStep(),
        OpenBrowserStep(),
    ]


def print_summary(result: PipelineResult) -> None:
    lines = [f"{STATUS_ICONS[r.status]} {r.title:<20} {r.status.value:<8} {r.detail}".rstrip() for r in result.results]
    if lines:
        ui.style("Run summary", *lines)


def print_completion(cfg: InstallConfig) -> None:
    ui.box(
        "🎉 Installation Complete!",
        "",
        f"Eliza is now running in tmux session: {cfg.session_name}",
        "",
        "To attach to the session:",
        f"tmux attach -t {cfg.session_name}",
        "",
        "To detach from session:",
        "Press Ctrl+b then d",
        "",
        "Eliza is available at:",
        cfg.app_url,
    )


def run_setup(
    *,
    config_path: Optional[str] = None,
    state_path: Optional[str] = None,
    log_path: Optional[str] = None,
    base_dir: Optional[str] = None,
    assume_yes: bool = False,
    dry_run: bool = False,
    open_browser: bool = True,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    verbose: bool = False,
    environ: Optional[Mapping[str, str]] = None,
) -> int:
    """Provision the host and launch Eliza. Returns the process exit status."""

    env = dict(os.environ if environ is None else environ)
    state_path = state_path or default_state_path(env)
    log_path = log_path or default_log_path(env)

    actual_log_path = configure_logging(
        log_path=log_path,
        level=logging.DEBUG if verbose else logging.INFO,
        also_console=verbose,
    )

    cfg = load_install_config(config_path)
    ctx = InstallCtx(
        cfg=cfg,
        base_dir=Path(base_dir) if base_dir else Path.cwd(),
        dry_run=dry_run,
        assume_yes=assume_yes,
        open_browser=open_browser,
        environ=env,
    )

    state: Dict[str, Any] = ensure_defaults(load_state(state_path))
    begin_run(state)
    paths = state["execution"]["paths"]
    paths.update(
        {
            "log_path_requested": log_path,
            "log_path_actual": actual_log_path,
            "repo_dir": str(ctx.repo_dir),
            "nvm_dir": str(ctx.nvm_dir),
        }
    )

    try:
        result = run_pipeline(
            ctx=ctx,
            state=state,
            steps=build_steps(),
            start_at=start_at,
            stop_after=stop_after,
        )
    except InstallCancelled:
        logger.info("Installation cancelled by operator")
        state["execution"]["outcome"] = "cancelled"
        state["execution"]["current_step"] = None
        return 0
    finally:
        save_state(state_path, state)

    print_summary(result)

    failed = result.failed
    if failed is not None:
        state["execution"]["outcome"] = "failed"
        save_state(state_path, state)
        ui.error(f"Error occurred in: {failed.step_id}")
        ui.error(f"Exit code: {result.exit_code}")
        ui.info(f"Details in {actual_log_path}")
        return result.exit_code

    state["execution"]["outcome"] = "complete"
    save_state(state_path, state)
    if ctx.dry_run:
        ui.info("Dry run finished; nothing was installed or started")
    elif "80_build_and_launch" in result.ran_steps:
        print_completion(cfg)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="eliza-installer", description="Install and launch Eliza on Debian/Ubuntu.")
    p.add_argument("--config", default=None, help="YAML file overriding versions, URLs and names")
    p.add_argument("--state", default=None, help="Path to run record (json|yaml)")
    p.add_argument("--log", default=None, help="Path to installer log")
    p.add_argument("--dir", dest="base_dir", default=None, help="Directory to clone into (default: cwd)")
    p.add_argument("-y", "--yes", action="store_true", help="Skip the confirmation prompt")
    p.add_argument("--dry-run", action="store_true", help="Log commands without running them")
    p.add_argument("--no-browser", action="store_true", help="Do not open a browser at the end")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 80_build_and_launch)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument("-v", "--verbose", action="store_true", help="Also log to the console")

    args = p.parse_args(argv)

    try:
        return run_setup(
            config_path=args.config,
            state_path=args.state,
            log_path=args.log,
            base_dir=args.base_dir,
            assume_yes=bool(args.yes),
            dry_run=bool(args.dry_run),
            open_browser=not args.no_browser,
            start_at=args.start_at,
            stop_after=args.stop_after,
            verbose=bool(args.verbose),
        )
    except (FileNotFoundError, ValueError) as e:
        logger.error("Invalid invocation: %s", e)
        p.error(str(e))


if __name__ == "__main__":
    raise SystemExit(main())
