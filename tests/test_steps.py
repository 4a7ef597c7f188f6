from __future__ import annotations

import dataclasses

import pytest

from eliza_installer.context import InstallCtx
from eliza_installer.errors import CommandError
from eliza_installer.install_config import InstallConfig
from eliza_installer.lib import tmux
from eliza_installer.pipeline import StepStatus
from eliza_installer.steps import (
    AcquireRepositoryStep,
    BuildAndLaunchStep,
    EnsureRuntimeManagerStep,
    EnsureSessionStep,
    EnsureUiToolStep,
    OpenBrowserStep,
    SetupRuntimeStep,
)

from .conftest import FakeHost


def test_ui_tool_is_installed_from_signed_repo_when_missing(host: FakeHost, ctx: InstallCtx) -> None:
    host.binaries.discard("gum")

    outcome = EnsureUiToolStep().run(ctx)

    assert outcome.status is StepStatus.APPLIED
    assert host.ran("mkdir", "-p", "/etc/apt/keyrings")
    assert any("gpg --dearmor" in s and "https://repo.charm.sh/apt/gpg.key" in s for s in host.scripts)
    assert host.ran("tee", "/etc/apt/sources.list.d/charm.list")
    assert host.ran("apt-get", "install", "-y", "gum")
    assert "gum" in host.binaries


def test_ui_tool_skipped_when_present(host: FakeHost, ctx: InstallCtx) -> None:
    outcome = EnsureUiToolStep().run(ctx)

    assert outcome.status is StepStatus.SKIPPED
    assert host.ran("apt-get") == []


def test_runtime_manager_honours_xdg_config_home(host: FakeHost, ctx: InstallCtx, tmp_path, monkeypatch) -> None:
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    ctx = dataclasses.replace(ctx, environ={**ctx.environ, "XDG_CONFIG_HOME": str(xdg)})

    outcome = EnsureRuntimeManagerStep().run(ctx)

    assert outcome.status is StepStatus.APPLIED
    assert (xdg / "nvm" / "nvm.sh").exists()
    assert outcome.data["nvm_dir"] == str(xdg / "nvm")


def test_runtime_manager_skipped_when_directory_exists(host: FakeHost, ctx: InstallCtx) -> None:
    (host.home / ".nvm").mkdir()

    outcome = EnsureRuntimeManagerStep().run(ctx)

    assert outcome.status is StepStatus.SKIPPED
    assert host.scripts == []


def test_setup_runtime_installs_aliases_and_pnpm(host: FakeHost, ctx: InstallCtx) -> None:
    SetupRuntimeStep().run(ctx)

    first, second = host.scripts
    assert "nvm install 23.3.0 && nvm alias eliza 23.3.0 && nvm use eliza" in first
    assert first.startswith(". ")
    assert second.endswith("npm install -g pnpm")


def test_acquire_repository_checks_out_latest_tag(host: FakeHost, ctx: InstallCtx) -> None:
    host.tag = "v0.25.9"

    outcome = AcquireRepositoryStep().run(ctx)

    assert outcome.status is StepStatus.APPLIED
    assert outcome.data["tag"] == "v0.25.9"
    assert host.ran("git", "clone", "https://github.com/elizaOS/eliza", "eliza")
    assert host.checkouts == [(str(ctx.repo_dir), "v0.25.9")]


def test_session_created_once(host: FakeHost, ctx: InstallCtx) -> None:
    step = EnsureSessionStep()

    assert step.run(ctx).status is StepStatus.APPLIED
    assert step.run(ctx).status is StepStatus.SKIPPED
    assert host.sessions == {"eliza"}


def test_custom_session_name(host: FakeHost, ctx: InstallCtx) -> None:
    ctx = dataclasses.replace(ctx, cfg=InstallConfig(raw={"session": {"name": "agent"}}))

    EnsureSessionStep().run(ctx)

    assert host.sessions == {"agent"}


def test_build_and_launch_reports_exited_services(host: FakeHost, ctx: InstallCtx) -> None:
    ctx.repo_dir.mkdir()
    host.pane = "bash"

    outcome = BuildAndLaunchStep().run(ctx)

    assert outcome.status is StepStatus.APPLIED
    assert outcome.data["launch_status"] == "exited"
    assert "Cannot find module" in outcome.data["pane_tail"]
    assert len(host.launches) == 1


def test_build_and_launch_always_rebuilds(host: FakeHost, ctx: InstallCtx) -> None:
    ctx.repo_dir.mkdir()
    step = BuildAndLaunchStep()

    step.run(ctx)
    step.run(ctx)

    builds = [s for s in host.scripts if "pnpm build" in s]
    cleans = [s for s in host.scripts if "pnpm clean && pnpm install --no-frozen-lockfile" in s]
    assert len(builds) == 2
    assert len(cleans) == 2


def test_open_browser_falls_back_to_open(host: FakeHost, ctx: InstallCtx) -> None:
    host.binaries.discard("xdg-open")
    host.binaries.add("open")

    outcome = OpenBrowserStep().run(ctx)

    assert outcome.detail == "opened with open"
    assert host.ran("open", "http://localhost:5173")


def test_open_browser_prints_url_without_opener(host: FakeHost, ctx: InstallCtx, capsys) -> None:
    host.binaries.discard("xdg-open")

    outcome = OpenBrowserStep().run(ctx)

    assert outcome.status is StepStatus.SKIPPED
    assert "http://localhost:5173" in capsys.readouterr().out


def test_runtime_manager_installs_where_ctx_environ_points(host: FakeHost, ctx: InstallCtx, tmp_path) -> None:
    xdg = tmp_path / "xdg"
    ctx = dataclasses.replace(ctx, environ={**ctx.environ, "XDG_CONFIG_HOME": str(xdg)})

    outcome = EnsureRuntimeManagerStep().run(ctx)

    assert outcome.status is StepStatus.APPLIED
    assert (xdg / "nvm" / "nvm.sh").exists()
    assert not (host.home / ".nvm").exists()


def test_failed_nvm_install_is_retried_next_run(host: FakeHost, ctx: InstallCtx) -> None:
    host.fail_script("install.sh", rc=22)

    with pytest.raises(CommandError):
        EnsureRuntimeManagerStep().run(ctx)
    assert not (host.home / ".nvm").exists()

    host.script_failures.clear()
    assert EnsureRuntimeManagerStep().run(ctx).status is StepStatus.APPLIED


def test_launch_lines_are_typed_literally_then_entered(host: FakeHost, ctx: InstallCtx) -> None:
    ctx.repo_dir.mkdir()

    BuildAndLaunchStep().run(ctx)

    typed = [c for c in host.ran("tmux", "send-keys") if "-l" in c]
    assert len(typed) == 5
    assert host.keys == [("eliza", "Enter")] * 5
    assert host.typed == []


def test_key_names_in_a_line_are_not_pressed(host: FakeHost) -> None:
    tmux.send_line("eliza", "Enter")

    assert host.ran("tmux", "send-keys", "-t", "eliza", "-l", "Enter")
    assert host.sent == [("eliza", "Enter")]
    assert host.keys == [("eliza", "Enter")]
