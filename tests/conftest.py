"""Test configuration and fixtures.

FakeHost replaces subprocess.run and shutil.which so that apt, git, tmux,
gum and nvm behave like a small in-memory machine rooted at tmp_path.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from eliza_installer.context import InstallCtx
from eliza_installer.install_config import InstallConfig
from eliza_installer.lib.env import resolve_nvm_dir

TEMPLATE_TEXT = "OPENAI_API_KEY=\nSERVER_PORT=3000\n"
LAUNCH_LINE = "pnpm start & pnpm start:client"


class FakeHost:
    def __init__(self, root: Path) -> None:
        self.home = root / "home"
        self.base = root / "work"
        self.state_home = root / "state"
        for d in (self.home, self.base):
            d.mkdir(parents=True, exist_ok=True)

        self.binaries = {"gum", "tmux", "git", "bash", "curl", "xdg-open"}
        self.sessions: set[str] = set()
        self.sent: List[Tuple[str, str]] = []
        self.typed: List[Tuple[str, str]] = []
        self.keys: List[Tuple[str, str]] = []
        self.commands: List[List[str]] = []
        self.scripts: List[str] = []
        self.checkouts: List[Tuple[str, str]] = []
        self.clones = 0
        self.confirm_answer = True
        self.tag = "v0.1.7"
        self.pane = "node"
        self.failures: Dict[Tuple[str, ...], int] = {}
        self.script_failures: Dict[str, int] = {}

    def fail(self, *prefix: str, rc: int) -> None:
        self.failures[tuple(prefix)] = rc

    def fail_script(self, fragment: str, rc: int) -> None:
        self.script_failures[fragment] = rc

    def ran(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.commands if tuple(c[: len(prefix)]) == prefix]

    @property
    def launches(self) -> List[Tuple[str, str]]:
        return [s for s in self.sent if s[1] == LAUNCH_LINE]

    def which(self, name: str, *args, **kwargs) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.binaries else None

    def _done(self, argv, rc: int = 0, out: str = "", err: str = "") -> subprocess.CompletedProcess:
        return subprocess.CompletedProcess(argv, rc, out, err)

    def run(self, argv, input=None, text=None, stdout=None, stderr=None, cwd=None, env=None, **kwargs):
        argv = list(argv)
        if argv[:2] == ["gum", "spin"]:
            argv = argv[argv.index("--") + 1 :]
        if argv and argv[0] == "sudo":
            argv = argv[1:]
        self.commands.append(argv)

        for prefix, rc in self.failures.items():
            if tuple(argv[: len(prefix)]) == prefix:
                return self._done(argv, rc, "", "simulated failure")

        handler = getattr(self, f"_cmd_{argv[0].replace('-', '_')}", None)
        if handler is None:
            return self._done(argv)
        return handler(argv, cwd=cwd, env=env or {}, input=input)

    def _cmd_gum(self, argv, **kwargs):
        if argv[1] == "confirm":
            return self._done(argv, 0 if self.confirm_answer else 1)
        if argv[1] == "style":
            return self._done(argv, 0, argv[-1] + "\n")
        return self._done(argv)

    def _cmd_apt_get(self, argv, **kwargs):
        if argv[1] == "install" and "gum" in argv:
            self.binaries.add("gum")
        return self._done(argv)

    def _cmd_tmux(self, argv, **kwargs):
        sub = argv[1]
        if sub == "has-session":
            return self._done(argv, 0 if argv[3] in self.sessions else 1)
        if sub == "new-session":
            self.sessions.add(argv[argv.index("-s") + 1])
        elif sub == "send-keys":
            if "-l" in argv:
                self.typed.append((argv[3], argv[-1]))
            else:
                self.keys.append((argv[3], argv[-1]))
                if argv[-1] == "Enter" and self.typed:
                    self.sent.append(self.typed.pop())
        elif sub == "display-message":
            return self._done(argv, 0, self.pane + "\n")
        elif sub == "capture-pane":
            return self._done(argv, 0, "Error: Cannot find module\n")
        return self._done(argv)

    def _cmd_git(self, argv, cwd=None, **kwargs):
        sub = argv[1]
        if sub == "clone":
            dest = Path(cwd) / argv[3]
            dest.mkdir(parents=True)
            (dest / ".env.example").write_text(TEMPLATE_TEXT, encoding="utf-8")
            self.clones += 1
        elif sub == "describe":
            return self._done(argv, 0, self.tag + "\n")
        elif sub == "checkout":
            self.checkouts.append((cwd, argv[2]))
        return self._done(argv)

    def _cmd_bash(self, argv, env=None, **kwargs):
        script = argv[2]
        self.scripts.append(script)
        for fragment, rc in self.script_failures.items():
            if fragment in script:
                return self._done(argv, rc, "", "simulated failure")
        if "install.sh" in script:
            nvm_dir = resolve_nvm_dir(env)
            nvm_dir.mkdir(parents=True, exist_ok=True)
            (nvm_dir / "nvm.sh").write_text("# nvm\n", encoding="utf-8")
        return self._done(argv)


@pytest.fixture
def host(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> FakeHost:
    h = FakeHost(tmp_path)
    monkeypatch.setenv("HOME", str(h.home))
    monkeypatch.setenv("XDG_STATE_HOME", str(h.state_home))
    monkeypatch.delenv("NVM_DIR", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setattr("eliza_installer.lib.command.subprocess.run", h.run)
    monkeypatch.setattr("eliza_installer.lib.command.shutil.which", h.which)
    return h


@pytest.fixture
def config_path(tmp_path: Path) -> str:
    p = tmp_path / "install.yaml"
    p.write_text("app:\n  launch_delay_s: 0\n", encoding="utf-8")
    return str(p)


@pytest.fixture
def ctx(host: FakeHost) -> InstallCtx:
    return InstallCtx(
        cfg=InstallConfig(raw={"app": {"launch_delay_s": 0}}),
        base_dir=host.base,
        assume_yes=True,
        environ=dict(os.environ),
    )
