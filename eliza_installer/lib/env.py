from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

APP_NAME = "eliza-installer"


def _environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def home_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = _environ(environ)
    home = env.get("HOME")
    return Path(home) if home else Path.home()


def resolve_nvm_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Locate the nvm root the same way nvm's install.sh picks it.

    Order: $NVM_DIR, then $XDG_CONFIG_HOME/nvm, then $HOME/.nvm.
    """

    env = _environ(environ)
    if env.get("NVM_DIR"):
        return Path(env["NVM_DIR"])
    if env.get("XDG_CONFIG_HOME"):
        return Path(env["XDG_CONFIG_HOME"]) / "nvm"
    return home_dir(env) / ".nvm"


def state_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = _environ(environ)
    base = Path(env["XDG_STATE_HOME"]) if env.get("XDG_STATE_HOME") else home_dir(env) / ".local/state"
    return base / APP_NAME


def default_log_path(environ: Optional[Mapping[str, str]] = None) -> str:
    return str(state_dir(environ) / "install.log")


def default_state_path(environ: Optional[Mapping[str, str]] = None) -> str:
    return str(state_dir(environ) / "state.json")
