from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .install_config import InstallConfig
from .lib.env import resolve_nvm_dir


@dataclass(frozen=True)
class InstallCtx:
    cfg: InstallConfig
    base_dir: Path
    dry_run: bool = False
    assume_yes: bool = False
    open_browser: bool = True
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))

    @property
    def nvm_dir(self) -> Path:
        return resolve_nvm_dir(self.environ)

    @property
    def repo_dir(self) -> Path:
        # Steps after acquisition run with this as their working directory.
        return self.base_dir / self.cfg.repo_directory

    @property
    def env_file(self) -> Path:
        return self.repo_dir / self.cfg.env_file

    @property
    def env_template(self) -> Path:
        return self.repo_dir / self.cfg.env_template
