from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_OS_PACKAGES = ["git", "curl", "python3", "python3-pip", "make", "ffmpeg", "tmux"]


@dataclass(frozen=True)
class InstallConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.raw.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"{name} must be a mapping, got {type(section).__name__}")
        return section

    @property
    def nvm_version(self) -> str:
        return str(self._section("nvm").get("version") or "v0.39.1")

    @property
    def nvm_install_url(self) -> str:
        url = self._section("nvm").get("install_url")
        return str(url or f"https://raw.githubusercontent.com/nvm-sh/nvm/{self.nvm_version}/install.sh")

    @property
    def node_version(self) -> str:
        return str(self._section("node").get("version") or "23.3.0")

    @property
    def node_alias(self) -> str:
        return str(self._section("node").get("alias") or "eliza")

    @property
    def repo_url(self) -> str:
        return str(self._section("repository").get("url") or "https://github.com/elizaOS/eliza")

    @property
    def repo_directory(self) -> str:
        return str(self._section("repository").get("directory") or "eliza")

    @property
    def env_template(self) -> str:
        return str(self._section("env").get("template") or ".env.example")

    @property
    def env_file(self) -> str:
        return str(self._section("env").get("file") or ".env")

    @property
    def session_name(self) -> str:
        return str(self._section("session").get("name") or "eliza")

    @property
    def app_url(self) -> str:
        return str(self._section("app").get("url") or "http://localhost:5173")

    @property
    def launch_delay_s(self) -> float:
        value = self._section("app").get("launch_delay_s")
        if value is None:
            return 5.0
        try:
            delay = float(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"app.launch_delay_s must be a number, got {value!r}") from e
        if delay < 0:
            raise ValueError(f"app.launch_delay_s must not be negative, got {value!r}")
        return delay

    @property
    def os_packages(self) -> List[str]:
        pkgs = self.raw.get("os_packages")
        if pkgs is None:
            return list(DEFAULT_OS_PACKAGES)
        if not isinstance(pkgs, list):
            raise ValueError("os_packages must be a list")
        return [str(p).strip() for p in pkgs if str(p).strip()]

    @property
    def gum_key_url(self) -> str:
        return str(self._section("gum").get("key_url") or "https://repo.charm.sh/apt/gpg.key")

    @property
    def gum_keyring(self) -> str:
        return str(self._section("gum").get("keyring") or "/etc/apt/keyrings/charm.gpg")

    @property
    def gum_sources_list(self) -> str:
        return str(self._section("gum").get("sources_list") or "/etc/apt/sources.list.d/charm.list")

    @property
    def gum_repo_line(self) -> str:
        return str(self._section("gum").get("repo_line") or "https://repo.charm.sh/apt/ * *")

    def validate(self) -> None:
        """Read every property once so bad values fail before any step runs."""

        for name in dir(type(self)):
            if isinstance(getattr(type(self), name), property):
                getattr(self, name)


def load_install_config(path: Optional[str]) -> InstallConfig:
    """Load an optional YAML override file; no path means built-in defaults."""

    if path is None:
        return InstallConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError("install config must be YAML")

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    cfg = InstallConfig(raw=raw)
    cfg.validate()
    return cfg
