from .step_10_ensure_ui_tool import EnsureUiToolStep
from .step_15_confirm import ConfirmStep
from .step_20_install_os_packages import InstallOsPackagesStep
from .step_30_ensure_runtime_manager import EnsureRuntimeManagerStep
from .step_40_setup_runtime import SetupRuntimeStep
from .step_50_acquire_repository import AcquireRepositoryStep
from .step_60_materialize_env_file import MaterializeEnvFileStep
from .step_70_ensure_session import EnsureSessionStep
from .step_80_build_and_launch import BuildAndLaunchStep
from .step_90_open_browser import OpenBrowserStep

__all__ = [
    "EnsureUiToolStep",
    "ConfirmStep",
    "InstallOsPackagesStep",
    "EnsureRuntimeManagerStep",
    "SetupRuntimeStep",
    "AcquireRepositoryStep",
    "MaterializeEnvFileStep",
    "EnsureSessionStep",
    "BuildAndLaunchStep",
    "OpenBrowserStep",
]
