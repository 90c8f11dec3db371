# /*
# Copyright 2026 The Devenv Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */

"""Host platform detection and kind/helm installation."""

from __future__ import annotations

import platform
import tempfile
from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import Enum
from pathlib import Path

import sh
from rich.panel import Panel

from devenv_manager import console, logger
from devenv_manager.config import EnvConfig
from devenv_manager.constants import (
    HELM_BREW_FORMULA,
    HELM_INSTALL_SCRIPT_URL,
    KIND_DOWNLOAD_URL,
    PROC_VERSION_FILE,
)
from devenv_manager.utils import ToolInstallError, find_command


# ============================================================================
# Platform detection
# ============================================================================

class Platform(str, Enum):
    """Host platforms with distinct install procedures."""

    MACOS = "macOS"
    WSL = "WSL (Linux)"
    LINUX = "Linux"


def detect_platform(system: str | None = None, proc_version: Path = PROC_VERSION_FILE) -> Platform:
    """Detect the host platform.

    Anything that is neither macOS nor WSL is treated as plain Linux.

    Args:
        system: Kernel name override, defaults to ``platform.system()``.
        proc_version: Kernel version file inspected for the WSL marker.

    Returns:
        The detected platform.
    """
    system = platform.system() if system is None else system
    if "darwin" in system.lower():
        return Platform.MACOS
    try:
        if "microsoft" in proc_version.read_text().lower():
            return Platform.WSL
    except OSError:
        pass
    return Platform.LINUX


# ============================================================================
# Installers
# ============================================================================

class HostInstaller(ABC):
    """Installs the environment's CLI dependencies on one host platform."""

    platform: Platform
    kind_os: str = "linux"

    def kind_url(self, version: str) -> str:
        """Return the kind binary download URL for this platform."""
        return KIND_DOWNLOAD_URL.format(version=version, os=self.kind_os)

    def install_kind(self, cfg: EnvConfig) -> None:
        """Download the kind binary and move it into the install path.

        Args:
            cfg: Environment configuration with the kind version and install path.
        """
        console.print(f"[yellow]\U0001f4e6 Installing kind {cfg.kind_version}...[/yellow]")
        console.print(f"   Detected {self.platform.value}")
        with tempfile.TemporaryDirectory() as tmp:
            binary = Path(tmp) / "kind"
            sh.curl("-fLo", str(binary), self.kind_url(cfg.kind_version))
            binary.chmod(0o755)
            sh.sudo("mv", str(binary), str(cfg.kind_install_path))
        console.print(f"[green]✅ kind installed successfully to {cfg.kind_install_path}[/green]")

    @abstractmethod
    def install_helm(self, cfg: EnvConfig) -> None:
        """Install the helm CLI."""


class LinuxInstaller(HostInstaller):
    platform = Platform.LINUX

    def install_helm(self, cfg: EnvConfig) -> None:
        console.print("[yellow]\U0001f4e6 Installing Helm...[/yellow]")
        console.print(f"   Detected {self.platform.value}")
        script = sh.curl("-fsSL", HELM_INSTALL_SCRIPT_URL)
        sh.bash(_in=script)
        console.print("[green]✅ Helm installed successfully[/green]")


class WslInstaller(LinuxInstaller):
    platform = Platform.WSL


class MacOSInstaller(HostInstaller):
    platform = Platform.MACOS
    kind_os = "darwin"

    def install_helm(self, cfg: EnvConfig) -> None:
        console.print("[yellow]\U0001f4e6 Installing Helm...[/yellow]")
        console.print(f"   Detected {self.platform.value}")
        sh.brew("install", HELM_BREW_FORMULA)
        console.print("[green]✅ Helm installed successfully[/green]")


_INSTALLERS: dict[Platform, type[HostInstaller]] = {
    Platform.MACOS: MacOSInstaller,
    Platform.WSL: WslInstaller,
    Platform.LINUX: LinuxInstaller,
}


def select_installer(host: Platform | None = None) -> HostInstaller:
    """Pick the installer for a platform, detecting the host when omitted."""
    if host is None:
        host = detect_platform()
    logger.debug("Using %s installer", host.value)
    return _INSTALLERS[host]()


# ============================================================================
# Tool provisioning
# ============================================================================

def ensure_tool(name: str, installer: Callable[[], None]) -> bool:
    """Install a CLI tool unless it is already on PATH.

    Args:
        name: Executable name to look up.
        installer: Callable that installs the tool.

    Returns:
        True if the installer ran, False if the tool was already present.

    Raises:
        ToolInstallError: If an install command fails or the tool is still
            missing afterwards.
    """
    console.print(f"[yellow]\U0001f50d Checking if '{name}' is installed...[/yellow]")
    path = find_command(name)
    if path is not None:
        console.print(f"[green]✅ {name} is already installed at {path}[/green]")
        return False
    try:
        installer()
    except sh.ErrorReturnCode as err:
        raise ToolInstallError(f"Failed to install {name}: {err}") from err
    if find_command(name) is None:
        raise ToolInstallError(f"Installed {name} but it is still not on PATH")
    return True


def ensure_kind(cfg: EnvConfig, installer: HostInstaller) -> bool:
    """Make sure the kind CLI is installed."""
    return ensure_tool("kind", lambda: installer.install_kind(cfg))


def ensure_helm(cfg: EnvConfig, installer: HostInstaller) -> bool:
    """Make sure the helm CLI is installed."""
    return ensure_tool("helm", lambda: installer.install_helm(cfg))


def install_tool(name: str, installer: Callable[[], None]) -> None:
    """Install a CLI tool unconditionally.

    Raises:
        ToolInstallError: If an install command fails.
    """
    console.print(Panel.fit(f"Installing {name}", style="bold blue"))
    try:
        installer()
    except sh.ErrorReturnCode as err:
        raise ToolInstallError(f"Failed to install {name}: {err}") from err
