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

"""Error types and command lookup helpers."""

from __future__ import annotations

import sh


class DevenvError(Exception):
    """Base exception for devenv_manager errors."""


class ReadinessTimeoutError(DevenvError):
    """A readiness probe never succeeded within its attempt budget."""

    def __init__(self, target: str, attempts: int) -> None:
        super().__init__(f"{target} not ready after {attempts} attempts")
        self.target = target
        self.attempts = attempts


class TemplateRenderError(DevenvError):
    """The cluster config template is missing or renders to invalid YAML."""


class ToolInstallError(DevenvError):
    """An installer finished but the tool is still not on PATH."""


def find_command(cmd: str) -> str | None:
    """Resolve a command on the system PATH.

    Args:
        cmd: Name of the CLI command to look up.

    Returns:
        Absolute path of the executable, or None when it is not installed.
    """
    try:
        path = str(sh.which(cmd)).strip()
    except sh.ErrorReturnCode:
        return None
    return path or None


def require_command(cmd: str) -> str:
    """Check if a command exists on the system PATH.

    Args:
        cmd: Name of the CLI command to check.

    Returns:
        Absolute path of the executable.

    Raises:
        DevenvError: If the command is not found.
    """
    path = find_command(cmd)
    if path is None:
        raise DevenvError(f"Required command '{cmd}' not found. Please install it first.")
    return path
