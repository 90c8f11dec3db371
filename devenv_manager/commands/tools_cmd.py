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

"""Tool commands (check-kind, install-kind, check-helm, install-helm)."""

from __future__ import annotations

import typer

from devenv_manager.config import EnvConfig
from devenv_manager.tools import ensure_helm, ensure_kind, install_tool, select_installer


def check_kind(ctx: typer.Context) -> None:
    """Check if 'kind' is installed, install if missing."""
    cfg: EnvConfig = ctx.obj
    ensure_kind(cfg, select_installer())


def install_kind(ctx: typer.Context) -> None:
    """Force install 'kind' CLI (macOS, Linux, or WSL)."""
    cfg: EnvConfig = ctx.obj
    installer = select_installer()
    install_tool("kind", lambda: installer.install_kind(cfg))


def check_helm(ctx: typer.Context) -> None:
    """Check if 'helm' is installed, install if missing."""
    cfg: EnvConfig = ctx.obj
    ensure_helm(cfg, select_installer())


def install_helm(ctx: typer.Context) -> None:
    """Force install the 'helm' CLI (macOS, Linux, or WSL)."""
    cfg: EnvConfig = ctx.obj
    installer = select_installer()
    install_tool("helm", lambda: installer.install_helm(cfg))
