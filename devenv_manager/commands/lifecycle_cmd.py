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

"""Composite commands (start, clean)."""

from __future__ import annotations

import typer

from devenv_manager.config import EnvConfig, display_config
from devenv_manager.orchestrator import run_clean, run_start
from devenv_manager.tools import select_installer


def start(ctx: typer.Context) -> None:
    """Create network, cluster, and deploy services."""
    cfg: EnvConfig = ctx.obj
    display_config(cfg)
    run_start(cfg, select_installer())


def clean(ctx: typer.Context) -> None:
    """Delete kind cluster, PostgreSQL, network and kind binary.

    Always exits 0; failed steps are listed in the summary.
    """
    cfg: EnvConfig = ctx.obj
    run_clean(cfg)
