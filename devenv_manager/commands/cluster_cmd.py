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

"""Cluster commands (create-network, create-cluster)."""

from __future__ import annotations

from pathlib import Path

import typer

from devenv_manager.config import EnvConfig, apply_overrides
from devenv_manager.orchestrator import run_create_cluster, run_create_network
from devenv_manager.tools import select_installer


def create_network(ctx: typer.Context) -> None:
    """Create shared Docker network for kind and compose."""
    cfg: EnvConfig = ctx.obj
    run_create_network(cfg)


def create_cluster(
    ctx: typer.Context,
    template: Path | None = typer.Option(None, "--template", help="kind config template"),
) -> None:
    """Create kind cluster and attach to shared network."""
    cfg = apply_overrides(ctx.obj, kind_template=template)
    run_create_cluster(cfg, select_installer())
