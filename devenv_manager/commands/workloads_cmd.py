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

"""Workload commands (database, reset-database, wait-for-postgres, microservices)."""

from __future__ import annotations

from pathlib import Path

import typer

from devenv_manager.config import EnvConfig, apply_overrides
from devenv_manager.orchestrator import run_microservices
from devenv_manager.readiness import wait_for_postgres as wait_for_postgres_ready
from devenv_manager.tools import select_installer
from devenv_manager.workloads import deploy_database, reset_database


def database(ctx: typer.Context) -> None:
    """Deploy PostgreSQL from its static manifest."""
    cfg: EnvConfig = ctx.obj
    deploy_database(cfg.postgres_manifest)


def reset_database_cmd(ctx: typer.Context) -> None:
    """Drop the PostgreSQL volume and pods and redeploy."""
    cfg: EnvConfig = ctx.obj
    reset_database(cfg)


def wait_for_postgres(
    ctx: typer.Context,
    timeout: int | None = typer.Option(None, "--timeout", help="Failed probes tolerated (overrides DEVENV_DB_TIMEOUT)"),
) -> None:
    """Wait until PostgreSQL accepts connections."""
    cfg = apply_overrides(ctx.obj, db_timeout=timeout)
    wait_for_postgres_ready(cfg)


def microservices(
    ctx: typer.Context,
    values_dir: Path | None = typer.Option(None, "--values-dir", help="Directory of per-service values files"),
    chart_dir: Path | None = typer.Option(None, "--chart-dir", help="Shared Helm chart directory"),
) -> None:
    """Deploy one Helm release per values file."""
    cfg = apply_overrides(ctx.obj, values_dir=values_dir, chart_dir=chart_dir)
    run_microservices(cfg, select_installer())
