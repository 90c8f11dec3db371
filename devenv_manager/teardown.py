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

"""Best-effort teardown of the local environment."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from dataclasses import dataclass, field

import docker
import sh
from rich.panel import Panel
from rich.table import Table

from devenv_manager import console, logger
from devenv_manager.cluster import cluster_exists, delete_cluster
from devenv_manager.config import EnvConfig
from devenv_manager.network import docker_client, remove_network
from devenv_manager.utils import find_command

STATUS_DONE = "done"
STATUS_SKIPPED = "skipped"
STATUS_FAILED = "failed"

_STATUS_STYLES = {STATUS_DONE: "green", STATUS_SKIPPED: "yellow", STATUS_FAILED: "red"}


@dataclass(frozen=True)
class StepOutcome:
    """Result of a single teardown step.

    Attributes:
        name: Step name.
        status: One of ``done``, ``skipped`` or ``failed``.
        detail: Error text for failed steps.
    """

    name: str
    status: str
    detail: str = ""


@dataclass
class TeardownReport:
    """Ordered outcomes of every teardown step."""

    outcomes: list[StepOutcome] = field(default_factory=list)

    @property
    def failed(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if o.status == STATUS_FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed

    def render(self) -> Table:
        """Build a summary table of the step outcomes."""
        table = Table(title="Cleanup summary")
        table.add_column("Step")
        table.add_column("Status")
        table.add_column("Detail")
        for outcome in self.outcomes:
            style = _STATUS_STYLES.get(outcome.status, "white")
            table.add_row(outcome.name, f"[{style}]{outcome.status}[/{style}]", outcome.detail)
        return table


def _run_step(report: TeardownReport, name: str, step: Callable[[], bool]) -> None:
    """Run one guarded step and record its outcome; never raises."""
    try:
        acted = step()
    except Exception as e:
        logger.warning("Teardown step '%s' failed: %s", name, e)
        lines = str(e).strip().splitlines()
        report.outcomes.append(StepOutcome(name, STATUS_FAILED, lines[0] if lines else type(e).__name__))
        return
    report.outcomes.append(StepOutcome(name, STATUS_DONE if acted else STATUS_SKIPPED))


# ============================================================================
# Steps
# ============================================================================

def _cluster_running(cfg: EnvConfig) -> bool:
    return find_command("kind") is not None and cluster_exists(cfg.cluster_name)


def _delete_database(cfg: EnvConfig) -> bool:
    if not cfg.postgres_manifest.is_file() or not _cluster_running(cfg):
        return False
    sh.kubectl("delete", "-f", str(cfg.postgres_manifest), "--ignore-not-found")
    return True


def _delete_cluster(cfg: EnvConfig) -> bool:
    if not _cluster_running(cfg):
        return False
    delete_cluster(cfg.cluster_name)
    return True


def _remove_network(
    cfg: EnvConfig,
    client_factory: Callable[[], AbstractContextManager[docker.DockerClient]],
) -> bool:
    with client_factory() as client:
        removed = remove_network(client, cfg.network_name)
    if removed:
        console.print(f"[green]✅ Docker network '{cfg.network_name}' removed[/green]")
    return removed


def _remove_kind_binary(cfg: EnvConfig) -> bool:
    if not cfg.kind_install_path.exists():
        return False
    console.print(f"[yellow]ℹ️  Removing kind binary from {cfg.kind_install_path}...[/yellow]")
    sh.sudo("rm", "-f", str(cfg.kind_install_path))
    return True


def teardown(
    cfg: EnvConfig,
    client_factory: Callable[[], AbstractContextManager[docker.DockerClient]] = docker_client,
) -> TeardownReport:
    """Delete workloads, cluster, network and the kind binary.

    Every step runs regardless of earlier failures.

    Args:
        cfg: Environment configuration.
        client_factory: Context manager factory yielding a Docker client.

    Returns:
        Outcome of each step, in execution order.
    """
    console.print(Panel.fit("Cleaning up KinD, Kubernetes resources, and network", style="bold blue"))
    report = TeardownReport()
    _run_step(report, "database", lambda: _delete_database(cfg))
    _run_step(report, "cluster", lambda: _delete_cluster(cfg))
    _run_step(report, "network", lambda: _remove_network(cfg, client_factory))
    _run_step(report, "kind binary", lambda: _remove_kind_binary(cfg))
    console.print(report.render())
    if report.ok:
        console.print("[green]✅ Cleanup complete.[/green]")
    else:
        console.print(f"[yellow]⚠️  Cleanup finished with {len(report.failed)} failed step(s)[/yellow]")
    return report
