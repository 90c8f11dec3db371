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

"""Orchestration functions that compose domain modules into workflows."""

from __future__ import annotations

import time
from collections.abc import Callable
from contextlib import AbstractContextManager

import docker
from rich.panel import Panel

from devenv_manager import console
from devenv_manager.cluster import ensure_cluster
from devenv_manager.config import EnvConfig
from devenv_manager.constants import PREREQUISITE_COMMANDS
from devenv_manager.network import docker_client, ensure_network
from devenv_manager.readiness import wait_for_postgres
from devenv_manager.teardown import TeardownReport, teardown
from devenv_manager.tools import HostInstaller, ensure_helm, ensure_kind
from devenv_manager.utils import require_command
from devenv_manager.workloads import ServiceDeployment, deploy_database, deploy_services

ClientFactory = Callable[[], AbstractContextManager[docker.DockerClient]]


def _check_prerequisites() -> None:
    """Check CLI tools the environment needs but does not install itself."""
    console.print(Panel.fit("Checking prerequisites", style="bold blue"))
    for cmd in PREREQUISITE_COMMANDS:
        require_command(cmd)
    console.print("[green]\u2705 All required tools are available[/green]")


def run_create_network(cfg: EnvConfig, client_factory: ClientFactory = docker_client) -> bool:
    """Create the shared Docker network if needed."""
    with client_factory() as client:
        return ensure_network(client, cfg.network_name)


def run_create_cluster(
    cfg: EnvConfig,
    installer: HostInstaller,
    client_factory: ClientFactory = docker_client,
) -> bool:
    """Ensure kind and the shared network, then the cluster.

    Returns:
        True if a cluster was created.
    """
    ensure_kind(cfg, installer)
    with client_factory() as client:
        ensure_network(client, cfg.network_name)
        return ensure_cluster(cfg, client)


def run_microservices(
    cfg: EnvConfig,
    installer: HostInstaller,
    sleep: Callable[[float], None] = time.sleep,
) -> list[ServiceDeployment]:
    """Ensure helm, wait for PostgreSQL, then deploy every service."""
    ensure_helm(cfg, installer)
    wait_for_postgres(cfg, sleep=sleep)
    return deploy_services(cfg.values_dir, cfg.chart_dir)


def run_start(
    cfg: EnvConfig,
    installer: HostInstaller,
    client_factory: ClientFactory = docker_client,
    sleep: Callable[[float], None] = time.sleep,
) -> list[ServiceDeployment]:
    """Bring the whole environment up: cluster, database, microservices.

    Stops at the first failing step.
    """
    _check_prerequisites()
    run_create_cluster(cfg, installer, client_factory)
    deploy_database(cfg.postgres_manifest)
    return run_microservices(cfg, installer, sleep=sleep)


def run_clean(cfg: EnvConfig, client_factory: ClientFactory = docker_client) -> TeardownReport:
    """Tear the environment down, continuing past individual failures."""
    return teardown(cfg, client_factory)
