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

"""PostgreSQL manifest and per-service Helm release deployment."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import sh
from rich.panel import Panel

from devenv_manager import console, logger
from devenv_manager.config import EnvConfig


@dataclass(frozen=True)
class ServiceDeployment:
    """One Helm release built from a single values file.

    Attributes:
        values_file: Helm values override file.
        chart_dir: Shared chart the release is installed from.
    """

    values_file: Path
    chart_dir: Path

    @property
    def namespace(self) -> str:
        """Namespace and release name, the values file name without extension."""
        return self.values_file.stem


# ============================================================================
# PostgreSQL
# ============================================================================

def deploy_database(manifest: Path) -> None:
    """Apply the static PostgreSQL manifest."""
    console.print(Panel.fit("Deploying PostgreSQL to Kubernetes", style="bold blue"))
    sh.kubectl("apply", "-f", str(manifest))
    console.print("[green]✅ PostgreSQL deployed.[/green]")


def reset_database(cfg: EnvConfig) -> None:
    """Drop the PostgreSQL volume and pods, then re-apply the manifest.

    Args:
        cfg: Environment configuration with PostgreSQL namespace, PVC and manifest.
    """
    console.print(Panel.fit("Resetting PostgreSQL deployment", style="bold blue"))
    try:
        sh.kubectl("delete", "pvc", cfg.postgres_pvc, "-n", cfg.postgres_namespace)
    except sh.ErrorReturnCode as err:
        logger.warning("Could not delete PVC %s: %s", cfg.postgres_pvc, err.stderr.decode(errors="replace").strip())
    try:
        sh.kubectl("delete", "pod", "-l", f"app={cfg.postgres_app_label}", "-n", cfg.postgres_namespace)
    except sh.ErrorReturnCode as err:
        logger.warning("Could not delete PostgreSQL pods: %s", err.stderr.decode(errors="replace").strip())
    sh.kubectl("apply", "-f", str(cfg.postgres_manifest))
    console.print("[green]✅ PostgreSQL has been reset with fresh volume and credentials.[/green]")


# ============================================================================
# Microservices
# ============================================================================

def discover_services(values_dir: Path, chart_dir: Path) -> list[ServiceDeployment]:
    """List one deployment per values file, in name order.

    Args:
        values_dir: Directory holding ``*.yaml`` Helm values files.
        chart_dir: Shared chart directory.

    Returns:
        Deployments sorted by values file name.
    """
    return [ServiceDeployment(values_file=path, chart_dir=chart_dir)
            for path in sorted(values_dir.glob("*.yaml"))]


def namespace_exists(namespace: str) -> bool:
    """Check if a Kubernetes namespace exists."""
    try:
        sh.kubectl("get", "ns", namespace)
    except sh.ErrorReturnCode:
        return False
    return True


def ensure_namespace(namespace: str) -> bool:
    """Create a namespace unless it already exists.

    Returns:
        True if the namespace was created.
    """
    if namespace_exists(namespace):
        return False
    sh.kubectl("create", "namespace", namespace)
    return True


def deploy_service(service: ServiceDeployment) -> None:
    """Upgrade or install one service release into its own namespace."""
    namespace = service.namespace
    console.print(f"[yellow]\U0001f527 Deploying to namespace '{namespace}' using {service.values_file}...[/yellow]")
    ensure_namespace(namespace)
    sh.helm(
        "upgrade", "--install", namespace, str(service.chart_dir),
        "-n", namespace,
        "-f", str(service.values_file),
    )


def deploy_services(values_dir: Path, chart_dir: Path) -> list[ServiceDeployment]:
    """Deploy every service found in the values directory.

    Args:
        values_dir: Directory holding ``*.yaml`` Helm values files.
        chart_dir: Shared chart directory.

    Returns:
        The deployments performed, in order.
    """
    console.print(Panel.fit(f"Deploying microservices from Helm values in {values_dir}/", style="bold blue"))
    services = discover_services(values_dir, chart_dir)
    if not services:
        console.print(f"[yellow]⚠️  No values files found in {values_dir}[/yellow]")
    for service in services:
        deploy_service(service)
    console.print("[green]✅ All Helm charts deployed.[/green]")
    return services
