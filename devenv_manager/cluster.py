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

"""kind cluster lifecycle and config template rendering."""

from __future__ import annotations

from pathlib import Path

import docker
import sh
import yaml
from rich.panel import Panel

from devenv_manager import console, logger
from devenv_manager.config import EnvConfig
from devenv_manager.constants import CLUSTER_NAME_PLACEHOLDER
from devenv_manager.network import connect_container
from devenv_manager.utils import TemplateRenderError


# ============================================================================
# Config rendering
# ============================================================================

def render_cluster_config(template: Path, cluster_name: str) -> str:
    """Substitute the cluster name into a kind config template.

    Args:
        template: Path to the template file.
        cluster_name: Value for every ``{{CLUSTER_NAME}}`` placeholder.

    Returns:
        The rendered config text.

    Raises:
        TemplateRenderError: If the template is missing or the result is not YAML.
    """
    try:
        text = template.read_text()
    except OSError as err:
        raise TemplateRenderError(f"Cannot read cluster config template {template}: {err}") from err
    rendered = text.replace(CLUSTER_NAME_PLACEHOLDER, cluster_name)
    try:
        yaml.safe_load(rendered)
    except yaml.YAMLError as err:
        raise TemplateRenderError(f"Rendered cluster config from {template} is not valid YAML: {err}") from err
    return rendered


# ============================================================================
# Cluster operations
# ============================================================================

def list_clusters() -> list[str]:
    """Return the names of all kind clusters."""
    output = str(sh.kind("get", "clusters"))
    return [line.strip() for line in output.splitlines() if line.strip()]


def cluster_exists(cluster_name: str) -> bool:
    """Check if a kind cluster with exactly this name exists."""
    return cluster_name in list_clusters()


def ensure_cluster(cfg: EnvConfig, client: docker.DockerClient) -> bool:
    """Create the kind cluster and attach it to the shared network.

    The rendered config is scratch state and is removed on every exit path.

    Args:
        cfg: Environment configuration with cluster name, template and network.
        client: Docker engine client used to connect the control plane.

    Returns:
        True if a cluster was created, False if it already existed.
    """
    if cluster_exists(cfg.cluster_name):
        console.print(
            f"[green]✅ KinD cluster '{cfg.cluster_name}' already exists. Skipping creation.[/green]")
        return False

    console.print(Panel.fit(f"Creating KinD cluster '{cfg.cluster_name}'", style="bold blue"))
    rendered = render_cluster_config(cfg.kind_template, cfg.cluster_name)
    config_file = cfg.rendered_kind_config
    config_file.parent.mkdir(parents=True, exist_ok=True)
    try:
        config_file.write_text(rendered)
        logger.debug("Rendered %s to %s", cfg.kind_template, config_file)
        sh.kind("create", "cluster", "--name", cfg.cluster_name, "--config", str(config_file))
        connect_container(client, cfg.network_name, cfg.control_plane_container)
    finally:
        config_file.unlink(missing_ok=True)
    console.print("[green]✅ KinD cluster created and attached to network.[/green]")
    return True


def delete_cluster(cluster_name: str) -> None:
    """Delete the kind cluster."""
    console.print(f"[yellow]ℹ️  Deleting kind cluster '{cluster_name}'...[/yellow]")
    sh.kind("delete", "cluster", "--name", cluster_name)
    console.print(f"[green]✅ Cluster '{cluster_name}' deleted[/green]")
