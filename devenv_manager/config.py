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

"""Environment configuration and config resolution/display."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.panel import Panel

from devenv_manager import console
from devenv_manager.constants import (
    CONTROL_PLANE_SUFFIX,
    DEFAULT_BUILD_DIR,
    DEFAULT_CHART_DIR,
    DEFAULT_CLUSTER_NAME,
    DEFAULT_DB_POLL_INTERVAL_SECONDS,
    DEFAULT_DB_TIMEOUT,
    DEFAULT_KIND_INSTALL_PATH,
    DEFAULT_KIND_TEMPLATE,
    DEFAULT_KIND_VERSION,
    DEFAULT_NETWORK_NAME,
    DEFAULT_POSTGRES_APP_LABEL,
    DEFAULT_POSTGRES_HOST,
    DEFAULT_POSTGRES_IMAGE,
    DEFAULT_POSTGRES_MANIFEST,
    DEFAULT_POSTGRES_NAMESPACE,
    DEFAULT_POSTGRES_PVC,
    DEFAULT_POSTGRES_USER,
    DEFAULT_VALUES_DIR,
    RENDERED_KIND_CONFIG,
)


# ============================================================================
# Configuration classes
# ============================================================================

class EnvConfig(BaseSettings):
    """Local environment configuration, auto-loaded from DEVENV_* env vars.

    Relative paths are resolved against the working directory the command
    runs from.

    Attributes:
        cluster_name: Name of the kind cluster.
        kind_version: kind release to download when installing.
        kind_template: Cluster config template containing ``{{CLUSTER_NAME}}``.
        build_dir: Scratch directory for the rendered cluster config.
        network_name: Shared Docker network joined by the control plane.
        kind_install_path: Where the kind binary is installed.
        postgres_manifest: Static PostgreSQL manifest applied with kubectl.
        postgres_namespace: Namespace the PostgreSQL service lives in.
        postgres_image: Image used for the throwaway readiness probe pod.
        postgres_host: Service host name the probe connects to.
        postgres_user: User name passed to ``pg_isready``.
        postgres_pvc: PersistentVolumeClaim dropped on database reset.
        postgres_app_label: ``app`` label of the PostgreSQL pods.
        db_timeout: Failed probes tolerated before giving up.
        db_poll_interval: Seconds between readiness probes.
        values_dir: Directory of per-service Helm values files.
        chart_dir: Shared Helm chart deployed once per service.
    """

    model_config = SettingsConfigDict(env_prefix="DEVENV_", extra="ignore")

    cluster_name: str = Field(default=DEFAULT_CLUSTER_NAME, min_length=1)
    kind_version: str = Field(default=DEFAULT_KIND_VERSION, pattern=r"^v[\d.]+(-[\w.]+)?$")
    kind_template: Path = DEFAULT_KIND_TEMPLATE
    build_dir: Path = DEFAULT_BUILD_DIR
    network_name: str = Field(default=DEFAULT_NETWORK_NAME, min_length=1)
    kind_install_path: Path = DEFAULT_KIND_INSTALL_PATH
    postgres_manifest: Path = DEFAULT_POSTGRES_MANIFEST
    postgres_namespace: str = DEFAULT_POSTGRES_NAMESPACE
    postgres_image: str = DEFAULT_POSTGRES_IMAGE
    postgres_host: str = DEFAULT_POSTGRES_HOST
    postgres_user: str = DEFAULT_POSTGRES_USER
    postgres_pvc: str = DEFAULT_POSTGRES_PVC
    postgres_app_label: str = DEFAULT_POSTGRES_APP_LABEL
    db_timeout: int = Field(default=DEFAULT_DB_TIMEOUT, ge=0, le=3600)
    db_poll_interval: float = Field(default=DEFAULT_DB_POLL_INTERVAL_SECONDS, ge=0)
    values_dir: Path = DEFAULT_VALUES_DIR
    chart_dir: Path = DEFAULT_CHART_DIR

    @property
    def rendered_kind_config(self) -> Path:
        """Scratch location of the rendered cluster config."""
        return self.build_dir / RENDERED_KIND_CONFIG

    @property
    def control_plane_container(self) -> str:
        """Docker container name of the cluster's control-plane node."""
        return f"{self.cluster_name}{CONTROL_PLANE_SUFFIX}"


def resolve_config(**overrides: object) -> EnvConfig:
    """Merge CLI overrides, environment variables, and defaults.

    Resolution priority: CLI arguments > DEVENV_* environment variables > defaults.

    Args:
        **overrides: Field values supplied on the command line; ``None``
            entries are ignored.

    Returns:
        The resolved environment configuration.
    """
    return apply_overrides(EnvConfig(), **overrides)


def apply_overrides(cfg: EnvConfig, **overrides: object) -> EnvConfig:
    """Return a validated copy of *cfg* with the non-None overrides applied.

    Raises:
        pydantic.ValidationError: If an override breaks a field constraint.
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return cfg
    return EnvConfig.model_validate({**cfg.model_dump(), **updates})


# ============================================================================
# Display
# ============================================================================

def display_config(cfg: EnvConfig) -> None:
    """Print the resolved environment configuration.

    Args:
        cfg: Resolved environment configuration.
    """
    console.print(Panel.fit("Configuration", style="bold blue"))
    console.print("[yellow]kind cluster:[/yellow]")
    console.print(f"  cluster_name    : {cfg.cluster_name}")
    console.print(f"  kind_version    : {cfg.kind_version}")
    console.print(f"  kind_template   : {cfg.kind_template}")
    console.print(f"  network_name    : {cfg.network_name}")
    console.print("[yellow]PostgreSQL:[/yellow]")
    console.print(f"  manifest        : {cfg.postgres_manifest}")
    console.print(f"  namespace       : {cfg.postgres_namespace}")
    console.print(f"  db_timeout      : {cfg.db_timeout}")
    console.print("[yellow]Microservices:[/yellow]")
    console.print(f"  values_dir      : {cfg.values_dir}")
    console.print(f"  chart_dir       : {cfg.chart_dir}")
