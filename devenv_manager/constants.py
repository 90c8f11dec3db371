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

"""Constants, dependency loading, and dep_value helper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_dependencies() -> dict:
    """Load tool versions and download locations from dependencies.yaml.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    deps_file = Path(__file__).resolve().parent / "dependencies.yaml"
    with open(deps_file) as f:
        return yaml.safe_load(f)


DEPENDENCIES = load_dependencies()


def dep_value(*keys: str, default: Any = None) -> Any:
    """Safely traverse the DEPENDENCIES dict by key path.

    Args:
        *keys: Sequence of dictionary keys to traverse.
        default: Value to return if any key is missing.

    Returns:
        The value at the nested key path, or *default* if not found.
    """
    node = DEPENDENCIES
    for key in keys:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


# -- Cluster --
CLUSTER_NAME_PLACEHOLDER = "{{CLUSTER_NAME}}"
CONTROL_PLANE_SUFFIX = "-control-plane"
RENDERED_KIND_CONFIG = "kind-config.yaml"

# -- Tool downloads --
KIND_DOWNLOAD_URL = dep_value(
    "kind", "download_url", default="https://kind.sigs.k8s.io/dl/{version}/kind-{os}-amd64")
HELM_INSTALL_SCRIPT_URL = dep_value(
    "helm", "install_script",
    default="https://raw.githubusercontent.com/helm/helm/main/scripts/get-helm-3")
HELM_BREW_FORMULA = dep_value("helm", "brew_formula", default="helm")
PROC_VERSION_FILE = Path("/proc/version")

# -- Commands that must already be installed --
PREREQUISITE_COMMANDS = ("kubectl",)

# -- PostgreSQL readiness probe --
PG_PROBE_POD = "pgwait"

# -- Defaults --
DEFAULT_CLUSTER_NAME = "qara-dev-local"
DEFAULT_KIND_VERSION = dep_value("kind", "version", default="v0.23.0")
DEFAULT_INFRA_DIR = Path("src/infra")
DEFAULT_KIND_TEMPLATE = DEFAULT_INFRA_DIR / "kind-config.template.yaml"
DEFAULT_POSTGRES_MANIFEST = DEFAULT_INFRA_DIR / "postgres-deployment.yaml"
DEFAULT_BUILD_DIR = Path("build")
DEFAULT_NETWORK_NAME = "kind-compose-net"
DEFAULT_KIND_INSTALL_PATH = Path("/usr/local/bin/kind")
DEFAULT_VALUES_DIR = Path("src/services")
DEFAULT_CHART_DIR = Path("src/helm")
DEFAULT_POSTGRES_NAMESPACE = "postgres"
DEFAULT_POSTGRES_IMAGE = dep_value("postgres", "probe_image", default="postgres:15")
DEFAULT_POSTGRES_HOST = "postgres"
DEFAULT_POSTGRES_USER = "postgres"
DEFAULT_POSTGRES_PVC = "postgres-pvc"
DEFAULT_POSTGRES_APP_LABEL = "postgres"
DEFAULT_DB_TIMEOUT = 60
DEFAULT_DB_POLL_INTERVAL_SECONDS = 1.0
