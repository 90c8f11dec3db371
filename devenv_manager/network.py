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

"""Shared Docker network lifecycle."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

import docker

from devenv_manager import console, logger


@contextmanager
def docker_client() -> Iterator[docker.DockerClient]:
    """Open a Docker engine client from the environment and close it afterwards."""
    client = docker.from_env()
    try:
        yield client
    finally:
        client.close()


def network_exists(client: docker.DockerClient, name: str) -> bool:
    """Check whether a Docker network with this name exists.

    Args:
        client: Docker engine client.
        name: Network name to inspect.

    Returns:
        True if the network exists, False otherwise.
    """
    try:
        client.networks.get(name)
    except docker.errors.NotFound:
        return False
    return True


def ensure_network(client: docker.DockerClient, name: str) -> bool:
    """Create the shared Docker network unless it already exists.

    Args:
        client: Docker engine client.
        name: Network name.

    Returns:
        True if the network was created, False if it already existed.
    """
    console.print(f"[yellow]\U0001f310 Creating shared Docker network '{name}'...[/yellow]")
    if network_exists(client, name):
        console.print(f"[green]✅ Docker network '{name}' already exists[/green]")
        return False
    client.networks.create(name)
    console.print(f"[green]✅ Docker network '{name}' created[/green]")
    return True


def connect_container(client: docker.DockerClient, name: str, container: str) -> None:
    """Attach a container to the named network."""
    console.print(f"[yellow]\U0001f517 Connecting '{container}' to network '{name}'...[/yellow]")
    client.networks.get(name).connect(container)


def remove_network(client: docker.DockerClient, name: str) -> bool:
    """Remove the named network.

    Returns:
        True if a network was removed, False if none existed.
    """
    try:
        network = client.networks.get(name)
    except docker.errors.NotFound:
        logger.debug("Docker network '%s' not found, nothing to remove", name)
        return False
    network.remove()
    return True
