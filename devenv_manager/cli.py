#!/usr/bin/env python3
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

"""
cli.py - CLI for the local kind development environment.

Commands:
    help               List commands (default)
    check-kind         Check if 'kind' is installed, install if missing
    install-kind       Force install 'kind'
    check-helm         Check if 'helm' is installed, install if missing
    install-helm       Force install 'helm'
    create-network     Create the shared Docker network
    create-cluster     Create the kind cluster and attach it to the network
    database           Deploy PostgreSQL
    reset-database     Redeploy PostgreSQL with a fresh volume
    wait-for-postgres  Wait until PostgreSQL is ready
    microservices      Deploy one Helm release per values file
    start              create-cluster + database + microservices
    clean              Tear everything down (best effort)

Environment Variables:
    All configuration can be overridden via DEVENV_* environment variables,
    e.g. DEVENV_CLUSTER_NAME, DEVENV_NETWORK_NAME, DEVENV_DB_TIMEOUT,
    DEVENV_VALUES_DIR, DEVENV_CHART_DIR.

Examples:
    # Bring the whole environment up
    devenv start

    # Redeploy services only
    devenv microservices

    # Tear down
    devenv clean
"""

from __future__ import annotations

import logging
import sys

import typer

from devenv_manager import console
from devenv_manager.commands import cluster_cmd, lifecycle_cmd, tools_cmd, workloads_cmd
from devenv_manager.config import resolve_config

app = typer.Typer(help="Local kind development environment.", add_completion=False)


def _print_commands(ctx: typer.Context) -> None:
    """Print usage and the list of available commands."""
    typer.echo("Usage: devenv <command>")
    typer.echo("")
    typer.echo("Available commands:")
    group = ctx.command
    for name in group.list_commands(ctx):
        command = group.get_command(ctx, name)
        typer.echo(f"  {name:<18} {command.get_short_help_str(limit=70)}")


@app.callback(invoke_without_command=True)
def _main_callback(
    ctx: typer.Context,
    cluster_name: str | None = typer.Option(
        None, "--cluster-name", help="kind cluster name (overrides DEVENV_CLUSTER_NAME)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Initialize logging and configuration for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    ctx.obj = resolve_config(cluster_name=cluster_name)
    if ctx.invoked_subcommand is None:
        _print_commands(ctx)


@app.command("help")
def help_cmd(ctx: typer.Context) -> None:
    """Show this help message."""
    _print_commands(ctx.parent)


app.command("check-kind")(tools_cmd.check_kind)
app.command("install-kind")(tools_cmd.install_kind)
app.command("check-helm")(tools_cmd.check_helm)
app.command("install-helm")(tools_cmd.install_helm)
app.command("create-network")(cluster_cmd.create_network)
app.command("create-cluster")(cluster_cmd.create_cluster)
app.command("database")(workloads_cmd.database)
app.command("reset-database")(workloads_cmd.reset_database_cmd)
app.command("wait-for-postgres")(workloads_cmd.wait_for_postgres)
app.command("microservices")(workloads_cmd.microservices)
app.command("start")(lifecycle_cmd.start)
app.command("clean")(lifecycle_cmd.clean)


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except Exception as e:
        console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
