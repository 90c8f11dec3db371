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

"""Fixed-interval readiness polling."""

from __future__ import annotations

import time
from collections.abc import Callable

import sh
from tenacity import RetryCallState, RetryError, Retrying, retry_if_result, stop_after_attempt, wait_fixed

from devenv_manager import console, logger
from devenv_manager.config import EnvConfig
from devenv_manager.constants import PG_PROBE_POD
from devenv_manager.utils import ReadinessTimeoutError


def wait_ready(
    probe: Callable[[], bool],
    timeout_attempts: int,
    interval_seconds: float,
    target: str = "service",
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Poll a probe until it passes or the attempt budget runs out.

    The probe runs at most ``timeout_attempts + 1`` times with a fixed
    ``interval_seconds`` pause between runs.

    Args:
        probe: Callable returning True once the target is ready.
        timeout_attempts: Failed probes tolerated before giving up.
        interval_seconds: Pause between consecutive probes.
        target: Human readable name used in messages.
        sleep: Sleep function used between probes.

    Returns:
        Number of probes run, including the successful one.

    Raises:
        ReadinessTimeoutError: If the probe never passed.
    """
    attempts = 0

    def _attempt() -> bool:
        nonlocal attempts
        attempts += 1
        return probe()

    def _log_wait(retry_state: RetryCallState) -> None:
        console.print(f"⏱  Waiting... ({retry_state.attempt_number})")

    retrying = Retrying(
        stop=stop_after_attempt(timeout_attempts + 1),
        wait=wait_fixed(interval_seconds),
        retry=retry_if_result(lambda ok: not ok),
        before_sleep=_log_wait,
        sleep=sleep,
    )
    try:
        retrying(_attempt)
    except RetryError as err:
        console.print(f"[red]❌ {target} not ready after {attempts} attempts[/red]")
        raise ReadinessTimeoutError(target, attempts) from err
    logger.debug("%s ready after %d probe(s)", target, attempts)
    return attempts


def postgres_probe(cfg: EnvConfig) -> Callable[[], bool]:
    """Build a probe that runs ``pg_isready`` from a throwaway pod.

    Args:
        cfg: Environment configuration with PostgreSQL namespace, host and image.

    Returns:
        Callable returning True when PostgreSQL accepts connections.
    """
    def _probe() -> bool:
        try:
            sh.kubectl(
                "run", PG_PROBE_POD,
                f"--image={cfg.postgres_image}",
                "--rm", "-i", "--restart=Never",
                "-n", cfg.postgres_namespace,
                "--", "pg_isready", "-h", cfg.postgres_host, "-U", cfg.postgres_user,
            )
        except sh.ErrorReturnCode as err:
            logger.debug("PostgreSQL probe failed: %s", err)
            return False
        return True

    return _probe


def wait_for_postgres(cfg: EnvConfig, sleep: Callable[[float], None] = time.sleep) -> int:
    """Block until PostgreSQL is ready.

    Raises:
        ReadinessTimeoutError: If PostgreSQL is not ready within ``cfg.db_timeout`` retries.
    """
    console.print("[yellow]⏳ Waiting for PostgreSQL to be ready...[/yellow]")
    attempts = wait_ready(
        postgres_probe(cfg), cfg.db_timeout, cfg.db_poll_interval,
        target="PostgreSQL", sleep=sleep,
    )
    console.print("[green]✅ PostgreSQL is ready![/green]")
    return attempts
