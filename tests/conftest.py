"""Shared fixtures: a recording stand-in for the ``sh`` module and a test config.

External CLIs are never executed; every module that shells out has its
``sh`` reference replaced by :class:`FakeSh`.
"""

from __future__ import annotations

import typing as typ
from contextlib import contextmanager
from pathlib import Path
from unittest.mock import MagicMock

import docker
import pytest

from devenv_manager import cluster, readiness, teardown, tools, utils, workloads
from devenv_manager.config import EnvConfig

TEMPLATE = """\
kind: Cluster
apiVersion: kind.x-k8s.io/v1alpha4
name: {{CLUSTER_NAME}}
nodes:
  - role: control-plane
    labels:
      owner: {{CLUSTER_NAME}}
"""


class FakeErrorReturnCode(Exception):
    """Mirror of ``sh.ErrorReturnCode`` carrying stdout/stderr bytes."""

    def __init__(self, full_cmd: str, stdout: bytes = b"", stderr: bytes = b"") -> None:
        super().__init__(f"RAN: {full_cmd}\n\nSTDERR:\n{stderr.decode()}")
        self.full_cmd = full_cmd
        self.stdout = stdout
        self.stderr = stderr


class FakeErrorReturnCode_1(FakeErrorReturnCode):  # noqa: N801
    """Mirror of ``sh.ErrorReturnCode_1``."""


Handler = typ.Callable[[tuple[str, ...]], object]


class FakeSh:
    """Records commands and answers them from registered prefixes.

    ``on("kind", "get", "clusters", stdout="a\\n")`` answers any command whose
    leading words match; the longest matching prefix wins. Unregistered
    commands succeed with empty output. ``which`` behaves like the real
    command: it raises for names missing from ``paths`` and prints the path
    with a trailing newline otherwise.
    """

    ErrorReturnCode = FakeErrorReturnCode
    ErrorReturnCode_1 = FakeErrorReturnCode_1

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.kwargs: list[dict] = []
        self.paths: dict[str, str] = {}
        self._handlers: list[tuple[tuple[str, ...], Handler]] = []

    def on(
        self,
        *prefix: str,
        stdout: str = "",
        fail: bool = False,
        stderr: str = "boom",
        handler: Handler | None = None,
    ) -> None:
        def _respond(cmd: tuple[str, ...]) -> object:
            if handler is not None:
                result = handler(cmd)
                if result is not None:
                    return result
            if fail:
                raise FakeErrorReturnCode_1(" ".join(cmd), stderr=stderr.encode())
            return stdout

        self._handlers.append((tuple(prefix), _respond))

    def which(self, name: str) -> str:
        if name not in self.paths:
            raise FakeErrorReturnCode_1(f"/usr/bin/which {name}")
        return self.paths[name] + "\n"

    def commands(self, name: str) -> list[tuple[str, ...]]:
        return [call for call in self.calls if call[0] == name]

    def __getattr__(self, name: str) -> typ.Callable[..., object]:
        if name.startswith("_"):
            raise AttributeError(name)

        def _command(*args: object, **kwargs: object) -> object:
            return self._run((name, *(str(a) for a in args)), kwargs)

        return _command

    def _run(self, cmd: tuple[str, ...], kwargs: dict) -> object:
        self.calls.append(cmd)
        self.kwargs.append(kwargs)
        matches = [(prefix, fn) for prefix, fn in self._handlers if cmd[:len(prefix)] == prefix]
        if not matches:
            return ""
        _, respond = max(matches, key=lambda item: len(item[0]))
        return respond(cmd)


@pytest.fixture
def fake_sh(monkeypatch: pytest.MonkeyPatch) -> FakeSh:
    """Replace ``sh`` in every module that invokes external commands."""
    fake = FakeSh()
    for module in (utils, tools, cluster, readiness, workloads, teardown):
        monkeypatch.setattr(module, "sh", fake)
    return fake


@pytest.fixture
def env_cfg(tmp_path: Path) -> EnvConfig:
    """Environment config whose files all live under a temporary directory."""
    infra = tmp_path / "infra"
    infra.mkdir()
    template = infra / "kind-config.template.yaml"
    template.write_text(TEMPLATE)
    manifest = infra / "postgres-deployment.yaml"
    manifest.write_text("apiVersion: v1\nkind: Namespace\nmetadata:\n  name: postgres\n")
    values_dir = tmp_path / "services"
    values_dir.mkdir()
    chart_dir = tmp_path / "helm"
    chart_dir.mkdir()
    return EnvConfig(
        cluster_name="test-cluster",
        kind_template=template,
        build_dir=tmp_path / "build",
        network_name="test-net",
        kind_install_path=tmp_path / "bin" / "kind",
        postgres_manifest=manifest,
        values_dir=values_dir,
        chart_dir=chart_dir,
        db_timeout=3,
        db_poll_interval=0.5,
    )


def not_found(name: str = "missing") -> docker.errors.NotFound:
    return docker.errors.NotFound(f"network {name} not found")


@pytest.fixture
def docker_mock() -> MagicMock:
    """Docker client whose networks come and go like the real engine's."""
    client = MagicMock()
    existing: dict[str, MagicMock] = {}

    def _get(name: str) -> MagicMock:
        if name not in existing:
            raise not_found(name)
        return existing[name]

    def _create(name: str, **_: object) -> MagicMock:
        network = MagicMock(name=f"network-{name}")
        network.remove.side_effect = lambda: existing.pop(name)
        existing[name] = network
        return network

    client.networks.get.side_effect = _get
    client.networks.create.side_effect = _create
    client.existing_networks = existing
    return client


@pytest.fixture
def client_factory(docker_mock: MagicMock) -> typ.Callable[[], typ.ContextManager[MagicMock]]:
    """Context manager factory yielding the docker mock."""

    @contextmanager
    def _factory() -> typ.Iterator[MagicMock]:
        yield docker_mock

    return _factory
