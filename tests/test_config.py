"""Tests for environment configuration resolution."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from devenv_manager.config import EnvConfig, apply_overrides, resolve_config
from devenv_manager.constants import DEPENDENCIES, dep_value


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("DEVENV_CLUSTER_NAME", "DEVENV_DB_TIMEOUT", "DEVENV_VALUES_DIR"):
        monkeypatch.delenv(name, raising=False)


class TestEnvConfig:
    """Tests for EnvConfig defaults and derived values."""

    def test_defaults(self) -> None:
        cfg = EnvConfig()

        assert cfg.cluster_name == "qara-dev-local"
        assert cfg.network_name == "kind-compose-net"
        assert cfg.kind_version == "v0.23.0"
        assert cfg.kind_install_path == Path("/usr/local/bin/kind")
        assert cfg.db_timeout == 60
        assert cfg.values_dir == Path("src/services")
        assert cfg.chart_dir == Path("src/helm")

    def test_derived_names(self) -> None:
        cfg = EnvConfig(cluster_name="dev-a", build_dir=Path("out"))

        assert cfg.control_plane_container == "dev-a-control-plane"
        assert cfg.rendered_kind_config == Path("out/kind-config.yaml")

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEVENV_CLUSTER_NAME", "from-env")
        monkeypatch.setenv("DEVENV_DB_TIMEOUT", "5")
        monkeypatch.setenv("DEVENV_VALUES_DIR", "deploy/values")

        cfg = EnvConfig()

        assert cfg.cluster_name == "from-env"
        assert cfg.db_timeout == 5
        assert cfg.values_dir == Path("deploy/values")

    def test_rejects_bad_kind_version(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            EnvConfig(kind_version="latest")

    def test_rejects_negative_timeout(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            EnvConfig(db_timeout=-1)


class TestResolveConfig:
    """Tests for resolve_config precedence."""

    def test_cli_beats_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEVENV_CLUSTER_NAME", "from-env")

        assert resolve_config(cluster_name="from-cli").cluster_name == "from-cli"

    def test_none_overrides_are_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DEVENV_CLUSTER_NAME", "from-env")

        assert resolve_config(cluster_name=None).cluster_name == "from-env"

    def test_empty_cluster_name_is_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            resolve_config(cluster_name="")


class TestApplyOverrides:
    """Tests for apply_overrides validation."""

    def test_overrides_are_validated(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            apply_overrides(EnvConfig(), db_timeout=-1)

    def test_keeps_other_fields(self) -> None:
        cfg = EnvConfig(cluster_name="dev-a")

        updated = apply_overrides(cfg, db_timeout=5, chart_dir=None)

        assert updated.db_timeout == 5
        assert updated.cluster_name == "dev-a"
        assert updated.chart_dir == cfg.chart_dir


def test_dep_value() -> None:
    assert dep_value("kind", "version") == DEPENDENCIES["kind"]["version"]
    assert dep_value("kind", "missing", default="x") == "x"
    assert dep_value("kind", "version", "deeper", default=None) is None
