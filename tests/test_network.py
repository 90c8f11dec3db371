"""Unit tests for the shared Docker network helpers."""

from __future__ import annotations

from unittest.mock import MagicMock

from devenv_manager.network import connect_container, ensure_network, network_exists, remove_network


class TestEnsureNetwork:
    """Tests for ensure_network."""

    def test_creates_missing_network(self, docker_mock: MagicMock) -> None:
        assert ensure_network(docker_mock, "test-net") is True

        docker_mock.networks.create.assert_called_once_with("test-net")

    def test_existing_network_is_left_alone(self, docker_mock: MagicMock) -> None:
        docker_mock.networks.create("test-net")
        docker_mock.networks.create.reset_mock()

        assert ensure_network(docker_mock, "test-net") is False

        docker_mock.networks.create.assert_not_called()

    def test_second_call_performs_no_creation(self, docker_mock: MagicMock) -> None:
        first = ensure_network(docker_mock, "test-net")
        second = ensure_network(docker_mock, "test-net")

        assert (first, second) == (True, False)
        assert docker_mock.networks.create.call_count == 1
        assert network_exists(docker_mock, "test-net")


class TestConnectAndRemove:
    """Tests for connect_container and remove_network."""

    def test_connect_attaches_container(self, docker_mock: MagicMock) -> None:
        network = docker_mock.networks.create("test-net")

        connect_container(docker_mock, "test-net", "test-cluster-control-plane")

        network.connect.assert_called_once_with("test-cluster-control-plane")

    def test_remove_existing_network(self, docker_mock: MagicMock) -> None:
        network = docker_mock.networks.create("test-net")

        assert remove_network(docker_mock, "test-net") is True

        network.remove.assert_called_once_with()
        assert not network_exists(docker_mock, "test-net")

    def test_remove_missing_network_is_noop(self, docker_mock: MagicMock) -> None:
        assert remove_network(docker_mock, "test-net") is False
