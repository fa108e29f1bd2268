"""Tests for the discovery service facade and its DI wiring."""

import pytest

from conftest import BUCKET, PREFIX

from object_store_discovery import create_injector
from object_store_discovery.cluster import ClusterNodesProvider, DiscoveryService
from object_store_discovery.codec import AnnouncementCodec
from object_store_discovery.configs import DiscoveryConfig
from object_store_discovery.directory import DirectoryClient
from object_store_discovery.exceptions import DiscoveryNotInitializedError
from object_store_discovery.models import ClusterNodeAddress

ADDRESS = ClusterNodeAddress(host="10.0.0.1", port=7800)


@pytest.fixture
def config():
    return DiscoveryConfig(
        bucket_name=BUCKET,
        bucket_region="eu-west-1",
        file_prefix=PREFIX,
        file_expiration=5,
        update_interval=2,
    )


@pytest.fixture
def service(config, directory, scheduler):
    svc = DiscoveryService(config, directory, scheduler)
    yield svc
    svc.destroy()


def test_service_is_a_cluster_nodes_provider(service):
    assert isinstance(service, ClusterNodesProvider)


def test_init_announces_and_schedules(service, directory, scheduler):
    service.init("node-1", ADDRESS)

    assert directory.keys(BUCKET) == [PREFIX + "node-1"]
    assert [interval for _, interval, _ in scheduler.scheduled] == [120]


def test_resolve_returns_future_of_peers(service, directory):
    service.init("node-1", ADDRESS)
    directory.put(BUCKET, PREFIX + "node-2", AnnouncementCodec.encode("node-2", "10.0.0.2", 7800, 0))
    directory.put(BUCKET, PREFIX + "node-3", b"garbage")

    future = service.resolve()
    peers = future.result(timeout=5)

    assert peers == {ADDRESS}
    assert PREFIX + "node-2" not in directory.keys(BUCKET)
    assert PREFIX + "node-3" in directory.keys(BUCKET)


def test_resolve_future_completes_when_store_fails(service, directory):
    service.init("node-1", ADDRESS)
    directory.fail_lists = True

    assert service.resolve().result(timeout=5) == set()


def test_get_nodes_and_self_address(service):
    with pytest.raises(DiscoveryNotInitializedError):
        service.get_self_address()

    service.init("node-1", ADDRESS)

    assert service.get_self_address() == "10.0.0.1:7800"
    assert service.get_nodes() == ["10.0.0.1:7800"]


def test_destroy_removes_announcement_and_is_idempotent(service, directory, scheduler):
    service.init("node-1", ADDRESS)

    service.destroy()
    service.destroy()

    assert directory.keys(BUCKET) == []
    assert scheduler.scheduled[0][2].cancelled


def test_resolve_after_destroy_yields_no_peers(service):
    service.init("node-1", ADDRESS)
    service.destroy()

    assert service.resolve().result(timeout=5) == set()


def test_injector_provides_singleton_service(config, directory):
    injector = create_injector(config, directory_client=directory)

    first = injector.get(DiscoveryService)
    second = injector.get(DiscoveryService)

    assert first is second
    assert injector.get(DirectoryClient) is directory
    first.init("node-1", ADDRESS)
    try:
        assert first.resolve().result(timeout=5) == {ADDRESS}
    finally:
        first.destroy()


def test_resolve_racing_destroy_yields_no_peers(service):
    service.init("node-1", ADDRESS)
    # destroy() has shut the worker pool down but not yet flagged the service
    service._DiscoveryService__executor.shutdown(wait=True)

    future = service.resolve()

    assert future.done()
    assert future.result() == set()
