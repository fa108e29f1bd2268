"""Dependency injection wiring for the discovery service."""

from __future__ import annotations

from injector import Binder, Injector, singleton

from .configs import DiscoveryConfig
from .directory import DirectoryClient, S3DirectoryClient
from .directory.s3_client_provider import create_s3_client
from .scheduling import TaskScheduler, ThreadTaskScheduler


def create_injector(
    config: DiscoveryConfig,
    directory_client: DirectoryClient | None = None,
) -> Injector:
    """Build an injector that can provide a ready :class:`DiscoveryService`.

    Args:
        config: Validated discovery settings.
        directory_client: Directory to use instead of the configured S3
            bucket (for example an :class:`InMemoryDirectoryClient`).

    Raises:
        DiscoveryConfigurationError: No ``directory_client`` was given
            and the S3 client cannot be built.
    """
    if directory_client is None:
        directory_client = S3DirectoryClient(create_s3_client(config))

    def configure_bindings(binder: Binder) -> None:
        binder.bind(DiscoveryConfig, to=config)
        binder.bind(DirectoryClient, to=directory_client)
        binder.bind(TaskScheduler, to=ThreadTaskScheduler, scope=singleton)

    return Injector([configure_bindings])
