"""Object-store peer discovery.

Cluster nodes find each other through a shared, eventually consistent
object store: every node keeps one announcement object under a common
key prefix, and any node resolves its peers by listing and decoding
those objects. Expired announcements are deleted by whichever node
finds them first.

Quick Start::

    from object_store_discovery import ClusterNodeAddress, DiscoveryService, create_injector, load_config

    config = load_config("discovery.yaml")
    service = create_injector(config).get(DiscoveryService)

    service.init("node-1", ClusterNodeAddress(host="10.0.0.1", port=7800))
    peers = service.resolve().result()

    service.destroy()
"""

from .cluster import AnnouncementPublisher, ClusterNodesProvider, DiscoveryService, PeerResolver
from .codec import AnnouncementCodec
from .configs import AuthenticationType, DiscoveryConfig, load_config
from .directory import DirectoryClient, InMemoryDirectoryClient, S3DirectoryClient
from .discovery_module import create_injector
from .exceptions import (
    AnnouncementError,
    DirectoryClientError,
    DiscoveryConfigurationError,
    DiscoveryError,
    DiscoveryNotInitializedError,
    MalformedAnnouncementError,
    ObjectNotFoundError,
    StaleAnnouncementError,
)
from .models import ClusterNodeAddress, NodeAnnouncement, ObjectListingPage
from .scheduling import ScheduledTask, TaskScheduler, ThreadTaskScheduler

__version__ = "1.0.0"

__all__ = [
    # Main entry point
    "DiscoveryService",
    "create_injector",
    # Cluster
    "AnnouncementPublisher",
    "ClusterNodesProvider",
    "PeerResolver",
    # Codec
    "AnnouncementCodec",
    # Configuration
    "AuthenticationType",
    "DiscoveryConfig",
    "load_config",
    # Directory
    "DirectoryClient",
    "InMemoryDirectoryClient",
    "S3DirectoryClient",
    # Scheduling
    "ScheduledTask",
    "TaskScheduler",
    "ThreadTaskScheduler",
    # Models
    "ClusterNodeAddress",
    "NodeAnnouncement",
    "ObjectListingPage",
    # Exceptions
    "AnnouncementError",
    "DirectoryClientError",
    "DiscoveryConfigurationError",
    "DiscoveryError",
    "DiscoveryNotInitializedError",
    "MalformedAnnouncementError",
    "ObjectNotFoundError",
    "StaleAnnouncementError",
]
