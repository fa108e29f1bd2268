from .announcement_publisher import AnnouncementPublisher
from .cluster_nodes_provider import ClusterNodesProvider
from .discovery_service import DiscoveryService
from .peer_resolver import PeerResolver

__all__ = [
    "AnnouncementPublisher",
    "ClusterNodesProvider",
    "DiscoveryService",
    "PeerResolver",
]
