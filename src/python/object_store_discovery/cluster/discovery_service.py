import logging
from concurrent.futures import Future, ThreadPoolExecutor
from injector import inject, singleton
from object_store_discovery.cluster.announcement_publisher import AnnouncementPublisher
from object_store_discovery.cluster.cluster_nodes_provider import ClusterNodesProvider
from object_store_discovery.cluster.peer_resolver import PeerResolver
from object_store_discovery.configs import DiscoveryConfig
from object_store_discovery.directory import DirectoryClient
from object_store_discovery.exceptions import DiscoveryNotInitializedError
from object_store_discovery.models import ClusterNodeAddress
from object_store_discovery.scheduling import TaskScheduler


@singleton
class DiscoveryService(ClusterNodesProvider):
    """
    Peer discovery through a shared object store.

    Each node announces itself by writing one object under the configured
    prefix and resolves its peers by listing and decoding every object under
    that prefix.  Lifecycle:

    - `init(cluster_id, own_address)` publishes this node and starts the
      refresh schedule.
    - `resolve()` lists the directory on a worker thread and returns a
      future of the live peer addresses (this node included).
    - `destroy()` stops refreshing and removes this node's announcement.

    Directory failures are logged and absorbed; none of these methods raise
    because of the object store.
    """

    @inject
    def __init__(self,
                 config: DiscoveryConfig,
                 directory_client: DirectoryClient,
                 scheduler: TaskScheduler):
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__publisher = AnnouncementPublisher(
            directory_client=directory_client,
            bucket_name=config.bucket_name,
            file_prefix=config.file_prefix,
            update_interval_minutes=config.update_interval_minutes,
            scheduler=scheduler,
        )
        self.__resolver = PeerResolver(
            directory_client=directory_client,
            bucket_name=config.bucket_name,
            file_prefix=config.file_prefix,
            expiration_minutes=config.expiration_minutes,
        )
        self.__executor = ThreadPoolExecutor(
            max_workers=config.resolve_threads,
            thread_name_prefix="discovery-resolve",
        )
        self.__destroyed = False

    def init(self, cluster_id: str, own_address: ClusterNodeAddress) -> None:
        """
        Announce this node in the directory.

        Args:
            cluster_id: Identifier of this node within the cluster; also the object key suffix.
            own_address: Address peers should use to reach this node.
        """
        self.__logger.info(f"Initializing discovery for {cluster_id} at {own_address}")
        self.__publisher.init(cluster_id, own_address)

    def resolve(self) -> "Future[set[ClusterNodeAddress]]":
        """
        Resolve the live peers without blocking the caller.

        Returns:
            A future that always completes with a set of addresses (possibly empty).
        """
        if not self.__destroyed:
            try:
                return self.__executor.submit(self.__resolver.resolve)
            except RuntimeError:
                # Executor shut down by a concurrent destroy
                pass
        self.__logger.warning("Resolve requested after destroy, returning no peers")
        future: Future[set[ClusterNodeAddress]] = Future()
        future.set_result(set())
        return future

    def destroy(self) -> None:
        """
        Stop refreshing and remove this node's announcement.  Safe to call more than once.
        """
        self.__publisher.destroy()
        self.__destroyed = True
        self.__executor.shutdown(wait=False)

    def get_nodes(self) -> list[str]:
        return sorted(str(address) for address in self.__resolver.resolve())

    def get_self_address(self) -> str:
        own_address = self.__publisher.own_address
        if own_address is None:
            raise DiscoveryNotInitializedError()
        return str(own_address)
