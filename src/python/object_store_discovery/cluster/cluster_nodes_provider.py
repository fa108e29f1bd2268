"""Abstract base class for cluster node discovery.

Membership subsystems poll an implementation of this interface for
the list of peer addresses. The list may change at any time as nodes
join or leave the cluster.
"""

from __future__ import annotations

import abc


class ClusterNodesProvider(abc.ABC):
    """Interface that supplies the current set of cluster node addresses.

    Each address is a string in ``host:port`` format (e.g.
    ``"10.0.0.5:4322"``).
    """

    @abc.abstractmethod
    def get_nodes(self) -> list[str]:
        """Return the current list of peer node addresses.

        It **must** be safe to call from any thread. Implementations
        backed by remote storage may take as long as one full listing
        of that storage.

        Returns:
            A list of ``"host:port"`` strings. The list may include the
            local node; callers are expected to recognise and ignore
            their own address.
        """
        ...

    @abc.abstractmethod
    def get_self_address(self) -> str:
        """Return the ``"host:port"`` address other nodes use to reach *this* node."""
        ...
