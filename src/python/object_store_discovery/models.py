"""Data models for object-store peer discovery.

All models use Pydantic for validation; address and announcement
models are frozen so they hash and compare structurally.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# ── Addresses ─────────────────────────────────────────────────────


class ClusterNodeAddress(BaseModel):
    """Network address at which a cluster node accepts peer connections."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    """Hostname or IP address."""

    port: int
    """Cluster transport port."""

    def __str__(self) -> str:
        return f"{self.host}:{self.port}"


# ── Announcements ─────────────────────────────────────────────────


class NodeAnnouncement(BaseModel):
    """A node's published claim to be reachable."""

    model_config = ConfigDict(frozen=True)

    schema_version: str
    """Protocol version tag of the payload."""

    published_at_millis: int
    """Wall-clock epoch milliseconds at which the payload was written."""

    cluster_id: str
    """Identifier of the owning node within the cluster."""

    host: str
    """Host the owning node is reachable at."""

    port: int
    """Port the owning node is reachable at."""

    @property
    def address(self) -> ClusterNodeAddress:
        return ClusterNodeAddress(host=self.host, port=self.port)


# ── Directory listings ────────────────────────────────────────────


class ObjectListingPage(BaseModel):
    """One page of keys returned by a directory listing."""

    keys: list[str] = Field(default_factory=list)
    """Object keys on this page."""

    next_token: str | None = None
    """Continuation token for the next page, ``None`` on the last page."""

    @property
    def is_truncated(self) -> bool:
        return self.next_token is not None
