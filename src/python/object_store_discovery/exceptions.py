"""Exception hierarchy for object-store peer discovery."""

from __future__ import annotations


class DiscoveryError(Exception):
    """Base exception for all discovery errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


# ── Lifecycle / Configuration Errors ─────────────────────────────

class DiscoveryConfigurationError(DiscoveryError):
    """Raised at startup when discovery cannot be configured.

    Covers a missing bucket, unusable credentials and similar
    conditions the node cannot recover from.
    """


class DiscoveryNotInitializedError(DiscoveryError):
    """Raised when the local identity is requested before ``init``."""

    def __init__(self, message: str = "Discovery service has not been initialized.") -> None:
        super().__init__(message)


# ── Directory Errors ──────────────────────────────────────────────

class DirectoryClientError(DiscoveryError):
    """Raised when an object store operation fails."""

    def __init__(self, bucket: str, key: str, reason: str = "") -> None:
        self.bucket = bucket
        self.key = key
        self.reason = reason
        msg = f"Object store operation on '{bucket}/{key}' failed."
        if reason:
            msg += f" Reason: {reason}"
        super().__init__(msg)


class ObjectNotFoundError(DirectoryClientError):
    """Raised when a requested object does not exist at read time."""

    def __init__(self, bucket: str, key: str) -> None:
        super().__init__(bucket, key, reason="No such object")


# ── Announcement Errors ───────────────────────────────────────────

class AnnouncementError(DiscoveryError):
    """Base class for announcements that cannot be used."""


class MalformedAnnouncementError(AnnouncementError):
    """Raised when a payload is not a readable announcement."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed announcement: {reason}")


class StaleAnnouncementError(AnnouncementError):
    """Raised when a readable announcement is older than the expiration window."""

    def __init__(self, published_at_millis: int, expiration_minutes: int) -> None:
        self.published_at_millis = published_at_millis
        self.expiration_minutes = expiration_minutes
        super().__init__(
            f"Announcement published at {published_at_millis} expired "
            f"after {expiration_minutes} minute(s)."
        )
