"""Wire codec for node announcements.

Payload layout (before base64)::

    1||||<published millis>||||<cluster id>||||<host>||||<port>||||

The trailing delimiter is part of the format and is always written.
Readers ignore trailing empty fields, so payloads from writers that
omit it still decode.
"""

from __future__ import annotations

import base64
import binascii
import re

from ..exceptions import MalformedAnnouncementError, StaleAnnouncementError
from ..models import NodeAnnouncement

SCHEMA_VERSION = "1"
SEPARATOR = "||||"

# version, published, cluster id, host, port
_MIN_FIELDS = 5
_MILLIS_PER_MINUTE = 60_000
_INTEGER = re.compile(r"[+-]?[0-9]+")


class AnnouncementCodec:
    """Encodes and decodes the announcement payload stored per node."""

    @staticmethod
    def encode(cluster_id: str, host: str, port: int, now_millis: int) -> bytes:
        """Build the base64 payload announcing ``host:port`` for ``cluster_id``.

        Args:
            cluster_id: Identifier of the announcing node.
            host: Host peers should connect to.
            port: Port peers should connect to.
            now_millis: Publication time in epoch milliseconds.

        Returns:
            ASCII bytes safe to store as a text object.
        """
        content = (
            SCHEMA_VERSION + SEPARATOR
            + str(now_millis) + SEPARATOR
            + cluster_id + SEPARATOR
            + host + SEPARATOR
            + str(port) + SEPARATOR
        )
        return base64.b64encode(content.encode("utf-8"))

    @staticmethod
    def decode(payload: bytes | str, expiration_minutes: int, now_millis: int) -> NodeAnnouncement:
        """Parse a stored payload back into a :class:`NodeAnnouncement`.

        Args:
            payload: Raw object content.
            expiration_minutes: Maximum announcement age; ``<= 0`` disables
                expiry.
            now_millis: Current time in epoch milliseconds.

        Raises:
            MalformedAnnouncementError: The payload cannot be read. The
                backing object may belong to another protocol version and
                should be left alone.
            StaleAnnouncementError: The payload is readable but older
                than the expiration window.
        """
        if isinstance(payload, str):
            payload = payload.encode("ascii", errors="replace")

        try:
            content = base64.b64decode(payload.strip(), validate=True).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            raise MalformedAnnouncementError(f"not a base64 utf-8 payload ({e})") from e

        fields = content.split(SEPARATOR)
        while fields and fields[-1] == "":
            fields.pop()
        if len(fields) < _MIN_FIELDS:
            raise MalformedAnnouncementError(
                f"expected at least {_MIN_FIELDS} fields, got {len(fields)}"
            )

        version, published_raw, cluster_id, host, port_raw = fields[:_MIN_FIELDS]

        if not _INTEGER.fullmatch(published_raw):
            raise MalformedAnnouncementError(f"invalid timestamp '{published_raw}'")
        published_at = int(published_raw)

        if expiration_minutes > 0:
            if published_at + expiration_minutes * _MILLIS_PER_MINUTE <= now_millis:
                raise StaleAnnouncementError(published_at, expiration_minutes)

        if not host:
            raise MalformedAnnouncementError("empty host")

        if not _INTEGER.fullmatch(port_raw):
            raise MalformedAnnouncementError(f"invalid port '{port_raw}'")

        return NodeAnnouncement(
            schema_version=version,
            published_at_millis=published_at,
            cluster_id=cluster_id,
            host=host,
            port=int(port_raw),
        )
