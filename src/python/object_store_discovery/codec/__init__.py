from .announcement_codec import SCHEMA_VERSION, SEPARATOR, AnnouncementCodec

__all__ = [
    "AnnouncementCodec",
    "SCHEMA_VERSION",
    "SEPARATOR",
]
