from .directory_client import DirectoryClient
from .in_memory_directory_client import InMemoryDirectoryClient
from .s3_directory_client import S3DirectoryClient

__all__ = [
    "DirectoryClient",
    "InMemoryDirectoryClient",
    "S3DirectoryClient",
]
