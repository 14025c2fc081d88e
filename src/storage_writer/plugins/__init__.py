"""Storage writer plugin system: base class, protocol, hooks and sinks."""

from storage_writer.plugins.base import BaseStorageWriter
from storage_writer.plugins.protocols import StorageWriterProtocol

__all__ = [
    "BaseStorageWriter",
    "StorageWriterProtocol",
]
