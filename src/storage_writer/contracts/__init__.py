"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/plugins.
Settings classes are NOT re-exported here - import them from
storage_writer.core.config.
"""

from storage_writer.contracts.enums import Database
from storage_writer.contracts.errors import (
    InvalidDatabaseError,
    SinkInitError,
    StorageWriteError,
    StorageWriterError,
    StorageWriterPluginError,
)
from storage_writer.contracts.types import H256, Address, StorageDiffBatch, StorageRecord

__all__ = [
    "H256",
    "Address",
    "Database",
    "InvalidDatabaseError",
    "SinkInitError",
    "StorageDiffBatch",
    "StorageRecord",
    "StorageWriteError",
    "StorageWriterError",
    "StorageWriterPluginError",
]
