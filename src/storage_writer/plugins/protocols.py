# src/storage_writer/plugins/protocols.py
"""Protocol defining the storage writer contract.

Used for type checking at call sites that only need the interface.
Runtime discovery uses BaseStorageWriter subclasses registered through
pluggy hooks (see storage_writer.plugins.hookspecs).
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from storage_writer.contracts import H256, Address, Database, StorageDiffBatch


@runtime_checkable
class StorageWriterProtocol(Protocol):
    """Protocol for storage diff sinks.

    Three interchangeable implementations exist: CSV file, Postgres table
    and no-op. Upstream diff computation holds one of them and calls
    write_storage_diffs() once per processed block.
    """

    name: str
    database: "Database"

    @property
    def watched_accounts(self) -> tuple["Address", ...]: ...

    def enabled(self) -> bool:
        """Whether storage writing is enabled."""
        ...

    def write_storage_node(
        self,
        contract: "Address",
        block_hash: "H256",
        block_number: int,
        key: "H256",
        value: "H256",
    ) -> None:
        """Persist one record, flushed before returning."""
        ...

    def write_storage_diffs(self, block_hash: "H256", block_number: int, diffs: "StorageDiffBatch") -> int:
        """Persist one block's diffs for watched accounts. Returns records written."""
        ...

    def clone_handle(self) -> "StorageWriterProtocol":
        """Return an independent sink with the same configuration."""
        ...

    def close(self) -> None:
        """Release the underlying resource."""
        ...
