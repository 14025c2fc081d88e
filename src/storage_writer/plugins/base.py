# src/storage_writer/plugins/base.py
"""Base class for storage writer implementations.

Sinks MUST subclass BaseStorageWriter. The factory resolves sink classes
by their ``database`` class attribute.

Lifecycle:
    __init__(watched_accounts, settings)  -- acquire file handle / connection
    write_storage_diffs(...)              -- once per block, any thread
    clone_handle()                        -- independent copy, own handle
    close()                               -- release the handle

Thread safety:
    Concrete sinks guard their handle with a threading.Lock, so a single
    instance can be shared by several callers. Every write is flushed (or
    committed) before it returns.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from types import TracebackType
from typing import TYPE_CHECKING, ClassVar, Self

from storage_writer.contracts import H256, Address, Database, StorageDiffBatch, StorageRecord
from storage_writer.core.logging import get_logger

if TYPE_CHECKING:
    from storage_writer.core.config import StorageWriterSettings

logger = get_logger(__name__)


class BaseStorageWriter(ABC):
    """Something that can write storage values of watched accounts.

    Subclass and implement enabled(), _write_record() and close().

    Example:
        class MemoryStorageWriter(BaseStorageWriter):
            name = "memory"
            database = Database.CSV

            def enabled(self) -> bool:
                return True

            def _write_record(self, record: StorageRecord) -> None:
                self.rows.append(record.as_row())

            def close(self) -> None:
                pass
    """

    name: ClassVar[str]
    database: ClassVar[Database]

    def __init__(self, watched_accounts: Sequence[Address], settings: "StorageWriterSettings") -> None:
        self._watched_accounts: tuple[Address, ...] = tuple(watched_accounts)
        self._watched_set: frozenset[Address] = frozenset(self._watched_accounts)
        self._settings = settings

    @property
    def watched_accounts(self) -> tuple[Address, ...]:
        """Accounts this sink persists diffs for, in configured order."""
        return self._watched_accounts

    @property
    def settings(self) -> "StorageWriterSettings":
        return self._settings

    def is_watched(self, account: Address) -> bool:
        return account in self._watched_set

    @abstractmethod
    def enabled(self) -> bool:
        """Whether storage writing is enabled.

        Callers may skip diff computation entirely when this is False.
        """
        ...

    def write_storage_node(
        self,
        contract: Address,
        block_hash: H256,
        block_number: int,
        key: H256,
        value: H256,
    ) -> None:
        """Persist exactly one storage record.

        Raises:
            OSError: If the underlying medium rejects the write. Nothing is
                assumed persisted in that case.
        """
        self._write_record(StorageRecord(contract, block_hash, block_number, key, value))

    def write_storage_diffs(self, block_hash: H256, block_number: int, diffs: StorageDiffBatch) -> int:
        """Persist the storage diffs of one block for every watched account.

        Writes one record per changed key of each watched account. Iteration
        follows the order of the supplied mappings. The first failure
        propagates; records written before it stay written.

        Args:
            block_hash: Hash of the processed block.
            block_number: Height of the processed block.
            diffs: Account -> (storage key -> new value).

        Returns:
            Number of records written.
        """
        if not self.enabled():
            return 0

        written = 0
        for contract, slots in diffs.items():
            if not self.is_watched(contract):
                continue
            for key, value in slots.items():
                self.write_storage_node(contract, block_hash, block_number, key, value)
                written += 1

        logger.debug(
            "storage_diffs_written",
            sink=self.name,
            block_number=block_number,
            block_hash=block_hash.hex(),
            records=written,
        )
        return written

    def clone_handle(self) -> "BaseStorageWriter":
        """Return a new sink with the same configuration and its own handle.

        The resource is re-acquired, never shared, so the copy does not
        contend for the original's lock.
        """
        return type(self)(self._watched_accounts, self._settings)

    @abstractmethod
    def _write_record(self, record: StorageRecord) -> None:
        """Persist one record and flush it before returning."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Release the file handle or connection. Safe to call twice."""
        ...

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()
