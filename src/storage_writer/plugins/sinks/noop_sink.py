# src/storage_writer/plugins/sinks/noop_sink.py
"""No-op storage writer.

Lets callers always hold a valid sink without special-casing
"writing disabled".
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from storage_writer.contracts import H256, Address, Database, StorageRecord
from storage_writer.plugins.base import BaseStorageWriter

if TYPE_CHECKING:
    from storage_writer.core.config import StorageWriterSettings


class NoopStorageWriter(BaseStorageWriter):
    """Discard every record. Reports itself as disabled."""

    name = "none"
    database = Database.NONE

    def __init__(
        self,
        watched_accounts: Sequence[Address] = (),
        settings: "StorageWriterSettings | None" = None,
    ) -> None:
        # Nothing is ever written, so nothing is watched
        super().__init__((), settings)  # type: ignore[arg-type]

    def enabled(self) -> bool:
        return False

    def write_storage_node(
        self,
        contract: Address,
        block_hash: H256,
        block_number: int,
        key: H256,
        value: H256,
    ) -> None:
        # Skips StorageRecord validation: any input succeeds
        pass

    def _write_record(self, record: StorageRecord) -> None:
        # Required by BaseStorageWriter; never reached
        pass

    def clone_handle(self) -> "NoopStorageWriter":
        return NoopStorageWriter()

    def close(self) -> None:
        pass
