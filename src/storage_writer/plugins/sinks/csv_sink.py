# src/storage_writer/plugins/sinks/csv_sink.py
"""CSV storage writer.

Appends one row per changed storage slot of a watched account to
``$BASE/watched_storage``. Rows have no header and are never rewritten:
a slot that changes again gets a new row, so the file holds the full
history rather than latest values.

Row layout (all hex lowercase, no 0x prefix):
    contract,block_hash,block_number,key,value
"""

import csv
import os
import threading
from collections.abc import Sequence
from typing import IO, TYPE_CHECKING

from storage_writer.contracts import Address, Database, SinkInitError, StorageRecord
from storage_writer.core.logging import get_logger
from storage_writer.core.paths import WATCHED_STORAGE_PATH, replace_home
from storage_writer.plugins.base import BaseStorageWriter

if TYPE_CHECKING:
    from storage_writer.core.config import StorageWriterSettings

logger = get_logger(__name__)


class CsvStorageWriter(BaseStorageWriter):
    """Append storage records to a CSV file under the data directory.

    The file is opened in append mode at construction and stays open for
    the life of the sink. A lock serializes writers sharing the instance;
    every row is flushed and fsynced before write returns.

    Raises:
        SinkInitError: At construction, if the file cannot be opened.
    """

    name = "csv"
    database = Database.CSV

    def __init__(self, watched_accounts: Sequence[Address], settings: "StorageWriterSettings") -> None:
        super().__init__(watched_accounts, settings)
        self._path = replace_home(settings.data_dir, WATCHED_STORAGE_PATH)
        self._lock = threading.Lock()

        try:
            # a+ = read, write, append, create if absent
            self._file: IO[str] | None = open(  # noqa: SIM115 - handle kept open for streaming writes, closed in close()
                self._path, "a+", encoding="utf-8", newline=""
            )
        except OSError as e:
            raise SinkInitError(self.name, self._path, str(e)) from e
        self._writer = csv.writer(self._file, lineterminator="\n")

        logger.debug("storage_writer_opened", sink=self.name, path=self._path, watched=len(self._watched_accounts))

    @property
    def path(self) -> str:
        """Resolved path of the output file."""
        return self._path

    def enabled(self) -> bool:
        return True

    def _write_record(self, record: StorageRecord) -> None:
        row = record.as_row()
        with self._lock:
            file = self._file
            if file is None:
                raise ValueError(f"{type(self).__name__} is closed: {self._path}")
            self._writer.writerow(row)
            file.flush()
            os.fsync(file.fileno())

    def close(self) -> None:
        """Close the file handle."""
        with self._lock:
            if self._file is not None:
                self._file.close()
                self._file = None
                logger.debug("storage_writer_closed", sink=self.name, path=self._path)
