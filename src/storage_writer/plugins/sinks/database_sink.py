# src/storage_writer/plugins/sinks/database_sink.py
"""Postgres storage writer.

Writes the same five-field record as the CSV sink into a table using
SQLAlchemy Core. Any SQLAlchemy URL works; production points it at
Postgres, tests at SQLite.

One connection is opened at construction and owned by the sink. Writes
are serialized through it and committed one record at a time, so an
acknowledged write is durable.
"""

import threading
from collections.abc import Sequence
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, Column, Integer, MetaData, Table, Text, create_engine, insert
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from storage_writer.contracts import Address, Database, SinkInitError, StorageRecord, StorageWriteError
from storage_writer.core.logging import get_logger
from storage_writer.plugins.base import BaseStorageWriter

if TYPE_CHECKING:
    from storage_writer.core.config import StorageWriterSettings

logger = get_logger(__name__)


def storage_diffs_table(name: str, metadata: MetaData) -> Table:
    """Define the storage record table.

    Identifiers are stored as lowercase hex text, matching the CSV output.
    """
    return Table(
        name,
        metadata,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("contract", Text, nullable=False, index=True),
        Column("block_hash", Text, nullable=False),
        Column("block_number", BigInteger, nullable=False, index=True),
        Column("storage_key", Text, nullable=False),
        Column("storage_value", Text, nullable=False),
    )


def _sanitize_url(url: str) -> str:
    """Render a database URL with the password masked, for logs and errors."""
    try:
        return make_url(url).render_as_string(hide_password=True)
    except ArgumentError:
        return "<invalid database url>"


class PostgresStorageWriter(BaseStorageWriter):
    """Insert storage records into a relational table.

    Creates the table on construction if it does not exist.

    Raises:
        SinkInitError: At construction, if the engine cannot be created,
            the connection cannot be established or the table cannot be
            created.
        StorageWriteError: From writes, wrapping the driver error.
    """

    name = "postgres"
    database = Database.POSTGRES

    def __init__(self, watched_accounts: Sequence[Address], settings: "StorageWriterSettings") -> None:
        super().__init__(watched_accounts, settings)
        self._url = settings.postgres.url
        self._sanitized_url = _sanitize_url(self._url)
        self._table_name = settings.postgres.table
        self._lock = threading.Lock()

        self._metadata = MetaData()
        self._table = storage_diffs_table(self._table_name, self._metadata)

        self._engine: Engine | None = None
        self._conn: Connection | None = None
        try:
            self._engine = create_engine(self._url)
            self._metadata.create_all(self._engine, checkfirst=True)
            self._conn = self._engine.connect()
        except (SQLAlchemyError, ImportError) as e:
            # ImportError: URL names a DBAPI driver that is not installed
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
            raise SinkInitError(self.name, self._sanitized_url, str(e)) from e

        logger.debug(
            "storage_writer_opened",
            sink=self.name,
            url=self._sanitized_url,
            table=self._table_name,
            watched=len(self._watched_accounts),
        )

    @property
    def table(self) -> Table:
        return self._table

    def enabled(self) -> bool:
        return True

    def _write_record(self, record: StorageRecord) -> None:
        values = {
            "contract": record.contract.hex(),
            "block_hash": record.block_hash.hex(),
            "block_number": record.block_number,
            "storage_key": record.key.hex(),
            "storage_value": record.value.hex(),
        }
        with self._lock:
            conn = self._conn
            if conn is None:
                raise ValueError(f"{type(self).__name__} is closed: {self._sanitized_url}")
            try:
                conn.execute(insert(self._table), values)
                conn.commit()
            except SQLAlchemyError as e:
                try:
                    conn.rollback()
                except SQLAlchemyError as rollback_error:
                    logger.warning("storage_writer_rollback_failed", sink=self.name, error=str(rollback_error))
                raise StorageWriteError(f"Failed to insert storage record into {self._table_name}: {e}") from e

    def close(self) -> None:
        """Close the connection and dispose of the engine."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
                logger.debug("storage_writer_closed", sink=self.name, url=self._sanitized_url)
