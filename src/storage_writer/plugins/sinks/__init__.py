"""Built-in storage writer sinks.

Sinks are accessed through the factory, not direct imports:
    from storage_writer.factory import new
    sink = new(Database.CSV, watched_accounts, settings)
"""

from storage_writer.plugins.base import BaseStorageWriter
from storage_writer.plugins.hookspecs import hookimpl
from storage_writer.plugins.sinks.csv_sink import CsvStorageWriter
from storage_writer.plugins.sinks.database_sink import PostgresStorageWriter
from storage_writer.plugins.sinks.noop_sink import NoopStorageWriter


class BuiltinSinksPlugin:
    """Registers the CSV, Postgres and no-op sinks."""

    @hookimpl
    def storage_writer_get_sinks(self) -> list[type[BaseStorageWriter]]:
        return [CsvStorageWriter, NoopStorageWriter, PostgresStorageWriter]


__all__ = [
    "BuiltinSinksPlugin",
    "CsvStorageWriter",
    "NoopStorageWriter",
    "PostgresStorageWriter",
]
