# src/storage_writer/factory.py
"""Factory functions for creating storage writers from configuration.

This module provides the glue between configuration (Database + watch-list)
and the runtime sink instance. It handles:
1. Discovering sink classes via pluggy hooks
2. Checking every Database value maps to exactly one sink class
3. Instantiating the selected sink

Usage:
    from storage_writer.core.config import load_settings
    from storage_writer.factory import create_storage_writer

    settings = load_settings(Path("storage_writer.yaml"))
    writer = create_storage_writer(settings)
    writer.write_storage_diffs(block_hash, block_number, diffs)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import pluggy

from storage_writer.contracts import Address, Database, StorageWriterPluginError
from storage_writer.core.config import StorageWriterSettings
from storage_writer.core.logging import get_logger
from storage_writer.plugins.base import BaseStorageWriter
from storage_writer.plugins.hookspecs import PROJECT_NAME, StorageWriterSinkSpec
from storage_writer.plugins.sinks import BuiltinSinksPlugin

logger = get_logger(__name__)


def discover_sinks(sink_plugins: Iterable[Any] = ()) -> dict[Database, type[BaseStorageWriter]]:
    """Build the Database -> sink class registry via pluggy hooks.

    Args:
        sink_plugins: Plugin objects implementing ``storage_writer_get_sinks``.
            Built-in sinks are always registered first.

    Returns:
        Mapping with exactly one sink class per Database value.

    Raises:
        StorageWriterPluginError: If a plugin is invalid, a sink class does
            not declare a Database, two classes claim the same Database, or
            a Database has no sink.
    """
    plugin_manager = pluggy.PluginManager(PROJECT_NAME)
    plugin_manager.add_hookspecs(StorageWriterSinkSpec)

    for plugin in [BuiltinSinksPlugin(), *sink_plugins]:
        try:
            plugin_manager.register(plugin)
            plugin_manager.check_pending()
        except (pluggy.PluginValidationError, ValueError) as e:
            if isinstance(e, pluggy.PluginValidationError):
                plugin_manager.unregister(plugin=plugin)
            raise StorageWriterPluginError(f"Invalid sink plugin {type(plugin).__name__}: {e}") from e

    registry: dict[Database, type[BaseStorageWriter]] = {}
    for sink_classes in plugin_manager.hook.storage_writer_get_sinks():
        for sink_class in sink_classes:
            if not (isinstance(sink_class, type) and issubclass(sink_class, BaseStorageWriter)):
                raise StorageWriterPluginError(f"{sink_class!r} is not a BaseStorageWriter subclass")
            database = getattr(sink_class, "database", None)
            if not isinstance(database, Database):
                raise StorageWriterPluginError(f"{sink_class.__name__} must declare a 'database' class attribute of type Database")
            if database in registry:
                raise StorageWriterPluginError(
                    f"Duplicate sink for database '{database}': {registry[database].__name__} and {sink_class.__name__}"
                )
            registry[database] = sink_class

    missing = [db.as_str() for db in Database.all_types() if db not in registry]
    if missing:
        raise StorageWriterPluginError(f"No sink registered for database(s): {', '.join(missing)}")
    return registry


def new(
    database: Database,
    watched_accounts: Sequence[Address] = (),
    settings: StorageWriterSettings | None = None,
    *,
    sink_plugins: Iterable[Any] = (),
) -> BaseStorageWriter:
    """Create a storage writer for the given database.

    Args:
        database: Which sink to construct.
        watched_accounts: Accounts whose diffs are persisted.
        settings: Data directory and connection settings; defaults apply
            when omitted.
        sink_plugins: Extra plugin objects providing sink classes.

    Returns:
        A ready-to-use sink owning its own file handle or connection.

    Raises:
        SinkInitError: If the sink cannot open its file or connection.
        StorageWriterPluginError: If sink discovery is inconsistent.
    """
    if settings is None:
        settings = StorageWriterSettings()

    sink_class = discover_sinks(sink_plugins)[database]
    writer = sink_class(tuple(watched_accounts), settings)
    logger.info(
        "storage_writer_created",
        database=database.as_str(),
        sink=sink_class.__name__,
        enabled=writer.enabled(),
        watched=len(writer.watched_accounts),
    )
    return writer


def create_storage_writer(
    settings: StorageWriterSettings,
    *,
    sink_plugins: Iterable[Any] = (),
) -> BaseStorageWriter:
    """Create the storage writer described by loaded settings."""
    config = settings.storage_writer
    return new(config.database, config.watched_accounts, settings, sink_plugins=sink_plugins)
