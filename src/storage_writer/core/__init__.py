"""Core infrastructure: configuration, logging, path resolution."""

from storage_writer.core.config import (
    LoggingSettings,
    PostgresSettings,
    StorageWriterConfig,
    StorageWriterSettings,
    load_settings,
)
from storage_writer.core.logging import configure_logging, get_logger
from storage_writer.core.paths import WATCHED_STORAGE_PATH, default_data_path, replace_home

__all__ = [
    "WATCHED_STORAGE_PATH",
    "LoggingSettings",
    "PostgresSettings",
    "StorageWriterConfig",
    "StorageWriterSettings",
    "configure_logging",
    "default_data_path",
    "get_logger",
    "load_settings",
    "replace_home",
]
