# src/storage_writer/contracts/errors.py
"""Storage writer exceptions.

Two failure points matter to callers:
- Acquiring the sink's resource (file or connection) at construction time
- Persisting a single record at write time

Write failures are never swallowed. They reach the caller, which decides
whether to abort block processing, retry, or skip.
"""


class StorageWriterError(Exception):
    """Base class for storage writer errors."""


class SinkInitError(StorageWriterError):
    """Raised when a sink cannot acquire its file handle or connection.

    Attributes:
        sink: Name of the sink that failed
        target: Path or sanitized URL the sink tried to open
    """

    def __init__(self, sink: str, target: str, message: str) -> None:
        self.sink = sink
        self.target = target
        super().__init__(f"Storage writer '{sink}' could not open {target}: {message}")


class StorageWriteError(StorageWriterError, OSError):
    """Raised when a database sink fails to persist a record.

    Subclasses OSError so callers handle file and database write
    failures with a single except clause.
    """


class InvalidDatabaseError(StorageWriterError, ValueError):
    """Raised when a configuration string names no known database.

    Attributes:
        value: The rejected input string
    """

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid storage writing database: {value}")


class StorageWriterPluginError(StorageWriterError):
    """Raised when sink discovery yields a missing or duplicate database."""
