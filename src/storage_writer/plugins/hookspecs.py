# src/storage_writer/plugins/hookspecs.py
"""pluggy hook specifications for storage writer sinks.

Usage (implementing a plugin):
    from storage_writer.plugins.hookspecs import hookimpl

    class MyPlugin:
        @hookimpl  # NOT @hookspec - that's for defining specs
        def storage_writer_get_sinks(self):
            return [MySink]
"""

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from storage_writer.plugins.base import BaseStorageWriter

# Project name for pluggy
PROJECT_NAME = "storage_writer"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class StorageWriterSinkSpec:
    """Hook specifications for sink plugins."""

    @hookspec
    def storage_writer_get_sinks(self) -> list[type["BaseStorageWriter"]]:  # type: ignore[empty-body]
        """Return sink classes.

        Returns:
            List of BaseStorageWriter subclasses (not instances)
        """
