# src/storage_writer/contracts/enums.py
"""Modes and kinds used across subsystem boundaries."""

from enum import StrEnum

from storage_writer.contracts.errors import InvalidDatabaseError


class Database(StrEnum):
    """Backend that persists storage diffs of watched accounts.

    Parsed from configuration with exact, case-sensitive matching.
    Every value must have exactly one registered sink class.
    """

    CSV = "csv"
    NONE = "none"
    POSTGRES = "postgres"

    @classmethod
    def parse(cls, value: str) -> "Database":
        """Parse a configuration string into a Database.

        Args:
            value: One of "csv", "none" or "postgres".

        Returns:
            The matching Database member.

        Raises:
            InvalidDatabaseError: If value is not a canonical database name.
        """
        for member in cls:
            if member.value == value:
                return member
        raise InvalidDatabaseError(value)

    @classmethod
    def _missing_(cls, value: object) -> "Database":
        # Database("CSV") and pydantic coercion go through here
        raise InvalidDatabaseError(str(value))

    @classmethod
    def all_types(cls) -> list["Database"]:
        """Return every database type in declaration order."""
        return [cls.CSV, cls.NONE, cls.POSTGRES]

    def as_str(self) -> str:
        """Return the canonical configuration string."""
        return self.value
