# src/storage_writer/core/config.py
"""
Configuration schema and loading for the storage writer.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

import re
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from storage_writer.contracts import Address, Database
from storage_writer.core.paths import default_data_path

ENV_PREFIX = "STORAGE_WRITER"


class StorageWriterConfig(BaseModel):
    """Configuration for writing storage diffs of watched accounts.

    Example YAML:
        storage_writer:
          database: csv
          watched_accounts:
            - "0x00000000000000000000000000000000000000aa"
    """

    model_config = {"frozen": True, "extra": "forbid", "arbitrary_types_allowed": True}

    watched_accounts: tuple[Address, ...] = Field(
        default=(),
        description="Accounts whose storage diffs are persisted",
    )
    database: Database = Field(
        default=Database.NONE,
        description="Backend used for persisting account storage diffs",
    )

    @field_validator("watched_accounts", mode="before")
    @classmethod
    def _parse_accounts(cls, v: Any) -> tuple[Address, ...]:
        if v is None:
            return ()
        if isinstance(v, str | bytes):
            raise ValueError("watched_accounts must be a list of addresses")
        accounts: list[Address] = []
        for item in v:
            if not isinstance(item, str | bytes | Address):
                raise ValueError(f"watched account must be a hex string, got {type(item).__name__}")
            accounts.append(Address.coerce(item))
        return tuple(accounts)

    @field_validator("database", mode="before")
    @classmethod
    def _parse_database(cls, v: Any) -> Database:
        if isinstance(v, Database):
            return v
        return Database.parse(v)


class PostgresSettings(BaseModel):
    """Database connection for the postgres storage writer."""

    model_config = {"frozen": True, "extra": "forbid"}

    url: str = Field(
        default="postgresql+psycopg://localhost/storage_diffs",
        description="SQLAlchemy database URL",
    )
    table: str = Field(default="storage_diffs", description="Table receiving storage records")

    @field_validator("table")
    @classmethod
    def _validate_table(cls, v: str) -> str:
        if not re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", v):
            raise ValueError(f"table must be a plain SQL identifier, got {v!r}")
        return v


class LoggingSettings(BaseModel):
    """Log output configuration."""

    model_config = {"frozen": True, "extra": "forbid"}

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    json_output: bool = False

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


class StorageWriterSettings(BaseModel):
    """Top-level storage writer configuration.

    All settings are validated and frozen after construction.
    """

    model_config = {"frozen": True, "extra": "forbid"}

    storage_writer: StorageWriterConfig = Field(default_factory=StorageWriterConfig)
    data_dir: str = Field(
        default_factory=default_data_path,
        description="Client data directory; $BASE in output paths",
    )
    postgres: PostgresSettings = Field(default_factory=PostgresSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @field_validator("data_dir")
    @classmethod
    def _validate_data_dir(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("data_dir cannot be empty")
        return v


def load_settings(config_path: Path) -> StorageWriterSettings:
    """Load settings from YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (STORAGE_WRITER_*) - highest priority
    2. Config file
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: STORAGE_WRITER_POSTGRES__URL for nested keys.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated StorageWriterSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    # Dynaconf silently accepts missing files
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    dynaconf_settings = Dynaconf(
        envvar_prefix=ENV_PREFIX,
        settings_files=[str(config_path)],
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; Pydantic fields are lowercase
    internal_keys = {"LOAD_DOTENV", "ENVIRONMENTS", "SETTINGS_FILES"}
    raw_config = {k.lower(): v for k, v in dynaconf_settings.as_dict().items() if k not in internal_keys}
    raw_config = _lowercase_keys(raw_config)

    return StorageWriterSettings(**raw_config)


def _lowercase_keys(value: Any) -> Any:
    """Lowercase nested mapping keys that came from environment overrides."""
    if isinstance(value, dict):
        return {str(k).lower(): _lowercase_keys(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_lowercase_keys(item) for item in value]
    return value
