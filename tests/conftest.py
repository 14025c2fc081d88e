# tests/conftest.py
"""Shared test fixtures.

Provides typed chain identifiers and settings pointing every sink at
pytest's tmp_path, so no test touches the real data directory or a
running Postgres. The Postgres sink runs against SQLite through the same
SQLAlchemy code path.

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from pathlib import Path

import pytest
from hypothesis import settings as hypothesis_settings

from storage_writer.contracts import H256, Address
from storage_writer.core.config import PostgresSettings, StorageWriterSettings

hypothesis_settings.register_profile("ci", max_examples=100)
hypothesis_settings.register_profile("nightly", max_examples=1000)
hypothesis_settings.load_profile(os.environ.get("HYPOTHESIS_PROFILE", "ci"))


def make_address(n: int) -> Address:
    """Deterministic address whose last byte is n."""
    return Address(n.to_bytes(20, "big"))


def make_h256(n: int) -> H256:
    """Deterministic 32-byte value ending in n."""
    return H256(n.to_bytes(32, "big"))


@pytest.fixture
def account_a() -> Address:
    return make_address(0xAA)


@pytest.fixture
def account_b() -> Address:
    return make_address(0xBB)


@pytest.fixture
def block_hash() -> H256:
    return H256.from_hex("0x" + "ab" * 32)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Client data directory ($BASE) for the test."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """SQLite database URL standing in for Postgres."""
    return f"sqlite:///{tmp_path / 'storage.db'}"


@pytest.fixture
def settings(data_dir: Path, db_url: str) -> StorageWriterSettings:
    """Settings with data_dir and database URL confined to tmp_path."""
    return StorageWriterSettings(
        data_dir=str(data_dir),
        postgres=PostgresSettings(url=db_url, table="storage_diffs"),
    )
