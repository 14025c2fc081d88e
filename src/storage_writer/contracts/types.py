# src/storage_writer/contracts/types.py
"""Fixed-width chain identifiers and the persisted storage record.

These types answer: "What does a storage diff look like on the way out?"

Identifiers render as lowercase hex without a 0x prefix, the same text
that lands in every CSV row and database column.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import ClassVar, Self


@dataclass(frozen=True, slots=True)
class _FixedBytes:
    """Immutable byte string of a fixed width.

    Subclasses set SIZE. Instances are hashable and usable as dict keys.
    """

    SIZE: ClassVar[int] = 0

    raw: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.raw, bytes):
            raise TypeError(f"{type(self).__name__} requires bytes, got {type(self.raw).__name__}")
        if len(self.raw) != self.SIZE:
            raise ValueError(f"{type(self).__name__} must be {self.SIZE} bytes, got {len(self.raw)}")

    @classmethod
    def from_hex(cls, value: str) -> Self:
        """Parse hex text, with or without a 0x prefix, in any case.

        Raises:
            ValueError: If value is not valid hex of exactly SIZE bytes.
            TypeError: If value is not a string.
        """
        if not isinstance(value, str):
            raise TypeError(f"{cls.__name__} hex must be a string, got {type(value).__name__}")
        text = value.strip()
        if text[:2] in ("0x", "0X"):
            text = text[2:]
        if len(text) != cls.SIZE * 2:
            raise ValueError(f"{cls.__name__} must be {cls.SIZE * 2} hex characters, got {len(text)}: {value!r}")
        try:
            raw = bytes.fromhex(text)
        except ValueError as e:
            raise ValueError(f"{cls.__name__} is not valid hex: {value!r}") from e
        return cls(raw)

    @classmethod
    def coerce(cls, value: "str | bytes | Self") -> Self:
        """Accept an instance, raw bytes or hex text."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bytes):
            return cls(value)
        if isinstance(value, str):
            return cls.from_hex(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to {cls.__name__}")

    def hex(self) -> str:
        return self.raw.hex()

    def __str__(self) -> str:
        return self.raw.hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(0x{self.raw.hex()})"


@dataclass(frozen=True, slots=True, repr=False)
class Address(_FixedBytes):
    """20-byte account address."""

    SIZE: ClassVar[int] = 20


@dataclass(frozen=True, slots=True, repr=False)
class H256(_FixedBytes):
    """32-byte hash: block hash, storage key or storage value."""

    SIZE: ClassVar[int] = 32


# Per-block diff supplied by the upstream state-diffing pipeline:
# account -> (storage key -> new storage value)
StorageDiffBatch = Mapping[Address, Mapping[H256, H256]]


@dataclass(frozen=True, slots=True)
class StorageRecord:
    """One persisted storage change.

    Attributes:
        contract: Account whose storage changed
        block_hash: Hash of the block that produced the change
        block_number: Height of that block
        key: Storage slot
        value: New value of the slot
    """

    contract: Address
    block_hash: H256
    block_number: int
    key: H256
    value: H256

    def __post_init__(self) -> None:
        if self.block_number < 0:
            raise ValueError(f"block_number must be non-negative, got {self.block_number}")

    def as_row(self) -> list[str]:
        """Render the record as five text fields in output column order."""
        return [
            self.contract.hex(),
            self.block_hash.hex(),
            str(self.block_number),
            self.key.hex(),
            self.value.hex(),
        ]
