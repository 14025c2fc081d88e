"""
storage-writer: persist per-block contract storage diffs.

A pluggable sink selected by configuration among a CSV file, a Postgres
table, or a no-op discard. A blockchain client's state-diffing pipeline
hands it each block's changed storage slots; the sink keeps the ones that
belong to watched accounts.
"""

__version__ = "0.1.0"
