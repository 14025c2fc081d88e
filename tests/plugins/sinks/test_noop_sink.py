"""Tests for the no-op storage writer."""

from pathlib import Path

from storage_writer.contracts import H256, Address
from storage_writer.plugins.sinks.noop_sink import NoopStorageWriter
from tests.conftest import make_h256


class TestNoopStorageWriter:
    """Tests for NoopStorageWriter."""

    def test_disabled(self) -> None:
        assert NoopStorageWriter().enabled() is False

    def test_watches_nothing(self, account_a: Address) -> None:
        sink = NoopStorageWriter([account_a])

        assert sink.watched_accounts == ()
        assert not sink.is_watched(account_a)

    def test_write_storage_node_succeeds(self, account_a: Address, block_hash: H256) -> None:
        NoopStorageWriter().write_storage_node(account_a, block_hash, 0, make_h256(1), make_h256(2))

    def test_write_storage_node_accepts_any_input(self, account_a: Address, block_hash: H256) -> None:
        """Inputs a real sink would reject still succeed."""
        NoopStorageWriter().write_storage_node(account_a, block_hash, -1, make_h256(1), make_h256(2))

    def test_write_storage_diffs_writes_nothing(self, account_a: Address, block_hash: H256) -> None:
        sink = NoopStorageWriter([account_a])

        assert sink.write_storage_diffs(block_hash, 1, {account_a: {make_h256(1): make_h256(2)}}) == 0

    def test_creates_no_files(self, tmp_path: Path, account_a: Address, block_hash: H256) -> None:
        sink = NoopStorageWriter([account_a])
        sink.write_storage_node(account_a, block_hash, 1, make_h256(1), make_h256(2))
        sink.close()

        assert list(tmp_path.iterdir()) == []

    def test_clone_is_noop(self) -> None:
        sink = NoopStorageWriter()
        clone = sink.clone_handle()

        assert isinstance(clone, NoopStorageWriter)
        assert clone is not sink
        assert clone.enabled() is False

    def test_close_and_context_manager(self) -> None:
        with NoopStorageWriter() as sink:
            sink.close()
        sink.close()
