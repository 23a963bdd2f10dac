"""Tests for the Disk KV store."""

import pytest

from minigit.kv.disk import Disk


@pytest.fixture
def disk_store(tmp_path):
    directory = str(tmp_path / "state")
    store = Disk(directory)
    yield store, directory
    store.close()


class TestDiskBasic:
    def test_set_get(self, disk_store):
        store, _ = disk_store
        store.set("k", b"v")
        assert store.get("k") == b"v"

    def test_get_missing(self, disk_store):
        store, _ = disk_store
        assert store.get("nope") is None

    def test_contains(self, disk_store):
        store, _ = disk_store
        store.set("k", b"v")
        assert "k" in store
        assert "nope" not in store

    def test_keys(self, disk_store):
        store, _ = disk_store
        store.write_batch({"a": b"1", "b": b"2"})
        assert set(store.keys()) == {"a", "b"}

    def test_write_batch_then_get(self, disk_store):
        store, _ = disk_store
        store.write_batch({"a": b"1", "b": b"2", "c": b"3"})
        assert store.get("a") == b"1"
        assert store.get("c") == b"3"
        assert store.get("missing") is None

    def test_write_batch_removals(self, disk_store):
        store, _ = disk_store
        store.write_batch({"a": b"1", "b": b"2"})
        store.write_batch({"c": b"3"}, removals=["a", "missing"])
        assert store.get("a") is None
        assert store.get("c") == b"3"

    def test_type_error_on_non_bytes(self, disk_store):
        store, _ = disk_store
        with pytest.raises(TypeError, match="Expected bytes"):
            store.set("k", "not bytes")  # type: ignore

    def test_empty_value(self, disk_store):
        store, _ = disk_store
        store.set("k", b"")
        assert store.get("k") == b""
        assert "k" in store


class TestDiskPersistence:
    def test_survives_reload(self, disk_store):
        store, directory = disk_store
        store.set("k", b"persistent")
        store.close()
        store2 = Disk(directory)
        try:
            assert store2.get("k") == b"persistent"
        finally:
            store2.close()

    def test_cas_persists(self, disk_store):
        store, directory = disk_store
        store.set("k", b"old")
        assert store.cas("k", b"new", expected=b"old")
        store.close()
        store2 = Disk(directory)
        try:
            assert store2.get("k") == b"new"
        finally:
            store2.close()


class TestDiskCAS:
    def test_cas_success(self, disk_store):
        store, _ = disk_store
        store.set("k", b"old")
        assert store.cas("k", b"new", expected=b"old")
        assert store.get("k") == b"new"

    def test_cas_failure(self, disk_store):
        store, _ = disk_store
        store.set("k", b"old")
        assert not store.cas("k", b"new", expected=b"wrong")
        assert store.get("k") == b"old"

    def test_cas_create_fails_if_exists(self, disk_store):
        store, _ = disk_store
        store.set("k", b"existing")
        assert not store.cas("k", b"new", expected=None)
