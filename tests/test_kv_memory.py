"""Tests for the Memory KV store."""

import threading

import pytest

from minigit.kv.memory import Memory


class TestMemoryBasic:
    def test_set_get(self):
        m = Memory()
        m.set("k", b"v")
        assert m.get("k") == b"v"

    def test_get_missing(self):
        m = Memory()
        assert m.get("nope") is None

    def test_contains(self):
        m = Memory()
        m.set("k", b"v")
        assert "k" in m
        assert "nope" not in m

    def test_keys(self):
        m = Memory()
        m.set("a", b"1")
        m.set("b", b"2")
        assert set(m.keys()) == {"a", "b"}

    def test_write_batch_then_get(self):
        m = Memory()
        m.write_batch({"a": b"1", "b": b"2", "c": b"3"})
        assert m.get("a") == b"1"
        assert m.get("c") == b"3"
        assert m.get("missing") is None

    def test_type_error_on_non_bytes(self):
        m = Memory()
        with pytest.raises(TypeError, match="Expected bytes"):
            m.set("k", "not bytes")  # type: ignore


class TestMemoryWriteBatch:
    def test_updates_and_removals(self):
        m = Memory()
        m.write_batch({"a": b"1", "b": b"2"})
        m.write_batch({"c": b"3"}, removals=["a", "missing"])
        assert m.get("a") is None
        assert m.get("b") == b"2"
        assert m.get("c") == b"3"

    def test_rejects_non_bytes_without_partial_write(self):
        m = Memory()
        with pytest.raises(TypeError):
            m.write_batch({"a": b"1", "b": "2"})  # type: ignore
        assert m.get("a") is None


class TestMemoryCAS:
    def test_cas_success(self):
        m = Memory()
        m.set("k", b"old")
        assert m.cas("k", b"new", expected=b"old")
        assert m.get("k") == b"new"

    def test_cas_failure(self):
        m = Memory()
        m.set("k", b"old")
        assert not m.cas("k", b"new", expected=b"wrong")
        assert m.get("k") == b"old"

    def test_cas_create(self):
        m = Memory()
        assert m.cas("k", b"val", expected=None)
        assert m.get("k") == b"val"

    def test_cas_create_fails_if_exists(self):
        m = Memory()
        m.set("k", b"existing")
        assert not m.cas("k", b"new", expected=None)
        assert m.get("k") == b"existing"

    def test_cas_thread_safety(self):
        m = Memory()
        wins = []

        def try_cas(thread_id):
            if m.cas("branch", f"thread-{thread_id}".encode(), expected=None):
                wins.append(thread_id)

        threads = [threading.Thread(target=try_cas, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(wins) == 1
