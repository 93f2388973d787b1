import threading

import pytest

from zk_primitives_tool.coordination.core.rwlock import ReadWriteLock
from zk_primitives_tool.coordination.core.safe_map import SafeMap


def test_get_missing_key_returns_none_or_default():
    m = SafeMap()
    assert m.get("nope") is None
    assert m.get("nope", 7) == 7


def test_put_returns_previous_value():
    m = SafeMap()
    assert m.put("k", 1) is None
    assert m.put("k", 2) == 1
    assert m.get("k") == 2


def test_delete_returns_previous_and_ignores_missing():
    m = SafeMap({"k": "v"})
    assert m.delete("k") == "v"
    assert m.delete("k") is None
    assert not m.contains("k")


def test_contains_len_and_keys():
    m = SafeMap({"a": 1, "b": 2})
    assert m.contains("a")
    assert "b" in m
    assert "c" not in m
    assert len(m) == 2
    assert sorted(m.keys()) == ["a", "b"]
    assert sorted(m) == ["a", "b"]


def test_initial_mapping_is_copied():
    initial = {"a": 1}
    m = SafeMap(initial)
    initial["b"] = 2
    assert not m.contains("b")


def test_copy_is_independent():
    m = SafeMap({"a": 1})
    snapshot = m.copy()
    snapshot["a"] = 100
    snapshot["z"] = 0
    del snapshot["a"]

    assert m.get("a") == 1
    assert not m.contains("z")
    assert len(m) == 1


def test_clear_empties_map():
    m = SafeMap({"a": 1, "b": 2})
    m.clear()
    assert len(m) == 0
    assert m.keys() == []


def test_dump_lists_entries():
    m = SafeMap({"a": 1})
    assert m.dump() == "(key: a, value: 1)\n"


def test_extended_yields_backing_dict():
    m = SafeMap({"a": 1})
    with m.extended() as raw:
        raw["b"] = 2
        del raw["a"]
    assert m.copy() == {"b": 2}


def test_extended_releases_on_error():
    m = SafeMap()
    with pytest.raises(KeyError):
        with m.extended() as raw:
            raise KeyError("boom")
    # lock must be free again
    assert m.put("k", 1) is None


def test_release_extended_without_acquire_raises():
    m = SafeMap()
    with pytest.raises(RuntimeError):
        m.release_extended()


def test_extended_excludes_writers_and_readers():
    m = SafeMap({"a": 1})
    raw = m.acquire_extended()
    results = []

    writer = threading.Thread(target=lambda: results.append(m.put("a", 2)))
    reader = threading.Thread(target=lambda: results.append(m.get("a")))
    writer.start()
    reader.start()
    writer.join(0.1)
    reader.join(0.1)
    assert writer.is_alive()
    assert reader.is_alive()

    raw["a"] = 10
    m.release_extended()
    writer.join(2)
    reader.join(2)

    assert not writer.is_alive() and not reader.is_alive()
    assert 10 in results


def test_concurrent_read_modify_write_is_linearizable():
    m = SafeMap({"n": 0})

    def bump():
        for _ in range(500):
            with m.extended() as raw:
                raw["n"] += 1

    threads = [threading.Thread(target=bump) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert m.get("n") == 4000


def test_concurrent_puts_and_deletes_settle():
    m = SafeMap()

    def churn(worker: int):
        for i in range(200):
            key = f"{worker}-{i}"
            m.put(key, i)
            if i % 2:
                m.delete(key)

    threads = [threading.Thread(target=churn, args=(w,)) for w in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(m) == 4 * 100
    assert all(int(k.split("-")[1]) % 2 == 0 for k in m.keys())


def test_rwlock_allows_concurrent_readers():
    lock = ReadWriteLock()
    lock.acquire_read()
    other = threading.Thread(target=lambda: (lock.acquire_read(), lock.release_read()))
    other.start()
    other.join(1)
    assert not other.is_alive()
    lock.release_read()


def test_rwlock_writer_waits_for_readers():
    lock = ReadWriteLock()
    lock.acquire_read()
    writer = threading.Thread(target=lambda: (lock.acquire_write(), lock.release_write()))
    writer.start()
    writer.join(0.1)
    assert writer.is_alive()
    lock.release_read()
    writer.join(1)
    assert not writer.is_alive()


def test_rwlock_release_without_acquire_raises():
    lock = ReadWriteLock()
    with pytest.raises(RuntimeError):
        lock.release_read()
    with pytest.raises(RuntimeError):
        lock.release_write()
