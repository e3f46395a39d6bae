# -*- coding: utf-8 -*-
"""
Storage and journal behaviour:

- typed helpers (u256 / bool / bytes) and their defaults
- key/value validation against the configured caps
- journal laws: revert restores the baseline, commit applies last-wins,
  nested checkpoints behave as a stack
"""
from __future__ import annotations

from typing import Dict

import pytest
from hypothesis import given, settings, strategies as st

from ledger_vm.errors import StorageError
from ledger_vm.runtime.journal import Journal
from ledger_vm.runtime.storage_api import U256_MAX, MemoryBackend, Storage

HKEY = st.binary(min_size=1, max_size=32)
HVAL = st.binary(min_size=0, max_size=64)
MAP_SMALL = st.dictionaries(keys=HKEY, values=HVAL, min_size=0, max_size=12)


# ---------------------------- storage ------------------------------------------


def test_u256_roundtrip_and_default():
    s = Storage()
    assert s.get_u256(b"missing") == 0
    s.set_u256(b"n", U256_MAX)
    assert s.get_u256(b"n") == U256_MAX
    assert len(s.get(b"n")) == 32


@pytest.mark.parametrize("bad", [-1, U256_MAX + 1, True, "3"])
def test_u256_rejects_out_of_domain(bad):
    s = Storage()
    with pytest.raises(StorageError):
        s.set_u256(b"n", bad)


def test_bool_and_bytes_helpers():
    s = Storage()
    assert s.get_bool(b"flag") is False
    s.set_bool(b"flag", True)
    assert s.get_bool(b"flag") is True
    s.set_bool(b"flag", False)
    assert s.get(b"flag") == b"\x00"
    assert s.get_bytes(b"blob") == b""
    s.set_bytes(b"blob", b"abc")
    assert s.get_bytes(b"blob") == b"abc"


def test_key_validation():
    s = Storage()
    with pytest.raises(StorageError):
        s.set(b"", b"v")
    with pytest.raises(StorageError):
        s.set("text-key", b"v")  # type: ignore[arg-type]
    with pytest.raises(StorageError):
        s.set(b"k" * (s.config.max_storage_key_bytes + 1), b"v")


def test_value_cap_from_environment(monkeypatch):
    from ledger_vm.config import load_config

    monkeypatch.setenv("LEDGER_VM_MAX_STORAGE_VAL_BYTES", "64")
    load_config.cache_clear()
    s = Storage()
    s.set(b"k", b"x" * 64)
    with pytest.raises(StorageError):
        s.set(b"k", b"x" * 65)


def test_storages_are_isolated():
    a, b = Storage(), Storage()
    a.set(b"k", b"1")
    assert b.get(b"k") is None


def test_backend_items_sorted():
    s = Storage(MemoryBackend({b"b": b"2", b"a": b"1"}))
    assert list(s.items()) == [(b"a", b"1"), (b"b", b"2")]


def test_backend_protocol_checked():
    class Broken:
        def get(self, key):
            return None

    with pytest.raises(StorageError):
        Storage(Broken())  # type: ignore[arg-type]


# ---------------------------- journal ------------------------------------------


def test_journal_write_requires_checkpoint():
    j = Journal(Storage())
    with pytest.raises(StorageError):
        j.set(b"k", b"v")
    with pytest.raises(StorageError):
        j.delete(b"k")
    with pytest.raises(StorageError):
        j.commit()
    with pytest.raises(StorageError):
        j.revert()


def test_journal_reads_staged_values_then_base():
    base = Storage()
    base.set(b"a", b"1")
    j = Journal(base)
    j.begin()
    j.set(b"b", b"2")
    assert j.get(b"a") == b"1"
    assert j.get(b"b") == b"2"
    assert base.get(b"b") is None


def test_journal_delete_marker():
    base = Storage()
    base.set(b"a", b"1")
    j = Journal(base)
    j.begin()
    j.delete(b"a")
    assert j.get(b"a") is None
    assert base.get(b"a") == b"1"
    j.commit()
    assert base.get(b"a") is None


def _seed(data: Dict[bytes, bytes]) -> Storage:
    s = Storage()
    for k, v in data.items():
        s.set(k, v)
    return s


@settings(max_examples=50, deadline=None)
@given(base=MAP_SMALL, writes=MAP_SMALL)
def test_revert_restores_baseline(base, writes):
    s = _seed(base)
    j = Journal(s)
    j.begin()
    for k, v in writes.items():
        j.set(k, v)
    j.revert()
    assert s.to_dict() == base
    assert j.depth() == 0


@settings(max_examples=50, deadline=None)
@given(base=MAP_SMALL, writes=MAP_SMALL)
def test_commit_applies_last_wins(base, writes):
    s = _seed(base)
    j = Journal(s)
    j.begin()
    for k, v in writes.items():
        j.set(k, v)
    j.commit()
    expected = dict(base)
    expected.update(writes)
    assert s.to_dict() == expected


@settings(max_examples=50, deadline=None)
@given(outer=MAP_SMALL, inner=MAP_SMALL)
def test_nested_inner_revert_keeps_outer(outer, inner):
    s = Storage()
    j = Journal(s)
    j.begin()
    for k, v in outer.items():
        j.set(k, v)
    j.begin()
    for k, v in inner.items():
        j.set(k, v)
    j.revert()
    j.commit()
    assert s.to_dict() == outer
