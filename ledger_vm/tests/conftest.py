# -*- coding: utf-8 -*-
"""
Shared fixtures for ledger_vm tests.

Logic modules are written inline to tmp_path and loaded through
`ledger_vm.runtime.loader`, the same path the CLI uses for file logic.
"""
from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Callable

import pytest

from ledger_vm.config import load_config
from ledger_vm.runtime.engine import Engine
from ledger_vm.runtime.loader import load_logic

COUNTER_SOURCE = r'''
from ledger_vm.runtime import abi

ENGINE = None

K_COUNTER = b"counter"


def get(ctx):
    return ctx.storage.get_u256(K_COUNTER)


def inc(ctx, n):
    cur = ctx.storage.get_u256(K_COUNTER) + n
    ctx.storage.set_u256(K_COUNTER, cur)
    ctx.events.emit(b"Inc", {"by": n, "now": cur})
    return cur


def inc_then_fail(ctx, n):
    inc(ctx, n)
    abi.revert(b"counter: boom")


def inc_then_crash(ctx, n):
    inc(ctx, n)
    raise ValueError("not a revert")


def reenter(ctx):
    inc(ctx, 5)
    return ENGINE.call("inc", 1)


def emit_list(ctx, addrs):
    ctx.events.emit(b"Listed", {"addresses": tuple(addrs)})


def whoami(ctx):
    return ctx.address


def _hidden(ctx):
    return "hidden"


not_exported = 7

__all__ = ["get", "inc", "inc_then_fail", "inc_then_crash", "reenter", "emit_list", "whoami"]
'''


def _det_address(tag: str) -> bytes:
    """Stable 20-byte address derived from a tag."""
    return hashlib.sha3_256(tag.encode("utf-8")).digest()[:20]


@pytest.fixture(autouse=True)
def _fresh_config():
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture
def write_logic(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(source: str, filename: str = "logic.py") -> Path:
        p = tmp_path / filename
        p.write_text(source, encoding="utf-8")
        return p

    return _write


@pytest.fixture
def counter_path(write_logic) -> Path:
    return write_logic(COUNTER_SOURCE, "counter.py")


@pytest.fixture
def counter(counter_path: Path) -> Engine:
    logic = load_logic(counter_path)
    engine = Engine(logic, address=_det_address("counter"))
    logic.ENGINE = engine
    return engine
