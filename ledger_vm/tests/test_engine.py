# -*- coding: utf-8 -*-
"""
Engine call semantics:

- successful calls commit writes and publish events
- any exception (revert or not) leaves storage and the event log untouched
- only names exported through __all__ are callable
- a call re-entering the engine is refused and the outer call rolls back
"""
from __future__ import annotations

import pytest

from ledger_vm.errors import ReentrancyError, Revert, UnknownFunction
from ledger_vm.runtime.engine import Engine, Receipt
from ledger_vm.runtime.loader import code_hash, load_logic, logic_ref

from .conftest import COUNTER_SOURCE, _det_address


def test_call_commits_and_publishes(counter: Engine):
    assert counter.call("inc", 3) == 3
    assert counter.call("inc", 4) == 7
    assert counter.last_events[0].args == {"by": 4, "now": 7}
    assert counter.call("get") == 7
    assert [ev.name for ev in counter.events] == [b"Inc", b"Inc"]


def test_view_call_publishes_nothing(counter: Engine):
    counter.call("inc", 1)
    counter.call("get")
    assert counter.last_events == []
    assert len(counter.events) == 1


def test_revert_discards_writes_and_events(counter: Engine):
    counter.call("inc", 2)
    before = counter.storage.to_dict()

    with pytest.raises(Revert) as ei:
        counter.call("inc_then_fail", 10)

    assert ei.value.reason == "counter: boom"
    assert counter.storage.to_dict() == before
    assert len(counter.events) == 1
    assert counter.call("get") == 2


def test_non_revert_exception_also_rolls_back(counter: Engine):
    with pytest.raises(ValueError):
        counter.call("inc_then_crash", 10)
    assert counter.call("get") == 0
    assert counter.events == []


@pytest.mark.parametrize("fn", ["_hidden", "not_exported", "nope"])
def test_unexported_names_are_not_callable(counter: Engine, fn):
    with pytest.raises(UnknownFunction):
        counter.call(fn)


def test_reentrant_call_refused_and_outer_rolled_back(counter: Engine):
    with pytest.raises(ReentrancyError):
        counter.call("reenter")
    assert counter.call("get") == 0
    # engine is usable again afterwards
    assert counter.call("inc", 1) == 1


def test_execute_returns_receipts(counter: Engine):
    ok = counter.execute("inc", 5)
    assert isinstance(ok, Receipt)
    assert ok.ok and ok.result == 5
    assert ok.to_dict()["events"] == [{"name": "Inc", "args": {"by": 5, "now": 5}}]

    bad = counter.execute("inc_then_fail", 1)
    assert not bad.ok
    assert bad.to_dict()["error"]["code"] == "REVERT"
    assert bad.to_dict()["error"]["message"] == "counter: boom"


def test_context_address_and_list_events(counter: Engine):
    assert counter.call("whoami") == _det_address("counter")
    counter.call("emit_list", [b"\x01", b"\x02"])
    assert counter.last_events[0].args["addresses"] == (b"\x01", b"\x02")


def test_two_engines_do_not_share_state(counter_path):
    logic = load_logic(counter_path)
    a = Engine(logic, address=_det_address("a"))
    b = Engine(logic, address=_det_address("b"))
    a.call("inc", 9)
    assert b.call("get") == 0


def test_deploy_runs_initialize(write_logic):
    path = write_logic(
        "def initialize(ctx, start):\n"
        "    ctx.storage.set_u256(b'counter', start)\n"
        "def get(ctx):\n"
        "    return ctx.storage.get_u256(b'counter')\n"
        "__all__ = ['initialize', 'get']\n",
        "init_counter.py",
    )
    engine = Engine.deploy(load_logic(path), address=_det_address("x"), args=(41,))
    assert engine.call("get") == 41


def test_loader_refs_and_code_hash(counter_path):
    logic = load_logic(counter_path)
    assert logic_ref(logic) == str(counter_path.resolve())
    assert len(code_hash(logic)) == 32

    again = load_logic(str(counter_path))
    assert code_hash(again) == code_hash(logic)

    counter_path.write_text(COUNTER_SOURCE + "\n# v2\n", encoding="utf-8")
    assert code_hash(load_logic(counter_path)) != code_hash(logic)


def test_loader_dotted_module():
    mod = load_logic("token_contracts.guarded_token.contract")
    assert logic_ref(mod) == "token_contracts.guarded_token.contract"
    assert len(code_hash(mod)) == 32
