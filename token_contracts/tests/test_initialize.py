# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from ledger_vm.runtime.engine import Engine
from ledger_vm.runtime.loader import code_hash
from token_contracts.guarded_token import contract
from token_contracts.stdlib.errors import (ArithmeticRevert, InvalidMetadata,
                                           InvalidRecipient,
                                           ReinitializationBlocked)
from token_contracts.stdlib.token import ZERO_ADDRESS

from .conftest import SUPPLY, TX_LIMIT, WALLET_LIMIT


def test_deploy_events(token, accounts):
    assert [ev.name for ev in token.events] == [b"Initialized", b"OwnershipTransferred", b"Transfer"]
    init, owner, mint = token.events
    assert init.args == {"version": 1}
    assert owner.args == {"previousOwner": ZERO_ADDRESS, "newOwner": accounts.owner}
    assert mint.args == {"from": ZERO_ADDRESS, "to": accounts.owner, "value": SUPPLY}


def test_versions_and_implementation(token):
    assert token.call("getInitializedVersion") == 1
    assert token.call("layoutVersion") == contract.LAYOUT.version == 1
    assert token.call("implementation") == code_hash(contract)
    assert len(token.call("implementation")) == 32


def test_initialize_runs_once(token, accounts):
    before = token.storage.to_dict()
    with pytest.raises(ReinitializationBlocked) as ei:
        token.call(
            "initialize", "Other", "OTH", 1, 0, accounts.alice, TX_LIMIT, WALLET_LIMIT, False,
        )
    assert ei.value.code == "ReinitializationBlocked"
    assert ei.value.reason == "Initializable: contract is already initialized"
    assert token.storage.to_dict() == before
    assert token.call("owner") == accounts.owner


def _bare(accounts) -> Engine:
    return Engine(contract, address=accounts.token)


@pytest.mark.parametrize(
    "name,symbol",
    [
        (None, "OK"),
        ("Fine", 7),
        ("Fine", b"\xff\xfe"),
        (["Fine"], "OK"),
    ],
)
def test_invalid_metadata_leaves_no_state(accounts, name, symbol):
    engine = _bare(accounts)
    with pytest.raises(InvalidMetadata):
        engine.call("initialize", name, symbol, SUPPLY, 18, accounts.owner, TX_LIMIT, WALLET_LIMIT, True)
    assert engine.storage.to_dict() == {}
    assert engine.events == []


def test_zero_owner_rejected(accounts):
    engine = _bare(accounts)
    with pytest.raises(InvalidRecipient):
        engine.call("initialize", "Fine", "OK", SUPPLY, 18, ZERO_ADDRESS, TX_LIMIT, WALLET_LIMIT, True)
    assert engine.storage.to_dict() == {}


def test_negative_supply_rejected(accounts):
    engine = _bare(accounts)
    with pytest.raises(ArithmeticRevert):
        engine.call("initialize", "Fine", "OK", -1, 18, accounts.owner, TX_LIMIT, WALLET_LIMIT, True)


def test_metadata_stored_verbatim(deploy):
    t = deploy(name="Caf\u00e9 Token", symbol="bAIR", decimals=40)
    assert t.call("name") == "Caf\u00e9 Token"
    assert t.call("symbol") == "bAIR"
    assert t.call("decimals") == 40


@pytest.mark.parametrize(
    "name,symbol",
    [
        ("x" * 200, "LONGSYMBOL12"),
        (b"Guarded", b"gt"),
        ("", ""),
        ("A\nB", "A B"),
    ],
)
def test_metadata_has_no_shape_limits(deploy, name, symbol):
    t = deploy(name=name, symbol=symbol)
    assert t.call("name").encode("utf-8") == (name if isinstance(name, bytes) else name.encode("utf-8"))
    assert t.call("symbol").encode("utf-8") == (symbol if isinstance(symbol, bytes) else symbol.encode("utf-8"))


def test_negative_decimals_rejected(accounts):
    engine = _bare(accounts)
    with pytest.raises(ArithmeticRevert):
        engine.call("initialize", "Fine", "OK", SUPPLY, -1, accounts.owner, TX_LIMIT, WALLET_LIMIT, True)
    assert engine.storage.to_dict() == {}


def test_zero_supply_deploy(deploy, accounts):
    t = deploy(total_supply=0)
    assert t.call("totalSupply") == 0
    assert t.call("balanceOf", accounts.owner) == 0
    assert t.events[-1].args["value"] == 0
