# -*- coding: utf-8 -*-
from __future__ import annotations

import pytest

from token_contracts.stdlib.errors import OperationPaused, Unauthorized


@pytest.fixture
def funded(open_token, accounts):
    open_token.call("transfer", accounts.owner, accounts.alice, 100)
    return open_token


def test_pause_blocks_transfers_until_unpaused(funded, accounts):
    t = funded
    t.call("pause", accounts.owner)
    assert t.call("paused") is True

    with pytest.raises(OperationPaused) as ei:
        t.call("transfer", accounts.alice, accounts.bob, 1)
    assert ei.value.code == "OperationPaused"
    assert ei.value.reason == "Pausable: paused"

    t.call("approve", accounts.alice, accounts.bob, 5)
    with pytest.raises(OperationPaused):
        t.call("transferFrom", accounts.bob, accounts.alice, accounts.carol, 5)

    t.call("unpause", accounts.owner)
    assert t.call("transfer", accounts.alice, accounts.bob, 1) is True
    assert t.call("balanceOf", accounts.bob) == 1


def test_owner_transfer_across_pause(token, accounts):
    token.call("pause", accounts.owner)
    with pytest.raises(OperationPaused):
        token.call("transfer", accounts.owner, accounts.alice, 1)
    token.call("unpause", accounts.owner)
    assert token.call("transfer", accounts.owner, accounts.alice, 1) is True


def test_pause_checked_before_guard(token, accounts):
    token.call("pause", accounts.owner)
    # alice and bob are not whitelisted, the guard would also reject
    with pytest.raises(OperationPaused):
        token.call("transfer", accounts.alice, accounts.bob, 1)


def test_pause_checked_before_balance(funded, accounts):
    funded.call("pause", accounts.owner)
    with pytest.raises(OperationPaused):
        funded.call("transfer", accounts.carol, accounts.bob, 1_000)


def test_non_transfer_paths_work_while_paused(funded, accounts):
    t = funded
    t.call("pause", accounts.owner)

    t.call("approve", accounts.alice, accounts.bob, 10)
    t.call("increaseAllowance", accounts.alice, accounts.bob, 5)
    t.call("burn", accounts.alice, 10)
    t.call("burnFrom", accounts.bob, accounts.alice, 15)
    t.call("setTransactionLimit", accounts.owner, 7)
    t.call("addToWhiteList", accounts.owner, [accounts.carol])

    assert t.call("balanceOf", accounts.alice) == 75
    assert t.call("getTransactionLimit") == 7
    assert t.call("isWhiteListed", accounts.carol) is True


def test_pause_is_idempotent_and_silent(open_token, accounts):
    t = open_token
    t.call("pause", accounts.owner)
    assert t.last_events == []
    t.call("pause", accounts.owner)
    assert t.call("paused") is True
    t.call("unpause", accounts.owner)
    t.call("unpause", accounts.owner)
    assert t.last_events == []
    assert t.call("paused") is False


def test_only_owner_pauses(open_token, accounts):
    with pytest.raises(Unauthorized):
        open_token.call("pause", accounts.alice)
    open_token.call("pause", accounts.owner)
    with pytest.raises(Unauthorized):
        open_token.call("unpause", accounts.alice)
    assert open_token.call("paused") is True
