# -*- coding: utf-8 -*-
"""
Fixtures for guarded token tests.

- Deterministic 20-byte addresses derived from tags via SHA3-256.
- `deploy(**overrides)` builds a fresh engine running the guarded token,
  initialized with the reference scenario parameters unless overridden:
      supply = 1,000,000 tokens (18 decimals), txLimit = 50,
      walletLimit = 500, antiBot = true, owner = "owner".
- `token` is that default deployment; `open_token` has the guard off.

Usage:
    def test_flow(token, accounts):
        token.call("transfer", accounts.owner, accounts.alice, 10)
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List

import pytest

from ledger_vm.config import load_config
from ledger_vm.runtime.engine import Engine
from token_contracts.guarded_token import contract

DECIMALS = 18
SUPPLY = 1_000_000 * 10**DECIMALS
TX_LIMIT = 50
WALLET_LIMIT = 500


def _det_address(tag: str) -> bytes:
    """
    Produce a stable 20-byte address from a tag.
    """
    return hashlib.sha3_256(tag.encode("utf-8")).digest()[:20]


@dataclass(frozen=True)
class Accounts:
    owner: bytes
    alice: bytes
    bob: bytes
    carol: bytes
    token: bytes

    def users(self) -> List[bytes]:
        return [self.alice, self.bob, self.carol]

    def all(self) -> List[bytes]:
        return [self.owner, self.alice, self.bob, self.carol, self.token]


def balances(engine: Engine, addrs: Iterable[bytes]) -> Dict[bytes, int]:
    return {a: engine.call("balanceOf", a) for a in addrs}


def event_names(engine: Engine) -> List[bytes]:
    return [ev.name for ev in engine.last_events]


@pytest.fixture(autouse=True)
def _fresh_config():
    load_config.cache_clear()
    yield
    load_config.cache_clear()


@pytest.fixture(scope="session")
def accounts() -> Accounts:
    return Accounts(
        owner=_det_address("owner"),
        alice=_det_address("alice"),
        bob=_det_address("bob"),
        carol=_det_address("carol"),
        token=_det_address("guarded-token"),
    )


@pytest.fixture
def deploy(accounts: Accounts) -> Callable[..., Engine]:
    def _deploy(**overrides: Any) -> Engine:
        params: Dict[str, Any] = {
            "name": "Bair Token",
            "symbol": "BAIR",
            "total_supply": SUPPLY,
            "decimals": DECIMALS,
            "initial_owner": accounts.owner,
            "tx_limit": TX_LIMIT,
            "wallet_limit": WALLET_LIMIT,
            "anti_bot_enabled": True,
        }
        params.update(overrides)
        return Engine.deploy(
            contract,
            address=accounts.token,
            args=(
                params["name"],
                params["symbol"],
                params["total_supply"],
                params["decimals"],
                params["initial_owner"],
                params["tx_limit"],
                params["wallet_limit"],
                params["anti_bot_enabled"],
            ),
        )

    return _deploy


@pytest.fixture
def token(deploy) -> Engine:
    return deploy()


@pytest.fixture
def open_token(deploy) -> Engine:
    return deploy(anti_bot_enabled=False)
