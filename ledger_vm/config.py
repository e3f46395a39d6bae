"""
ledger_vm.config: numeric caps, logging level and default state path.

Configuration precedence:
  1) Environment variables (LEDGER_VM_*)
  2) Hardcoded safe defaults below

Key env vars:
  - LEDGER_VM_MAX_STORAGE_KEY_BYTES (int)   default: 128
  - LEDGER_VM_MAX_STORAGE_VAL_BYTES (int)   default: 65_536
  - LEDGER_VM_MAX_EVENTS_PER_CALL   (int)   default: 1024
  - LEDGER_VM_MAX_EVENT_LIST_ITEMS  (int)   default: 100000
  - LEDGER_VM_LOG_LEVEL             (str)   default: WARNING
  - LEDGER_VM_STATE                 (path)  default: guarded_token_state.cbor

Usage:
    from ledger_vm.config import load_config
    CFG = load_config()
    if len(key) > CFG.max_storage_key_bytes: ...

Tests that tweak the environment must call `load_config.cache_clear()`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

# ----------------------------- helpers ---------------------------------------


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _env_log_level(name: str, default: str) -> str:
    raw = (os.getenv(name) or default).strip().upper()
    if raw not in _LEVELS:
        return default
    return raw


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class LedgerVmConfig:
    # Storage caps
    max_storage_key_bytes: int
    max_storage_value_bytes: int

    # Event caps
    max_events_per_call: int
    max_event_list_items: int

    # Ambient
    log_level: str
    state_path: Path

    def as_dict(self) -> Dict[str, Any]:
        return {
            "max_storage_key_bytes": self.max_storage_key_bytes,
            "max_storage_value_bytes": self.max_storage_value_bytes,
            "max_events_per_call": self.max_events_per_call,
            "max_event_list_items": self.max_event_list_items,
            "log_level": self.log_level,
            "state_path": str(self.state_path),
        }


@lru_cache(maxsize=1)
def load_config() -> LedgerVmConfig:
    """
    Build and cache a LedgerVmConfig from environment + safe defaults.
    """
    state = os.getenv("LEDGER_VM_STATE") or "guarded_token_state.cbor"
    return LedgerVmConfig(
        max_storage_key_bytes=_env_int("LEDGER_VM_MAX_STORAGE_KEY_BYTES", 128, min_v=16, max_v=1024),
        max_storage_value_bytes=_env_int("LEDGER_VM_MAX_STORAGE_VAL_BYTES", 65_536, min_v=32, max_v=1_048_576),
        max_events_per_call=_env_int("LEDGER_VM_MAX_EVENTS_PER_CALL", 1024, min_v=1, max_v=100_000),
        max_event_list_items=_env_int("LEDGER_VM_MAX_EVENT_LIST_ITEMS", 100_000, min_v=1, max_v=1_000_000),
        log_level=_env_log_level("LEDGER_VM_LOG_LEVEL", "WARNING"),
        state_path=Path(state).expanduser(),
    )


__all__ = ["LedgerVmConfig", "load_config"]
