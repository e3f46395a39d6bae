"""
ledger_vm.runtime.snapshot: persist an engine's committed state as CBOR.

Layout (canonical CBOR map, deterministic byte output):

    {
      "format":    "ledger-vm/state@1",
      "address":   bytes,               # instance address
      "logic":     str,                 # dotted module path or .py file
      "code_hash": bytes,               # SHA3-256 of the logic source
      "storage":   {bytes: bytes},      # committed key/value pairs
    }

Restoring re-imports the logic and refuses to continue if its source no
longer matches `code_hash`: changing logic goes through `Engine.upgrade`,
never through editing files under a live state.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import cbor2

from ledger_vm.config import LedgerVmConfig, load_config
from ledger_vm.errors import VmError

from .engine import Engine
from .loader import code_hash, load_logic
from .storage_api import MemoryBackend, Storage

log = logging.getLogger(__name__)

FORMAT = "ledger-vm/state@1"


class SnapshotError(VmError):
    code = "SNAPSHOT"


def encode(engine: Engine) -> bytes:
    doc: Dict[str, Any] = {
        "format": FORMAT,
        "address": engine.address,
        "logic": engine.logic_ref,
        "code_hash": code_hash(engine.logic),
        "storage": engine.storage.to_dict(),
    }
    # canonical=True enforces deterministic map ordering and integer encodings
    return cbor2.dumps(doc, canonical=True)


def decode(blob: bytes, *, config: Optional[LedgerVmConfig] = None) -> Engine:
    try:
        doc = cbor2.loads(blob)
    except (cbor2.CBORDecodeError, ValueError) as e:
        raise SnapshotError(f"state file is not valid CBOR: {e}") from e
    if not isinstance(doc, dict) or doc.get("format") != FORMAT:
        raise SnapshotError("unrecognized state format", context={"format": repr(doc.get("format") if isinstance(doc, dict) else None)})

    logic = load_logic(doc["logic"])
    expected = bytes(doc["code_hash"])
    actual = code_hash(logic)
    if actual != expected:
        raise SnapshotError(
            "logic source changed since the state was saved",
            context={"logic": doc["logic"], "expected": expected.hex(), "actual": actual.hex()},
        )

    cfg = config or load_config()
    storage = Storage(MemoryBackend(dict(doc["storage"])), config=cfg)
    return Engine(logic, address=bytes(doc["address"]), storage=storage, config=cfg)


def save(engine: Engine, path: Union[str, Path]) -> Path:
    """Write the engine state to `path` atomically (temp file + rename)."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    tmp = p.with_name(p.name + ".tmp")
    tmp.write_bytes(encode(engine))
    os.replace(tmp, p)
    log.debug("saved state for %s to %s", engine.logic_ref, p)
    return p


def restore(path: Union[str, Path], *, config: Optional[LedgerVmConfig] = None) -> Engine:
    p = Path(path)
    if not p.is_file():
        raise SnapshotError(f"no state file at {p}", context={"path": str(p)})
    return decode(p.read_bytes(), config=config)


__all__ = ["FORMAT", "SnapshotError", "encode", "decode", "save", "restore"]
