"""
ledger_vm.runtime.loader: resolve contract logic modules.

A logic reference is either a dotted module path
(``token_contracts.guarded_token.contract``) or a path to a ``.py`` file.
File sources are executed into a fresh module whose name is derived from the
source digest, so two revisions of the same file never collide.

The implementation identifier of a logic module is the SHA3-256 digest of
its source bytes (`code_hash`).
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import logging
import types
from pathlib import Path
from typing import Union

log = logging.getLogger(__name__)

LogicRef = Union[str, Path]

_REF_ATTR = "__logic_ref__"
_HASH_ATTR = "__code_hash__"


class LoaderError(ImportError):
    """A logic reference could not be resolved to a module."""


def _is_file_ref(ref: str) -> bool:
    return ref.endswith(".py") or "/" in ref or "\\" in ref


def _load_file(path: Path) -> types.ModuleType:
    if not path.is_file():
        raise LoaderError(f"logic source not found: {path}")
    source = path.read_bytes()
    digest = hashlib.sha3_256(source).digest()

    mod_name = "logic_" + digest.hex()[:16]
    spec = importlib.util.spec_from_loader(mod_name, loader=None)
    module = importlib.util.module_from_spec(spec)  # type: ignore[arg-type]
    module.__file__ = str(path)
    exec(compile(source, str(path), "exec"), module.__dict__)

    setattr(module, _HASH_ATTR, digest)
    setattr(module, _REF_ATTR, str(path.resolve()))
    return module


def load_logic(ref: LogicRef) -> types.ModuleType:
    """Import the logic module named by `ref` (dotted path or .py file)."""
    text = str(ref)
    if isinstance(ref, Path) or _is_file_ref(text):
        module = _load_file(Path(text).expanduser())
    else:
        try:
            module = importlib.import_module(text)
        except ImportError as e:
            raise LoaderError(f"cannot import logic module {text!r}: {e}") from e
        if not hasattr(module, _REF_ATTR):
            setattr(module, _REF_ATTR, text)
    log.debug("loaded logic %s", logic_ref(module))
    return module


def logic_ref(module: types.ModuleType) -> str:
    """The reference a module was loaded from (falls back to its name)."""
    return getattr(module, _REF_ATTR, module.__name__)


def code_hash(module: types.ModuleType) -> bytes:
    """SHA3-256 of the module's source bytes."""
    cached = getattr(module, _HASH_ATTR, None)
    if cached is not None:
        return cached
    origin = getattr(module, "__file__", None)
    if not origin:
        raise LoaderError(f"logic module {module.__name__!r} has no source file")
    digest = hashlib.sha3_256(Path(origin).read_bytes()).digest()
    setattr(module, _HASH_ATTR, digest)
    return digest


__all__ = ["LogicRef", "LoaderError", "load_logic", "logic_ref", "code_hash"]
