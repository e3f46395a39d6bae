from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ledger_vm.config import LedgerVmConfig, load_config
from ledger_vm.errors import EventError

# Basic bounds
MAX_EVENT_NAME_BYTES = 64
MAX_KEY_LEN = 64
MAX_BYTES_LEN = 4096
MAX_INT_BITS = 256

# Keys must be identifier-like: letters/underscore, then letters/digits/underscore.
_KEY_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

ArgValue = Any  # constrained at runtime


@dataclass(frozen=True)
class Event:
    """In-VM representation of an emitted event."""

    name: bytes
    args: Dict[str, ArgValue]

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name.decode("ascii", errors="replace"), "args": _json_args(self.args)}


def _json_args(args: Mapping[str, Any]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for k, v in args.items():
        if isinstance(v, (bytes, bytearray)):
            out[k] = "0x" + bytes(v).hex()
        elif isinstance(v, tuple):
            out[k] = ["0x" + bytes(x).hex() for x in v]
        else:
            out[k] = v
    return out


class EventSink:
    """
    Validating, append-only event buffer.

    The engine opens one sink per call and only publishes its contents when
    the call commits, so a reverted call never leaves an event behind.
    """

    def __init__(self, config: Optional[LedgerVmConfig] = None) -> None:
        self._cfg = config or load_config()
        self._events: List[Event] = []

    # --- Validation helpers -------------------------------------------------

    def _check_name(self, name: Any) -> bytes:
        if not isinstance(name, (bytes, bytearray)):
            raise EventError("event name must be bytes", context={"where": "name_type"})
        b = bytes(name)
        if len(b) == 0:
            raise EventError("event name must be non-empty", context={"where": "name_empty"})
        if len(b) > MAX_EVENT_NAME_BYTES:
            raise EventError("event name too long", context={"where": "name_length", "len": len(b)})
        return b

    def _check_key(self, key: Any) -> str:
        if isinstance(key, (bytes, bytearray)):
            try:
                key = bytes(key).decode("ascii")
            except UnicodeDecodeError:
                raise EventError("event key must be ASCII", context={"where": "key_ascii"}) from None
        if not isinstance(key, str):
            raise EventError("event key must be str", context={"where": "key_type"})
        if len(key) == 0 or len(key) > MAX_KEY_LEN:
            raise EventError("event key length out of range", context={"where": "key_length", "len": len(key)})
        if not _KEY_RE.match(key):
            raise EventError("event key has invalid characters", context={"where": "key_grammar", "key": key})
        return key

    def _check_bytes(self, value: Any) -> bytes:
        b = bytes(value)
        if len(b) > MAX_BYTES_LEN:
            raise EventError("event bytes arg too long", context={"where": "value_bytes_length", "len": len(b)})
        return b

    def _check_value(self, value: Any) -> ArgValue:
        if isinstance(value, (bytes, bytearray)):
            return self._check_bytes(value)

        if isinstance(value, bool):
            # bool is a subclass of int, so check it before int.
            return value

        if isinstance(value, int):
            if value.bit_length() > MAX_INT_BITS:
                raise EventError("event int arg out of range", context={"where": "value_int_bits", "bits": value.bit_length()})
            return int(value)

        if isinstance(value, (list, tuple)):
            if len(value) > self._cfg.max_event_list_items:
                raise EventError("event list arg too long", context={"where": "value_list_length", "len": len(value)})
            items: List[bytes] = []
            for item in value:
                if not isinstance(item, (bytes, bytearray)):
                    raise EventError("event list items must be bytes", context={"where": "value_list_item"})
                items.append(self._check_bytes(item))
            return tuple(items)

        raise EventError("unsupported event arg type", context={"where": "value_type", "py_type": type(value).__name__})

    # --- Core sink operations -----------------------------------------------

    def emit(self, name: bytes, args: Mapping[Any, Any]) -> None:
        bname = self._check_name(name)

        if not isinstance(args, Mapping):
            raise EventError("event args must be a mapping", context={"where": "args_type"})

        if len(self._events) >= self._cfg.max_events_per_call:
            raise EventError("too many events in one call", context={"where": "events_per_call"})

        checked: Dict[str, ArgValue] = {}
        for raw_k, raw_v in args.items():
            checked[self._check_key(raw_k)] = self._check_value(raw_v)

        self._events.append(Event(bname, checked))

    def __len__(self) -> int:
        return len(self._events)

    def snapshot(self) -> Tuple[Event, ...]:
        return tuple(self._events)


__all__ = [
    "Event",
    "EventSink",
    "MAX_EVENT_NAME_BYTES",
    "MAX_KEY_LEN",
    "MAX_BYTES_LEN",
    "MAX_INT_BITS",
]
