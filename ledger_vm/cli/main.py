"""
guarded-token: operate a single contract instance persisted in a CBOR state file.

Commands:
  deploy   Load a logic module, run `initialize` and write a new state file
  call     Invoke an exported function atomically and persist the result
  upgrade  Swap the instance to a new logic module (owner-authorized)
  show     Print the instance address, logic, code hash and ABI

Arguments are JSON values; strings beginning with "0x" are decoded to bytes
(addresses, hashes). Lists are passed through element-wise.

Examples:
  guarded-token deploy token_contracts.guarded_token.contract --address 0x01..01 \\
      '"Bair"' '"BAIR"' 1000000 18 0xO..O 50 500 true
  guarded-token call transfer 0xO..O 0xU1..U1 10
  guarded-token call addToWhiteList 0xO..O '["0xU1..U1", "0xU2..U2"]'
  guarded-token call balanceOf 0xU1..U1
"""

from __future__ import annotations

import inspect
import json
import logging
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer

from ledger_vm.config import load_config
from ledger_vm.errors import VmError
from ledger_vm.runtime.context import ContextError, to_bytes, to_hex
from ledger_vm.runtime.engine import Engine, Receipt
from ledger_vm.runtime.loader import LoaderError, code_hash, load_logic
from ledger_vm.runtime import snapshot

log = logging.getLogger(__name__)

app = typer.Typer(
    name="guarded-token",
    help="Deploy, call and upgrade a guarded token instance.",
    no_args_is_help=True,
    add_completion=False,
)


class GlobalContext:
    def __init__(self) -> None:
        self.state_path: Path = load_config().state_path
        self.verbose: bool = False


_ctx = GlobalContext()


# -------------------- utils --------------------


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, load_config().log_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _coerce(value: Any) -> Any:
    if isinstance(value, str) and value.startswith(("0x", "0X")):
        return to_bytes(value)
    if isinstance(value, list):
        return [_coerce(v) for v in value]
    return value


def _parse_args(raw: Optional[List[str]]) -> List[Any]:
    out: List[Any] = []
    for item in raw or []:
        try:
            value = json.loads(item)
        except ValueError:
            value = item
        try:
            out.append(_coerce(value))
        except ContextError as e:
            raise typer.BadParameter(str(e)) from e
    return out


def _emit(doc: Any) -> None:
    typer.echo(json.dumps(doc, indent=2, sort_keys=True))


def _fail(err: VmError) -> NoReturn:
    _emit({"ok": False, "error": err.to_dict()})
    raise typer.Exit(1)


def _load_engine() -> Engine:
    try:
        return snapshot.restore(_ctx.state_path)
    except (VmError, LoaderError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(2)


def _load_logic(ref: str):
    try:
        return load_logic(ref)
    except LoaderError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(2)


def _check_arity(logic: Any, fn: str, args: List[Any]) -> None:
    """Exit 2 with a usage error when `args` cannot bind to `fn(ctx, ...)`."""
    if fn not in getattr(logic, "__all__", ()):
        return  # the engine reports unknown functions in the receipt
    target = getattr(logic, fn, None)
    if not callable(target):
        return
    try:
        inspect.signature(target).bind(None, *args)
    except TypeError as e:
        typer.echo(f"error: {fn}: {e}", err=True)
        raise typer.Exit(2)


# -------------------- commands --------------------


@app.callback()
def main_callback(
    state: Optional[Path] = typer.Option(
        None,
        "--state",
        help="CBOR state file for the instance.",
        envvar="LEDGER_VM_STATE",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """
    Operate one contract instance. State is read from and written back to
    --state after every successful command.
    """
    _ctx.state_path = state or load_config().state_path
    _ctx.verbose = verbose
    _configure_logging(verbose)
    log.debug("using state file %s", _ctx.state_path)


@app.command("deploy")
def deploy(
    logic: str = typer.Argument(..., help="Dotted module path or .py file."),
    args: Optional[List[str]] = typer.Argument(None, help="initialize arguments (JSON)."),
    address: str = typer.Option(..., "--address", help="Instance address (0x-hex)."),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing state file."),
) -> None:
    """Deploy a new instance and run its initializer."""
    if _ctx.state_path.exists() and not force:
        typer.echo(f"error: state file {_ctx.state_path} exists (use --force)", err=True)
        raise typer.Exit(2)
    module = _load_logic(logic)
    try:
        addr = to_bytes(address)
    except ContextError as e:
        raise typer.BadParameter(str(e)) from e
    init_args = _parse_args(args)
    _check_arity(module, "initialize", init_args)
    try:
        engine = Engine.deploy(module, address=addr, args=init_args)
    except VmError as e:
        _fail(e)
    snapshot.save(engine, _ctx.state_path)
    receipt = Receipt(ok=True, events=list(engine.last_events))
    _emit({**receipt.to_dict(), "address": to_hex(engine.address), "state": str(_ctx.state_path)})


@app.command("call")
def call(
    fn: str = typer.Argument(..., help="Exported function name."),
    args: Optional[List[str]] = typer.Argument(None, help="Arguments after ctx (JSON)."),
) -> None:
    """Call a function. Mutating functions take the caller address first."""
    engine = _load_engine()
    call_args = _parse_args(args)
    _check_arity(engine.logic, fn, call_args)
    receipt = engine.execute(fn, *call_args)
    if not receipt.ok:
        _emit(receipt.to_dict())
        raise typer.Exit(1)
    snapshot.save(engine, _ctx.state_path)
    _emit(receipt.to_dict())


@app.command("upgrade")
def upgrade(
    logic: str = typer.Argument(..., help="Dotted module path or .py file of the new logic."),
    caller: str = typer.Option(..., "--caller", help="Owner address (0x-hex)."),
) -> None:
    """Swap the instance to new logic; storage is kept as is."""
    engine = _load_engine()
    module = _load_logic(logic)
    try:
        engine.upgrade(to_bytes(caller), module)
    except VmError as e:
        _fail(e)
    snapshot.save(engine, _ctx.state_path)
    receipt = Receipt(ok=True, events=list(engine.last_events))
    _emit({**receipt.to_dict(), "logic": engine.logic_ref})


@app.command("show")
def show() -> None:
    """Describe the persisted instance."""
    engine = _load_engine()
    _emit(
        {
            "address": to_hex(engine.address),
            "logic": engine.logic_ref,
            "code_hash": to_hex(code_hash(engine.logic)),
            "abi": engine.abi(),
            "storage_keys": len(engine.storage.to_dict()),
            "state": str(_ctx.state_path),
        }
    )


def main() -> None:
    """Entry point for the guarded-token CLI."""
    app()


if __name__ == "__main__":
    main()
