"""Command line entry points for ledger_vm (`guarded-token`)."""

from .main import app, main

__all__ = ["app", "main"]
