# -*- coding: utf-8 -*-
"""token_contracts.stdlib.control: contract-wide pause switch."""

from .pausable import (PAUSED_KEY, is_paused, pause, require_not_paused,
                       set_paused, unpause)

__all__ = [
    "PAUSED_KEY",
    "is_paused",
    "require_not_paused",
    "set_paused",
    "pause",
    "unpause",
]
