# -*- coding: utf-8 -*-
"""token_contracts.stdlib.math: checked integer arithmetic for contracts."""

from .safe_uint import U256_MAX, require_u256, u256_add, u256_sub

__all__ = ["U256_MAX", "require_u256", "u256_add", "u256_sub"]
