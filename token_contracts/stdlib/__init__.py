# -*- coding: utf-8 -*-
"""
token_contracts.stdlib
======================

Building blocks for contracts running on `ledger_vm`. Every helper takes
the `CallContext` explicitly and reports failures as `Revert` subclasses
from `token_contracts.stdlib.errors`.

Subpackages
-----------
- math     : checked u256 arithmetic
- token    : storage conventions, validators, the fungible ledger
- access   : single-owner control
- control  : pause switch
- guard    : anti-bot whitelist and transfer ceilings
- upgrade  : initializers, storage layouts, implementation records
"""
