# -*- coding: utf-8 -*-
"""
token_contracts: contract standard library and the guarded token.

- token_contracts.stdlib         : reusable ledger, access, pause, guard,
                                   math and upgrade building blocks
- token_contracts.guarded_token  : the composed, upgradeable guarded token
"""
