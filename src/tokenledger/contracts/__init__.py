# src/tokenledger/contracts/__init__.py
"""
Token contracts.

  - base: the TokenContract capability protocol (identify / balance_of / transfer)
  - basic_token: BasicToken, an airdrop-seeded fungible token
"""

from tokenledger.contracts.base import TokenContract
from tokenledger.contracts.basic_token import BasicToken

__all__ = ["TokenContract", "BasicToken"]
