# src/tokenledger/__init__.py
from __future__ import annotations

from tokenledger.contracts import BasicToken, TokenContract
from tokenledger.runtime.dispatcher import Blockchain
from tokenledger.runtime.errors import (
    BadTransactionSequence,
    BalanceOverflow,
    ContractNotFound,
    DuplicateContractId,
    LedgerError,
    NotEnoughBalance,
)
from tokenledger.runtime.registry import ContractRegistry
from tokenledger.runtime.tx_types import Address, ContractId, Method, Transaction, TxOutcome

__version__ = "0.1.0"

__all__ = [
    "Address",
    "BadTransactionSequence",
    "BalanceOverflow",
    "BasicToken",
    "Blockchain",
    "ContractId",
    "ContractNotFound",
    "ContractRegistry",
    "DuplicateContractId",
    "LedgerError",
    "Method",
    "NotEnoughBalance",
    "TokenContract",
    "Transaction",
    "TxOutcome",
]
