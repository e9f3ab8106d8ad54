# src/tokenledger/runtime/errors.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Closed set of runtime failure codes surfaced by the dispatcher."""

    NOT_ENOUGH_BALANCE = "not_enough_balance"
    CONTRACT_NOT_FOUND = "contract_not_found"
    BAD_TRANSACTION_SEQUENCE = "bad_transaction_sequence"
    BALANCE_OVERFLOW = "balance_overflow"


@dataclass
class LedgerError(Exception):
    """Canonical error type for dispatch, contract and config failures."""

    code: str
    reason: str
    details: Any | None = None

    def __str__(self) -> str:  # pragma: no cover
        if self.details is None:
            return f"{self.code}:{self.reason}"
        return f"{self.code}:{self.reason}:{self.details}"


class NotEnoughBalance(LedgerError):
    def __init__(self, reason: str = "amount_exceeds_balance", details: Any | None = None) -> None:
        super().__init__(ErrorKind.NOT_ENOUGH_BALANCE.value, reason, details)


class ContractNotFound(LedgerError):
    def __init__(self, reason: str = "no_matching_contract", details: Any | None = None) -> None:
        super().__init__(ErrorKind.CONTRACT_NOT_FOUND.value, reason, details)


class BadTransactionSequence(LedgerError):
    def __init__(self, reason: str = "sequence_not_increasing", details: Any | None = None) -> None:
        super().__init__(ErrorKind.BAD_TRANSACTION_SEQUENCE.value, reason, details)


class BalanceOverflow(LedgerError):
    def __init__(self, reason: str = "credit_exceeds_u64", details: Any | None = None) -> None:
        super().__init__(ErrorKind.BALANCE_OVERFLOW.value, reason, details)


# Construction-time errors. These never come out of process_transaction().


class DuplicateContractId(LedgerError):
    def __init__(self, reason: str = "duplicate_contract_id", details: Any | None = None) -> None:
        super().__init__("duplicate_contract_id", reason, details)


class TransactionSchemaError(LedgerError):
    def __init__(self, reason: str = "invalid_transaction", details: Any | None = None) -> None:
        super().__init__("invalid_tx", reason, details)


class ConfigError(LedgerError):
    def __init__(self, reason: str, details: Any | None = None) -> None:
        super().__init__("invalid_config", reason, details)


RUNTIME_ERRORS = (NotEnoughBalance, ContractNotFound, BadTransactionSequence, BalanceOverflow)


__all__ = [
    "ErrorKind",
    "LedgerError",
    "NotEnoughBalance",
    "ContractNotFound",
    "BadTransactionSequence",
    "BalanceOverflow",
    "DuplicateContractId",
    "TransactionSchemaError",
    "ConfigError",
    "RUNTIME_ERRORS",
]
