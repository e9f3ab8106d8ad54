from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Iterator, NewType, Optional

from tokenledger.runtime.errors import LedgerError

Json = Dict[str, Any]

Address = NewType("Address", str)
ContractId = NewType("ContractId", str)

U64_MAX = 2**64 - 1


def check_u64(name: str, v: int) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{name} must be an int; got {type(v).__name__}")
    if v < 0 or v > U64_MAX:
        raise ValueError(f"{name} must be within 0..2**64-1; got {v}")
    return v


class Method(str, Enum):
    BALANCE_OF = "balance_of"
    TRANSFER = "transfer"

    @classmethod
    def parse(cls, v: Any) -> "Method":
        """Accept a Method, its value, or its name in snake/camel case."""
        if isinstance(v, Method):
            return v
        s = str(v or "").strip().replace("_", "").lower()
        if s in {"balance", "balancequery"}:
            return cls.BALANCE_OF
        for m in cls:
            if m.value.replace("_", "") == s:
                return m
        raise ValueError(f"unknown method: {v!r}")


@dataclass(frozen=True)
class Transaction:
    """A signed (already authenticated) account operation.

    `destination` is only meaningful for Method.TRANSFER.
    """

    sender: Address
    sequence: int
    amount: int
    contract: ContractId
    method: Method
    destination: Address = Address("")

    def __post_init__(self) -> None:
        check_u64("sequence", self.sequence)
        check_u64("amount", self.amount)
        if not isinstance(self.method, Method):
            object.__setattr__(self, "method", Method.parse(self.method))

    @staticmethod
    def new(sender: str, amount: int, contract: str, method: Method) -> "Transaction":
        return Transaction(
            sender=Address(sender),
            sequence=0,
            amount=amount,
            contract=ContractId(contract),
            method=method,
        )

    def with_seq(self, seq: int) -> "Transaction":
        return replace(self, sequence=seq)

    def with_destination(self, destination: str) -> "Transaction":
        return replace(self, destination=Address(destination))

    @staticmethod
    def from_json(j: Any) -> "Transaction":
        if isinstance(j, Transaction):
            return j
        # Imported here: tx_schema depends on this module.
        from tokenledger.runtime.tx_schema import validate_transaction

        return validate_transaction(j)

    def to_json(self) -> Json:
        return {
            "sender": str(self.sender),
            "sequence": int(self.sequence),
            "amount": int(self.amount),
            "contract": str(self.contract),
            "method": self.method.value,
            "destination": str(self.destination),
        }


@dataclass(frozen=True)
class TxOutcome:
    ok: bool
    value: Optional[int] = None
    error: Optional[LedgerError] = None

    def __iter__(self) -> Iterator[Any]:
        """Allow `ok, res = chain.try_process(...)` unpacking."""
        yield self.ok
        yield self.value if self.ok else self.error

    @staticmethod
    def success(value: int) -> "TxOutcome":
        return TxOutcome(True, int(value), None)

    @staticmethod
    def failure(err: LedgerError) -> "TxOutcome":
        return TxOutcome(False, None, err)

    def to_json(self) -> Json:
        if self.ok:
            return {"ok": True, "value": self.value}
        err = self.error
        return {
            "ok": False,
            "code": getattr(err, "code", "error"),
            "reason": getattr(err, "reason", ""),
            "details": getattr(err, "details", None),
        }


__all__ = ["Address", "ContractId", "Method", "Transaction", "TxOutcome", "U64_MAX", "check_u64"]
