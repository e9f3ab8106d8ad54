# src/tokenledger/contracts/base.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from tokenledger.runtime.tx_types import Address, ContractId


@runtime_checkable
class TokenContract(Protocol):
    """Capability set every contract registered on a Blockchain must provide.

    transfer() raises NotEnoughBalance when the sender cannot cover `amount`
    and BalanceOverflow when the credit would exceed u64; neither mutates.
    """

    def contract(self) -> ContractId:
        ...

    def balance_of(self, address: Address) -> int:
        ...

    def transfer(self, sender: Address, amount: int, to: Address) -> None:
        ...


__all__ = ["TokenContract"]
