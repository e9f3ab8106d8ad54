# src/tokenledger/contracts/basic_token.py
from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable

from tokenledger.runtime.errors import BalanceOverflow, NotEnoughBalance
from tokenledger.runtime.structured_logging import log_event
from tokenledger.runtime.tx_types import U64_MAX, Address, ContractId, check_u64

log = logging.getLogger("tokenledger.contracts")


class BasicToken:
    """Fungible token backed by an address -> balance mapping.

    Every address in the airdrop list starts at `initial_balance`; all other
    addresses are implicitly 0. Reads and transfers share one lock so a
    debit/credit pair is never observed half-applied.
    """

    def __init__(self, contract: str, airdrop_list: Iterable[str], initial_balance: int) -> None:
        check_u64("initial_balance", initial_balance)
        self._contract = ContractId(str(contract))
        self._lock = threading.RLock()
        self._ledger: Dict[Address, int] = {}
        for addr in airdrop_list:
            self._ledger[Address(str(addr))] = int(initial_balance)

    def __repr__(self) -> str:
        return f"BasicToken(contract={self._contract!r}, holders={len(self._ledger)})"

    def contract(self) -> ContractId:
        return self._contract

    def balance_of(self, address: Address) -> int:
        with self._lock:
            return int(self._ledger.get(address, 0))

    def transfer(self, sender: Address, amount: int, to: Address) -> None:
        check_u64("amount", amount)
        with self._lock:
            balance = int(self._ledger.get(sender, 0))
            if amount > balance:
                raise NotEnoughBalance(
                    "amount_exceeds_balance",
                    {"contract": self._contract, "sender": sender, "balance": balance, "amount": amount},
                )

            credited = int(self._ledger.get(to, 0))
            if to != sender and credited + amount > U64_MAX:
                raise BalanceOverflow(
                    "credit_exceeds_u64",
                    {"contract": self._contract, "to": to, "balance": credited, "amount": amount},
                )

            # Debit first, then read the destination: for a self-transfer the
            # credit lands back on the debited balance and the net change is 0.
            self._ledger[sender] = balance - amount
            self._ledger[to] = int(self._ledger.get(to, 0)) + amount

        log_event(
            log,
            "token_transfer",
            contract=self._contract,
            sender=sender,
            to=to,
            amount=amount,
        )

    def total_supply(self) -> int:
        with self._lock:
            return sum(self._ledger.values())

    def holders(self) -> Dict[Address, int]:
        with self._lock:
            return dict(self._ledger)


__all__ = ["BasicToken"]
