from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from tokenledger.contracts.base import TokenContract
from tokenledger.runtime.errors import DuplicateContractId
from tokenledger.runtime.tx_types import ContractId


class ContractRegistry:
    """Ordered, fixed collection of token contracts keyed by contract id.

    Built once before any transaction is processed. A duplicate id would make
    the later contract unreachable, so it is rejected here.
    """

    def __init__(self, contracts: Iterable[TokenContract]) -> None:
        self._contracts: List[TokenContract] = []
        seen: set[str] = set()
        for c in contracts:
            if not isinstance(c, TokenContract):
                raise TypeError(f"contract must provide contract/balance_of/transfer; got {type(c).__name__}")
            cid = str(c.contract())
            if cid in seen:
                raise DuplicateContractId("duplicate_contract_id", {"contract": cid})
            seen.add(cid)
            self._contracts.append(c)

    def find(self, contract_id: str) -> Optional[TokenContract]:
        for c in self._contracts:
            if c.contract() == contract_id:
                return c
        return None

    def ids(self) -> List[ContractId]:
        return [c.contract() for c in self._contracts]

    def __iter__(self) -> Iterator[TokenContract]:
        return iter(self._contracts)

    def __len__(self) -> int:
        return len(self._contracts)

    def __contains__(self, contract_id: object) -> bool:
        return isinstance(contract_id, str) and self.find(contract_id) is not None


__all__ = ["ContractRegistry"]
