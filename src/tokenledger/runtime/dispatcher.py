# src/tokenledger/runtime/dispatcher.py
from __future__ import annotations

import logging
import threading
from typing import Any, Iterable, List, Union

from tokenledger.contracts.base import TokenContract
from tokenledger.runtime import metrics
from tokenledger.runtime.errors import RUNTIME_ERRORS, ContractNotFound, LedgerError
from tokenledger.runtime.registry import ContractRegistry
from tokenledger.runtime.sequence import SequenceTracker
from tokenledger.runtime.structured_logging import log_event
from tokenledger.runtime.tx_id import compute_tx_id
from tokenledger.runtime.tx_types import Method, Transaction, TxOutcome

log = logging.getLogger("tokenledger.dispatcher")


def _record(ok: bool, code: str = "") -> None:
    if not metrics.metrics_enabled():
        return
    if ok:
        metrics.inc_counter("tx_processed_total")
        return
    metrics.inc_counter("tx_rejected_total")
    if code:
        metrics.inc_counter(f"tx_rejected_{code}_total")


class Blockchain:
    """Transaction dispatcher.

    Owns the contract registry and the per-sender sequence table. Each
    process_transaction() call runs two phases:

      1. sequence validation: the sequence must be strictly greater than the
         sender's last seen one. Once it passes, the new sequence is recorded,
         even if phase 2 fails.
      2. contract dispatch: the first registered contract whose id matches
         runs the requested method.

    block_height counts successfully processed transactions.
    """

    def __init__(
        self,
        contracts: Union[ContractRegistry, Iterable[TokenContract]],
        *,
        chain_id: str = "tokenledger-dev",
    ) -> None:
        self.chain_id = str(chain_id)
        self._contracts = contracts if isinstance(contracts, ContractRegistry) else ContractRegistry(contracts)
        self._accounts = SequenceTracker()
        self._height = 0
        self._height_lock = threading.Lock()

    @property
    def block_height(self) -> int:
        return self._height

    @property
    def contracts(self) -> ContractRegistry:
        return self._contracts

    @property
    def sequences(self) -> SequenceTracker:
        return self._accounts

    def _bump_height(self) -> int:
        with self._height_lock:
            self._height += 1
            h = self._height
        if metrics.metrics_enabled():
            metrics.set_gauge("block_height", h)
        return h

    def validate_transaction_sequence(self, transaction: Transaction) -> None:
        self._accounts.advance(transaction.sender, transaction.sequence)

    def _dispatch(self, transaction: Transaction) -> int:
        contract = self._contracts.find(transaction.contract)
        if contract is None:
            raise ContractNotFound("no_matching_contract", {"contract": transaction.contract})

        if transaction.method is Method.BALANCE_OF:
            return int(contract.balance_of(transaction.sender))

        contract.transfer(transaction.sender, transaction.amount, transaction.destination)
        # Transfer has no meaningful numeric result.
        return 0

    def process_transaction(self, transaction: Transaction) -> int:
        """Validate and execute one transaction.

        Returns the balance for BALANCE_OF and 0 for TRANSFER. Raises
        BadTransactionSequence, ContractNotFound or NotEnoughBalance.
        """
        tx_id = compute_tx_id(self.chain_id, transaction)

        # Signatures are verified upstream; `sender` is trusted here.
        try:
            self.validate_transaction_sequence(transaction)
            value = self._dispatch(transaction)
        except LedgerError as e:
            _record(False, e.code)
            log_event(
                log,
                "tx_rejected",
                tx_id=tx_id,
                sender=transaction.sender,
                sequence=transaction.sequence,
                contract=transaction.contract,
                method=transaction.method.value,
                code=e.code,
                reason=e.reason,
            )
            raise

        height = self._bump_height()
        _record(True)
        log_event(
            log,
            "tx_processed",
            tx_id=tx_id,
            sender=transaction.sender,
            sequence=transaction.sequence,
            contract=transaction.contract,
            method=transaction.method.value,
            height=height,
        )
        return value

    def try_process(self, transaction: Transaction) -> TxOutcome:
        try:
            return TxOutcome.success(self.process_transaction(transaction))
        except RUNTIME_ERRORS as e:
            return TxOutcome.failure(e)

    def process_many(self, transactions: Iterable[Transaction]) -> List[TxOutcome]:
        return [self.try_process(tx) for tx in transactions]

    def submit(self, obj: Any) -> TxOutcome:
        """Validate a JSON transaction object and process it.

        Schema errors raise TransactionSchemaError; runtime failures come back
        as a failed TxOutcome.
        """
        return self.try_process(Transaction.from_json(obj))


__all__ = ["Blockchain"]
