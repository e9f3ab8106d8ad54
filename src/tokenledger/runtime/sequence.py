from __future__ import annotations

import threading
from typing import Dict

from tokenledger.runtime.errors import BadTransactionSequence
from tokenledger.runtime.tx_types import Address


class SequenceTracker:
    """Highest validated sequence number per sender.

    0 is the implicit "never transacted" baseline, so a sender's first valid
    sequence is >= 1. Check-and-advance for one sender is a single critical
    section; different senders only contend on lock creation.
    """

    def __init__(self) -> None:
        self._seqs: Dict[Address, int] = {}
        self._locks: Dict[Address, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, sender: Address) -> threading.Lock:
        with self._locks_guard:
            lk = self._locks.get(sender)
            if lk is None:
                lk = threading.Lock()
                self._locks[sender] = lk
            return lk

    def current(self, sender: Address) -> int:
        return int(self._seqs.get(sender, 0))

    def advance(self, sender: Address, sequence: int) -> None:
        """Record `sequence` for `sender` or raise BadTransactionSequence.

        The table is left untouched on failure.
        """
        with self._lock_for(sender):
            cur = int(self._seqs.get(sender, 0))
            if int(sequence) <= cur:
                raise BadTransactionSequence(
                    "sequence_not_increasing",
                    {"sender": sender, "sequence": int(sequence), "last_seen": cur},
                )
            self._seqs[sender] = int(sequence)

    def snapshot(self) -> Dict[Address, int]:
        return dict(self._seqs)

    def __len__(self) -> int:
        return len(self._seqs)


__all__ = ["SequenceTracker"]
