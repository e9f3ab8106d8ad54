# src/tokenledger/runtime/tx_id.py
from __future__ import annotations

import hashlib
import json
from typing import Any

from tokenledger.runtime.tx_types import Transaction


def _json_canonical(obj: Any) -> bytes:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def compute_tx_id(chain_id: str, tx: Transaction) -> str:
    """
    Deterministic tx id.

    Includes chain_id so identical transactions on different chains never
    collide.
    """
    obj = {"chain_id": str(chain_id), **tx.to_json()}
    return hashlib.sha256(_json_canonical(obj)).hexdigest()


__all__ = ["compute_tx_id"]
