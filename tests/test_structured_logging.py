from __future__ import annotations

import json
import logging

import pytest

from tokenledger import Method, Transaction
from tokenledger.runtime.errors import NotEnoughBalance
from tokenledger.runtime.structured_logging import log_event
from tokenledger.runtime.tx_id import compute_tx_id


def _events(caplog) -> list[dict]:
    return [json.loads(r.getMessage()) for r in caplog.records if r.name.startswith("tokenledger")]


def test_log_event_emits_sorted_jsonl(caplog) -> None:
    logger = logging.getLogger("tokenledger.test")
    with caplog.at_level(logging.INFO, logger="tokenledger"):
        log_event(logger, "hello", b=2, a=1)
    (ev,) = _events(caplog)
    assert ev["event"] == "hello"
    assert (ev["a"], ev["b"]) == (1, 2)
    assert isinstance(ev["ts_ms"], int)


def test_dispatcher_logs_processed_and_rejected(chain, caplog) -> None:
    ok_tx = Transaction.new("addr1", 10, "USDC", Method.TRANSFER).with_seq(1).with_destination("addr2")
    bad_tx = Transaction.new("addr1", 10_000, "USDC", Method.TRANSFER).with_seq(2).with_destination("addr2")

    with caplog.at_level(logging.INFO, logger="tokenledger"):
        chain.process_transaction(ok_tx)
        with pytest.raises(NotEnoughBalance):
            chain.process_transaction(bad_tx)

    by_event = {}
    for ev in _events(caplog):
        by_event.setdefault(ev["event"], []).append(ev)

    assert by_event["tx_processed"][0]["tx_id"] == compute_tx_id(chain.chain_id, ok_tx)
    assert by_event["tx_processed"][0]["height"] == 1
    assert by_event["token_transfer"][0]["amount"] == 10
    rej = by_event["tx_rejected"][0]
    assert rej["code"] == "not_enough_balance"
    assert rej["tx_id"] == compute_tx_id(chain.chain_id, bad_tx)


def test_tx_id_is_chain_scoped_and_deterministic() -> None:
    tx = Transaction.new("addr1", 1, "USDC", Method.TRANSFER).with_seq(1).with_destination("addr2")
    assert compute_tx_id("a", tx) == compute_tx_id("a", tx)
    assert compute_tx_id("a", tx) != compute_tx_id("b", tx)
    assert compute_tx_id("a", tx) != compute_tx_id("a", tx.with_seq(2))
    assert len(compute_tx_id("a", tx)) == 64
