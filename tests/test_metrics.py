from __future__ import annotations

import pytest

from tokenledger import Method, Transaction
from tokenledger.runtime import metrics
from tokenledger.runtime.errors import ContractNotFound


@pytest.fixture(autouse=True)
def _fresh_metrics():
    metrics.reset()
    yield
    metrics.reset()


def test_disabled_by_default_records_nothing(chain, monkeypatch) -> None:
    monkeypatch.delenv("TOKENLEDGER_METRICS_ENABLED", raising=False)
    chain.process_transaction(Transaction.new("addr1", 0, "USDC", Method.BALANCE_OF).with_seq(1))
    assert metrics.snapshot()["counters"] == {}


def test_dispatcher_counts_outcomes_and_height(chain, monkeypatch) -> None:
    monkeypatch.setenv("TOKENLEDGER_METRICS_ENABLED", "1")

    chain.process_transaction(Transaction.new("addr1", 0, "USDC", Method.BALANCE_OF).with_seq(1))
    with pytest.raises(ContractNotFound):
        chain.process_transaction(Transaction.new("addr1", 0, "DAI", Method.BALANCE_OF).with_seq(2))

    snap = metrics.snapshot()
    assert snap["counters"] == {
        "tx_processed_total": 1,
        "tx_rejected_total": 1,
        "tx_rejected_contract_not_found_total": 1,
    }
    assert snap["gauges"] == {"block_height": 1}

