# src/tokenledger/__main__.py
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import TYPE_CHECKING, Optional

from tokenledger.env import load_dotenv_if_present
from tokenledger.runtime.errors import BadTransactionSequence, LedgerError
from tokenledger.runtime.structured_logging import configure_logging, log_event
from tokenledger.runtime.tx_types import Method, Transaction

if TYPE_CHECKING:
    from tokenledger.runtime.dispatcher import Blockchain

log = logging.getLogger("tokenledger.demo")


def run_demo(chain: Blockchain) -> int:
    """Run the USDC airdrop walkthrough against `chain`.

    Needs a USDC contract with addr1/addr2 holding 1000 each.
    """
    addr1_bal = chain.process_transaction(Transaction.new("addr1", 0, "USDC", Method.BALANCE_OF).with_seq(1))
    addr2_bal = chain.process_transaction(Transaction.new("addr2", 0, "USDC", Method.BALANCE_OF).with_seq(1))
    if (addr1_bal, addr2_bal) != (1000, 1000):
        log_event(log, "demo_failed", step="initial_balances", addr1=addr1_bal, addr2=addr2_bal)
        return 1

    # Repeating a sequence number is a replay.
    try:
        chain.process_transaction(Transaction.new("addr1", 0, "USDC", Method.BALANCE_OF).with_seq(1))
        log_event(log, "demo_failed", step="replay_accepted")
        return 1
    except BadTransactionSequence:
        pass

    chain.process_transaction(
        Transaction.new("addr1", 100, "USDC", Method.TRANSFER).with_seq(2).with_destination("addr2")
    )

    addr1_bal = chain.process_transaction(Transaction.new("addr1", 0, "USDC", Method.BALANCE_OF).with_seq(3))
    addr2_bal = chain.process_transaction(Transaction.new("addr2", 0, "USDC", Method.BALANCE_OF).with_seq(3))
    if (addr1_bal, addr2_bal) != (900, 1100):
        log_event(log, "demo_failed", step="post_transfer_balances", addr1=addr1_bal, addr2=addr2_bal)
        return 1

    log_event(log, "demo_ok", height=chain.block_height)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    # Load .env early so TOKENLEDGER_* vars exist before config is read.
    load_dotenv_if_present()

    p = argparse.ArgumentParser(description="tokenledger demo chain (USDC/WBTC airdrop scenario)")
    p.add_argument("--config", default=os.environ.get("TOKENLEDGER_CHAIN_CONFIG_PATH", ""))
    p.add_argument("--genesis", default="")
    args = p.parse_args(argv)

    # Imported after dotenv load.
    from tokenledger.runtime.chain_config import apply_chain_config_to_env, load_chain_config
    from tokenledger.runtime.genesis_config import build_blockchain, default_genesis, load_genesis

    try:
        cfg = load_chain_config(config_path=args.config or None)
        apply_chain_config_to_env(cfg)
        configure_logging(cfg.log_level)

        genesis_path = args.genesis or cfg.genesis_path
        genesis = load_genesis(genesis_path) if genesis_path else default_genesis()
        chain = build_blockchain(genesis, chain_id=cfg.chain_id)
        return run_demo(chain)
    except (LedgerError, FileNotFoundError) as e:
        print(f"[tokenledger] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
