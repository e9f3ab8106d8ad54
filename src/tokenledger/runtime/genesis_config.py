# src/tokenledger/runtime/genesis_config.py
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from tokenledger.contracts.basic_token import BasicToken
from tokenledger.runtime.dispatcher import Blockchain
from tokenledger.runtime.errors import ConfigError
from tokenledger.runtime.tx_types import U64_MAX

Json = Dict[str, Any]


@dataclass(frozen=True, slots=True)
class GenesisToken:
    contract: str
    airdrop: Tuple[str, ...]
    initial_balance: int


@dataclass(frozen=True, slots=True)
class GenesisConfig:
    chain_id: str
    tokens: Tuple[GenesisToken, ...]


def default_genesis() -> GenesisConfig:
    return GenesisConfig(
        chain_id="tokenledger-dev",
        tokens=(
            GenesisToken(contract="USDC", airdrop=("addr1", "addr2"), initial_balance=1000),
            GenesisToken(contract="WBTC", airdrop=("addr3", "addr4"), initial_balance=1000),
        ),
    )


def _parse_token(i: int, rec: Any) -> GenesisToken:
    if not isinstance(rec, dict):
        raise ConfigError("token_must_be_object", {"index": i})

    contract = str(rec.get("contract") or "").strip()
    if not contract:
        raise ConfigError("token_missing_contract", {"index": i})

    airdrop = rec.get("airdrop", [])
    if not isinstance(airdrop, list):
        raise ConfigError("airdrop_must_be_list", {"index": i, "contract": contract})

    bal = rec.get("initial_balance", 0)
    if isinstance(bal, bool) or not isinstance(bal, int) or bal < 0 or bal > U64_MAX:
        raise ConfigError("initial_balance_out_of_range", {"index": i, "contract": contract, "value": bal})

    return GenesisToken(
        contract=contract,
        airdrop=tuple(str(a).strip() for a in airdrop if str(a).strip()),
        initial_balance=int(bal),
    )


def parse_genesis(obj: Any) -> GenesisConfig:
    """Build a GenesisConfig from a decoded JSON/YAML object.

    Shape:
      { "chain_id": "...",
        "tokens": [ { "contract": "USDC", "airdrop": ["addr1", ...], "initial_balance": 1000 }, ... ] }
    """
    if not isinstance(obj, dict):
        raise ConfigError("genesis_must_be_object", {"type": type(obj).__name__})

    chain_id = str(obj.get("chain_id") or "").strip() or default_genesis().chain_id

    raw = obj.get("tokens")
    if not isinstance(raw, list):
        raise ConfigError("tokens_must_be_list")

    tokens: List[GenesisToken] = [_parse_token(i, rec) for i, rec in enumerate(raw)]
    return GenesisConfig(chain_id=chain_id, tokens=tuple(tokens))


def load_genesis(path: str) -> GenesisConfig:
    """Load GenesisConfig from a .json, .yaml or .yml file."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(p))

    text = p.read_text(encoding="utf-8")
    try:
        if p.suffix.lower() in {".yaml", ".yml"}:
            obj = yaml.safe_load(text)
        else:
            obj = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError("genesis_unparseable", {"path": str(p), "error": str(e)}) from e

    return parse_genesis(obj)


def build_contracts(cfg: GenesisConfig) -> List[BasicToken]:
    return [BasicToken(t.contract, list(t.airdrop), t.initial_balance) for t in cfg.tokens]


def build_blockchain(cfg: GenesisConfig, *, chain_id: Optional[str] = None) -> Blockchain:
    # Duplicate contract ids surface here as DuplicateContractId.
    return Blockchain(build_contracts(cfg), chain_id=chain_id or cfg.chain_id)


__all__ = [
    "GenesisToken",
    "GenesisConfig",
    "default_genesis",
    "parse_genesis",
    "load_genesis",
    "build_contracts",
    "build_blockchain",
]
