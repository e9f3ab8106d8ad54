from __future__ import annotations

import json
from pathlib import Path

import pytest

from tokenledger.runtime.errors import ConfigError, DuplicateContractId
from tokenledger.runtime.genesis_config import (
    build_blockchain,
    default_genesis,
    load_genesis,
    parse_genesis,
)


def test_default_genesis_matches_demo_chain() -> None:
    chain = build_blockchain(default_genesis())
    assert chain.chain_id == "tokenledger-dev"
    assert chain.contracts.ids() == ["USDC", "WBTC"]
    assert chain.contracts.find("USDC").holders() == {"addr1": 1000, "addr2": 1000}
    assert chain.contracts.find("WBTC").holders() == {"addr3": 1000, "addr4": 1000}


def test_load_json_genesis(tmp_path: Path) -> None:
    p = tmp_path / "genesis.json"
    p.write_text(
        json.dumps({"chain_id": "test-chain", "tokens": [{"contract": "DAI", "airdrop": ["x", "y"], "initial_balance": 7}]}),
        encoding="utf-8",
    )
    cfg = load_genesis(str(p))
    assert cfg.chain_id == "test-chain"
    assert cfg.tokens[0].airdrop == ("x", "y")

    chain = build_blockchain(cfg, chain_id="override")
    assert chain.chain_id == "override"
    assert chain.contracts.find("DAI").balance_of("y") == 7


def test_load_yaml_genesis(tmp_path: Path) -> None:
    p = tmp_path / "genesis.yaml"
    p.write_text(
        "chain_id: yaml-chain\n"
        "tokens:\n"
        "  - contract: USDC\n"
        "    airdrop: [addr1]\n"
        "    initial_balance: 50\n",
        encoding="utf-8",
    )
    cfg = load_genesis(str(p))
    assert cfg.chain_id == "yaml-chain"
    assert cfg.tokens[0].initial_balance == 50


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_genesis(str(tmp_path / "nope.json"))


def test_unparseable_file_raises_config_error(tmp_path: Path) -> None:
    p = tmp_path / "genesis.json"
    p.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError) as ei:
        load_genesis(str(p))
    assert ei.value.reason == "genesis_unparseable"


@pytest.mark.parametrize(
    "obj,reason",
    [
        ([], "genesis_must_be_object"),
        ({"tokens": {}}, "tokens_must_be_list"),
        ({"tokens": ["USDC"]}, "token_must_be_object"),
        ({"tokens": [{"airdrop": []}]}, "token_missing_contract"),
        ({"tokens": [{"contract": "A", "airdrop": "addr1"}]}, "airdrop_must_be_list"),
        ({"tokens": [{"contract": "A", "initial_balance": -1}]}, "initial_balance_out_of_range"),
        ({"tokens": [{"contract": "A", "initial_balance": True}]}, "initial_balance_out_of_range"),
    ],
)
def test_invalid_genesis_shapes(obj, reason: str) -> None:
    with pytest.raises(ConfigError) as ei:
        parse_genesis(obj)
    assert ei.value.reason == reason


def test_duplicate_contract_in_genesis_rejected() -> None:
    cfg = parse_genesis({"tokens": [{"contract": "A"}, {"contract": "A"}]})
    with pytest.raises(DuplicateContractId):
        build_blockchain(cfg)
