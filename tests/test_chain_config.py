from __future__ import annotations

import json
from pathlib import Path

import pytest

from tokenledger.runtime.chain_config import (
    ChainConfig,
    default_chain_config,
    load_chain_config,
    validate_chain_config,
)
from tokenledger.runtime.errors import ConfigError

_ENV_VARS = (
    "TOKENLEDGER_CHAIN_CONFIG_PATH",
    "TOKENLEDGER_CHAIN_ID",
    "TOKENLEDGER_GENESIS_PATH",
    "TOKENLEDGER_LOG_LEVEL",
    "TOKENLEDGER_METRICS_ENABLED",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for k in _ENV_VARS:
        monkeypatch.delenv(k, raising=False)


def test_defaults() -> None:
    cfg = load_chain_config()
    assert cfg == default_chain_config()


def test_file_then_env_overrides(tmp_path: Path, monkeypatch) -> None:
    p = tmp_path / "chain.json"
    p.write_text(json.dumps({"chain_id": "from-file", "log_level": "debug", "metrics_enabled": "yes"}), encoding="utf-8")
    cfg = load_chain_config(config_path=str(p))
    assert cfg.chain_id == "from-file"
    assert cfg.log_level == "debug"
    assert cfg.metrics_enabled is True

    monkeypatch.setenv("TOKENLEDGER_CHAIN_CONFIG_PATH", str(p))
    monkeypatch.setenv("TOKENLEDGER_CHAIN_ID", "from-env")
    monkeypatch.setenv("TOKENLEDGER_METRICS_ENABLED", "0")
    cfg2 = load_chain_config()
    assert cfg2.chain_id == "from-env"
    assert cfg2.metrics_enabled is False


def test_non_object_config_rejected(tmp_path: Path) -> None:
    p = tmp_path / "chain.json"
    p.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_chain_config(config_path=str(p))


def test_validation_failures(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        validate_chain_config(ChainConfig(chain_id=" ", genesis_path="", log_level="INFO", metrics_enabled=False))
    with pytest.raises(ConfigError):
        validate_chain_config(ChainConfig(chain_id="c", genesis_path="", log_level="LOUD", metrics_enabled=False))
    with pytest.raises(ConfigError):
        validate_chain_config(
            ChainConfig(chain_id="c", genesis_path=str(tmp_path / "missing.json"), log_level="INFO", metrics_enabled=False)
        )
