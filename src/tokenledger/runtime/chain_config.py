# src/tokenledger/runtime/chain_config.py
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

from tokenledger.runtime.errors import ConfigError

Json = Dict[str, Any]


def _as_str(v: Any, default: str) -> str:
    if v is None:
        return str(default)
    s = str(v)
    return s if s.strip() else str(default)


def _as_bool(v: Any, default: bool) -> bool:
    if v is None:
        return bool(default)
    if isinstance(v, bool):
        return v
    s = str(v).strip().lower()
    if s in {"1", "true", "yes", "y", "on"}:
        return True
    if s in {"0", "false", "no", "n", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class ChainConfig:
    chain_id: str

    # Optional genesis file (.json/.yaml). Empty means the built-in demo genesis.
    genesis_path: str

    log_level: str
    metrics_enabled: bool


def validate_chain_config(cfg: ChainConfig) -> None:
    """Fail-fast validation for operator config."""

    if not isinstance(cfg.chain_id, str) or not cfg.chain_id.strip():
        raise ConfigError("chain_id_required")

    lvl = str(cfg.log_level or "").strip().upper()
    if not isinstance(logging.getLevelName(lvl), int):
        raise ConfigError("unknown_log_level", {"log_level": cfg.log_level})

    if cfg.genesis_path and not Path(cfg.genesis_path).is_file():
        raise ConfigError("genesis_path_missing", {"genesis_path": cfg.genesis_path})


def default_chain_config() -> ChainConfig:
    return ChainConfig(
        chain_id="tokenledger-dev",
        genesis_path="",
        log_level="INFO",
        metrics_enabled=False,
    )


def _apply_env_overrides(cfg: ChainConfig) -> ChainConfig:
    env = os.environ
    return replace(
        cfg,
        chain_id=_as_str(env.get("TOKENLEDGER_CHAIN_ID"), cfg.chain_id),
        genesis_path=_as_str(env.get("TOKENLEDGER_GENESIS_PATH"), cfg.genesis_path),
        log_level=_as_str(env.get("TOKENLEDGER_LOG_LEVEL"), cfg.log_level),
        metrics_enabled=_as_bool(env.get("TOKENLEDGER_METRICS_ENABLED"), cfg.metrics_enabled),
    )


def read_chain_config_file(path: str) -> ChainConfig:
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError("chain_config_unparseable", {"path": str(p), "error": str(e)}) from e
    if not isinstance(raw, dict):
        raise ConfigError("chain_config_must_be_object", {"path": str(p)})

    d = default_chain_config()
    return ChainConfig(
        chain_id=_as_str(raw.get("chain_id"), d.chain_id),
        genesis_path=_as_str(raw.get("genesis_path"), d.genesis_path),
        log_level=_as_str(raw.get("log_level"), d.log_level),
        metrics_enabled=_as_bool(raw.get("metrics_enabled"), d.metrics_enabled),
    )


def load_chain_config(*, config_path: Optional[str] = None) -> ChainConfig:
    """Defaults <- config file <- TOKENLEDGER_* env vars, then validate."""
    p = config_path or os.environ.get("TOKENLEDGER_CHAIN_CONFIG_PATH")
    cfg = read_chain_config_file(p) if p else default_chain_config()
    cfg = _apply_env_overrides(cfg)
    validate_chain_config(cfg)
    return cfg


def apply_chain_config_to_env(cfg: ChainConfig) -> None:
    validate_chain_config(cfg)
    os.environ["TOKENLEDGER_CHAIN_ID"] = cfg.chain_id
    os.environ["TOKENLEDGER_LOG_LEVEL"] = cfg.log_level
    os.environ["TOKENLEDGER_METRICS_ENABLED"] = "1" if cfg.metrics_enabled else "0"
    if cfg.genesis_path:
        os.environ["TOKENLEDGER_GENESIS_PATH"] = cfg.genesis_path
