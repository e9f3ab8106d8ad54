# src/tokenledger/runtime/__init__.py
"""
Transaction processing runtime.

  - tx_types / tx_schema: Transaction, Method and JSON shape validation
  - errors: LedgerError and the runtime failure taxonomy
  - sequence: per-sender replay protection
  - registry: ordered contract lookup by id
  - dispatcher: Blockchain, the validate -> dispatch pipeline
  - genesis_config / chain_config: startup configuration
"""
