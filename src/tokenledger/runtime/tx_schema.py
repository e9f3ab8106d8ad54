from __future__ import annotations

"""Transaction shape validation.

Upstream layers (signing, transport) hand the core plain JSON objects. This
module turns them into `Transaction` values, rejecting malformed shapes before
anything reaches the dispatcher. Semantic checks (sequence, balance, contract
lookup) stay in the dispatcher and contracts.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from tokenledger.runtime.errors import TransactionSchemaError
from tokenledger.runtime.tx_types import U64_MAX, Address, ContractId, Method, Transaction

Json = Dict[str, Any]


class TransactionModel(BaseModel):
    """Strict model: reject unknown keys."""

    model_config = ConfigDict(extra="forbid")

    sender: str = Field(..., min_length=1)
    sequence: int = Field(default=0, ge=0, le=U64_MAX)
    amount: int = Field(default=0, ge=0, le=U64_MAX)
    contract: str = Field(..., min_length=1)
    method: Method
    destination: str = ""

    @field_validator("method", mode="before")
    @classmethod
    def _parse_method(cls, v: Any) -> Method:
        return Method.parse(v)

    @model_validator(mode="after")
    def _transfer_needs_destination(self) -> "TransactionModel":
        if self.method is Method.TRANSFER and not self.destination.strip():
            raise ValueError("transfer requires a destination")
        return self


def _errors(e: ValidationError) -> List[Json]:
    out: List[Json] = []
    for err in e.errors():
        out.append({"loc": ".".join(str(p) for p in err.get("loc", ())), "msg": str(err.get("msg", ""))})
    return out


def validate_transaction(obj: Any) -> Transaction:
    if not isinstance(obj, dict):
        raise TransactionSchemaError("tx_must_be_object", {"type": type(obj).__name__})
    try:
        m = TransactionModel.model_validate(obj)
    except ValidationError as e:
        raise TransactionSchemaError("schema_validation_failed", {"errors": _errors(e)}) from e

    return Transaction(
        sender=Address(m.sender),
        sequence=m.sequence,
        amount=m.amount,
        contract=ContractId(m.contract),
        method=m.method,
        destination=Address(m.destination),
    )


__all__ = ["TransactionModel", "validate_transaction"]
