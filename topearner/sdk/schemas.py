"""Pydantic schemas for the task payload.

Wire names (transactionID, timeStamp) are kept as aliases so records can
be validated straight from the fetched JSON. Unknown fields are ignored:
the payload belongs to the remote service and may grow.
"""

from datetime import datetime
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .dates import local_year, parse_timestamp
from .errors import InvalidPayloadError, InvalidRecordError

EmployeeId = Union[str, int]


class Employee(BaseModel):
    """Employee reference carried by each transaction. Only id is used."""

    model_config = ConfigDict(extra="allow", frozen=True)

    id: EmployeeId = Field(..., description="Opaque employee identifier")


class Transaction(BaseModel):
    """A single employee transaction."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    transaction_id: str = Field(..., alias="transactionID")
    timestamp: datetime = Field(..., alias="timeStamp")
    amount: float = Field(..., description="Any real number; not clamped")
    employee: Employee
    type: str = Field(..., description="Category label, e.g. 'alpha'")

    @field_validator("timestamp", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime:
        return parse_timestamp(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _reject_bool_amount(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError(f"Not an amount: {value!r}")
        return value

    @property
    def employee_id(self) -> EmployeeId:
        return self.employee.id

    @property
    def year(self) -> int:
        """Calendar year of the timestamp in the local timezone."""
        return local_year(self.timestamp)


class Task(BaseModel):
    """A fetched dataset: its id and the transactions to evaluate."""

    model_config = ConfigDict(frozen=True)

    id: str
    transactions: List[Transaction]


def _format_errors(exc: ValidationError) -> List[str]:
    problems = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        problems.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return problems


def parse_transaction(raw: Any, index: int = 0) -> Transaction:
    """Validate one raw transaction record.

    Raises:
        InvalidRecordError: If a required field is missing or unusable.
    """
    if not isinstance(raw, dict):
        raise InvalidRecordError(index, [f"expected an object, got {type(raw).__name__}"])

    try:
        return Transaction.model_validate(raw)
    except ValidationError as e:
        tx_id = raw.get("transactionID")
        raise InvalidRecordError(
            index, _format_errors(e), str(tx_id) if tx_id is not None else None
        ) from e


def parse_task(payload: Any) -> Task:
    """Validate a fetched payload of the form {"id": ..., "transactions": [...]}.

    Records are checked in order and the first bad one stops parsing.

    Raises:
        InvalidPayloadError: If the envelope is malformed.
        InvalidRecordError: If any transaction is malformed.
    """
    if not isinstance(payload, dict):
        raise InvalidPayloadError(f"Task payload must be an object, got {type(payload).__name__}")

    missing = [key for key in ("id", "transactions") if key not in payload]
    if missing:
        raise InvalidPayloadError(f"Task payload missing: {', '.join(missing)}")

    dataset_id = payload["id"]
    if not isinstance(dataset_id, (str, int)) or isinstance(dataset_id, bool):
        raise InvalidPayloadError(f"Task id must be a string, got {dataset_id!r}")

    raw_transactions = payload["transactions"]
    if not isinstance(raw_transactions, list):
        raise InvalidPayloadError(
            f"Task transactions must be a list, got {type(raw_transactions).__name__}"
        )

    transactions = [parse_transaction(raw, i) for i, raw in enumerate(raw_transactions)]
    return Task(id=str(dataset_id), transactions=transactions)
