"""Category filter for the winning employee's transactions."""

from typing import Iterable, Optional

from .config import DEFAULT_CATEGORY
from .dates import target_year as compute_target_year
from .schemas import EmployeeId, Transaction


def filter_category(
    dataset_id: str,
    transactions: Iterable[Transaction],
    target_employee_id: Optional[EmployeeId],
    category: str = DEFAULT_CATEGORY,
    target_year: Optional[int] = None,
) -> dict:
    """Collect the target employee's target-year transactions of one category.

    Args:
        dataset_id: Id of the fetched dataset, echoed back in the result.
        transactions: Parsed transactions, in dataset order.
        target_employee_id: Winner from aggregate(), or None if there was none.
        category: Transaction type to keep.
        target_year: Year to keep. Defaults to last calendar year.

    Returns:
        Submission payload {"id": dataset_id, "result": [transaction ids]}
        with ids in dataset order. result is empty when there is no winner.
    """
    if target_employee_id is None:
        return {"id": dataset_id, "result": []}

    if target_year is None:
        target_year = compute_target_year()

    result = [
        tx.transaction_id
        for tx in transactions
        if tx.year == target_year
        and tx.employee_id == target_employee_id
        and tx.type == category
    ]
    return {"id": dataset_id, "result": result}
