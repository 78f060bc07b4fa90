"""Top earner aggregation.

SDK layer - pure logic over parsed transactions. No I/O.

Sums each employee's transaction amounts for the target year and picks the
employee with the largest total. Totals are kept in first-seen order, so a
tie goes to the employee whose first target-year transaction comes first.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .dates import target_year as compute_target_year
from .schemas import EmployeeId, Transaction


@dataclass
class EarnerSelection:
    """Result of aggregating a transaction set for one target year."""

    target_year: int
    employee_id: Optional[EmployeeId] = None  # None when no transaction matched
    amount: Optional[float] = None
    totals: Dict[EmployeeId, float] = field(default_factory=dict)

    @property
    def has_winner(self) -> bool:
        return self.employee_id is not None

    def ranking(self) -> List[Tuple[EmployeeId, float]]:
        """All employee totals, largest first (first-seen order on ties)."""
        return sorted(self.totals.items(), key=lambda item: item[1], reverse=True)

    def to_dict(self) -> dict:
        return {
            "target_year": self.target_year,
            "employee_id": self.employee_id,
            "amount": self.amount,
            "totals": [{"employee_id": k, "amount": v} for k, v in self.totals.items()],
        }


def accumulate(transactions: Iterable[Transaction], target_year: int) -> Dict[EmployeeId, float]:
    """Sum amounts per employee over transactions in the target year.

    Args:
        transactions: Parsed transactions, in dataset order.
        target_year: Calendar year to include.

    Returns:
        Insertion-ordered mapping of employee id to total amount.
    """
    totals: Dict[EmployeeId, float] = {}
    for tx in transactions:
        if tx.year != target_year:
            continue
        if tx.employee_id in totals:
            totals[tx.employee_id] += tx.amount
        else:
            totals[tx.employee_id] = tx.amount
    return totals


def select_max(totals: Dict[EmployeeId, float]) -> Tuple[Optional[float], Optional[EmployeeId]]:
    """Single scan for the strictly largest total.

    Returns:
        (amount, employee_id), or (None, None) for an empty mapping.
    """
    max_amount = float("-inf")
    max_employee: Optional[EmployeeId] = None

    for employee_id, amount in totals.items():
        if amount > max_amount:
            max_amount = amount
            max_employee = employee_id

    if max_employee is None:
        return None, None
    return max_amount, max_employee


def aggregate(
    transactions: Iterable[Transaction],
    target_year: Optional[int] = None,
) -> EarnerSelection:
    """Find the employee who earned the most in the target year.

    Args:
        transactions: Parsed transactions.
        target_year: Year to evaluate. Defaults to last calendar year; pass
            the run's value explicitly when other stages must agree on it.

    Returns:
        EarnerSelection. has_winner is False when no transaction falls in
        the target year.
    """
    if target_year is None:
        target_year = compute_target_year()

    totals = accumulate(transactions, target_year)
    amount, employee_id = select_max(totals)

    return EarnerSelection(
        target_year=target_year,
        employee_id=employee_id,
        amount=amount,
        totals=totals,
    )
