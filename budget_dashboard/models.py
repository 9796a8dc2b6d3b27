"""Domain records for budgets and the role catalog.

Field names follow Python conventions; ``from_record``/``to_payload`` map them
to and from the JSON field names used by the remote API.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .config import DEFAULT_DEDICATION, DEFAULT_PROFIT_MARGIN, DEFAULT_TAX_RATE


class AmountUnit(IntEnum):
    """Time unit of an allocation. The integer values are the storage codes."""

    HOUR = 0
    DAY = 1
    WEEK = 2
    MONTH = 3


def _to_float(value: Any, default: float = 0.0) -> float:
    # The API serializes numeric columns as strings in some responses
    if value is None or value == "":
        return default
    return float(value)


@dataclass(frozen=True)
class EmployeeFunction:
    id: int
    name: str
    monthly_cost: float

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "EmployeeFunction":
        return cls(
            id=int(record["id"]),
            name=str(record.get("name", "")),
            monthly_cost=_to_float(record.get("cost")),
        )


@dataclass(frozen=True)
class EmployeeAllocation:
    employee_function_id: int
    amount: float
    amount_unit: AmountUnit = AmountUnit.MONTH
    dedication: float = DEFAULT_DEDICATION
    profit_margin: float = DEFAULT_PROFIT_MARGIN

    def with_margin(self, profit_margin: float) -> "EmployeeAllocation":
        return replace(self, profit_margin=profit_margin)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "EmployeeAllocation":
        return cls(
            employee_function_id=int(record.get("employee_id") or 0),
            amount=_to_float(record.get("amount")),
            amount_unit=AmountUnit(int(_to_float(record.get("amount_type"), AmountUnit.MONTH))),
            dedication=_to_float(record.get("dedication"), DEFAULT_DEDICATION),
            profit_margin=_to_float(record.get("profit_margin"), DEFAULT_PROFIT_MARGIN),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "employee_id": self.employee_function_id,
            "amount": self.amount,
            "amount_type": int(self.amount_unit),
            "dedication": self.dedication,
            "profit_margin": self.profit_margin,
        }


@dataclass(frozen=True)
class Budget:
    """A budget and its ordered line items.

    Revenue and cost totals are not attributes: they are derived from
    ``line_items`` with :func:`budget_dashboard.valuation.budget_totals`
    whenever they are needed.
    """

    pipedrive_code: int
    customer_name: str
    commission_rate: float = 0.0
    tax_rate: float = DEFAULT_TAX_RATE
    line_items: Tuple[EmployeeAllocation, ...] = field(default_factory=tuple)
    id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return not self.line_items

    def add_line(self, allocation: EmployeeAllocation) -> "Budget":
        return replace(self, line_items=self.line_items + (allocation,))

    def remove_line(self, index: int) -> "Budget":
        if not 0 <= index < len(self.line_items):
            raise IndexError(f"No line item at position {index}")
        items = self.line_items[:index] + self.line_items[index + 1:]
        return replace(self, line_items=items)

    def with_fees(self, commission_rate: float, tax_rate: float) -> "Budget":
        return replace(self, commission_rate=commission_rate, tax_rate=tax_rate)

    def to_payload(self, functions: Mapping[int, EmployeeFunction]) -> Dict[str, Any]:
        """Build the create-endpoint body, including the derived totals."""
        from .valuation import budget_totals

        totals = budget_totals(self.line_items, functions)
        return {
            "pipedrive_code": self.pipedrive_code,
            "customer_name": self.customer_name,
            "total": totals.total_revenue,
            "commission": self.commission_rate,
            "tax": self.tax_rate,
            "cost": totals.total_cost,
            "budget_employee": [item.to_payload() for item in self.line_items],
        }

    @classmethod
    def from_record(
        cls, record: Mapping[str, Any]
    ) -> Tuple["Budget", Dict[int, EmployeeFunction]]:
        """Parse a detail record and the role catalog joined into its lines."""
        items: List[EmployeeAllocation] = []
        functions: Dict[int, EmployeeFunction] = {}
        for entry in record.get("budget_employee") or []:
            allocation = EmployeeAllocation.from_record(entry)
            items.append(allocation)
            joined = entry.get("employee_function")
            if isinstance(joined, Mapping):
                functions[allocation.employee_function_id] = EmployeeFunction(
                    id=allocation.employee_function_id,
                    name=str(joined.get("name", "")),
                    monthly_cost=_to_float(joined.get("cost")),
                )
        budget = cls(
            id=int(record["id"]) if record.get("id") is not None else None,
            pipedrive_code=int(_to_float(record.get("pipedrive_code"))),
            customer_name=str(record.get("customer_name", "")),
            commission_rate=_to_float(record.get("commission")),
            tax_rate=_to_float(record.get("tax"), DEFAULT_TAX_RATE),
            line_items=tuple(items),
        )
        return budget, functions


@dataclass(frozen=True)
class BudgetSummary:
    """A row of the budget list endpoint. Totals are the stored values."""

    id: int
    pipedrive_code: int
    customer_name: str
    total: float
    commission_rate: float
    tax_rate: float
    cost: float

    @property
    def commission_value(self) -> float:
        return self.total * self.commission_rate

    @property
    def gross_margin(self) -> float:
        return self.total - self.cost

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "BudgetSummary":
        return cls(
            id=int(record["id"]),
            pipedrive_code=int(_to_float(record.get("pipedrive_code"))),
            customer_name=str(record.get("customer_name", "")),
            total=_to_float(record.get("total")),
            commission_rate=_to_float(record.get("commission")),
            tax_rate=_to_float(record.get("tax"), DEFAULT_TAX_RATE),
            cost=_to_float(record.get("cost")),
        )


def index_functions(functions: Iterable[EmployeeFunction]) -> Dict[int, EmployeeFunction]:
    """Key a role catalog by function id."""
    return {function.id: function for function in functions}
