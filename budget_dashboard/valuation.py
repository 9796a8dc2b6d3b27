"""Budget valuation calculations.

This module converts employee allocations into cost and revenue figures and
derives the aggregate numbers shown for a budget (totals, commission, tax and
net profit). Every function here is pure: the same inputs always produce the
same outputs, so the creation form, the list and the detail view can all call
them and display identical numbers.

Inputs are assumed to be well-typed numbers. Coercing free-text input is the
job of :mod:`budget_dashboard.validation`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Sequence, Union

import pandas as pd

from .config import DAYS_PER_MONTH, HOURS_PER_MONTH, WEEKS_PER_MONTH
from .models import AmountUnit, EmployeeAllocation, EmployeeFunction

FunctionCatalog = Union[Mapping[int, EmployeeFunction], Sequence[EmployeeFunction]]

# Divisor turning a monthly cost into the cost of one unit.
UNITS_PER_MONTH: Dict[AmountUnit, int] = {
    AmountUnit.HOUR: HOURS_PER_MONTH,
    AmountUnit.DAY: DAYS_PER_MONTH,
    AmountUnit.WEEK: WEEKS_PER_MONTH,
    AmountUnit.MONTH: 1,
}

LINE_COLUMNS = [
    'Cargo',
    'Custo Base',
    'Quantidade',
    'Tipo',
    'Dedicação',
    'Margem',
    'Custo',
    'Valor Total',
]


@dataclass(frozen=True)
class BudgetTotals:
    total_cost: float = 0.0
    total_revenue: float = 0.0


def normalize_cost(monthly_cost: float, amount_unit: AmountUnit) -> float:
    """Convert a monthly cost into the cost of one ``amount_unit``.

    A month counts as 160 working hours, 30 days or 4 weeks.

    Example:
        >>> normalize_cost(1600, AmountUnit.HOUR)
        10.0
        >>> normalize_cost(1600, AmountUnit.WEEK)
        400.0
    """
    return monthly_cost / UNITS_PER_MONTH[AmountUnit(amount_unit)]


def line_cost(allocation: EmployeeAllocation, function: EmployeeFunction) -> float:
    """Cost of one line item: unit cost times amount times dedication."""
    unit_cost = normalize_cost(function.monthly_cost, allocation.amount_unit)
    return unit_cost * allocation.amount * allocation.dedication


def line_revenue(allocation: EmployeeAllocation, function: EmployeeFunction) -> float:
    """Revenue of one line item, i.e. its cost with the profit margin applied."""
    return line_cost(allocation, function) * (1 + allocation.profit_margin)


def _as_catalog(functions: FunctionCatalog) -> Mapping[int, EmployeeFunction]:
    if isinstance(functions, Mapping):
        return functions
    return {function.id: function for function in functions}


def _function_for(
    allocation: EmployeeAllocation, catalog: Mapping[int, EmployeeFunction]
) -> EmployeeFunction:
    try:
        return catalog[allocation.employee_function_id]
    except KeyError:
        raise KeyError(
            f"Unknown employee function {allocation.employee_function_id}"
        ) from None


def budget_totals(
    line_items: Iterable[EmployeeAllocation],
    functions: FunctionCatalog,
) -> BudgetTotals:
    """Sum cost and revenue over all line items.

    Args:
        line_items: Allocations of the budget, in any order
        functions: Role catalog keyed by id (a plain sequence is indexed first)

    Returns:
        BudgetTotals with both sums; zeros for an empty sequence

    Raises:
        KeyError: If a line references a function missing from the catalog
    """
    catalog = _as_catalog(functions)
    total_cost = 0.0
    total_revenue = 0.0
    for allocation in line_items:
        function = _function_for(allocation, catalog)
        total_cost += line_cost(allocation, function)
        total_revenue += line_revenue(allocation, function)
    return BudgetTotals(total_cost=total_cost, total_revenue=total_revenue)


def commission_value(total_revenue: float, commission_rate: float) -> float:
    return total_revenue * commission_rate


def tax_value(total_revenue: float, tax_rate: float) -> float:
    return total_revenue * tax_rate


def net_profit(
    total_revenue: float,
    total_cost: float,
    commission_rate: float,
    tax_rate: float,
) -> float:
    """Revenue minus cost, commission and tax. Negative values are losses."""
    return (
        total_revenue
        - total_cost
        - commission_value(total_revenue, commission_rate)
        - tax_value(total_revenue, tax_rate)
    )


def line_items_frame(
    line_items: Sequence[EmployeeAllocation],
    functions: FunctionCatalog,
) -> pd.DataFrame:
    """Build the per-line table shown in views and exports.

    Dedication and margin stay fractions; formatting is left to the caller.
    """
    catalog = _as_catalog(functions)
    rows = []
    for allocation in line_items:
        function = _function_for(allocation, catalog)
        rows.append({
            'Cargo': function.name,
            'Custo Base': function.monthly_cost,
            'Quantidade': allocation.amount,
            'Tipo': AmountUnit(allocation.amount_unit),
            'Dedicação': allocation.dedication,
            'Margem': allocation.profit_margin,
            'Custo': line_cost(allocation, function),
            'Valor Total': line_revenue(allocation, function),
        })
    return pd.DataFrame(rows, columns=LINE_COLUMNS)
