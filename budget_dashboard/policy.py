"""Role-based policy gate for fee and margin fields.

Users in the privileged tier (PV 9) may set commission, tax and per-line
profit margin freely and see the net profit. Everyone else gets fixed values:
a 100% margin on every line, the session's default commission and the default
tax rate. User input for those fields is silently replaced, not rejected.

The same gate runs when a budget is assembled for submission and when a
stored budget is rendered, so both paths show the same numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .config import DEFAULT_PROFIT_MARGIN, DEFAULT_TAX_RATE, PRIVILEGED_PV
from .models import Budget, BudgetSummary, EmployeeAllocation
from .valuation import (
    BudgetTotals,
    FunctionCatalog,
    budget_totals,
    commission_value,
    net_profit,
    tax_value,
)


@dataclass(frozen=True)
class SessionContext:
    """Fields of the stored session record that affect valuation."""

    pv: int = 0
    commission_rate: float = 0.0
    token: Optional[str] = None

    @property
    def is_privileged(self) -> bool:
        return self.pv == PRIVILEGED_PV

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "SessionContext":
        return cls(
            pv=int(float(record.get('pv') or 0)),
            commission_rate=float(record.get('commission') or 0),
            token=record.get('token') or None,
        )


@dataclass(frozen=True)
class BudgetView:
    """A gated budget with every figure a view displays."""

    budget: Budget
    totals: BudgetTotals
    commission_value: float
    tax_value: float
    net_profit: Optional[float]

    @property
    def total_revenue(self) -> float:
        return self.totals.total_revenue

    @property
    def total_cost(self) -> float:
        return self.totals.total_cost


def can_edit_fees(context: SessionContext) -> bool:
    return context.is_privileged


def can_delete(context: SessionContext) -> bool:
    return context.is_privileged


def can_export_full_pdf(context: SessionContext) -> bool:
    return context.is_privileged


def gate_allocation(
    allocation: EmployeeAllocation, context: SessionContext
) -> EmployeeAllocation:
    """Return the allocation as the given session is allowed to submit it."""
    if context.is_privileged:
        return allocation
    return allocation.with_margin(DEFAULT_PROFIT_MARGIN)


def gate_budget(budget: Budget, context: SessionContext) -> Budget:
    """Return the budget with fee and margin overrides for non-privileged users.

    Args:
        budget: Budget as entered by the user or as fetched from the API
        context: Session of the user submitting or viewing the budget

    Returns:
        The same budget for privileged users; otherwise a copy whose lines all
        carry the default margin and whose commission and tax are the
        session's default commission and the default tax rate.
    """
    if context.is_privileged:
        return budget
    items = tuple(gate_allocation(item, context) for item in budget.line_items)
    return replace(
        budget.with_fees(context.commission_rate, DEFAULT_TAX_RATE),
        line_items=items,
    )


def gate_summary(summary: BudgetSummary, context: SessionContext) -> BudgetSummary:
    """Return a list row with the figures the session may see.

    List rows carry no line items, but gating every margin to the default
    makes revenue a fixed multiple of the stored cost, which does not depend
    on margin. The result matches :func:`valuate` on the full budget.
    """
    if context.is_privileged:
        return summary
    return replace(
        summary,
        total=summary.cost * (1 + DEFAULT_PROFIT_MARGIN),
        commission_rate=context.commission_rate,
        tax_rate=DEFAULT_TAX_RATE,
    )


def valuate(
    budget: Budget, functions: FunctionCatalog, context: SessionContext
) -> BudgetView:
    """Gate a budget and derive every displayed figure from its lines."""
    gated = gate_budget(budget, context)
    totals = budget_totals(gated.line_items, functions)
    profit = None
    if context.is_privileged:
        profit = net_profit(
            totals.total_revenue, totals.total_cost, gated.commission_rate, gated.tax_rate
        )
    return BudgetView(
        budget=gated,
        totals=totals,
        commission_value=commission_value(totals.total_revenue, gated.commission_rate),
        tax_value=tax_value(totals.total_revenue, gated.tax_rate),
        net_profit=profit,
    )
