"""Tests for the PV-tier policy gate."""

from __future__ import annotations

import pytest

from budget_dashboard.models import AmountUnit, Budget, BudgetSummary, EmployeeAllocation, EmployeeFunction
from budget_dashboard.policy import (
    SessionContext,
    can_delete,
    can_edit_fees,
    can_export_full_pdf,
    gate_allocation,
    gate_budget,
    gate_summary,
    valuate,
)

CATALOG = {1: EmployeeFunction(id=1, name='Desenvolvedor', monthly_cost=3000.0)}
PRIVILEGED = SessionContext(pv=9, commission_rate=0.05, token='abc')
STANDARD = SessionContext(pv=3, commission_rate=0.07, token='abc')


def _budget(margin: float = 0.3, commission: float = 0.2, tax: float = 0.1) -> Budget:
    return Budget(
        pipedrive_code=123,
        customer_name='ACME',
        commission_rate=commission,
        tax_rate=tax,
        line_items=(
            EmployeeAllocation(1, amount=1, amount_unit=AmountUnit.MONTH, dedication=1, profit_margin=margin),
            EmployeeAllocation(1, amount=80, amount_unit=AmountUnit.HOUR, dedication=0.5, profit_margin=margin),
        ),
    )


def test_session_context_from_record() -> None:
    context = SessionContext.from_record({'token': 't', 'pv': '9', 'commission': '0.1'})
    assert context.is_privileged
    assert context.commission_rate == 0.1
    assert context.token == 't'


def test_session_context_missing_fields() -> None:
    context = SessionContext.from_record({})
    assert not context.is_privileged
    assert context.commission_rate == 0
    assert context.token is None


def test_privileged_budget_passes_through() -> None:
    budget = _budget()
    assert gate_budget(budget, PRIVILEGED) is budget


def test_standard_budget_is_overridden_silently() -> None:
    gated = gate_budget(_budget(margin=0.3, commission=0.5, tax=0.0), STANDARD)
    assert gated.commission_rate == 0.07
    assert gated.tax_rate == 0.19
    assert all(item.profit_margin == 1 for item in gated.line_items)
    assert gated.customer_name == 'ACME'
    assert len(gated.line_items) == 2


def test_gate_allocation_forces_margin_for_standard_tier() -> None:
    allocation = EmployeeAllocation(1, amount=2, profit_margin=0.25)
    assert gate_allocation(allocation, STANDARD).profit_margin == 1
    assert gate_allocation(allocation, PRIVILEGED).profit_margin == 0.25


@pytest.mark.parametrize('margin,commission', [(0.0, 0.0), (0.5, 0.9), (3.0, 0.01)])
def test_standard_view_ignores_user_overrides(margin: float, commission: float) -> None:
    reference = valuate(_budget(margin=1, commission=0.07, tax=0.19), CATALOG, STANDARD)
    view = valuate(_budget(margin=margin, commission=commission), CATALOG, STANDARD)
    assert view.totals == reference.totals
    assert view.commission_value == pytest.approx(reference.commission_value)
    assert view.net_profit is None


def test_privileged_view_exposes_net_profit() -> None:
    view = valuate(_budget(margin=0.3, commission=0.2, tax=0.1), CATALOG, PRIVILEGED)
    # 1 month + 80h at half dedication: 3000 + 750
    assert view.total_cost == pytest.approx(3750)
    assert view.total_revenue == pytest.approx(3750 * 1.3)
    assert view.net_profit == pytest.approx(
        view.total_revenue - 3750 - view.total_revenue * 0.2 - view.total_revenue * 0.1
    )


def test_visibility_helpers() -> None:
    assert can_delete(PRIVILEGED) and can_edit_fees(PRIVILEGED) and can_export_full_pdf(PRIVILEGED)
    assert not can_delete(STANDARD)
    assert not can_edit_fees(STANDARD)
    assert not can_export_full_pdf(STANDARD)


def _summary_for(budget: Budget) -> BudgetSummary:
    totals = valuate(budget, CATALOG, PRIVILEGED).totals
    return BudgetSummary(
        id=1,
        pipedrive_code=budget.pipedrive_code,
        customer_name=budget.customer_name,
        total=totals.total_revenue,
        commission_rate=budget.commission_rate,
        tax_rate=budget.tax_rate,
        cost=totals.total_cost,
    )


def test_privileged_summary_passes_through() -> None:
    summary = _summary_for(_budget())
    assert gate_summary(summary, PRIVILEGED) is summary


def test_standard_summary_matches_gated_valuation() -> None:
    budget = _budget(margin=0.3, commission=0.2, tax=0.1)
    gated = gate_summary(_summary_for(budget), STANDARD)
    view = valuate(budget, CATALOG, STANDARD)
    assert gated.total == pytest.approx(view.total_revenue)
    assert gated.cost == pytest.approx(view.total_cost)
    assert gated.commission_rate == STANDARD.commission_rate
    assert gated.commission_value == pytest.approx(view.commission_value)
    assert gated.tax_rate == 0.19
