"""Tests for the plotly chart builders."""

from __future__ import annotations

import pandas as pd

from budget_dashboard.models import Budget, EmployeeAllocation, EmployeeFunction
from budget_dashboard.policy import SessionContext, valuate
from budget_dashboard.valuation import line_items_frame
from budget_dashboard.visualization import create_breakdown_chart, create_line_totals_chart

FUNCTIONS = {1: EmployeeFunction(id=1, name='Dev', monthly_cost=1000.0)}


def _budget() -> Budget:
    return Budget(
        pipedrive_code=7,
        customer_name='ACME',
        commission_rate=0.1,
        line_items=(EmployeeAllocation(1, amount=2, profit_margin=0.5),),
    )


def test_breakdown_chart_for_privileged_view() -> None:
    view = valuate(_budget(), FUNCTIONS, SessionContext(pv=9))
    fig = create_breakdown_chart(view)
    waterfall = fig.data[0]
    assert list(waterfall.x) == ["Valor Total Bruto", "Custo", "Comissão", "Impostos", "Lucro Líquido"]
    assert waterfall.y[0] == 3000.0
    assert waterfall.y[1] == -2000.0


def test_breakdown_chart_empty_without_net_profit() -> None:
    view = valuate(_budget(), FUNCTIONS, SessionContext(pv=1, commission_rate=0.05))
    fig = create_breakdown_chart(view)
    assert len(fig.data) == 0
    assert fig.layout.title.text == "Sem dados para exibir"


def test_line_totals_chart() -> None:
    frame = line_items_frame(_budget().line_items, FUNCTIONS)
    fig = create_line_totals_chart(frame, title="Linhas")
    assert fig.layout.title.text == "Linhas"
    assert len(fig.data) == 1


def test_line_totals_chart_empty_frame() -> None:
    fig = create_line_totals_chart(pd.DataFrame())
    assert fig.layout.title.text == "Sem dados para exibir"
