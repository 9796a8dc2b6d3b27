"""Plotly visualisation helpers for the budget dashboard.

Each function accepts the objects produced by :mod:`valuation` and
:mod:`policy` and returns a ``plotly.graph_objects.Figure`` that Streamlit
renders with ``st.plotly_chart``.
"""

from __future__ import annotations

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from .policy import BudgetView


def create_breakdown_chart(view: BudgetView, title: str | None = None) -> go.Figure:
    """Split the gross total into cost, commission, tax and net profit.

    Parameters
    ----------
    view : BudgetView
        A valuated budget. Net profit must be exposed (privileged tier).
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Waterfall chart ending at the net profit.
    """
    if view.net_profit is None or view.total_revenue == 0:
        fig = go.Figure()
        fig.update_layout(title="Sem dados para exibir")
        return fig
    fig = go.Figure(
        go.Waterfall(
            orientation="v",
            measure=["absolute", "relative", "relative", "relative", "total"],
            x=["Valor Total Bruto", "Custo", "Comissão", "Impostos", "Lucro Líquido"],
            y=[
                view.total_revenue,
                -view.total_cost,
                -view.commission_value,
                -view.tax_value,
                0,
            ],
            connector={"line": {"color": "#999"}},
            decreasing={"marker": {"color": "#dc2626"}},
            increasing={"marker": {"color": "#4f46e5"}},
            totals={"marker": {"color": "#059669" if view.net_profit >= 0 else "#dc2626"}},
        )
    )
    fig.update_layout(title=title or "Composição do orçamento", showlegend=False)
    return fig


def create_line_totals_chart(frame: pd.DataFrame, title: str | None = None) -> go.Figure:
    """Bar chart of the total value of each line item.

    Parameters
    ----------
    frame : pandas.DataFrame
        Output of :func:`valuation.line_items_frame`.
    title : str, optional
        Chart title.
    """
    if frame.empty:
        fig = go.Figure()
        fig.update_layout(title="Sem dados para exibir")
        return fig
    data = frame.reset_index().rename(columns={"index": "Linha"})
    data["Linha"] = data["Linha"] + 1
    fig = px.bar(data, x="Linha", y="Valor Total", hover_data=["Cargo"], color="Cargo")
    fig.update_layout(
        title=title or "Valor por funcionário",
        xaxis_title="Linha",
        yaxis_title="Valor Total (R$)",
    )
    return fig
