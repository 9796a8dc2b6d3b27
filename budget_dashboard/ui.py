"""Shared Streamlit components for the budget pages.

Session handling, the sidebar, notices, and the tables and summaries that
more than one page renders live here so that every page shows a budget the
same way.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import pandas as pd
import streamlit as st

from .api import ApiError, BudgetApiClient
from .auth_store import clear_auth, load_auth
from .config import configure_logging
from .formatting import (
    escape_currency_for_markdown,
    format_currency,
    format_percentage,
    unit_label,
)
from .models import BudgetSummary
from .policy import BudgetView, SessionContext, gate_summary

GENERIC_ERROR = "Erro"


def setup_page(title: str, icon: str) -> None:
    """Configure the page and logging. Call first on every page."""
    configure_logging()
    st.set_page_config(page_title=title, page_icon=icon, layout="wide")


def get_session_context() -> Optional[SessionContext]:
    """Return the session of the current user, loading the stored record once."""
    if 'auth' not in st.session_state:
        record = load_auth()
        if record is None:
            return None
        st.session_state['auth'] = record
    return SessionContext.from_record(st.session_state['auth'])


def require_session() -> SessionContext:
    context = get_session_context()
    if context is None:
        st.warning("🔒 Sessão não encontrada. Faça login novamente.")
        st.stop()
    return context


def get_api_client(context: SessionContext) -> BudgetApiClient:
    return BudgetApiClient(token=context.token)


def logout() -> None:
    clear_auth()
    st.session_state.pop('auth', None)


def notify_api_error(description: str, error: ApiError) -> None:
    """Show the generic notice for a failed remote call."""
    st.error(f"**{GENERIC_ERROR}:** {description}")
    st.caption(f"Detalhe técnico: {error.operation}")


def render_sidebar(context: SessionContext) -> None:
    st.sidebar.subheader("👤 Sessão")
    tier = "PV 9 (completo)" if context.is_privileged else f"PV {context.pv}"
    st.sidebar.caption(f"Perfil: {tier}")
    if not context.is_privileged:
        st.sidebar.caption(f"Comissão padrão: {format_percentage(context.commission_rate)}")
    if st.sidebar.button("🚪 Sair"):
        logout()
        st.rerun()


def line_items_display(frame: pd.DataFrame, context: SessionContext) -> pd.DataFrame:
    """Format a line-item frame for display, hiding cost data from standard users."""
    display = pd.DataFrame({
        'Cargo': frame['Cargo'],
        'Custo Base': frame['Custo Base'].map(format_currency),
        'Quantidade': frame['Quantidade'].map(lambda v: f"{float(v):g}"),
        'Tipo': frame['Tipo'].map(lambda v: unit_label(int(v))),
        'Dedicação': frame['Dedicação'].map(format_percentage),
        'Margem': frame['Margem'].map(format_percentage),
        'Valor Total': frame['Valor Total'].map(format_currency),
    })
    if not context.is_privileged:
        display = display.drop(columns=['Custo Base', 'Margem'])
    return display


def budget_list_display(summaries: Sequence[BudgetSummary], context: SessionContext) -> pd.DataFrame:
    """Build the budget list table; cost, margin and tax are PV 9 only."""
    rows: List[dict] = []
    for summary in (gate_summary(s, context) for s in summaries):
        row = {
            'ID': summary.id,
            'Código Pipedrive': summary.pipedrive_code,
            'Cliente': summary.customer_name,
            'Valor Total': format_currency(summary.total),
            'Comissão': (
                f"{format_percentage(summary.commission_rate)} "
                f"({format_currency(summary.commission_value)})"
            ),
        }
        if context.is_privileged:
            row['Custo'] = format_currency(summary.cost)
            row['Margem'] = format_currency(summary.gross_margin)
            row['Imposto'] = format_percentage(summary.tax_rate)
        rows.append(row)
    return pd.DataFrame(rows)


def render_net_profit_card(view: BudgetView) -> None:
    if view.net_profit is None:
        return
    label = "Lucro Líquido" if view.net_profit >= 0 else "Prejuízo"
    with st.container(border=True):
        st.subheader("Margem de Lucro Total")
        st.metric(label, format_currency(view.net_profit))


def render_financial_breakdown(view: BudgetView, context: SessionContext) -> None:
    """Render the "Detalhamento Financeiro" block for the given tier."""
    st.markdown("#### Detalhamento Financeiro")
    if not context.is_privileged:
        col1, col2 = st.columns(2)
        col1.metric("Valor Total da Proposta", format_currency(view.total_revenue))
        col2.metric(
            f"Comissão ({format_percentage(view.budget.commission_rate)})",
            f"-{format_currency(view.commission_value)}",
        )
        return
    col1, col2 = st.columns(2)
    col1.metric("Valor Total Bruto", format_currency(view.total_revenue))
    col2.metric(
        f"Comissão ({format_percentage(view.budget.commission_rate)})",
        f"-{format_currency(view.commission_value)}",
    )
    col3, col4 = st.columns(2)
    col3.metric(
        f"Impostos ({format_percentage(view.budget.tax_rate)})",
        f"-{format_currency(view.tax_value)}",
    )
    col4.metric("Custo Total Base", f"-{format_currency(view.total_cost)}")
    st.caption(
        f"Líquido após custos: {escape_currency_for_markdown(view.total_revenue - view.total_cost)}"
    )
