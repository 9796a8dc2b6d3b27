"""Budget list page ("Últimos Orçamentos").

Lists every stored budget with the figures the current tier may see, links
to the detail page and the creation form, and lets PV 9 users delete a
budget after confirmation.

To run the dashboard from the command line::

    streamlit run budget_dashboard/Home.py
"""

from __future__ import annotations

import os
import sys
from typing import List

import streamlit as st

if __package__:
    from . import ui
    from .api import ApiError, BudgetApiClient
    from .models import BudgetSummary
    from .policy import SessionContext, can_delete
else:
    CURRENT_DIR = os.path.dirname(os.path.abspath(__file__))
    PARENT_DIR = os.path.dirname(CURRENT_DIR)
    if PARENT_DIR not in sys.path:
        sys.path.insert(0, PARENT_DIR)
    from budget_dashboard import ui  # type: ignore
    from budget_dashboard.api import ApiError, BudgetApiClient  # type: ignore
    from budget_dashboard.models import BudgetSummary  # type: ignore
    from budget_dashboard.policy import SessionContext, can_delete  # type: ignore

NEW_BUDGET_PAGE = "pages/1_➕_Novo_Orcamento.py"
DETAIL_PAGE = "pages/2_🔎_Detalhes.py"


def load_budgets(client: BudgetApiClient) -> List[BudgetSummary]:
    """Fetch the budget list, showing a notice and returning [] on failure."""
    try:
        return client.list_budgets()
    except ApiError as exc:
        ui.notify_api_error("Não foi possível carregar os orçamentos", exc)
        return []


def delete_budget(client: BudgetApiClient, summary: BudgetSummary) -> bool:
    try:
        client.delete_budget(summary.id)
    except ApiError as exc:
        ui.notify_api_error("Não foi possível excluir o orçamento", exc)
        return False
    st.success("Orçamento excluído com sucesso")
    return True


def _render_delete_section(
    client: BudgetApiClient, budgets: List[BudgetSummary], context: SessionContext
) -> None:
    if not can_delete(context) or not budgets:
        return
    st.subheader("🗑️ Excluir orçamento")
    by_label = {f"{b.id} - {b.customer_name}": b for b in budgets}
    label = st.selectbox("Orçamento", list(by_label), key="delete_budget_choice")
    if st.button("Excluir", key="delete_budget_btn"):
        st.session_state.deleting_budget = by_label[label]

    deleting = st.session_state.get('deleting_budget')
    if deleting is None:
        return
    st.warning(
        f"Tem certeza que deseja excluir o orçamento {deleting.id} - {deleting.customer_name}? "
        "Esta ação não pode ser desfeita."
    )
    col1, col2 = st.columns(2)
    with col1:
        if st.button("✅ Confirmar", key="confirm_delete_btn"):
            st.session_state.deleting_budget = None
            if delete_budget(client, deleting):
                st.rerun()
    with col2:
        if st.button("❌ Cancelar", key="cancel_delete_btn"):
            st.session_state.deleting_budget = None
            st.rerun()


def main() -> None:
    """Main entry point for the budget list."""
    ui.setup_page("Orçamentos", "📋")
    context = ui.require_session()
    ui.render_sidebar(context)
    client = ui.get_api_client(context)

    header, action = st.columns([4, 1])
    header.header("📋 Dashboard de Orçamentos")
    if action.button("➕ Novo Orçamento"):
        st.switch_page(NEW_BUDGET_PAGE)

    st.subheader("Últimos Orçamentos")
    budgets = load_budgets(client)
    if not budgets:
        st.info("Nenhum orçamento encontrado")
        return

    st.dataframe(ui.budget_list_display(budgets, context), use_container_width=True, hide_index=True)

    by_label = {f"{b.id} - {b.customer_name}": b for b in budgets}
    label = st.selectbox("Ver orçamento", list(by_label), key="view_budget_choice")
    if st.button("👁️ Ver detalhes"):
        st.session_state.selected_budget_id = by_label[label].id
        st.switch_page(DETAIL_PAGE)

    st.divider()
    _render_delete_section(client, budgets, context)


if __name__ == "__main__":
    main()
