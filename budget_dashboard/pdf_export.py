"""HTML documents sent to the remote PDF rendering service.

Two layouts exist: the full export (base costs, margins, taxes and net profit;
privileged users only) and the simplified export meant for the customer.
Both take a :class:`~budget_dashboard.policy.BudgetView`, so the exported
figures are the ones the detail page shows.
"""

from __future__ import annotations

from html import escape
from typing import List

from .config import LOGO_URL
from .formatting import format_currency, format_percentage, unit_label
from .policy import BudgetView
from .valuation import FunctionCatalog, line_items_frame

STYLE = """
body { font-family: Arial, sans-serif; }
.logo { text-align: center; margin-bottom: 30px; }
.logo img { max-width: 200px; height: auto; }
.header { margin-bottom: 20px; }
.title { font-size: 24px; font-weight: bold; margin-bottom: 10px; }
.info { margin-bottom: 20px; }
.info-item { margin-bottom: 10px; }
.label { color: #666; font-size: 14px; }
.value { font-size: 16px; font-weight: 500; }
table { width: 100%; border-collapse: collapse; margin-bottom: 20px; }
th, td { padding: 10px; text-align: left; border-bottom: 1px solid #ddd; }
th { background-color: #f5f5f5; }
.text-right { text-align: right; }
.summary { background-color: #f5f5f5; padding: 20px; border-radius: 8px; }
.red { color: #dc2626; }
.green { color: #059669; }
.indigo { color: #4f46e5; }
"""


def _summary_item(label: str, value: str, css: str = '') -> str:
    classes = f"value {css}".strip()
    return (
        f'<div><div class="label">{escape(label)}</div>'
        f'<div class="{classes}">{escape(value)}</div></div>'
    )


def _cell(tag: str, position: int, text: str) -> str:
    # First column is text, the others are right-aligned figures
    align = "" if position == 0 else ' class="text-right"'
    return f"<{tag}{align}>{escape(text)}</{tag}>"


def _table(headers: List[str], rows: List[List[str]]) -> str:
    head = ''.join(_cell('th', i, h) for i, h in enumerate(headers))
    body = ''.join(
        '<tr>' + ''.join(_cell('td', i, cell) for i, cell in enumerate(row)) + '</tr>'
        for row in rows
    )
    return f'<table><thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>'


def _document(title: str, view: BudgetView, table: str, summary: List[str]) -> str:
    budget = view.budget
    return f"""<html>
<head><meta charset="utf-8"><style>{STYLE}</style></head>
<body>
<div class="logo"><img src="{escape(LOGO_URL)}" alt="Logo" /></div>
<div class="header">
<div class="title">{escape(title)}</div>
<div class="info">
<div class="info-item"><div class="label">Código Pipedrive</div><div class="value">{budget.pipedrive_code}</div></div>
<div class="info-item"><div class="label">Cliente</div><div class="value">{escape(budget.customer_name)}</div></div>
</div>
</div>
{table}
<div class="summary">
<h3 style="margin-top: 0;">Resumo Financeiro</h3>
<div style="display: grid; grid-template-columns: 1fr 1fr; gap: 20px;">
{''.join(summary)}
</div>
</div>
</body>
</html>"""


def _commission_label(view: BudgetView) -> str:
    return f"Comissão ({format_percentage(view.budget.commission_rate)})"


def render_full_html(view: BudgetView, functions: FunctionCatalog) -> str:
    """Render the full export with costs, margins, taxes and net profit."""
    if view.net_profit is None:
        raise PermissionError("Full export requires the privileged tier")
    frame = line_items_frame(view.budget.line_items, functions)
    rows = [
        [
            str(row['Cargo']),
            format_currency(row['Custo Base']),
            f"{float(row['Quantidade']):g}",
            unit_label(int(row['Tipo'])),
            format_percentage(row['Dedicação']),
            format_percentage(row['Margem']),
            format_currency(row['Valor Total']),
        ]
        for _, row in frame.iterrows()
    ]
    table = _table(
        ['Cargo', 'Custo Base', 'Quantidade', 'Tipo', 'Dedicação', 'Margem', 'Valor Total'],
        rows,
    )
    summary = [
        _summary_item('Valor Total Bruto', format_currency(view.total_revenue)),
        _summary_item(_commission_label(view), f"-{format_currency(view.commission_value)}", 'red'),
        _summary_item(
            f"Impostos ({format_percentage(view.budget.tax_rate)})",
            f"-{format_currency(view.tax_value)}",
            'red',
        ),
        _summary_item('Custo Total Base', f"-{format_currency(view.total_cost)}", 'red'),
        _summary_item(
            'Margem de Lucro Total',
            format_currency(view.net_profit),
            'green' if view.net_profit >= 0 else 'red',
        ),
    ]
    return _document('Detalhes do Orçamento', view, table, summary)


def render_simplified_html(view: BudgetView, functions: FunctionCatalog) -> str:
    """Render the customer-facing export without cost or margin data."""
    frame = line_items_frame(view.budget.line_items, functions)
    rows = [
        [
            str(row['Cargo']),
            f"{float(row['Quantidade']):g}",
            unit_label(int(row['Tipo'])),
            format_percentage(row['Dedicação']),
        ]
        for _, row in frame.iterrows()
    ]
    table = _table(['Cargo', 'Quantidade', 'Tipo', 'Dedicação'], rows)
    summary = [
        _summary_item('Valor Total', format_currency(view.total_revenue), 'indigo'),
        _summary_item(_commission_label(view), f"-{format_currency(view.commission_value)}", 'red'),
    ]
    return _document('Orçamento', view, table, summary)


def pdf_filename(view: BudgetView, simplified: bool = False) -> str:
    prefix = 'orcamento-simplificado' if simplified else 'orcamento'
    return f"{prefix}-{view.budget.pipedrive_code}.pdf"
