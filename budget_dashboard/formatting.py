"""Formatting utilities for currency, percentages and unit labels."""

from __future__ import annotations

from typing import Union

from .models import AmountUnit

UNIT_LABELS = {
    AmountUnit.HOUR: 'Horas',
    AmountUnit.DAY: 'Dias',
    AmountUnit.WEEK: 'Semanas',
    AmountUnit.MONTH: 'Meses',
}


def format_currency(amount: Union[float, int, str], include_sign: bool = True) -> str:
    """Format an amount as Brazilian reais.

    Args:
        amount: The amount to format (numeric strings are accepted)
        include_sign: Whether to include the currency symbol

    Returns:
        Formatted currency string (e.g., "R$ 1.234,56" or "1.234,56")

    Example:
        >>> format_currency(1234.56)
        'R$ 1.234,56'
        >>> format_currency(-10)
        '-R$ 10,00'
    """
    value = float(amount)
    # Swap separators of the en-US rendering to get pt-BR grouping
    formatted = f"{abs(value):,.2f}".replace(',', '_').replace('.', ',').replace('_', '.')
    if include_sign:
        formatted = f"R$ {formatted}"
    return f"-{formatted}" if value < 0 else formatted


def format_percentage(fraction: Union[float, int, str]) -> str:
    """Format a stored fraction as a percentage with one decimal.

    Example:
        >>> format_percentage(0.19)
        '19.0%'
    """
    return f"{float(fraction) * 100:.1f}%"


def unit_label(amount_unit: Union[AmountUnit, int]) -> str:
    return UNIT_LABELS[AmountUnit(amount_unit)]


def escape_currency_for_markdown(amount: float) -> str:
    """Format an amount for ``st.markdown`` with the dollar sign of "R$" escaped."""
    return format_currency(amount).replace('$', '\\$')
