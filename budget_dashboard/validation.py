"""Input validation and UI-boundary coercion.

Views call these helpers before touching the valuation engine: free text is
coerced to numbers here, percentages are converted to fractions here, and
incomplete line items or budgets are rejected here with a message that can be
shown to the user as-is.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from .models import Budget, EmployeeAllocation, EmployeeFunction

PERCENT_FACTOR = 100


class ValidationError(ValueError):
    """Raised when user input cannot be accepted. The message is user-facing."""


def parse_number(value: Any) -> float:
    """Coerce user input to a float, treating blank or invalid input as zero.

    Example:
        >>> parse_number("12,5")
        12.5
        >>> parse_number("")
        0.0
    """
    if value is None:
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(',', '.')
        if not text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    return number if math.isfinite(number) else 0.0


def percent_to_fraction(value: Any) -> float:
    """Convert a whole-number percent entered in a form to a fraction."""
    return parse_number(value) / PERCENT_FACTOR


def fraction_to_percent(value: float) -> float:
    """Convert a stored fraction to the whole-number percent shown in a form."""
    return value * PERCENT_FACTOR


def validate_allocation(
    allocation: EmployeeAllocation, functions: Mapping[int, EmployeeFunction]
) -> EmployeeAllocation:
    """Check that a line item may be added to a budget.

    Raises:
        ValidationError: If no known function is selected, the amount is not
            positive, or dedication or margin is negative
    """
    if not allocation.employee_function_id or allocation.employee_function_id not in functions:
        raise ValidationError("Selecione um cargo")
    if allocation.amount <= 0:
        raise ValidationError("Informe a quantidade")
    if allocation.dedication < 0 or allocation.profit_margin < 0:
        raise ValidationError("Dedicação e margem não podem ser negativas")
    return allocation


def validate_budget(budget: Budget) -> Budget:
    """Check that a budget is complete enough to be submitted.

    Raises:
        ValidationError: If the header fields are missing or there are no line items
    """
    if budget.pipedrive_code <= 0:
        raise ValidationError("Informe o código Pipedrive")
    if not budget.customer_name.strip():
        raise ValidationError("Informe o nome do cliente")
    if budget.is_empty:
        raise ValidationError("Adicione pelo menos um funcionário")
    return budget
