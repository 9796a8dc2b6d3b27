from __future__ import annotations

import pytest

from budget_dashboard.models import (
    AmountUnit,
    Budget,
    BudgetSummary,
    EmployeeAllocation,
    EmployeeFunction,
    index_functions,
)


def _detail_record():
    return {
        'id': 7,
        'pipedrive_code': 4512,
        'customer_name': 'Padaria Central',
        'total': '3200.00',
        'commission': '0.05',
        'tax': '0.19',
        'cost': '1600.00',
        'budget_employee': [
            {
                'employee_id': 3,
                'amount': 1,
                'amount_type': 3,
                'dedication': 1,
                'profit_margin': 1,
                'employee_function': {'name': 'Designer', 'cost': '1600.00'},
            },
        ],
    }


def test_amount_unit_codes_are_stable() -> None:
    assert [int(u) for u in AmountUnit] == [0, 1, 2, 3]
    assert AmountUnit(2) is AmountUnit.WEEK


def test_employee_function_parses_string_cost() -> None:
    function = EmployeeFunction.from_record({'id': '5', 'name': 'QA', 'cost': '4200.50'})
    assert function == EmployeeFunction(id=5, name='QA', monthly_cost=4200.5)


def test_budget_from_record_joins_functions() -> None:
    budget, functions = Budget.from_record(_detail_record())
    assert budget.id == 7
    assert budget.pipedrive_code == 4512
    assert budget.commission_rate == 0.05
    assert budget.line_items == (
        EmployeeAllocation(3, amount=1, amount_unit=AmountUnit.MONTH, dedication=1, profit_margin=1),
    )
    assert functions[3].monthly_cost == 1600


def test_add_and_remove_lines_keep_order() -> None:
    first = EmployeeAllocation(1, amount=1)
    second = EmployeeAllocation(2, amount=2)
    third = EmployeeAllocation(3, amount=3)
    budget = Budget(pipedrive_code=1, customer_name='X')
    assert budget.is_empty
    budget = budget.add_line(first).add_line(second).add_line(third)
    assert budget.line_items == (first, second, third)
    assert budget.remove_line(1).line_items == (first, third)
    with pytest.raises(IndexError):
        budget.remove_line(5)


def test_to_payload_derives_totals() -> None:
    functions = {1: EmployeeFunction(id=1, name='Dev', monthly_cost=3000.0)}
    budget = Budget(
        pipedrive_code=99,
        customer_name='ACME',
        commission_rate=0.1,
        line_items=(EmployeeAllocation(1, amount=10, amount_unit=AmountUnit.HOUR, dedication=0.5),),
    )
    payload = budget.to_payload(functions)
    assert payload['total'] == 187.5
    assert payload['cost'] == 93.75
    assert payload['tax'] == 0.19
    assert payload['budget_employee'] == [{
        'employee_id': 1,
        'amount': 10,
        'amount_type': 0,
        'dedication': 0.5,
        'profit_margin': 1.0,
    }]


def test_budget_summary_figures() -> None:
    summary = BudgetSummary.from_record(_detail_record())
    assert summary.total == 3200
    assert summary.commission_value == pytest.approx(160)
    assert summary.gross_margin == pytest.approx(1600)


def test_index_functions() -> None:
    functions = [EmployeeFunction(1, 'A', 1.0), EmployeeFunction(2, 'B', 2.0)]
    assert sorted(index_functions(functions)) == [1, 2]
