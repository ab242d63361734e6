import pytest

from calculator import CalculatorInputs
from calculator.scenarios import (
    SWEEP_PRESETS,
    SweepVariable,
    run_multi_sweep,
    run_scenario,
    run_sweep,
)


def test_sweep_values():
    v = SweepVariable(attr="profit_percent", base=5, low=0, high=20, steps=5)
    assert v.values == [0, 5, 10, 15, 20]
    assert SweepVariable(attr="profit_percent", base=5, low=0, high=20, steps=1).values == [5]


def test_take_home_sweep():
    variable = SWEEP_PRESETS[0]
    result = run_sweep(variable)

    assert len(result.rows) == 11
    assert sum(r["is_base"] for r in result.rows) == 1
    grosses = [r["result_annual_gross_revenue"] for r in result.rows]
    assert all(b > a for a, b in zip(grosses, grosses[1:]))

    df = result.dataframe
    assert {"desired_take_home", "passes", "converged",
            "result_op_expenses_percent"} <= set(df.columns)


def test_profit_sweep_rows_are_reconciled():
    variable = SweepVariable(attr="profit_percent", base=5, low=0, high=100, steps=11)
    result = run_sweep(variable)
    for row in result.rows:
        assert row["converged"]
        assert row["result_op_expenses_percent"] >= 0
        assert row["result_owners_pay_percent"] == 45


def test_multi_sweep_one_result_per_variable():
    results = run_multi_sweep(SWEEP_PRESETS)
    assert [r.variable.attr for r in results] == [v.attr for v in SWEEP_PRESETS]


def test_run_scenario():
    inputs, res = run_scenario(CalculatorInputs.defaults(), "profit_percent", 90)
    assert inputs.profit_percent == pytest.approx(4.4086, abs=1e-3)
    assert res.profit_percent == inputs.profit_percent
