"""Allocation engine: one deterministic pass from inputs to results."""

import pytest

from calculator import CalculatorInputs, compute


def test_default_inputs():
    res = compute(CalculatorInputs.defaults())

    assert res.real_revenue == 333_333
    assert res.profit_amount == 16_667
    assert res.owners_pay_amount == 150_000
    assert res.taxable_income == 166_667
    assert res.tax_amount == 43_005
    assert res.tax_percent == pytest.approx(12.9014, abs=1e-4)
    assert res.op_expenses_percent == pytest.approx(37.0986, abs=1e-4)
    assert res.pre_gst_amount == 348_333
    assert res.is_gst_registered
    assert res.gst_amount == 34_833
    assert res.annual_gross_revenue == 383_167
    assert res.monthly_gross_revenue == 31_931
    assert (res.display_profit_percent, res.display_owners_pay_percent,
            res.display_tax_percent, res.display_op_expenses_percent) == (5, 45, 13, 37)


def test_gst_threshold_from_contractor_pay_alone():
    res = compute(CalculatorInputs(desired_take_home=0, profit_percent=0,
                                   owners_pay_percent=100, contractor_pay=75_000))
    assert res.real_revenue == 0
    assert res.pre_gst_amount == 75_000
    assert res.is_gst_registered
    assert res.gst_amount == 7_500
    assert res.annual_gross_revenue == 82_500
    assert res.monthly_gross_revenue == 6_875


def test_zero_take_home():
    inputs = CalculatorInputs(desired_take_home=0, profit_percent=5,
                              owners_pay_percent=45, contractor_pay=15_000)
    res = compute(inputs)

    for amount in (res.real_revenue, res.profit_amount, res.owners_pay_amount,
                   res.tax_amount, res.op_expenses_amount, res.taxable_income,
                   res.gst_amount):
        assert amount == 0
    assert not res.is_gst_registered
    assert res.tax_percent == 0
    assert res.op_expenses_percent == pytest.approx(50)
    # contractors are still paid
    assert res.annual_gross_revenue == 15_000


def test_zero_owners_pay_is_guarded():
    res = compute(CalculatorInputs(desired_take_home=150_000, profit_percent=5,
                                   owners_pay_percent=0, contractor_pay=0))
    assert res.real_revenue == 0
    assert res.tax_percent == 0
    assert res.annual_gross_revenue == 0


def test_tax_boundary_through_engine():
    res = compute(CalculatorInputs(desired_take_home=45_000, profit_percent=0,
                                   owners_pay_percent=100, contractor_pay=0))
    assert res.taxable_income == 45_000
    assert res.tax_amount == 4_288
    assert not res.is_gst_registered


def test_negative_remainder_is_not_clamped():
    res = compute(CalculatorInputs(desired_take_home=150_000, profit_percent=90,
                                   owners_pay_percent=45, contractor_pay=15_000))
    assert res.op_expenses_percent < 0
    assert res.op_expenses_amount < 0
    assert res.allocation_total == pytest.approx(100)


@pytest.mark.parametrize("take_home, profit, owners", [
    (150_000, 5, 45),
    (20_000, 0, 100),
    (80_000, 10, 30),
    (300_000, 20, 35),
    (500_000, 1, 1),
])
def test_allocations_sum_to_100(take_home, profit, owners):
    res = compute(CalculatorInputs(take_home, profit, owners, 15_000))
    assert res.allocation_total == pytest.approx(100)
    assert res.display_total == 100


def test_deterministic():
    inputs = CalculatorInputs(123_456, 7.5, 38.2, 9_999)
    assert compute(inputs) == compute(inputs)


def test_gross_rises_with_take_home():
    grosses = [
        compute(CalculatorInputs(th, 5, 45, 15_000)).annual_gross_revenue
        for th in range(0, 500_001, 25_000)
    ]
    assert all(b > a for a, b in zip(grosses, grosses[1:]))


def test_results_are_frozen():
    res = compute(CalculatorInputs.defaults())
    with pytest.raises(AttributeError):
        res.tax_amount = 0


def test_to_dict_round_trips_fields():
    res = compute(CalculatorInputs.defaults())
    d = res.to_dict()
    assert d["annual_gross_revenue"] == res.annual_gross_revenue
    assert d["is_gst_registered"] is True
