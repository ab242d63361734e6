"""Input reconciler: edited field is pulled back until opex% >= 0."""

import logging
from dataclasses import replace

import pytest

from calculator import CalculatorConfig, CalculatorInputs, compute, converge, reconcile


@pytest.fixture
def defaults():
    return CalculatorInputs.defaults()


def test_profit_90_converges_on_profit_only(defaults):
    outcome = converge(defaults, "profit_percent", 90)

    assert outcome.converged
    assert outcome.passes <= 5
    assert outcome.passes == 2
    assert outcome.inputs.owners_pay_percent == defaults.owners_pay_percent
    assert outcome.inputs.desired_take_home == defaults.desired_take_home
    assert outcome.inputs.contractor_pay == defaults.contractor_pay
    assert outcome.inputs.profit_percent == pytest.approx(4.4086, abs=1e-3)
    assert outcome.overflow_history[0] == pytest.approx(85.5914, abs=1e-3)
    assert compute(outcome.inputs).op_expenses_percent >= 0


def test_edit_within_bounds_is_kept(defaults):
    outcome = converge(defaults, "profit_percent", 10)
    assert outcome.passes == 1
    assert outcome.overflow_history == ()
    assert outcome.inputs.profit_percent == 10.0


def test_owners_pay_edit_leaves_profit_alone(defaults):
    new = reconcile(defaults, "owners_pay_percent", 100)
    assert new.profit_percent == defaults.profit_percent
    assert new.owners_pay_percent < 100
    assert compute(new).op_expenses_percent >= 0


@pytest.mark.parametrize("profit", range(0, 101, 10))
def test_profit_edits_from_defaults_never_leave_negative_opex(defaults, profit):
    outcome = converge(defaults, "profit_percent", profit)
    assert outcome.converged
    res = compute(outcome.inputs)
    assert res.op_expenses_percent >= 0
    assert res.display_total == 100


def test_owners_pay_floor(defaults):
    new = reconcile(defaults, "owners_pay_percent", 0.5)
    assert new.owners_pay_percent == 1.0


def test_profit_floor(defaults):
    new = reconcile(defaults, "profit_percent", -5)
    assert new.profit_percent == 0.0


def test_amount_floor(defaults):
    new = reconcile(defaults, "contractor_pay", -1_000)
    assert new.contractor_pay == 0.0


def test_previous_inputs_untouched(defaults):
    reconcile(defaults, "profit_percent", 90)
    assert defaults == CalculatorInputs.defaults()


def test_unknown_field_raises(defaults):
    with pytest.raises(ValueError, match="Unknown input field"):
        reconcile(defaults, "tax_percent", 10)


def test_exhaustion_is_best_effort(caplog):
    # opex% barely depends on take-home, so correcting take-home cannot fix it
    crowded = CalculatorInputs(desired_take_home=150_000, profit_percent=50,
                               owners_pay_percent=49, contractor_pay=0)

    with caplog.at_level(logging.WARNING, logger="calculator.reconcile"):
        outcome = converge(crowded, "desired_take_home", 500_000)

    assert not outcome.converged
    assert outcome.passes == 5
    assert len(outcome.overflow_history) == 5
    assert 499_000 < outcome.inputs.desired_take_home < 500_000
    assert "left opex% negative" in caplog.text


def test_pass_cap_comes_from_config(defaults):
    cfg = replace(CalculatorConfig.load(), max_passes=1)
    outcome = converge(defaults, "profit_percent", 90, cfg)
    assert outcome.passes == 1
    # the single correction already lands
    assert outcome.converged
    assert outcome.inputs.profit_percent == pytest.approx(4.4086, abs=1e-3)
