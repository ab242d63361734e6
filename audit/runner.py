"""Audit runner -- orchestrates all checks against calculator output."""

from __future__ import annotations

import itertools
import logging

from calculator.allocation import compute
from calculator.config import CalculatorConfig, CalculatorInputs
from calculator.reconcile import converge
from audit.checks import (
    check_allocation,
    check_determinism,
    check_gst,
    check_monotonic_gross,
    check_tax_schedule,
    classify_check,
)

logger = logging.getLogger(__name__)

# (take-home, profit %, owner's pay %, contractor pay)
DEFAULT_GRID = {
    "desired_take_home": [0, 50_000, 150_000, 300_000, 500_000],
    "profit_percent": [0, 5, 30, 60, 90],
    "owners_pay_percent": [1, 20, 45, 80, 100],
    "contractor_pay": [0, 15_000, 80_000],
}

# Order the UI applies edits in: amounts first, then owner's pay, then profit
EDIT_ORDER = ("desired_take_home", "contractor_pay", "owners_pay_percent", "profit_percent")


def scenario_inputs(target: dict, cfg: CalculatorConfig) -> tuple[CalculatorInputs, bool]:
    """Walk from the defaults to `target` one reconciled edit at a time.

    Returns (inputs, converged) where converged is False if the final edit
    left a negative opex%.
    """
    inputs = CalculatorInputs.defaults(cfg)
    converged = True
    for f in EDIT_ORDER:
        outcome = converge(inputs, f, target[f], cfg)
        inputs, converged = outcome.inputs, outcome.converged
    return inputs, converged


def run_all_checks(grid: dict | None = None,
                   cfg: CalculatorConfig | None = None) -> dict:
    """Run all audit checks over every scenario in the grid.

    Returns dict with:
        results: list of (section, name, expected, actual, delta, passed)
        summary: dict with counts
        scenarios: number of scenarios audited
    """
    if cfg is None:
        cfg = CalculatorConfig.load()
    if grid is None:
        grid = DEFAULT_GRID

    all_results: list[tuple] = []
    all_results.extend(check_tax_schedule(cfg))

    keys = list(EDIT_ORDER)
    combos = list(itertools.product(*(grid[k] for k in keys)))
    for combo in combos:
        target = dict(zip(keys, combo))
        inputs, converged = scenario_inputs(target, cfg)
        res = compute(inputs, cfg)
        sec = ("TH {desired_take_home:,.0f} / CP {contractor_pay:,.0f} / "
               "OP {owners_pay_percent:g}% / P {profit_percent:g}%").format(**target)

        all_results.extend(check_allocation(sec, inputs, res, converged))
        all_results.extend(check_gst(sec, res, cfg))
        all_results.extend(check_determinism(sec, inputs, cfg))

    # Gross revenue vs take-home at the default percentages
    base = CalculatorInputs.defaults(cfg)
    grosses = []
    for th in sorted(grid["desired_take_home"]):
        inputs = converge(base, "desired_take_home", th, cfg).inputs
        grosses.append((th, compute(inputs, cfg).annual_gross_revenue))
    all_results.extend(check_monotonic_gross("MONOTONICITY", grosses))

    logger.info("Audited %d scenarios, %d checks", len(combos), len(all_results))

    # Summary
    arith = [r for r in all_results
             if classify_check(r[0], r[1]) == "arithmetic"]
    design = [r for r in all_results
              if classify_check(r[0], r[1]) == "model_design"]

    return {
        "results": all_results,
        "summary": {
            "total": len(all_results),
            "arithmetic_pass": sum(1 for r in arith if r[5]),
            "arithmetic_fail": sum(1 for r in arith if not r[5]),
            "design_pass": sum(1 for r in design if r[5]),
            "design_fail": sum(1 for r in design if not r[5]),
        },
        "scenarios": len(combos),
    }
