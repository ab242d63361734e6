"""Allocation engine: take-home in, revenue target and allocations out.

Single deterministic pass, no iteration:
    1. Real revenue (take-home grossed up by owner's-pay share)
    2. Direct allocations (profit, owner's pay)
    3. Tax on profit + owner's pay (progressive brackets)
    4. Operating expenses as the remainder (NOT clamped, may be negative)
    5. GST on real revenue + contractor pay
    6. Display percentages (ceilings, remainder to opex)
    7. Whole-unit rounding of every amount

A negative operating-expenses percentage is the overflow signal consumed
by calculator.reconcile. This module never corrects inputs.
"""

from __future__ import annotations

from calculator.config import CalculatorConfig, CalculatorInputs
from calculator.formulas import (
    calc_gst,
    calc_income_tax,
    calc_percent_of,
    calc_real_revenue,
    display_percentages,
    round_amount,
)
from calculator.types import CalculatedResults


def compute(inputs: CalculatorInputs,
            cfg: CalculatorConfig | None = None) -> CalculatedResults:
    """Run the allocation engine on one input set."""
    cfg = cfg or CalculatorConfig.default()

    profit_pct = inputs.profit_percent
    owners_pct = inputs.owners_pay_percent

    # ── 1-2. Real revenue and direct allocations ──
    real_revenue = calc_real_revenue(inputs.desired_take_home, owners_pct)
    profit_amount = real_revenue * profit_pct / 100.0
    owners_pay_amount = real_revenue * owners_pct / 100.0

    # ── 3. Tax ──
    taxable_income = profit_amount + owners_pay_amount
    tax_amount = calc_income_tax(taxable_income, cfg.brackets)
    tax_pct = calc_percent_of(tax_amount, real_revenue)

    # ── 4. Operating expenses (remainder) ──
    opex_pct = 100.0 - profit_pct - owners_pct - tax_pct
    opex_amount = real_revenue * opex_pct / 100.0

    # ── 5. GST ──
    pre_gst = real_revenue + inputs.contractor_pay
    registered, gst_amount = calc_gst(pre_gst, cfg.gst_threshold, cfg.gst_rate)
    annual_gross = pre_gst + gst_amount

    # ── 6. Display ──
    d_profit, d_owners, d_tax, d_opex = display_percentages(profit_pct, owners_pct, tax_pct)

    return CalculatedResults(
        real_revenue=round_amount(real_revenue),
        pre_gst_amount=round_amount(pre_gst),
        annual_gross_revenue=round_amount(annual_gross),
        monthly_gross_revenue=round_amount(annual_gross / 12.0),
        is_gst_registered=registered,
        gst_amount=round_amount(gst_amount),
        profit_amount=round_amount(profit_amount),
        owners_pay_amount=round_amount(owners_pay_amount),
        op_expenses_amount=round_amount(opex_amount),
        tax_amount=round_amount(tax_amount),
        taxable_income=round_amount(taxable_income),
        contractor_pay=round_amount(inputs.contractor_pay),
        take_home=round_amount(inputs.desired_take_home),
        profit_percent=profit_pct,
        owners_pay_percent=owners_pct,
        tax_percent=tax_pct,
        op_expenses_percent=opex_pct,
        display_profit_percent=d_profit,
        display_owners_pay_percent=d_owners,
        display_tax_percent=d_tax,
        display_op_expenses_percent=d_opex,
    )
