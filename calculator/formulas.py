"""Generic calculator formulas: stateless, no config loading."""

from __future__ import annotations

import math
from typing import Iterable

from calculator.config import TaxBracket


def round_amount(value: float) -> int:
    """Round to the nearest whole unit, halves up (2.5 -> 3, -2.5 -> -2).

    Not round(): that rounds halves to even (12,500.5 -> 12,500).
    """
    return int(math.floor(value + 0.5))


def calc_real_revenue(desired_take_home: float, owners_pay_percent: float) -> float:
    """Revenue whose owner's-pay share equals the take-home. 0 if share <= 0."""
    if owners_pay_percent > 0:
        return desired_take_home / (owners_pay_percent / 100.0)
    return 0.0


def calc_income_tax(taxable_income: float, brackets: Iterable[TaxBracket]) -> float:
    """Progressive tax: base of the highest bracket crossed plus marginal slice.

    A bracket applies once income is strictly above its threshold, so income
    sitting exactly on a threshold is taxed by the bracket below
    (45,000 -> 4,288).
    """
    for b in sorted(brackets, key=lambda b: b.threshold, reverse=True):
        if taxable_income > b.threshold:
            return b.base + (taxable_income - b.threshold) * b.rate
    return 0.0


def calc_percent_of(amount: float, base: float) -> float:
    """amount as a percentage of base. Returns 0 if base <= 0."""
    if base <= 0:
        return 0.0
    return amount / base * 100.0


def calc_gst(pre_gst_amount: float, threshold: float, rate: float) -> tuple[bool, float]:
    """GST registration and amount.

    Returns:
        (is_registered, gst_amount)
    """
    registered = pre_gst_amount >= threshold
    return registered, (pre_gst_amount * rate if registered else 0.0)


def display_percentages(profit_percent: float, owners_pay_percent: float,
                        tax_percent: float) -> tuple[int, int, int, int]:
    """Whole-number percentages for display that sum to exactly 100.

    Profit, owner's pay and tax round up; operating expenses absorb the
    rounding as the remainder.
    """
    profit = math.ceil(profit_percent)
    owners_pay = math.ceil(owners_pay_percent)
    tax = math.ceil(tax_percent)
    return profit, owners_pay, tax, 100 - profit - owners_pay - tax
