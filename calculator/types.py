"""Data shapes for the calculator."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Literal, TypedDict


# ── Inputs ──────────────────────────────────────────────────────

InputField = Literal[
    "desired_take_home",
    "profit_percent",
    "owners_pay_percent",
    "contractor_pay",
]

INPUT_FIELDS: tuple[str, ...] = (
    "desired_take_home",
    "profit_percent",
    "owners_pay_percent",
    "contractor_pay",
)

PERCENT_FIELDS: tuple[str, ...] = ("profit_percent", "owners_pay_percent")


# ── Results ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class CalculatedResults:
    """Complete output of compute(). Rebuilt from scratch on every input change.

    Monetary amounts are whole units. Percentages are continuous except the
    display_* variants, which are integers summing to exactly 100.
    """
    # Revenue
    real_revenue: int
    pre_gst_amount: int
    annual_gross_revenue: int
    monthly_gross_revenue: int
    # GST
    is_gst_registered: bool
    gst_amount: int
    # Allocation amounts
    profit_amount: int
    owners_pay_amount: int
    op_expenses_amount: int
    tax_amount: int
    taxable_income: int
    contractor_pay: int
    take_home: int
    # Allocation percentages (continuous)
    profit_percent: float
    owners_pay_percent: float
    tax_percent: float
    op_expenses_percent: float
    # Display percentages (sum to 100)
    display_profit_percent: int
    display_owners_pay_percent: int
    display_tax_percent: int
    display_op_expenses_percent: int

    @property
    def allocation_total(self) -> float:
        """Continuous allocation sum. 100 up to float error."""
        return (self.profit_percent + self.owners_pay_percent
                + self.tax_percent + self.op_expenses_percent)

    @property
    def display_total(self) -> int:
        return (self.display_profit_percent + self.display_owners_pay_percent
                + self.display_tax_percent + self.display_op_expenses_percent)

    def to_dict(self) -> dict:
        return asdict(self)


# ── Breakdown ───────────────────────────────────────────────────

RowKind = Literal["figure", "obligation", "earning", "opex"]


class BreakdownRow(TypedDict):
    label: str
    amount: object      # calculator.currency.AUD
    percent: int | None  # display percent, only on allocation rows
    kind: RowKind
    emphasized: bool
