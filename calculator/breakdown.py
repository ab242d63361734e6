"""Breakdown rows for the monthly/annual view.

Row order follows the money flow: gross -> GST -> contractors -> real
revenue -> allocations. GST and contractor rows only appear when non-zero.
"""

from __future__ import annotations

from calculator.currency import AUD
from calculator.types import BreakdownRow, CalculatedResults

VIEWS = {"monthly": 12, "annual": 1}


def _row(label: str, amount: AUD, kind: str, percent: int | None = None,
         emphasized: bool = False) -> BreakdownRow:
    return BreakdownRow(label=label, amount=amount, percent=percent,
                        kind=kind, emphasized=emphasized)


def breakdown_rows(results: CalculatedResults, view: str = "monthly") -> list[BreakdownRow]:
    """Ordered breakdown rows, amounts divided down to the chosen view."""
    if view not in VIEWS:
        raise ValueError(f"Unknown view: {view!r}. Expected 'monthly' or 'annual'")
    divisor = VIEWS[view]

    def amt(value: float) -> AUD:
        return AUD(value) / divisor

    rows = [_row("Gross revenue", amt(results.annual_gross_revenue), "figure", emphasized=True)]
    if results.is_gst_registered:
        rows.append(_row("GST", amt(results.gst_amount), "obligation"))
    if results.contractor_pay > 0:
        rows.append(_row("Contractor pay", amt(results.contractor_pay), "obligation"))
    rows.extend([
        _row("Real revenue", amt(results.real_revenue), "figure", emphasized=True),
        _row("Profit", amt(results.profit_amount), "earning",
             percent=results.display_profit_percent),
        _row("Owner's pay", amt(results.owners_pay_amount), "earning",
             percent=results.display_owners_pay_percent),
        _row("Taxable income", amt(results.taxable_income), "figure"),
        _row("Tax", amt(results.tax_amount), "obligation",
             percent=results.display_tax_percent),
        _row("Operating expenses", amt(results.op_expenses_amount), "opex",
             percent=results.display_op_expenses_percent),
    ])
    return rows


def breakdown_frame(results: CalculatedResults, view: str = "monthly"):
    """Breakdown as a pandas DataFrame indexed by label. Lazy import."""
    import pandas as pd

    rows = breakdown_rows(results, view)
    return pd.DataFrame([
        {
            "label": r["label"],
            "amount": r["amount"].whole(),
            "percent": r["percent"],
            "kind": r["kind"],
            "emphasized": r["emphasized"],
        }
        for r in rows
    ]).set_index("label")
