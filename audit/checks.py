"""Pure audit check functions for the revenue calculator.

Each function returns a list of check result tuples:
    (section: str, name: str, expected: float, actual: float, delta: float, passed: bool)

All checks read from calculator output (CalculatedResults), never from app.py.
"""

from __future__ import annotations

from calculator.allocation import compute
from calculator.config import CalculatorConfig, CalculatorInputs
from calculator.formulas import calc_income_tax
from calculator.types import CalculatedResults

TOLERANCE = 1.0        # AUD, whole-unit rounding
PCT_TOLERANCE = 1e-6   # percentage points

BEST_EFFORT = "(best effort)"


# ── Helper ────────────────────────────────────────────────────────

def _check(results: list, section: str, name: str,
           expected: float, actual: float, tolerance: float = TOLERANCE) -> None:
    """Append a single check result to the results list."""
    delta = abs(expected - actual)
    ok = delta <= tolerance
    results.append((section, name, expected, actual, delta, ok))


# ── Classification ────────────────────────────────────────────────

def classify_check(section: str, name: str) -> str:
    """Return 'arithmetic' or 'model_design' for a check.

    Model design gaps are known limitations, not bugs:
    - Opex% < 0 after a reconcile that hit the pass cap or a floor
    """
    if BEST_EFFORT in name:
        return "model_design"
    return "arithmetic"


# ── Allocation ────────────────────────────────────────────────────

def check_allocation(section: str, inputs: CalculatorInputs, res: CalculatedResults,
                     converged: bool = True) -> list[tuple]:
    """Allocation identities: sums to 100, opex non-negative, amounts match %."""
    results: list[tuple] = []

    _check(results, section, "Alloc: Profit + Owner + Tax + Opex = 100%",
           100.0, res.allocation_total, PCT_TOLERANCE)
    _check(results, section, "Display: Profit + Owner + Tax + Opex = 100%",
           100.0, float(res.display_total), 0.0)

    opex_name = "Alloc: Opex% >= 0" if converged else f"Alloc: Opex% >= 0 {BEST_EFFORT}"
    _check(results, section, opex_name, 0.0, min(res.op_expenses_percent, 0.0), 0.0)

    real = res.real_revenue
    _check(results, section, "Alloc: Profit$ = Real x Profit%",
           real * inputs.profit_percent / 100.0, res.profit_amount, 2 * TOLERANCE)
    _check(results, section, "Alloc: Owner$ = Real x Owner%",
           real * inputs.owners_pay_percent / 100.0, res.owners_pay_amount,
           2 * TOLERANCE)
    _check(results, section, "Alloc: Owner$ = Take-home",
           res.take_home, res.owners_pay_amount)
    _check(results, section, "Tax: Taxable = Profit$ + Owner$",
           res.profit_amount + res.owners_pay_amount, res.taxable_income, 2 * TOLERANCE)
    return results


def check_gst(section: str, res: CalculatedResults,
              cfg: CalculatorConfig) -> list[tuple]:
    """GST and gross revenue identities."""
    results: list[tuple] = []

    _check(results, section, "GST: PreGST = Real + Contractors",
           res.real_revenue + res.contractor_pay, res.pre_gst_amount, 2 * TOLERANCE)
    _check(results, section, "GST: Gross = PreGST + GST",
           res.pre_gst_amount + res.gst_amount, res.annual_gross_revenue, 2 * TOLERANCE)
    if res.is_gst_registered:
        _check(results, section, "GST: GST = rate x PreGST",
               res.pre_gst_amount * cfg.gst_rate, res.gst_amount)
        _check(results, section, "GST: registered => PreGST >= threshold",
               0.0, min(res.pre_gst_amount - cfg.gst_threshold, 0.0))
    else:
        _check(results, section, "GST: unregistered => GST = 0", 0.0, res.gst_amount, 0.0)
        _check(results, section, "GST: unregistered => PreGST < threshold",
               0.0, max(res.pre_gst_amount - cfg.gst_threshold, 0.0))
    _check(results, section, "Revenue: Monthly = Annual / 12",
           res.annual_gross_revenue / 12.0, res.monthly_gross_revenue)
    return results


# ── Tax schedule ──────────────────────────────────────────────────

def check_tax_schedule(cfg: CalculatorConfig) -> list[tuple]:
    """Bracket bases are cumulative and tax is continuous at each threshold."""
    results: list[tuple] = []
    sec = "TAX SCHEDULE"
    brackets = cfg.brackets

    for prev, cur in zip(brackets, brackets[1:]):
        thr = cur.threshold
        expected_base = prev.base + prev.rate * (thr - prev.threshold)
        _check(results, sec, f"Base({thr:,.0f}) = prior base + slice",
               expected_base, cur.base, PCT_TOLERANCE)
        _check(results, sec, f"T({thr:,.0f}) = base",
               cur.base, calc_income_tax(thr, brackets), PCT_TOLERANCE)
        _check(results, sec, f"T({thr:,.0f}+1) = base + rate",
               cur.base + cur.rate, calc_income_tax(thr + 1, brackets), PCT_TOLERANCE)
    return results


# ── Engine properties ─────────────────────────────────────────────

def check_determinism(section: str, inputs: CalculatorInputs,
                      cfg: CalculatorConfig) -> list[tuple]:
    """Two runs on the same inputs give identical results."""
    results: list[tuple] = []
    same = compute(inputs, cfg) == compute(inputs, cfg)
    _check(results, section, "Engine: deterministic", 1.0, 1.0 if same else 0.0, 0.0)
    return results


def check_monotonic_gross(section: str, grosses: list[tuple[float, int]]) -> list[tuple]:
    """Gross revenue strictly rises with take-home.

    grosses: [(take_home, annual_gross_revenue), ...] sorted by take-home.
    """
    results: list[tuple] = []
    for (th_a, g_a), (th_b, g_b) in zip(grosses, grosses[1:]):
        results.append((section, f"Revenue: Gross({th_b:,.0f}) > Gross({th_a:,.0f})",
                        float(g_a), float(g_b), float(g_b - g_a), g_b > g_a))
    return results
