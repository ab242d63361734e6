"""Scenario runner + sensitivity sweep.

Single scenario: reconcile one edit -> compute -> result.
Sensitivity sweep: step one input across a range, reconciling each step
the same way the UI would, and collect one row per step.

compute() is a single cheap pass, so sweeps of hundreds of steps are fine
for interactive charts.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from calculator.allocation import compute
from calculator.config import CalculatorConfig, CalculatorInputs
from calculator.reconcile import converge
from calculator.types import CalculatedResults


@dataclass
class SweepVariable:
    """An input to sweep.

    attr: CalculatorInputs field name (e.g. "desired_take_home")
    base: Base case value (e.g. 150000)
    low / high: Sweep range, inclusive
    steps: Number of steps (e.g. 5 -> low, 25%, 50%, 75%, high)
    label: Human-readable label for charts
    """
    attr: str
    base: float
    low: float
    high: float
    steps: int = 9
    label: str = ""

    @property
    def values(self) -> list[float]:
        """Sweep values from low to high."""
        if self.steps <= 1:
            return [self.base]
        step_size = (self.high - self.low) / (self.steps - 1)
        return [self.low + i * step_size for i in range(self.steps)]


@dataclass
class SweepResult:
    """Result of a sensitivity sweep. rows[i] = {attr, is_base, passes, converged, results...}."""
    variable: SweepVariable
    rows: list[dict] = field(default_factory=list)

    @property
    def dataframe(self):
        """Convert to pandas DataFrame. Lazy import."""
        import pandas as pd
        return pd.DataFrame(self.rows)


def run_scenario(base_inputs: CalculatorInputs, attr: str, value: float,
                 cfg: CalculatorConfig | None = None) -> tuple[CalculatorInputs, CalculatedResults]:
    """Reconcile one edit and compute the result."""
    inputs = converge(base_inputs, attr, value, cfg).inputs
    return inputs, compute(inputs, cfg)


def run_sweep(variable: SweepVariable,
              base_inputs: CalculatorInputs | None = None,
              cfg: CalculatorConfig | None = None) -> SweepResult:
    """Run a single-variable sensitivity sweep.

    Every step starts from base_inputs (not from the previous step), so a
    correction at one step never leaks into the next.
    """
    cfg = cfg or CalculatorConfig.default()
    if base_inputs is None:
        base_inputs = CalculatorInputs.defaults(cfg)

    result = SweepResult(variable=variable)

    for val in variable.values:
        outcome = converge(base_inputs, variable.attr, val, cfg)
        res = compute(outcome.inputs, cfg)

        row = {
            variable.attr: val,
            "is_base": abs(val - variable.base) < 1e-10,
            "passes": outcome.passes,
            "converged": outcome.converged,
        }
        row.update({f"result_{k}": v for k, v in res.to_dict().items()})
        result.rows.append(row)

    return result


def run_multi_sweep(variables: list[SweepVariable],
                    base_inputs: CalculatorInputs | None = None,
                    cfg: CalculatorConfig | None = None) -> list[SweepResult]:
    """One sweep per variable (one at a time, not a grid)."""
    return [run_sweep(v, base_inputs, cfg) for v in variables]


# ── Common Sweep Presets ────────────────────────────────────────

SWEEP_PRESETS: list[SweepVariable] = [
    SweepVariable(
        attr="desired_take_home",
        base=150_000, low=0, high=500_000, steps=11,
        label="Take-home pay ($)",
    ),
    SweepVariable(
        attr="owners_pay_percent",
        base=45, low=5, high=95, steps=10,
        label="Owner's pay %",
    ),
    SweepVariable(
        attr="profit_percent",
        base=5, low=0, high=50, steps=11,
        label="Profit %",
    ),
]
