"""Input reconciler: keeps allocations at 100% when one input changes.

Operating expenses has no input of its own; it is whatever profit, owner's
pay and tax leave over. Raising profit or owner's pay also raises tax (tax
is charged on their sum), so the remainder can go negative. The edited
field is pulled back by the overflow and the engine re-run:

    x[n+1] = x[n] - max(0, -opex%(x[n]))

Tax is piecewise-linear, so each pass either lands or crosses a bracket
boundary; the pass cap bounds the loop. Only the edited field moves:
profit and owner's pay never adjust each other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from calculator.allocation import compute
from calculator.config import CalculatorConfig, CalculatorInputs
from calculator.types import INPUT_FIELDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconcileOutcome:
    """Trace of one reconciliation."""
    inputs: CalculatorInputs
    passes: int                         # engine evaluations inside the loop
    converged: bool
    overflow_history: tuple[float, ...] = ()


def converge(previous: CalculatorInputs, changed_field: str, proposed_value: float,
             cfg: CalculatorConfig | None = None) -> ReconcileOutcome:
    """Apply one edit and correct the edited field until opex% >= 0.

    Exhausting the pass cap is not an error: the last candidate is kept
    (floors still apply) and a warning is logged.
    """
    if changed_field not in INPUT_FIELDS:
        raise ValueError(f"Unknown input field: {changed_field!r}. "
                         f"Expected one of {', '.join(INPUT_FIELDS)}")
    cfg = cfg or CalculatorConfig.default()

    candidate = replace(previous, **{changed_field: float(proposed_value)})
    history: list[float] = []
    converged = False
    passes = 0

    while passes < cfg.max_passes:
        passes += 1
        opex_pct = compute(candidate, cfg).op_expenses_percent
        if opex_pct >= 0:
            converged = True
            break
        overflow = -opex_pct
        history.append(overflow)
        corrected = getattr(candidate, changed_field) - overflow
        logger.debug("Pass %d: %s overflow %.6f%%, %s -> %.6f",
                     passes, changed_field, overflow, changed_field, corrected)
        candidate = replace(candidate, **{changed_field: corrected})

    floor = cfg.floor_for(changed_field)
    if floor is not None and getattr(candidate, changed_field) < floor:
        logger.debug("Flooring %s at %s", changed_field, floor)
        candidate = replace(candidate, **{changed_field: floor})
        converged = False

    if not converged:
        # last correction (or the floor) has not been evaluated yet
        converged = compute(candidate, cfg).op_expenses_percent >= 0
        if not converged:
            logger.warning("Reconcile of %s left opex%% negative after %d passes; "
                           "keeping best candidate %s=%.6f",
                           changed_field, passes, changed_field,
                           getattr(candidate, changed_field))

    return ReconcileOutcome(
        inputs=candidate,
        passes=passes,
        converged=converged,
        overflow_history=tuple(history),
    )


def reconcile(previous: CalculatorInputs, changed_field: str, proposed_value: float,
              cfg: CalculatorConfig | None = None) -> CalculatorInputs:
    """Return a full, consistent input set after editing one field."""
    return converge(previous, changed_field, proposed_value, cfg).inputs
