#!/usr/bin/env python3
"""
Profit First Calculator - Streamlit GUI
---------------------------------------
Sole-trader revenue planner: desired take-home -> gross revenue target.

All numbers come from the calculator package; this file only keeps the
session state and draws it.

Run with: streamlit run app.py
"""

import logging

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from calculator import CalculatorConfig, CalculatorInputs, INPUT_FIELDS, compute, reconcile
from calculator.breakdown import breakdown_frame
from calculator.currency import format_aud
from calculator.scenarios import SWEEP_PRESETS, run_sweep

logger = logging.getLogger(__name__)

WIDGET_PREFIX = "w_"
VIEW_KEY = "revenue_view"

BREAKDOWN_COLORS = {
    "obligation": "#CC0000",   # money owed
    "earning": "#00D373",      # money kept
    "figure": "#183D33",       # key totals
    "opex": "#FF8133",         # operating expenses
}

SLIDER_LABELS = {
    "desired_take_home": ("Target take-home pay (annual)", "After tax and expenses"),
    "contractor_pay": ("Contractor pay (annual)", "Added before GST calculation"),
    "profit_percent": ("Profit %", None),
    "owners_pay_percent": ("Owner's pay %", None),
}

HOW_IT_WORKS = """
This calculator starts with your desired annual take-home pay and works
backward to determine the gross revenue you need to generate.

**Real revenue** is the core of the calculation. It's the money left after
paying any contractors and mandatory GST. This is the amount that you can
actually allocate.

You set the percentage of real revenue for **Profit** and **Owner's pay**.
The calculator works out **Tax** from the tax brackets and allocates the
remainder to **Operating expenses**. If an allocation would push operating
expenses below zero, the value you just changed is pulled back so the total
stays at 100%.

**GST** is added once gross revenue before GST reaches the $75,000 threshold.
"""


@st.cache_data(ttl=300)
def load_calculator_config() -> CalculatorConfig:
    """Load calculator.json (cached 5 min)."""
    return CalculatorConfig.load()


# ── Session state ──────────────────────────────────────────────────
# These helpers take any mutable mapping so they run without a server.

def _sync_widgets(state, inputs: CalculatorInputs) -> None:
    for f in INPUT_FIELDS:
        state[WIDGET_PREFIX + f] = float(getattr(inputs, f))


def init_session(state, cfg: CalculatorConfig | None = None) -> CalculatorInputs:
    """Seed defaults on first run. Returns the current inputs."""
    if "inputs" not in state:
        inputs = CalculatorInputs.defaults(cfg)
        state["inputs"] = inputs
        _sync_widgets(state, inputs)
    if VIEW_KEY not in state:
        state[VIEW_KEY] = "monthly"
    return state["inputs"]


def apply_change(state, field: str, value: float | None = None,
                 cfg: CalculatorConfig | None = None) -> CalculatorInputs:
    """Reconcile one edit into the session. Widget values follow the correction."""
    if value is None:
        value = state[WIDGET_PREFIX + field]
    new_inputs = reconcile(state["inputs"], field, value, cfg)
    if getattr(new_inputs, field) != value:
        logger.debug("%s corrected from %s to %s", field, value, getattr(new_inputs, field))
    state["inputs"] = new_inputs
    _sync_widgets(state, new_inputs)
    return new_inputs


def reset_session(state, cfg: CalculatorConfig | None = None) -> CalculatorInputs:
    """Back to the configured defaults and the monthly view."""
    inputs = CalculatorInputs.defaults(cfg)
    state["inputs"] = inputs
    _sync_widgets(state, inputs)
    state[VIEW_KEY] = "monthly"
    return inputs


# ── Rendering ──────────────────────────────────────────────────────

def _slider(field: str, cfg: CalculatorConfig) -> None:
    label, note = SLIDER_LABELS[field]
    rng = cfg.sliders[field]
    is_money = field in ("desired_take_home", "contractor_pay")
    st.slider(
        label,
        min_value=float(rng["min"]),
        max_value=float(rng["max"]),
        step=float(rng["step"]),
        format="$%d" if is_money else "%.0f",
        key=WIDGET_PREFIX + field,
        help=note,
        on_change=apply_change,
        args=(st.session_state, field),
        kwargs={"cfg": cfg},
    )


def _allocation_chart(results) -> go.Figure:
    labels = ["Profit", "Owner's pay", "Tax", "Operating expenses"]
    values = [
        results.display_profit_percent,
        results.display_owners_pay_percent,
        results.display_tax_percent,
        max(results.display_op_expenses_percent, 0),
    ]
    colors = [BREAKDOWN_COLORS["earning"], "#7FE9B9",
              BREAKDOWN_COLORS["obligation"], BREAKDOWN_COLORS["opex"]]
    fig = go.Figure(go.Pie(labels=labels, values=values, hole=0.55,
                           marker=dict(colors=colors), sort=False,
                           textinfo="label+percent"))
    fig.update_layout(showlegend=False, margin=dict(t=10, b=10, l=10, r=10), height=300)
    return fig


def _breakdown_table(results, view: str) -> pd.DataFrame:
    df = breakdown_frame(results, view)
    return pd.DataFrame({
        "Amount": df["amount"].map(format_aud),
        "%": df["percent"].map(lambda p: "" if pd.isna(p) else f"{int(p)}%"),
    }, index=df.index)


def _sensitivity(inputs: CalculatorInputs, cfg: CalculatorConfig) -> None:
    presets = {v.label: v for v in SWEEP_PRESETS}
    label = st.selectbox("Vary", list(presets), key="sweep_variable")
    variable = presets[label]
    df = run_sweep(variable, inputs, cfg).dataframe
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=df[variable.attr], y=df["result_annual_gross_revenue"],
                             mode="lines+markers", name="Annual gross revenue",
                             line=dict(color=BREAKDOWN_COLORS["figure"])))
    fig.add_trace(go.Scatter(x=df[variable.attr], y=df["result_tax_amount"],
                             mode="lines", name="Tax",
                             line=dict(color=BREAKDOWN_COLORS["obligation"])))
    fig.update_layout(xaxis_title=label, yaxis_title="AUD", height=320,
                      margin=dict(t=10, b=10, l=10, r=10))
    st.plotly_chart(fig, use_container_width=True)
    if not df["converged"].all():
        st.caption("Some steps could not keep operating expenses at or above zero.")


def main():
    st.set_page_config(page_title="Profit First Calculator", layout="wide")
    cfg = load_calculator_config()
    inputs = init_session(st.session_state, cfg)
    results = compute(inputs, cfg)

    st.title("Profit first calculator for sole traders")
    st.caption("Plan your revenue to meet your financial goals.")

    left, right = st.columns(2)

    with left:
        st.subheader("Your income goal")
        _slider("desired_take_home", cfg)

        st.subheader("Additional costs")
        _slider("contractor_pay", cfg)

        st.subheader("Target Allocation Percentages (TAPs)")
        st.caption("How do you want to allocate your 'real revenue'?")
        _slider("profit_percent", cfg)
        _slider("owners_pay_percent", cfg)

        c1, c2 = st.columns(2)
        c1.metric("Tax %", f"{results.display_tax_percent}%",
                  help="Calculated based on tax brackets")
        c2.metric("Operating expenses %", f"{results.display_op_expenses_percent}%",
                  help="Calculated as remainder")
        st.success(f"Total allocations: {results.display_total}%")

    with right:
        view = st.radio("View", ["monthly", "annual"], key=VIEW_KEY,
                        horizontal=True, format_func=str.capitalize)
        if view == "monthly":
            headline, other = results.monthly_gross_revenue, results.annual_gross_revenue
            other_label = "Annual"
        else:
            headline, other = results.annual_gross_revenue, results.monthly_gross_revenue
            other_label = "Monthly"

        st.metric(f"{view.capitalize()} gross revenue target", format_aud(headline, cfg.currency_symbol))
        st.caption(f"{other_label}: {format_aud(other, cfg.currency_symbol)}")
        if results.is_gst_registered:
            st.success("GST registered")
        else:
            st.warning("No GST registration required")

        st.subheader(f"{view.capitalize()} breakdown")
        st.dataframe(_breakdown_table(results, view), use_container_width=True)
        st.plotly_chart(_allocation_chart(results), use_container_width=True)

        st.button("Reset to defaults", on_click=reset_session,
                  args=(st.session_state,), kwargs={"cfg": cfg},
                  use_container_width=True)

    with st.expander("Sensitivity"):
        _sensitivity(inputs, cfg)

    with st.expander("How it works"):
        st.markdown(HOW_IT_WORKS)


if __name__ == "__main__":
    main()
