"""Calculation core: pure Python, zero Streamlit."""

from calculator.allocation import compute
from calculator.config import CalculatorConfig, CalculatorInputs
from calculator.reconcile import converge, reconcile
from calculator.types import CalculatedResults, INPUT_FIELDS

__all__ = [
    "CalculatedResults",
    "CalculatorConfig",
    "CalculatorInputs",
    "INPUT_FIELDS",
    "compute",
    "converge",
    "reconcile",
]
