"""Calculator configuration: loads the JSON config, no Streamlit."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Mapping

from calculator.types import INPUT_FIELDS

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path(__file__).resolve().parent / "data"


@lru_cache(maxsize=16)
def load_config(name: str) -> dict:
    """Load a JSON config file by name (without .json extension)."""
    path = _CONFIG_DIR / f"{name}.json"
    logger.debug("Loading config from %s", path)
    with open(path, "r") as f:
        return json.load(f)


@dataclass(frozen=True)
class TaxBracket:
    """One step of the progressive schedule.

    Tax for income above `threshold` is `base + rate * (income - threshold)`,
    where `base` is the cumulative tax of every bracket below.
    """
    threshold: float
    rate: float
    base: float


@dataclass
class CalculatorConfig:
    """Consolidated calculator configuration from calculator.json."""
    raw: dict = field(default_factory=dict)

    # Derived constants
    brackets: tuple[TaxBracket, ...] = ()
    gst_threshold: float = 0.0
    gst_rate: float = 0.0
    max_passes: int = 5
    floors: dict = field(default_factory=dict)
    defaults: dict = field(default_factory=dict)
    sliders: dict = field(default_factory=dict)
    currency_code: str = "AUD"
    currency_symbol: str = "$"

    @classmethod
    def load(cls, name: str = "calculator") -> "CalculatorConfig":
        """Load the config file and derive constants."""
        cfg = cls(raw=load_config(name))
        cfg._derive_constants()
        return cfg

    @classmethod
    def default(cls) -> "CalculatorConfig":
        """Shared config instance used when callers pass no cfg."""
        return _default_config()

    def _derive_constants(self):
        raw = self.raw

        self.brackets = tuple(sorted(
            (TaxBracket(float(b["threshold"]), float(b["rate"]), float(b["base"]))
             for b in raw["tax"]["brackets"]),
            key=lambda b: b.threshold,
        ))
        self.gst_threshold = float(raw["gst"]["threshold"])     # 75,000
        self.gst_rate = float(raw["gst"]["rate"])               # 10%

        rec = raw.get("reconcile", {})
        self.max_passes = int(rec.get("max_passes", 5))
        self.floors = {k: float(v) for k, v in rec.get("floors", {}).items()}

        self.defaults = {k: float(raw["defaults"][k]) for k in INPUT_FIELDS}
        self.sliders = raw.get("sliders", {})

        cur = raw.get("currency", {})
        self.currency_code = cur.get("code", "AUD")
        self.currency_symbol = cur.get("symbol", "$")

    def floor_for(self, field_name: str) -> float | None:
        """Minimum allowed value for an input field, or None if unbounded."""
        return self.floors.get(field_name)


@lru_cache(maxsize=1)
def _default_config() -> CalculatorConfig:
    return CalculatorConfig.load()


@dataclass(frozen=True)
class CalculatorInputs:
    """The four user-editable inputs. Owned by the session, replaced on every change."""
    desired_take_home: float
    profit_percent: float
    owners_pay_percent: float
    contractor_pay: float

    @classmethod
    def defaults(cls, cfg: CalculatorConfig | None = None) -> "CalculatorInputs":
        """Configured defaults (take-home 150k, profit 5%, owner's pay 45%, contractors 15k)."""
        cfg = cfg or CalculatorConfig.default()
        return cls(**cfg.defaults)

    @classmethod
    def from_session_state(cls, state: Mapping,
                           cfg: CalculatorConfig | None = None) -> "CalculatorInputs":
        """Build inputs from a Streamlit session_state-like mapping."""
        cfg = cfg or CalculatorConfig.default()

        def _float(key: str) -> float:
            default = cfg.defaults[key]
            try:
                return float(state.get(key, default))
            except (TypeError, ValueError):
                return default

        return cls(**{k: _float(k) for k in INPUT_FIELDS})

    def to_dict(self) -> dict:
        return asdict(self)
